"""
Static lookup resources for the Four Pillars engine.

Handles:
- Heavenly stem and earthly branch definitions
- Five-element generation / overcoming cycles
- Ten-god matrix (day master x target stem)
- Hidden-stem composition per branch, with power weights
- Twelve life-stage matrix (stem x branch)
- Melodic element (纳音) per sexagenary pair
- Branch clash / combination tables
- Auxiliary star membership tables

Everything here is read-only data built at import time. Nothing in this
module computes anything beyond index lookups.
"""

from dataclasses import dataclass
from enum import Enum

from fourpillars.errors import InvalidDomainValue


# ============================================================
# FUNDAMENTAL DATA STRUCTURES
# ============================================================

class Polarity(Enum):
    YANG = "yang"
    YIN = "yin"


class Element(Enum):
    WOOD = "wood"
    FIRE = "fire"
    EARTH = "earth"
    METAL = "metal"
    WATER = "water"

    @property
    def chinese(self) -> str:
        return ELEMENT_CHINESE[self]


ELEMENT_CHINESE = {
    Element.WOOD: "木",
    Element.FIRE: "火",
    Element.EARTH: "土",
    Element.METAL: "金",
    Element.WATER: "水",
}


class QiKind(Enum):
    PRIMARY = "主气"
    SECONDARY = "中气"
    RESIDUAL = "余气"


@dataclass(frozen=True)
class HeavenlyStem:
    chinese: str
    pinyin: str
    element: Element
    polarity: Polarity
    index: int  # 0-9 in the cycle

    def __str__(self):
        return f"{self.chinese} {self.pinyin} ({self.polarity.value} {self.element.value})"


@dataclass(frozen=True)
class EarthlyBranch:
    chinese: str
    pinyin: str
    animal: str
    element: Element  # primary/season element
    polarity: Polarity
    index: int  # 0-11 in the cycle

    def __str__(self):
        return f"{self.chinese} {self.pinyin} ({self.animal})"


# ============================================================
# STEM AND BRANCH DEFINITIONS
# ============================================================

HEAVENLY_STEMS = [
    HeavenlyStem("甲", "Jia", Element.WOOD, Polarity.YANG, 0),
    HeavenlyStem("乙", "Yi", Element.WOOD, Polarity.YIN, 1),
    HeavenlyStem("丙", "Bing", Element.FIRE, Polarity.YANG, 2),
    HeavenlyStem("丁", "Ding", Element.FIRE, Polarity.YIN, 3),
    HeavenlyStem("戊", "Wu", Element.EARTH, Polarity.YANG, 4),
    HeavenlyStem("己", "Ji", Element.EARTH, Polarity.YIN, 5),
    HeavenlyStem("庚", "Geng", Element.METAL, Polarity.YANG, 6),
    HeavenlyStem("辛", "Xin", Element.METAL, Polarity.YIN, 7),
    HeavenlyStem("壬", "Ren", Element.WATER, Polarity.YANG, 8),
    HeavenlyStem("癸", "Gui", Element.WATER, Polarity.YIN, 9),
]

EARTHLY_BRANCHES = [
    EarthlyBranch("子", "Zi", "Rat", Element.WATER, Polarity.YANG, 0),
    EarthlyBranch("丑", "Chou", "Ox", Element.EARTH, Polarity.YIN, 1),
    EarthlyBranch("寅", "Yin", "Tiger", Element.WOOD, Polarity.YANG, 2),
    EarthlyBranch("卯", "Mao", "Rabbit", Element.WOOD, Polarity.YIN, 3),
    EarthlyBranch("辰", "Chen", "Dragon", Element.EARTH, Polarity.YANG, 4),
    EarthlyBranch("巳", "Si", "Snake", Element.FIRE, Polarity.YIN, 5),
    EarthlyBranch("午", "Wu", "Horse", Element.FIRE, Polarity.YANG, 6),
    EarthlyBranch("未", "Wei", "Goat", Element.EARTH, Polarity.YIN, 7),
    EarthlyBranch("申", "Shen", "Monkey", Element.METAL, Polarity.YANG, 8),
    EarthlyBranch("酉", "You", "Rooster", Element.METAL, Polarity.YIN, 9),
    EarthlyBranch("戌", "Xu", "Dog", Element.EARTH, Polarity.YANG, 10),
    EarthlyBranch("亥", "Hai", "Pig", Element.WATER, Polarity.YIN, 11),
]

# Lookup helpers
STEM_BY_SYMBOL = {s.chinese: s for s in HEAVENLY_STEMS}
BRANCH_BY_SYMBOL = {b.chinese: b for b in EARTHLY_BRANCHES}


def stem_of(symbol: str) -> HeavenlyStem:
    """Resolve a stem symbol, failing fast on anything outside the ten stems."""
    try:
        return STEM_BY_SYMBOL[symbol]
    except (KeyError, TypeError):
        raise InvalidDomainValue("stem", symbol) from None


def branch_of(symbol: str) -> EarthlyBranch:
    """Resolve a branch symbol, failing fast on anything outside the twelve branches."""
    try:
        return BRANCH_BY_SYMBOL[symbol]
    except (KeyError, TypeError):
        raise InvalidDomainValue("branch", symbol) from None


def stem_at(index: int) -> HeavenlyStem:
    if not isinstance(index, int) or not 0 <= index < 10:
        raise InvalidDomainValue("stem index", index, "expected 0-9")
    return HEAVENLY_STEMS[index]


def branch_at(index: int) -> EarthlyBranch:
    if not isinstance(index, int) or not 0 <= index < 12:
        raise InvalidDomainValue("branch index", index, "expected 0-11")
    return EARTHLY_BRANCHES[index]


# ============================================================
# FIVE-ELEMENT CYCLES
# ============================================================

# Production cycle: Wood → Fire → Earth → Metal → Water → Wood
PRODUCTION_CYCLE = {
    Element.WOOD: Element.FIRE,
    Element.FIRE: Element.EARTH,
    Element.EARTH: Element.METAL,
    Element.METAL: Element.WATER,
    Element.WATER: Element.WOOD,
}

# Control cycle: Wood → Earth → Water → Fire → Metal → Wood
CONTROL_CYCLE = {
    Element.WOOD: Element.EARTH,
    Element.EARTH: Element.WATER,
    Element.WATER: Element.FIRE,
    Element.FIRE: Element.METAL,
    Element.METAL: Element.WOOD,
}

PRODUCED_BY = {v: k for k, v in PRODUCTION_CYCLE.items()}
CONTROLLED_BY = {v: k for k, v in CONTROL_CYCLE.items()}


# ============================================================
# TEN GODS (十神)
# ============================================================

TEN_GOD_NAMES = [
    "比肩", "劫财", "食神", "伤官", "偏财",
    "正财", "七杀", "正官", "偏印", "正印",
]

# Row: day master index, column: target stem index.
TEN_GODS_MAP = [
    ["比肩", "劫财", "食神", "伤官", "偏财", "正财", "七杀", "正官", "偏印", "正印"],  # 甲
    ["劫财", "比肩", "伤官", "食神", "正财", "偏财", "正官", "七杀", "正印", "偏印"],  # 乙
    ["偏印", "正印", "比肩", "劫财", "食神", "伤官", "偏财", "正财", "七杀", "正官"],  # 丙
    ["正印", "偏印", "劫财", "比肩", "伤官", "食神", "正财", "偏财", "正官", "七杀"],  # 丁
    ["七杀", "正官", "偏印", "正印", "比肩", "劫财", "食神", "伤官", "偏财", "正财"],  # 戊
    ["正官", "七杀", "正印", "偏印", "劫财", "比肩", "伤官", "食神", "正财", "偏财"],  # 己
    ["偏财", "正财", "七杀", "正官", "偏印", "正印", "比肩", "劫财", "食神", "伤官"],  # 庚
    ["正财", "偏财", "正官", "七杀", "正印", "偏印", "劫财", "比肩", "伤官", "食神"],  # 辛
    ["食神", "伤官", "偏财", "正财", "七杀", "正官", "偏印", "正印", "比肩", "劫财"],  # 壬
    ["伤官", "食神", "正财", "偏财", "正官", "七杀", "正印", "偏印", "劫财", "比肩"],  # 癸
]


# ============================================================
# HIDDEN STEMS (藏干)
# ============================================================

# (stem, kind, power) - powers per branch sum to 100
HIDDEN_STEMS_DATA = {
    "子": [("癸", QiKind.PRIMARY, 100)],
    "丑": [("己", QiKind.PRIMARY, 60), ("癸", QiKind.SECONDARY, 30), ("辛", QiKind.RESIDUAL, 10)],
    "寅": [("甲", QiKind.PRIMARY, 60), ("丙", QiKind.SECONDARY, 30), ("戊", QiKind.RESIDUAL, 10)],
    "卯": [("乙", QiKind.PRIMARY, 100)],
    "辰": [("戊", QiKind.PRIMARY, 60), ("乙", QiKind.SECONDARY, 30), ("癸", QiKind.RESIDUAL, 10)],
    "巳": [("丙", QiKind.PRIMARY, 60), ("戊", QiKind.SECONDARY, 30), ("庚", QiKind.RESIDUAL, 10)],
    "午": [("丁", QiKind.PRIMARY, 70), ("己", QiKind.SECONDARY, 30)],
    "未": [("己", QiKind.PRIMARY, 60), ("丁", QiKind.SECONDARY, 30), ("乙", QiKind.RESIDUAL, 10)],
    "申": [("庚", QiKind.PRIMARY, 60), ("壬", QiKind.SECONDARY, 30), ("戊", QiKind.RESIDUAL, 10)],
    "酉": [("辛", QiKind.PRIMARY, 100)],
    "戌": [("戊", QiKind.PRIMARY, 60), ("辛", QiKind.SECONDARY, 30), ("丁", QiKind.RESIDUAL, 10)],
    "亥": [("壬", QiKind.PRIMARY, 70), ("甲", QiKind.SECONDARY, 30)],
}


# ============================================================
# TWELVE LIFE STAGES (十二长生)
# ============================================================

LIFE_STAGE_NAMES = [
    "长生", "沐浴", "冠带", "临官", "帝旺", "衰",
    "病", "死", "墓", "绝", "胎", "养",
]

# Row: stem index, column: branch index (子 ... 亥).
# Yang stems run forward from their birth branch, yin stems run backward.
LIFE_STAGES_TABLE = [
    ["沐浴", "冠带", "临官", "帝旺", "衰", "病", "死", "墓", "绝", "胎", "养", "长生"],  # 甲
    ["病", "衰", "帝旺", "临官", "冠带", "沐浴", "长生", "养", "胎", "绝", "墓", "死"],  # 乙
    ["胎", "养", "长生", "沐浴", "冠带", "临官", "帝旺", "衰", "病", "死", "墓", "绝"],  # 丙
    ["绝", "墓", "死", "病", "衰", "帝旺", "临官", "冠带", "沐浴", "长生", "养", "胎"],  # 丁
    ["胎", "养", "长生", "沐浴", "冠带", "临官", "帝旺", "衰", "病", "死", "墓", "绝"],  # 戊
    ["绝", "墓", "死", "病", "衰", "帝旺", "临官", "冠带", "沐浴", "长生", "养", "胎"],  # 己
    ["死", "墓", "绝", "胎", "养", "长生", "沐浴", "冠带", "临官", "帝旺", "衰", "病"],  # 庚
    ["长生", "养", "胎", "绝", "墓", "死", "病", "衰", "帝旺", "临官", "冠带", "沐浴"],  # 辛
    ["帝旺", "衰", "病", "死", "墓", "绝", "胎", "养", "长生", "沐浴", "冠带", "临官"],  # 壬
    ["临官", "冠带", "沐浴", "长生", "养", "胎", "绝", "墓", "死", "病", "衰", "帝旺"],  # 癸
]


# ============================================================
# MELODIC ELEMENT (纳音)
# ============================================================

# One name per consecutive pair of the sexagenary cycle: 甲子乙丑, 丙寅丁卯, ...
NA_YIN_CYCLE = [
    "海中金", "炉中火", "大林木", "路旁土", "剑锋金",
    "山头火", "涧下水", "城头土", "白蜡金", "杨柳木",
    "泉中水", "屋上土", "霹雳火", "松柏木", "长流水",
    "沙中金", "山下火", "平地木", "壁上土", "金箔金",
    "覆灯火", "天河水", "大驿土", "钗钏金", "桑柘木",
    "大溪水", "沙中土", "天上火", "石榴木", "大海水",
]


def sexagenary_index(stem_index: int, branch_index: int) -> int:
    """Position 0-59 of a stem/branch pair in the sexagenary cycle."""
    if stem_index % 2 != branch_index % 2:
        raise InvalidDomainValue(
            "stem/branch pair",
            HEAVENLY_STEMS[stem_index].chinese + EARTHLY_BRANCHES[branch_index].chinese,
            "stem and branch polarity differ",
        )
    return (6 * stem_index - 5 * branch_index) % 60


SIXTY_GANZHI = [HEAVENLY_STEMS[i % 10].chinese + EARTHLY_BRANCHES[i % 12].chinese for i in range(60)]

NA_YIN = {SIXTY_GANZHI[i]: NA_YIN_CYCLE[i // 2] for i in range(60)}


# ============================================================
# BRANCH RELATIONS
# ============================================================

BRANCH_CLASHES = {
    "子": "午", "午": "子", "丑": "未", "未": "丑",
    "寅": "申", "申": "寅", "卯": "酉", "酉": "卯",
    "辰": "戌", "戌": "辰", "巳": "亥", "亥": "巳",
}

BRANCH_COMBINES = {
    "子": "丑", "丑": "子", "寅": "亥", "亥": "寅",
    "卯": "戌", "戌": "卯", "辰": "酉", "酉": "辰",
    "巳": "申", "申": "巳", "午": "未", "未": "午",
}

STEM_CLASHES = {
    "甲": "庚", "乙": "辛", "丙": "壬", "丁": "癸", "戊": "甲",
    "己": "乙", "庚": "丙", "辛": "丁", "壬": "戊", "癸": "己",
}


# ============================================================
# VOID BRANCHES (空亡)
# ============================================================

# (branch index - stem index) mod 12 of the decade's leading pair → void pair
VOID_PAIRS = {
    0: ("戌", "亥"),
    10: ("申", "酉"),
    8: ("午", "未"),
    6: ("辰", "巳"),
    4: ("寅", "卯"),
    2: ("子", "丑"),
}


# ============================================================
# BALANCE / PATTERN TABLES
# ============================================================

# Month branches that call for seasonal regulation, and the stems that regulate.
SEASONAL_REGULATION = {
    "亥": ("丙",), "子": ("丙",), "丑": ("丙",),
    "巳": ("壬", "癸"), "午": ("壬", "癸"), "未": ("壬", "癸"),
}

# 禄 seat: the branch where each stem is established (临官)
LU_SHEN_MAP = {
    "甲": "寅", "乙": "卯", "丙": "巳", "丁": "午", "戊": "巳",
    "己": "午", "庚": "申", "辛": "酉", "壬": "亥", "癸": "子",
}

DOMINANT_PATTERN_NAMES = {
    Element.WOOD: "曲直格",
    Element.FIRE: "炎上格",
    Element.EARTH: "稼穑格",
    Element.METAL: "从革格",
    Element.WATER: "润下格",
}


# ============================================================
# AUXILIARY STARS (神煞)
# ============================================================

# Keyed by day stem
TIAN_YI_MAP = {
    "甲": ("丑", "未"), "戊": ("丑", "未"), "庚": ("丑", "未"),
    "乙": ("子", "申"), "己": ("子", "申"),
    "丙": ("亥", "酉"), "丁": ("亥", "酉"),
    "辛": ("寅", "午"),
    "壬": ("卯", "巳"), "癸": ("卯", "巳"),
}

TAI_JI_MAP = {
    "甲": ("子", "午"), "乙": ("子", "午"),
    "丙": ("卯", "酉"), "丁": ("卯", "酉"),
    "戊": ("辰", "戌", "丑", "未"), "己": ("辰", "戌", "丑", "未"),
    "庚": ("寅", "亥"), "辛": ("寅", "亥"),
    "壬": ("巳", "申"), "癸": ("巳", "申"),
}

WEN_CHANG_MAP = {
    "甲": "巳", "乙": "午", "丙": "申", "丁": "酉", "戊": "申",
    "己": "酉", "庚": "亥", "辛": "子", "壬": "寅", "癸": "卯",
}

FU_XING_MAP = {
    "甲": ("寅", "子"), "乙": ("卯", "丑"), "丙": ("子", "戌"), "丁": ("酉", "亥"),
    "戊": ("申",), "己": ("未",), "庚": ("午",), "辛": ("巳",), "壬": ("辰",), "癸": ("卯",),
}

GUO_YIN_MAP = {
    "甲": "戌", "乙": "亥", "丙": "丑", "丁": "寅", "戊": "丑",
    "己": "寅", "庚": "辰", "辛": "巳", "壬": "未", "癸": "申",
}

JIN_YU_MAP = {
    "甲": "辰", "乙": "巳", "丙": "未", "丁": "申", "戊": "未",
    "己": "申", "庚": "戌", "辛": "亥", "壬": "丑", "癸": "寅",
}

TIAN_CHU_MAP = {
    "甲": "巳", "乙": "午", "丙": "巳", "丁": "午", "戊": "申",
    "己": "酉", "庚": "亥", "辛": "子", "壬": "寅", "癸": "卯",
}

XUE_TANG_MAP = {
    "甲": "亥", "乙": "午", "丙": "寅", "丁": "酉", "戊": "寅",
    "己": "酉", "庚": "巳", "辛": "子", "壬": "申", "癸": "卯",
}

CI_GUAN_MAP = {
    "甲": "寅", "乙": "卯", "丙": "巳", "丁": "午", "戊": "巳",
    "己": "午", "庚": "申", "辛": "酉", "壬": "亥", "癸": "子",
}

YANG_REN_MAP = {
    "甲": "卯", "乙": "辰", "丙": "午", "丁": "未", "戊": "午",
    "己": "未", "庚": "酉", "辛": "戌", "壬": "子", "癸": "丑",
}

HONG_YAN_MAP = {
    "甲": "午", "乙": "申", "丙": "寅", "丁": "未", "戊": "辰",
    "己": "辰", "庚": "戌", "辛": "酉", "壬": "子", "癸": "申",
}

LIU_XIA_MAP = {
    "甲": "酉", "乙": "戌", "丙": "未", "丁": "申", "戊": "巳",
    "己": "午", "庚": "辰", "辛": "卯", "壬": "亥", "癸": "寅",
}

# Keyed by month branch
TIAN_DE_MAP = {
    "寅": "丁", "卯": "申", "辰": "壬", "巳": "辛", "午": "亥", "未": "甲",
    "申": "癸", "酉": "寅", "戌": "丙", "亥": "乙", "子": "巳", "丑": "庚",
}

YUE_DE_MAP = {
    "寅": "丙", "午": "丙", "戌": "丙",
    "申": "壬", "子": "壬", "辰": "壬",
    "亥": "甲", "卯": "甲", "未": "甲",
    "巳": "庚", "酉": "庚", "丑": "庚",
}

# (德 stems, 秀 stems)
DE_XIU_MAP = {
    "寅": (("丙", "丁"), ("戊", "癸")), "午": (("丙", "丁"), ("戊", "癸")), "戌": (("丙", "丁"), ("戊", "癸")),
    "申": (("壬", "癸", "戊", "己"), ("丙", "辛", "甲", "己")),
    "子": (("壬", "癸", "戊", "己"), ("丙", "辛", "甲", "己")),
    "辰": (("壬", "癸", "戊", "己"), ("丙", "辛", "甲", "己")),
    "巳": (("庚", "辛"), ("乙", "庚")), "酉": (("庚", "辛"), ("乙", "庚")), "丑": (("庚", "辛"), ("乙", "庚")),
    "亥": (("甲", "乙"), ("丁", "壬")), "卯": (("甲", "乙"), ("丁", "壬")), "未": (("甲", "乙"), ("丁", "壬")),
}

TIAN_YI_MEDICAL_MAP = {
    "寅": "丑", "卯": "寅", "辰": "卯", "巳": "辰", "午": "巳", "未": "午",
    "申": "未", "酉": "申", "戌": "酉", "亥": "戌", "子": "亥", "丑": "子",
}

# Keyed by year (or day) branch, through its three-harmony frame
def _by_frame(water, fire, metal, wood):
    table = {}
    for branch in "申子辰":
        table[branch] = water
    for branch in "寅午戌":
        table[branch] = fire
    for branch in "巳酉丑":
        table[branch] = metal
    for branch in "亥卯未":
        table[branch] = wood
    return table


JIANG_XING_MAP = _by_frame("子", "午", "酉", "卯")
XIAN_CHI_MAP = _by_frame("酉", "卯", "午", "子")
YI_MA_MAP = _by_frame("寅", "申", "亥", "巳")
JIE_SHA_MAP = _by_frame("巳", "亥", "寅", "申")
ZAI_SHA_MAP = _by_frame("午", "子", "卯", "酉")
WANG_SHEN_MAP = _by_frame("亥", "巳", "申", "寅")
HUA_GAI_MAP = _by_frame("辰", "戌", "丑", "未")

HONG_LUAN_MAP = {
    "子": "卯", "丑": "寅", "寅": "丑", "卯": "子", "辰": "亥", "巳": "戌",
    "午": "酉", "未": "申", "申": "未", "酉": "午", "戌": "巳", "亥": "辰",
}

GU_CHEN_MAP = {
    "亥": "寅", "子": "寅", "丑": "寅",
    "寅": "巳", "卯": "巳", "辰": "巳",
    "巳": "申", "午": "申", "未": "申",
    "申": "亥", "酉": "亥", "戌": "亥",
}

GUA_SU_MAP = {
    "亥": "戌", "子": "戌", "丑": "戌",
    "寅": "丑", "卯": "丑", "辰": "丑",
    "巳": "辰", "午": "辰", "未": "辰",
    "申": "未", "酉": "未", "戌": "未",
}

# Day-pillar sets
KUI_GANG_DAYS = ("壬辰", "庚辰", "庚戌", "戊戌")
JIN_SHEN_PILLARS = ("癸酉", "己巳", "乙丑")
GU_LUAN_DAYS = ("甲寅", "乙巳", "丙午", "丁巳", "戊申", "戊午", "辛亥", "壬子")
YIN_CHA_YANG_CUO_DAYS = (
    "丙午", "丙子", "丁未", "丁丑", "戊申", "戊寅",
    "辛酉", "辛卯", "壬戌", "壬辰", "癸巳", "癸亥",
)
SHI_E_DA_BAI_DAYS = ("甲辰", "乙巳", "丙申", "丁亥", "戊戌", "己丑", "庚辰", "辛巳", "壬申", "癸亥")
BA_ZHUAN_DAYS = ("甲寅", "乙卯", "丁未", "戊戌", "己未", "庚申", "辛酉", "癸丑")
JIU_CHOU_DAYS = ("壬子", "壬午", "戊子", "戊午", "己酉", "己卯", "乙卯", "乙酉", "辛卯", "辛酉")
LIU_XIU_DAYS = ("丙午", "丁未", "戊子", "己丑", "戊午", "己未")


# ============================================================
# PILLAR POSITIONS
# ============================================================

POSITIONS = ("year", "month", "day", "hour")

POSITION_CHINESE = {
    "year": "年柱",
    "month": "月柱",
    "day": "日柱",
    "hour": "时柱",
}

# Day pillars marking 天赦 per season of the month branch
TIAN_SHE_DAYS = {
    "寅": "戊寅", "卯": "戊寅", "辰": "戊寅",
    "巳": "甲午", "午": "甲午", "未": "甲午",
    "申": "戊申", "酉": "戊申", "戌": "戊申",
    "亥": "甲子", "子": "甲子", "丑": "甲子",
}
