"""
Auxiliary stars (神煞) and void branches (空亡).

Each star is an independent predicate over one pillar plus the chart's
anchors (day stem, year/month/day branches). The rules are evaluated in
list order and every match appends its star name, so a pillar can carry
several stars.

Star interactions are a second, chart-wide pass: fixed combinations of stars
that carry a meaning of their own when they appear together.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from fourpillars.tables import (
    BRANCH_CLASHES,
    BRANCH_COMBINES,
    BA_ZHUAN_DAYS,
    CI_GUAN_MAP,
    DE_XIU_MAP,
    FU_XING_MAP,
    GU_CHEN_MAP,
    GU_LUAN_DAYS,
    GUA_SU_MAP,
    GUO_YIN_MAP,
    HONG_LUAN_MAP,
    HONG_YAN_MAP,
    HUA_GAI_MAP,
    JIANG_XING_MAP,
    JIE_SHA_MAP,
    JIN_SHEN_PILLARS,
    JIN_YU_MAP,
    JIU_CHOU_DAYS,
    KUI_GANG_DAYS,
    LIU_XIA_MAP,
    LIU_XIU_DAYS,
    LU_SHEN_MAP,
    SHI_E_DA_BAI_DAYS,
    STEM_CLASHES,
    STEM_BY_SYMBOL,
    TAI_JI_MAP,
    TIAN_CHU_MAP,
    TIAN_DE_MAP,
    TIAN_SHE_DAYS,
    TIAN_YI_MAP,
    TIAN_YI_MEDICAL_MAP,
    VOID_PAIRS,
    WANG_SHEN_MAP,
    WEN_CHANG_MAP,
    XIAN_CHI_MAP,
    XUE_TANG_MAP,
    YANG_REN_MAP,
    YI_MA_MAP,
    YIN_CHA_YANG_CUO_DAYS,
    YUE_DE_MAP,
    ZAI_SHA_MAP,
    branch_of,
    sexagenary_index,
    stem_of,
)

logger = logging.getLogger("fourpillars.stars")


@dataclass(frozen=True)
class StarContext:
    position: str  # "year", "month", "day", "hour"
    stem: str
    branch: str
    day_stem: str
    day_branch: str
    year_stem: str
    year_branch: str
    month_branch: str

    @property
    def ganzhi(self) -> str:
        return self.stem + self.branch

    @property
    def is_day(self) -> bool:
        return self.position == "day"


def branch_distance(start: str, end: str) -> int:
    """Steps forward from one branch to another, 0-11."""
    return (branch_of(end).index - branch_of(start).index) % 12


def _from_year_or_day(table, ctx: StarContext) -> bool:
    return table[ctx.year_branch] == ctx.branch or table[ctx.day_branch] == ctx.branch


def _tian_de(ctx: StarContext) -> bool:
    target = TIAN_DE_MAP[ctx.month_branch]
    if target in STEM_BY_SYMBOL:
        return ctx.stem == target
    return ctx.branch == target


def _de_xiu(ctx: StarContext) -> bool:
    de_stems, xiu_stems = DE_XIU_MAP[ctx.month_branch]
    return ctx.stem in de_stems or ctx.stem in xiu_stems


def _fei_ren(ctx: StarContext) -> bool:
    return BRANCH_CLASHES[YANG_REN_MAP[ctx.day_stem]] == ctx.branch


def _fu_yin(ctx: StarContext) -> bool:
    return ctx.position != "year" and ctx.ganzhi == ctx.year_stem + ctx.year_branch


def _fan_yin(ctx: StarContext) -> bool:
    return (
        ctx.position != "year"
        and STEM_CLASHES[ctx.year_stem] == ctx.stem
        and BRANCH_CLASHES[ctx.year_branch] == ctx.branch
    )


# Ordered (name, predicate) pairs. Order decides the order of the output list.
STAR_RULES = [
    # noblemen
    ("天乙贵人", lambda c: c.branch in TIAN_YI_MAP[c.day_stem]),
    ("太极贵人", lambda c: c.branch in TAI_JI_MAP[c.day_stem]),
    ("天德贵人", _tian_de),
    ("月德贵人", lambda c: YUE_DE_MAP[c.month_branch] == c.stem),
    ("文昌贵人", lambda c: WEN_CHANG_MAP[c.day_stem] == c.branch),
    ("福星贵人", lambda c: c.branch in FU_XING_MAP[c.day_stem]),
    ("德秀贵人", _de_xiu),
    ("国印贵人", lambda c: GUO_YIN_MAP[c.day_stem] == c.branch),
    ("将星", lambda c: _from_year_or_day(JIANG_XING_MAP, c)),
    ("金舆", lambda c: JIN_YU_MAP[c.day_stem] == c.branch),
    ("天厨贵人", lambda c: TIAN_CHU_MAP[c.day_stem] == c.branch),
    ("学堂", lambda c: XUE_TANG_MAP[c.day_stem] == c.branch),
    ("词馆", lambda c: CI_GUAN_MAP[c.day_stem] == c.branch),
    ("天赦", lambda c: c.is_day and TIAN_SHE_DAYS[c.month_branch] == c.ganzhi),
    ("天喜", lambda c: BRANCH_CLASHES[HONG_LUAN_MAP[c.year_branch]] == c.branch),
    ("红鸾", lambda c: HONG_LUAN_MAP[c.year_branch] == c.branch),
    ("龙德", lambda c: branch_distance(c.year_branch, c.branch) == 8),
    ("解神", lambda c: BRANCH_COMBINES[c.month_branch] == c.branch),
    # romance
    ("咸池", lambda c: _from_year_or_day(XIAN_CHI_MAP, c)),
    ("红艳煞", lambda c: HONG_YAN_MAP[c.day_stem] == c.branch),
    ("孤鸾煞", lambda c: c.is_day and c.ganzhi in GU_LUAN_DAYS),
    ("阴差阳错", lambda c: c.is_day and c.ganzhi in YIN_CHA_YANG_CUO_DAYS),
    ("墙外桃花", lambda c: c.position == "hour" and _from_year_or_day(XIAN_CHI_MAP, c)),
    # travel and calamity
    ("驿马", lambda c: _from_year_or_day(YI_MA_MAP, c)),
    ("劫煞", lambda c: _from_year_or_day(JIE_SHA_MAP, c)),
    ("灾煞", lambda c: _from_year_or_day(ZAI_SHA_MAP, c)),
    ("亡神", lambda c: _from_year_or_day(WANG_SHEN_MAP, c)),
    # wealth and career
    ("禄神", lambda c: LU_SHEN_MAP[c.day_stem] == c.branch),
    ("羊刃", lambda c: YANG_REN_MAP[c.day_stem] == c.branch),
    ("飞刃", _fei_ren),
    ("元辰", lambda c: BRANCH_CLASHES[c.day_branch] == c.branch),
    ("丧门", lambda c: branch_distance(c.year_branch, c.branch) == 2),
    ("吊客", lambda c: branch_distance(c.year_branch, c.branch) == 10),
    ("白虎", lambda c: branch_distance(c.year_branch, c.branch) == 8),
    # solitude
    ("华盖", lambda c: _from_year_or_day(HUA_GAI_MAP, c)),
    ("孤辰", lambda c: GU_CHEN_MAP[c.year_branch] == c.branch),
    ("寡宿", lambda c: GUA_SU_MAP[c.year_branch] == c.branch),
    ("天医", lambda c: TIAN_YI_MEDICAL_MAP[c.month_branch] == c.branch),
    # day-pillar specials
    ("魁罡", lambda c: c.is_day and c.ganzhi in KUI_GANG_DAYS),
    ("金神", lambda c: c.position in ("day", "hour") and c.ganzhi in JIN_SHEN_PILLARS),
    ("禄马交驰", lambda c: LU_SHEN_MAP[c.day_stem] == c.branch and _from_year_or_day(YI_MA_MAP, c)),
    ("伏吟", _fu_yin),
    ("反吟", _fan_yin),
    ("六秀", lambda c: c.is_day and c.ganzhi in LIU_XIU_DAYS),
    ("流霞", lambda c: LIU_XIA_MAP[c.day_stem] == c.branch),
    ("十恶大败", lambda c: c.is_day and c.ganzhi in SHI_E_DA_BAI_DAYS),
    ("八专", lambda c: c.is_day and c.ganzhi in BA_ZHUAN_DAYS),
    ("九丑", lambda c: c.is_day and c.ganzhi in JIU_CHOU_DAYS),
]


def stars_for(ctx: StarContext) -> list[str]:
    """Evaluate every star rule against one pillar, duplicates dropped."""
    stem_of(ctx.stem)
    branch_of(ctx.branch)
    found = []
    for name, predicate in STAR_RULES:
        if predicate(ctx) and name not in found:
            found.append(name)
    logger.debug("%s %s stars: %s", ctx.position, ctx.ganzhi, found)
    return found


# ============================================================
# VOID BRANCHES (空亡)
# ============================================================

def void_offset(stem: str, branch: str) -> int:
    """(branch index - stem index) mod 12 for a valid sexagenary pair; always even."""
    s = stem_of(stem)
    b = branch_of(branch)
    sexagenary_index(s.index, b.index)
    return (b.index - s.index + 12) % 12


def void_pair(stem: str, branch: str) -> tuple:
    """The two void branches of the ten-day decade a pair belongs to."""
    return VOID_PAIRS[void_offset(stem, branch)]


def void_branches(day_stem: str, day_branch: str, year_stem: str, year_branch: str) -> set:
    """Union of the void pairs seen from the day pillar and from the year pillar."""
    return set(void_pair(day_stem, day_branch)) | set(void_pair(year_stem, year_branch))


# ============================================================
# STAR INTERACTIONS (神煞组合)
# ============================================================

class Severity(Enum):
    AUSPICIOUS = "吉"
    INAUSPICIOUS = "凶"
    MIXED = "中平"


@dataclass(frozen=True)
class StarInteraction:
    name: str
    stars: tuple
    effect: str
    severity: Severity

    def to_dict(self):
        return {
            "name": self.name,
            "stars": list(self.stars),
            "effect": self.effect,
            "severity": self.severity.value,
        }


# (name, required stars, effect, severity); a rule fires when every required
# star appears somewhere in the chart. Order decides the order of the output.
STAR_INTERACTION_RULES = [
    ("德贵双全", ("天乙贵人", "天德贵人"), "贵人与天德同现，逢凶化吉，一生多得庇佑。", Severity.AUSPICIOUS),
    ("天月二德", ("天德贵人", "月德贵人"), "二德并临，心性仁厚，灾厄减轻。", Severity.AUSPICIOUS),
    ("文星汇聚", ("文昌贵人", "学堂"), "文昌会学堂，聪慧好学，利考试功名。", Severity.AUSPICIOUS),
    ("红鸾天喜", ("红鸾", "天喜"), "红鸾天喜同见，姻缘顺遂，喜事多。", Severity.AUSPICIOUS),
    ("桃花红鸾", ("咸池", "红鸾"), "桃花逢红鸾，异性缘旺，宜防感情纠葛。", Severity.MIXED),
    ("将星华盖", ("将星", "华盖"), "将星带华盖，有领导才能，亦具艺术天分。", Severity.AUSPICIOUS),
    ("驿马逢劫", ("驿马", "劫煞"), "驿马遇劫煞，奔波之中易有损失，出行宜谨慎。", Severity.INAUSPICIOUS),
    ("刃劫相随", ("羊刃", "劫煞"), "羊刃与劫煞同现，性急易冲动，防意外破财。", Severity.INAUSPICIOUS),
    ("孤寡同临", ("孤辰", "寡宿"), "孤辰寡宿并见，性情孤高，婚缘迟晚。", Severity.INAUSPICIOUS),
]


def star_interactions(stars) -> list[StarInteraction]:
    """
    Combinations of stars present anywhere in the chart.

    Args:
        stars: star names collected over all four pillars (duplicates allowed)

    Returns:
        one StarInteraction per rule whose required stars are all present
    """
    present = set(stars)
    hits = []
    for name, required, effect, severity in STAR_INTERACTION_RULES:
        if all(star in present for star in required):
            hits.append(StarInteraction(name=name, stars=required, effect=effect, severity=severity))
    logger.debug("star interactions: %s", [hit.name for hit in hits])
    return hits
