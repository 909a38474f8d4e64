"""
Pattern (格局) classification.

An ordered cascade, first match wins:

1. dominant element: the day master's element fills the chart and the
   strength score is very high (专旺格)
2. establishment: the month branch is the day master's 禄 seat (建禄格)
3. month command: the pattern is named after the ten god of a
   representative hidden stem of the month branch
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from fourpillars.ganzhi import require_finite
from fourpillars.tables import DOMINANT_PATTERN_NAMES, LU_SHEN_MAP, stem_of

logger = logging.getLogger("fourpillars.pattern")

DOMINANT_MIN_COUNT = 6
DOMINANT_MIN_SCORE = 65


class PatternType(Enum):
    ORTHODOX = "正格"
    TRANSFORMED = "化格"
    EXCEPTIONAL = "外格"


class PatternTier(Enum):
    TOP = "上等"
    MIDDLE = "中等"
    LOW = "下等"


@dataclass(frozen=True)
class PatternAnalysis:
    name: str
    type: PatternType
    established: bool
    tier: PatternTier
    beneficial: tuple
    destructive: tuple
    description: str

    def to_dict(self):
        return {
            "name": self.name,
            "type": self.type.value,
            "established": self.established,
            "tier": self.tier.value,
            "beneficial": list(self.beneficial),
            "destructive": list(self.destructive),
            "description": self.description,
        }


@dataclass(frozen=True)
class PatternInput:
    day_master: str
    pillars: dict
    balance: object
    element_counts: dict

    @property
    def month_branch(self) -> str:
        return self.pillars["month"].pair.branch

    @property
    def visible_stems(self) -> list:
        return [self.pillars[p].pair.stem for p in ("year", "month", "hour")]


@dataclass(frozen=True)
class PatternRule:
    name: str
    matches: Callable[[PatternInput], bool]
    build: Callable[[PatternInput], PatternAnalysis]


# Ten-god patterns: (name, beneficial, destructive, note)
TEN_GOD_PATTERNS = {
    "正官": ("正官格", ("财旺生官", "官印相生"), ("伤官见官", "官杀混杂"),
             "正官贵在清纯，喜财印相扶，最怕伤官冲破。"),
    "七杀": ("七杀格", ("食神制杀", "杀印相生"), ("财滋七杀", "七杀无制"),
             "七杀有制化为权柄，无制则攻身太过。"),
    "正印": ("正印格", ("官印相生",), ("贪财坏印",),
             "印绶清高，喜官杀生印，忌财星坏印。"),
    "偏印": ("偏印格", ("官印相生",), ("贪财坏印", "枭神夺食"),
             "偏印主偏门技艺，喜官杀生扶，忌逢食神。"),
    "食神": ("食神格", ("食神生财",), ("枭神夺食",),
             "食神吐秀，清高安逸，喜财星流通。"),
    "伤官": ("伤官格", ("伤官配印", "伤官生财"), ("伤官见官",),
             "伤官聪明外露，喜配印或生财，忌见正官。"),
    "正财": ("正财格", ("食伤生财", "财官双美"), ("比劫夺财",),
             "正财勤俭稳守，喜食伤生助，忌比劫争夺。"),
    "偏财": ("偏财格", ("食伤生财", "财官双美"), ("比劫夺财",),
             "偏财慷慨多机，喜身强任财，忌比劫分夺。"),
    "比肩": ("月劫格", ("财官并透",), ("比劫争财",),
             "月令比劫当权，身旺，喜财官食伤，最忌无财官而再见比劫。"),
    "劫财": ("月劫格", ("财官并透",), ("比劫争财",),
             "月令比劫当权，身旺，喜财官食伤，最忌无财官而再见比劫。"),
}


def _dominant_matches(ctx: PatternInput) -> bool:
    element = stem_of(ctx.day_master).element
    score = require_finite(ctx.balance.score, "strength score")
    return ctx.element_counts.get(element, 0) >= DOMINANT_MIN_COUNT and score > DOMINANT_MIN_SCORE


def _dominant_build(ctx: PatternInput) -> PatternAnalysis:
    element = stem_of(ctx.day_master).element
    name = DOMINANT_PATTERN_NAMES[element]
    return PatternAnalysis(
        name=name,
        type=PatternType.EXCEPTIONAL,
        established=True,
        tier=PatternTier.TOP,
        beneficial=("一行得气", "顺势而行"),
        destructive=("官杀逆势", "财星破局"),
        description=(
            f"日主{ctx.day_master}{element.chinese}气满局，身旺至极，成{name}。"
            f"宜顺其旺势，喜印比食伤，忌官杀逆其锋芒。"
        ),
    )


def _establishment_matches(ctx: PatternInput) -> bool:
    return LU_SHEN_MAP[ctx.day_master] == ctx.month_branch


def _establishment_build(ctx: PatternInput) -> PatternAnalysis:
    return PatternAnalysis(
        name="建禄格",
        type=PatternType.EXCEPTIONAL,
        established=True,
        tier=PatternTier.MIDDLE,
        beneficial=("财官并透", "食伤泄秀"),
        destructive=("比劫重重", "无财无官"),
        description=(
            f"月令{ctx.month_branch}为日主{ctx.day_master}之禄地，定为建禄格。"
            f"此格身旺，喜财官食伤，最忌无财官而再见比劫。"
        ),
    )


def representative_stem(month_pair, visible_stems: list):
    """
    Choose the month branch's hidden stem that names the pattern.

    Primary qi if it shows among the year/month/hour stems, else the first
    other hidden stem that shows, else the primary qi regardless.
    """
    hidden = month_pair.hidden_stems
    primary = hidden[0]
    if primary.stem in visible_stems:
        return primary, True
    for candidate in hidden[1:]:
        if candidate.stem in visible_stems:
            return candidate, True
    return primary, False


def _month_command_build(ctx: PatternInput) -> PatternAnalysis:
    chosen, revealed = representative_stem(ctx.pillars["month"].pair, ctx.visible_stems)
    name, beneficial, destructive, note = TEN_GOD_PATTERNS[chosen.ten_god]
    if revealed:
        lead = f"月令{ctx.month_branch}藏{chosen.stem}透出，为{chosen.ten_god}，定为{name}。"
    else:
        lead = f"月令{ctx.month_branch}本气{chosen.stem}为{chosen.ten_god}，定为{name}。"
    return PatternAnalysis(
        name=name,
        type=PatternType.ORTHODOX,
        established=True,
        tier=PatternTier.MIDDLE,
        beneficial=beneficial,
        destructive=destructive,
        description=lead + note,
    )


PATTERN_RULES = [
    PatternRule("dominant_element", _dominant_matches, _dominant_build),
    PatternRule("establishment", _establishment_matches, _establishment_build),
    PatternRule("month_command", lambda ctx: True, _month_command_build),
]


def classify_pattern(day_master: str, pillars: dict, balance, element_counts: dict) -> PatternAnalysis:
    """Run the cascade and return the first matching pattern."""
    ctx = PatternInput(day_master, pillars, balance, element_counts)
    result: Optional[PatternAnalysis] = None
    for rule in PATTERN_RULES:
        if rule.matches(ctx):
            result = rule.build(ctx)
            logger.debug("pattern rule %s matched: %s", rule.name, result.name)
            break
    return result
