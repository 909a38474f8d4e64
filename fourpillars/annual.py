"""
Annual fortune (流年) scoring and activations.

The score starts at 50 and each rule in ANNUAL_RULES, evaluated in list
order, may add a signed adjustment and a reason. Rules see the running
score, so order matters for the coincident-fate rule.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Optional

from fourpillars.ganzhi import SexagenaryPair, parse_ganzhi, require_finite
from fourpillars.luck import LuckPillar, active_decade
from fourpillars.tables import BRANCH_CLASHES, BRANCH_COMBINES, HONG_LUAN_MAP, POSITIONS, YI_MA_MAP

logger = logging.getLogger("fourpillars.annual")

BASE_SCORE = 50
AUSPICIOUS_THRESHOLD = 65
INAUSPICIOUS_THRESHOLD = 42

# Mid-year probe keeps the query clear of the Li Chun boundary.
PROBE_MONTH = 7
PROBE_DAY = 1


class Rating(Enum):
    AUSPICIOUS = "吉"
    INAUSPICIOUS = "凶"
    NEUTRAL = "平"


@dataclass(frozen=True)
class AnnualFortune:
    year: int
    pair: SexagenaryPair
    rating: Rating
    reasons: tuple
    score: int

    def to_dict(self):
        return {
            "year": self.year,
            "ganzhi": self.pair.to_dict(),
            "rating": self.rating.value,
            "reasons": list(self.reasons),
            "score": self.score,
        }


@dataclass(frozen=True)
class Activation:
    pillar: str
    branch: str
    method: str  # 六冲 or 六合
    description: str

    def to_dict(self):
        return {
            "pillar": self.pillar,
            "branch": self.branch,
            "method": self.method,
            "description": self.description,
        }


@dataclass(frozen=True)
class AnnualContext:
    chart: object
    pair: SexagenaryPair
    decade: Optional[LuckPillar]

    @property
    def year_branch(self) -> str:
        return self.chart.pillars["year"].pair.branch

    @property
    def day_branch(self) -> str:
        return self.chart.pillars["day"].pair.branch


# A rule returns (adjustment, reason) when it fires, else None.
AnnualRule = Callable[[AnnualContext, int], Optional[tuple]]


def _coincident_fate(ctx: AnnualContext, score: int):
    if ctx.decade is None or ctx.decade.pair.text != ctx.pair.text:
        return None
    delta = -20 if score < 50 else 10
    return delta, f"岁运并临（{ctx.pair.text}），吉凶加倍，凡事宜谨慎。"


def _decade_element(ctx: AnnualContext, score: int):
    if ctx.decade is None:
        return None
    balance = ctx.chart.balance
    element = ctx.decade.pair.stem_element
    if balance.is_favorable(element):
        return 10, f"大运{ctx.decade.pair.text}天干属{element.chinese}，为喜用，得运扶持。"
    if element in balance.unfavorable:
        return -10, f"大运{ctx.decade.pair.text}天干属{element.chinese}，为忌神，运势受制。"
    return None


def _occupies_year(ctx: AnnualContext, score: int):
    if ctx.pair.branch != ctx.year_branch:
        return None
    return -10, f"流年{ctx.pair.branch}与年支相同（值太岁），宜守不宜攻。"


def _clashes_year(ctx: AnnualContext, score: int):
    if BRANCH_CLASHES[ctx.year_branch] != ctx.pair.branch:
        return None
    return -15, f"流年{ctx.pair.branch}冲年支{ctx.year_branch}（冲太岁），主奔波变动，长辈健康需留意。"


def _clashes_day(ctx: AnnualContext, score: int):
    if BRANCH_CLASHES[ctx.day_branch] != ctx.pair.branch:
        return None
    return -10, f"流年{ctx.pair.branch}冲日支{ctx.day_branch}（夫妻宫），主婚姻情感或居所变动。"


def _stem_element(ctx: AnnualContext, score: int):
    balance = ctx.chart.balance
    element = ctx.pair.stem_element
    if balance.is_favorable(element):
        return 20, f"流年天干{ctx.pair.stem}（{element.chinese}）为喜用神，吉。"
    if element in balance.unfavorable:
        return -15, f"流年天干{ctx.pair.stem}（{element.chinese}）为忌神，凶。"
    return None


def _romance_star(ctx: AnnualContext, score: int):
    if HONG_LUAN_MAP[ctx.year_branch] != ctx.pair.branch:
        return None
    return 5, "流年红鸾星动，利感情婚姻。"


def _travel_star(ctx: AnnualContext, score: int):
    if YI_MA_MAP[ctx.year_branch] != ctx.pair.branch:
        return None
    return 3, "流年驿马星动，主出行迁移、职业变动。"


ANNUAL_RULES: list[AnnualRule] = [
    _coincident_fate,
    _decade_element,
    _occupies_year,
    _clashes_year,
    _clashes_day,
    _stem_element,
    _romance_star,
    _travel_star,
]


def rating_for(score) -> Rating:
    """Strict three-way partition of the annual score."""
    score = require_finite(score, "annual score")
    if score >= AUSPICIOUS_THRESHOLD:
        return Rating.AUSPICIOUS
    if score <= INAUSPICIOUS_THRESHOLD:
        return Rating.INAUSPICIOUS
    return Rating.NEUTRAL


def annual_pair(chart, year: int, calendar) -> SexagenaryPair:
    """That year's pillar, asked of the calendar service at the mid-year probe date."""
    text = calendar.year_ganzhi(year, date(year, PROBE_MONTH, PROBE_DAY))
    return parse_ganzhi(text, chart.day_master_index)


def score_year(chart, pair: SexagenaryPair, year: int) -> AnnualFortune:
    """Apply ANNUAL_RULES to an already-built annual pillar."""
    ctx = AnnualContext(chart=chart, pair=pair, decade=active_decade(chart.luck_pillars, year))
    score = BASE_SCORE
    reasons = []
    for rule in ANNUAL_RULES:
        fired = rule(ctx, score)
        if fired is None:
            continue
        delta, reason = fired
        score += delta
        reasons.append(reason)
        logger.debug("%d %s: %s %+d -> %d", year, pair.text, rule.__name__, delta, score)

    return AnnualFortune(
        year=year,
        pair=pair,
        rating=rating_for(score),
        reasons=tuple(reasons),
        score=score,
    )


def annual_fortune(chart, year: int, calendar) -> AnnualFortune:
    """
    Score one calendar year against a natal chart.

    Args:
        chart: FourPillarsChart
        year: Gregorian year to score
        calendar: CalendarService used to look up the year's pillar

    Returns:
        AnnualFortune, recomputed fresh on every call
    """
    return score_year(chart, annual_pair(chart, year, calendar), year)


def annual_activations(chart, pair: SexagenaryPair) -> list[Activation]:
    """Natal pillars whose branch the annual branch clashes (六冲) or combines with (六合)."""
    activations = []
    for position in POSITIONS:
        pillar = chart.pillars[position]
        branch = pillar.pair.branch
        if BRANCH_CLASHES[branch] == pair.branch:
            activations.append(Activation(
                pillar=position,
                branch=branch,
                method="六冲",
                description=f"流年{pair.branch}冲{pillar.name}{branch}",
            ))
        if BRANCH_COMBINES[branch] == pair.branch:
            activations.append(Activation(
                pillar=position,
                branch=branch,
                method="六合",
                description=f"流年{pair.branch}合{pillar.name}{branch}",
            ))
    return activations
