"""
Day-master strength scoring and favorable-element selection.

The strength score is the sum of three capped contributions:

- seasonal (月令): how the month branch's element relates to the day master
- branch support (得地): same/generating hidden stems across the four branches,
  discounted when a branch is clashed by another branch of the chart
- stem support (得助): same/generating main stems of the year, month and hour

Also computes the ten-god strength table (十神强弱).
"""

import logging
from dataclasses import dataclass
from enum import Enum

from fourpillars.ganzhi import element_relationship, require_finite
from fourpillars.tables import (
    BRANCH_CLASHES,
    CONTROL_CYCLE,
    CONTROLLED_BY,
    HEAVENLY_STEMS,
    PRODUCED_BY,
    PRODUCTION_CYCLE,
    SEASONAL_REGULATION,
    TEN_GOD_NAMES,
    TEN_GODS_MAP,
    Element,
    stem_of,
)

logger = logging.getLogger("fourpillars.balance")

SEASONAL_CAP = 40
BRANCH_CAP = 35
STEM_CAP = 25

SEASONAL_POINTS = {
    "same": 40,
    "produces_me": 35,
    "i_produce": 10,
}

PRIMARY_ROOT_POINTS = 8
MINOR_ROOT_POINTS = 3
CLASH_FACTOR = 0.3

SAME_STEM_POINTS = 8
PRODUCING_STEM_POINTS = 7

STRONG_THRESHOLD = 55
WEAK_THRESHOLD = 42


class StrengthLevel(Enum):
    STRONG = "身强"
    WEAK = "身弱"
    BALANCED = "中和"


class AdjustmentMethod(Enum):
    SEASONAL_REGULATION = "调候"
    SUPPORT_SUPPRESSION = "扶抑"


@dataclass(frozen=True)
class BalanceAnalysis:
    score: float
    level: StrengthLevel
    favorable: tuple
    mildly_favorable: tuple
    unfavorable: tuple
    method: AdjustmentMethod
    advice: str
    seasonal_score: float = 0.0
    branch_score: float = 0.0
    stem_score: float = 0.0

    def is_favorable(self, element: Element) -> bool:
        """Favorable for scoring purposes; mildly favorable counts."""
        return element in self.favorable or element in self.mildly_favorable

    def to_dict(self):
        return {
            "score": self.score,
            "level": self.level.value,
            "components": {
                "seasonal": self.seasonal_score,
                "branch_support": self.branch_score,
                "stem_support": self.stem_score,
            },
            "favorable": [e.chinese for e in self.favorable],
            "mildly_favorable": [e.chinese for e in self.mildly_favorable],
            "unfavorable": [e.chinese for e in self.unfavorable],
            "method": self.method.value,
            "advice": self.advice,
        }


@dataclass(frozen=True)
class GodStrength:
    name: str
    element: Element
    score: int
    level: str

    def to_dict(self):
        return {
            "name": self.name,
            "element": self.element.chinese,
            "score": self.score,
            "level": self.level,
        }


# ============================================================
# SCORING
# ============================================================

def _supports(day_master_element: Element, element: Element) -> bool:
    return element_relationship(day_master_element, element) in ("same", "produces_me")


def seasonal_score(day_master_element: Element, month_element: Element) -> float:
    relation = element_relationship(day_master_element, month_element)
    return min(SEASONAL_POINTS.get(relation, 0), SEASONAL_CAP)


def branch_support_score(day_master_element: Element, pillars: dict) -> float:
    branches = [p.pair.branch for p in pillars.values()]
    total = 0.0
    for position, pillar in pillars.items():
        points = 0.0
        for hidden in pillar.pair.hidden_stems:
            if _supports(day_master_element, hidden.element):
                points += PRIMARY_ROOT_POINTS if hidden.is_primary else MINOR_ROOT_POINTS
        others = [b for other, b in zip(pillars, branches) if other != position]
        if BRANCH_CLASHES[pillar.pair.branch] in others:
            points *= CLASH_FACTOR
        total += points
    return min(total, BRANCH_CAP)


def stem_support_score(day_master_element: Element, pillars: dict) -> float:
    total = 0
    for position in ("year", "month", "hour"):
        element = pillars[position].pair.stem_element
        relation = element_relationship(day_master_element, element)
        if relation == "same":
            total += SAME_STEM_POINTS
        elif relation == "produces_me":
            total += PRODUCING_STEM_POINTS
    return min(total, STEM_CAP)


def strength_level(score: float) -> StrengthLevel:
    """Strict three-way partition of the strength score."""
    score = require_finite(score, "strength score")
    if score >= STRONG_THRESHOLD:
        return StrengthLevel.STRONG
    if score <= WEAK_THRESHOLD:
        return StrengthLevel.WEAK
    return StrengthLevel.BALANCED


# ============================================================
# ELEMENT SELECTION
# ============================================================

def element_sets(day_master_element: Element, level: StrengthLevel) -> tuple:
    """
    Favorable / mildly favorable / unfavorable elements for a strength level.

    Walks the generation cycle from the day master:
    resource generates it, output is what it generates, wealth is what it
    overcomes, officer is what overcomes it.
    """
    same = day_master_element
    resource = PRODUCED_BY[day_master_element]
    output = PRODUCTION_CYCLE[day_master_element]
    wealth = CONTROL_CYCLE[day_master_element]
    officer = CONTROLLED_BY[day_master_element]

    if level is StrengthLevel.STRONG:
        return [output, officer], [wealth], [resource, same]
    if level is StrengthLevel.WEAK:
        return [resource, same], [], [output, wealth, officer]
    return [same], [resource], [officer]


def _support_advice(dm: str, element: Element, level: StrengthLevel) -> str:
    same = element.chinese
    resource = PRODUCED_BY[element].chinese
    output = PRODUCTION_CYCLE[element].chinese
    wealth = CONTROL_CYCLE[element].chinese
    officer = CONTROLLED_BY[element].chinese
    if level is StrengthLevel.STRONG:
        return (
            f"日主{dm}{same}身强，宜泄（{output}）宜克（{officer}），喜财（{wealth}）耗身。"
            f"忌印（{resource}）比（{same}）再扶。"
        )
    if level is StrengthLevel.WEAK:
        return (
            f"日主{dm}{same}身弱，宜印（{resource}）生扶、比劫（{same}）帮身。"
            f"忌食伤（{output}）、财（{wealth}）、官杀（{officer}）。"
        )
    return f"日主{dm}{same}中和，五行流通为贵，喜比（{same}），忌官杀（{officer}）过旺。"


def _seasonal_advice(month_branch: str, regulators: list) -> str:
    names = "、".join(e.chinese for e in regulators)
    if month_branch in "亥子丑":
        return f"生于{month_branch}月，寒气当令，首取{names}暖局调候。"
    return f"生于{month_branch}月，火炎土燥，急需{names}润局调候。"


def analyze_balance(day_master: str, pillars: dict, element_counts: dict) -> BalanceAnalysis:
    """
    Score day-master strength and choose the favorable elements.

    Args:
        day_master: day stem symbol
        pillars: position -> Pillar for "year", "month", "day", "hour"
        element_counts: Element -> occurrences across the eight characters

    Returns:
        BalanceAnalysis
    """
    dm = stem_of(day_master)
    month_pair = pillars["month"].pair

    seasonal = seasonal_score(dm.element, month_pair.branch_element)
    branch = branch_support_score(dm.element, pillars)
    stems = stem_support_score(dm.element, pillars)
    score = round(seasonal + branch + stems, 1)
    level = strength_level(score)

    favorable, mild, unfavorable = element_sets(dm.element, level)
    advice = _support_advice(dm.chinese, dm.element, level)
    method = AdjustmentMethod.SUPPORT_SUPPRESSION

    regulating_stems = SEASONAL_REGULATION.get(month_pair.branch)
    if regulating_stems:
        regulators = []
        for symbol in regulating_stems:
            element = stem_of(symbol).element
            if element not in regulators:
                regulators.append(element)
        favorable = regulators + [e for e in favorable if e not in regulators]
        mild = [e for e in mild if e not in regulators]
        unfavorable = [e for e in unfavorable if e not in regulators]
        method = AdjustmentMethod.SEASONAL_REGULATION
        advice = _seasonal_advice(month_pair.branch, regulators) + advice

    logger.debug(
        "balance %s: seasonal=%s branch=%s stem=%s total=%s level=%s method=%s counts=%s",
        dm.chinese, seasonal, branch, stems, score, level.value, method.value,
        {e.chinese: n for e, n in element_counts.items()},
    )

    return BalanceAnalysis(
        score=score,
        level=level,
        favorable=tuple(favorable),
        mildly_favorable=tuple(mild),
        unfavorable=tuple(unfavorable),
        method=method,
        advice=advice,
        seasonal_score=seasonal,
        branch_score=round(branch, 1),
        stem_score=stems,
    )


# ============================================================
# TEN-GOD STRENGTH (十神强弱)
# ============================================================

def god_strength(day_master: str, pillars: dict) -> list[GodStrength]:
    """Rough presence score (0-100) of each ten god in the chart."""
    dm = stem_of(day_master)
    month_element = pillars["month"].pair.branch_element
    results = []
    for name in TEN_GOD_NAMES:
        carrier = HEAVENLY_STEMS[TEN_GODS_MAP[dm.index].index(name)]
        score = 30 if carrier.element == month_element else 5
        for pillar in pillars.values():
            if pillar.pair.ten_god == name:
                score += 10
            for hidden in pillar.pair.hidden_stems:
                if hidden.ten_god == name:
                    score += 20 if hidden.is_primary else 5
                    break
        score = min(score, 100)
        if score >= 60:
            level = "强"
        elif score >= 30:
            level = "中"
        else:
            level = "弱"
        results.append(GodStrength(name=name, element=carrier.element, score=score, level=level))
    return results
