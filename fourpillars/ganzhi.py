"""
GanZhi builder: a stem/branch pair with every attribute derived from it.

Handles:
- Ten-god relation of a stem to the day master
- Hidden-stem composition of a branch
- Life stage of the day master (and of the pair's own stem) in a branch
- Melodic element (纳音) of the pair
- Parsing the two-character strings handed back by the calendar service

Every derived field is a pure function of (stem, branch, day master).
"""

import math
from dataclasses import dataclass

from fourpillars.errors import InvalidDomainValue
from fourpillars.tables import (
    CONTROL_CYCLE,
    HIDDEN_STEMS_DATA,
    LIFE_STAGES_TABLE,
    NA_YIN_CYCLE,
    PRODUCTION_CYCLE,
    TEN_GODS_MAP,
    Element,
    QiKind,
    branch_at,
    branch_of,
    sexagenary_index,
    stem_at,
    stem_of,
)


@dataclass(frozen=True)
class HiddenStem:
    stem: str
    element: Element
    kind: QiKind
    power: int  # share of the branch's qi, all entries of a branch sum to 100
    ten_god: str

    @property
    def is_primary(self) -> bool:
        return self.kind is QiKind.PRIMARY

    def to_dict(self):
        return {
            "stem": self.stem,
            "element": self.element.chinese,
            "kind": self.kind.value,
            "power": self.power,
            "ten_god": self.ten_god,
        }


@dataclass(frozen=True)
class SexagenaryPair:
    stem: str
    branch: str
    stem_element: Element
    branch_element: Element
    hidden_stems: tuple
    na_yin: str
    ten_god: str
    life_stage: str  # day master's stage in this branch
    self_life_stage: str  # this stem's own stage in this branch

    @property
    def text(self) -> str:
        return self.stem + self.branch

    @property
    def stem_index(self) -> int:
        return stem_of(self.stem).index

    @property
    def branch_index(self) -> int:
        return branch_of(self.branch).index

    @property
    def primary_hidden(self) -> HiddenStem:
        return self.hidden_stems[0]

    def __str__(self):
        return self.text

    def to_dict(self):
        return {
            "ganzhi": self.text,
            "stem": self.stem,
            "branch": self.branch,
            "stem_element": self.stem_element.chinese,
            "branch_element": self.branch_element.chinese,
            "hidden_stems": [h.to_dict() for h in self.hidden_stems],
            "na_yin": self.na_yin,
            "ten_god": self.ten_god,
            "life_stage": self.life_stage,
            "self_life_stage": self.self_life_stage,
        }


# ============================================================
# RELATIONS
# ============================================================

def element_relationship(day_master_element: Element, other_element: Element) -> str:
    """Determine the elemental relationship from DM's perspective."""
    if day_master_element == other_element:
        return "same"
    elif PRODUCTION_CYCLE[other_element] == day_master_element:
        return "produces_me"  # other produces DM
    elif PRODUCTION_CYCLE[day_master_element] == other_element:
        return "i_produce"  # DM produces other
    elif CONTROL_CYCLE[day_master_element] == other_element:
        return "i_control"  # DM controls other
    else:
        return "controls_me"  # other controls DM


def ten_god(day_master_index: int, target_stem_index: int) -> str:
    """Ten-god name of a target stem seen from the day master."""
    return TEN_GODS_MAP[stem_at(day_master_index).index][stem_at(target_stem_index).index]


def life_stage(stem_index: int, branch_index: int) -> str:
    """One of the twelve life stages for a stem placed on a branch."""
    return LIFE_STAGES_TABLE[stem_at(stem_index).index][branch_at(branch_index).index]


def hidden_stems_for(branch: str, day_master_index: int) -> tuple:
    """Hidden stems of a branch, primary first, each tagged with its ten god."""
    branch_of(branch)
    result = []
    for symbol, kind, power in HIDDEN_STEMS_DATA[branch]:
        hidden = stem_of(symbol)
        result.append(HiddenStem(
            stem=symbol,
            element=hidden.element,
            kind=kind,
            power=power,
            ten_god=ten_god(day_master_index, hidden.index),
        ))
    return tuple(result)


# ============================================================
# BUILDERS
# ============================================================

def build_pair(stem: str, branch: str, day_master_index: int) -> SexagenaryPair:
    """
    Build a fully derived sexagenary pair.

    Args:
        stem: heavenly stem symbol, e.g. "甲"
        branch: earthly branch symbol, e.g. "子"
        day_master_index: index (0-9) of the chart's day stem

    Raises:
        InvalidDomainValue: unknown symbol, bad index, or a stem/branch
            pair of mixed polarity (not part of the sixty-term cycle)
    """
    s = stem_of(stem)
    b = branch_of(branch)
    dm = stem_at(day_master_index)
    cycle_index = sexagenary_index(s.index, b.index)
    return SexagenaryPair(
        stem=s.chinese,
        branch=b.chinese,
        stem_element=s.element,
        branch_element=b.element,
        hidden_stems=hidden_stems_for(b.chinese, dm.index),
        na_yin=NA_YIN_CYCLE[cycle_index // 2],
        ten_god=ten_god(dm.index, s.index),
        life_stage=life_stage(dm.index, b.index),
        self_life_stage=life_stage(s.index, b.index),
    )


def pair_from_indices(stem_index: int, branch_index: int, day_master_index: int) -> SexagenaryPair:
    """Build a pair from cycle indices, wrapping them into range first."""
    return build_pair(
        stem_at(stem_index % 10).chinese,
        branch_at(branch_index % 12).chinese,
        day_master_index,
    )


def step_pair(pair: SexagenaryPair, steps: int, day_master_index: int) -> SexagenaryPair:
    """Move a pair along the sexagenary cycle; negative steps move backward."""
    return pair_from_indices(pair.stem_index + steps, pair.branch_index + steps, day_master_index)


def parse_ganzhi(text: str, day_master_index: int) -> SexagenaryPair:
    """Build a pair from a two-character string such as "甲子"."""
    if not isinstance(text, str) or len(text) != 2:
        raise InvalidDomainValue("ganzhi", text, "expected one stem followed by one branch")
    return build_pair(text[0], text[1], day_master_index)


def require_finite(value, kind: str = "number") -> float:
    """Reject NaN and infinities before they reach scoring arithmetic."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidDomainValue(kind, value, "expected a finite number")
    return float(value)
