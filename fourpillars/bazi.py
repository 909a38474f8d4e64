"""
BaZi (Four Pillars of Destiny) chart assembly.

Handles:
- Turning the calendar service's eight characters into four Pillars
- Auxiliary stars and void-branch flags per pillar, plus star combinations
- Five-element occurrence counts
- Wiring the balance engine, pattern classifier and luck sequences
  into one read-only FourPillarsChart

Design principle: This module COMPUTES and FLAGS. It does not interpret.
Text assembly lives in interpret.py.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fourpillars.balance import BalanceAnalysis, analyze_balance, god_strength
from fourpillars.errors import InvalidDomainValue
from fourpillars.ganzhi import SexagenaryPair, parse_ganzhi
from fourpillars.interactions import find_branch_interactions
from fourpillars.luck import childhood_steps, decade_pillars, is_forward
from fourpillars.pattern import PatternAnalysis, classify_pattern
from fourpillars.stars import StarContext, star_interactions, stars_for, void_branches
from fourpillars.tables import POSITION_CHINESE, POSITIONS, Element, stem_of

logger = logging.getLogger("fourpillars.bazi")


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value) -> "Gender":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidDomainValue("gender", value, "expected 'male' or 'female'") from None


# ============================================================
# CHART STRUCTURES
# ============================================================

@dataclass(frozen=True)
class Pillar:
    position: str  # "year", "month", "day", "hour"
    pair: SexagenaryPair
    void: bool = False
    stars: tuple = ()

    @property
    def name(self) -> str:
        return POSITION_CHINESE[self.position]

    def __str__(self):
        return f"{self.name} {self.pair.text}"

    def to_dict(self):
        return {
            "position": self.position,
            "name": self.name,
            "ganzhi": self.pair.to_dict(),
            "void": self.void,
            "stars": list(self.stars),
        }


@dataclass(frozen=True)
class FourPillarsChart:
    gender: Gender
    day_master: str
    birth_year: int
    pillars: dict
    element_counts: dict
    life_palace: str
    body_palace: str
    fetal_origin: str
    balance: BalanceAnalysis
    pattern: PatternAnalysis
    luck_pillars: tuple
    childhood_luck: tuple
    start_text: str
    god_strength: tuple = ()
    branch_interactions: tuple = ()
    star_interactions: tuple = ()
    original_time: Optional[str] = None
    solar_time: Optional[str] = None

    @property
    def day_master_index(self) -> int:
        return stem_of(self.day_master).index

    @property
    def day_master_element(self) -> Element:
        return stem_of(self.day_master).element

    @property
    def forward(self) -> bool:
        return is_forward(self.pillars["year"].pair.stem_index, self.gender is Gender.MALE)

    def pillar_list(self) -> list[Pillar]:
        return [self.pillars[p] for p in POSITIONS]

    def all_stars(self) -> list[str]:
        return [s for p in self.pillar_list() for s in p.stars]

    def to_dict(self):
        return {
            "gender": self.gender.value,
            "day_master": {
                "stem": self.day_master,
                "element": self.day_master_element.chinese,
            },
            "pillars": {p: self.pillars[p].to_dict() for p in POSITIONS},
            "element_counts": {e.chinese: n for e, n in self.element_counts.items()},
            "life_palace": self.life_palace,
            "body_palace": self.body_palace,
            "fetal_origin": self.fetal_origin,
            "balance": self.balance.to_dict(),
            "pattern": self.pattern.to_dict(),
            "god_strength": [g.to_dict() for g in self.god_strength],
            "branch_interactions": list(self.branch_interactions),
            "star_interactions": [s.to_dict() for s in self.star_interactions],
            "start_text": self.start_text,
            "luck_pillars": [lp.to_dict() for lp in self.luck_pillars],
            "childhood_luck": [step.to_dict() for step in self.childhood_luck],
            "original_time": self.original_time,
            "solar_time": self.solar_time,
        }


# ============================================================
# ASSEMBLY
# ============================================================

def element_counts(pillars: dict) -> dict:
    """Tally of the eight stem/branch elements; always sums to 8."""
    counts = {e: 0 for e in Element}
    for pillar in pillars.values():
        counts[pillar.pair.stem_element] += 1
        counts[pillar.pair.branch_element] += 1
    return counts


def assemble_pillars(year: str, month: str, day: str, hour: str) -> dict:
    """
    Build the four pillars from two-character stem+branch strings.

    Stars and void flags are attached here; the result maps
    "year"/"month"/"day"/"hour" to Pillar.
    """
    if not isinstance(day, str) or len(day) != 2:
        raise InvalidDomainValue("ganzhi", day, "expected one stem followed by one branch")
    day_master_index = stem_of(day[0]).index
    pairs = dict(zip(POSITIONS, (parse_ganzhi(g, day_master_index) for g in (year, month, day, hour))))

    y, d = pairs["year"], pairs["day"]
    voids = void_branches(d.stem, d.branch, y.stem, y.branch)

    pillars = {}
    for position, pair in pairs.items():
        ctx = StarContext(
            position=position,
            stem=pair.stem,
            branch=pair.branch,
            day_stem=d.stem,
            day_branch=d.branch,
            year_stem=y.stem,
            year_branch=y.branch,
            month_branch=pairs["month"].branch,
        )
        pillars[position] = Pillar(
            position=position,
            pair=pair,
            void=pair.branch in voids,
            stars=tuple(stars_for(ctx)),
        )
    return pillars


def assemble_chart(reading, gender, birth_year: int,
                   original_time: Optional[str] = None,
                   solar_time: Optional[str] = None) -> FourPillarsChart:
    """
    Turn a calendar reading into a complete chart.

    Args:
        reading: CalendarReading (year/month/day/hour strings, decades,
                 start_text, life_palace, body_palace, fetal_origin)
        gender: Gender or "male"/"female"
        birth_year: Gregorian year of birth, used for childhood step years
        original_time: clock time as entered, recorded on the chart
        solar_time: corrected time actually used, recorded on the chart

    Returns:
        FourPillarsChart
    """
    gender = Gender.parse(gender)
    pillars = assemble_pillars(reading.year, reading.month, reading.day, reading.hour)
    day_master = pillars["day"].pair.stem
    dm_index = stem_of(day_master).index
    counts = element_counts(pillars)

    balance = analyze_balance(day_master, pillars, counts)
    pattern = classify_pattern(day_master, pillars, balance, counts)

    luck = decade_pillars(reading.decades, dm_index)
    forward = is_forward(pillars["year"].pair.stem_index, gender is Gender.MALE)
    childhood = []
    if luck:
        childhood = childhood_steps(pillars["hour"].pair, forward, birth_year, luck[0].start_age, dm_index)

    interactions = find_branch_interactions(
        [pillars[p].pair.branch for p in POSITIONS], list(POSITIONS)
    )
    combos = star_interactions(s for p in POSITIONS for s in pillars[p].stars)

    logger.info(
        "chart %s %s %s %s (%s): %s %s, pattern %s",
        reading.year, reading.month, reading.day, reading.hour, gender.value,
        balance.level.value, balance.score, pattern.name,
    )

    return FourPillarsChart(
        gender=gender,
        day_master=day_master,
        birth_year=birth_year,
        pillars=pillars,
        element_counts=counts,
        life_palace=reading.life_palace,
        body_palace=reading.body_palace,
        fetal_origin=reading.fetal_origin,
        balance=balance,
        pattern=pattern,
        luck_pillars=tuple(luck),
        childhood_luck=tuple(childhood),
        start_text=reading.start_text,
        god_strength=tuple(god_strength(day_master, pillars)),
        branch_interactions=tuple(interactions),
        star_interactions=tuple(combos),
        original_time=original_time,
        solar_time=solar_time,
    )
