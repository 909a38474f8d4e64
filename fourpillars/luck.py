"""
Luck sequences: decade pillars (大运) and childhood sub-luck (小运).

Decade pillars come from the calendar service's decade entries. Childhood
steps walk the hour pillar one position per age-year until the first
decade begins.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fourpillars.ganzhi import SexagenaryPair, parse_ganzhi, step_pair

logger = logging.getLogger("fourpillars.luck")


@dataclass(frozen=True)
class LuckPillar:
    index: int
    start_age: int
    start_year: int
    end_year: int
    pair: SexagenaryPair

    def covers(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    def to_dict(self):
        return {
            "index": self.index,
            "start_age": self.start_age,
            "start_year": self.start_year,
            "end_year": self.end_year,
            "ganzhi": self.pair.to_dict(),
        }


@dataclass(frozen=True)
class ChildhoodLuckStep:
    age: int
    year: int
    pair: SexagenaryPair

    def to_dict(self):
        return {"age": self.age, "year": self.year, "ganzhi": self.pair.to_dict()}


def is_forward(year_stem_index: int, male: bool) -> bool:
    """Yang year + male, or yin year + female, counts forward."""
    return (year_stem_index % 2 == 0) == male


def decade_pillars(decades: list, day_master_index: int) -> list[LuckPillar]:
    """
    Build one LuckPillar per calendar-service decade entry.

    Entry 0 is the remainder before luck starts and is dropped. Each entry
    needs start_age, start_year, end_year and a two-character ganzhi.
    """
    pillars = []
    for index, entry in enumerate(decades[1:], start=1):
        pillars.append(LuckPillar(
            index=index,
            start_age=entry.start_age,
            start_year=entry.start_year,
            end_year=entry.end_year,
            pair=parse_ganzhi(entry.ganzhi, day_master_index),
        ))

    for earlier, later in zip(pillars, pillars[1:]):
        if earlier.end_year + 1 != later.start_year:
            logger.warning(
                "decade %d ends %d but decade %d starts %d",
                earlier.index, earlier.end_year, later.index, later.start_year,
            )
    return pillars


def childhood_steps(hour_pair: SexagenaryPair, forward: bool, birth_year: int,
                    first_start_age: int, day_master_index: int) -> list[ChildhoodLuckStep]:
    """
    Childhood sub-luck from age 1 up to (not including) the first decade.

    Args:
        hour_pair: the natal hour pillar, the starting point of the walk
        forward: direction computed once per chart, see is_forward()
        birth_year: calendar year of birth; age n falls in birth_year + n - 1
        first_start_age: start age of the first decade pillar
        day_master_index: index (0-9) of the day stem
    """
    direction = 1 if forward else -1
    steps = []
    for age in range(1, first_start_age):
        steps.append(ChildhoodLuckStep(
            age=age,
            year=birth_year + age - 1,
            pair=step_pair(hour_pair, age * direction, day_master_index),
        ))
    return steps


def active_decade(luck_pillars: list, year: int) -> Optional[LuckPillar]:
    """The decade whose year window contains the given year, if any."""
    for pillar in luck_pillars:
        if pillar.covers(year):
            return pillar
    return None
