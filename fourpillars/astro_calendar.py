"""
Calendar service: Gregorian moments to sexagenary pillars.

Handles solar-term (节) lookups, the year/month/day/hour pillars, the
decade-start computation, true solar time correction, and the three
reference points (命宫, 身宫, 胎元).

The chart engine only depends on the CalendarService protocol; the
Swiss Ephemeris adapter below is the production implementation.
"""

import calendar
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Protocol

import swisseph as swe

from fourpillars.config import load_settings
from fourpillars.errors import CalendarServiceError
from fourpillars.ganzhi import require_finite
from fourpillars.tables import EARTHLY_BRANCHES, HEAVENLY_STEMS

logger = logging.getLogger("fourpillars.astro_calendar")


# ============================================================
# SERVICE INTERFACE
# ============================================================

@dataclass(frozen=True)
class DecadeEntry:
    start_age: int
    start_year: int
    end_year: int
    ganzhi: str  # empty for entry 0, the span before luck starts


@dataclass(frozen=True)
class CalendarReading:
    year: str
    month: str
    day: str
    hour: str
    decades: tuple
    start_text: str
    life_palace: str
    body_palace: str
    fetal_origin: str


class CalendarService(Protocol):
    def read(self, moment: datetime, gender) -> CalendarReading:
        ...

    def year_ganzhi(self, year: int, probe: date) -> str:
        ...


def ganzhi_text(stem_index: int, branch_index: int) -> str:
    return HEAVENLY_STEMS[stem_index % 10].chinese + EARTHLY_BRANCHES[branch_index % 12].chinese


# ============================================================
# TRUE SOLAR TIME
# ============================================================

def lmt_correction(longitude: float, standard_meridian: float = 120.0) -> float:
    """
    Calculate Local Mean Time correction in minutes.

    China uses a single timezone based on 120°E. For locations
    significantly west of this (like Nanning at 108.37°E), the clock
    time differs from solar time.

    Args:
        longitude: birth location longitude in degrees (east positive)
        standard_meridian: timezone standard meridian (120.0 for China/CST)

    Returns:
        Correction in minutes (negative = subtract from clock time)

    Example:
        Nanning (108.37°E): correction = (108.37 - 120.0) * 4 = -46.52 min
    """
    longitude = require_finite(longitude, "longitude")
    standard_meridian = require_finite(standard_meridian, "standard meridian")
    return (longitude - standard_meridian) * 4.0


def equation_of_time(day_of_year: int) -> float:
    """Approximate equation of time in minutes for a day of the year (1-366)."""
    b = 2 * math.pi * (day_of_year - 81) / 365
    return 9.87 * math.sin(2 * b) - 7.53 * math.cos(b) - 1.5 * math.sin(b)


def true_solar_time(moment: datetime, longitude: float,
                    standard_meridian: float = 120.0) -> datetime:
    """
    Convert clock time to true solar time.

    Longitude offset plus the equation of time, both in minutes.
    """
    offset = lmt_correction(longitude, standard_meridian)
    offset += equation_of_time(moment.timetuple().tm_yday)
    return moment + timedelta(minutes=offset)


# ============================================================
# SOLAR TERM COMPUTATION
# ============================================================
#
# The 12 Jie (节) solar terms mark BaZi month boundaries.
# Each Jie is defined by the Sun reaching a specific ecliptic longitude.
# Swiss Ephemeris swe.solcross_ut() finds the exact crossing moment.

# (longitude, term_name, branch_index)
JIE_DEFINITIONS = [
    (285, "小寒", 1),
    (315, "立春", 2),
    (345, "惊蛰", 3),
    (15, "清明", 4),
    (45, "立夏", 5),
    (75, "芒种", 6),
    (105, "小暑", 7),
    (135, "立秋", 8),
    (165, "白露", 9),
    (195, "寒露", 10),
    (225, "立冬", 11),
    (255, "大雪", 0),
]

LI_CHUN_LONGITUDE = 315.0

MINUTES_PER_LUCK_YEAR = 3 * 24 * 60
MINUTES_PER_LUCK_MONTH = 6 * 60
MINUTES_PER_LUCK_DAY = 6


def find_jie_dates(year: int) -> list[dict]:
    """
    Compute all 12 Jie solar term moments for a given Gregorian year.

    Returns:
        List of dicts with keys: term_name, branch_index, jd (UT Julian Day),
        in chronological order
    """
    results = []
    jd_year_start = swe.julday(year, 1, 1, 0)

    for lon, name, branch_idx in JIE_DEFINITIONS:
        jd_cross = swe.solcross_ut(float(lon), jd_year_start, 0)
        y, m, d, h = swe.revjul(jd_cross)
        # Only include crossings that fall within this Gregorian year
        if y == year:
            results.append({
                "term_name": name,
                "branch_index": branch_idx,
                "jd": jd_cross,
            })

    results.sort(key=lambda x: x["jd"])
    return results


def find_nearest_jie(birth_jd: float, year: int, forward: bool) -> float:
    """
    Find the nearest Jie solar term JD in the given direction from birth.

    Raises:
        CalendarServiceError: no crossing found in the searched window
    """
    all_jie = []
    for y in [year - 1, year, year + 1]:
        all_jie.extend(find_jie_dates(y))
    all_jie.sort(key=lambda x: x["jd"])

    if forward:
        for jie in all_jie:
            if jie["jd"] > birth_jd:
                return jie["jd"]
    else:
        for jie in reversed(all_jie):
            if jie["jd"] < birth_jd:
                return jie["jd"]

    raise CalendarServiceError(f"Could not find {'next' if forward else 'previous'} Jie from JD {birth_jd}")


def _add_span(moment: datetime, years: int, months: int, days: int) -> datetime:
    total_months = moment.month - 1 + months
    year = moment.year + years + total_months // 12
    month = total_months % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day) + timedelta(days=days)


# ============================================================
# SWISS EPHEMERIS ADAPTER
# ============================================================

class SwissEphemerisCalendar:
    """
    CalendarService backed by pyswisseph.

    Args:
        utc_offset: hours east of UTC of the clock times handed to read()
        ephe_path: Swiss Ephemeris data directory; unset uses Moshier
        decade_count: decade entries returned, entry 0 included
    """

    def __init__(self, utc_offset: Optional[float] = None, ephe_path: Optional[str] = None,
                 decade_count: Optional[int] = None):
        settings = load_settings()
        self.utc_offset = require_finite(
            settings.utc_offset if utc_offset is None else utc_offset, "utc offset"
        )
        self.decade_count = settings.decade_count if decade_count is None else decade_count
        path = ephe_path or settings.ephe_path
        if path:
            swe.set_ephe_path(path)
        self._warned_moshier = False

    # --- low level ---------------------------------------------------

    def julian_day(self, moment: datetime) -> float:
        """UT Julian Day of a local clock time."""
        hours = moment.hour + moment.minute / 60.0 + moment.second / 3600.0 - self.utc_offset
        return swe.julday(moment.year, moment.month, moment.day, hours)

    def sun_longitude(self, jd_ut: float) -> float:
        xx, retflag = swe.calc_ut(jd_ut, swe.SUN, swe.FLG_SWIEPH)
        if retflag & swe.FLG_MOSEPH and not self._warned_moshier:
            logger.warning("Swiss Ephemeris files not found, falling back to Moshier model")
            self._warned_moshier = True
        return xx[0]

    def li_chun(self, year: int) -> float:
        return swe.solcross_ut(LI_CHUN_LONGITUDE, swe.julday(year, 1, 1, 0), 0)

    # --- pillars -----------------------------------------------------

    def year_index(self, jd_ut: float, year: int) -> int:
        """Cycle index of the year pillar; the year turns at Li Chun."""
        effective = year if jd_ut >= self.li_chun(year) else year - 1
        return (effective - 4) % 60

    def month_indices(self, jd_ut: float, year_stem: int) -> tuple:
        lon = self.sun_longitude(jd_ut)
        branch = (2 + int(((lon - LI_CHUN_LONGITUDE) % 360) // 30)) % 12
        first_stem = (year_stem % 5) * 2 + 2  # Five Tigers: stem of the 寅 month
        stem = (first_stem + (branch - 2) % 12) % 10
        return stem, branch

    @staticmethod
    def day_indices(moment: datetime) -> tuple:
        """Day pillar from the local date; 23:00 and later counts as the next day."""
        local = moment.date()
        if moment.hour >= 23:
            local += timedelta(days=1)
        jd = swe.julday(local.year, local.month, local.day, 0)
        index = (int(jd) + 50) % 60  # int(JD at 0h) is JDN - 1; JDN + 49 indexes the cycle
        return index % 10, index % 12

    @staticmethod
    def hour_indices(moment: datetime, day_stem: int) -> tuple:
        branch = ((moment.hour + 1) // 2) % 12
        stem = ((day_stem % 5) * 2 + branch) % 10  # Five Rats
        return stem, branch

    # --- luck start ----------------------------------------------------

    def luck_start(self, moment: datetime, jd_ut: float, forward: bool) -> tuple:
        """(years, months, days, start moment) until luck starts."""
        jie = find_nearest_jie(jd_ut, moment.year, forward)
        minutes = int(abs(jie - jd_ut) * 24 * 60)
        years = minutes // MINUTES_PER_LUCK_YEAR
        remainder = minutes % MINUTES_PER_LUCK_YEAR
        months = remainder // MINUTES_PER_LUCK_MONTH
        days = (remainder % MINUTES_PER_LUCK_MONTH) // MINUTES_PER_LUCK_DAY
        return years, months, days, _add_span(moment, years, months, days)

    # --- reference points --------------------------------------------

    @staticmethod
    def reference_points(year_stem: int, month_stem: int, month_branch: int, hour_branch: int) -> tuple:
        """(life palace, body palace, fetal origin) as stem+branch strings."""
        first_stem = (year_stem % 5) * 2 + 2
        m = (month_branch - 2) % 12 + 1  # 寅 = 1
        h = hour_branch + 1  # 子 = 1
        total = m + h
        life_number = 14 - total if total < 14 else 26 - total
        body_number = (total - 1) % 12 + 1

        def palace(number):
            branch = (number + 1) % 12  # 寅 = 1
            return ganzhi_text(first_stem + (branch - 2) % 12, branch)

        fetal = ganzhi_text(month_stem + 1, month_branch + 3)
        return palace(life_number), palace(body_number), fetal

    # --- CalendarService ---------------------------------------------

    def read(self, moment: datetime, gender) -> CalendarReading:
        try:
            return self._read(moment, gender)
        except swe.Error as exc:
            raise CalendarServiceError(f"ephemeris failure for {moment.isoformat()}: {exc}") from exc

    def _read(self, moment: datetime, gender) -> CalendarReading:
        jd_ut = self.julian_day(moment)

        year_idx = self.year_index(jd_ut, moment.year)
        ys, yb = year_idx % 10, year_idx % 12
        ms, mb = self.month_indices(jd_ut, ys)
        ds, db = self.day_indices(moment)
        hs, hb = self.hour_indices(moment, ds)

        male = getattr(gender, "value", gender) == "male"
        forward = (ys % 2 == 0) == male
        direction = 1 if forward else -1

        years, months, days, start = self.luck_start(moment, jd_ut, forward)
        start_year = start.year
        decades = [DecadeEntry(1, moment.year, start_year - 1, "")]
        for i in range(1, self.decade_count):
            begin = start_year + (i - 1) * 10
            decades.append(DecadeEntry(
                start_age=begin - moment.year + 1,
                start_year=begin,
                end_year=begin + 9,
                ganzhi=ganzhi_text(ms + i * direction, mb + i * direction),
            ))

        life, body, fetal = self.reference_points(ys, ms, mb, hb)
        reading = CalendarReading(
            year=ganzhi_text(ys, yb),
            month=ganzhi_text(ms, mb),
            day=ganzhi_text(ds, db),
            hour=ganzhi_text(hs, hb),
            decades=tuple(decades),
            start_text=f"出生后{years}年{months}个月{days}天起运，{start:%Y-%m-%d}交运",
            life_palace=life,
            body_palace=body,
            fetal_origin=fetal,
        )
        logger.debug("calendar %s -> %s %s %s %s", moment.isoformat(), reading.year,
                     reading.month, reading.day, reading.hour)
        return reading

    def year_ganzhi(self, year: int, probe: date) -> str:
        moment = datetime(probe.year, probe.month, probe.day, 12, 0)
        try:
            index = self.year_index(self.julian_day(moment), year)
        except swe.Error as exc:
            raise CalendarServiceError(f"ephemeris failure for year {year}: {exc}") from exc
        return ganzhi_text(index % 10, index % 12)


class FixedCalendar:
    """
    CalendarService that replays a reading obtained elsewhere.

    Useful when the eight characters come from an external lunar-calendar
    service. Year pillars not listed in `years` are derived from the
    plain Gregorian year, which is correct for any mid-year probe.
    """

    def __init__(self, reading: CalendarReading, years: Optional[dict] = None):
        self.reading = reading
        self.years = dict(years or {})

    def read(self, moment: datetime, gender) -> CalendarReading:
        return self.reading

    def year_ganzhi(self, year: int, probe: date) -> str:
        if year in self.years:
            return self.years[year]
        return ganzhi_text((year - 4) % 10, (year - 4) % 12)
