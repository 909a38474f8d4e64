"""
Chart creation entry point.
Turns a birth profile into a FourPillarsChart.

Timezone is auto-detected from birth coordinates and date (handles historical
DST) when both latitude and longitude are given; BaZi always works from the
zone's standard time.

Usage from Python:
    from fourpillars.create_chart import BirthProfile, build_chart
    chart = build_chart(BirthProfile(
        name="Alex", birth_date="1990-03-15", birth_time="10:30", gender="male",
        solar_time=True, longitude=116.4, latitude=39.9,
    ))
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from timezonefinder import TimezoneFinder

from fourpillars.astro_calendar import SwissEphemerisCalendar, true_solar_time
from fourpillars.bazi import FourPillarsChart, Gender, assemble_chart
from fourpillars.config import Settings, load_settings
from fourpillars.errors import InvalidDomainValue

logger = logging.getLogger("fourpillars.create_chart")

_tf = TimezoneFinder()


@dataclass(frozen=True)
class BirthProfile:
    name: str
    birth_date: Union[date, str]  # date or "YYYY-MM-DD"
    birth_time: str  # "HH:MM", local clock time
    gender: str
    solar_time: bool = False
    longitude: Optional[float] = None  # east positive
    latitude: Optional[float] = None  # north positive
    city: Optional[str] = None


def utc_offset_for(latitude, longitude, birth_date, birth_time):
    """
    Determine UTC offset from coordinates and date.
    Detects historical DST (e.g., China 1986-1991).

    Returns:
        (clock_offset, standard_offset, timezone_name, dst_detected)

        clock_offset:    what the clock was actually set to (includes DST if active)
        standard_offset: the zone's standard (non-DST) offset
        dst_detected:    True if DST was active at birth time
    """
    tz_name = _tf.timezone_at(lat=latitude, lng=longitude)
    if tz_name is None:
        raise InvalidDomainValue("coordinates", (latitude, longitude), "no timezone found")

    hour, minute = parse_clock(birth_time)
    local_dt = datetime(birth_date.year, birth_date.month, birth_date.day,
                        hour, minute, tzinfo=ZoneInfo(tz_name))
    clock_offset = local_dt.utcoffset().total_seconds() / 3600

    dst_seconds = local_dt.dst()
    dst_detected = dst_seconds is not None and dst_seconds.total_seconds() > 0

    if dst_detected:
        standard_offset = clock_offset - (dst_seconds.total_seconds() / 3600)
    else:
        standard_offset = clock_offset

    return clock_offset, standard_offset, tz_name, dst_detected


def parse_clock(birth_time: str) -> tuple:
    try:
        hour, minute = map(int, birth_time.split(":"))
    except (AttributeError, ValueError):
        raise InvalidDomainValue("birth time", birth_time, "expected HH:MM") from None
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise InvalidDomainValue("birth time", birth_time, "expected HH:MM")
    return hour, minute


def parse_date(birth_date) -> date:
    if isinstance(birth_date, datetime):
        return birth_date.date()
    if isinstance(birth_date, date):
        return birth_date
    try:
        return datetime.strptime(birth_date, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise InvalidDomainValue("birth date", birth_date, "expected YYYY-MM-DD") from None


def build_chart(profile: BirthProfile, calendar=None,
                settings: Optional[Settings] = None) -> FourPillarsChart:
    """
    Compute the four-pillar chart for a birth profile.

    Args:
        profile: BirthProfile
        calendar: CalendarService; defaults to a SwissEphemerisCalendar on
                  the zone's standard UTC offset
        settings: overrides the environment settings

    Returns:
        FourPillarsChart with the original and corrected clock times recorded
    """
    settings = settings or load_settings()
    gender = Gender.parse(profile.gender)
    birth_date = parse_date(profile.birth_date)
    hour, minute = parse_clock(profile.birth_time)
    clock = datetime(birth_date.year, birth_date.month, birth_date.day, hour, minute)

    utc_offset = settings.utc_offset
    standard_meridian = settings.standard_meridian
    moment = clock

    if profile.latitude is not None and profile.longitude is not None:
        clock_offset, standard_offset, tz_name, dst_detected = utc_offset_for(
            profile.latitude, profile.longitude, birth_date, profile.birth_time
        )
        utc_offset = standard_offset
        standard_meridian = standard_offset * 15
        if dst_detected:
            # BaZi works on standard time: strip the DST hour first
            moment = clock - timedelta(hours=clock_offset - standard_offset)
        logger.info("timezone %s, standard offset %s, dst %s", tz_name, standard_offset, dst_detected)

    if profile.solar_time and profile.longitude is not None:
        moment = true_solar_time(moment, profile.longitude, standard_meridian)

    if calendar is None:
        calendar = SwissEphemerisCalendar(
            utc_offset=utc_offset,
            ephe_path=settings.ephe_path,
            decade_count=settings.decade_count,
        )

    reading = calendar.read(moment, gender)
    return assemble_chart(
        reading,
        gender,
        birth_year=birth_date.year,
        original_time=clock.strftime("%Y-%m-%d %H:%M"),
        solar_time=moment.strftime("%Y-%m-%d %H:%M"),
    )
