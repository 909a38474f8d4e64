"""
CLI wrapper for build_chart() and annual_fortune().

Usage:
    python3 -m fourpillars.run --birth-date YYYY-MM-DD --birth-time HH:MM --gender GENDER \
        [--name NAME] [--longitude LON] [--latitude LAT] [--solar-time] \
        [--year YEAR ...] [--utc-offset OFFSET] [--log-level LEVEL] [--output PATH]
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fourpillars.annual import annual_activations, annual_fortune
from fourpillars.astro_calendar import SwissEphemerisCalendar
from fourpillars.config import configure_logging, load_settings
from fourpillars.create_chart import BirthProfile, build_chart
from fourpillars.errors import FourPillarsError
from fourpillars.interpret import chart_summary

logger = logging.getLogger("fourpillars.run")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a four-pillar chart and annual fortunes.")
    parser.add_argument("--name", default="")
    parser.add_argument("--birth-date", required=True, dest="birth_date")
    parser.add_argument("--birth-time", required=True, dest="birth_time")
    parser.add_argument("--gender", required=True, choices=["male", "female"])
    parser.add_argument("--longitude", type=float, default=None)
    parser.add_argument("--latitude", type=float, default=None)
    parser.add_argument("--city", default=None)
    parser.add_argument("--solar-time", dest="solar_time", action="store_true")
    parser.add_argument("--year", dest="years", type=int, action="append", default=[])
    parser.add_argument("--utc-offset", dest="utc_offset", type=float, default=None)
    parser.add_argument("--log-level", dest="log_level", default=None)
    parser.add_argument("--output", default=None, help="also write the JSON result to this file")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    settings = load_settings()
    if args.utc_offset is not None:
        settings = replace(settings, utc_offset=args.utc_offset,
                           standard_meridian=args.utc_offset * 15)

    profile = BirthProfile(
        name=args.name,
        birth_date=args.birth_date,
        birth_time=args.birth_time,
        gender=args.gender,
        solar_time=args.solar_time,
        longitude=args.longitude,
        latitude=args.latitude if args.utc_offset is None else None,
        city=args.city,
    )

    calendar = SwissEphemerisCalendar(
        utc_offset=settings.utc_offset,
        ephe_path=settings.ephe_path,
        decade_count=settings.decade_count,
    )

    try:
        if profile.latitude is not None and profile.longitude is not None:
            # timezone is detected from the coordinates inside build_chart
            chart = build_chart(profile, settings=settings)
        else:
            chart = build_chart(profile, calendar=calendar, settings=settings)
        annual = []
        for year in args.years:
            fortune = annual_fortune(chart, year, calendar)
            entry = fortune.to_dict()
            entry["activations"] = [a.to_dict() for a in annual_activations(chart, fortune.pair)]
            annual.append(entry)
    except FourPillarsError as exc:
        logger.error("%s", exc)
        return 1

    result = {
        "name": args.name,
        "chart": chart.to_dict(),
        "summary": chart_summary(chart),
        "annual": annual,
    }
    text = json.dumps(result, indent=2, ensure_ascii=False)
    print(text)

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        logger.info("wrote %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
