"""Environment-driven settings and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s - %(message)s"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger("fourpillars.config").warning(
            "Ignoring non-numeric %s=%r, using %s", name, raw, default
        )
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger("fourpillars.config").warning(
            "Ignoring non-integer %s=%r, using %s", name, raw, default
        )
        return default


@dataclass(frozen=True)
class Settings:
    ephe_path: Optional[str]
    utc_offset: float
    standard_meridian: float
    decade_count: int
    log_level: str


def load_settings() -> Settings:
    """Read settings from the process environment."""
    ephe_path = os.getenv("SWE_EPHE_PATH") or None
    return Settings(
        ephe_path=ephe_path,
        utc_offset=_float_env("FOURPILLARS_UTC_OFFSET", 8.0),
        standard_meridian=_float_env("FOURPILLARS_STANDARD_MERIDIAN", 120.0),
        decade_count=_int_env("FOURPILLARS_DECADES", 9),
        log_level=os.getenv("FOURPILLARS_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Install the root handler. Only entry points call this."""
    chosen = (level or load_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, chosen, logging.INFO), format=LOG_FORMAT)
