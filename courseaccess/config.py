"""
Runtime configuration.

Values come from the environment, optionally seeded from a `.env` file in the
current working directory. Getters are functions instead of module constants
so tests can patch os.environ and see the change immediately.
"""

from __future__ import annotations

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from courseaccess.errors import ConfigurationError

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent

DEFAULT_TIMEZONE = "UTC"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def timezone_name() -> str:
    return os.getenv("COURSEACCESS_TIMEZONE", DEFAULT_TIMEZONE).strip() or DEFAULT_TIMEZONE


def default_timezone() -> ZoneInfo:
    """
    Zone used to localize naive datetimes and date-only inputs.

    Raises ConfigurationError if COURSEACCESS_TIMEZONE is not a known IANA zone.
    """
    name = timezone_name()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone in COURSEACCESS_TIMEZONE: {name!r}") from exc


def default_snapshot_path() -> Path:
    """
    Snapshot file read by the CLI when --snapshot is not given.
    """
    raw = os.getenv("COURSEACCESS_SNAPSHOT", "").strip()
    if raw:
        return Path(raw)
    return PACKAGE_DIR / "data" / "snapshot.json"


def log_level() -> str:
    """
    Level name for the CLI root logger.

    Raises ConfigurationError if COURSEACCESS_LOG_LEVEL is not one of LOG_LEVELS.
    """
    name = os.getenv("COURSEACCESS_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    if name not in LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level in COURSEACCESS_LOG_LEVEL: {name!r}")
    return name
