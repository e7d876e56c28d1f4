"""Configuration management for FamliCal."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.calendar import GregorianCalendar
from .core.summary import SEPARATOR

logger = logging.getLogger(__name__)

FAMLICAL_HOME = Path(os.environ.get("FAMLICAL_HOME", Path.home() / "famlical"))
CONFIG_FILE = FAMLICAL_HOME / "config" / "famlical.conf"


@dataclass
class Config:
    """FamliCal recurrence settings."""

    # IANA zone anchors are read in; empty means dates are used as given
    timezone: str = ""
    summary_separator: str = SEPARATOR

    def calendar(self) -> GregorianCalendar:
        return GregorianCalendar(self.timezone or None)


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from famlical.conf."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "timezone":
                try:
                    ZoneInfo(value)
                    config.timezone = value
                except (ZoneInfoNotFoundError, ValueError) as e:
                    logger.warning(f"Unknown TIMEZONE {value!r}, using local dates: {e}")
            case "summary_separator":
                config.summary_separator = value

    return config
