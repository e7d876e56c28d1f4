"""iCalendar RRULE text codec for external rules."""

import logging
import re
from datetime import date, datetime, timezone

from dateutil.parser import isoparse

from famlical.core.calendar import Weekday
from famlical.core.rule import ExternalRule, RuleDay, RuleEnd

logger = logging.getLogger(__name__)

_BYDAY_PATTERN = re.compile(r"^([+-]?\d{1,2})?([A-Z]{2})$")


class RRuleParseError(ValueError):
    """Raised when RRULE text cannot be read."""

    pass


def _format_day(day: RuleDay) -> str:
    code = Weekday(day.day_of_week).code
    return f"{day.week_number}{code}" if day.week_number else code


def _format_until(value: date) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        return value.strftime("%Y%m%dT%H%M%S")
    return value.strftime("%Y%m%d")


def format_rrule(rule: ExternalRule) -> str:
    """
    Serialize a rule as RRULE text (without the "RRULE:" prefix).

    RRULE allows at most one of UNTIL and COUNT; an end date wins.
    """
    parts = [f"FREQ={rule.frequency.upper()}"]
    if rule.interval != 1:
        parts.append(f"INTERVAL={rule.interval}")
    if rule.days_of_week:
        parts.append("BYDAY=" + ",".join(_format_day(d) for d in rule.days_of_week))
    if rule.days_of_month:
        parts.append("BYMONTHDAY=" + ",".join(str(d) for d in rule.days_of_month))
    if rule.end is not None:
        if rule.end.end_date is not None:
            parts.append(f"UNTIL={_format_until(rule.end.end_date)}")
        elif rule.end.occurrence_count > 0:
            parts.append(f"COUNT={rule.end.occurrence_count}")
    return ";".join(parts)


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise RRuleParseError(f"{name} must be an integer, got {value!r}") from None


def _parse_day(value: str) -> RuleDay:
    found = _BYDAY_PATTERN.match(value.upper())
    if not found:
        raise RRuleParseError(f"Invalid BYDAY entry: {value!r}")
    week_number, code = found.groups()
    try:
        weekday = Weekday.from_code(code)
    except ValueError as e:
        raise RRuleParseError(str(e)) from None
    return RuleDay(int(weekday), int(week_number) if week_number else 0)


def _parse_until(value: str) -> date:
    # RFC 5545 only allows the basic form (20250301, 20250301T120000Z)
    if "-" in value or ":" in value or len(value.partition("T")[0]) != 8:
        raise RRuleParseError(f"Invalid UNTIL value: {value!r}")
    try:
        parsed = isoparse(value)
    except ValueError:
        raise RRuleParseError(f"Invalid UNTIL value: {value!r}") from None
    if "T" not in value:
        return parsed.date()
    if parsed.tzinfo is not None:
        return parsed.astimezone(timezone.utc)
    return parsed


def _split(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def parse_rrule(text: str) -> ExternalRule:
    """
    Read RRULE text such as ``FREQ=WEEKLY;INTERVAL=2;BYDAY=MO,WE;COUNT=10``.

    A leading "RRULE:" is accepted and names are case-insensitive. Parts
    this engine does not model (BYMONTH, WKST, ...) are skipped. The
    frequency is not checked here; unsupported ones are refused on import.

    Raises:
        RRuleParseError: if FREQ is missing or a value is malformed
    """
    text = text.strip()
    if text.upper().startswith("RRULE:"):
        text = text[len("RRULE:"):]

    frequency = ""
    interval = 1
    days_of_week: tuple[RuleDay, ...] = ()
    days_of_month: tuple[int, ...] = ()
    end_date = None
    count = 0

    for chunk in text.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        if "=" not in chunk:
            raise RRuleParseError(f"Malformed rule part: {chunk!r}")

        key, _, value = chunk.partition("=")
        key = key.strip().upper()
        value = value.strip()

        match key:
            case "FREQ":
                frequency = value.upper()
            case "INTERVAL":
                interval = _parse_int(value, "INTERVAL")
            case "BYDAY":
                days_of_week = tuple(_parse_day(v) for v in _split(value))
            case "BYMONTHDAY":
                days_of_month = tuple(_parse_int(v, "BYMONTHDAY") for v in _split(value))
            case "UNTIL":
                end_date = _parse_until(value)
            case "COUNT":
                count = _parse_int(value, "COUNT")
            case _:
                logger.debug(f"Ignoring unsupported RRULE part {key}")

    if not frequency:
        raise RRuleParseError("Rule has no FREQ")

    end = None
    if end_date is not None or count:
        end = RuleEnd(end_date=end_date, occurrence_count=count)

    return ExternalRule(
        frequency=frequency,
        interval=interval,
        days_of_week=days_of_week,
        days_of_month=days_of_month,
        end=end,
    )
