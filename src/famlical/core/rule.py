"""Conversion between recurrence configurations and external calendar rules."""

import logging
from dataclasses import dataclass
from datetime import date

from .calendar import Weekday, weekday_of
from .recurrence import (
    MAX_DAY,
    MAX_INTERVAL,
    MAX_OCCURRENCES,
    MIN_DAY,
    MIN_INTERVAL,
    ORDINALS,
    AfterOccurrences,
    DayOfMonth,
    EndDate,
    Frequency,
    Never,
    RecurrenceConfiguration,
    RecurrenceEnd,
    WeekdayOrdinal,
    clamp,
    default_monthly_pattern,
)

logger = logging.getLogger(__name__)

# iCalendar FREQ names understood by the model
_FREQUENCIES = {
    "DAILY": Frequency.DAILY,
    "WEEKLY": Frequency.WEEKLY,
    "MONTHLY": Frequency.MONTHLY,
    "YEARLY": Frequency.YEARLY,
}
_FREQUENCY_NAMES = {v: k for k, v in _FREQUENCIES.items()}


@dataclass(frozen=True)
class RuleDay:
    """A by-weekday entry: day 1 (Sunday) to 7, optional week number (0 = every)."""

    day_of_week: int
    week_number: int = 0


@dataclass(frozen=True)
class RuleEnd:
    """Either an end date or a positive occurrence count."""

    end_date: date | None = None
    occurrence_count: int = 0


@dataclass(frozen=True)
class ExternalRule:
    """Recurrence rule in the shape the calendar store reads and writes."""

    frequency: str
    interval: int = 1
    days_of_week: tuple[RuleDay, ...] = ()
    days_of_month: tuple[int, ...] = ()
    end: RuleEnd | None = None


def _export_end(end: RecurrenceEnd) -> RuleEnd | None:
    match end:
        case EndDate(end_date=end_date):
            return RuleEnd(end_date=end_date)
        case AfterOccurrences(count=count):
            return RuleEnd(occurrence_count=count)
        case _:
            return None


def to_external_rule(config: RecurrenceConfiguration, anchor: date | None = None) -> ExternalRule | None:
    """
    Export a configuration for storage.

    Returns None when repeating is disabled. The anchor is accepted for
    symmetry with ``from_external_rule``; everything exported is already
    in the configuration.
    """
    if not config.is_enabled:
        return None

    frequency = _FREQUENCY_NAMES[config.frequency]
    interval = max(config.interval, MIN_INTERVAL)
    end = _export_end(config.end)

    match config.frequency:
        case Frequency.WEEKLY:
            days = tuple(RuleDay(int(w)) for w in sorted(config.selected_weekdays))
            return ExternalRule(frequency, interval, days_of_week=days, end=end)
        case Frequency.MONTHLY:
            match config.monthly_pattern:
                case DayOfMonth(day=day):
                    return ExternalRule(frequency, interval, days_of_month=(day,), end=end)
                case WeekdayOrdinal(ordinal=ordinal, weekday=weekday):
                    day = RuleDay(int(weekday), week_number=ordinal)
                    return ExternalRule(frequency, interval, days_of_week=(day,), end=end)
        case _:
            return ExternalRule(frequency, interval, end=end)


def _import_weekdays(rule: ExternalRule) -> set[Weekday]:
    weekdays = set()
    for entry in rule.days_of_week:
        try:
            weekdays.add(Weekday(entry.day_of_week))
        except ValueError:
            logger.debug(f"Ignoring weekday number {entry.day_of_week}")
    return weekdays


def _import_monthly_pattern(rule: ExternalRule, anchor: date, calendar=None):
    if rule.days_of_month:
        return DayOfMonth(clamp(abs(rule.days_of_month[0]), MIN_DAY, MAX_DAY))

    if rule.days_of_week:
        entry = rule.days_of_week[0]
        if entry.week_number != 0:
            if entry.week_number in ORDINALS and 1 <= entry.day_of_week <= 7:
                return WeekdayOrdinal(entry.week_number, Weekday(entry.day_of_week))
            logger.debug(
                f"No usable ordinal in {entry}, using anchor day of month"
            )

    return default_monthly_pattern(anchor, calendar)


def _import_end(end: RuleEnd | None) -> RecurrenceEnd:
    if end is None:
        return Never()
    if end.end_date is not None:
        return EndDate(end.end_date)
    if end.occurrence_count > 0:
        return AfterOccurrences(min(end.occurrence_count, MAX_OCCURRENCES))
    return Never()


def from_external_rule(
    rule: ExternalRule,
    anchor: date,
    calendar=None,
) -> RecurrenceConfiguration | None:
    """
    Import a stored rule.

    Partial or legacy rules are filled in from the anchor. The only refusal
    is a frequency the model has no equivalent for, which returns None
    rather than guessing.
    """
    frequency = _FREQUENCIES.get(str(rule.frequency).upper())
    if frequency is None:
        logger.info(f"Cannot import rule with unsupported frequency {rule.frequency!r}")
        return None

    weekdays = _import_weekdays(rule) or {weekday_of(anchor, calendar)}

    return RecurrenceConfiguration(
        is_enabled=True,
        frequency=frequency,
        interval=clamp(rule.interval, MIN_INTERVAL, MAX_INTERVAL),
        selected_weekdays=weekdays,
        monthly_pattern=_import_monthly_pattern(rule, anchor, calendar),
        end=_import_end(rule.end),
    )
