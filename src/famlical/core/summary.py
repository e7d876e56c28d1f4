"""Human-readable recurrence summaries."""

from datetime import date

from .calendar import DEFAULT_CALENDAR, Weekday
from .recurrence import (
    AfterOccurrences,
    DayOfMonth,
    EndDate,
    Frequency,
    RecurrenceConfiguration,
    RecurrenceEnd,
    WeekdayOrdinal,
)

NO_REPEAT = "Does not repeat"
SEPARATOR = " • "


def plural(count: int, word: str) -> str:
    return word if count == 1 else f"{word}s"


def format_medium_date(value: date) -> str:
    """Medium-style date such as "Oct 19, 2026"."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def describe_interval(config: RecurrenceConfiguration) -> str:
    """Interval clause, e.g. "Every week" or "Every 3 months"."""
    prefix = "Every" if config.interval == 1 else f"Every {config.interval}"
    return f"{prefix} {plural(config.interval, config.frequency.unit)}"


def describe_end(end: RecurrenceEnd) -> str:
    match end:
        case EndDate(end_date=end_date):
            return f"Ends {format_medium_date(end_date)}"
        case AfterOccurrences(count=count):
            return f"Ends after {count} {plural(count, 'time')}"
        case _:
            return "Does not end"


def _weekdays(values) -> list[Weekday]:
    # Sets built by hand may hold plain day numbers; unknown ones are skipped
    weekdays = set()
    for value in values:
        try:
            weekdays.add(Weekday(value))
        except ValueError:
            continue
    return sorted(weekdays)


def _qualifier(config: RecurrenceConfiguration, anchor: date, calendar) -> str:
    match config.frequency:
        case Frequency.WEEKLY:
            days = ", ".join(w.short_name for w in _weekdays(config.selected_weekdays))
            return f" on {days}" if days else ""
        case Frequency.MONTHLY:
            match config.monthly_pattern:
                case DayOfMonth(day=day):
                    return f" on day {day}"
                case WeekdayOrdinal() as ordinal:
                    return f" on the {ordinal.describe()}"
            return ""
        case Frequency.YEARLY:
            anchor = calendar.local_date(anchor)
            return f" on {anchor.strftime('%B')} {anchor.day}"
        case _:
            return ""


def summarize(
    config: RecurrenceConfiguration,
    anchor: date,
    calendar=None,
    separator: str = SEPARATOR,
) -> str:
    """
    Describe a configuration in one line.

    e.g. "Every 2 weeks on Mon, Wed • Ends after 10 times". Pure display
    path: fragments that cannot be rendered are left out rather than raised.
    """
    if not config.is_enabled:
        return NO_REPEAT

    calendar = calendar or DEFAULT_CALENDAR
    parts = [
        describe_interval(config) + _qualifier(config, anchor, calendar),
        describe_end(config.end),
    ]
    return separator.join(parts)
