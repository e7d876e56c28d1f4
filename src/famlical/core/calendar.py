"""Pure calendar primitives - no I/O dependencies."""

from datetime import date, datetime, timedelta
from enum import IntEnum
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from famlical.ports.calendar_provider import CalendarProvider


class Weekday(IntEnum):
    """Day of the week, numbered 1-7 starting on Sunday."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @property
    def short_name(self) -> str:
        return self.full_name[:3]

    @property
    def full_name(self) -> str:
        return self.name.capitalize()

    @property
    def code(self) -> str:
        """Two-letter iCalendar code (SU, MO, ...)."""
        return self.name[:2]

    @classmethod
    def from_code(cls, code: str) -> "Weekday":
        for weekday in cls:
            if weekday.code == code.upper():
                return weekday
        raise ValueError(f"Unknown weekday code: {code!r}")


class GregorianCalendar:
    """
    Default calendar provider backed by ``datetime``.

    Implements CalendarProvider protocol. Dates are used as-is; aware
    datetimes are first moved into ``timezone`` when one is configured.
    """

    def __init__(self, timezone: str | None = None):
        self.timezone = timezone
        self._tz = ZoneInfo(timezone) if timezone else None

    def local_date(self, value: date) -> date:
        """Calendar date of ``value`` in this calendar's timezone."""
        if isinstance(value, datetime):
            if self._tz is not None and value.tzinfo is not None:
                value = value.astimezone(self._tz)
            return value.date()
        return value

    def weekday(self, value: date) -> int:
        # date.weekday() is Monday=0; shift to Sunday=1
        return (self.local_date(value).weekday() + 1) % 7 + 1

    def day_of_month(self, value: date) -> int:
        return self.local_date(value).day

    def add_days(self, value: date, days: int) -> date:
        return self.local_date(value) + timedelta(days=days)

    def add_months(self, value: date, months: int) -> date:
        """Shift by whole months, clamping the day to the target month's length."""
        return self.local_date(value) + relativedelta(months=months)

    def same_month(self, a: date, b: date) -> bool:
        a, b = self.local_date(a), self.local_date(b)
        return (a.year, a.month) == (b.year, b.month)


DEFAULT_CALENDAR = GregorianCalendar()


def weekday_of(value: date, calendar: "CalendarProvider | None" = None) -> Weekday:
    """Weekday of a date. Total: every valid date has one."""
    calendar = calendar or DEFAULT_CALENDAR
    return Weekday(calendar.weekday(value))


def ordinal_of_week_in_month(value: date, calendar: "CalendarProvider | None" = None) -> int:
    """
    Which occurrence of its weekday a date is within its month.

    Returns 1-4, or -1 when the same weekday does not come around again
    before the month ends. A 4th Friday is -1 in a month with four Fridays
    and 4 in a month with five.
    """
    calendar = calendar or DEFAULT_CALENDAR
    next_week = calendar.add_days(value, 7)
    if not calendar.same_month(value, next_week):
        return -1
    return (calendar.day_of_month(value) - 1) // 7 + 1
