"""Calendar provider interface."""

from datetime import date
from typing import Protocol


class CalendarProvider(Protocol):
    """Interface for the calendar arithmetic the recurrence engine needs."""

    def local_date(self, value: date) -> date:
        """Calendar date of a date or datetime under this calendar."""
        ...

    def weekday(self, value: date) -> int:
        """Weekday number, 1 (Sunday) through 7 (Saturday)."""
        ...

    def day_of_month(self, value: date) -> int:
        ...

    def add_days(self, value: date, days: int) -> date:
        ...

    def add_months(self, value: date, months: int) -> date:
        ...

    def same_month(self, a: date, b: date) -> bool:
        ...
