"""Recurrence model - the canonical value behind "repeat this event"."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Iterable

from .calendar import DEFAULT_CALENDAR, Weekday, ordinal_of_week_in_month, weekday_of

logger = logging.getLogger(__name__)

MIN_INTERVAL = 1
MAX_INTERVAL = 365
MIN_DAY = 1
MAX_DAY = 31
MIN_OCCURRENCES = 1
MAX_OCCURRENCES = 999

# Nth weekday of the month; -1 is the last one
ORDINALS = (1, 2, 3, 4, -1)

_ORDINAL_WORDS = {1: "First", 2: "Second", 3: "Third", 4: "Fourth", -1: "Last"}


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class Frequency(str, Enum):
    """How often a recurrence repeats."""

    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"

    @property
    def unit(self) -> str:
        """Singular unit name used in summaries ("day", "week", ...)."""
        return {
            Frequency.DAILY: "day",
            Frequency.WEEKLY: "week",
            Frequency.MONTHLY: "month",
            Frequency.YEARLY: "year",
        }[self]


@dataclass(frozen=True)
class WeekdayOrdinal:
    """The Nth weekday of a month, e.g. the last Friday."""

    ordinal: int
    weekday: Weekday

    def __post_init__(self):
        if self.ordinal not in ORDINALS:
            raise ValueError(f"Ordinal must be one of {ORDINALS}, got {self.ordinal}")

    @property
    def ordinal_word(self) -> str:
        return _ORDINAL_WORDS[self.ordinal]

    def describe(self) -> str:
        return f"{self.ordinal_word} {self.weekday.full_name}"


@dataclass(frozen=True)
class DayOfMonth:
    """A fixed day of the month (1-31)."""

    day: int


MonthlyPattern = DayOfMonth | WeekdayOrdinal


@dataclass(frozen=True)
class Never:
    """The recurrence does not end."""


@dataclass(frozen=True)
class EndDate:
    """The recurrence stops after a given date."""

    end_date: date


@dataclass(frozen=True)
class AfterOccurrences:
    """The recurrence stops after a number of occurrences (1-999)."""

    count: int


RecurrenceEnd = Never | EndDate | AfterOccurrences


class MonthlyMode(str, Enum):
    """Which monthly pattern variant is active."""

    DATE = "date"
    WEEKDAY = "weekday"


class EndMode(str, Enum):
    """Which end variant is active."""

    NEVER = "never"
    ON_DATE = "on_date"
    AFTER = "after"


def default_monthly_pattern(anchor: date, calendar=None) -> DayOfMonth:
    """Monthly pattern repeating on the anchor's day of the month."""
    calendar = calendar or DEFAULT_CALENDAR
    return DayOfMonth(calendar.day_of_month(anchor))


def anchor_weekday_ordinal(anchor: date, calendar=None) -> WeekdayOrdinal:
    """Monthly pattern repeating on the anchor's weekday and week of the month."""
    return WeekdayOrdinal(
        ordinal=ordinal_of_week_in_month(anchor, calendar),
        weekday=weekday_of(anchor, calendar),
    )


@dataclass
class RecurrenceConfiguration:
    """
    Editable recurrence settings for one event.

    Fields that do not apply to the current frequency (or to a disabled
    configuration) are kept so that switching back restores them. The
    anchor date is never stored; helpers that need calendar context take
    it as an argument.
    """

    is_enabled: bool
    frequency: Frequency
    interval: int
    selected_weekdays: set[Weekday]
    monthly_pattern: MonthlyPattern
    end: RecurrenceEnd

    @classmethod
    def for_anchor(
        cls,
        anchor: date,
        frequency: Frequency = Frequency.WEEKLY,
        is_enabled: bool = True,
        calendar=None,
    ) -> "RecurrenceConfiguration":
        """Every-1-unit configuration with weekday and monthly fields taken from the anchor."""
        return cls(
            is_enabled=is_enabled,
            frequency=frequency,
            interval=MIN_INTERVAL,
            selected_weekdays={weekday_of(anchor, calendar)},
            monthly_pattern=default_monthly_pattern(anchor, calendar),
            end=Never(),
        )

    @classmethod
    def none(cls, anchor: date, calendar=None) -> "RecurrenceConfiguration":
        """Neutral "does not repeat" configuration."""
        return cls.for_anchor(anchor, Frequency.WEEKLY, is_enabled=False, calendar=calendar)

    def copy(self) -> "RecurrenceConfiguration":
        """Independent draft that can be edited without touching this value."""
        return replace(self, selected_weekdays=set(self.selected_weekdays))

    # Toggles and scalars

    def set_enabled(self, enabled: bool) -> None:
        self.is_enabled = enabled

    def set_frequency(self, frequency: Frequency | str) -> None:
        self.frequency = Frequency(frequency)

    def set_interval(self, interval: int) -> None:
        self.interval = clamp(interval, MIN_INTERVAL, MAX_INTERVAL)

    def step_interval(self, delta: int) -> None:
        self.set_interval(self.interval + delta)

    # Weekly

    def toggle_weekday(self, weekday: Weekday, anchor: date, calendar=None) -> None:
        weekday = Weekday(weekday)
        if weekday in self.selected_weekdays:
            self.selected_weekdays.discard(weekday)
        else:
            self.selected_weekdays.add(weekday)
        self._ensure_weekdays(anchor, calendar)

    def set_weekdays(self, weekdays: Iterable[Weekday], anchor: date, calendar=None) -> None:
        self.selected_weekdays = {Weekday(w) for w in weekdays}
        self._ensure_weekdays(anchor, calendar)

    def _ensure_weekdays(self, anchor: date, calendar=None) -> None:
        if not self.selected_weekdays:
            weekday = weekday_of(anchor, calendar)
            logger.debug(f"Weekday set emptied, restoring {weekday.full_name}")
            self.selected_weekdays.add(weekday)

    # Monthly

    @property
    def monthly_mode(self) -> MonthlyMode:
        match self.monthly_pattern:
            case WeekdayOrdinal():
                return MonthlyMode.WEEKDAY
            case _:
                return MonthlyMode.DATE

    def set_monthly_mode(self, mode: MonthlyMode | str, anchor: date, calendar=None) -> None:
        """Switch monthly variant, seeding the new one from the anchor."""
        mode = MonthlyMode(mode)
        if mode == self.monthly_mode:
            return
        if mode == MonthlyMode.WEEKDAY:
            self.monthly_pattern = anchor_weekday_ordinal(anchor, calendar)
        else:
            self.monthly_pattern = default_monthly_pattern(anchor, calendar)

    def set_day_of_month(self, day: int) -> None:
        self.monthly_pattern = DayOfMonth(clamp(day, MIN_DAY, MAX_DAY))

    def step_day_of_month(self, delta: int, anchor: date, calendar=None) -> None:
        match self.monthly_pattern:
            case DayOfMonth(day=day):
                current = day
            case _:
                current = default_monthly_pattern(anchor, calendar).day
        self.set_day_of_month(current + delta)

    def set_ordinal(self, ordinal: int, anchor: date, calendar=None) -> None:
        """Change which week of the month, keeping the chosen weekday."""
        if ordinal not in ORDINALS:
            logger.debug(f"Ignoring unsupported ordinal {ordinal}")
            return
        match self.monthly_pattern:
            case WeekdayOrdinal(weekday=weekday):
                pass
            case _:
                weekday = weekday_of(anchor, calendar)
        self.monthly_pattern = WeekdayOrdinal(ordinal=ordinal, weekday=weekday)

    def set_ordinal_weekday(self, weekday: Weekday, anchor: date, calendar=None) -> None:
        """Change the weekday, keeping the chosen week of the month."""
        match self.monthly_pattern:
            case WeekdayOrdinal(ordinal=ordinal):
                pass
            case _:
                ordinal = ordinal_of_week_in_month(anchor, calendar)
        self.monthly_pattern = WeekdayOrdinal(ordinal=ordinal, weekday=Weekday(weekday))

    # End

    @property
    def end_mode(self) -> EndMode:
        match self.end:
            case EndDate():
                return EndMode.ON_DATE
            case AfterOccurrences():
                return EndMode.AFTER
            case _:
                return EndMode.NEVER

    def set_end(self, end: RecurrenceEnd) -> None:
        match end:
            case AfterOccurrences(count=count):
                self.set_occurrence_count(count)
            case EndDate() | Never():
                self.end = end
            case _:
                raise TypeError(f"Not a recurrence end: {end!r}")

    def set_end_mode(
        self,
        mode: EndMode | str,
        anchor: date,
        calendar=None,
        end_date_offset_months: int = 1,
    ) -> None:
        """
        Switch end variant.

        A new end date defaults to ``end_date_offset_months`` after the
        anchor and a new occurrence count to 1. Re-selecting the active
        mode keeps its value.
        """
        mode = EndMode(mode)
        if mode == self.end_mode:
            return
        match mode:
            case EndMode.NEVER:
                self.end = Never()
            case EndMode.ON_DATE:
                calendar = calendar or DEFAULT_CALENDAR
                self.end = EndDate(calendar.add_months(anchor, end_date_offset_months))
            case EndMode.AFTER:
                self.end = AfterOccurrences(MIN_OCCURRENCES)

    def set_end_date(self, end_date: date) -> None:
        self.end = EndDate(end_date)

    def set_occurrence_count(self, count: int) -> None:
        self.end = AfterOccurrences(clamp(count, MIN_OCCURRENCES, MAX_OCCURRENCES))

    def step_occurrence_count(self, delta: int) -> None:
        match self.end:
            case AfterOccurrences(count=count):
                current = count
            case _:
                current = MIN_OCCURRENCES
        self.set_occurrence_count(current + delta)

    def same_recurrence(self, other: "RecurrenceConfiguration") -> bool:
        """
        Compare only what affects the repeat schedule.

        Weekdays matter for weekly rules and the monthly pattern for monthly
        rules; retained values for other frequencies are ignored, and any
        two disabled configurations are the same.
        """
        if not self.is_enabled or not other.is_enabled:
            return self.is_enabled == other.is_enabled
        if (self.frequency, self.interval, self.end) != (other.frequency, other.interval, other.end):
            return False
        match self.frequency:
            case Frequency.WEEKLY:
                return self.selected_weekdays == other.selected_weekdays
            case Frequency.MONTHLY:
                return self.monthly_pattern == other.monthly_pattern
            case _:
                return True
