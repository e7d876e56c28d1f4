"""Functional core - pure recurrence logic with no I/O."""

from .calendar import GregorianCalendar, Weekday, ordinal_of_week_in_month, weekday_of
from .recurrence import (
    AfterOccurrences,
    DayOfMonth,
    EndDate,
    EndMode,
    Frequency,
    MonthlyMode,
    Never,
    RecurrenceConfiguration,
    WeekdayOrdinal,
)
from .presets import PresetOption, classify, from_preset
from .rule import ExternalRule, RuleDay, RuleEnd, from_external_rule, to_external_rule
from .summary import summarize

__all__ = [
    # Calendar
    "GregorianCalendar",
    "Weekday",
    "weekday_of",
    "ordinal_of_week_in_month",
    # Recurrence
    "Frequency",
    "WeekdayOrdinal",
    "DayOfMonth",
    "Never",
    "EndDate",
    "AfterOccurrences",
    "MonthlyMode",
    "EndMode",
    "RecurrenceConfiguration",
    # Presets
    "PresetOption",
    "from_preset",
    "classify",
    # External rules
    "ExternalRule",
    "RuleDay",
    "RuleEnd",
    "to_external_rule",
    "from_external_rule",
    # Summary
    "summarize",
]
