"""Quick repeat presets and classification of configurations back into them."""

from datetime import date
from enum import Enum

from .calendar import weekday_of
from .recurrence import (
    DayOfMonth,
    Frequency,
    Never,
    RecurrenceConfiguration,
)


class PresetOption(str, Enum):
    """Shortcuts offered by the simple repeat picker."""

    NONE = "None"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"
    CUSTOM = "Custom"


_PRESET_FREQUENCIES = {
    PresetOption.DAILY: Frequency.DAILY,
    PresetOption.WEEKLY: Frequency.WEEKLY,
    PresetOption.MONTHLY: Frequency.MONTHLY,
    PresetOption.YEARLY: Frequency.YEARLY,
}


def from_preset(
    option: PresetOption | str,
    anchor: date,
    calendar=None,
) -> RecurrenceConfiguration | None:
    """
    Build the configuration a quick preset stands for.

    Returns None for CUSTOM, which has no canonical value: the caller edits
    an existing draft instead.
    """
    option = PresetOption(option)
    if option == PresetOption.NONE:
        return RecurrenceConfiguration.none(anchor, calendar)
    if option == PresetOption.CUSTOM:
        return None
    return RecurrenceConfiguration.for_anchor(anchor, _PRESET_FREQUENCIES[option], calendar=calendar)


def classify(config: RecurrenceConfiguration, anchor: date, calendar=None) -> PresetOption:
    """
    Which quick preset a configuration matches, or CUSTOM.

    Monthly "by weekday" patterns are always CUSTOM, even when they match
    the anchor, so an explicit weekday choice stays visible.
    """
    if not config.is_enabled:
        return PresetOption.NONE

    if config.interval != 1 or not isinstance(config.end, Never):
        return PresetOption.CUSTOM

    match config.frequency:
        case Frequency.DAILY:
            return PresetOption.DAILY
        case Frequency.WEEKLY:
            if config.selected_weekdays == {weekday_of(anchor, calendar)}:
                return PresetOption.WEEKLY
        case Frequency.MONTHLY:
            if isinstance(config.monthly_pattern, DayOfMonth):
                return PresetOption.MONTHLY
        case Frequency.YEARLY:
            return PresetOption.YEARLY

    return PresetOption.CUSTOM
