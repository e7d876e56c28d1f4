"""Tests for recurrence summaries."""

from datetime import date, datetime, timezone

import pytest

from famlical.core.calendar import GregorianCalendar, Weekday
from famlical.core.presets import PresetOption, from_preset
from famlical.core.recurrence import (
    DayOfMonth,
    Frequency,
    Never,
    RecurrenceConfiguration,
    WeekdayOrdinal,
)
from famlical.core.summary import describe_end, describe_interval, summarize


class TestSummarize:
    def test_disabled(self, anchor):
        assert summarize(RecurrenceConfiguration.none(anchor), anchor) == "Does not repeat"

    def test_weekly_preset(self, anchor):
        config = from_preset(PresetOption.WEEKLY, anchor)
        assert summarize(config, anchor) == "Every week on Wed • Does not end"

    def test_weekly_several_days_sorted(self, anchor):
        config = from_preset(PresetOption.WEEKLY, anchor)
        config.set_interval(2)
        config.set_weekdays([Weekday.WEDNESDAY, Weekday.MONDAY], anchor)
        config.set_occurrence_count(10)
        assert summarize(config, anchor) == "Every 2 weeks on Mon, Wed • Ends after 10 times"

    def test_weekly_empty_set_omits_days(self, anchor):
        config = from_preset(PresetOption.WEEKLY, anchor)
        config.selected_weekdays = set()
        assert summarize(config, anchor) == "Every week • Does not end"

    def test_weekly_plain_day_numbers(self, anchor):
        config = RecurrenceConfiguration(True, Frequency.WEEKLY, 1, {4, 2}, DayOfMonth(15), Never())
        assert summarize(config, anchor) == "Every week on Mon, Wed • Does not end"

    def test_weekly_unknown_day_numbers_skipped(self, anchor):
        config = RecurrenceConfiguration(True, Frequency.WEEKLY, 1, {9, Weekday.FRIDAY}, DayOfMonth(15), Never())
        assert summarize(config, anchor) == "Every week on Fri • Does not end"
        config.selected_weekdays = {0, 9}
        assert summarize(config, anchor) == "Every week • Does not end"

    def test_daily(self, anchor):
        config = from_preset(PresetOption.DAILY, anchor)
        assert summarize(config, anchor) == "Every day • Does not end"
        config.set_interval(3)
        config.set_occurrence_count(1)
        assert summarize(config, anchor) == "Every 3 days • Ends after 1 time"

    def test_monthly_day(self, anchor):
        config = from_preset(PresetOption.MONTHLY, anchor)
        config.set_interval(2)
        assert summarize(config, anchor) == "Every 2 months on day 15 • Does not end"

    def test_monthly_last_friday(self, anchor):
        config = RecurrenceConfiguration(
            is_enabled=True,
            frequency=Frequency.MONTHLY,
            interval=1,
            selected_weekdays={Weekday.FRIDAY},
            monthly_pattern=WeekdayOrdinal(-1, Weekday.FRIDAY),
            end=Never(),
        )
        assert summarize(config, anchor) == "Every month on the Last Friday • Does not end"

    def test_yearly_uses_anchor(self, anchor):
        config = from_preset(PresetOption.YEARLY, anchor)
        config.set_end_date(date(2030, 1, 15))
        assert summarize(config, anchor) == "Every year on January 15 • Ends Jan 15, 2030"

    def test_yearly_anchor_in_calendar_timezone(self):
        config = from_preset(PresetOption.YEARLY, date(2025, 1, 1))
        instant = datetime(2025, 1, 1, 3, 0, tzinfo=timezone.utc)
        toronto = GregorianCalendar("America/Toronto")
        assert summarize(config, instant, toronto).startswith("Every year on December 31")

    def test_custom_separator(self, anchor):
        config = from_preset(PresetOption.DAILY, anchor)
        assert summarize(config, anchor, separator=", ") == "Every day, Does not end"


class TestDescribeEnd:
    @pytest.mark.parametrize(
        "count,expected",
        [(1, "Ends after 1 time"), (2, "Ends after 2 times"), (999, "Ends after 999 times")],
    )
    def test_pluralization(self, anchor, count, expected):
        config = from_preset(PresetOption.DAILY, anchor)
        config.set_occurrence_count(count)
        assert describe_end(config.end) == expected

    def test_end_date(self):
        config = RecurrenceConfiguration.none(date(2025, 1, 15))
        config.set_end_date(date(2025, 3, 1))
        assert describe_end(config.end) == "Ends Mar 1, 2025"


class TestDescribeInterval:
    @pytest.mark.parametrize(
        "frequency, interval, expected",
        [
            (Frequency.DAILY, 1, "Every day"),
            (Frequency.WEEKLY, 2, "Every 2 weeks"),
            (Frequency.MONTHLY, 3, "Every 3 months"),
            (Frequency.YEARLY, 1, "Every year"),
        ],
    )
    def test_interval_clause(self, anchor, frequency, interval, expected):
        config = RecurrenceConfiguration.for_anchor(anchor, frequency)
        config.set_interval(interval)
        assert describe_interval(config) == expected
