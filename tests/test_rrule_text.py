"""Tests for the RRULE text codec."""

from datetime import date, datetime, timezone

import pytest

from famlical.adapters.rrule_text import RRuleParseError, format_rrule, parse_rrule
from famlical.core.rule import ExternalRule, RuleDay, RuleEnd


class TestFormatRrule:
    def test_weekly_with_count(self):
        rule = ExternalRule(
            "WEEKLY",
            interval=2,
            days_of_week=(RuleDay(2), RuleDay(4)),
            end=RuleEnd(occurrence_count=10),
        )
        assert format_rrule(rule) == "FREQ=WEEKLY;INTERVAL=2;BYDAY=MO,WE;COUNT=10"

    def test_interval_one_omitted(self):
        assert format_rrule(ExternalRule("DAILY")) == "FREQ=DAILY"

    def test_ordinal_weekday(self):
        rule = ExternalRule("MONTHLY", days_of_week=(RuleDay(6, -1),))
        assert format_rrule(rule) == "FREQ=MONTHLY;BYDAY=-1FR"

    def test_month_day(self):
        assert format_rrule(ExternalRule("MONTHLY", days_of_month=(31,))) == "FREQ=MONTHLY;BYMONTHDAY=31"

    def test_until_date(self):
        rule = ExternalRule("DAILY", end=RuleEnd(end_date=date(2025, 3, 1)))
        assert format_rrule(rule) == "FREQ=DAILY;UNTIL=20250301"

    def test_until_aware_datetime_in_utc(self):
        end = datetime(2025, 3, 1, 23, 59, 59, tzinfo=timezone.utc)
        rule = ExternalRule("DAILY", end=RuleEnd(end_date=end))
        assert format_rrule(rule) == "FREQ=DAILY;UNTIL=20250301T235959Z"

    def test_until_wins_over_count(self):
        rule = ExternalRule("DAILY", end=RuleEnd(end_date=date(2025, 3, 1), occurrence_count=3))
        assert format_rrule(rule) == "FREQ=DAILY;UNTIL=20250301"


class TestParseRrule:
    def test_weekly_with_count(self):
        rule = parse_rrule("FREQ=WEEKLY;INTERVAL=2;BYDAY=MO,WE;COUNT=10")
        assert rule == ExternalRule(
            "WEEKLY",
            interval=2,
            days_of_week=(RuleDay(2), RuleDay(4)),
            end=RuleEnd(occurrence_count=10),
        )

    def test_prefix_and_case(self):
        rule = parse_rrule("RRULE:freq=monthly;byday=-1fr")
        assert rule.frequency == "MONTHLY"
        assert rule.days_of_week == (RuleDay(6, -1),)

    def test_plus_prefixed_ordinal(self):
        assert parse_rrule("FREQ=MONTHLY;BYDAY=+2TU").days_of_week == (RuleDay(3, 2),)

    def test_month_days(self):
        assert parse_rrule("FREQ=MONTHLY;BYMONTHDAY=1,-1").days_of_month == (1, -1)

    def test_until_forms(self):
        assert parse_rrule("FREQ=DAILY;UNTIL=20250301").end == RuleEnd(end_date=date(2025, 3, 1))
        assert parse_rrule("FREQ=DAILY;UNTIL=20250301T120000").end.end_date == datetime(2025, 3, 1, 12)
        aware = parse_rrule("FREQ=DAILY;UNTIL=20250301T120000Z").end.end_date
        assert aware == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)

    def test_until_aware_offset_normalized_to_utc(self):
        aware = parse_rrule("FREQ=DAILY;UNTIL=20250301T120000+0100").end.end_date
        assert aware.utcoffset().total_seconds() == 0
        assert aware.replace(tzinfo=None) == datetime(2025, 3, 1, 11)

    def test_unknown_parts_ignored(self):
        rule = parse_rrule("FREQ=YEARLY;BYMONTH=1;WKST=MO")
        assert rule == ExternalRule("YEARLY")

    def test_unsupported_frequency_is_read(self):
        """Refusing unknown frequencies is the importer's job."""
        assert parse_rrule("FREQ=HOURLY").frequency == "HOURLY"

    def test_trailing_semicolon(self):
        assert parse_rrule("FREQ=DAILY;") == ExternalRule("DAILY")

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "INTERVAL=2",
            "FREQ=DAILY;INTERVAL=two",
            "FREQ=WEEKLY;BYDAY=XX",
            "FREQ=WEEKLY;BYDAY=MONDAY",
            "FREQ=DAILY;UNTIL=2025-03-01",
            "FREQ=DAILY;UNTIL=2025",
            "FREQ=DAILY;UNTIL=20251301",
            "FREQ=DAILY;UNTIL=20250301T12:00:00Z",
            "FREQ=DAILY;COUNT",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(RRuleParseError):
            parse_rrule(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_rrule("FREQ=DAILY;COUNT=x")

    @pytest.mark.parametrize(
        "text",
        [
            "FREQ=WEEKLY;INTERVAL=2;BYDAY=MO,WE;COUNT=10",
            "FREQ=MONTHLY;BYDAY=-1FR;UNTIL=20261231",
            "FREQ=MONTHLY;INTERVAL=3;BYMONTHDAY=15",
            "FREQ=YEARLY",
        ],
    )
    def test_canonical_text_is_stable(self, text):
        assert format_rrule(parse_rrule(text)) == text
