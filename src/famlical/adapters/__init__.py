"""Adapters - I/O and wire-format implementations of ports."""

from .rrule_text import RRuleParseError, format_rrule, parse_rrule

__all__ = [
    "RRuleParseError",
    "format_rrule",
    "parse_rrule",
]
