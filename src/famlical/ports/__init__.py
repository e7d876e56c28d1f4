"""Ports - interfaces/protocols for external dependencies."""

from .calendar_provider import CalendarProvider

__all__ = [
    "CalendarProvider",
]
