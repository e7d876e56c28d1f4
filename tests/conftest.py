"""Shared fixtures."""

from datetime import date

import pytest


@pytest.fixture
def anchor():
    """A Wednesday: the third Wednesday of January 2025."""
    return date(2025, 1, 15)


@pytest.fixture
def anchors():
    """Anchors covering month ends, leap days and 4th-vs-last weekdays."""
    return [
        date(2025, 1, 15),
        date(2025, 1, 24),
        date(2025, 1, 31),
        date(2025, 2, 28),
        date(2024, 2, 29),
        date(2025, 6, 1),
        date(2025, 12, 31),
        date(2026, 10, 19),
    ]
