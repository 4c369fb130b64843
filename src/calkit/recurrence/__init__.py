# src/calkit/recurrence/__init__.py
"""
calkit.recurrence
~~~~~~~~~~~~~~~~~

Recurring dates: a frequency and interval step through periods, and weekday,
month and day-of-month filters (all of which must pass) pick the
occurrences.

Basic usage::

    from calkit.calendar import CalendarDate
    from calkit.recurrence import Frequency, RecurrencePattern, occurrences

    p = RecurrencePattern(
        start=CalendarDate(2024, 3, 5),
        frequency=Frequency.WEEKLY,
        weekdays={2, 4},                       # Tue, Thu
    )
    list(occurrences(p, limit=4))
    # → 2024-03-05, 2024-03-07, 2024-03-12, 2024-03-14

Filters that can never match give an empty sequence, never an endless loop.

Public API
----------
Frequency             DAILY / WEEKLY / MONTHLY / YEARLY.
RecurrencePattern     Immutable stepping rule plus filters.
Occurrences           Restartable lazy occurrence sequence.
occurrences           Build an Occurrences for a pattern and limit.
SEARCH_HORIZON_YEARS  Years searched without a match before giving up.
"""

from __future__ import annotations

from calkit.recurrence.recurrence import (
    SEARCH_HORIZON_YEARS,
    Frequency,
    Occurrences,
    RecurrencePattern,
    occurrences,
)

__all__ = [
    "Frequency",
    "RecurrencePattern",
    "Occurrences",
    "occurrences",
    "SEARCH_HORIZON_YEARS",
]
