# src/calkit/ranges/__init__.py
"""
calkit.ranges
~~~~~~~~~~~~~

Closed date intervals.

Basic usage::

    from calkit.calendar import CalendarDate as D
    from calkit.ranges import DateRange

    a = DateRange(D(2024, 3, 1), D(2024, 3, 10))
    b = DateRange(D(2024, 3, 11), D(2024, 3, 20))
    a.is_adjacent(b)          # → True
    a.merge(b)                # → DateRange(2024-03-01, 2024-03-20)
    a.split(D(2024, 3, 5))    # → (2024-03-01..2024-03-04, 2024-03-05..2024-03-10)

Public API
----------
DateRange  Closed interval of CalendarDates.
coalesce   Merge a collection of ranges into a minimal sorted list.
"""

from __future__ import annotations

from calkit.ranges.ranges import DateRange, coalesce

__all__ = ["DateRange", "coalesce"]
