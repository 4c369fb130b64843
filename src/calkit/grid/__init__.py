# src/calkit/grid/__init__.py
"""
calkit.grid
~~~~~~~~~~~

Month display grids: complete Monday-to-Sunday weeks with each cell flagged
as in-month, today, weekend and holiday.

Basic usage::

    from calkit.grid import MonthGridBuilder

    grid = MonthGridBuilder().build(2024, 3)
    for week in grid:
        print(" ".join(f"{c.date.day:2d}" if c.in_month else "  " for c in week))

    grid.as_array()           # (5, 7) array of day numbers, 0 outside March

Public API
----------
MonthGridBuilder  Builds grids for a year/month.
CalendarGrid      Weeks of DayCells.
DayCell           One annotated day.
"""

from __future__ import annotations

from calkit.grid.grid import CalendarGrid, DayCell, MonthGridBuilder

__all__ = ["MonthGridBuilder", "CalendarGrid", "DayCell"]
