# src/calkit/calendar/__init__.py
"""
calkit.calendar
~~~~~~~~~~~~~~~

Immutable Gregorian date values and the clock they are read from.  Every
other calkit package builds on :class:`CalendarDate`.

Basic usage::

    from calkit.calendar import CalendarDate

    d = CalendarDate(2024, 1, 31)
    d.add_months(1)           # → CalendarDate(2024, 2, 29)
    d.add_days(-31)           # → CalendarDate(2023, 12, 31)
    d.day_of_week()           # → 3 (Wednesday)

Reading the clock::

    from calkit.calendar import CalendarDate, FixedClock

    CalendarDate.today()                                   # host clock
    CalendarDate.today(FixedClock(datetime.date(2024, 3, 5)))

Public API
----------
CalendarDate       The date value type.
Clock              Protocol for wall-clock sources.
SystemClock        Reads the host clock.
FixedClock         Always reports one moment.
is_leap_year       Gregorian leap-year test.
days_in_month      Day count of a month.
CalendarError      Base exception for all calendar-related errors.
InvalidDate        Malformed year/month/day.
InvalidRange       Start after end.
InvalidPattern     Malformed recurrence pattern.
RuleUnsatisfiable  Holiday rule with no date in the requested year.
"""

from __future__ import annotations

from calkit.calendar._exceptions import (
    CalendarError,
    InvalidDate,
    InvalidPattern,
    InvalidRange,
    RuleUnsatisfiable,
)
from calkit.calendar.clock import Clock, FixedClock, SystemClock
from calkit.calendar.date import CalendarDate, days_in_month, is_leap_year

__all__ = [
    "CalendarDate",
    "Clock",
    "SystemClock",
    "FixedClock",
    "is_leap_year",
    "days_in_month",
    "CalendarError",
    "InvalidDate",
    "InvalidRange",
    "InvalidPattern",
    "RuleUnsatisfiable",
]
