# src/calkit/holidays/__init__.py
"""
calkit.holidays
~~~~~~~~~~~~~~~

Fixed and moveable holidays.  A HolidayCalculator turns a tuple of rules into
a :class:`HolidaySet` (``ISO date -> name``) for one year at a time.

Basic usage::

    from calkit.holidays import HolidayCalculator, NthWeekdayHoliday

    calc = HolidayCalculator().with_rules(
        NthWeekdayHoliday("Thanksgiving", month=11, weekday=4, n=4),
    )
    hols = calc.holidays_for_year(2024, {"2024-06-14": "Company Day"})
    "2024-11-28" in hols                  # → True
    hols["2024-03-29"]                    # → "Good Friday"

Rules that cannot be satisfied in a year (a 5th Monday in a four-Monday
month) are left out of that year's set.

Public API
----------
HolidayCalculator    Evaluates rules per year.
HolidaySet           Read-only ISO-date → name mapping.
HolidayRule          Protocol every holiday rule satisfies.
FixedHoliday         Same month/day every year.
NthWeekdayHoliday    n-th weekday of a month.
LastWeekdayHoliday   Last weekday of a month.
EasterHoliday        Easter Sunday plus a day offset.
easter               Gregorian Easter Sunday for a year.
iso_key              Normalise a date or ISO string to a HolidaySet key.
DEFAULT_RULES        A generic Western holiday set.
"""

from __future__ import annotations

from calkit.holidays.holidays import HolidayCalculator, HolidaySet, iso_key
from calkit.holidays.rules import (
    DEFAULT_RULES,
    EasterHoliday,
    FixedHoliday,
    HolidayRule,
    LastWeekdayHoliday,
    NthWeekdayHoliday,
    easter,
)

__all__ = [
    "HolidayCalculator",
    "HolidaySet",
    "HolidayRule",
    "FixedHoliday",
    "NthWeekdayHoliday",
    "LastWeekdayHoliday",
    "EasterHoliday",
    "easter",
    "iso_key",
    "DEFAULT_RULES",
]
