# src/calkit/business/__init__.py
"""
calkit.business
~~~~~~~~~~~~~~~

Business-day arithmetic.  A business day is a working day of the weekmask
(Monday-first, default ``(1, 1, 1, 1, 1, 0, 0)``) that is not a holiday.

Basic usage::

    from calkit.business import BusinessDayClassifier
    from calkit.calendar import CalendarDate

    bd = BusinessDayClassifier()
    bd.add_business_days(CalendarDate(2024, 6, 1), 1, {})          # → 2024-06-03
    bd.count_business_days(CalendarDate(2024, 6, 1),
                           CalendarDate(2024, 6, 30), {})          # → 20

For many queries over the same years, precompute an index::

    from calkit.business import BusinessDayIndex
    from calkit.holidays import HolidayCalculator

    idx = BusinessDayIndex.from_calculator(HolidayCalculator(), 2024, 2026)
    idx.count(CalendarDate(2024, 1, 1), CalendarDate(2026, 12, 31))

Public API
----------
BusinessDayClassifier  Day-by-day classification and stepping.
BusinessDayIndex       Prefix-sum index over whole years.
Convention             Date adjustment conventions.
WORK_WEEK              Default Monday–Friday weekmask.
"""

from __future__ import annotations

from calkit.business.classifier import WORK_WEEK, BusinessDayClassifier, Convention
from calkit.business.index import BusinessDayIndex

__all__ = [
    "BusinessDayClassifier",
    "BusinessDayIndex",
    "Convention",
    "WORK_WEEK",
]
