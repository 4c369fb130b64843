from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Optional

import numpy as np

from calkit.calendar import CalendarDate, InvalidRange

from .classifier import WORK_WEEK, check_weekmask

if TYPE_CHECKING:
    from calkit.holidays import HolidayCalculator


class BusinessDayIndex:
    """
    Compiled business-day index: dense per-day weight + prefix-sum array over
    whole years.  ``count`` is O(1) and ``add`` is a binary search, so this is
    the structure to use for repeated year-scale queries.

    Day ``i`` of the index is ``origin + i`` days; weight 1 is a business day,
    0 a weekend day or holiday.
    """

    def __init__(
        self,
        first_year: int,
        last_year: Optional[int] = None,
        holidays: Optional[Mapping[str, str]] = None,
        weekmask: Sequence[int] = WORK_WEEK,
    ) -> None:
        if last_year is None:
            last_year = first_year
        if first_year > last_year:
            raise InvalidRange(f"first_year {first_year} is after last_year {last_year}.")

        self._pattern: np.ndarray = np.array(check_weekmask(weekmask), dtype=np.int64)
        self._origin = CalendarDate(first_year, 1, 1)
        self._last = CalendarDate(last_year, 12, 31)
        self._horizon: int = self._origin.days_until(self._last) + 1
        self._shift: int = self._origin.day_of_week() - 1

        self._weights: np.ndarray = self._pattern_weights(
            np.arange(self._horizon, dtype=np.int64)
        )
        if holidays:
            for iso in holidays:
                day = self._offset(CalendarDate.from_iso(iso), strict=False)
                if day is not None:
                    self._weights[day] = 0

        self._build_prefix()

    @classmethod
    def from_calculator(
        cls,
        calculator: HolidayCalculator,
        first_year: int,
        last_year: Optional[int] = None,
        custom_holidays: Optional[Mapping[str, str]] = None,
        weekmask: Sequence[int] = WORK_WEEK,
    ) -> BusinessDayIndex:
        last_year = first_year if last_year is None else last_year
        merged: dict[str, str] = {}
        for year in range(first_year, last_year + 1):
            merged.update(calculator.holidays_for_year(year, custom_holidays))
        return cls(first_year, last_year, merged, weekmask)

    # ── prefix management ────────────────────────────────────────────────

    def _pattern_weights(self, days: np.ndarray) -> np.ndarray:
        return self._pattern[(days + self._shift) % 7].copy()

    def _build_prefix(self) -> None:
        self._prefix = np.empty(self._horizon + 1, dtype=np.int64)
        self._prefix[0] = 0
        np.cumsum(self._weights, out=self._prefix[1:])

    def _rebuild_prefix_from(self, day: int) -> None:
        self._prefix[day + 1:] = self._prefix[day] + np.cumsum(self._weights[day:])

    def _offset(self, date: CalendarDate, strict: bool = True) -> Optional[int]:
        day = self._origin.days_until(date)
        if 0 <= day < self._horizon:
            return day
        if strict:
            raise InvalidRange(
                f"{date} is outside the indexed span {self._origin}..{self._last}."
            )
        return None

    def _date(self, day: int) -> CalendarDate:
        return self._origin.add_days(day)

    # ── holiday management ───────────────────────────────────────────────

    def add_holiday(self, date: CalendarDate) -> None:
        day = self._offset(date)
        self._weights[day] = 0
        self._rebuild_prefix_from(day)

    def remove_holiday(self, date: CalendarDate) -> None:
        day = self._offset(date, strict=False)
        if day is not None:
            self._weights[day] = self._pattern[(day + self._shift) % 7]
            self._rebuild_prefix_from(day)

    # ── queries ──────────────────────────────────────────────────────────

    def is_business_day(self, date: CalendarDate) -> bool:
        return bool(self._weights[self._offset(date)])

    def count(self, start: CalendarDate, end: CalendarDate) -> int:
        """Business days in the closed interval ``[start, end]``."""
        if start.date_only() > end.date_only():
            raise InvalidRange(f"start {start} is after end {end}.")
        i, j = self._offset(start), self._offset(end)
        return int(self._prefix[j + 1] - self._prefix[i])

    def add(self, start: CalendarDate, n: int) -> CalendarDate:
        """Same stepping rule as BusinessDayClassifier.add_business_days."""
        if n == 0:
            return start
        i = self._offset(start)
        if n > 0:
            target = self._prefix[i + 1] + n
            p = int(np.searchsorted(self._prefix, target, side="left"))
            if p > self._horizon:
                raise InvalidRange(
                    f"{start} + {n} business days runs past {self._last}."
                )
            return self._date(p - 1)

        target = self._prefix[i] + n
        if target < 0:
            raise InvalidRange(
                f"{start} - {-n} business days runs before {self._origin}."
            )
        p = int(np.searchsorted(self._prefix, target + 1, side="left"))
        return self._date(p - 1)

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def first(self) -> CalendarDate:
        return self._origin

    @property
    def last(self) -> CalendarDate:
        return self._last

    @property
    def total(self) -> int:
        return int(self._prefix[self._horizon])

    @property
    def holidays(self) -> list[CalendarDate]:
        """Dates removed from the working pattern."""
        pattern_w = self._pattern_weights(np.arange(self._horizon, dtype=np.int64))
        diff_days = np.where(self._weights != pattern_w)[0]
        return [self._date(int(d)) for d in diff_days]

    def __repr__(self) -> str:
        return (
            f"BusinessDayIndex(first={self._origin}, "
            f"last={self._last}, "
            f"business_days={self.total}, "
            f"holidays={len(self.holidays)})"
        )
