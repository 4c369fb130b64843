from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from enum import Enum
from typing import Optional

import numpy as np

from calkit.calendar import CalendarDate, CalendarError, InvalidRange

WORK_WEEK: tuple[int, ...] = (1, 1, 1, 1, 1, 0, 0)

_ONE_DAY = np.timedelta64(1, "D")


class Convention(str, Enum):
    """Business day adjustment conventions."""

    UNADJUSTED = "UNADJUSTED"
    FOLLOWING = "FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"


_ROLL = {
    Convention.FOLLOWING: "forward",
    Convention.PRECEDING: "backward",
    Convention.MODIFIED_FOLLOWING: "modifiedfollowing",
    Convention.MODIFIED_PRECEDING: "modifiedpreceding",
}


def check_weekmask(weekmask: Sequence[int]) -> tuple[int, ...]:
    """Validate a Monday-first 7-day working pattern such as ``(1,1,1,1,1,0,0)``."""
    mask = tuple(weekmask)
    if len(mask) != 7:
        raise CalendarError(f"Weekmask must have 7 entries; got {len(mask)}.")
    if any(w not in (0, 1) for w in mask):
        raise CalendarError(f"Weekmask entries must be 0 or 1; got {mask}.")
    if not any(mask):
        raise CalendarError("Weekmask must contain at least one working day.")
    return tuple(int(w) for w in mask)


def holidays_to_datetime64(holiday_set: Optional[Mapping[str, str]]) -> np.ndarray:
    if not holiday_set:
        return np.array([], dtype="datetime64[D]")
    return np.array(sorted(holiday_set), dtype="datetime64[D]")


class BusinessDayClassifier:
    """
    Weekday / weekend / holiday classification.

    A business day is a working day of ``weekmask`` (Monday first) that is
    not a key of the holiday set.  Holiday sets are any mapping keyed by ISO
    date strings, so a HolidaySet, a plain dict and ``{}`` all work.

    Every call walks the calendar day by day (through NumPy's busday
    routines).  For repeated year-scale queries build a BusinessDayIndex.
    """

    def __init__(self, weekmask: Sequence[int] = WORK_WEEK) -> None:
        self._weekmask = check_weekmask(weekmask)
        self._mask_str = "".join(str(w) for w in self._weekmask)

    @property
    def weekmask(self) -> tuple[int, ...]:
        return self._weekmask

    def _busdaycal(self, holiday_set: Optional[Mapping[str, str]]) -> np.busdaycalendar:
        return np.busdaycalendar(
            weekmask=self._mask_str, holidays=holidays_to_datetime64(holiday_set)
        )

    # ── classification ───────────────────────────────────────────────────

    def is_weekend(self, date: CalendarDate) -> bool:
        return not self._weekmask[date.day_of_week() - 1]

    def is_business_day(
        self, date: CalendarDate, holiday_set: Optional[Mapping[str, str]] = None
    ) -> bool:
        if self.is_weekend(date):
            return False
        return date.isoformat() not in (holiday_set or {})

    # ── arithmetic ───────────────────────────────────────────────────────

    def add_business_days(
        self,
        start: CalendarDate,
        n: int,
        holiday_set: Optional[Mapping[str, str]] = None,
    ) -> CalendarDate:
        """
        Step ``|n|`` business days away from ``start`` in the sign of ``n``.

        ``start`` itself is never counted, so one business day after a
        Saturday is the following Monday.
        """
        if n == 0:
            return start
        cal = self._busdaycal(holiday_set)
        s = start.to_datetime64()
        if np.is_busday(s, busdaycal=cal):
            out = np.busday_offset(s, n, roll="raise", busdaycal=cal)
        elif n > 0:
            out = np.busday_offset(s, n - 1, roll="forward", busdaycal=cal)
        else:
            out = np.busday_offset(s, n + 1, roll="backward", busdaycal=cal)
        return replace(CalendarDate.from_datetime64(out), time=start.time)

    def count_business_days(
        self,
        start: CalendarDate,
        end: CalendarDate,
        holiday_set: Optional[Mapping[str, str]] = None,
    ) -> int:
        """Business days in the closed interval ``[start, end]``."""
        if start.date_only() > end.date_only():
            raise InvalidRange(f"start {start} is after end {end}.")
        return int(
            np.busday_count(
                start.to_datetime64(),
                end.to_datetime64() + _ONE_DAY,
                busdaycal=self._busdaycal(holiday_set),
            )
        )

    def adjust(
        self,
        date: CalendarDate,
        convention: Convention = Convention.FOLLOWING,
        holiday_set: Optional[Mapping[str, str]] = None,
    ) -> CalendarDate:
        """Move a non-business day onto a business day per ``convention``."""
        convention = Convention(convention)
        if convention is Convention.UNADJUSTED:
            return date
        out = np.busday_offset(
            date.to_datetime64(),
            0,
            roll=_ROLL[convention],
            busdaycal=self._busdaycal(holiday_set),
        )
        return replace(CalendarDate.from_datetime64(out), time=date.time)

    def __repr__(self) -> str:
        return f"BusinessDayClassifier(weekmask={self._weekmask})"
