from __future__ import annotations

import datetime as _dt
import numbers
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ._exceptions import InvalidDate
from .clock import Clock, SystemClock


_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise InvalidDate(f"Month must be in 1..12; got {month}.")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


@dataclass(frozen=True, slots=True, eq=False)
class CalendarDate:
    """
    Immutable proleptic Gregorian date with an optional time of day.

    Every instance is a real date: the constructor rejects Feb 30, Feb 29 in
    non-leap years, months outside 1..12 and non-integer components.  All
    arithmetic returns new values.

    Ordering is chronological; a missing time of day sorts as midnight.
    Equality and hashing follow the same key, so ``time=None`` and
    ``time(0, 0)`` are the same moment.
    """

    year: int
    month: int
    day: int
    time: Optional[_dt.time] = None

    def __post_init__(self) -> None:
        for name in ("year", "month", "day"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidDate(f"{name} must be an integer; got {value!r}.")
            object.__setattr__(self, name, int(value))

        if not _dt.MINYEAR <= self.year <= _dt.MAXYEAR:
            raise InvalidDate(
                f"Year must be in {_dt.MINYEAR}..{_dt.MAXYEAR}; got {self.year}."
            )
        if not 1 <= self.month <= 12:
            raise InvalidDate(f"Month must be in 1..12; got {self.month}.")
        last = days_in_month(self.year, self.month)
        if not 1 <= self.day <= last:
            raise InvalidDate(
                f"Day must be in 1..{last} for {self.year:04d}-{self.month:02d}; "
                f"got {self.day}."
            )
        if self.time is not None and not isinstance(self.time, _dt.time):
            raise InvalidDate(f"time must be a datetime.time; got {self.time!r}.")

    # ── construction ─────────────────────────────────────────────────────

    @classmethod
    def from_parts(
        cls, year: int, month: int, day: int, time: Optional[_dt.time] = None
    ) -> CalendarDate:
        return cls(year, month, day, time)

    @classmethod
    def from_date(cls, value: _dt.date) -> CalendarDate:
        if isinstance(value, _dt.datetime):
            return cls.from_datetime(value)
        return cls(value.year, value.month, value.day)

    @classmethod
    def from_datetime(cls, value: _dt.datetime) -> CalendarDate:
        return cls(value.year, value.month, value.day, value.time())

    @classmethod
    def from_iso(cls, text: str) -> CalendarDate:
        try:
            parsed = _dt.date.fromisoformat(text)
        except (TypeError, ValueError) as exc:
            raise InvalidDate(f"Not an ISO date: {text!r}.") from exc
        return cls.from_date(parsed)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> CalendarDate:
        try:
            return cls.from_date(_dt.date.fromordinal(ordinal))
        except (OverflowError, ValueError) as exc:
            raise InvalidDate(f"Ordinal {ordinal} is out of range.") from exc

    @classmethod
    def from_datetime64(cls, value: np.datetime64) -> CalendarDate:
        return cls.from_date(np.datetime64(value, "D").item())

    @classmethod
    def today(cls, clock: Optional[Clock] = None) -> CalendarDate:
        return cls.from_date((clock or SystemClock()).today())

    @classmethod
    def now(cls, clock: Optional[Clock] = None) -> CalendarDate:
        return cls.from_datetime((clock or SystemClock()).now())

    # ── conversion ───────────────────────────────────────────────────────

    def to_date(self) -> _dt.date:
        return _dt.date(self.year, self.month, self.day)

    def to_datetime64(self) -> np.datetime64:
        return np.datetime64(self.isoformat(), "D")

    def ordinal(self) -> int:
        return self.to_date().toordinal()

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def date_only(self) -> CalendarDate:
        if self.time is None:
            return self
        return CalendarDate(self.year, self.month, self.day)

    # ── arithmetic ───────────────────────────────────────────────────────

    def add_days(self, n: int) -> CalendarDate:
        if n == 0:
            return self
        try:
            moved = _dt.date.fromordinal(self.ordinal() + n)
        except (OverflowError, ValueError) as exc:
            raise InvalidDate(
                f"{self.isoformat()} + {n} days is out of range."
            ) from exc
        return CalendarDate(moved.year, moved.month, moved.day, self.time)

    def add_months(self, n: int) -> CalendarDate:
        # Day is clamped to the target month: Jan 31 + 1 month -> Feb 28/29.
        year, month0 = divmod(self.year * 12 + self.month - 1 + n, 12)
        if not _dt.MINYEAR <= year <= _dt.MAXYEAR:
            raise InvalidDate(f"{self.isoformat()} + {n} months is out of range.")
        day = min(self.day, days_in_month(year, month0 + 1))
        return CalendarDate(year, month0 + 1, day, self.time)

    def add_years(self, n: int) -> CalendarDate:
        return self.add_months(12 * n)

    def days_until(self, other: CalendarDate) -> int:
        return other.ordinal() - self.ordinal()

    def first_of_month(self) -> CalendarDate:
        return CalendarDate(self.year, self.month, 1)

    def last_of_month(self) -> CalendarDate:
        return CalendarDate(self.year, self.month, days_in_month(self.year, self.month))

    # ── classification / comparison ──────────────────────────────────────

    def day_of_week(self) -> int:
        """ISO weekday: Monday = 1 ... Sunday = 7."""
        return self.to_date().isoweekday()

    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    def _key(self) -> tuple[int, _dt.time]:
        return self.ordinal(), self.time or _dt.time.min

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def compare(self, other: CalendarDate) -> int:
        a, b = self._key(), other._key()
        return (a > b) - (a < b)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() >= other._key()

    def __str__(self) -> str:
        if self.time is None:
            return self.isoformat()
        return f"{self.isoformat()}T{self.time.isoformat()}"
