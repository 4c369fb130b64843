from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from calkit.calendar import CalendarDate, InvalidDate, InvalidPattern, days_in_month

logger = logging.getLogger(__name__)

# The Gregorian calendar repeats every 400 years, so a weekday/month/day
# filter combination that has not matched within that span never will.
SEARCH_HORIZON_YEARS: int = 400


class Frequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


def _filter_set(name: str, values: Iterable[int], lo: int, hi: int) -> frozenset[int]:
    out = frozenset(values)
    for v in out:
        if isinstance(v, bool) or not isinstance(v, int) or not lo <= v <= hi:
            raise InvalidPattern(f"{name} values must be integers in {lo}..{hi}; got {v!r}.")
    return out


@dataclass(frozen=True, slots=True)
class RecurrencePattern:
    """
    A stepping rule plus conjunctive filters.

    ``weekdays`` use 1..7 with Monday = 1.  An empty filter set means "no
    constraint".  ``until`` is inclusive.
    """

    start: CalendarDate
    frequency: Frequency = Frequency.DAILY
    interval: int = 1
    until: Optional[CalendarDate] = None
    weekdays: frozenset[int] = field(default_factory=frozenset)
    months: frozenset[int] = field(default_factory=frozenset)
    days_of_month: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "frequency", Frequency(self.frequency))
        except ValueError as exc:
            raise InvalidPattern(f"Unknown frequency {self.frequency!r}.") from exc
        if isinstance(self.interval, bool) or not isinstance(self.interval, int) or self.interval < 1:
            raise InvalidPattern(f"interval must be an integer >= 1; got {self.interval!r}.")
        object.__setattr__(self, "weekdays", _filter_set("weekdays", self.weekdays, 1, 7))
        object.__setattr__(self, "months", _filter_set("months", self.months, 1, 12))
        object.__setattr__(
            self, "days_of_month", _filter_set("days_of_month", self.days_of_month, 1, 31)
        )

    def matches(self, date: CalendarDate) -> bool:
        if self.weekdays and date.day_of_week() not in self.weekdays:
            return False
        if self.months and date.month not in self.months:
            return False
        if self.days_of_month and date.day not in self.days_of_month:
            return False
        return True

    def occurrences(self, limit: Optional[int] = None) -> Occurrences:
        return Occurrences(self, limit)

    def next_after(self, date: CalendarDate) -> Optional[CalendarDate]:
        """First occurrence strictly after ``date``, or None."""
        for occ in Occurrences(self, None):
            if occ > date:
                return occ
        return None


def _anchor(pattern: RecurrencePattern, k: int) -> CalendarDate:
    # Always measured from start so month clamping does not drift.
    n = k * pattern.interval
    freq = pattern.frequency
    if freq is Frequency.DAILY:
        return pattern.start.add_days(n)
    if freq is Frequency.WEEKLY:
        return pattern.start.add_days(7 * n)
    if freq is Frequency.MONTHLY:
        return pattern.start.add_months(n)
    return pattern.start.add_years(n)


def _expand(pattern: RecurrencePattern, anchor: CalendarDate) -> Iterator[CalendarDate]:
    """Candidate dates of the period that ``anchor`` opens, in order."""
    freq = pattern.frequency
    if freq is Frequency.WEEKLY and pattern.weekdays:
        first = anchor.add_days(1 - anchor.day_of_week())
        count = 7
    elif freq is Frequency.MONTHLY and (pattern.days_of_month or pattern.weekdays):
        first = CalendarDate(anchor.year, anchor.month, 1, anchor.time)
        count = days_in_month(anchor.year, anchor.month)
    elif freq is Frequency.YEARLY and (pattern.days_of_month or pattern.weekdays):
        first = CalendarDate(anchor.year, 1, 1, anchor.time)
        count = 366 if anchor.is_leap_year() else 365
    else:
        yield anchor
        return

    day = first
    for i in range(count):
        yield day
        if i + 1 < count:
            day = day.add_days(1)


class Occurrences:
    """
    Lazy, finite, restartable sequence of a pattern's occurrences.

    Each ``iter()`` starts again from ``pattern.start``; nothing is retained
    between iterations.
    """

    def __init__(self, pattern: RecurrencePattern, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0; got {limit}.")
        self._pattern = pattern
        self._limit = limit

    @property
    def pattern(self) -> RecurrencePattern:
        return self._pattern

    @property
    def limit(self) -> Optional[int]:
        return self._limit

    def __iter__(self) -> Iterator[CalendarDate]:
        pattern = self._pattern
        limit = self._limit
        if limit == 0:
            return

        start, until = pattern.start, pattern.until
        horizon = start.ordinal() + SEARCH_HORIZON_YEARS * 366
        produced = 0
        k = 0
        while True:
            try:
                anchor = _anchor(pattern, k)
                candidates = list(_expand(pattern, anchor))
            except InvalidDate:
                # Ran off the end of the supported year range.
                return
            for day in candidates:
                if day < start:
                    continue
                if until is not None and day.date_only() > until.date_only():
                    return
                if day.ordinal() > horizon:
                    logger.debug(
                        "No occurrence of %r within %d years of %s; giving up.",
                        pattern, SEARCH_HORIZON_YEARS, day,
                    )
                    return
                if not pattern.matches(day):
                    continue
                yield day
                produced += 1
                if limit is not None and produced >= limit:
                    return
                horizon = day.ordinal() + SEARCH_HORIZON_YEARS * 366
            k += 1

    def to_list(self) -> list[CalendarDate]:
        return list(self)

    def __repr__(self) -> str:
        return f"Occurrences(pattern={self._pattern!r}, limit={self._limit})"


def occurrences(pattern: RecurrencePattern, limit: Optional[int] = None) -> Occurrences:
    return Occurrences(pattern, limit)
