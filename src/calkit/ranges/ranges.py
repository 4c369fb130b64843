from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Optional, Union

from calkit.calendar import CalendarDate, InvalidRange


@dataclass(frozen=True, slots=True)
class DateRange:
    """
    Closed date interval ``[start, end]``; both bounds are inclusive.

    Operations that may have no answer (``overlap``, ``merge``) return
    ``None`` instead of raising, and ``split`` returns a 1-tuple when the
    split point is not strictly inside the range.
    """

    start: CalendarDate
    end: CalendarDate

    def __post_init__(self) -> None:
        if self.start.date_only() > self.end.date_only():
            raise InvalidRange(f"start {self.start} is after end {self.end}.")

    @classmethod
    def month(cls, year: int, month: int) -> DateRange:
        first = CalendarDate(year, month, 1)
        return cls(first, first.last_of_month())

    @classmethod
    def single(cls, date: CalendarDate) -> DateRange:
        return cls(date, date)

    # ── membership ───────────────────────────────────────────────────────

    def contains(self, item: Union[CalendarDate, DateRange]) -> bool:
        if isinstance(item, DateRange):
            return self.start <= item.start and item.end <= self.end
        return self.start <= item <= self.end

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, (CalendarDate, DateRange)):
            return False
        return self.contains(item)

    def __len__(self) -> int:
        return self.start.days_until(self.end) + 1

    def __iter__(self) -> Iterator[CalendarDate]:
        return self.days()

    def days(self) -> Iterator[CalendarDate]:
        day = self.start
        for _ in range(len(self)):
            yield day
            day = day.add_days(1)

    # ── pairwise ─────────────────────────────────────────────────────────

    def overlaps(self, other: DateRange) -> bool:
        return self.start <= other.end and self.end >= other.start

    def overlap(self, other: DateRange) -> Optional[DateRange]:
        if not self.overlaps(other):
            return None
        return DateRange(max(self.start, other.start), min(self.end, other.end))

    def is_adjacent(self, other: DateRange) -> bool:
        return (
            self.end.ordinal() + 1 == other.start.ordinal()
            or other.end.ordinal() + 1 == self.start.ordinal()
        )

    def merge(self, other: DateRange) -> Optional[DateRange]:
        if not (self.overlaps(other) or self.is_adjacent(other)):
            return None
        return DateRange(min(self.start, other.start), max(self.end, other.end))

    def split(self, date: CalendarDate) -> tuple[DateRange, ...]:
        """
        ``[start, date - 1]`` and ``[date, end]`` when ``date`` is strictly
        inside the range, otherwise ``(self,)``.
        """
        if not self.start < date < self.end:
            return (self,)
        return DateRange(self.start, date.add_days(-1)), DateRange(date, self.end)

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


def coalesce(ranges: Iterable[DateRange]) -> list[DateRange]:
    """Merge overlapping and adjacent ranges into a sorted, minimal list."""
    out: list[DateRange] = []
    for r in sorted(ranges, key=lambda r: (r.start, r.end)):
        if out:
            merged = out[-1].merge(r)
            if merged is not None:
                out[-1] = merged
                continue
        out.append(r)
    return out
