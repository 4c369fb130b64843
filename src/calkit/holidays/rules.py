from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Protocol

from calkit.calendar import CalendarDate, RuleUnsatisfiable, days_in_month


class HolidayRule(Protocol):
    name: str
    moveable: ClassVar[bool]

    def resolve(self, year: int) -> CalendarDate: ...


def easter(year: int) -> CalendarDate:
    """Easter Sunday by the anonymous Gregorian computus."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return CalendarDate(year, month, day + 1)


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12; got {month}.")


def _check_weekday(weekday: int) -> None:
    if not 1 <= weekday <= 7:
        raise ValueError(f"Weekday must be in 1..7 (Monday = 1); got {weekday}.")


@dataclass(frozen=True, slots=True)
class FixedHoliday:
    name: str
    month: int
    day: int

    moveable: ClassVar[bool] = False

    def __post_init__(self) -> None:
        _check_month(self.month)
        if not 1 <= self.day <= days_in_month(2000, self.month):
            raise ValueError(f"Day {self.day} never occurs in month {self.month}.")

    def resolve(self, year: int) -> CalendarDate:
        if self.day > days_in_month(year, self.month):
            raise RuleUnsatisfiable(
                f"{self.name}: {self.month:02d}-{self.day:02d} does not exist in {year}."
            )
        return CalendarDate(year, self.month, self.day)


@dataclass(frozen=True, slots=True)
class NthWeekdayHoliday:
    """The ``n``-th ``weekday`` of ``month``, e.g. 4th Thursday of November."""

    name: str
    month: int
    weekday: int
    n: int

    moveable: ClassVar[bool] = True

    def __post_init__(self) -> None:
        _check_month(self.month)
        _check_weekday(self.weekday)
        if self.n < 1:
            raise ValueError(f"n must be >= 1; got {self.n}.")

    def resolve(self, year: int) -> CalendarDate:
        day = CalendarDate(year, self.month, 1)
        seen = 0
        while day.month == self.month:
            if day.day_of_week() == self.weekday:
                seen += 1
                if seen == self.n:
                    return day
            day = day.add_days(1)
        raise RuleUnsatisfiable(
            f"{self.name}: {year}-{self.month:02d} has only {seen} "
            f"occurrence(s) of weekday {self.weekday}; wanted #{self.n}."
        )


@dataclass(frozen=True, slots=True)
class LastWeekdayHoliday:
    """The last ``weekday`` of ``month``, e.g. last Monday of May."""

    name: str
    month: int
    weekday: int

    moveable: ClassVar[bool] = True

    def __post_init__(self) -> None:
        _check_month(self.month)
        _check_weekday(self.weekday)

    def resolve(self, year: int) -> CalendarDate:
        day = CalendarDate(year, self.month, days_in_month(year, self.month))
        while day.day_of_week() != self.weekday:
            day = day.add_days(-1)
        return day


@dataclass(frozen=True, slots=True)
class EasterHoliday:
    """Easter Sunday shifted by ``offset`` days (Good Friday = -2)."""

    name: str
    offset: int = 0

    moveable: ClassVar[bool] = True

    def resolve(self, year: int) -> CalendarDate:
        day = easter(year).add_days(self.offset)
        if day.year != year:
            raise RuleUnsatisfiable(
                f"{self.name}: Easter {self.offset:+d} days falls outside {year}."
            )
        return day


DEFAULT_RULES: tuple[HolidayRule, ...] = (
    FixedHoliday("New Year's Day", 1, 1),
    EasterHoliday("Good Friday", -2),
    EasterHoliday("Easter Monday", 1),
    FixedHoliday("Labour Day", 5, 1),
    FixedHoliday("Christmas Day", 12, 25),
    FixedHoliday("Boxing Day", 12, 26),
)
