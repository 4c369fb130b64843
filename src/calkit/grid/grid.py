from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Optional

import numpy as np

from calkit.business import BusinessDayClassifier
from calkit.calendar import CalendarDate, Clock, SystemClock
from calkit.holidays import HolidayCalculator


@dataclass(frozen=True, slots=True)
class DayCell:
    date: CalendarDate
    in_month: bool
    is_today: bool
    is_weekend: bool
    holiday: Optional[str] = None

    @property
    def is_holiday(self) -> bool:
        return self.holiday is not None


@dataclass(frozen=True, slots=True)
class CalendarGrid:
    """Monday-first weeks covering one month, lead/trail days included."""

    year: int
    month: int
    weeks: tuple[tuple[DayCell, ...], ...]

    def __iter__(self) -> Iterator[tuple[DayCell, ...]]:
        return iter(self.weeks)

    def __len__(self) -> int:
        return len(self.weeks)

    def days(self) -> list[DayCell]:
        return [cell for week in self.weeks for cell in week]

    def in_month_days(self) -> list[DayCell]:
        return [cell for cell in self.days() if cell.in_month]

    def iso_weeks(self) -> list[int]:
        return [week[0].date.to_date().isocalendar()[1] for week in self.weeks]

    def as_array(self) -> np.ndarray:
        """``(weeks, 7)`` day numbers, 0 where the cell is outside the month."""
        return np.array(
            [[c.date.day if c.in_month else 0 for c in week] for week in self.weeks],
            dtype=np.int64,
        )


class MonthGridBuilder:
    """
    Builds CalendarGrids.  Reads the clock once per build for the today flag;
    holidays come from ``calculator`` for every year the grid touches.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        calculator: Optional[HolidayCalculator] = None,
        classifier: Optional[BusinessDayClassifier] = None,
        custom_holidays: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._clock: Clock = clock or SystemClock()
        self._calculator = calculator or HolidayCalculator()
        self._classifier = classifier or BusinessDayClassifier()
        self._custom_holidays = dict(custom_holidays or {})

    def build(self, year: int, month: int) -> CalendarGrid:
        first = CalendarDate(year, month, 1)
        last = first.last_of_month()
        lead = first.add_days(1 - first.day_of_week())
        trail = last.add_days(7 - last.day_of_week())

        today = CalendarDate.today(self._clock)
        holidays = self._calculator.holidays_between(lead, trail, self._custom_holidays)

        cells: list[DayCell] = []
        day = lead
        while day <= trail:
            cells.append(
                DayCell(
                    date=day,
                    in_month=day.month == month and day.year == year,
                    is_today=day == today,
                    is_weekend=self._classifier.is_weekend(day),
                    holiday=holidays.get(day.isoformat()),
                )
            )
            day = day.add_days(1)

        weeks = tuple(tuple(cells[i:i + 7]) for i in range(0, len(cells), 7))
        return CalendarGrid(year, month, weeks)
