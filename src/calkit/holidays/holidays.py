from __future__ import annotations

import datetime as _dt
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Optional, Union

import numpy as np

from calkit.calendar import CalendarDate, InvalidRange, RuleUnsatisfiable

from .rules import DEFAULT_RULES, HolidayRule

logger = logging.getLogger(__name__)

DateKey = Union[str, CalendarDate, _dt.date]


def iso_key(key: DateKey) -> str:
    """Normalise a date-ish key to the ``YYYY-MM-DD`` form HolidaySets use."""
    if isinstance(key, CalendarDate):
        return key.isoformat()
    if isinstance(key, _dt.datetime):
        return key.date().isoformat()
    if isinstance(key, _dt.date):
        return key.isoformat()
    if isinstance(key, str):
        # Validates the string; raises InvalidDate on garbage.
        return CalendarDate.from_iso(key).isoformat()
    raise TypeError(f"Expected an ISO string or a date; got {type(key).__name__}.")


class HolidaySet(Mapping[str, str]):
    """
    Read-only mapping ``ISO date -> holiday name`` for a single year.

    Lookups accept ISO strings, ``CalendarDate`` and ``datetime.date`` alike.
    """

    def __init__(self, year: int, entries: Mapping[str, str]) -> None:
        self._year = year
        self._entries: dict[str, str] = dict(sorted(entries.items()))

    @property
    def year(self) -> int:
        return self._year

    def __getitem__(self, key: DateKey) -> str:
        return self._entries[iso_key(key)]

    def __contains__(self, key: object) -> bool:
        try:
            return iso_key(key) in self._entries  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def name_for(self, date: DateKey) -> Optional[str]:
        return self._entries.get(iso_key(date))

    def dates(self) -> list[CalendarDate]:
        return [CalendarDate.from_iso(k) for k in self._entries]

    def to_datetime64(self) -> np.ndarray:
        return np.array(list(self._entries), dtype="datetime64[D]")

    def __repr__(self) -> str:
        return f"HolidaySet(year={self._year}, holidays={self._entries!r})"


class HolidayCalculator:
    """
    Evaluates a rule set into per-year HolidaySets.

    Fixed rules are applied first, then moveable rules, then caller-supplied
    custom holidays; later entries win at the same date.  Results are not
    cached.
    """

    def __init__(self, rules: Iterable[HolidayRule] = DEFAULT_RULES) -> None:
        rules = tuple(rules)
        self._rules: tuple[HolidayRule, ...] = (
            tuple(r for r in rules if not r.moveable)
            + tuple(r for r in rules if r.moveable)
        )

    @property
    def rules(self) -> tuple[HolidayRule, ...]:
        return self._rules

    def rule(self, name: str) -> HolidayRule:
        for r in self._rules:
            if r.name == name:
                return r
        raise KeyError(name)

    def with_rules(self, *rules: HolidayRule) -> HolidayCalculator:
        return HolidayCalculator(self._rules + rules)

    def holidays_for_year(
        self,
        year: int,
        custom_holidays: Optional[Mapping[DateKey, str]] = None,
    ) -> HolidaySet:
        entries: dict[str, str] = {}

        for r in self._rules:
            try:
                day = r.resolve(year)
            except RuleUnsatisfiable as exc:
                logger.debug("Skipping holiday rule %r for %d: %s", r.name, year, exc)
                continue
            entries[day.isoformat()] = r.name

        if custom_holidays:
            prefix = f"{year:04d}-"
            for key, name in custom_holidays.items():
                iso = iso_key(key)
                if not iso.startswith(prefix):
                    logger.debug("Ignoring custom holiday %s outside %d", iso, year)
                    continue
                entries[iso] = name

        return HolidaySet(year, entries)

    def holidays_between(
        self,
        start: CalendarDate,
        end: CalendarDate,
        custom_holidays: Optional[Mapping[DateKey, str]] = None,
    ) -> dict[str, str]:
        """Holidays of every year touched by ``[start, end]``, clipped to it."""
        if start.date_only() > end.date_only():
            raise InvalidRange(f"start {start} is after end {end}.")
        lo, hi = start.isoformat(), end.isoformat()
        merged: dict[str, str] = {}
        for year in range(start.year, end.year + 1):
            for iso, name in self.holidays_for_year(year, custom_holidays).items():
                if lo <= iso <= hi:
                    merged[iso] = name
        return merged

    @staticmethod
    def is_holiday(date: DateKey, holiday_set: Mapping[str, str]) -> bool:
        return iso_key(date) in holiday_set

    def __repr__(self) -> str:
        return f"HolidayCalculator(rules={[r.name for r in self._rules]})"
