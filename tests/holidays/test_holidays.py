"""
tests/holidays/test_holidays.py

Covers:
  - Gregorian Easter computus
  - Fixed, nth-weekday, last-weekday and Easter-relative rules
  - Unsatisfiable rules (raise from resolve, skipped by the calculator)
  - Merge order: fixed < moveable < custom
  - HolidaySet lookups and conversions
  - Multi-year spans
"""

import datetime

import numpy as np
import pytest

from calkit.calendar import CalendarDate, InvalidRange, RuleUnsatisfiable
from calkit.holidays import (
    DEFAULT_RULES,
    EasterHoliday,
    FixedHoliday,
    HolidayCalculator,
    HolidaySet,
    LastWeekdayHoliday,
    NthWeekdayHoliday,
    easter,
)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def calc():
    """Default western rule set."""
    return HolidayCalculator()


@pytest.fixture
def us_calc():
    return HolidayCalculator([
        FixedHoliday("New Year's Day", 1, 1),
        NthWeekdayHoliday("Martin Luther King Jr. Day", 1, 1, 3),
        LastWeekdayHoliday("Memorial Day", 5, 1),
        FixedHoliday("Independence Day", 7, 4),
        NthWeekdayHoliday("Labor Day", 9, 1, 1),
        NthWeekdayHoliday("Thanksgiving", 11, 4, 4),
        FixedHoliday("Christmas Day", 12, 25),
    ])


# ── Easter ────────────────────────────────────────────────────────────────────

class TestEaster:

    @pytest.mark.parametrize("year, month, day", [
        (2024, 3, 31),
        (2025, 4, 20),
        (2019, 4, 21),
        (2000, 4, 23),
        (1818, 3, 22),   # earliest possible
        (2038, 4, 25),   # latest possible
    ])
    def test_known_dates(self, year, month, day):
        assert easter(year) == CalendarDate(year, month, day)

    def test_always_a_sunday(self):
        for year in range(1900, 2100):
            assert easter(year).day_of_week() == 7

    def test_easter_relative_rules(self):
        assert EasterHoliday("Good Friday", -2).resolve(2024) == CalendarDate(2024, 3, 29)
        assert EasterHoliday("Easter Monday", 1).resolve(2025) == CalendarDate(2025, 4, 21)
        assert EasterHoliday("Ascension Day", 39).resolve(2024) == CalendarDate(2024, 5, 9)

    def test_offset_leaving_the_year_is_unsatisfiable(self):
        with pytest.raises(RuleUnsatisfiable):
            EasterHoliday("Too far", 300).resolve(2024)


# ── Rules ─────────────────────────────────────────────────────────────────────

class TestRules:

    def test_nth_weekday(self):
        assert NthWeekdayHoliday("Thanksgiving", 11, 4, 4).resolve(2024) == CalendarDate(2024, 11, 28)
        assert NthWeekdayHoliday("MLK", 1, 1, 3).resolve(2024) == CalendarDate(2024, 1, 15)

    def test_fifth_weekday_when_it_exists(self):
        # February 2024 has five Thursdays.
        assert NthWeekdayHoliday("x", 2, 4, 5).resolve(2024) == CalendarDate(2024, 2, 29)

    def test_fifth_weekday_missing_raises(self):
        # February 2024 has only four Mondays.
        with pytest.raises(RuleUnsatisfiable):
            NthWeekdayHoliday("x", 2, 1, 5).resolve(2024)

    def test_last_weekday(self):
        assert LastWeekdayHoliday("Memorial Day", 5, 1).resolve(2024) == CalendarDate(2024, 5, 27)
        # Last day of the month is itself the weekday.
        assert LastWeekdayHoliday("x", 3, 7).resolve(2024) == CalendarDate(2024, 3, 31)

    def test_fixed_leap_day(self):
        rule = FixedHoliday("Leap Day", 2, 29)
        assert rule.resolve(2024) == CalendarDate(2024, 2, 29)
        with pytest.raises(RuleUnsatisfiable):
            rule.resolve(2023)

    @pytest.mark.parametrize("factory", [
        lambda: FixedHoliday("x", 2, 30),
        lambda: FixedHoliday("x", 13, 1),
        lambda: NthWeekdayHoliday("x", 1, 8, 1),
        lambda: NthWeekdayHoliday("x", 1, 1, 0),
        lambda: LastWeekdayHoliday("x", 0, 1),
    ])
    def test_invalid_rules_raise(self, factory):
        with pytest.raises(ValueError):
            factory()


# ── Calculator ────────────────────────────────────────────────────────────────

class TestCalculator:

    def test_default_rules_2024(self, calc):
        hols = calc.holidays_for_year(2024)
        assert dict(hols) == {
            "2024-01-01": "New Year's Day",
            "2024-03-29": "Good Friday",
            "2024-04-01": "Easter Monday",
            "2024-05-01": "Labour Day",
            "2024-12-25": "Christmas Day",
            "2024-12-26": "Boxing Day",
        }
        assert hols.year == 2024

    def test_us_rules_2024(self, us_calc):
        hols = us_calc.holidays_for_year(2024)
        assert hols["2024-05-27"] == "Memorial Day"
        assert hols["2024-09-02"] == "Labor Day"
        assert hols["2024-11-28"] == "Thanksgiving"
        assert len(hols) == 7

    def test_unsatisfiable_rule_is_skipped(self):
        calc = HolidayCalculator([
            FixedHoliday("New Year's Day", 1, 1),
            NthWeekdayHoliday("Fifth Monday", 2, 1, 5),
        ])
        hols = calc.holidays_for_year(2024)
        assert list(hols) == ["2024-01-01"]

    def test_leap_day_rule_only_in_leap_years(self):
        calc = HolidayCalculator([FixedHoliday("Leap Day", 2, 29)])
        assert len(calc.holidays_for_year(2023)) == 0
        assert len(calc.holidays_for_year(2024)) == 1

    def test_moveable_overrides_fixed(self):
        # Listed first, but moveable rules are applied after fixed ones.
        calc = HolidayCalculator([
            EasterHoliday("Easter Sunday"),
            FixedHoliday("Some Fixed Day", 3, 31),
        ])
        assert calc.holidays_for_year(2024)["2024-03-31"] == "Easter Sunday"

    def test_custom_overrides_everything(self, calc):
        hols = calc.holidays_for_year(
            2024, {"2024-12-25": "Xmas", CalendarDate(2024, 6, 14): "Company Day"}
        )
        assert hols["2024-12-25"] == "Xmas"
        assert hols["2024-06-14"] == "Company Day"

    def test_custom_outside_year_ignored(self, calc):
        hols = calc.holidays_for_year(2024, {"2025-06-14": "Next Year"})
        assert "2025-06-14" not in hols

    def test_custom_with_bad_key_raises(self, calc):
        with pytest.raises(ValueError):
            calc.holidays_for_year(2024, {"2024-02-30": "Nope"})

    def test_fresh_set_per_call(self, calc):
        a = calc.holidays_for_year(2024)
        b = calc.holidays_for_year(2024)
        assert a is not b
        assert dict(a) == dict(b)

    def test_is_holiday(self, calc):
        hols = calc.holidays_for_year(2024)
        assert calc.is_holiday(CalendarDate(2024, 3, 29), hols)
        assert not calc.is_holiday(CalendarDate(2024, 3, 28), hols)
        assert calc.is_holiday("2024-12-26", {"2024-12-26": "Boxing Day"})

    def test_with_rules_and_lookup(self, calc):
        extended = calc.with_rules(LastWeekdayHoliday("Spring Bank Holiday", 5, 1))
        assert extended.rule("Spring Bank Holiday").month == 5
        assert len(extended.rules) == len(DEFAULT_RULES) + 1
        with pytest.raises(KeyError):
            calc.rule("Spring Bank Holiday")

    def test_holidays_between_spans_years(self, calc):
        hols = calc.holidays_between(CalendarDate(2024, 12, 20), CalendarDate(2025, 1, 5))
        assert hols == {
            "2024-12-25": "Christmas Day",
            "2024-12-26": "Boxing Day",
            "2025-01-01": "New Year's Day",
        }

    def test_holidays_between_rejects_inverted_span(self, calc):
        with pytest.raises(InvalidRange):
            calc.holidays_between(CalendarDate(2025, 1, 5), CalendarDate(2024, 12, 20))

    def test_holidays_between_same_day_inverted_times(self, calc):
        hols = calc.holidays_between(
            CalendarDate(2024, 12, 25, datetime.time(18)),
            CalendarDate(2024, 12, 25, datetime.time(8)),
        )
        assert hols == {"2024-12-25": "Christmas Day"}


# ── HolidaySet ────────────────────────────────────────────────────────────────

class TestHolidaySet:

    @pytest.fixture
    def hols(self):
        return HolidaySet(2024, {"2024-12-25": "Christmas Day", "2024-01-01": "New Year's Day"})

    def test_membership_accepts_any_date_form(self, hols):
        assert "2024-12-25" in hols
        assert CalendarDate(2024, 12, 25) in hols
        assert datetime.date(2024, 12, 25) in hols
        assert CalendarDate(2024, 12, 24) not in hols

    def test_membership_of_junk_is_false(self, hols):
        assert 42 not in hols
        assert "garbage" not in hols

    def test_sorted_iteration(self, hols):
        assert list(hols) == ["2024-01-01", "2024-12-25"]

    def test_name_for(self, hols):
        assert hols.name_for(CalendarDate(2024, 1, 1)) == "New Year's Day"
        assert hols.name_for(CalendarDate(2024, 1, 2)) is None

    def test_dates(self, hols):
        assert hols.dates() == [CalendarDate(2024, 1, 1), CalendarDate(2024, 12, 25)]

    def test_to_datetime64(self, hols):
        arr = hols.to_datetime64()
        assert arr.dtype == np.dtype("datetime64[D]")
        np.testing.assert_array_equal(
            arr, np.array(["2024-01-01", "2024-12-25"], dtype="datetime64[D]")
        )

    def test_read_only(self, hols):
        with pytest.raises(TypeError):
            hols["2024-07-04"] = "Nope"
