"""Tests for calendar helpers."""

from datetime import date, timedelta

import pytest

from chronoform._internal import calendar


class TestBasics:
    """Tests for leap years and month lengths."""

    @pytest.mark.parametrize(
        "year,expected",
        [(2000, True), (1900, False), (2024, True), (2023, False)],
    )
    def test_is_leap_year(self, year, expected):
        """Gregorian leap year rules."""
        assert calendar.is_leap_year(year) is expected

    def test_days_in_february(self):
        """February has 29 days in leap years."""
        assert calendar.days_in_month(2024, 2) == 29
        assert calendar.days_in_month(2023, 2) == 28

    def test_bad_month(self):
        """Months outside 1-12 are rejected."""
        with pytest.raises(ValueError):
            calendar.days_in_month(2024, 13)


class TestNames:
    """Tests for name lookups."""

    @pytest.mark.parametrize("name", ["July", "jul", "JULY", " Jul "])
    def test_month_from_name(self, name):
        """Full names and abbreviations in any case."""
        assert calendar.month_from_name(name) == 7

    def test_month_from_partial_name(self):
        """Only the full name or the three letter abbreviation match."""
        with pytest.raises(ValueError):
            calendar.month_from_name("Sept")

    def test_weekday_from_name(self):
        """Weekday names resolve to ISO numbers."""
        assert calendar.weekday_from_name("TUE") == 2
        assert calendar.weekday_from_name("sunday") == 7

    def test_weekday_from_empty(self):
        """Empty names are rejected."""
        with pytest.raises(ValueError):
            calendar.weekday_from_name("")

    def test_names(self):
        """Forward lookups."""
        assert calendar.month_name(9) == "September"
        assert calendar.month_abbrev(9) == "Sep"
        assert calendar.weekday_name(1) == "Monday"
        assert calendar.weekday_abbrev(7) == "Sun"


class TestOrdinalDates:
    """Tests for day of year conversion."""

    def test_day_of_year_leap(self):
        """March 1st is day 61 in a leap year."""
        assert calendar.day_of_year(2024, 3, 1) == 61
        assert calendar.day_of_year(2023, 3, 1) == 60

    def test_from_day_of_year(self):
        """Day 365 of a common year is December 31st."""
        assert calendar.from_day_of_year(2023, 365) == date(2023, 12, 31)

    def test_from_day_of_year_out_of_range(self):
        """Day 366 needs a leap year."""
        with pytest.raises(ValueError):
            calendar.from_day_of_year(2023, 366)


class TestWeeks:
    """Tests for week numbering."""

    def test_iso_week_across_year(self):
        """2024-12-30 is in ISO week 1 of 2025."""
        assert calendar.iso_week(date(2024, 12, 30)) == (2025, 1, 1)

    def test_from_iso_week(self):
        """ISO triples convert back to dates."""
        assert calendar.from_iso_week(2025, 1, 1) == date(2024, 12, 30)

    def test_week_of_year_matches_strftime(self):
        """Monday-first and Sunday-first weeks agree with strftime."""
        day = date(2023, 12, 20)
        for _ in range(30):
            assert calendar.week_of_year(day, 1) == int(day.strftime("%W"))
            assert calendar.week_of_year(day, 7) == int(day.strftime("%U"))
            day += timedelta(days=1)

    def test_from_week_of_year_zero(self):
        """Week 0 starts on January 1st."""
        assert calendar.from_week_of_year(2023, 0, 1) == date(2023, 1, 1)

    def test_from_week_of_year(self):
        """Week 1 starts on the first given weekday."""
        assert calendar.from_week_of_year(2023, 1, 1) == date(2023, 1, 2)
        assert calendar.from_week_of_year(2023, 1, 7) == date(2023, 1, 1)

    @pytest.mark.parametrize(
        "week,first_weekday,weekday,expected",
        [
            (0, 7, 6, date(2024, 1, 6)),
            (0, 1, 7, date(2023, 1, 1)),
            (10, 1, 5, date(2024, 3, 8)),
            (53, 1, 2, date(2024, 12, 31)),
        ],
    )
    def test_from_week_of_year_with_weekday(self, week, first_weekday, weekday, expected):
        """A weekday picks the day within the week."""
        year = expected.year
        assert calendar.from_week_of_year(year, week, first_weekday, weekday) == expected

    def test_from_week_of_year_weekday_before_year(self):
        """Week 0 days before January 1st are rejected."""
        with pytest.raises(ValueError, match="outside"):
            calendar.from_week_of_year(2024, 0, 7, weekday=7)

    def test_from_week_of_year_outside_year(self):
        """Weeks that start in the next year are rejected."""
        with pytest.raises(ValueError, match="outside"):
            calendar.from_week_of_year(2024, 53, 7)

    @pytest.mark.parametrize(
        "weekday,expected",
        [(1, date(2024, 1, 15)), (3, date(2024, 1, 17)), (6, date(2024, 1, 20)), (7, date(2024, 1, 14))],
    )
    def test_nearest_weekday(self, weekday, expected):
        """Shifts stay within three days."""
        assert calendar.nearest_weekday(date(2024, 1, 17), weekday) == expected
