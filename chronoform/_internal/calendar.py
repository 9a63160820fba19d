"""Calendar utilities for chronoform.

This module provides the calendar and name lookups the parser and
formatter depend on: leap year logic, month lengths, ISO week and ordinal
date reconstruction, week-of-year numbering and English month/weekday
names with their inverse lookups.

Weekdays use ISO numbering throughout: Monday=1, Sunday=7.

This module is not part of the public API.
"""

from __future__ import annotations

import datetime as _dt

from chronoform._internal.constants import (
    DAYS_IN_MONTH,
    MONTH_NAMES,
    WEEKDAY_NAMES,
)


def is_leap_year(year: int) -> bool:
    """Check if a year is a leap year in the proleptic Gregorian calendar.

    A year is a leap year if:
    - Divisible by 4, AND
    - NOT divisible by 100, unless also divisible by 400

    Args:
        year: The year to check.

    Returns:
        True if the year is a leap year.

    Examples:
        >>> is_leap_year(2000)  # Divisible by 400
        True
        >>> is_leap_year(1900)  # Divisible by 100 but not 400
        False
        >>> is_leap_year(2024)  # Divisible by 4 but not 100
        True
    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a given month.

    Args:
        year: The year (needed for February in leap years).
        month: The month (1-12).

    Returns:
        Number of days in the month.

    Raises:
        ValueError: If month is not in 1-12.
    """
    if month < 1 or month > 12:
        raise ValueError(f"month must be 1-12, got {month}")

    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month]


def days_in_year(year: int) -> int:
    """Return 366 for leap years, 365 otherwise."""
    return 366 if is_leap_year(year) else 365


def century(year: int) -> int:
    """Return the century number of a year (2024 -> 20)."""
    return year // 100


# Names


def month_name(month: int) -> str:
    """Return the full English name of a month (1 -> "January")."""
    if month < 1 or month > 12:
        raise ValueError(f"month must be 1-12, got {month}")
    return MONTH_NAMES[month]


def month_abbrev(month: int) -> str:
    """Return the three letter abbreviation of a month (1 -> "Jan")."""
    return month_name(month)[:3]


def weekday_name(weekday: int) -> str:
    """Return the full English name of an ISO weekday (1 -> "Monday")."""
    if weekday < 1 or weekday > 7:
        raise ValueError(f"weekday must be 1-7, got {weekday}")
    return WEEKDAY_NAMES[weekday]


def weekday_abbrev(weekday: int) -> str:
    """Return the three letter abbreviation of an ISO weekday (1 -> "Mon")."""
    return weekday_name(weekday)[:3]


def _lookup_name(name: str, names: tuple[str, ...], kind: str) -> int:
    folded = name.strip().lower()
    if folded:
        for index, full in enumerate(names):
            if not full:
                continue
            full = full.lower()
            if folded == full or folded == full[:3]:
                return index
    raise ValueError(f"unknown {kind} name: {name!r}")


def month_from_name(name: str) -> int:
    """Resolve a month name or abbreviation to its number.

    Matching is case-insensitive and accepts either the full name or the
    three letter abbreviation.

    Args:
        name: The month name, e.g. "July" or "jul".

    Returns:
        The month number (1-12).

    Raises:
        ValueError: If the name is not a month.
    """
    return _lookup_name(name, MONTH_NAMES, "month")


def weekday_from_name(name: str) -> int:
    """Resolve a weekday name or abbreviation to its ISO number.

    Args:
        name: The weekday name, e.g. "Tuesday" or "TUE".

    Returns:
        The ISO weekday (Monday=1, Sunday=7).

    Raises:
        ValueError: If the name is not a weekday.
    """
    return _lookup_name(name, WEEKDAY_NAMES, "weekday")


# Ordinal dates

# Days before each month (cumulative), for non-leap years
# Index 0 is unused, months are 1-indexed
_DAYS_BEFORE_MONTH = (0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


def day_of_year(year: int, month: int, day: int) -> int:
    """Return the 1-based day of the year for a date."""
    result = _DAYS_BEFORE_MONTH[month] + day
    if month > 2 and is_leap_year(year):
        result += 1
    return result


def from_day_of_year(year: int, doy: int) -> _dt.date:
    """Convert a 1-based day of the year to a date.

    Args:
        year: The year (for leap year calculation).
        doy: Day of year (1-366).

    Returns:
        The calendar date.

    Raises:
        ValueError: If doy is outside the year.
    """
    if doy < 1 or doy > days_in_year(year):
        raise ValueError(f"day of year must be 1-{days_in_year(year)} for {year}, got {doy}")

    remaining = doy
    for month in range(1, 13):
        dim = days_in_month(year, month)
        if remaining <= dim:
            return _dt.date(year, month, remaining)
        remaining -= dim

    # Should never reach here for valid doy
    raise ValueError(f"Invalid day of year: {doy} for year {year}")


# Weeks


def iso_week(value: _dt.date) -> tuple[int, int, int]:
    """Return the ISO (year, week, weekday) triple of a date."""
    iso = value.isocalendar()
    return (iso[0], iso[1], iso[2])


def from_iso_week(year: int, week: int, weekday: int) -> _dt.date:
    """Reconstruct a date from an ISO (year, week, weekday) triple.

    Raises:
        ValueError: If the week does not exist in that ISO year.
    """
    return _dt.date.fromisocalendar(year, week, weekday)


def week_of_year(value: _dt.date, first_weekday: int) -> int:
    """Return the week number of a date, strftime style.

    Week 1 starts on the first `first_weekday` of the year; days before it
    belong to week 0. Monday-first numbering matches %W and Sunday-first
    numbering matches %U.

    Args:
        value: The date.
        first_weekday: ISO weekday that starts a week (1 or 7).

    Returns:
        The week number (0-53).
    """
    yday = value.timetuple().tm_yday - 1
    offset = (value.isoweekday() - first_weekday) % 7
    return (yday + 7 - offset) // 7


def from_week_of_year(
    year: int,
    week: int,
    first_weekday: int,
    weekday: int | None = None,
) -> _dt.date:
    """Return a date in a strftime-style week.

    Without a weekday this is the first day of the week; week 0 is then
    taken to start on January 1st.

    Args:
        year: The calendar year.
        week: The week number (0-53).
        first_weekday: ISO weekday that starts a week (1 or 7).
        weekday: ISO weekday within the week, if known.

    Raises:
        ValueError: If the date falls outside the year.

    Examples:
        >>> from_week_of_year(2024, 0, 7, weekday=6)  # %U week 0, Saturday
        datetime.date(2024, 1, 6)
    """
    jan1 = _dt.date(year, 1, 1)
    if week == 0 and weekday is None:
        return jan1
    first = jan1 + _dt.timedelta(days=(first_weekday - jan1.isoweekday()) % 7)
    result = first + _dt.timedelta(weeks=week - 1)
    if weekday is not None:
        result += _dt.timedelta(days=(weekday - first_weekday) % 7)
    if result.year != year:
        raise ValueError(f"week {week} is outside of {year}")
    return result


def nearest_weekday(value: _dt.date, weekday: int) -> _dt.date:
    """Shift a date to the nearest date falling on an ISO weekday.

    The shift is at most three days in either direction.

    Examples:
        >>> nearest_weekday(date(2024, 1, 17), 1)  # Wednesday -> Monday
        datetime.date(2024, 1, 15)
        >>> nearest_weekday(date(2024, 1, 17), 7)  # Wednesday -> Sunday
        datetime.date(2024, 1, 14)
    """
    delta = (weekday - value.isoweekday()) % 7
    if delta > 3:
        delta -= 7
    return value + _dt.timedelta(days=delta)


__all__ = [
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "century",
    "month_name",
    "month_abbrev",
    "weekday_name",
    "weekday_abbrev",
    "month_from_name",
    "weekday_from_name",
    "day_of_year",
    "from_day_of_year",
    "iso_week",
    "from_iso_week",
    "week_of_year",
    "from_week_of_year",
    "nearest_weekday",
]
