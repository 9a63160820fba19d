"""The parse accumulator and the per-token apply rules.

An Accumulator holds the calendar fields of the value being parsed. It is
immutable: every applied token returns a new accumulator. The zone is
first-write-wins, so once a directive has set it later zone tokens are
ignored.

This module is not part of the public API, apart from Accumulator which
custom syntaxes receive in their apply callback.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, replace
from typing import Any, Callable

from chronoform._internal import calendar
from chronoform._internal import timezone as _tz
from chronoform._internal.constants import MICROS_PER_MILLISECOND
from chronoform.core.directive import Token
from chronoform.errors import ParseError, TimezoneError
from chronoform.options import ParseOptions


@dataclass(frozen=True)
class Accumulator:
    """The in-progress value of a parse.

    Attributes:
        year, month, day, hour, minute, second, microsecond: Calendar
            fields. The combination need not be a valid date until the
            parse finishes.
        tzinfo: The zone, or None while unset.
        meridiem: "am" or "pm" once read, resolved against the hour when
            the parse finishes.
        week, week_system: The last week number read and its numbering,
            "iso", "mon" (%W) or "sun" (%U).
        iso_year: The ISO year the week number belongs to.
        weekday: The last ISO weekday read.

    Once a week number is set, the date is rebuilt from the (year, week,
    weekday) triple whenever one of the three changes.
    """

    year: int = 1970
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    microsecond: int = 0
    tzinfo: _dt.tzinfo | None = None
    meridiem: str | None = None
    week: int | None = None
    week_system: str | None = None
    iso_year: int | None = None
    weekday: int | None = None

    @classmethod
    def from_anchor(cls, anchor: _dt.datetime) -> Accumulator:
        """Start from an anchor datetime. The anchor's zone is not copied."""
        return cls(
            anchor.year,
            anchor.month,
            anchor.day,
            anchor.hour,
            anchor.minute,
            anchor.second,
            anchor.microsecond,
        )

    def replace(self, **changes: Any) -> Accumulator:
        return replace(self, **changes)

    def with_zone(self, tzinfo: _dt.tzinfo) -> Accumulator:
        """Set the zone unless it is already set."""
        if self.tzinfo is not None:
            return self
        return replace(self, tzinfo=tzinfo)

    def current_date(self) -> _dt.date:
        """Return the date fields, with the day clamped to the month."""
        day = min(self.day, calendar.days_in_month(self.year, self.month))
        return _dt.date(self.year, self.month, day)

    def with_date(self, value: _dt.date) -> Accumulator:
        return replace(self, year=value.year, month=value.month, day=value.day)

    def resolved_hour(self) -> int:
        """Return the hour with any am/pm marker applied."""
        if self.meridiem == "pm" and self.hour < 12:
            return self.hour + 12
        if self.meridiem == "am" and self.hour == 12:
            return 0
        return self.hour

    def naive(self) -> _dt.datetime:
        """Return the fields as a naive datetime.

        Raises:
            ValueError: If the fields do not form a valid datetime.
        """
        return _dt.datetime(
            self.year,
            self.month,
            self.day,
            self.resolved_hour(),
            self.minute,
            self.second,
            self.microsecond,
        )

    def with_datetime(self, value: _dt.datetime) -> Accumulator:
        """Copy the fields of a datetime, keeping the zone."""
        return replace(
            self,
            year=value.year,
            month=value.month,
            day=value.day,
            hour=value.hour,
            minute=value.minute,
            second=value.second,
            microsecond=value.microsecond,
            meridiem=None,
        )

    def finalize(self, default_timezone: _dt.tzinfo) -> _dt.datetime:
        """Build the parsed datetime.

        Raises:
            ParseError: If the fields do not form a valid datetime.
        """
        try:
            value = self.naive()
        except ValueError as exc:
            raise ParseError(f"invalid date: {exc}") from exc
        return value.replace(tzinfo=self.tzinfo or default_timezone)


# Apply rules: (accumulator, value, options) -> accumulator

ApplyRule = Callable[[Accumulator, Any, ParseOptions], Accumulator]


def _set(field_name: str) -> ApplyRule:
    def rule(acc: Accumulator, value: Any, options: ParseOptions) -> Accumulator:
        return acc.replace(**{field_name: value})

    return rule


_WEEK_STARTS: dict[str, int] = {"mon": 1, "sun": 7}


def _rebuild_week(acc: Accumulator) -> Accumulator:
    if acc.week_system == "iso":
        # A bare ISO year means the Monday of its first week
        year = acc.year if acc.iso_year is None else acc.iso_year
        return acc.with_date(calendar.from_iso_week(year, acc.week or 1, acc.weekday or 1))
    if acc.week_system in _WEEK_STARTS:
        return acc.with_date(
            calendar.from_week_of_year(
                acc.year, acc.week, _WEEK_STARTS[acc.week_system], acc.weekday
            )
        )
    return acc


def _year(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    acc = acc.replace(year=value)
    if acc.week_system in _WEEK_STARTS:
        return _rebuild_week(acc)
    return acc


def _year2(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    return _year(acc, options.current_century() + value, options)


def _century(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    return acc.replace(year=value * 100 + acc.year % 100)


def _iso_year(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    return _rebuild_week(acc.replace(year=value, iso_year=value, week_system="iso"))


def _iso_year2(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    return _iso_year(acc, options.current_century() + value, options)


def _iso_week(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    iso_year = acc.year if acc.iso_year is None else acc.iso_year
    return _rebuild_week(acc.replace(week=value, week_system="iso", iso_year=iso_year))


def _week_of_year(system: str) -> ApplyRule:
    def rule(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
        return _rebuild_week(acc.replace(week=value, week_system=system))

    return rule


def _day_of_year(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    return acc.with_date(calendar.from_day_of_year(acc.year, value))


def _weekday(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    acc = acc.replace(weekday=value)
    if acc.week_system is not None:
        return _rebuild_week(acc)
    return acc.with_date(calendar.nearest_weekday(acc.current_date(), value))


def _weekday_sun(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    # Sunday is 0 here and 7 in ISO numbering
    return _weekday(acc, value or 7, options)


def _millisecond(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    return acc.replace(microsecond=value * MICROS_PER_MILLISECOND)


def _epoch(acc: Accumulator, value: int, options: ParseOptions) -> Accumulator:
    try:
        moment = _dt.datetime.fromtimestamp(value, _tz.utc())
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"epoch seconds out of range: {value}") from exc
    return Accumulator(tzinfo=_tz.utc()).with_datetime(moment)


def _meridiem(acc: Accumulator, value: str, options: ParseOptions) -> Accumulator:
    return acc.replace(meridiem=value.lower())


def _zone(acc: Accumulator, value: str, options: ParseOptions) -> Accumulator:
    if acc.tzinfo is not None:
        return acc
    return acc.with_zone(_tz.resolve_zone(value))


APPLY_RULES: dict[Token, ApplyRule] = {
    Token.YEAR4: _year,
    Token.YEAR2: _year2,
    Token.CENTURY: _century,
    Token.ISO_YEAR4: _iso_year,
    Token.ISO_YEAR2: _iso_year2,
    Token.MONTH: _set("month"),
    Token.MONTH_SHORT: _set("month"),
    Token.MONTH_FULL: _set("month"),
    Token.DAY: _set("day"),
    Token.DAY_OF_YEAR: _day_of_year,
    Token.ISO_WEEK: _iso_week,
    Token.WEEK_MON: _week_of_year("mon"),
    Token.WEEK_SUN: _week_of_year("sun"),
    Token.WEEKDAY_MON: _weekday,
    Token.WEEKDAY_SUN: _weekday_sun,
    Token.WEEKDAY_SHORT: _weekday,
    Token.WEEKDAY_FULL: _weekday,
    Token.HOUR24: _set("hour"),
    Token.HOUR12: _set("hour"),
    Token.MINUTE: _set("minute"),
    Token.SECOND: _set("second"),
    Token.SECOND_FRACTION: _set("microsecond"),
    Token.MILLISECOND: _millisecond,
    Token.MICROSECOND: _set("microsecond"),
    Token.EPOCH_SECONDS: _epoch,
    Token.AM_LOWER: _meridiem,
    Token.AM_UPPER: _meridiem,
    Token.ZONE_NAME: _zone,
    Token.ZONE_OFFSET: _zone,
    Token.ZONE_OFFSET_COLON: _zone,
    Token.ZONE_OFFSET_SECONDS: _zone,
}


def apply_token(
    acc: Accumulator,
    token: Token,
    value: Any,
    options: ParseOptions,
    position: int | None = None,
) -> Accumulator:
    """Fold one built-in token's value into the accumulator.

    Raises:
        ParseError: If the value cannot be applied, e.g. ISO week 53 in a
            year without one or an unknown zone name.
    """
    rule = APPLY_RULES.get(token)
    if rule is None:
        raise ParseError("token cannot be applied", token, position)
    try:
        return rule(acc, value, options)
    except TimezoneError as exc:
        raise ParseError(str(exc), token, position) from exc
    except ValueError as exc:
        raise ParseError(str(exc), token, position) from exc


__all__ = ["Accumulator", "APPLY_RULES", "apply_token"]
