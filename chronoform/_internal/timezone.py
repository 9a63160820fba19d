"""Timezone resolution for chronoform.

Zone tokens read from input (offsets such as "+0530", designators such as
"Z" or "GMT", RFC 822 abbreviations and IANA names) are resolved to
tzinfo objects from python-dateutil. The formatter uses the same module
to render offsets and zone names and to derive UTC values.

Naive datetimes are interpreted as UTC everywhere in this module.

This module is not part of the public API.
"""

from __future__ import annotations

import datetime as _dt
import re

from dateutil import tz

from chronoform._internal.constants import (
    MAX_UTC_OFFSET_SECONDS,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from chronoform.errors import TimezoneError, UnknownTimezoneError

_UTC_DESIGNATORS = frozenset({"Z", "UT", "UTC", "GMT"})

# Characters the parser captures for a zone name
_ZONE_NAME_PATTERN = re.compile(r"[A-Za-z0-9/_+\-:]+")

# RFC 822 section 5 North American zones, in hours east of UTC
_RFC822_ZONES: dict[str, int] = {
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}

# RFC 822 military zones: A is -1 and M is -12, N is +1 and Y is +12
_MILITARY_ZONES: dict[str, int] = {"A": -1, "M": -12, "N": 1, "Y": 12}

_OFFSET_PATTERN = re.compile(
    r"^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})(?::?(?P<seconds>\d{2}))?$"
)


def utc() -> _dt.tzinfo:
    """Return the UTC tzinfo."""
    return tz.tzutc()


def parse_offset(text: str) -> _dt.tzinfo:
    """Parse a numeric UTC offset.

    Accepts "+HHMM", "+HH:MM", "+HH:MM:SS" and their negative forms.

    Args:
        text: The offset string.

    Returns:
        A fixed-offset tzinfo.

    Raises:
        TimezoneError: If the string is not an offset or is out of range.

    Examples:
        >>> parse_offset("+05:30").utcoffset(None)
        datetime.timedelta(seconds=19800)
    """
    match = _OFFSET_PATTERN.match(text)
    if match is None:
        raise TimezoneError(f"invalid UTC offset: {text!r}")

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds") or 0)
    if minutes > 59 or seconds > 59:
        raise TimezoneError(f"invalid UTC offset: {text!r}")

    total = hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE + seconds
    if total > MAX_UTC_OFFSET_SECONDS:
        raise TimezoneError(f"UTC offset out of range: {text!r}")
    if match.group("sign") == "-":
        total = -total
    if total == 0:
        return utc()
    return tz.tzoffset(None, total)


def resolve_zone(token: str) -> _dt.tzinfo:
    """Resolve a zone token from input text to a tzinfo.

    Resolution order:
        1. UTC designators (Z, UT, UTC, GMT), case-insensitive
        2. Numeric offsets (+HHMM, +HH:MM, +HH:MM:SS)
        3. RFC 822 abbreviations (EST, EDT, CST, CDT, MST, MDT, PST, PDT)
        4. RFC 822 military letters (A, M, N, Y)
        5. Anything dateutil's gettz understands, such as IANA names

    Args:
        token: The zone token.

    Returns:
        The resolved tzinfo.

    Raises:
        TimezoneError: If a numeric offset is out of range.
        UnknownTimezoneError: If the token names no known zone.
    """
    name = token.strip()
    if not name:
        raise UnknownTimezoneError(token)

    upper = name.upper()
    if upper in _UTC_DESIGNATORS:
        return utc()
    if name[0] in "+-":
        return parse_offset(name)
    if upper in _RFC822_ZONES:
        return tz.tzoffset(upper, _RFC822_ZONES[upper] * SECONDS_PER_HOUR)
    if upper in _MILITARY_ZONES:
        return tz.tzoffset(upper, _MILITARY_ZONES[upper] * SECONDS_PER_HOUR)

    zone = tz.gettz(name)
    if zone is None:
        raise UnknownTimezoneError(token)
    return zone


def to_utc(value: _dt.datetime) -> _dt.datetime:
    """Return the same instant expressed in UTC.

    The caller's value is left untouched; naive values are taken as UTC.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=utc())
    return value.astimezone(utc())


def offset_string(
    value: _dt.datetime,
    colon: bool = False,
    seconds: bool = False,
) -> str:
    """Render the UTC offset of a datetime.

    Args:
        value: The datetime. Naive values render as +0000.
        colon: Separate hours and minutes with ":".
        seconds: Include the seconds field (implies colon).

    Returns:
        The offset, e.g. "-0500", "+05:30" or "+05:30:00".
    """
    offset = value.utcoffset() or _dt.timedelta(0)
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    total = abs(total)
    hours, rest = divmod(total, SECONDS_PER_HOUR)
    minutes, secs = divmod(rest, SECONDS_PER_MINUTE)

    if seconds:
        return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}"
    if colon:
        return f"{sign}{hours:02d}:{minutes:02d}"
    return f"{sign}{hours:02d}{minutes:02d}"


def zone_name(value: _dt.datetime) -> str:
    """Render the zone abbreviation of a datetime.

    The name is only used when resolve_zone reads it back as the same
    offset at that instant. Otherwise, or when the tzinfo carries no
    name, the "+HH:MM" offset is rendered instead.

    Examples:
        >>> zone_name(datetime(2024, 1, 15, tzinfo=tz.gettz("America/New_York")))
        'EST'
        >>> zone_name(datetime(2024, 1, 15, tzinfo=tz.tzoffset("XYZ", 3600)))
        '+01:00'
    """
    if value.tzinfo is None:
        return "UTC"
    name = value.tzname()
    if name and _ZONE_NAME_PATTERN.fullmatch(name):
        try:
            zone = resolve_zone(name)
        except TimezoneError:
            zone = None
        if zone is not None and zone.utcoffset(value.replace(tzinfo=None)) == value.utcoffset():
            return name
    return offset_string(value, colon=True)


__all__ = [
    "utc",
    "parse_offset",
    "resolve_zone",
    "to_utc",
    "offset_string",
    "zone_name",
]
