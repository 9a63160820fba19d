"""Render a date or datetime with a format program.

Literal directives emit their character, leaf directives render their
field and pad it to the directive's width, and compound directives render
their nested program. Zulu compounds render a copy of the value converted
to UTC; the caller's value is never modified.

Naive datetimes are taken to be UTC.
"""

from __future__ import annotations

import datetime as _dt
import logging
from typing import Callable

from chronoform._internal import calendar
from chronoform._internal import timezone as _tz
from chronoform._internal.constants import MICROS_PER_MILLISECOND, SECONDS_PER_DAY
from chronoform.core.directive import Directive, Kind, PadClass, Token
from chronoform.core.program import FormatProgram, compile_format, get_syntax
from chronoform.core.registry import TIME_TOKENS, ZONE_OFFSET_TOKENS
from chronoform.errors import FormatError

logger = logging.getLogger(__name__)


def format_datetime(value: _dt.date, program: FormatProgram) -> str:
    """Render a value with a compiled program.

    Args:
        value: A datetime or a date. Time of day and zone directives
            require a datetime.
        program: The compiled format program.

    Returns:
        The rendered text.

    Raises:
        TypeError: If value is not a date or datetime.
        FormatError: If a directive cannot be rendered for the value.

    Examples:
        >>> program = compile_format("{YYYY}-{0M}-{0D}")
        >>> format_datetime(date(2024, 1, 15), program)
        '2024-01-15'
    """
    if not isinstance(value, _dt.date):
        raise TypeError(f"expected a date or datetime, got {type(value).__name__}")
    try:
        return "".join(_render_program(value, program))
    except FormatError as exc:
        logger.debug("formatting %r with %r failed: %s", value, program.source, exc)
        raise


def _render_program(value: _dt.date, program: FormatProgram) -> list[str]:
    out: list[str] = []
    for directive in program.directives:
        if directive.is_literal:
            out.append(directive.value)
        elif directive.is_compound:
            out.extend(_render_compound(value, directive))
        elif directive.is_custom:
            out.append(_render_custom(value, directive, program.syntax))
        else:
            out.append(render_directive(value, directive))
    return out


def _render_compound(value: _dt.date, directive: Directive) -> list[str]:
    nested = directive.nested
    derived = value
    if nested.zulu and isinstance(value, _dt.datetime):
        derived = _tz.to_utc(value)
    return _render_program(derived, compile_format(nested.format_string, nested.syntax))


def _render_custom(value: _dt.date, directive: Directive, syntax: str) -> str:
    render = get_syntax(syntax).render
    if render is None:
        raise FormatError("token cannot be formatted", directive.token)
    return render(value, directive)


def render_directive(value: _dt.date, directive: Directive) -> str:
    """Render one built-in leaf directive, padded.

    Raises:
        FormatError: If the padding contradicts the directive or the token
            needs a time of day and value is a date.
    """
    token = directive.token
    _check_padding(directive)
    if token in TIME_TOKENS and not isinstance(value, _dt.datetime):
        raise FormatError(f"{type(value).__name__} has no time of day", token)

    text = _RENDERERS[token](value)
    return pad(text, directive)


def pad(text: str, directive: Directive) -> str:
    """Left-pad rendered text to the directive's padded width.

    The target width is the directive's minimum width plus the pad count,
    capped at its maximum width.
    """
    padding = directive.padding
    if padding is None or padding.pad_class is PadClass.NONE or padding.count == 0:
        return text
    if directive.kind is Kind.FRACTION:
        return text
    width = directive.width
    target = width.min + padding.count
    if width.max is not None:
        target = min(target, width.max)
    return text.rjust(target, padding.char)


def _check_padding(directive: Directive) -> None:
    padding = directive.padding
    if padding is None:
        return
    if directive.token in ZONE_OFFSET_TOKENS and padding.pad_class is not PadClass.ZERO:
        raise FormatError("timezone offsets can only be zero padded", directive.token)
    if directive.token is Token.EPOCH_SECONDS and padding.pad_class is not PadClass.NONE:
        raise FormatError("epoch seconds cannot be padded", directive.token)


# Renderers: value -> unpadded text


def _hour12(value: _dt.datetime) -> str:
    return str(value.hour % 12 or 12)


def _fraction(value: _dt.datetime) -> str:
    micros = value.microsecond
    if micros == 0:
        return ""
    if micros % MICROS_PER_MILLISECOND == 0:
        return f".{micros // MICROS_PER_MILLISECOND:03d}"
    return f".{micros:06d}"


def _epoch(value: _dt.datetime) -> str:
    delta = _tz.to_utc(value) - _dt.datetime(1970, 1, 1, tzinfo=_tz.utc())
    return str(delta.days * SECONDS_PER_DAY + delta.seconds)


def _am(value: _dt.datetime) -> str:
    return "am" if value.hour < 12 else "pm"


_RENDERERS: dict[Token, Callable[[_dt.date], str]] = {
    Token.YEAR4: lambda v: str(v.year),
    Token.YEAR2: lambda v: str(v.year % 100),
    Token.CENTURY: lambda v: str(calendar.century(v.year)),
    Token.ISO_YEAR4: lambda v: str(calendar.iso_week(v)[0]),
    Token.ISO_YEAR2: lambda v: str(calendar.iso_week(v)[0] % 100),
    Token.MONTH: lambda v: str(v.month),
    Token.MONTH_SHORT: lambda v: calendar.month_abbrev(v.month),
    Token.MONTH_FULL: lambda v: calendar.month_name(v.month),
    Token.DAY: lambda v: str(v.day),
    Token.DAY_OF_YEAR: lambda v: str(calendar.day_of_year(v.year, v.month, v.day)),
    Token.ISO_WEEK: lambda v: str(calendar.iso_week(v)[1]),
    Token.WEEK_MON: lambda v: str(calendar.week_of_year(v, 1)),
    Token.WEEK_SUN: lambda v: str(calendar.week_of_year(v, 7)),
    Token.WEEKDAY_MON: lambda v: str(v.isoweekday()),
    Token.WEEKDAY_SUN: lambda v: str(v.isoweekday() % 7),
    Token.WEEKDAY_SHORT: lambda v: calendar.weekday_abbrev(v.isoweekday()),
    Token.WEEKDAY_FULL: lambda v: calendar.weekday_name(v.isoweekday()),
    Token.HOUR24: lambda v: str(v.hour),
    Token.HOUR12: _hour12,
    Token.MINUTE: lambda v: str(v.minute),
    Token.SECOND: lambda v: str(v.second),
    Token.SECOND_FRACTION: _fraction,
    Token.MILLISECOND: lambda v: str(v.microsecond // MICROS_PER_MILLISECOND),
    Token.MICROSECOND: lambda v: str(v.microsecond),
    Token.EPOCH_SECONDS: _epoch,
    Token.AM_LOWER: _am,
    Token.AM_UPPER: lambda v: _am(v).upper(),
    Token.ZONE_NAME: _tz.zone_name,
    Token.ZONE_OFFSET: lambda v: _tz.offset_string(v),
    Token.ZONE_OFFSET_COLON: lambda v: _tz.offset_string(v, colon=True),
    Token.ZONE_OFFSET_SECONDS: lambda v: _tz.offset_string(v, seconds=True),
}


__all__ = ["format_datetime", "render_directive", "pad"]
