"""A humanized custom syntax.

Format strings contain the following directives:

    {day}    - the phonetic ordinal day of the month, e.g. "third"
    {month}  - the full month name, e.g. "July"
    {year}   - the four digit year, e.g. 2015
    {shift}  - a relative shift: "currently", or
               "<n> <seconds|minutes|hours|days|weeks|months|years> <before|after>"

The shift directive is heavier than the others, so it is applied after the
day, month and year have built the date it shifts.

Examples:
    >>> from chronoform.extensions import humanized
    >>> humanized.register()
    >>> chronoform.parse(
    ...     "3 days before the fourth of July, 2015",
    ...     "{shift} the {day} of {month}, {year}",
    ...     syntax="humanized",
    ... )
    datetime.datetime(2015, 7, 1, 0, 0, tzinfo=tzutc())
"""

from __future__ import annotations

import datetime as _dt
import re
from typing import Any

from dateutil.relativedelta import relativedelta

from chronoform.core.directive import Directive, Kind, Token
from chronoform.core.program import UNRECOGNIZED, Syntax, register_syntax
from chronoform.core.registry import directive_for
from chronoform.errors import CompileError, FormatError, ParseError, UnknownDirectiveError
from chronoform.parsing.accumulator import Accumulator

NAME = "humanized"

DAY_PHONETIC = "day_phonetic"
DATE_SHIFT = "date_shift"

# Heavier than every built-in directive
SHIFT_WEIGHT = 99

DAYS: tuple[str, ...] = (
    "first", "second", "third", "fourth", "fifth",
    "sixth", "seventh", "eighth", "ninth", "tenth",
    "eleventh", "twelfth", "thirteenth", "fourteenth", "fifteenth",
    "sixteenth", "seventeenth", "eighteenth", "nineteenth", "twentieth",
    "twenty-first", "twenty-second", "twenty-third", "twenty-fourth", "twenty-fifth",
    "twenty-sixth", "twenty-seventh", "twenty-eighth", "twenty-ninth", "thirtieth",
    "thirty-first",
)

_UNITS = ("seconds", "minutes", "hours", "days", "weeks", "months", "years")

_DIRECTIVE_PATTERN = re.compile(r"\{([^{}]*)\}|([{}])")
_WORD_PATTERN = re.compile(r"[\w-]+")
_SHIFT_PATTERN = re.compile(
    r"currently|(?P<n>\d+)\s+(?P<unit>" + "|".join(_UNITS) + r")\s+(?P<direction>before|after)"
)


def _read_day(text: str, position: int) -> tuple[int, int]:
    match = _WORD_PATTERN.match(text, position)
    word = match.group(0).lower() if match else ""
    if word not in DAYS:
        raise ValueError(f"expected an ordinal day such as 'third', got {word!r}")
    return DAYS.index(word) + 1, match.end()


def _read_shift(text: str, position: int) -> tuple[Any, int]:
    match = _SHIFT_PATTERN.match(text, position)
    if match is None:
        raise ValueError(f"expected a shift such as '3 days before', got {text[position:]!r}")
    if match.group("n") is None:
        return None, match.end()
    n = int(match.group("n"))
    if match.group("direction") == "before":
        n = -n
    return (match.group("unit"), n), match.end()


def _directive(name: str, column: int) -> Directive:
    if name == "year":
        return directive_for(Token.YEAR4, raw=name)
    if name == "month":
        return directive_for(Token.MONTH_FULL, raw=name)
    if name == "day":
        return Directive(token=DAY_PHONETIC, kind=Kind.CUSTOM, raw=name, reader=_read_day)
    if name == "shift":
        return Directive(
            token=DATE_SHIFT,
            kind=Kind.CUSTOM,
            raw=name,
            reader=_read_shift,
            weight=SHIFT_WEIGHT,
        )
    raise UnknownDirectiveError(name, column)


def tokenize(format_string: str) -> list[Directive]:
    """Compile a humanized format string into directives.

    Raises:
        CompileError: On an unmatched brace.
        UnknownDirectiveError: On a directive other than day, month, year
            or shift.
    """
    directives: list[Directive] = []
    position = 0
    for match in _DIRECTIVE_PATTERN.finditer(format_string):
        directives.extend(Directive.literal(c) for c in format_string[position:match.start()])
        if match.group(2) is not None:
            raise CompileError(f"unmatched {match.group(2)!r}", match.start())
        directives.append(_directive(match.group(1), match.start()))
        position = match.end()
    directives.extend(Directive.literal(c) for c in format_string[position:])
    return directives


def apply(acc: Accumulator, token: str, value: Any) -> Any:
    """Apply a humanized token to the accumulator.

    Returns UNRECOGNIZED for tokens this syntax does not own.
    """
    if token == DAY_PHONETIC:
        return acc.replace(day=value)
    if token == DATE_SHIFT:
        if value is None:
            return acc
        unit, n = value
        try:
            shifted = acc.naive() + relativedelta(**{unit: n})
        except (ValueError, OverflowError) as exc:
            raise ParseError(f"cannot shift by {n} {unit}: {exc}", token) from exc
        return acc.with_datetime(shifted)
    return UNRECOGNIZED


def render(value: _dt.date, directive: Directive) -> str:
    """Render a humanized token. Shifts always render as "currently"."""
    if directive.token == DAY_PHONETIC:
        return DAYS[value.day - 1]
    if directive.token == DATE_SHIFT:
        return "currently"
    raise FormatError("token cannot be formatted", directive.token)


SYNTAX = Syntax(NAME, tokenize, apply, render)


def register() -> None:
    """Register the humanized syntax under the name "humanized"."""
    register_syntax(SYNTAX)


__all__ = [
    "NAME",
    "DAY_PHONETIC",
    "DATE_SHIFT",
    "SHIFT_WEIGHT",
    "DAYS",
    "SYNTAX",
    "tokenize",
    "apply",
    "render",
    "register",
]
