"""Tokenizer for the strftime syntax.

Format strings are literal text interspersed with directives of the form
``%<flags><width><modifier><directive>``:

    flags:      "-" no padding, "0" zero padding, "_" space padding,
                ":" and "::" select the colon offset forms of %z
    width:      decimal minimum width of the field
    modifier:   "E" or "O", accepted and ignored

Supported Directives:
    %Y %y %C %G %g      - years, century, ISO years
    %m %B %b %h         - month number and names
    %d %e %j            - day of month, space padded day, day of year
    %V %W %U %u %w      - week numbers and weekday numbers
    %a %A               - weekday names
    %H %k %I %l         - hours (24h, 24h space padded, 12h, 12h space padded)
    %M %S %L %f %s      - minutes, seconds, milliseconds, microseconds, epoch
    %P %p               - am/pm, AM/PM
    %Z %z %:z %::z      - zone name and offsets
    %D %F %R %T %r %v   - compound formats
    %n %t %%            - newline, tab, literal percent

Examples:
    >>> [d.raw for d in tokenize("%Y-%m")]
    ['Y', '-', 'm']
"""

from __future__ import annotations

import re

from chronoform.core.directive import (
    Directive,
    Kind,
    PadClass,
    Padding,
    Token,
    Width,
)
from chronoform.core.registry import directive_for
from chronoform.errors import CompileError, UnknownDirectiveError

_DIRECTIVE_PATTERN = re.compile(
    r"%(?P<flags>::|[-_0:])?(?P<width>\d+)?(?P<modifier>[EO])?(?P<directive>.)?",
    re.DOTALL,
)

# directive letter -> (token, default pad class)
LETTERS: dict[str, tuple[Token, PadClass]] = {
    "Y": (Token.YEAR4, PadClass.ZERO),
    "y": (Token.YEAR2, PadClass.ZERO),
    "C": (Token.CENTURY, PadClass.ZERO),
    "G": (Token.ISO_YEAR4, PadClass.ZERO),
    "g": (Token.ISO_YEAR2, PadClass.ZERO),
    "m": (Token.MONTH, PadClass.ZERO),
    "B": (Token.MONTH_FULL, PadClass.SPACE),
    "b": (Token.MONTH_SHORT, PadClass.SPACE),
    "h": (Token.MONTH_SHORT, PadClass.SPACE),
    "d": (Token.DAY, PadClass.ZERO),
    "e": (Token.DAY, PadClass.SPACE),
    "j": (Token.DAY_OF_YEAR, PadClass.ZERO),
    "V": (Token.ISO_WEEK, PadClass.ZERO),
    "W": (Token.WEEK_MON, PadClass.ZERO),
    "U": (Token.WEEK_SUN, PadClass.ZERO),
    "u": (Token.WEEKDAY_MON, PadClass.ZERO),
    "w": (Token.WEEKDAY_SUN, PadClass.ZERO),
    "a": (Token.WEEKDAY_SHORT, PadClass.SPACE),
    "A": (Token.WEEKDAY_FULL, PadClass.SPACE),
    "H": (Token.HOUR24, PadClass.ZERO),
    "k": (Token.HOUR24, PadClass.SPACE),
    "I": (Token.HOUR12, PadClass.ZERO),
    "l": (Token.HOUR12, PadClass.SPACE),
    "M": (Token.MINUTE, PadClass.ZERO),
    "S": (Token.SECOND, PadClass.ZERO),
    "L": (Token.MILLISECOND, PadClass.ZERO),
    "f": (Token.MICROSECOND, PadClass.ZERO),
    "s": (Token.EPOCH_SECONDS, PadClass.ZERO),
    "P": (Token.AM_LOWER, PadClass.SPACE),
    "p": (Token.AM_UPPER, PadClass.SPACE),
    "Z": (Token.ZONE_NAME, PadClass.SPACE),
    "z": (Token.ZONE_OFFSET, PadClass.ZERO),
    "D": (Token.SLASHED_DATE, PadClass.ZERO),
    "F": (Token.ISO_DATE, PadClass.ZERO),
    "R": (Token.CLOCK, PadClass.ZERO),
    "T": (Token.CLOCK_SECONDS, PadClass.ZERO),
    "r": (Token.CLOCK_12, PadClass.ZERO),
    "v": (Token.SHORT_DATE, PadClass.ZERO),
}

_ESCAPES: dict[str, str] = {"%": "%", "n": "\n", "t": "\t"}

_FLAG_PAD_CLASSES: dict[str, PadClass] = {
    "-": PadClass.NONE,
    "0": PadClass.ZERO,
    "_": PadClass.SPACE,
}

_COLON_OFFSETS: dict[str, Token] = {
    ":": Token.ZONE_OFFSET_COLON,
    "::": Token.ZONE_OFFSET_SECONDS,
}


def tokenize(format_string: str) -> list[Directive]:
    """Compile a strftime format string into directives.

    Literal spans between directives are emitted one directive per
    character.

    Args:
        format_string: The format string, e.g. "%Y-%m-%dT%H:%M:%S".

    Returns:
        The directives, in order.

    Raises:
        CompileError: On a lone trailing "%" or a ":" flag used with any
            directive but %z.
        UnknownDirectiveError: If a directive letter is not known.
    """
    directives: list[Directive] = []
    position = 0
    for match in _DIRECTIVE_PATTERN.finditer(format_string):
        directives.extend(Directive.literal(c) for c in format_string[position:match.start()])
        directives.append(_resolve(match))
        position = match.end()
    directives.extend(Directive.literal(c) for c in format_string[position:])
    return directives


def _resolve(match: re.Match) -> Directive:
    column = match.start()
    letter = match.group("directive")
    flags = match.group("flags")
    width_text = match.group("width")

    if letter is None:
        raise CompileError("incomplete directive", column)
    if letter in _ESCAPES:
        return Directive.literal(_ESCAPES[letter])
    if letter not in LETTERS:
        raise UnknownDirectiveError(letter, column)

    token, pad_class = LETTERS[letter]
    if flags in _COLON_OFFSETS:
        if letter != "z":
            raise CompileError(f"flag {flags!r} is only valid with %z, not %{letter}", column)
        token = _COLON_OFFSETS[flags]
        flags = None

    directive = directive_for(token, raw=letter)
    if directive.kind is Kind.COMPOUND:
        return directive

    width = directive.width
    count = _default_pad_count(directive)
    if width_text:
        explicit = int(width_text)
        count = max(explicit - width.min, 0)
        if width.max is not None and explicit > width.max:
            width = Width(width.min, explicit)

    if flags is not None:
        pad_class = _FLAG_PAD_CLASSES[flags]
    elif count == 0:
        return directive_for(token, raw=letter, width=width)
    return directive_for(token, raw=letter, padding=Padding(count, pad_class), width=width)


def _default_pad_count(directive: Directive) -> int:
    width = directive.width
    if directive.kind is not Kind.NUMERIC or width is None or width.max is None:
        return 0
    return width.max - width.min


__all__ = ["LETTERS", "tokenize"]
