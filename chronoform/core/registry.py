"""The shared directive table.

Every built-in token has exactly one template here carrying its kind,
width, bounds, validator and (for compound tokens) nested program. Both
tokenizers build directives from these templates, and both the parser and
the formatter read the same fields, so what the formatter writes for a
directive the parser can read back.
"""

from __future__ import annotations

from dataclasses import replace

from chronoform._internal.validation import OneOf, Pattern
from chronoform.core.directive import (
    CharClass,
    Directive,
    Kind,
    NestedProgram,
    Padding,
    Token,
    Width,
)

DEFAULT_SYNTAX = "default"
STRFTIME_SYNTAX = "strftime"


def _numeric(token: Token, low: int, high: int | None, bounds=None) -> Directive:
    width = Width.unbounded(low) if high is None else Width.range(low, high)
    return Directive(token=token, kind=Kind.NUMERIC, width=width, bounds=bounds)


def _word(token: Token, width: Width, char_class: CharClass = CharClass.LETTERS) -> Directive:
    return Directive(token=token, kind=Kind.WORD, width=width, char_class=char_class)


def _match(token: Token, width: Width, validator, char_class: CharClass) -> Directive:
    return Directive(
        token=token,
        kind=Kind.MATCH,
        width=width,
        validator=validator,
        char_class=char_class,
    )


def _compound(token: Token, format_string: str, syntax: str = DEFAULT_SYNTAX,
              zulu: bool = False) -> Directive:
    return Directive(
        token=token,
        kind=Kind.COMPOUND,
        nested=NestedProgram(syntax, format_string, zulu),
    )


_ISO_DATE = "{000YYYY}-{0M}-{0D}"
_ISO_TIME = "{0h24}:{0m}:{0s}{ss}"
_GENERALIZED = "{000YYYY}{0M}{0D}{0h24}{0m}{0s}{ss}"

_TEMPLATES: tuple[Directive, ...] = (
    # Years
    _numeric(Token.YEAR4, 1, 4, (0, 9999)),
    _numeric(Token.YEAR2, 1, 2, (0, 99)),
    _numeric(Token.CENTURY, 1, 2, (0, 99)),
    _numeric(Token.ISO_YEAR4, 1, 4, (0, 9999)),
    _numeric(Token.ISO_YEAR2, 1, 2, (0, 99)),
    # Months
    _numeric(Token.MONTH, 1, 2, (1, 12)),
    _word(Token.MONTH_SHORT, Width.exact(3)),
    _word(Token.MONTH_FULL, Width.unbounded()),
    # Days
    _numeric(Token.DAY, 1, 2, (1, 31)),
    _numeric(Token.DAY_OF_YEAR, 1, 3, (1, 366)),
    # Weeks
    _numeric(Token.ISO_WEEK, 1, 2, (1, 53)),
    _numeric(Token.WEEK_MON, 1, 2, (0, 53)),
    _numeric(Token.WEEK_SUN, 1, 2, (0, 53)),
    _numeric(Token.WEEKDAY_MON, 1, 1, (1, 7)),
    _numeric(Token.WEEKDAY_SUN, 1, 1, (0, 6)),
    _word(Token.WEEKDAY_SHORT, Width.exact(3)),
    _word(Token.WEEKDAY_FULL, Width.unbounded()),
    # Time of day
    _numeric(Token.HOUR24, 1, 2, (0, 23)),
    _numeric(Token.HOUR12, 1, 2, (1, 12)),
    _numeric(Token.MINUTE, 1, 2, (0, 59)),
    _numeric(Token.SECOND, 1, 2, (0, 59)),
    Directive(
        token=Token.SECOND_FRACTION,
        kind=Kind.FRACTION,
        width=Width.range(1, 9),
        optional=True,
    ),
    _numeric(Token.MILLISECOND, 1, 3, (0, 999)),
    _numeric(Token.MICROSECOND, 1, 6, (0, 999_999)),
    _numeric(Token.EPOCH_SECONDS, 1, None, (0, None)),
    _match(Token.AM_LOWER, Width.exact(2), OneOf(("am", "pm")), CharClass.LETTERS),
    _match(Token.AM_UPPER, Width.exact(2), OneOf(("AM", "PM")), CharClass.LETTERS),
    # Timezones
    _word(Token.ZONE_NAME, Width.unbounded(), CharClass.ZONE),
    _match(
        Token.ZONE_OFFSET,
        Width.range(1, 5),
        Pattern(r"^(?:[-+]\d{4}|[Zz])$"),
        CharClass.OFFSET,
    ),
    _match(
        Token.ZONE_OFFSET_COLON,
        Width.range(1, 6),
        Pattern(r"^(?:[-+]\d{2}:\d{2}|[Zz])$"),
        CharClass.OFFSET,
    ),
    _match(
        Token.ZONE_OFFSET_SECONDS,
        Width.range(1, 9),
        Pattern(r"^(?:[-+]\d{2}:\d{2}:\d{2}|[Zz])$"),
        CharClass.OFFSET,
    ),
    # Compound directives
    _compound(Token.ISO8601, "{ISOdate}T{ISOtime}{Z}"),
    _compound(Token.ISO8601_Z, "{ISOdate}T{ISOtime}Z", zulu=True),
    _compound(Token.ISO_DATE, _ISO_DATE),
    _compound(Token.ISO_TIME, _ISO_TIME),
    _compound(Token.ISO_WEEK_DATE, "{000WYYYY}-W{0Wiso}"),
    _compound(Token.ISO_WEEKDAY_DATE, "{000WYYYY}-W{0Wiso}-{WDmon}"),
    _compound(Token.ISO_ORDINAL_DATE, "{000YYYY}-{00Dord}"),
    _compound(Token.RFC822, "{WDshort}, {0D} {Mshort} {0YY} {ISOtime} {Zname}"),
    _compound(Token.RFC822_Z, "{WDshort}, {0D} {Mshort} {0YY} {ISOtime} UT", zulu=True),
    _compound(Token.RFC1123, "{WDshort}, {0D} {Mshort} {000YYYY} {ISOtime} {Zname}"),
    _compound(Token.RFC1123_Z, "{WDshort}, {0D} {Mshort} {000YYYY} {ISOtime} {Z}", zulu=True),
    _compound(Token.RFC3339, "{ISOdate}T{ISOtime}{Z:}"),
    _compound(Token.RFC3339_Z, "{ISOdate}T{ISOtime}Z", zulu=True),
    _compound(Token.ANSIC, "{WDshort} {Mshort} {_D} {ISOtime} {YYYY}"),
    _compound(Token.UNIX, "{WDshort} {Mshort} {_D} {ISOtime} {Zname} {YYYY}"),
    _compound(Token.KITCHEN, "{h12}:{0m}{AM}"),
    _compound(Token.ASN1_UTC_TIME, "{0YY}{0M}{0D}{0h24}{0m}{0s}Z", zulu=True),
    _compound(Token.ASN1_GENERALIZED_TIME, _GENERALIZED),
    _compound(Token.ASN1_GENERALIZED_TIME_Z, _GENERALIZED + "Z", zulu=True),
    _compound(Token.ASN1_GENERALIZED_TIME_TZ, _GENERALIZED + "{Z}"),
    _compound(Token.SLASHED_DATE, "%m/%d/%y", STRFTIME_SYNTAX),
    _compound(Token.CLOCK, "%H:%M", STRFTIME_SYNTAX),
    _compound(Token.CLOCK_SECONDS, "%H:%M:%S", STRFTIME_SYNTAX),
    _compound(Token.CLOCK_12, "%I:%M:%S %p", STRFTIME_SYNTAX),
    _compound(Token.SHORT_DATE, "%e-%b-%Y", STRFTIME_SYNTAX),
)

REGISTRY: dict[Token, Directive] = {d.token: d for d in _TEMPLATES}

# Tokens that need a time of day; formatting them on a date is an error.
TIME_TOKENS: frozenset[Token] = frozenset({
    Token.HOUR24,
    Token.HOUR12,
    Token.MINUTE,
    Token.SECOND,
    Token.SECOND_FRACTION,
    Token.MILLISECOND,
    Token.MICROSECOND,
    Token.EPOCH_SECONDS,
    Token.AM_LOWER,
    Token.AM_UPPER,
    Token.ZONE_NAME,
    Token.ZONE_OFFSET,
    Token.ZONE_OFFSET_COLON,
    Token.ZONE_OFFSET_SECONDS,
})

ZONE_TOKENS: frozenset[Token] = frozenset({
    Token.ZONE_NAME,
    Token.ZONE_OFFSET,
    Token.ZONE_OFFSET_COLON,
    Token.ZONE_OFFSET_SECONDS,
})

ZONE_OFFSET_TOKENS: frozenset[Token] = ZONE_TOKENS - {Token.ZONE_NAME}


def directive_for(
    token: Token,
    raw: str = "",
    padding: Padding | None = None,
    width: Width | None = None,
) -> Directive:
    """Build a directive for a built-in token.

    Args:
        token: The built-in token.
        raw: The name the directive was written as.
        padding: Requested padding, if any.
        width: Overrides the template's width when given.

    Returns:
        A new directive based on the token's template.

    Raises:
        KeyError: If the token has no template (Token.LITERAL).
    """
    template = REGISTRY[token]
    changes = {"raw": raw, "padding": padding}
    if width is not None:
        changes["width"] = width
    return replace(template, **changes)


__all__ = [
    "DEFAULT_SYNTAX",
    "STRFTIME_SYNTAX",
    "REGISTRY",
    "TIME_TOKENS",
    "ZONE_TOKENS",
    "ZONE_OFFSET_TOKENS",
    "directive_for",
]
