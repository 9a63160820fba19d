"""The directive data model.

A Directive is one compiled instruction of a format program: a literal
character, a field such as the four digit year or the month name, or a
compound directive that expands to a nested format program (ISO 8601,
RFC 3339, ASN.1 and friends).

Directives are immutable and are shared by every parse and format call
that uses the program they belong to.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union

from chronoform._internal.validation import Validator


class Token(Enum):
    """The closed set of built-in directive tokens.

    Custom syntaxes use plain strings for their own tokens instead.
    """

    LITERAL = "literal"

    # Years
    YEAR4 = "year4"
    YEAR2 = "year2"
    CENTURY = "century"
    ISO_YEAR4 = "iso_year4"
    ISO_YEAR2 = "iso_year2"
    # Months
    MONTH = "month"
    MONTH_SHORT = "month_short"
    MONTH_FULL = "month_full"
    # Days
    DAY = "day"
    DAY_OF_YEAR = "day_of_year"
    # Weeks
    ISO_WEEK = "iso_week"
    WEEK_MON = "week_mon"
    WEEK_SUN = "week_sun"
    WEEKDAY_MON = "weekday_mon"
    WEEKDAY_SUN = "weekday_sun"
    WEEKDAY_SHORT = "weekday_short"
    WEEKDAY_FULL = "weekday_full"
    # Time of day
    HOUR24 = "hour24"
    HOUR12 = "hour12"
    MINUTE = "minute"
    SECOND = "second"
    SECOND_FRACTION = "second_fraction"
    MILLISECOND = "millisecond"
    MICROSECOND = "microsecond"
    EPOCH_SECONDS = "epoch_seconds"
    AM_LOWER = "am_lower"
    AM_UPPER = "am_upper"
    # Timezones
    ZONE_NAME = "zone_name"
    ZONE_OFFSET = "zone_offset"
    ZONE_OFFSET_COLON = "zone_offset_colon"
    ZONE_OFFSET_SECONDS = "zone_offset_seconds"
    # Compound directives
    ISO8601 = "iso8601"
    ISO8601_Z = "iso8601_z"
    ISO_DATE = "iso_date"
    ISO_TIME = "iso_time"
    ISO_WEEK_DATE = "iso_week_date"
    ISO_WEEKDAY_DATE = "iso_weekday_date"
    ISO_ORDINAL_DATE = "iso_ordinal_date"
    RFC822 = "rfc822"
    RFC822_Z = "rfc822_z"
    RFC1123 = "rfc1123"
    RFC1123_Z = "rfc1123_z"
    RFC3339 = "rfc3339"
    RFC3339_Z = "rfc3339_z"
    ANSIC = "ansic"
    UNIX = "unix"
    KITCHEN = "kitchen"
    ASN1_UTC_TIME = "asn1_utc_time"
    ASN1_GENERALIZED_TIME = "asn1_generalized_time"
    ASN1_GENERALIZED_TIME_Z = "asn1_generalized_time_z"
    ASN1_GENERALIZED_TIME_TZ = "asn1_generalized_time_tz"
    SLASHED_DATE = "slashed_date"
    CLOCK = "clock"
    CLOCK_SECONDS = "clock_seconds"
    CLOCK_12 = "clock_12"
    SHORT_DATE = "short_date"


# Custom syntaxes identify their tokens with strings.
TokenId = Union[Token, str]


class Kind(Enum):
    """How a directive consumes input and produces output.

    Values:
        LITERAL: A single character, emitted verbatim.
        NUMERIC: A run of digits with optional padding.
        FRACTION: An optional "." followed by fractional second digits.
        WORD: A name (month, weekday, zone) resolved by lookup.
        MATCH: A short string checked against a set or a pattern.
        COMPOUND: Expands to a nested format program.
        CUSTOM: Extracted by the directive's own reader.
    """

    LITERAL = "literal"
    NUMERIC = "numeric"
    FRACTION = "fraction"
    WORD = "word"
    MATCH = "match"
    COMPOUND = "compound"
    CUSTOM = "custom"


class CharClass(Enum):
    """Character classes captured by word and match directives."""

    LETTERS = r"[A-Za-z]"
    WORD = r"\w"
    ZONE = r"[A-Za-z0-9/_+\-:]"
    OFFSET = r"[+\-0-9:Zz]"

    def matches(self, char: str) -> bool:
        return re.fullmatch(self.value, char) is not None


class PadClass(Enum):
    """Padding character class."""

    ZERO = "0"
    SPACE = " "
    NONE = ""

    @property
    def char(self) -> str:
        return self.value


@dataclass(frozen=True)
class Width:
    """How many characters a field may occupy.

    Attributes:
        min: Minimum number of characters.
        max: Maximum number of characters, or None when the field runs
            until the first character that cannot belong to it.
    """

    min: int
    max: int | None

    @classmethod
    def exact(cls, n: int) -> Width:
        return cls(n, n)

    @classmethod
    def range(cls, low: int, high: int) -> Width:
        return cls(low, high)

    @classmethod
    def unbounded(cls, low: int = 1) -> Width:
        return cls(low, None)

    @property
    def is_exact(self) -> bool:
        return self.min == self.max

    @property
    def is_unbounded(self) -> bool:
        return self.max is None

    def accepts(self, length: int) -> bool:
        """Check whether a captured length satisfies this width."""
        if length < self.min:
            return False
        return self.max is None or length <= self.max

    def __str__(self) -> str:
        if self.max is None:
            return f"{self.min}+"
        if self.is_exact:
            return str(self.min)
        return f"{self.min}..{self.max}"


@dataclass(frozen=True)
class Padding:
    """Requested padding of a field.

    Attributes:
        count: Number of pad characters on top of the field's minimum width.
        pad_class: Which character pads the field.
    """

    count: int
    pad_class: PadClass = PadClass.ZERO

    @property
    def char(self) -> str:
        return self.pad_class.char


@dataclass(frozen=True)
class NestedProgram:
    """The format program a compound directive expands to.

    Attributes:
        syntax: Name of the syntax used to compile format_string.
        format_string: The nested format string.
        zulu: If True, parsing sets the timezone to UTC (unless already
            set) and formatting renders the value converted to UTC.
    """

    syntax: str
    format_string: str
    zulu: bool = False


# A reader extracts a value from text starting at a position and returns
# the value along with the position after it. It raises ValueError when
# the text does not match.
Reader = Callable[[str, int], tuple[Any, int]]


@dataclass(frozen=True)
class Directive:
    """One instruction of a compiled format program.

    Attributes:
        token: The field this directive reads or writes.
        kind: How the directive consumes input.
        width: Field width, None for literals and compounds.
        padding: Requested padding, None when unpadded.
        bounds: Inclusive numeric (min, max); either end may be None.
        validator: Check applied to the captured text.
        nested: Nested program for compound directives.
        weight: Apply-order hint; heavier directives are applied later.
        raw: The directive's name as written in the format string.
        value: The character of a literal directive.
        char_class: Characters a word or match directive captures.
        optional: If True, the directive may be absent at end of input.
        reader: Custom extraction for CUSTOM directives.
    """

    token: TokenId
    kind: Kind
    width: Width | None = None
    padding: Padding | None = None
    bounds: tuple[int | None, int | None] | None = None
    validator: Validator | None = None
    nested: NestedProgram | None = None
    weight: int = 0
    raw: str = ""
    value: str = ""
    char_class: CharClass = CharClass.WORD
    optional: bool = False
    reader: Reader | None = field(default=None, compare=False)

    @classmethod
    def literal(cls, char: str) -> Directive:
        """Create a literal directive for a single character."""
        return cls(token=Token.LITERAL, kind=Kind.LITERAL, raw=char, value=char)

    @property
    def is_literal(self) -> bool:
        return self.kind is Kind.LITERAL

    @property
    def is_compound(self) -> bool:
        return self.kind is Kind.COMPOUND

    @property
    def is_custom(self) -> bool:
        """True for tokens owned by a custom syntax rather than the registry."""
        return not isinstance(self.token, Token)

    def __repr__(self) -> str:
        if self.is_literal:
            return f"Directive.literal({self.value!r})"
        name = self.token.value if isinstance(self.token, Token) else self.token
        parts = [name]
        if self.raw:
            parts.append(f"raw={self.raw!r}")
        if self.padding is not None:
            parts.append(f"pad={self.padding.count}{self.padding.pad_class.name.lower()}")
        return f"Directive({', '.join(parts)})"


__all__ = [
    "Token",
    "TokenId",
    "Kind",
    "CharClass",
    "PadClass",
    "Width",
    "Padding",
    "NestedProgram",
    "Reader",
    "Directive",
]
