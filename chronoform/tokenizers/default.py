"""Tokenizer for the default brace-delimited syntax.

Format strings are literal text interspersed with directives of the form
``{<padding><mnemonic>}``. The padding is an optional run of ``0``
(zero padding) or ``_`` (space padding) characters whose length is the
pad count; the mnemonic names a directive.

Mnemonics:
    Years:      YYYY, YY, C, WYYYY, WYY
    Months:     M, Mshort, Mfull
    Days:       D, Dord
    Weeks:      Wiso, Wmon, Wsun, WDmon, WDsun, WDshort, WDfull
    Time:       h24, h12, m, s, ss, s-epoch, am, AM
    Timezones:  Zname, Z, Z:, Z::
    Compounds:  ISO, ISOz, ISOdate, ISOtime, ISOweek, ISOweek-day, ISOord,
                RFC822, RFC822z, RFC1123, RFC1123z, RFC3339, RFC3339z,
                ANSIC, UNIX, kitchen, ASN1:UTCtime, ASN1:GeneralizedTime,
                ASN1:GeneralizedTime:Z, ASN1:GeneralizedTime:TZ

Examples:
    >>> [d.raw for d in tokenize("{YYYY}-{0M}")]
    ['YYYY', '-', 'M']
"""

from __future__ import annotations

from enum import Enum

from chronoform.core.directive import Directive, PadClass, Padding, Token
from chronoform.core.registry import directive_for
from chronoform.errors import CompileError, UnknownDirectiveError

MNEMONICS: dict[str, Token] = {
    # Years
    "YYYY": Token.YEAR4,
    "YY": Token.YEAR2,
    "C": Token.CENTURY,
    "WYYYY": Token.ISO_YEAR4,
    "WYY": Token.ISO_YEAR2,
    # Months
    "M": Token.MONTH,
    "Mshort": Token.MONTH_SHORT,
    "Mfull": Token.MONTH_FULL,
    # Days
    "D": Token.DAY,
    "Dord": Token.DAY_OF_YEAR,
    # Weeks
    "Wiso": Token.ISO_WEEK,
    "Wmon": Token.WEEK_MON,
    "Wsun": Token.WEEK_SUN,
    "WDmon": Token.WEEKDAY_MON,
    "WDsun": Token.WEEKDAY_SUN,
    "WDshort": Token.WEEKDAY_SHORT,
    "WDfull": Token.WEEKDAY_FULL,
    # Time of day
    "h24": Token.HOUR24,
    "h12": Token.HOUR12,
    "m": Token.MINUTE,
    "s": Token.SECOND,
    "ss": Token.SECOND_FRACTION,
    "s-epoch": Token.EPOCH_SECONDS,
    "am": Token.AM_LOWER,
    "AM": Token.AM_UPPER,
    # Timezones
    "Zname": Token.ZONE_NAME,
    "Z": Token.ZONE_OFFSET,
    "Z:": Token.ZONE_OFFSET_COLON,
    "Z::": Token.ZONE_OFFSET_SECONDS,
    # Compounds
    "ISO": Token.ISO8601,
    "ISOz": Token.ISO8601_Z,
    "ISOdate": Token.ISO_DATE,
    "ISOtime": Token.ISO_TIME,
    "ISOweek": Token.ISO_WEEK_DATE,
    "ISOweek-day": Token.ISO_WEEKDAY_DATE,
    "ISOord": Token.ISO_ORDINAL_DATE,
    "RFC822": Token.RFC822,
    "RFC822z": Token.RFC822_Z,
    "RFC1123": Token.RFC1123,
    "RFC1123z": Token.RFC1123_Z,
    "RFC3339": Token.RFC3339,
    "RFC3339z": Token.RFC3339_Z,
    "ANSIC": Token.ANSIC,
    "UNIX": Token.UNIX,
    "kitchen": Token.KITCHEN,
    "ASN1:UTCtime": Token.ASN1_UTC_TIME,
    "ASN1:GeneralizedTime": Token.ASN1_GENERALIZED_TIME,
    "ASN1:GeneralizedTime:Z": Token.ASN1_GENERALIZED_TIME_Z,
    "ASN1:GeneralizedTime:TZ": Token.ASN1_GENERALIZED_TIME_TZ,
}

_PAD_MARKERS: dict[str, PadClass] = {
    "0": PadClass.ZERO,
    "_": PadClass.SPACE,
}


class State(Enum):
    """Scanner states.

    Values:
        NEXT: Outside a directive; characters become literals.
        PADDING: After "{", consuming pad markers.
        TOKEN: Consuming the mnemonic, up to "}".
    """

    NEXT = "next"
    PADDING = "padding"
    TOKEN = "token"


class _Scanner:
    """Column-tracked state machine over one format string."""

    def __init__(self) -> None:
        self.state = State.NEXT
        self.directives: list[Directive] = []
        self.start = 0
        self.pad_count = 0
        self.pad_class = PadClass.ZERO
        self.name: list[str] = []

    def feed(self, column: int, char: str) -> None:
        if self.state is State.NEXT:
            self._next(column, char)
        else:
            self._inside(column, char)

    def finish(self) -> list[Directive]:
        if self.state is not State.NEXT:
            raise CompileError("unclosed directive", self.start)
        return self.directives

    def _next(self, column: int, char: str) -> None:
        if char == "{":
            self.state = State.PADDING
            self.start = column
            self.pad_count = 0
            self.pad_class = PadClass.ZERO
            self.name = []
        elif char == "}":
            raise CompileError("unmatched closing brace", column)
        else:
            self.directives.append(Directive.literal(char))

    def _inside(self, column: int, char: str) -> None:
        if char == "{":
            raise CompileError("illegal nesting of directives", column)
        if char == "}":
            self.directives.append(self._close())
            self.state = State.NEXT
            return
        if self.state is State.PADDING and char in _PAD_MARKERS:
            self.pad_count += 1
            self.pad_class = _PAD_MARKERS[char]
            return
        self.state = State.TOKEN
        self.name.append(char)

    def _close(self) -> Directive:
        name = "".join(self.name)
        if not name:
            raise CompileError("empty directive", self.start)
        token = MNEMONICS.get(name)
        if token is None:
            raise UnknownDirectiveError(name, self.start)
        padding = Padding(self.pad_count, self.pad_class) if self.pad_count else None
        return directive_for(token, raw=name, padding=padding)


def tokenize(format_string: str) -> list[Directive]:
    """Compile a default-syntax format string into directives.

    Every character outside a directive becomes its own literal directive.

    Args:
        format_string: The format string, e.g. "{YYYY}-{0M}-{0D}".

    Returns:
        The directives, in order.

    Raises:
        CompileError: On an unclosed directive, illegal nesting, an
            unmatched "}" or an empty "{}".
        UnknownDirectiveError: If a mnemonic is not known. The column is
            that of the directive's opening brace.
    """
    scanner = _Scanner()
    for column, char in enumerate(format_string):
        scanner.feed(column, char)
    return scanner.finish()


__all__ = ["MNEMONICS", "State", "tokenize"]
