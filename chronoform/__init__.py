"""chronoform: compiled date/time format strings.

chronoform compiles format strings into reusable programs, then uses a
program either to render a datetime as text or to read a datetime back
from text. Two syntaxes are built in:

    default:  brace-delimited mnemonics, e.g. "{YYYY}-{0M}-{0D}"
    strftime: percent directives, e.g. "%Y-%m-%d"

Compound directives cover ISO 8601, RFC 822/1123/3339, ANSI C, UNIX,
kitchen clock and ASN.1 UTCTime/GeneralizedTime.

Functions:
    compile: Compile a format string into a FormatProgram.
    format: Render a date or datetime.
    parse: Parse text into a timezone-aware datetime.
    validate: Check that a format string compiles.
    register_syntax: Add a custom syntax.

Exceptions:
    ChronoformError: Base exception
    CompileError: Invalid format string
    UnknownDirectiveError: Unknown directive name
    ParseError: Text does not match a program
    FormatError: Value cannot be rendered with a program
    TimezoneError: Invalid timezone
    UnknownTimezoneError: Unknown zone name

Example:
    >>> import chronoform
    >>> from datetime import datetime, timezone
    >>> chronoform.format(datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc), "{ISOz}")
    '2024-01-15T14:30:00Z'
    >>> chronoform.parse("15 Jan 2024", "%d %b %Y", syntax="strftime")
    datetime.datetime(2024, 1, 15, 0, 0, tzinfo=tzutc())
"""

from __future__ import annotations

import datetime as _dt
import logging

__version__ = "0.1.0"

# Core types
from chronoform.core.directive import (
    CharClass,
    Directive,
    Kind,
    NestedProgram,
    PadClass,
    Padding,
    Token,
    Width,
)
from chronoform.core.program import (
    UNRECOGNIZED,
    FormatProgram,
    Syntax,
    coerce_program,
    compile_format,
    get_syntax,
    register_syntax,
    validate_format,
)
from chronoform.core.registry import DEFAULT_SYNTAX, STRFTIME_SYNTAX
from chronoform.formatting.formatter import format_datetime
from chronoform.options import ParseOptions
from chronoform.parsing.accumulator import Accumulator
from chronoform.parsing.parser import parse_datetime

# Exceptions
from chronoform.errors import (
    ChronoformError,
    CompileError,
    FormatError,
    ParseError,
    TimezoneError,
    UnknownDirectiveError,
    UnknownTimezoneError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())


def compile(format_string: str, syntax: str = DEFAULT_SYNTAX) -> FormatProgram:
    """Compile a format string into a reusable program.

    Raises:
        CompileError: If the format string is invalid or has no directive.
    """
    return compile_format(format_string, syntax)


def format(
    value: _dt.date,
    program: FormatProgram | str,
    syntax: str = DEFAULT_SYNTAX,
) -> str:
    """Render a date or datetime.

    Args:
        value: The value. Naive datetimes are taken to be UTC.
        program: A compiled program or a format string.
        syntax: Syntax used to compile program when it is a string.

    Raises:
        CompileError: If program is a string that does not compile.
        FormatError: If the value cannot be rendered.
    """
    return format_datetime(value, coerce_program(program, syntax))


def parse(
    text: str,
    program: FormatProgram | str,
    syntax: str = DEFAULT_SYNTAX,
    options: ParseOptions | None = None,
) -> _dt.datetime:
    """Parse text into a timezone-aware datetime.

    The input must be complete; it is not length-limited, so callers
    should bound untrusted input before parsing.

    Args:
        text: The text to parse.
        program: A compiled program or a format string.
        syntax: Syntax used to compile program when it is a string.
        options: Anchor, clock and default zone.

    Raises:
        CompileError: If program is a string that does not compile.
        ParseError: If the text does not match the program.
    """
    return parse_datetime(text, coerce_program(program, syntax), options)


def validate(format_string: str, syntax: str = DEFAULT_SYNTAX) -> None:
    """Check that a format string compiles to a program with a directive.

    Raises:
        CompileError: If it does not.
    """
    validate_format(format_string, syntax)


__all__ = [
    # Version
    "__version__",
    # Functions
    "compile",
    "format",
    "parse",
    "validate",
    "register_syntax",
    "get_syntax",
    # Types
    "Accumulator",
    "CharClass",
    "Directive",
    "FormatProgram",
    "Kind",
    "NestedProgram",
    "PadClass",
    "Padding",
    "ParseOptions",
    "Syntax",
    "Token",
    "Width",
    "UNRECOGNIZED",
    "DEFAULT_SYNTAX",
    "STRFTIME_SYNTAX",
    # Exceptions
    "ChronoformError",
    "CompileError",
    "UnknownDirectiveError",
    "ParseError",
    "FormatError",
    "TimezoneError",
    "UnknownTimezoneError",
]
