"""chronoform exception hierarchy.

All chronoform-specific exceptions inherit from ChronoformError. The three
engine families (compile, parse and format) are disjoint: a failure in
one phase is never reported as another.
"""

from __future__ import annotations

from typing import Any


class ChronoformError(Exception):
    """Base exception for all chronoform errors."""

    pass


class CompileError(ChronoformError):
    """A format string could not be compiled into a program.

    Raised by tokenizers and by compile-time validation.

    Examples:
        - Unclosed directive: "{YYYY"
        - Unmatched closing brace: "YYYY}"
        - ":" flag on a strftime directive other than %z
        - A format string made only of literal characters

    Attributes:
        message: The bare error message.
        column: 0-based column in the format string, when known.
    """

    def __init__(self, message: str, column: int | None = None) -> None:
        self.message = message
        self.column = column
        if column is not None:
            message = f"{message} at column {column}"
        super().__init__(message)


class UnknownDirectiveError(CompileError):
    """A directive name is not known to the syntax.

    Attributes:
        name: The offending directive name.
    """

    def __init__(self, name: str, column: int | None = None) -> None:
        self.name = name
        super().__init__(f"unknown directive {name!r}", column)


class ParseError(ChronoformError):
    """Input text does not match a format program.

    Examples:
        - Unexpected end of input
        - Month value outside 1-12
        - Leftover input after the last directive
        - A custom token the syntax does not recognize

    Attributes:
        message: The bare error message.
        token: The directive token being parsed, when known.
        position: 0-based offset into the input, when known.
    """

    def __init__(
        self,
        message: str,
        token: Any = None,
        position: int | None = None,
    ) -> None:
        self.message = message
        self.token = token
        self.position = position
        details = []
        if token is not None:
            details.append(f"token {_token_label(token)}")
        if position is not None:
            details.append(f"position {position}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class FormatError(ChronoformError):
    """A value cannot be rendered with a format program.

    Examples:
        - Space padding requested on a timezone offset
        - Padding requested on epoch seconds
        - Time of day directive applied to a date

    Attributes:
        message: The bare error message.
        token: The directive token being rendered, when known.
    """

    def __init__(self, message: str, token: Any = None) -> None:
        self.message = message
        self.token = token
        if token is not None:
            message = f"{message} (token {_token_label(token)})"
        super().__init__(message)


class TimezoneError(ChronoformError):
    """Invalid timezone specification.

    Examples:
        - Offset outside valid range (-24h to +24h)
        - Malformed offset string
    """

    pass


class UnknownTimezoneError(TimezoneError):
    """A zone name could not be resolved.

    Attributes:
        name: The zone name as it appeared in the input.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown timezone {name!r}")


def _token_label(token: Any) -> str:
    if isinstance(token, str):
        return token
    return str(getattr(token, "value", token))


__all__ = [
    "ChronoformError",
    "CompileError",
    "UnknownDirectiveError",
    "ParseError",
    "FormatError",
    "TimezoneError",
    "UnknownTimezoneError",
]
