"""Format programs and the syntax registry.

A FormatProgram is the compiled, immutable form of one format string.
Programs are produced by compile_format, which looks the syntax up in the
registry, runs its tokenizer and rejects programs that contain no
directive at all.

Syntaxes:
    default:  brace-delimited mnemonics, e.g. "{YYYY}-{0M}-{0D}"
    strftime: percent directives, e.g. "%Y-%m-%d"

Custom syntaxes are registered with register_syntax. A syntax provides a
tokenizer and, for tokens the built-in registry does not own, an apply
callback used by the parser and a render callback used by the formatter.

Examples:
    >>> program = compile_format("{YYYY}-{0M}-{0D}")
    >>> len(program)
    5
    >>> compile_format("%Y-%m-%d", "strftime").syntax
    'strftime'
"""

from __future__ import annotations

import datetime as _dt
import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterator, Union

from chronoform._internal.constants import COMPILE_CACHE_SIZE
from chronoform.core.directive import Directive
from chronoform.core.registry import DEFAULT_SYNTAX, STRFTIME_SYNTAX
from chronoform.errors import CompileError
from chronoform.tokenizers import default as _default
from chronoform.tokenizers import strftime as _strftime

if TYPE_CHECKING:
    from chronoform.parsing.accumulator import Accumulator

logger = logging.getLogger(__name__)


class Unrecognized(Enum):
    """Returned by an apply callback for a token it does not handle."""

    UNRECOGNIZED = "unrecognized"


UNRECOGNIZED = Unrecognized.UNRECOGNIZED

ApplyResult = Union["Accumulator", Unrecognized]


@dataclass(frozen=True)
class Syntax:
    """A format string syntax.

    Attributes:
        name: Registry name, passed as the syntax argument of compile.
        tokenize: Turns a format string into directives, raising
            CompileError on invalid input.
        apply: Folds a custom token's value into an accumulator. Returns
            the new accumulator, or UNRECOGNIZED; may raise ParseError.
        render: Renders a custom directive for a value.
    """

    name: str
    tokenize: Callable[[str], list[Directive]]
    apply: Callable[[Accumulator, str, Any], ApplyResult] | None = None
    render: Callable[[_dt.date, Directive], str] | None = None


@dataclass(frozen=True)
class FormatProgram:
    """An ordered, immutable sequence of directives.

    Attributes:
        directives: The compiled directives.
        syntax: Name of the syntax the program was compiled with.
        source: The original format string.
    """

    directives: tuple[Directive, ...]
    syntax: str
    source: str

    def __iter__(self) -> Iterator[Directive]:
        return iter(self.directives)

    def __len__(self) -> int:
        return len(self.directives)

    def __repr__(self) -> str:
        return f"FormatProgram({self.source!r}, syntax={self.syntax!r})"


_SYNTAXES: dict[str, Syntax] = {}


def register_syntax(syntax: Syntax) -> None:
    """Register a syntax, replacing any syntax of the same name.

    Registering clears the compile cache so that programs compiled with a
    replaced syntax are not reused.
    """
    _SYNTAXES[syntax.name] = syntax
    _compile_cached.cache_clear()
    logger.debug("registered syntax %r", syntax.name)


def get_syntax(name: str) -> Syntax:
    """Look up a registered syntax.

    Raises:
        CompileError: If no syntax of that name is registered.
    """
    try:
        return _SYNTAXES[name]
    except KeyError:
        raise CompileError(f"unknown syntax {name!r}") from None


def compile_format(format_string: str, syntax: str = DEFAULT_SYNTAX) -> FormatProgram:
    """Compile a format string into a program.

    Compiled programs are cached; compiling the same string with the same
    syntax twice returns the same program.

    Args:
        format_string: The format string.
        syntax: Name of a registered syntax.

    Returns:
        The compiled program.

    Raises:
        TypeError: If format_string is not a string.
        CompileError: If the string is empty, fails to tokenize or
            contains no directive.
    """
    if not isinstance(format_string, str):
        raise TypeError(f"format string must be str, got {type(format_string).__name__}")
    return _compile_cached(format_string, syntax)


@functools.lru_cache(maxsize=COMPILE_CACHE_SIZE)
def _compile_cached(format_string: str, syntax: str) -> FormatProgram:
    logger.debug("compiling %r with %s syntax", format_string, syntax)
    if not format_string:
        raise CompileError("format string cannot be empty")

    directives = tuple(get_syntax(syntax).tokenize(format_string))
    if all(d.is_literal for d in directives):
        raise CompileError("format string must contain at least one directive")
    return FormatProgram(directives, syntax, format_string)


def validate_format(format_string: str, syntax: str = DEFAULT_SYNTAX) -> None:
    """Check that a format string compiles.

    Raises:
        CompileError: If it does not.
    """
    compile_format(format_string, syntax)


def coerce_program(program: FormatProgram | str, syntax: str = DEFAULT_SYNTAX) -> FormatProgram:
    """Return program itself, or compile it if it is a format string."""
    if isinstance(program, FormatProgram):
        return program
    return compile_format(program, syntax)


register_syntax(Syntax(DEFAULT_SYNTAX, _default.tokenize))
register_syntax(Syntax(STRFTIME_SYNTAX, _strftime.tokenize))


__all__ = [
    "UNRECOGNIZED",
    "Unrecognized",
    "Syntax",
    "FormatProgram",
    "register_syntax",
    "get_syntax",
    "compile_format",
    "validate_format",
    "coerce_program",
]
