"""Parse text against a format program.

Parsing runs in two passes over one program:

    1. Extraction walks the directives left to right, each consuming a
       prefix of the remaining input, with no backtracking. Compound
       directives splice their nested program in place. The result is a
       list of (directive, value) steps.
    2. Application stable-sorts the steps by weight and folds them into an
       Accumulator. Built-in tokens use the apply rules; custom tokens go
       to the program syntax's apply callback.

The first failure aborts the parse with a ParseError naming the token and
the input position. No partial result is exposed.

Literal directives consume one input character without checking it, so a
format of "{YYYY}-{0M}" also reads "2024/05".
"""

from __future__ import annotations

import datetime as _dt
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable

from chronoform._internal import calendar
from chronoform._internal import timezone as _tz
from chronoform._internal.constants import DIGITS, FRACTION_DIGITS, MAX_FRACTION_DIGITS
from chronoform._internal.validation import check_bounds
from chronoform.core.directive import Directive, Kind, PadClass, Token
from chronoform.core.program import UNRECOGNIZED, FormatProgram, compile_format, get_syntax
from chronoform.errors import ParseError
from chronoform.options import DEFAULT_OPTIONS, ParseOptions
from chronoform.parsing.accumulator import Accumulator, apply_token

logger = logging.getLogger(__name__)

# Marks a directive that matched nothing and produces no step.
_ABSENT = object()


@dataclass(frozen=True)
class Step:
    """One extracted value, waiting to be applied.

    Attributes:
        directive: The directive that produced the value.
        value: The extracted value. None for the zone step of a zulu
            compound directive.
        position: Input offset where the value started.
    """

    directive: Directive
    value: Any
    position: int


def parse_datetime(
    text: str,
    program: FormatProgram,
    options: ParseOptions | None = None,
) -> _dt.datetime:
    """Parse text into a timezone-aware datetime.

    Args:
        text: The complete input string. Some directives, such as epoch
            seconds, are unbounded in width; callers should bound the
            input size before parsing untrusted text.
        program: The compiled format program.
        options: Anchor, clock and default zone. Defaults to the epoch
            anchor and UTC.

    Returns:
        The parsed datetime. If the input set no zone, the options'
        default zone (UTC) is used.

    Raises:
        TypeError: If text is not a string.
        ParseError: If the text does not match the program.

    Examples:
        >>> program = compile_format("{YYYY}-{0M}-{0D}")
        >>> parse_datetime("2024-01-15", program)
        datetime.datetime(2024, 1, 15, 0, 0, tzinfo=tzutc())
    """
    if not isinstance(text, str):
        raise TypeError(f"input must be str, got {type(text).__name__}")
    options = options or DEFAULT_OPTIONS

    try:
        steps = extract(text, program)
        acc = apply_steps(steps, program.syntax, options)
        return acc.finalize(options.default_timezone)
    except ParseError as exc:
        logger.debug("parsing %r with %r failed: %s", text, program.source, exc)
        raise


def extract(text: str, program: FormatProgram) -> list[Step]:
    """Run the extraction pass.

    Raises:
        ParseError: On empty input, a directive that does not match,
            input ending before the program, or leftover input.
    """
    if not text:
        raise ParseError("input string cannot be empty", position=0)

    steps: list[Step] = []
    pending = deque(program.directives)
    position = 0
    length = len(text)

    while pending:
        directive = pending.popleft()

        if directive.is_compound:
            nested = directive.nested
            logger.debug("expanding %s to %r", directive.token, nested.format_string)
            sub = compile_format(nested.format_string, nested.syntax)
            pending.extendleft(reversed(sub.directives))
            if nested.zulu:
                steps.append(Step(directive, None, position))
            continue

        if position >= length:
            if directive.is_literal or directive.optional:
                continue
            raise ParseError("unexpected end of input", directive.token, position)

        if directive.is_literal:
            position += 1
            continue

        reader = _reader_for(directive)
        try:
            value, end = reader(text, position)
        except ValueError as exc:
            raise ParseError(str(exc), directive.token, position) from exc

        if value is not _ABSENT:
            steps.append(Step(directive, value, position))
        position = end

    if position < length:
        raise ParseError(f"unexpected input {text[position:]!r}", position=position)
    return steps


def apply_steps(steps: list[Step], syntax: str, options: ParseOptions) -> Accumulator:
    """Run the application pass.

    Steps are stable-sorted by weight, so built-in directives keep their
    order and heavier custom directives see a fully built date.
    """
    apply_custom = get_syntax(syntax).apply
    acc = Accumulator.from_anchor(options.anchor)

    for step in sorted(steps, key=lambda s: s.directive.weight):
        directive = step.directive
        if directive.is_compound:
            acc = acc.with_zone(_tz.utc())
        elif directive.is_custom:
            if apply_custom is None:
                raise ParseError("unrecognized token", directive.token, step.position)
            result = apply_custom(acc, directive.token, step.value)
            if result is UNRECOGNIZED:
                raise ParseError("unrecognized token", directive.token, step.position)
            acc = result
        else:
            acc = apply_token(acc, directive.token, step.value, options, step.position)
    return acc


# Readers: (directive, text, position) -> (value, end position)


def _reader_for(directive: Directive) -> Callable[[str, int], tuple[Any, int]]:
    if directive.reader is not None:
        return directive.reader
    read = _READERS.get(directive.kind)
    if read is None:
        raise ParseError("directive has no reader", directive.token)
    return lambda text, position: read(directive, text, position)


def _read_numeric(directive: Directive, text: str, position: int) -> tuple[int, int]:
    length = len(text)
    stripped = 0
    padding = directive.padding

    if padding is not None and padding.pad_class is not PadClass.NONE:
        pad = padding.char
        while stripped < padding.count and position < length and text[position] == pad:
            # A zero that is the last digit of the field is the value itself
            if pad == "0" and not (position + 1 < length and text[position + 1] in DIGITS):
                break
            position += 1
            stripped += 1
        if position >= length:
            raise ParseError("unexpected end of input", directive.token, position)

    width = directive.width
    limit = None if width.max is None else width.max - stripped
    end = position
    while end < length and text[end] in DIGITS and (limit is None or end - position < limit):
        end += 1

    digits = text[position:end]
    if not digits or not width.accepts(len(digits) + stripped):
        raise ParseError(
            f"expected {width} digits, got {text[position:end + 1]!r}",
            directive.token,
            position,
        )
    if directive.validator is not None and not directive.validator(digits):
        raise ParseError(
            f"{digits!r} is not {directive.validator.describe()}",
            directive.token,
            position,
        )

    value = int(digits)
    try:
        check_bounds(value, directive.bounds)
    except ValueError as exc:
        raise ParseError(str(exc), directive.token, position) from exc
    return value, end


def _read_fraction(directive: Directive, text: str, position: int) -> tuple[Any, int]:
    if text[position] != ".":
        return _ABSENT, position
    start = position + 1
    end = start
    while end < len(text) and text[end] in DIGITS and end - start < MAX_FRACTION_DIGITS:
        end += 1
    digits = text[start:end]
    if not digits:
        raise ParseError("expected fractional seconds", directive.token, start)
    # Digits beyond microseconds are truncated
    micros = int(digits[:FRACTION_DIGITS].ljust(FRACTION_DIGITS, "0"))
    return micros, end


def _capture(directive: Directive, text: str, position: int) -> tuple[str, int]:
    char_class = directive.char_class
    limit = directive.width.max
    end = position
    while end < len(text) and char_class.matches(text[end]) and (limit is None or end - position < limit):
        end += 1
    return text[position:end], end


def _read_word(directive: Directive, text: str, position: int) -> tuple[Any, int]:
    char_class = directive.char_class
    while position < len(text) and not char_class.matches(text[position]):
        position += 1

    word, end = _capture(directive, text, position)
    if not directive.width.accepts(len(word)):
        raise ParseError(
            f"expected a word of {directive.width} characters, got {word!r}",
            directive.token,
            position,
        )
    if directive.validator is not None and not directive.validator(word):
        raise ParseError(f"{word!r} is not {directive.validator.describe()}", directive.token, position)

    lookup = _WORD_LOOKUPS.get(directive.token)
    if lookup is None:
        return word, end
    try:
        return lookup(word), end
    except ValueError as exc:
        raise ParseError(str(exc), directive.token, position) from exc


def _read_match(directive: Directive, text: str, position: int) -> tuple[str, int]:
    padding = directive.padding
    if padding is not None and padding.pad_class is PadClass.SPACE:
        stripped = 0
        while stripped < padding.count and position < len(text) and text[position] == " ":
            position += 1
            stripped += 1

    captured, end = _capture(directive, text, position)
    if not captured or not directive.width.accepts(len(captured)):
        raise ParseError(
            f"expected {directive.width} characters, got {captured!r}",
            directive.token,
            position,
        )
    if directive.validator is not None and not directive.validator(captured):
        raise ParseError(
            f"{captured!r} is not {directive.validator.describe()}",
            directive.token,
            position,
        )
    return captured, end


_READERS: dict[Kind, Callable[[Directive, str, int], tuple[Any, int]]] = {
    Kind.NUMERIC: _read_numeric,
    Kind.FRACTION: _read_fraction,
    Kind.WORD: _read_word,
    Kind.MATCH: _read_match,
}

_WORD_LOOKUPS: dict[Token, Callable[[str], int]] = {
    Token.MONTH_SHORT: calendar.month_from_name,
    Token.MONTH_FULL: calendar.month_from_name,
    Token.WEEKDAY_SHORT: calendar.weekday_from_name,
    Token.WEEKDAY_FULL: calendar.weekday_from_name,
}


__all__ = ["Step", "parse_datetime", "extract", "apply_steps"]
