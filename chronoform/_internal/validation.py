"""Validators for captured directive values.

A directive may carry one validator which is checked against the raw text
captured for it, before the value is converted. Numeric bounds are checked
after conversion with check_bounds.

This module is not part of the public API.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable


class Validator:
    """Base validator. Accepts everything."""

    def __call__(self, text: str) -> bool:
        return True

    def describe(self) -> str:
        return "any value"


@dataclass(frozen=True)
class OneOf(Validator):
    """Accept only members of a fixed set.

    Examples:
        >>> OneOf(("am", "pm"))("pm")
        True
        >>> OneOf(("am", "pm"))("PM")
        False
    """

    values: tuple[str, ...]

    def __call__(self, text: str) -> bool:
        return text in self.values

    def describe(self) -> str:
        return "one of " + ", ".join(repr(v) for v in self.values)


@dataclass(frozen=True)
class Pattern(Validator):
    """Accept text matching a regular expression."""

    pattern: str

    def __call__(self, text: str) -> bool:
        return re.match(self.pattern, text) is not None

    def describe(self) -> str:
        return f"text matching {self.pattern!r}"


@dataclass(frozen=True)
class Predicate(Validator):
    """Accept text for which an external callable returns true."""

    func: Callable[[str], bool]
    description: str = "a valid value"

    def __call__(self, text: str) -> bool:
        return bool(self.func(text))

    def describe(self) -> str:
        return self.description


NOOP = Validator()


def check_bounds(value: int, bounds: tuple[int | None, int | None] | None) -> None:
    """Validate that an integer lies within inclusive bounds.

    Either end of the bounds may be None for an open range.

    Args:
        value: The value to check.
        bounds: (min, max) tuple or None for no bounds.

    Raises:
        ValueError: If the value is out of bounds.
    """
    if bounds is None:
        return
    low, high = bounds
    if low is not None and value < low:
        raise ValueError(f"value {value} is below the minimum of {low}")
    if high is not None and value > high:
        raise ValueError(f"value {value} is above the maximum of {high}")


__all__ = [
    "Validator",
    "OneOf",
    "Pattern",
    "Predicate",
    "NOOP",
    "check_bounds",
]
