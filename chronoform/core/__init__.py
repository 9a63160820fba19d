"""Core types for chronoform: directives, the token registry and programs."""

from __future__ import annotations

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

__all__ = [
    "CharClass",
    "Directive",
    "Kind",
    "NestedProgram",
    "PadClass",
    "Padding",
    "Token",
    "Width",
]
