"""Parsing of text into datetimes with compiled programs.

Public API:
    parse_datetime: Parse text against a FormatProgram.
    Accumulator: The immutable in-progress value passed to custom apply
        callbacks.
"""

from __future__ import annotations

from chronoform.parsing.accumulator import Accumulator
from chronoform.parsing.parser import parse_datetime

__all__ = ["Accumulator", "parse_datetime"]
