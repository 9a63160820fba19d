"""Formatting of dates and datetimes with compiled programs."""

from __future__ import annotations

from chronoform.formatting.formatter import format_datetime

__all__ = ["format_datetime"]
