"""Parse configuration.

Examples:
    >>> from datetime import datetime
    >>> opts = ParseOptions(anchor=datetime(2024, 1, 1))
    >>> # Fields missing from the input now default to 2024-01-01 00:00:00
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from typing import Callable

from dateutil import tz

EPOCH = _dt.datetime(1970, 1, 1)


def _utcnow() -> _dt.datetime:
    return _dt.datetime.now(tz.tzutc())


@dataclass(frozen=True)
class ParseOptions:
    """Configuration for parsing.

    Attributes:
        anchor: The value parsing starts from; fields the input does not
            set keep the anchor's value. Its tzinfo is ignored: the zone
            only comes from the input or default_timezone.
        clock: Returns the current time. Two digit years are placed in
            the clock's current century.
        default_timezone: Zone of the result when the input set none.

    Examples:
        >>> opts = ParseOptions(clock=lambda: datetime(1999, 6, 1))
        >>> # Now "{YY}" reads "24" as 1924
    """

    anchor: _dt.datetime = EPOCH
    clock: Callable[[], _dt.datetime] = _utcnow
    default_timezone: _dt.tzinfo = field(default_factory=tz.tzutc)

    def __post_init__(self) -> None:
        if not isinstance(self.anchor, _dt.datetime):
            raise TypeError(f"anchor must be a datetime, got {type(self.anchor).__name__}")

    def current_century(self) -> int:
        """Return the first year of the clock's current century."""
        return (self.clock().year // 100) * 100


DEFAULT_OPTIONS = ParseOptions()


__all__ = ["EPOCH", "ParseOptions", "DEFAULT_OPTIONS"]
