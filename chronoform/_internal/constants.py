"""Internal constants for chronoform.

These constants define the names, limits and magic numbers used throughout
the library. This module is not part of the public API.
"""

from __future__ import annotations

import string

# Time unit conversions
MICROS_PER_MILLISECOND: int = 1_000

SECONDS_PER_MINUTE: int = 60
SECONDS_PER_HOUR: int = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY: int = 24 * SECONDS_PER_HOUR  # 86_400

# Fractional seconds are read with up to nanosecond precision and
# truncated to microseconds.
MAX_FRACTION_DIGITS: int = 9
FRACTION_DIGITS: int = 6

DIGITS: str = string.digits

# Days in each month (non-leap year)
DAYS_IN_MONTH: tuple[int, ...] = (
    0,   # Placeholder for 1-indexed access
    31,  # January
    28,  # February (non-leap)
    31,  # March
    30,  # April
    31,  # May
    30,  # June
    31,  # July
    31,  # August
    30,  # September
    31,  # October
    30,  # November
    31,  # December
)

# English names only; locale translation is out of scope.
MONTH_NAMES: tuple[str, ...] = (
    "",
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# ISO weekday order: index 1 is Monday, index 7 is Sunday
WEEKDAY_NAMES: tuple[str, ...] = (
    "",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Timezone offset limits (in seconds)
MAX_UTC_OFFSET_SECONDS: int = 24 * SECONDS_PER_HOUR - 1

# Number of compiled format programs kept in memory
COMPILE_CACHE_SIZE: int = 256


__all__ = [
    "MICROS_PER_MILLISECOND",
    "SECONDS_PER_MINUTE",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_DAY",
    "MAX_FRACTION_DIGITS",
    "FRACTION_DIGITS",
    "DIGITS",
    "DAYS_IN_MONTH",
    "MONTH_NAMES",
    "WEEKDAY_NAMES",
    "MAX_UTC_OFFSET_SECONDS",
    "COMPILE_CACHE_SIZE",
]
