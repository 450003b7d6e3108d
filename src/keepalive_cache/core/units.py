"""
Duration units for `KeepAliveCache.set(key, value, amount, unit)`.
"""

from enum import Enum

_NANOS_PER_MILLI = 1_000_000


class TimeUnit(Enum):
    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60 * 1_000_000_000
    HOURS = 60 * 60 * 1_000_000_000
    DAYS = 24 * 60 * 60 * 1_000_000_000

    def to_millis(self, amount: int) -> int:
        """Convert `amount` of this unit to milliseconds, truncating toward zero."""
        millis = abs(amount) * self.value // _NANOS_PER_MILLI
        return millis if amount >= 0 else -millis
