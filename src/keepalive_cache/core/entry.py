"""
Cache entries and the liveness rule every read path depends on.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

# A keep-alive of 0 means "never expires", not "expires immediately".
KEEPALIVE_FOREVER = 0


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    created_at: int
    keep_alive_millis: int


def is_alive(entry: CacheEntry, now: int) -> bool:
    """Return True while `now` is before the entry's expiry instant.

    The boundary is exclusive: at exactly created_at + keep_alive_millis
    the entry is dead.
    """
    if entry.keep_alive_millis == KEEPALIVE_FOREVER:
        return True
    return now - entry.created_at < entry.keep_alive_millis
