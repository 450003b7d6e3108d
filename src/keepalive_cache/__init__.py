"""In-process key-value cache with per-entry keep-alive expiry."""

from keepalive_cache.core.cache import KeepAliveCache
from keepalive_cache.core.clock import Clock, ManualClock, SystemClock
from keepalive_cache.core.entry import KEEPALIVE_FOREVER, CacheEntry, is_alive
from keepalive_cache.core.schemas import CacheConfig
from keepalive_cache.core.units import TimeUnit

__all__ = [
    "KEEPALIVE_FOREVER",
    "CacheConfig",
    "CacheEntry",
    "Clock",
    "KeepAliveCache",
    "ManualClock",
    "SystemClock",
    "TimeUnit",
    "is_alive",
]
