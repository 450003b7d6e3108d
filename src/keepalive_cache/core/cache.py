"""
Thread-safe in-memory cache whose entries expire after a per-entry keep-alive.
Why: callers get a value back only while it is alive; dead entries are
reclaimed by an explicit or scheduled purge.
"""

import logging
import threading
import time
from datetime import timedelta
from typing import TYPE_CHECKING, Dict, Generic, List, Optional, TypeVar, Union

from .clock import SYSTEM_CLOCK, Clock
from .entry import KEEPALIVE_FOREVER, CacheEntry, is_alive
from .keys import normalize_key
from .logging import get_logger, log_event
from .metrics import CacheMetrics
from .purger import Purger
from .schemas import CacheConfig
from .units import TimeUnit

if TYPE_CHECKING:
    from keepalive_cache.config.settings import CacheSettings

_LOG = get_logger(__name__)

T = TypeVar("T")

KeepAlive = Union[int, timedelta]


def _to_millis(keep_alive: KeepAlive, unit: TimeUnit) -> int:
    if isinstance(keep_alive, timedelta):
        return TimeUnit.MICROSECONDS.to_millis(keep_alive // timedelta(microseconds=1))
    return unit.to_millis(keep_alive)


class KeepAliveCache(Generic[T]):
    """Generic key-value store with keep-alive based expiry.

    Reads never return dead entries, but only `purge`, `get_and_remove_if_dead`,
    `remove` and `clear` actually free them. When `auto_release_in_seconds` is
    set, a background job calls `purge` on that interval until `close`.
    """

    def __init__(
        self,
        case_sensitive_keys: bool = True,
        auto_release_in_seconds: Optional[int] = None,
        default_keepalive_in_millis: Optional[int] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._config = CacheConfig(
            case_sensitive_keys=case_sensitive_keys,
            auto_release_in_seconds=auto_release_in_seconds,
            default_keepalive_in_millis=default_keepalive_in_millis,
        )
        self._clock: Clock = clock or SYSTEM_CLOCK
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.RLock()
        self.metrics = CacheMetrics()

        self._purger: Optional[Purger] = None
        if self._config.auto_release_in_seconds is not None:
            self._purger = Purger(self.purge, self._config.auto_release_in_seconds)
            self._purger.start()

    @classmethod
    def from_config(cls, config: CacheConfig, clock: Optional[Clock] = None) -> "KeepAliveCache[T]":
        return cls(
            case_sensitive_keys=config.case_sensitive_keys,
            auto_release_in_seconds=config.auto_release_in_seconds,
            default_keepalive_in_millis=config.default_keepalive_in_millis,
            clock=clock,
        )

    @classmethod
    def from_settings(
        cls, settings: Optional["CacheSettings"] = None, clock: Optional[Clock] = None
    ) -> "KeepAliveCache[T]":
        """Build a cache from environment-backed settings (reads .env)."""
        from keepalive_cache.config.settings import CacheSettings

        return cls.from_config((settings or CacheSettings()).to_config(), clock=clock)

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def case_sensitive_keys(self) -> bool:
        return self._config.case_sensitive_keys

    @property
    def auto_release_in_seconds(self) -> Optional[int]:
        return self._config.auto_release_in_seconds

    @property
    def default_keepalive_in_millis(self) -> Optional[int]:
        return self._config.default_keepalive_in_millis

    @property
    def purger(self) -> Optional[Purger]:
        return self._purger

    def _now(self) -> int:
        return self._clock.now()

    def _effective_key(self, key: str) -> str:
        return normalize_key(key, self._config.case_sensitive_keys)

    def set(
        self,
        key: str,
        value: T,
        keep_alive: Optional[KeepAlive] = None,
        unit: TimeUnit = TimeUnit.MILLISECONDS,
    ) -> None:
        """Store `value` under `key`, replacing any previous entry.

        `keep_alive` is an amount of `unit` (milliseconds by default) or a
        timedelta. When omitted, the configured default keep-alive applies,
        or KEEPALIVE_FOREVER without one. 0 means forever; a negative
        keep-alive is ignored and nothing is stored.
        """
        if keep_alive is None:
            keep_alive_millis = self._config.default_keepalive_in_millis or KEEPALIVE_FOREVER
        else:
            keep_alive_millis = _to_millis(keep_alive, unit)

        if keep_alive_millis < 0:
            log_event(
                _LOG, logging.DEBUG, "Ignoring set with negative keep-alive", "set_ignored",
                keep_alive_millis=keep_alive_millis,
            )
            return

        effective_key = self._effective_key(key)
        entry = CacheEntry(value=value, created_at=self._now(), keep_alive_millis=keep_alive_millis)
        with self._lock:
            self._entries[effective_key] = entry

    def get(self, key: str) -> Optional[T]:
        """Return the value for `key`, or None if missing or dead. Never evicts."""
        effective_key = self._effective_key(key)
        with self._lock:
            entry = self._entries.get(effective_key)
        if entry is None or not is_alive(entry, self._now()):
            self.metrics.record_miss()
            return None
        self.metrics.record_hit()
        return entry.value

    def get_and_remove_if_dead(self, key: str) -> Optional[T]:
        """Like `get`, but a found-dead entry is removed to free memory.

        Meant for internal use; regular callers should use `get`.
        """
        effective_key = self._effective_key(key)
        with self._lock:
            entry = self._entries.get(effective_key)
            if entry is None:
                self.metrics.record_miss()
                return None
            if is_alive(entry, self._now()):
                self.metrics.record_hit()
                return entry.value
            del self._entries[effective_key]
        self.metrics.record_miss()
        return None

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def list_cached_keys_starting_with(self, prefix: str) -> List[str]:
        """Effective keys, dead or alive, starting with `prefix`. Order is unspecified."""
        effective_prefix = self._effective_key(prefix)
        with self._lock:
            return [key for key in self._entries if key.startswith(effective_prefix)]

    def list_cached_keys_starting_with_if_alive(self, prefix: str) -> List[str]:
        """Alive effective keys starting with `prefix`, judged at a single instant."""
        effective_prefix = self._effective_key(prefix)
        now = self._now()
        with self._lock:
            return [
                key
                for key, entry in self._entries.items()
                if key.startswith(effective_prefix) and is_alive(entry, now)
            ]

    def remove(self, key: str) -> None:
        effective_key = self._effective_key(key)
        with self._lock:
            self._entries.pop(effective_key, None)

    def clear(self) -> None:
        """Remove every entry, dead or alive."""
        with self._lock:
            self._entries.clear()

    def purge(self) -> int:
        """Remove the dead entries and return how many were removed."""
        start = time.perf_counter()
        now = self._now()
        with self._lock:
            dead = [key for key, entry in self._entries.items() if not is_alive(entry, now)]
            for key in dead:
                del self._entries[key]
        duration_ms = int((time.perf_counter() - start) * 1000)
        self.metrics.record_purge(len(dead), duration_ms)
        log_event(
            _LOG, logging.DEBUG, "Purged dead entries", "purge",
            removed=len(dead), duration_ms=duration_ms,
        )
        return len(dead)

    def size(self) -> int:
        """Count alive entries only; dead-but-unpurged ones are skipped."""
        now = self._now()
        with self._lock:
            return sum(1 for entry in self._entries.values() if is_alive(entry, now))

    def __len__(self) -> int:
        return self.size()

    def size_counting_dead_and_alive_elements(self) -> int:
        with self._lock:
            return len(self._entries)

    def is_empty(self) -> bool:
        return self.size() == 0

    def close(self) -> None:
        """Stop the background purger, if any. The cache stays usable."""
        if self._purger is not None:
            self._purger.stop()
        log_event(_LOG, logging.DEBUG, "Cache closed", "close")

    def __enter__(self) -> "KeepAliveCache[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
