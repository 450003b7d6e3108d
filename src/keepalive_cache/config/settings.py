"""Configuration settings for caches built from the environment."""
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from keepalive_cache.core.schemas import CacheConfig

load_dotenv()

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class CacheSettings:
    case_sensitive_keys: bool = field(
        default_factory=lambda: _env_bool("KEEPALIVE_CACHE_CASE_SENSITIVE_KEYS", True)
    )
    auto_release_in_seconds: Optional[int] = field(
        default_factory=lambda: _env_int("KEEPALIVE_CACHE_AUTO_RELEASE_SECONDS")
    )
    default_keepalive_in_millis: Optional[int] = field(
        default_factory=lambda: _env_int("KEEPALIVE_CACHE_DEFAULT_KEEPALIVE_MILLIS")
    )

    def to_config(self) -> CacheConfig:
        return CacheConfig(
            case_sensitive_keys=self.case_sensitive_keys,
            auto_release_in_seconds=self.auto_release_in_seconds,
            default_keepalive_in_millis=self.default_keepalive_in_millis,
        )
