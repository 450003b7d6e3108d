"""
Pydantic model for the cache configuration.
Why: one validated, immutable object; non-positive intervals mean "disabled", never an error.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class CacheConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    case_sensitive_keys: bool = True
    auto_release_in_seconds: Optional[int] = None
    default_keepalive_in_millis: Optional[int] = None

    @field_validator("auto_release_in_seconds", "default_keepalive_in_millis")
    @classmethod
    def _disable_non_positive(cls, value: Optional[int]) -> Optional[int]:
        if value is None or value <= 0:
            return None
        return value
