"""
JSON logging for cache events (purges, purger lifecycle, ignored writes).
Why: purge effectiveness is easier to follow as fields than as free text.
The library never installs handlers itself; applications call `setup_logging`.
"""

import json
import logging
from typing import Any, Dict, Optional

# Attributes passed through `extra=` that end up in the JSON payload.
CACHE_FIELDS = ("event", "removed", "duration_ms", "interval_seconds", "keep_alive_millis")


class CacheJsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in CACHE_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: int = logging.INFO, logger_name: Optional[str] = "keepalive_cache") -> logging.Handler:
    """Attach a JSON stream handler to the cache's logger tree (once)."""
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers:
        if isinstance(handler.formatter, CacheJsonFormatter):
            return handler
    handler = logging.StreamHandler()
    handler.setFormatter(CacheJsonFormatter())
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_event(logger: logging.Logger, level: int, msg: str, event: str, **fields: Any) -> None:
    logger.log(level, msg, extra={"event": event, **fields})
