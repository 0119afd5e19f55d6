"""Structured Logging — JSON formatter and setup for host applications.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (content_id, role, operation, version, error_code) surfaced when present
    - JSON format in production, human-readable in development
    - setup_logging is idempotent: repeated calls never stack handlers

Design Decisions:
    - JSONFormatter over third-party libs: stdlib logging, no extra dependency
    - Library never configures logging on import; hosts call configure_logging()
"""

import json
import logging
from datetime import datetime, timezone

from content_core.config import Settings, get_settings

_EXTRA_KEYS = (
    "content_id", "content_kind", "role", "operation",
    "version", "error_code", "error_count",
)

_HANDLER_NAME = "content_core"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Attach the content_core handler to the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    """Configure logging from Settings (environment by default)."""
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)
