"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (container, route_file, version, namespace, error_code) surfaced when present
    - JSON format in production, human-readable in development
    - setup_logging installs at most one Portico handler on the root logger

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called by create_app(), before routes are registered
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "container", "route_file", "version", "namespace", "error_code",
    "state", "group_count", "route_count",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class _PorticoHandler(logging.StreamHandler):
    """Marker subclass so repeated setup_logging() calls replace, not stack."""


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    for existing in list(logging.root.handlers):
        if isinstance(existing, _PorticoHandler):
            logging.root.removeHandler(existing)
    handler = _PorticoHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
