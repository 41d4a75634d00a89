"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (entity, entity_id, error_code, operation, path, source)
      surfaced when present; source tells which layer rejected a self-opinion
    - JSON format in production, human-readable in development

Design Decisions:
    - setup_logging called once on startup via lifespan
    - setup_logging is idempotent: one handler per process even across app reloads
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_KEYS = ("entity", "entity_id", "error_code", "operation", "path", "source")


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
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure logging for the application; calling it again replaces the handler."""
    for existing in [h for h in logging.root.handlers if getattr(h, "_writers_handler", False)]:
        logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler._writers_handler = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo only when explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
