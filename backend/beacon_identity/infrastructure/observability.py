"""Structured Logging — one JSON object per identification event.

Invariants:
    - Every line carries timestamp (from the record, UTC), level, logger, service, message
    - Identification context (customer_id, beacon_id, confidence, first_sighting) and
      error context (error_code, operation, path) surface only when set on the record
    - setup_logging is idempotent: calling it again replaces its handler, never stacks one
    - SQLAlchemy engine chatter stays at WARNING unless the app runs at DEBUG

Design Decisions:
    - JSONFormatter on stdlib logging, selected by settings.log_format
    - Non-JSON values (datetimes, enums) rendered with str()
"""

import json
import logging
from collections.abc import Iterable
from datetime import datetime, timezone

SERVICE_NAME = "beacon-identity"

EXTRA_FIELDS = (
    "customer_id", "beacon_id", "confidence", "first_sighting",
    "error_code", "operation", "path",
)

_HANDLER_MARK = "_beacon_identity_handler"
_QUIET_LOGGERS = ("sqlalchemy.engine",)


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def __init__(
        self,
        service: str = SERVICE_NAME,
        extra_fields: Iterable[str] = EXTRA_FIELDS,
    ):
        super().__init__()
        self.service = service
        self.extra_fields = tuple(extra_fields)

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        for key in self.extra_fields:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service's root handler, replacing one from an earlier call."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    setattr(handler, _HANDLER_MARK, True)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
    return handler
