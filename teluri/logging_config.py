# file: teluri/logging_config.py
"""
Logging configuration.

Library modules only create loggers under the `teluri` namespace and attach
the URI they are working on via `extra={"tel_uri": ...}`. The CLI calls
`configure_logging`, which installs one stderr handler on the `teluri` logger
and leaves the root logger alone.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

TELURI_LOGGER = "teluri"

# `extra=` keys teluri modules log with, in output order.
CONTEXT_FIELDS = ("tel_uri", "position", "validated")

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per line with the message and any teluri context fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def configure_logging(*, level: str = "INFO", json_logging: bool = False) -> logging.Logger:
    """Configure the `teluri` logger for CLI use and return it."""

    logger = logging.getLogger(TELURI_LOGGER)
    logger.setLevel(level.upper())
    logger.propagate = False

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_logging else logging.Formatter(_TEXT_FORMAT))
    logger.addHandler(handler)
    return logger
