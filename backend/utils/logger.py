"""Structured JSON logging for the leaderboard service.

Keyword arguments passed to a log call travel as structured fields and end
up under ``data`` in the JSON line:

    talent_logger.error("Talent API returned error status", status_code=503)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")
_PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": timestamp.replace(tzinfo=None).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        fields = getattr(record, "fields", None)
        if fields:
            payload["data"] = fields
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class StructuredLogger:
    """Thin wrapper turning logger kwargs into structured fields"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log(self, level: int, msg: str, **fields: Any):
        if not self.logger.isEnabledFor(level):
            return
        # stacklevel=3 attributes the record to the caller, not this wrapper.
        self.logger.log(
            level,
            msg,
            stacklevel=3,
            extra={"fields": fields or None},
        )

    def debug(self, msg: str, **fields: Any):
        self._log(logging.DEBUG, msg, **fields)

    def info(self, msg: str, **fields: Any):
        self._log(logging.INFO, msg, **fields)

    def warning(self, msg: str, **fields: Any):
        self._log(logging.WARNING, msg, **fields)

    def error(self, msg: str, **fields: Any):
        self._log(logging.ERROR, msg, **fields)


def setup_logging(level: str = "INFO", json_format: bool = True):
    """Route all logging to stdout, as JSON lines unless ``json_format`` is off"""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(_PLAIN_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers = [handler]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(name)


# Shared loggers
api_logger = get_logger("api")
talent_logger = get_logger("talent")
leaderboard_logger = get_logger("leaderboard")
