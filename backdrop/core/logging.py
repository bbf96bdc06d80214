"""
Structured logging setup.

With `log_json=True` every log record is emitted as a single-line JSON
object, ready for Loki or CloudWatch Logs Insights.

With `log_json=False` logs are human-readable text, handy when embedding
the analyser in a desktop or notebook session.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from backdrop.core.config import get_settings

# Attributes every LogRecord carries; anything else came in via `extra={}`.
_RESERVED_ATTRS = frozenset({
    "args", "asctime", "created", "exc_info", "exc_text",
    "filename", "funcName", "levelname", "levelno", "lineno",
    "message", "module", "msecs", "msg", "name", "pathname",
    "process", "processName", "relativeCreated", "stack_info",
    "taskName", "thread", "threadName",
})


class JsonFormatter(logging.Formatter):
    """Emit each log record as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            log_obj["exc"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_obj["stack"] = self.formatStack(record.stack_info)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_obj[key] = value
        return json.dumps(log_obj, default=str)


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Install a single stdout handler on the root logger.
    Arguments left as None come from LOG_LEVEL / LOG_JSON.
    """
    settings = get_settings()
    if level is None:
        level = settings.log_level
    if json_logs is None:
        json_logs = settings.log_json

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    # Pillow logs every plugin import at DEBUG.
    logging.getLogger("PIL").setLevel(logging.WARNING)
