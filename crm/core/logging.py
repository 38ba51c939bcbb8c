"""Structured JSON logging for the CRM service.

Services log a dotted event name as the message and pass fields through
``extra=``, usually built with `build_log_event`. `JsonFormatter` renders one
JSON object per line and groups the actor/customer/trace ids under ``context``.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

from crm.core.config import get_config

CONTEXT_FIELDS = ("user_id", "customer_id", "trace_id")

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}
_QUIET_IN_PRODUCTION = ("sqlalchemy.engine", "uvicorn.access")


@dataclass(frozen=True)
class LogContext:
    user_id: str | None = None
    customer_id: str | None = None
    trace_id: str | None = None


def build_log_event(event: str, context: LogContext, **fields: Any) -> dict[str, Any]:
    """`extra=` payload for an event; context ids first, event fields after."""
    payload: dict[str, Any] = {"event": event, **asdict(context)}
    payload.update(fields)
    return payload


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        context = {name: extras.pop(name) for name in CONTEXT_FIELDS if name in extras}
        message = record.getMessage()

        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": extras.pop("event", message),
        }
        if message != payload["event"]:
            payload["message"] = message
        context = {name: value for name, value in context.items() if value is not None}
        if context:
            payload["context"] = context
        payload.update(extras)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach JSON handlers to the root logger; later calls only adjust the level."""
    config = get_config()
    root = logging.getLogger()
    root.setLevel(level or config.LOG_LEVEL)
    if any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers):
        return root

    formatter = JsonFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if config.is_production:
        for name in _QUIET_IN_PRODUCTION:
            logging.getLogger(name).setLevel(logging.WARNING)
    return root
