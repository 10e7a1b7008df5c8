"""Structured logging configuration.

Uses standard library logging with a JSON formatter. Engine modules attach
context (definition_id, instance_id, action_id, ...) via `extra=`; those keys
are emitted under `"extra"` in each line.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

_RESERVED_LOG_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "color_message"}

# uvicorn installs its own handlers on these; we want them on the root JSON handler.
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Anything passed through `extra=` lands under `"extra"`: the engine logs
    `definition_id`, `instance_id`, `action_id`, `from_state`/`to_state` and
    `attempt` this way. Values json cannot encode (exceptions, UUIDs) are
    rendered with `str`.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str) -> None:
    """Send root logging to stdout as JSON lines.

    uvicorn's `uvicorn`, `uvicorn.error` and `uvicorn.access` loggers lose their
    own handlers and propagate to root, so request logs share the same format.
    Calling this again replaces the handler instead of adding a second one.
    """

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
