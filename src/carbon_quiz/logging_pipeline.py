"""JSON-lines logging for the ``carbon-quiz`` command line.

Each CLI invocation is one short run, so records go straight to a stream
handler; every line carries the ``run_id`` of the invocation that produced it.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import IO
from uuid import uuid4

__all__ = ["JsonFormatter", "configure_structured_logging", "reset_structured_logging"]

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "run_id"}


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def __init__(self, *, run_id: str) -> None:
        super().__init__()
        self.run_id = run_id

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "run_id": getattr(record, "run_id", None) or self.run_id,
        }
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES
        }
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_structured_logging(
    logger: logging.Logger,
    *,
    run_id: str | None = None,
    level: int | str = logging.WARNING,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Attach a JSON stream handler to ``logger``.

    Args:
        logger: Logger to configure, usually the ``carbon_quiz`` package logger.
        run_id: Identifier stamped on every line; a fresh UUID when omitted.
        level: Logging verbosity, as a number or level name.
        stream: Destination stream; defaults to ``sys.stderr``.

    Returns:
        The installed handler, to be passed to :func:`reset_structured_logging`.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter(run_id=run_id or uuid4().hex))
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler


def reset_structured_logging(logger: logging.Logger, handler: logging.Handler) -> None:
    """Flush and detach a handler installed by :func:`configure_structured_logging`."""

    handler.flush()
    logger.removeHandler(handler)
    handler.close()
