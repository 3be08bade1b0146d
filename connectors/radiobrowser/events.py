from __future__ import annotations

import logging
from typing import Any, Optional

from connectors.runtime.events import emit

from .constants import CONNECTOR_NAME

logger = logging.getLogger("connectors.radiobrowser")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _emit_event(
    event_type: str,
    message: str,
    *,
    stream: Optional[str] = None,
    count: Optional[int] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """Emit structured event to the runtime bus and mirror it to stdlib logging."""
    if logger.isEnabledFor(_LOG_LEVELS.get(level, logging.INFO)):
        details = " ".join(f"{k}={v}" for k, v in fields.items())
        logger.log(_LOG_LEVELS.get(level, logging.INFO), "%s stream=%s %s", message, stream, details)

    emit(
        event_type,
        message,
        connector=CONNECTOR_NAME,
        stream=stream,
        count=count,
        level=level,
        **fields,
    )


def debug(message: str, *, stream: Optional[str] = None, **fields: Any) -> None:
    _emit_event("message", message, stream=stream, level="debug", **fields)


def info(message: str, *, stream: Optional[str] = None, **fields: Any) -> None:
    _emit_event("message", message, stream=stream, level="info", **fields)


def warn(message: str, *, stream: Optional[str] = None, **fields: Any) -> None:
    _emit_event("message", message, stream=stream, level="warn", **fields)


def error(message: str, *, stream: Optional[str] = None, **fields: Any) -> None:
    _emit_event("message", message, stream=stream, level="error", **fields)


def records(stream: str, count: int, *, message: str = "records") -> None:
    """Record-counting event (type "records" with an integer count)."""
    _emit_event("records", message, stream=stream, count=int(count), level="info")
