"""
Runtime event bus for connector progress reporting.

Design rules:
- CLI-agnostic: no Rich / printing here.
- Lightweight: the transport and the page iterator emit small structured events
  (one per HTTP attempt, one per fetched page) without depending on any UI.
- Safe default: if no emitter is configured, events are ignored.

Typical usage:
  from connectors.runtime.events import emit

  emit("message", "paging.page.start", stream="stations", offset=0, limit=128)
  emit("count", "stations fetched", stream="stations", count=250)
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional

EventEmitter = Callable[["RuntimeEvent"], None]

_EMITTER: Optional[EventEmitter] = None


@dataclass(frozen=True)
class RuntimeEvent:
    type: str
    message: str
    connector: Optional[str] = None
    stream: Optional[str] = None
    count: Optional[int] = None
    level: str = "info"  # info|warn|error|debug
    ts: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    fields: Dict[str, Any] = field(default_factory=dict)


def set_emitter(fn: Optional[EventEmitter]) -> Optional[EventEmitter]:
    """
    Install a process-wide event emitter and return the previous one.

    The CLI (or a test) sets this before running the connector.
    """
    global _EMITTER
    previous = _EMITTER
    _EMITTER = fn
    return previous


@contextmanager
def captured_events() -> Iterator[List[RuntimeEvent]]:
    """Collect every event emitted inside the block; restores the previous emitter."""
    seen: List[RuntimeEvent] = []
    previous = set_emitter(seen.append)
    try:
        yield seen
    finally:
        set_emitter(previous)


def emit(
    event_type: str,
    message: str,
    *,
    connector: Optional[str] = None,
    stream: Optional[str] = None,
    count: Optional[int] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """
    Emit a runtime event. No-op if no emitter is installed.
    """
    fn = _EMITTER
    if fn is None:
        return

    try:
        fn(
            RuntimeEvent(
                type=str(event_type),
                message=str(message),
                connector=connector,
                stream=stream,
                count=count,
                level=str(level),
                fields=fields or {},
            )
        )
    except Exception:
        # Never allow progress reporting to crash a fetch.
        return
