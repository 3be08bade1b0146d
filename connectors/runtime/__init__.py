"""
Runtime package: connector protocol + event bus.

Exports:
- Protocol types: Connector, ConnectorCapabilities, ReadSelection, ReadResult
- Event bus: emit, set_emitter, captured_events
"""
from __future__ import annotations

from .events import RuntimeEvent, captured_events, emit, set_emitter
from .protocol import Connector, ConnectorCapabilities, ReadResult, ReadSelection

__all__ = [
    "Connector",
    "ConnectorCapabilities",
    "ReadSelection",
    "ReadResult",
    "RuntimeEvent",
    "captured_events",
    "emit",
    "set_emitter",
]
