"""
Public convenience exports for the connectors package.

The radio-browser connector lives in `connectors/radiobrowser/`.
The protocol/runtime lives in `connectors/runtime/`.

This file keeps imports stable for callers:
  from connectors import ReadSelection, ReadResult, load
"""
from __future__ import annotations

import importlib

from connectors.runtime.protocol import (  # noqa: F401
    Connector,
    ConnectorCapabilities,
    ReadResult,
    ReadSelection,
)


def load(name: str) -> Connector:
    """Import `connectors.<name>` and build its connector via the `connector()` factory."""
    module = importlib.import_module(f"connectors.{name}")
    factory = getattr(module, "connector", None)
    if factory is None:
        raise ImportError(f"Connector '{name}' has no connector() factory")
    return factory()


__all__ = [
    "Connector",
    "ConnectorCapabilities",
    "ReadSelection",
    "ReadResult",
    "load",
]
