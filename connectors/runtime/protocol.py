from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ConnectorCapabilities:
    """
    Capability flags a caller can use to adjust behaviour.

    selection: supports stream selection (subset reads)
    """
    selection: bool = False


@dataclass(frozen=True)
class ReadSelection:
    """
    Caller-to-connector read intent.

    streams: optional list of stream names to sync (None => all)
    """
    streams: Optional[List[str]] = None


@dataclass(frozen=True)
class ReadResult:
    """
    Connector-to-caller result.

    report_text: human readable summary
    state_updates: state blob to merge into connection state on success
    stats: records loaded per stream
    """
    report_text: str = ""
    state_updates: Optional[Dict[str, Any]] = None
    stats: Optional[Dict[str, int]] = None

    def __post_init__(self) -> None:
        # Normalise None -> {} for merge-friendly behaviour
        if self.state_updates is None:
            object.__setattr__(self, "state_updates", {})
        if self.stats is None:
            object.__setattr__(self, "stats", {})


class Connector:
    """
    Minimal connector interface.

    - check(creds) -> str
    - read(creds, schema, selection, state) -> ReadResult
    """

    capabilities: ConnectorCapabilities = ConnectorCapabilities()

    def check(self, creds: Dict[str, Any]) -> str:  # pragma: no cover
        raise NotImplementedError

    def read(  # pragma: no cover
        self,
        *,
        creds: Dict[str, Any],
        schema: str,
        selection: ReadSelection,
        state: Dict[str, Any],
    ) -> ReadResult:
        raise NotImplementedError
