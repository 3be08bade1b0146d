from __future__ import annotations

from typing import Any, Dict

from connectors.runtime.protocol import Connector, ConnectorCapabilities, ReadResult, ReadSelection

from .pipeline import run_pipeline, test_connection


class RadioBrowserConnector(Connector):
    name = "radiobrowser"
    capabilities = ConnectorCapabilities(selection=True)

    def check(self, creds: Dict[str, Any]) -> str:
        return test_connection(creds)

    def read(
        self,
        *,
        creds: Dict[str, Any],
        schema: str,
        selection: ReadSelection,
        state: Dict[str, Any],
    ) -> ReadResult:
        counts: Dict[str, int] = {}
        report, _creds, state_updates = run_pipeline(
            creds=creds,
            schema=schema,
            state=state,
            selection=selection,
            counts=counts,
        )
        return ReadResult(report_text=report, state_updates=state_updates, stats=dict(counts))


def connector() -> Connector:
    return RadioBrowserConnector()
