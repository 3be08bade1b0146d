"""
radio-browser connector package.

- RadioBrowser: read-only client (single pages via list_*, lazy sequences via iter_*)
- connector(): protocol factory used by `connectors.load("radiobrowser")`
"""

from __future__ import annotations

from .client import PageFetcher, RadioBrowser
from .config import ConnectionParams
from .connector import connector
from .errors import InvalidArgument, RadioBrowserError, RemoteError, TransportError
from .http import RestDelegate, RestRequest
from .paging import Paging, PagingIterator, View, paged_sequence
from .params import AdvancedSearch, FieldName, ListParameter, SearchMode
from .pipeline import run_pipeline, test_connection
from .schema import Station, Stats

__all__ = [
    "AdvancedSearch",
    "ConnectionParams",
    "FieldName",
    "InvalidArgument",
    "ListParameter",
    "PageFetcher",
    "Paging",
    "PagingIterator",
    "RadioBrowser",
    "RadioBrowserError",
    "RemoteError",
    "RestDelegate",
    "RestRequest",
    "SearchMode",
    "Station",
    "Stats",
    "TransportError",
    "View",
    "connector",
    "paged_sequence",
    "run_pipeline",
    "test_connection",
]
