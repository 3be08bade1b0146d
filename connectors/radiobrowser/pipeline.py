from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

import dlt

from connectors.runtime.protocol import ReadSelection
from connectors.utils import add_metadata

from .client import RadioBrowser
from .config import ConnectionParams
from .constants import CONNECTOR_NAME, STREAM_STATIONS, VALUE_COUNT_STREAMS
from .errors import InvalidArgument
from .events import info, records
from .paging import View

COUNT_LOG_INTERVAL = 500


def normalize_selection(selection: Optional[ReadSelection]) -> Set[str]:
    """Empty set means "all streams selected"."""
    if selection is None or not selection.streams:
        return set()
    return set(str(s) for s in selection.streams)


def is_selected(selected: Set[str], stream_name: str) -> bool:
    return len(selected) == 0 or stream_name in selected


def _max_stations(creds: Dict[str, Any]) -> Optional[int]:
    """Per-run bound on the stations stream; never persisted, so dropping it from creds lifts it."""
    raw = creds.get("max_stations")
    if raw is None or raw == "":
        return None
    try:
        n = int(raw)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"max_stations must be an integer, got {raw!r}") from e
    if n <= 0:
        raise InvalidArgument(f"max_stations must be > 0, got {n}")
    return n


def station_rows(
    client: RadioBrowser,
    *,
    view: Optional[View] = None,
    counts: Optional[Dict[str, int]] = None,
) -> Iterable[Dict[str, Any]]:
    count = 0
    for station in client.iter_stations(view=view):
        count += 1
        if counts is not None:
            counts[STREAM_STATIONS] = count
        if count % COUNT_LOG_INTERVAL == 0:
            records(STREAM_STATIONS, count, message="stations fetched")
        yield add_metadata(station.to_row(), CONNECTOR_NAME)
    if counts is not None:
        counts[STREAM_STATIONS] = count
    records(STREAM_STATIONS, count, message="stations fetched")


def value_count_rows(
    fetch: Callable[[], Dict[str, int]],
    *,
    stream: Optional[str] = None,
    counts: Optional[Dict[str, int]] = None,
) -> Iterable[Dict[str, Any]]:
    values = fetch()
    if counts is not None and stream is not None:
        counts[stream] = len(values)
    for name, count in values.items():
        yield add_metadata({"name": name, "stationcount": count}, CONNECTOR_NAME)


def test_connection(creds: Dict[str, Any]) -> str:
    client = RadioBrowser(ConnectionParams.from_env_and_creds(creds))
    stats = client.get_server_stats()
    return f"radio-browser connected (server {stats.software_version or 'unknown'}, {stats.stations or 0} stations)"


def build_resources(
    client: RadioBrowser,
    *,
    selected: Set[str],
    view: Optional[View] = None,
    counts: Optional[Dict[str, int]] = None,
) -> List[Any]:
    resources: List[Any] = []

    if is_selected(selected, STREAM_STATIONS):

        @dlt.resource(write_disposition="merge", primary_key="stationuuid", table_name=STREAM_STATIONS)
        def stations() -> Iterable[Dict[str, Any]]:
            yield from station_rows(client, view=view, counts=counts)

        resources.append(stations)

    fetchers: Dict[str, Callable[[], Dict[str, int]]] = {
        "countries": client.list_countries,
        "codecs": client.list_codecs,
        "languages": client.list_languages,
        "tags": client.list_tags,
    }
    for stream in VALUE_COUNT_STREAMS:
        if not is_selected(selected, stream):
            continue
        resources.append(
            dlt.resource(
                value_count_rows(fetchers[stream], stream=stream, counts=counts),
                name=stream,
                table_name=stream,
                write_disposition="replace",
            )
        )
    return resources


def run_pipeline(
    creds: Dict[str, Any],
    schema: str,
    state: Dict[str, Any],
    selection: Optional[ReadSelection] = None,
    *,
    counts: Optional[Dict[str, int]] = None,
) -> Tuple[str, Optional[Dict[str, Any]], Dict[str, Any]]:
    """
    Load the selected streams into `schema`.

    Every run is a full read, so nothing is written back to state. If `counts`
    is given it is filled with the records produced per stream.
    """
    client = RadioBrowser(ConnectionParams.from_env_and_creds(creds))
    selected = normalize_selection(selection)
    max_stations = _max_stations(creds)
    view = View(0, max_stations) if max_stations else None
    counts = counts if counts is not None else {}

    resources = build_resources(client, selected=selected, view=view, counts=counts)
    if not resources:
        info("sync.no_streams_selected", stream=CONNECTOR_NAME)
        return "No streams selected", None, {}

    pipeline = dlt.pipeline(pipeline_name=CONNECTOR_NAME, destination="postgres", dataset_name=schema)
    info("pipeline.run.start", stream=CONNECTOR_NAME, destination="postgres", dataset=schema, max_stations=max_stations)
    run_info = pipeline.run(resources)
    info("pipeline.run.done", stream=CONNECTOR_NAME, **{f"{k}_count": v for k, v in sorted(counts.items())})

    loaded = ", ".join(f"{k}={v}" for k, v in sorted(counts.items())) or "none"
    return (
        "radio-browser sync completed.\n"
        f"- Streams: {', '.join(sorted(selected)) if selected else 'all'}\n"
        f"- Records: {loaded}\n"
        f"{run_info}",
        None,
        {},
    )
