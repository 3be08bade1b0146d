from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import quote
from uuid import UUID

from .config import ConnectionParams
from .constants import (
    CATEGORY_BROKEN,
    CATEGORY_LAST_CHANGE,
    CATEGORY_LAST_CLICK,
    CATEGORY_TOP_CLICK,
    CATEGORY_TOP_VOTE,
    CODECS_PATH,
    COUNTRIES_PATH,
    LANGUAGES_PATH,
    SEARCH_PATH,
    STATIONS_PATH,
    STATS_PATH,
    TAGS_PATH,
    URL_PATH,
)
from .errors import InvalidArgument, RadioBrowserError
from .http import RestDelegate, RestRequest, SessionFactory
from .paging import Paging, PagingIterator, View, paged_sequence
from .params import AdvancedSearch, ListParameter, SearchMode, request_params
from .schema import (
    Station,
    Stats,
    decode_station_list,
    decode_stats,
    decode_url_response,
    decode_value_counts,
)


def paths(base: str, *segments: str) -> str:
    """Join path segments; each segment after `base` is quoted so a search term cannot add segments."""
    return "/".join([base.strip("/")] + [quote(str(s), safe="") for s in segments])


def _uuid_arg(value: Union[UUID, str]) -> str:
    try:
        return str(UUID(str(value)))
    except ValueError as e:
        raise InvalidArgument(f"Not a station uuid: {value!r}") from e


@dataclass(frozen=True)
class PageFetcher:
    """
    Binds one listing endpoint and its fixed parameters; calling it with a
    paging window fetches that page. Stateless.
    """

    rest: RestDelegate
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    decode: Callable[[Any], List[Any]] = decode_station_list
    stream: Optional[str] = None

    def __call__(self, paging: Paging) -> List[Any]:
        request_params: Dict[str, str] = dict(self.params)
        paging.apply(request_params)
        return self.rest.execute(
            RestRequest("POST", self.path, params=request_params, decode=self.decode, stream=self.stream)
        )


class RadioBrowser:
    """
    Read-only facade over the radio-browser API.

    list_*(paging, ...) fetch one page; iter_*(..., view=None) return a lazy
    PagingIterator that walks the whole listing (or just the view).
    """

    def __init__(
        self,
        cfg: Optional[ConnectionParams] = None,
        *,
        rest: Optional[RestDelegate] = None,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        self._cfg = cfg or ConnectionParams()
        self._rest = rest or RestDelegate(self._cfg, session_factory=session_factory)

    @property
    def rest(self) -> RestDelegate:
        return self._rest

    def _fetcher(self, path: str, *bundles: object, stream: str = "stations") -> PageFetcher:
        return PageFetcher(self._rest, path, request_params(*bundles), stream=stream)

    def _sequence(self, fetcher: PageFetcher, view: Optional[View]) -> PagingIterator[Station]:
        return paged_sequence(fetcher, view=view, page_size=self._cfg.page_size, stream=fetcher.stream)

    # -----------------------------
    # Value / station-count lists
    # -----------------------------
    def _value_counts(self, path: str, stream: str) -> Dict[str, int]:
        return self._rest.post(path, {}, decode_value_counts, stream=stream)

    def list_countries(self) -> Dict[str, int]:
        return self._value_counts(COUNTRIES_PATH, "countries")

    def list_codecs(self) -> Dict[str, int]:
        return self._value_counts(CODECS_PATH, "codecs")

    def list_languages(self) -> Dict[str, int]:
        return self._value_counts(LANGUAGES_PATH, "languages")

    def list_tags(self) -> Dict[str, int]:
        return self._value_counts(TAGS_PATH, "tags")

    # -----------------------------
    # All stations
    # -----------------------------
    def list_stations(self, paging: Paging, *, list_param: Optional[ListParameter] = None) -> List[Station]:
        return self._fetcher(STATIONS_PATH, list_param)(paging)

    def iter_stations(
        self, *, list_param: Optional[ListParameter] = None, view: Optional[View] = None
    ) -> PagingIterator[Station]:
        return self._sequence(self._fetcher(STATIONS_PATH, list_param), view)

    # -----------------------------
    # Per-category lists: a single batch of `limit` stations, or the whole category lazily
    # -----------------------------
    def list_stations_with_limit(self, category: str, limit: int) -> List[Station]:
        if limit <= 0:
            raise InvalidArgument(f"Limit is {limit}, but must be > 0")
        path = paths(STATIONS_PATH, category, str(limit))
        return self._rest.post(path, {}, decode_station_list, stream=category)

    def iter_category(self, category: str, *, view: Optional[View] = None) -> PagingIterator[Station]:
        return self._sequence(self._fetcher(paths(STATIONS_PATH, category), stream=category), view)

    def list_broken_stations(self, limit: int) -> List[Station]:
        return self.list_stations_with_limit(CATEGORY_BROKEN, limit)

    def iter_broken_stations(self, *, view: Optional[View] = None) -> PagingIterator[Station]:
        return self.iter_category(CATEGORY_BROKEN, view=view)

    def list_top_click_stations(self, limit: int) -> List[Station]:
        return self.list_stations_with_limit(CATEGORY_TOP_CLICK, limit)

    def iter_top_click_stations(self, *, view: Optional[View] = None) -> PagingIterator[Station]:
        return self.iter_category(CATEGORY_TOP_CLICK, view=view)

    def list_top_vote_stations(self, limit: int) -> List[Station]:
        return self.list_stations_with_limit(CATEGORY_TOP_VOTE, limit)

    def iter_top_vote_stations(self, *, view: Optional[View] = None) -> PagingIterator[Station]:
        return self.iter_category(CATEGORY_TOP_VOTE, view=view)

    def list_last_click_stations(self, limit: int) -> List[Station]:
        return self.list_stations_with_limit(CATEGORY_LAST_CLICK, limit)

    def iter_last_click_stations(self, *, view: Optional[View] = None) -> PagingIterator[Station]:
        return self.iter_category(CATEGORY_LAST_CLICK, view=view)

    def list_last_change_stations(self, limit: int) -> List[Station]:
        return self.list_stations_with_limit(CATEGORY_LAST_CHANGE, limit)

    def iter_last_change_stations(self, *, view: Optional[View] = None) -> PagingIterator[Station]:
        return self.iter_category(CATEGORY_LAST_CHANGE, view=view)

    # -----------------------------
    # Searches
    # -----------------------------
    def list_stations_by(
        self,
        paging: Paging,
        mode: SearchMode,
        term: str,
        *,
        list_param: Optional[ListParameter] = None,
    ) -> List[Station]:
        path = paths(STATIONS_PATH, SearchMode(mode).value, term)
        return self._fetcher(path, list_param, stream="search")(paging)

    def iter_stations_by(
        self,
        mode: SearchMode,
        term: str,
        *,
        list_param: Optional[ListParameter] = None,
        view: Optional[View] = None,
    ) -> PagingIterator[Station]:
        path = paths(STATIONS_PATH, SearchMode(mode).value, term)
        return self._sequence(self._fetcher(path, list_param, stream="search"), view)

    def get_station_by_uuid(self, station_uuid: Union[UUID, str]) -> Optional[Station]:
        stations = self.list_stations_by(Paging.at(0, 1), SearchMode.BYUUID, _uuid_arg(station_uuid))
        return stations[0] if stations else None

    def list_stations_with_advanced_search(self, paging: Paging, search: AdvancedSearch) -> List[Station]:
        return self._fetcher(SEARCH_PATH, search, stream="search")(paging)

    def iter_stations_with_advanced_search(
        self, search: AdvancedSearch, *, view: Optional[View] = None
    ) -> PagingIterator[Station]:
        return self._sequence(self._fetcher(SEARCH_PATH, search, stream="search"), view)

    # -----------------------------
    # Server info
    # -----------------------------
    def get_server_stats(self) -> Stats:
        return self._rest.get(STATS_PATH, decode_stats, stream="stats")

    def resolve_stream_url(self, station_uuid: Union[UUID, str]) -> str:
        path = paths(URL_PATH, _uuid_arg(station_uuid))
        resp = self._rest.get(path, decode_url_response, stream="url")
        if not resp.ok or not resp.url:
            raise RadioBrowserError(resp.message or f"Could not resolve stream url for {station_uuid}")
        return resp.url

