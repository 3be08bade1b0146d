from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, TypeVar

from .constants import DEFAULT_PAGE_SIZE
from .errors import InvalidArgument
from .events import debug, info, warn

T = TypeVar("T")

FetchPage = Callable[["Paging"], List[T]]


@dataclass(frozen=True, order=True)
class Paging:
    """
    One page of results: `size` records starting at record index `offset`.

    Immutable; use next()/previous() to derive neighbours.
    """

    offset: int
    size: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise InvalidArgument(f"Offset is {self.offset}, but must be >= 0")
        if self.size <= 0:
            raise InvalidArgument(f"Size is {self.size}, but must be > 0")

    @classmethod
    def at(cls, offset: int, size: int) -> "Paging":
        return cls(offset, size)

    def next(self) -> "Paging":
        return Paging(self.offset + self.size, self.size)

    def previous(self) -> "Paging":
        """Never goes below offset 0."""
        return Paging(max(0, self.offset - self.size), self.size)

    def apply(self, request_params: Dict[str, str]) -> None:
        request_params["offset"] = str(self.offset)
        request_params["limit"] = str(self.size)


@dataclass(frozen=True)
class View:
    """
    Caller-requested sub-range of a result stream: at most `limit` records,
    starting at server record index `offset`.
    """

    offset: int
    limit: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise InvalidArgument(f"View offset is {self.offset}, but must be >= 0")
        if self.limit <= 0:
            raise InvalidArgument(f"View limit is {self.limit}, but must be > 0")


class PagingIterator(Iterator[T]):
    """
    Forward-only sequence over a paged listing. Holds at most one page.

    fetch_page(paging) -> list of records; an empty list ends the sequence.

    Logical pages are counted from the start of the view. Before each fetch the
    logical page is translated to the physical window sent to the server
    (view.offset + logical offset, size clamped on the view's last page).

    A fetch error is re-raised by the pull that triggered it and by every later
    pull. Not thread-safe: one consumer per instance.
    """

    def __init__(
        self,
        fetch_page: FetchPage[T],
        *,
        view: Optional[View] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        stream: Optional[str] = None,
    ) -> None:
        if page_size <= 0:
            raise InvalidArgument(f"Page size is {page_size}, but must be > 0")
        self._fetch_page = fetch_page
        self._view = view
        self._page_size = page_size
        self._stream = stream

        self._page: Optional[Paging] = None  # logical page; None until the first pull
        self._buffer: List[T] = []
        self._index = 0
        self._done = False
        self._failure: Optional[BaseException] = None
        self._fetches = 0

    @property
    def fetches(self) -> int:
        """Physical fetches issued so far."""
        return self._fetches

    @property
    def done(self) -> bool:
        return self._done

    def _physical(self, logical: Paging) -> Optional[Paging]:
        """Window to request for a logical page, or None if the view is exhausted."""
        view = self._view
        if view is None:
            return logical

        size = logical.size
        if logical.offset + self._page_size >= view.limit:
            size = view.limit - logical.offset
            if size <= 0:
                return None
        return Paging.at(view.offset + logical.offset, size)

    def _load_next_page(self) -> None:
        self._page = Paging.at(0, self._page_size) if self._page is None else self._page.next()
        self._buffer = []
        self._index = 0

        window = self._physical(self._page)
        if window is None:
            info("paging.done.view", stream=self._stream, logical_offset=self._page.offset, fetches=self._fetches)
            self._done = True
            return

        debug("paging.page.start", stream=self._stream, offset=window.offset, limit=window.size)
        self._fetches += 1
        data = self._fetch_page(window)
        self._buffer = list(data or [])
        debug("paging.page.done", stream=self._stream, offset=window.offset, returned=len(self._buffer))

        if not self._buffer:
            info("paging.done.empty", stream=self._stream, offset=window.offset, fetches=self._fetches)
            self._done = True

    def try_advance(self, action: Callable[[T], None]) -> bool:
        """
        Pull one record into `action`. Returns False once the sequence is exhausted.
        """
        if self._failure is not None:
            raise self._failure
        if self._done:
            return False

        if self._index >= len(self._buffer):
            try:
                self._load_next_page()
            except Exception as e:
                warn(
                    "paging.failed",
                    stream=self._stream,
                    logical_offset=self._page.offset if self._page else None,
                    error_type=type(e).__name__,
                    error=str(e)[:1000],
                )
                self._failure = e
                self._done = True
                raise
            if self._done:
                return False

        item = self._buffer[self._index]
        self._index += 1
        action(item)
        return True

    def __iter__(self) -> "PagingIterator[T]":
        return self

    def __next__(self) -> T:
        box: List[T] = []
        if not self.try_advance(box.append):
            raise StopIteration
        return box[0]


def paged_sequence(
    fetch_page: FetchPage[T],
    *,
    view: Optional[View] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    stream: Optional[str] = None,
) -> PagingIterator[T]:
    """Lazy record sequence over fetch_page; nothing is fetched until the first pull."""
    return PagingIterator(fetch_page, view=view, page_size=page_size, stream=stream)
