from __future__ import annotations

from typing import List

import pytest

from connectors.radiobrowser.errors import InvalidArgument, RemoteError
from connectors.radiobrowser.paging import Paging, PagingIterator, View, paged_sequence


class IntSource:
    """Synthetic listing of the integers 0..n-1; records every window it is asked for."""

    def __init__(self, n: int):
        self.n = n
        self.windows: List[Paging] = []

    def __call__(self, paging: Paging) -> List[int]:
        self.windows.append(paging)
        return list(range(paging.offset, min(paging.offset + paging.size, self.n)))


# -----------------------------
# Paging
# -----------------------------
def test_paging_neighbours():
    p = Paging.at(64, 32)
    assert p.previous() == Paging.at(32, 32)
    assert p.next() == Paging.at(96, 32)


@pytest.mark.parametrize("offset,size", [(0, 1), (5, 3), (32, 32), (100, 7), (128, 128)])
def test_next_then_previous_is_identity_when_offset_covers_size(offset, size):
    p = Paging.at(offset, size)
    if p.offset >= p.size:
        assert p.next().previous() == p
    assert p.previous().offset >= 0


def test_previous_clamps_at_zero():
    assert Paging.at(3, 10).previous() == Paging.at(0, 10)
    assert Paging.at(0, 10).previous() == Paging.at(0, 10)


def test_paging_orders_by_offset_then_size():
    assert Paging.at(0, 10) < Paging.at(1, 1)
    assert Paging.at(5, 1) < Paging.at(5, 2)


def test_apply_writes_offset_and_limit():
    params = {"order": "name"}
    Paging.at(40, 20).apply(params)
    assert params == {"order": "name", "offset": "40", "limit": "20"}


@pytest.mark.parametrize("offset,size", [(-1, 10), (0, 0), (0, -5)])
def test_invalid_paging_rejected(offset, size):
    with pytest.raises(InvalidArgument):
        Paging.at(offset, size)


@pytest.mark.parametrize("offset,limit", [(-1, 10), (0, 0)])
def test_invalid_view_rejected(offset, limit):
    with pytest.raises(InvalidArgument):
        View(offset, limit)


def test_invalid_page_size_rejected():
    with pytest.raises(InvalidArgument):
        PagingIterator(IntSource(1), page_size=0)


# -----------------------------
# Sequences
# -----------------------------
def test_unbounded_sequence_yields_every_record_in_order():
    source = IntSource(128)
    seq = paged_sequence(source, page_size=32)

    assert list(seq) == list(range(128))
    assert [w.offset for w in source.windows] == [0, 32, 64, 96, 128]
    # four pages with data, the fifth comes back empty and ends the sequence
    assert seq.fetches == 5
    assert seq.done


@pytest.mark.parametrize("n,page_size", [(0, 10), (1, 10), (10, 10), (11, 10), (1000, 128)])
def test_unbounded_exhaustion(n, page_size):
    out = list(paged_sequence(IntSource(n), page_size=page_size))
    assert out == list(range(n))


def test_nothing_fetched_before_first_pull():
    source = IntSource(10)
    seq = paged_sequence(source)
    assert source.windows == []
    assert seq.fetches == 0


def test_view_within_one_page_fetches_once():
    source = IntSource(10_000)
    seq = paged_sequence(source, view=View(5, 100))

    out = list(seq)

    assert out == list(range(5, 105))
    assert source.windows == [Paging.at(5, 100)]
    assert seq.fetches == 1


def test_view_spanning_pages_clamps_last_fetch():
    source = IntSource(10_000)
    seq = paged_sequence(source, view=View(5, 300), page_size=128)

    out = list(seq)

    assert len(out) == 300
    assert out == list(range(5, 305))
    assert source.windows == [Paging.at(5, 128), Paging.at(133, 128), Paging.at(261, 44)]
    assert seq.fetches == 3


def test_view_limit_equal_to_page_size():
    source = IntSource(10_000)
    out = list(paged_sequence(source, view=View(0, 128), page_size=128))
    assert out == list(range(128))
    assert source.windows == [Paging.at(0, 128)]


def test_view_past_end_of_source_stops_on_empty_page():
    source = IntSource(50)
    out = list(paged_sequence(source, view=View(40, 100), page_size=16))
    assert out == list(range(40, 50))
    assert [w.offset for w in source.windows] == [40, 56]


def test_short_page_does_not_end_sequence():
    pages = {0: [1, 2], 3: [3], 6: []}

    def fetch(paging: Paging) -> List[int]:
        return pages[paging.offset]

    seq = paged_sequence(fetch, page_size=3)
    assert list(seq) == [1, 2, 3]
    assert seq.fetches == 3


def test_try_advance_pushes_one_record_at_a_time():
    seq = paged_sequence(IntSource(3), page_size=2)
    seen: List[int] = []

    assert seq.try_advance(seen.append)
    assert seen == [0]
    assert seq.try_advance(seen.append)
    assert seq.try_advance(seen.append)
    assert seen == [0, 1, 2]
    assert not seq.try_advance(seen.append)
    assert not seq.try_advance(seen.append)
    assert seen == [0, 1, 2]


def test_fetch_failure_is_latched():
    calls = {"n": 0}

    def fetch(paging: Paging) -> List[int]:
        calls["n"] += 1
        if paging.offset == 0:
            return [0, 1]
        raise RemoteError(503, "Service Unavailable")

    seq = paged_sequence(fetch, page_size=2)
    assert next(seq) == 0
    assert next(seq) == 1

    with pytest.raises(RemoteError) as first:
        next(seq)
    with pytest.raises(RemoteError) as second:
        next(seq)

    assert first.value is second.value
    assert calls["n"] == 2
    assert seq.done
