"""Tests for paginated feed retrieval."""
import asyncio

import pytest

from shiftboard.dashboard.fetcher import FeedSource, fetch_all, parse_rows
from shiftboard.domain.exceptions import BackendError, FetchError


class ListSource:
    """Serves pages out of a list and records every request."""

    def __init__(self, records, failures=None, delay=0.0):
        self.records = records
        self.failures = list(failures or [])
        self.delay = delay
        self.calls: list[tuple[int, int]] = []

    async def fetch_page(self, offset, limit):
        self.calls.append((offset, limit))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.failures:
            failure = self.failures.pop(0)
            if failure is not None:
                raise failure
        return self.records[offset:offset + limit]


def _records(n):
    return [{"matricula": str(i), "nome": f"Pessoa {i}"} for i in range(n)]


def test_list_source_satisfies_protocol():
    assert isinstance(ListSource([]), FeedSource)


def test_fetches_until_short_page():
    source = ListSource(_records(2500))
    rows = asyncio.run(fetch_all(source, page_size=1000))
    assert len(rows) == 2500
    assert source.calls == [(0, 1000), (1000, 1000), (2000, 1000)]
    assert rows[0].employee_id == "0"
    assert rows[-1].employee_id == "2499"


def test_exact_multiple_needs_one_empty_page():
    source = ListSource(_records(1000))
    rows = asyncio.run(fetch_all(source, page_size=1000))
    assert len(rows) == 1000
    assert source.calls == [(0, 1000), (1000, 1000)]


def test_empty_feed():
    source = ListSource([])
    assert asyncio.run(fetch_all(source)) == []
    assert source.calls == [(0, 1000)]


def test_rejects_non_positive_page_size():
    with pytest.raises(ValueError):
        asyncio.run(fetch_all(ListSource([]), page_size=0))


def test_client_error_aborts_without_partial_rows():
    source = ListSource(_records(30), failures=[None, BackendError(401, "JWT expired")])
    with pytest.raises(FetchError) as exc_info:
        asyncio.run(fetch_all(source, page_size=10, max_retries=3))
    assert exc_info.value.message == "JWT expired"
    assert len(source.calls) == 2


def test_transient_error_is_retried():
    source = ListSource(_records(5), failures=[BackendError(503, "unavailable")])
    rows = asyncio.run(fetch_all(source, page_size=10, max_retries=1, retry_backoff=0))
    assert len(rows) == 5
    assert source.calls == [(0, 10), (0, 10)]


def test_retries_exhausted():
    failures = [BackendError(500, "boom")] * 3
    source = ListSource(_records(5), failures=failures)
    with pytest.raises(FetchError):
        asyncio.run(fetch_all(source, page_size=10, max_retries=2, retry_backoff=0))
    assert len(source.calls) == 3


def test_page_timeout():
    source = ListSource(_records(5), delay=0.2)
    with pytest.raises(FetchError) as exc_info:
        asyncio.run(fetch_all(source, page_timeout=0.01, max_retries=0))
    assert "timed out" in exc_info.value.message


def test_parse_rows_skips_malformed_records():
    rows = parse_rows([
        {"matricula": "1", "carga_horaria": 220},
        {"matricula": "2", "carga_horaria": "muitas"},
        {"matricula": "3", "entrada1": "not a time"},
        {"matricula": "4"},
    ])
    assert [r.employee_id for r in rows] == ["1", "4"]
