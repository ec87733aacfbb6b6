"""Paginated retrieval of the dashboard feed.

Pages of ``page_size`` records are requested from offset 0 until a short page
marks the end of data.  Any failure aborts the whole fetch: callers get
either every row or a :class:`FetchError`, never a partial set.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from shiftboard.dashboard.models import PunchRow
from shiftboard.domain.exceptions import BackendError, FetchError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000


@runtime_checkable
class FeedSource(Protocol):
    """Anything that can return one page of raw dashboard records."""

    async def fetch_page(self, offset: int, limit: int) -> list[dict[str, Any]]:
        """Return at most ``limit`` records starting at ``offset``."""
        ...


async def _fetch_page_with_retry(
    source: FeedSource,
    offset: int,
    limit: int,
    *,
    timeout: float,
    max_retries: int,
    backoff: float,
) -> list[dict[str, Any]]:
    attempt = 0
    while True:
        try:
            return await asyncio.wait_for(source.fetch_page(offset, limit), timeout)
        except TimeoutError:
            reason = f"page at offset {offset} timed out after {timeout}s"
        except BackendError as exc:
            if not exc.is_transient:
                raise FetchError(exc.detail) from exc
            reason = str(exc)

        if attempt >= max_retries:
            raise FetchError(reason)
        attempt += 1
        logger.warning("Feed page retry %d/%d: %s", attempt, max_retries, reason)
        await asyncio.sleep(backoff * attempt)


def parse_rows(records: list[dict[str, Any]]) -> list[PunchRow]:
    """Validate raw records, skipping the ones that do not parse."""
    rows: list[PunchRow] = []
    for index, record in enumerate(records):
        try:
            rows.append(PunchRow.model_validate(record))
        except ValidationError as exc:
            logger.warning("Skipping malformed feed record #%d: %s", index, exc.errors()[:1])
    return rows


async def fetch_all(
    source: FeedSource,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    page_timeout: float = 30.0,
    max_retries: int = 2,
    retry_backoff: float = 0.5,
) -> list[PunchRow]:
    if page_size <= 0:
        raise ValueError("page_size must be positive")

    records: list[dict[str, Any]] = []
    offset = 0
    pages = 0
    while True:
        page = await _fetch_page_with_retry(
            source,
            offset,
            page_size,
            timeout=page_timeout,
            max_retries=max_retries,
            backoff=retry_backoff,
        )
        pages += 1
        records.extend(page)
        if len(page) < page_size:
            break
        offset += page_size

    logger.debug("Fetched %d feed records in %d page(s)", len(records), pages)
    return parse_rows(records)
