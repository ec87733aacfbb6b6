"""Dashboard feed backed by the ``get_dashboard`` stored procedure."""
from __future__ import annotations

from typing import Any

from shiftboard.infra.backend.client import BackendClient


class DashboardFeedRepository:
    """Page source for :func:`shiftboard.dashboard.fetcher.fetch_all`.

    Calls run with the viewer's access token so row-level security decides
    which rows come back.
    """

    def __init__(self, client: BackendClient, access_token: str, function: str = "get_dashboard") -> None:
        self._client = client
        self._access_token = access_token
        self._function = function

    def use_token(self, access_token: str) -> None:
        """Switch to a refreshed token for the next page request."""
        self._access_token = access_token

    async def fetch_page(self, offset: int, limit: int) -> list[dict[str, Any]]:
        return await self._client.rpc(
            self._function,
            access_token=self._access_token,
            offset=offset,
            limit=limit,
        )
