"""Async HTTP client for the hosted backend.

Two REST surfaces share one base URL: the database API under ``/rest/v1``
(table selects and stored-procedure calls, subject to row-level security
when a user token is sent) and the auth API under ``/auth/v1``.
Every non-2xx answer and every transport failure becomes a
:class:`BackendError`.
"""
from __future__ import annotations

from typing import Any

import httpx

from shiftboard.domain.exceptions import BackendError


class BackendClient:
    def __init__(
        self,
        base_url: str,
        anon_key: str,
        service_role_key: str = "",
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._anon_key = anon_key
        self._service_role_key = service_role_key
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout, transport=transport,
        )

    @classmethod
    def from_settings(cls, settings) -> "BackendClient":
        return cls(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY.get_secret_value(),
            settings.SUPABASE_SERVICE_ROLE_KEY.get_secret_value(),
            timeout=settings.BACKEND_TIMEOUT_SECONDS,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _headers(self, access_token: str | None = None, *, service: bool = False) -> dict[str, str]:
        key = self._service_role_key if service else self._anon_key
        bearer = key if service or access_token is None else access_token
        return {"apikey": key, "Authorization": f"Bearer {bearer}"}

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            body = resp.json()
            detail = (
                body.get("message")
                or body.get("msg")
                or body.get("error_description")
                or body.get("error")
                or resp.text
            )
        except Exception:
            detail = resp.text
        raise BackendError(resp.status_code, str(detail))

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise BackendError(503, f"backend unreachable: {exc}") from exc
        self._raise_for_status(resp)
        return resp

    def _json(self, resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise BackendError(502, f"invalid JSON from backend: {resp.text[:200]}") from exc

    def _json_rows(self, resp: httpx.Response) -> list[dict[str, Any]]:
        body = self._json(resp)
        if body is None:
            return []
        if not isinstance(body, list):
            raise BackendError(502, f"expected a list of records, got {type(body).__name__}")
        return body

    # ------------------------------------------------------------------
    # Database REST
    # ------------------------------------------------------------------

    async def rpc(
        self,
        function: str,
        *,
        access_token: str | None = None,
        args: dict[str, Any] | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Call a stored procedure returning a set of records."""
        params: dict[str, int] = {}
        if offset is not None:
            params["offset"] = offset
        if limit is not None:
            params["limit"] = limit
        resp = await self._request(
            "POST",
            f"/rest/v1/rpc/{function}",
            params=params,
            json=args or {},
            headers=self._headers(access_token),
        )
        return self._json_rows(resp)

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        eq: dict[str, str] | None = None,
        access_token: str | None = None,
        service: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, str] = {"select": columns}
        for column, value in (eq or {}).items():
            params[column] = f"eq.{value}"
        if limit is not None:
            params["limit"] = str(limit)
        resp = await self._request(
            "GET",
            f"/rest/v1/{table}",
            params=params,
            headers=self._headers(access_token, service=service),
        )
        return self._json_rows(resp)

    # ------------------------------------------------------------------
    # Auth REST
    # ------------------------------------------------------------------

    async def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        resp = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            headers=self._headers(),
        )
        return self._json(resp) or {}

    async def sign_out(self, access_token: str) -> None:
        await self._request("POST", "/auth/v1/logout", headers=self._headers(access_token))

    async def get_user(self, access_token: str) -> dict[str, Any]:
        resp = await self._request("GET", "/auth/v1/user", headers=self._headers(access_token))
        return self._json(resp) or {}

    async def sign_up(
        self,
        email: str,
        password: str,
        *,
        data: dict[str, Any],
        captcha_token: str | None = None,
        redirect_to: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"email": email, "password": password, "data": data}
        if captcha_token:
            body["gotrue_meta_security"] = {"captcha_token": captcha_token}
        params = {"redirect_to": redirect_to} if redirect_to else None
        resp = await self._request(
            "POST", "/auth/v1/signup", params=params, json=body, headers=self._headers(),
        )
        return self._json(resp) or {}
