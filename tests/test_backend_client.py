"""Tests for the hosted-backend HTTP client, using httpx.MockTransport."""
import asyncio
import json

import httpx
import pytest

from shiftboard.domain.exceptions import BackendError
from shiftboard.infra.backend.client import BackendClient
from shiftboard.infra.backend.repositories.feed_repository import DashboardFeedRepository


def _client(handler):
    return BackendClient(
        "http://backend.test/",
        "anon-key",
        "service-key",
        transport=httpx.MockTransport(handler),
    )


def _run(client, coro_fn):
    async def scenario():
        try:
            return await coro_fn(client)
        finally:
            await client.aclose()
    return asyncio.run(scenario())


def test_rpc_sends_paging_and_user_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["headers"] = request.headers
        return httpx.Response(200, json=[{"matricula": "1"}])

    rows = _run(_client(handler), lambda c: DashboardFeedRepository(c, "user-jwt").fetch_page(2000, 1000))
    assert rows == [{"matricula": "1"}]
    assert seen["path"] == "/rest/v1/rpc/get_dashboard"
    assert seen["params"] == {"offset": "2000", "limit": "1000"}
    assert seen["headers"]["apikey"] == "anon-key"
    assert seen["headers"]["authorization"] == "Bearer user-jwt"


def test_select_with_service_role():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["headers"] = request.headers
        return httpx.Response(200, json=[])

    rows = _run(
        _client(handler),
        lambda c: c.select("colaboradores", columns="matricula,nome", eq={"matricula": "42"}, service=True, limit=1),
    )
    assert rows == []
    assert seen["params"] == {"select": "matricula,nome", "matricula": "eq.42", "limit": "1"}
    assert seen["headers"]["apikey"] == "service-key"
    assert seen["headers"]["authorization"] == "Bearer service-key"


def test_error_detail_is_extracted():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "JWT expired"})

    with pytest.raises(BackendError) as exc_info:
        _run(_client(handler), lambda c: c.rpc("get_dashboard", access_token="t"))
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "JWT expired"
    assert not exc_info.value.is_transient


def test_non_json_error_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    with pytest.raises(BackendError) as exc_info:
        _run(_client(handler), lambda c: c.get_user("t"))
    assert exc_info.value.detail == "Bad Gateway"
    assert exc_info.value.is_transient


def test_transport_failure_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendError) as exc_info:
        _run(_client(handler), lambda c: c.get_user("t"))
    assert exc_info.value.status_code == 503


def test_sign_in_uses_password_grant():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"access_token": "jwt", "user": {"id": "u1"}})

    body = _run(_client(handler), lambda c: c.sign_in_with_password("a@b.c", "pw"))
    assert body["access_token"] == "jwt"
    assert seen["path"] == "/auth/v1/token"
    assert seen["params"] == {"grant_type": "password"}
    assert seen["body"] == {"email": "a@b.c", "password": "pw"}


def test_sign_up_forwards_captcha_and_redirect():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "u2"})

    _run(
        _client(handler),
        lambda c: c.sign_up(
            "a@b.c", "pw", data={"role": "user"}, captcha_token="cap", redirect_to="https://site/auth/confirm",
        ),
    )
    assert seen["params"] == {"redirect_to": "https://site/auth/confirm"}
    assert seen["body"]["data"] == {"role": "user"}
    assert seen["body"]["gotrue_meta_security"] == {"captcha_token": "cap"}


def test_non_json_success_body_is_a_backend_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(BackendError) as exc_info:
        _run(_client(handler), lambda c: c.rpc("get_dashboard", access_token="t"))
    assert exc_info.value.status_code == 502
    assert exc_info.value.is_transient


def test_rpc_rejects_non_list_payload():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"rows": []})

    with pytest.raises(BackendError) as exc_info:
        _run(_client(handler), lambda c: c.rpc("get_dashboard", access_token="t"))
    assert exc_info.value.status_code == 502


def test_garbled_feed_puts_dashboard_in_error_state():
    from shiftboard.dashboard.models import ViewerProfile, ViewPhase
    from shiftboard.dashboard.view_model import DashboardOptions, DashboardViewModel

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    async def load_profile():
        return ViewerProfile(id="g", filial="GRU", role="user")

    async def scenario(client):
        options = DashboardOptions(refresh_interval=0, page_timeout=1.0, max_retries=0)
        vm = DashboardViewModel(DashboardFeedRepository(client, "user-jwt"), load_profile, options)
        snapshot = await vm.start()
        await vm.stop()
        return snapshot

    snapshot = _run(_client(handler), scenario)
    assert snapshot.phase == ViewPhase.FETCH_ERROR
    assert snapshot.loading is False
    assert "invalid JSON" in snapshot.error


def test_feed_repository_switches_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["authorization"])
        return httpx.Response(200, json=[])

    async def scenario(client):
        repo = DashboardFeedRepository(client, "old-jwt")
        await repo.fetch_page(0, 10)
        repo.use_token("new-jwt")
        await repo.fetch_page(0, 10)

    _run(_client(handler), scenario)
    assert seen == ["Bearer old-jwt", "Bearer new-jwt"]
