"""Shared test fixtures.

Unit tests of the dashboard core build their own rows and fakes; this
conftest provides the pieces API tests need:

  backend: in-memory stand-in for the hosted backend (auth + REST).
  client: FastAPI TestClient wired to ``backend``.
  login: signs a seeded user in and returns auth headers.
"""
from __future__ import annotations

import itertools

import pytest

from shiftboard.dashboard.view_model import DashboardOptions
from shiftboard.domain.exceptions import BackendError


def feed_record(matricula: str, nome: str, filial: str, **overrides) -> dict:
    """One ``get_dashboard`` record with a single punch, overridable."""
    record = {
        "matricula": matricula,
        "nome": nome,
        "colaborador_filial": filial,
        "carga_horaria": 220,
        "funcao": "AGENTE DE RAMPA",
        "entrada_escala": "2026-10-19T06:00:00-03:00",
        "saida_escala": "2026-10-19T14:00:00-03:00",
        "entrada1": "2026-10-19T05:58:00-03:00",
        "saida1": None,
        "entrada2": None,
        "saida2": None,
        "intervalo_min": None,
        "horas_trabalhadas": 6.5,
        "expected_hours": 8.0,
        "hora_extra": 0,
        "status": "trabalhando ok",
    }
    record.update(overrides)
    return record


class FakeBackend:
    """Duck-typed replacement for ``BackendClient`` keeping state in dicts."""

    def __init__(self) -> None:
        self.users: dict[str, tuple[str, str]] = {}
        self.tokens: dict[str, str] = {}
        self.profiles: dict[str, dict] = {}
        self.employees: dict[str, dict] = {}
        self.feed: list[dict] = []
        self.feed_error: BackendError | None = None
        self.rpc_calls: list[tuple[int | None, int | None]] = []
        self.signups: list[dict] = []
        self.signed_out: list[str] = []
        self._ids = itertools.count(1)

    def add_user(self, email: str, password: str, profile: dict) -> str:
        user_id = profile["id"]
        self.users[email] = (password, user_id)
        self.profiles[user_id] = profile
        return user_id

    async def rpc(self, function, *, access_token=None, args=None, offset=None, limit=None):
        if access_token not in self.tokens:
            raise BackendError(401, "JWT expired")
        self.rpc_calls.append((offset, limit))
        if self.feed_error is not None:
            raise self.feed_error
        start = offset or 0
        end = start + limit if limit is not None else None
        return [dict(r) for r in self.feed[start:end]]

    async def select(self, table, *, columns="*", eq=None, access_token=None, service=False, limit=None):
        source = {"profiles": self.profiles, "colaboradores": self.employees}[table]
        matches = [
            dict(r) for r in source.values()
            if all(str(r.get(k)) == v for k, v in (eq or {}).items())
        ]
        return matches[:limit] if limit else matches

    async def sign_in_with_password(self, email, password):
        user = self.users.get(email)
        if user is None or user[0] != password:
            raise BackendError(400, "Invalid login credentials")
        token = f"token-{user[1]}-{next(self._ids)}"
        self.tokens[token] = user[1]
        return {"access_token": token, "expires_in": 3600, "user": {"id": user[1]}}

    async def sign_out(self, access_token):
        if access_token not in self.tokens:
            raise BackendError(401, "invalid JWT")
        del self.tokens[access_token]
        self.signed_out.append(access_token)

    async def get_user(self, access_token):
        if access_token not in self.tokens:
            raise BackendError(401, "invalid JWT")
        return {"id": self.tokens[access_token]}

    async def sign_up(self, email, password, *, data, captcha_token=None, redirect_to=None):
        self.signups.append({
            "email": email, "data": data, "captcha_token": captcha_token, "redirect_to": redirect_to,
        })
        return {"id": f"new-user-{len(self.signups)}", "email": email}

    async def aclose(self):
        pass


@pytest.fixture
def backend() -> FakeBackend:
    """Backend seeded with one admin, one GRU viewer and a five-row feed."""
    fake = FakeBackend()
    fake.add_user("admin@example.com", "secret", {
        "id": "u-admin", "nome": "Ana Admin", "filial": "GRU", "funcao": "GERENTE",
        "role": "admin", "matricula": "521",
    })
    fake.add_user("gru@example.com", "secret", {
        "id": "u-gru", "nome": "Gustavo Lima", "filial": "gru", "funcao": "SUPERVISOR",
        "role": "user", "matricula": "1001",
    })
    fake.feed = [
        feed_record("10", "Bruno Souza", "GRU", funcao="AGENTE DE RAMPA", hora_extra=1.5,
                    status="trabalhando em hora extra"),
        feed_record("11", "Carla Dias", "GRU", funcao="AGENTE DE PASSAGEIROS"),
        feed_record("12", "Davi Rocha", "GRU", entrada1=None, status="aguardando"),
        feed_record("20", "Elisa Prado", "BSB", funcao="OPERADOR DE EQUIPAMENTOS"),
        feed_record("21", "Fabio Nunes", "BSB", funcao="MECANICO", carga_horaria=120,
                    status="finalizado ok"),
    ]
    fake.employees = {
        "1001": {"matricula": "1001", "nome": "Gustavo Lima", "filial": "GRU", "funcao": "SUPERVISOR"},
        "2002": {"matricula": "2002", "nome": "Helena Matos", "filial": "BSB", "funcao": "GERENTE DE BASE"},
        "3003": {"matricula": "3003", "nome": "Igor Paz", "filial": "BSB", "funcao": "AGENTE DE RAMPA"},
        "521": {"matricula": "521", "nome": "Joana Reis", "filial": "SEDE", "funcao": "ANALISTA"},
    }
    return fake


@pytest.fixture
def client(backend):
    """FastAPI TestClient backed by the fake backend; no refresh timer."""
    from fastapi.testclient import TestClient
    from shiftboard.api.app import create_app

    options = DashboardOptions(refresh_interval=0, page_size=2, page_timeout=5.0, max_retries=0)
    app = create_app(backend=backend, options=options)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login(client):
    """Return a function that signs a user in and yields auth headers."""

    def _login(email: str = "gru@example.com", password: str = "secret") -> dict[str, str]:
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login
