"""Typed HTTP client for Streamlit pages.

Only imports DTOs from ``shiftboard.api.schemas``; never touches services or
the hosted backend directly.  Instantiate via ``get_client()`` which caches
per Streamlit session.
"""
from __future__ import annotations

from typing import Any

import httpx
import streamlit as st

from shiftboard.api.schemas.auth import LoginRequest, ProfileRead, SessionRead
from shiftboard.api.schemas.dashboard import DashboardView, FilterUpdate, SortRequest
from shiftboard.api.schemas.employees import EmployeeLookupRead
from shiftboard.api.schemas.planning import PlanningBases
from shiftboard.api.schemas.signup import SignupRequest, SignupResponse
from shiftboard.config import settings


class APIError(Exception):
    """Raised when the backend returns a 4xx/5xx response."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")


class ShiftboardClient:
    """One method per API endpoint.  All return pure Pydantic DTOs."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url or settings.API_BASE_URL, timeout=30.0, transport=transport,
        )
        self._token: str | None = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            detail = resp.json().get("detail", resp.text)
        except Exception:
            detail = resp.text
        raise APIError(resp.status_code, str(detail))

    def _auth(self) -> dict[str, str]:
        if not self._token:
            raise APIError(401, "Not signed in.")
        return {"Authorization": f"Bearer {self._token}"}

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def login(self, email: str, password: str) -> SessionRead:
        payload = LoginRequest(email=email, password=password)
        resp = self._client.post("/auth/login", json=payload.model_dump())
        self._raise_for_status(resp)
        session = SessionRead.model_validate(resp.json())
        self._token = session.access_token
        return session

    def logout(self) -> None:
        if not self._token:
            return
        try:
            resp = self._client.post("/auth/logout", headers=self._auth())
            if resp.status_code != 401:
                self._raise_for_status(resp)
        finally:
            self._token = None

    def me(self) -> ProfileRead:
        resp = self._client.get("/auth/me", headers=self._auth())
        self._raise_for_status(resp)
        return ProfileRead.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def get_dashboard(self) -> DashboardView:
        resp = self._client.get("/dashboard", headers=self._auth())
        self._raise_for_status(resp)
        return DashboardView.model_validate(resp.json())

    def update_filters(self, payload: FilterUpdate) -> DashboardView:
        resp = self._client.patch(
            "/dashboard/filters",
            json=payload.model_dump(mode="json", exclude_none=True),
            headers=self._auth(),
        )
        self._raise_for_status(resp)
        return DashboardView.model_validate(resp.json())

    def toggle_group(self, group: str) -> DashboardView:
        resp = self._client.post(f"/dashboard/filters/groups/{group}", headers=self._auth())
        self._raise_for_status(resp)
        return DashboardView.model_validate(resp.json())

    def reset_filters(self) -> DashboardView:
        resp = self._client.post("/dashboard/filters/reset", headers=self._auth())
        self._raise_for_status(resp)
        return DashboardView.model_validate(resp.json())

    def select_sort(self, column: str) -> DashboardView:
        payload = SortRequest(column=column)
        resp = self._client.post(
            "/dashboard/sort", json=payload.model_dump(mode="json"), headers=self._auth(),
        )
        self._raise_for_status(resp)
        return DashboardView.model_validate(resp.json())

    def refresh_dashboard(self) -> DashboardView:
        resp = self._client.post("/dashboard/refresh", headers=self._auth())
        self._raise_for_status(resp)
        return DashboardView.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Signup
    # ------------------------------------------------------------------

    def lookup_employee(self, employee_id: str) -> EmployeeLookupRead:
        resp = self._client.get(f"/employees/{employee_id}")
        self._raise_for_status(resp)
        return EmployeeLookupRead.model_validate(resp.json())

    def signup(self, payload: SignupRequest) -> SignupResponse:
        resp = self._client.post("/signup", json=payload.model_dump())
        self._raise_for_status(resp)
        return SignupResponse.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def planning_bases(self) -> PlanningBases:
        resp = self._client.get("/planning/bases", headers=self._auth())
        self._raise_for_status(resp)
        return PlanningBases.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def health(self) -> dict[str, Any]:
        resp = self._client.get("/health")
        self._raise_for_status(resp)
        return resp.json()


# ------------------------------------------------------------------
# Streamlit helper: one client per session
# ------------------------------------------------------------------

def get_client() -> ShiftboardClient:
    """Return a cached ``ShiftboardClient`` for the current Streamlit session."""
    if "shiftboard_api_client" not in st.session_state:
        base_url = st.session_state.get("shiftboard_api_url", settings.API_BASE_URL)
        st.session_state["shiftboard_api_client"] = ShiftboardClient(base_url=base_url)
    return st.session_state["shiftboard_api_client"]
