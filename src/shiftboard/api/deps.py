"""FastAPI dependencies."""
from __future__ import annotations
from fastapi import Depends, Header, Request
from shiftboard.config import settings
from shiftboard.dashboard.view_model import DashboardOptions
from shiftboard.domain.exceptions import AuthenticationError
from shiftboard.infra.backend.client import BackendClient
from shiftboard.services.auth_service import AuthService, Identity
from shiftboard.services.dashboard_service import DashboardSessions
from shiftboard.services.signup_service import SignupService


def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend


def get_sessions(request: Request) -> DashboardSessions:
    return request.app.state.sessions


def get_options(request: Request) -> DashboardOptions:
    return request.app.state.options


def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Missing bearer token.")
    return token.strip()


async def get_identity(
    token: str = Depends(get_bearer_token),
    backend: BackendClient = Depends(get_backend),
) -> Identity:
    """Resolve the bearer token to a user through the auth provider."""
    return await AuthService(backend).identify(token)


def get_signup_service(backend: BackendClient = Depends(get_backend)) -> SignupService:
    return SignupService(
        backend,
        admin_ids=settings.ADMIN_EMPLOYEE_IDS,
        allowed_terms=settings.SIGNUP_ALLOWED_TITLE_TERMS,
        site_url=settings.SITE_URL,
    )
