"""Auth endpoints."""
from fastapi import APIRouter, Depends
from shiftboard.api.deps import get_backend, get_bearer_token, get_identity, get_sessions
from shiftboard.api.schemas.auth import LoginRequest, ProfileRead, SessionRead
from shiftboard.infra.backend.client import BackendClient
from shiftboard.services.auth_service import AuthService, Identity
from shiftboard.services.dashboard_service import DashboardSessions

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionRead)
async def login(payload: LoginRequest, backend: BackendClient = Depends(get_backend)) -> SessionRead:
    return await AuthService(backend).sign_in(payload)


@router.post("/logout", status_code=204)
async def logout(
    token: str = Depends(get_bearer_token),
    backend: BackendClient = Depends(get_backend),
    sessions: DashboardSessions = Depends(get_sessions),
) -> None:
    await sessions.close(token)
    await AuthService(backend).sign_out(token)


@router.get("/me", response_model=ProfileRead)
async def me(
    identity: Identity = Depends(get_identity),
    backend: BackendClient = Depends(get_backend),
) -> ProfileRead:
    return await AuthService(backend).get_profile(identity)
