"""FastAPI application factory."""
from __future__ import annotations
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from shiftboard.config import settings
from shiftboard.dashboard.view_model import DashboardOptions
from shiftboard.domain.exceptions import (
    AuthenticationError, BackendError, ConflictError, FetchError, ForbiddenError,
    InvalidRequestError, NotFoundError, ProfileLoadError, ShiftboardError,
)
from shiftboard.infra.backend.client import BackendClient
from shiftboard.logging import logger

_STATUS_BY_ERROR: dict[type[ShiftboardError], int] = {
    InvalidRequestError: 400,
    AuthenticationError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    BackendError: 502,
    FetchError: 502,
    ProfileLoadError: 503,
}


def create_app(
    backend: BackendClient | None = None,
    options: DashboardOptions | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from shiftboard.services.dashboard_service import DashboardSessions

        client = backend or BackendClient.from_settings(settings)
        app.state.backend = client
        app.state.options = options or DashboardOptions.from_settings(settings)
        app.state.sessions = DashboardSessions(client, app.state.options, settings.DASHBOARD_RPC)
        logger.info(
            "API started (page size %d, refresh every %ss)",
            app.state.options.page_size, app.state.options.refresh_interval,
        )
        yield
        await app.state.sessions.close_all()
        if backend is None:
            await client.aclose()

    app = FastAPI(
        title="Shiftboard API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Import routers inside create_app() to avoid circular imports at module load time
    from shiftboard.api.routers.auth import router as auth_router
    from shiftboard.api.routers.dashboard import router as dashboard_router
    from shiftboard.api.routers.employees import router as employees_router
    from shiftboard.api.routers.signup import router as signup_router
    from shiftboard.api.routers.planning import router as planning_router

    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(employees_router)
    app.include_router(signup_router)
    app.include_router(planning_router)

    @app.exception_handler(ShiftboardError)
    def _domain_error(request: Request, exc: ShiftboardError) -> JSONResponse:
        status_code = next(
            (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)), 500,
        )
        if status_code >= 500:
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.get("/health", tags=["ops"])
    def health() -> dict:
        return {"status": "ok"}

    return app
