"""Dashboard endpoints."""
from fastapi import APIRouter, Depends
from shiftboard.api.deps import get_identity, get_sessions
from shiftboard.api.schemas.dashboard import DashboardView, FilterUpdate, SortRequest
from shiftboard.dashboard.models import GROUP_FILTER_OPTIONS
from shiftboard.domain.exceptions import InvalidRequestError
from shiftboard.services.auth_service import Identity
from shiftboard.services.dashboard_service import DashboardService, DashboardSessions

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _service(
    identity: Identity = Depends(get_identity),
    sessions: DashboardSessions = Depends(get_sessions),
) -> DashboardService:
    return DashboardService(sessions, identity)


@router.get("", response_model=DashboardView)
async def get_dashboard(service: DashboardService = Depends(_service)) -> DashboardView:
    return await service.get_view()


@router.patch("/filters", response_model=DashboardView)
async def update_filters(
    payload: FilterUpdate, service: DashboardService = Depends(_service),
) -> DashboardView:
    return await service.update_filters(payload)


@router.post("/filters/groups/{group}", response_model=DashboardView)
async def toggle_group(group: str, service: DashboardService = Depends(_service)) -> DashboardView:
    if group not in GROUP_FILTER_OPTIONS:
        raise InvalidRequestError(f"Unknown function group: {group}")
    return await service.toggle_group(group)


@router.post("/filters/reset", response_model=DashboardView)
async def reset_filters(service: DashboardService = Depends(_service)) -> DashboardView:
    return await service.reset_filters()


@router.post("/sort", response_model=DashboardView)
async def select_sort(
    payload: SortRequest, service: DashboardService = Depends(_service),
) -> DashboardView:
    return await service.select_sort(payload)


@router.post("/refresh", response_model=DashboardView)
async def refresh(service: DashboardService = Depends(_service)) -> DashboardView:
    return await service.refresh()
