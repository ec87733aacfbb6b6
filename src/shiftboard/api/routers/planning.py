"""Planning endpoints."""
from datetime import date
from fastapi import APIRouter, Depends
from shiftboard.api.deps import get_backend, get_identity, get_options
from shiftboard.api.schemas.planning import PlanningBases
from shiftboard.config import settings
from shiftboard.dashboard.view_model import DashboardOptions
from shiftboard.infra.backend.client import BackendClient
from shiftboard.services.auth_service import Identity
from shiftboard.services.planning_service import PlanningService

router = APIRouter(prefix="/planning", tags=["planning"])


@router.get("/bases", response_model=PlanningBases)
async def list_bases(
    planning_date: date | None = None,
    identity: Identity = Depends(get_identity),
    backend: BackendClient = Depends(get_backend),
    options: DashboardOptions = Depends(get_options),
) -> PlanningBases:
    service = PlanningService(backend, identity, options, settings.DASHBOARD_RPC)
    return await service.list_bases(planning_date)
