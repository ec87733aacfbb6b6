"""Planning use-case service.

Team planning itself is not built yet; the screen only offers a base and a
date to plan for.
"""
from __future__ import annotations
from datetime import date
from shiftboard.api.schemas.planning import PlanningBases
from shiftboard.dashboard.engine import base_options
from shiftboard.dashboard.fetcher import fetch_all
from shiftboard.dashboard.models import normalize_base
from shiftboard.dashboard.scope import resolve_scope
from shiftboard.dashboard.view_model import DashboardOptions
from shiftboard.domain.exceptions import ProfileLoadError
from shiftboard.infra.backend.client import BackendClient
from shiftboard.infra.backend.repositories.feed_repository import DashboardFeedRepository
from shiftboard.infra.backend.repositories.profile_repository import ProfileRepository
from shiftboard.services.auth_service import Identity


class PlanningService:
    def __init__(
        self,
        client: BackendClient,
        identity: Identity,
        options: DashboardOptions | None = None,
        rpc_function: str = "get_dashboard",
    ) -> None:
        self._client = client
        self._identity = identity
        self._options = options or DashboardOptions()
        self._rpc_function = rpc_function

    async def list_bases(self, planning_date: date | None = None) -> PlanningBases:
        profile = await ProfileRepository(self._client, self._identity.access_token).get_by_id(
            self._identity.user_id,
        )
        if profile is None:
            raise ProfileLoadError("Falha ao carregar perfil.")

        scope = resolve_scope(profile, head_office_bases=self._options.head_office_bases)
        own_base = normalize_base(profile.base)
        planning_date = planning_date or date.today()

        if not scope.can_view_all_bases and own_base:
            return PlanningBases(
                bases=[own_base],
                selected_base=own_base,
                planning_date=planning_date,
                can_view_all_bases=False,
            )

        rows = await fetch_all(
            DashboardFeedRepository(self._client, self._identity.access_token, self._rpc_function),
            page_size=self._options.page_size,
            page_timeout=self._options.page_timeout,
            max_retries=self._options.max_retries,
            retry_backoff=self._options.retry_backoff,
        )
        return PlanningBases(
            bases=base_options(rows, head_office_bases=self._options.head_office_bases),
            selected_base="",
            planning_date=planning_date,
            can_view_all_bases=scope.can_view_all_bases,
        )
