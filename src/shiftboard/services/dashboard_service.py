"""Dashboard use-case service.

``DashboardSessions`` owns one :class:`DashboardViewModel` per user
until logout or shutdown; ``DashboardService`` is the per-request
facade the router talks to.
"""
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from shiftboard.api.schemas.dashboard import DashboardView, FilterUpdate, SortRequest
from shiftboard.dashboard.models import ViewerProfile, ViewPhase
from shiftboard.dashboard.view_model import DashboardOptions, DashboardViewModel
from shiftboard.domain.exceptions import NotFoundError, ProfileLoadError
from shiftboard.infra.backend.client import BackendClient
from shiftboard.infra.backend.repositories.feed_repository import DashboardFeedRepository
from shiftboard.infra.backend.repositories.profile_repository import ProfileRepository
from shiftboard.services.auth_service import Identity

logger = logging.getLogger(__name__)


@dataclass
class _Session:
    access_token: str
    source: DashboardFeedRepository
    view_model: DashboardViewModel


class DashboardSessions:
    """One view model per user.

    A new token for a user who already has a session (re-login, token
    rotation) is swapped into the existing feed source, so each user holds
    at most one refresh timer.
    """

    def __init__(
        self,
        client: BackendClient,
        options: DashboardOptions | None = None,
        rpc_function: str = "get_dashboard",
    ) -> None:
        self._client = client
        self._options = options or DashboardOptions()
        self._rpc_function = rpc_function
        self._sessions: dict[str, _Session] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, access_token: object) -> bool:
        return any(s.access_token == access_token for s in self._sessions.values())

    def _build(self, identity: Identity) -> _Session:
        source = DashboardFeedRepository(self._client, identity.access_token, self._rpc_function)
        profiles = ProfileRepository(self._client, identity.access_token)

        async def load_profile() -> ViewerProfile:
            profile = await profiles.get_by_id(identity.user_id)
            if profile is None:
                raise NotFoundError(f"Profile {identity.user_id} not found")
            return profile

        return _Session(
            access_token=identity.access_token,
            source=source,
            view_model=DashboardViewModel(source, load_profile, self._options),
        )

    async def open(self, identity: Identity) -> DashboardViewModel:
        """Return the user's view model, starting it on first use."""
        async with self._lock:
            session = self._sessions.get(identity.user_id)
            if session is None:
                session = self._build(identity)
                self._sessions[identity.user_id] = session
                logger.info("Opened dashboard session for user %s", identity.user_id)
            elif session.access_token != identity.access_token:
                session.access_token = identity.access_token
                session.source.use_token(identity.access_token)
                logger.info("Rotated dashboard session token for user %s", identity.user_id)

        vm = session.view_model
        if vm.phase == ViewPhase.IDLE:
            await vm.start()
        if vm.phase == ViewPhase.PROFILE_ERROR:
            message = vm.snapshot().error or "Profile could not be loaded."
            await self.close(identity.access_token)
            raise ProfileLoadError(message)
        return vm

    async def close(self, access_token: str) -> bool:
        async with self._lock:
            user_id = next(
                (uid for uid, s in self._sessions.items() if s.access_token == access_token), None,
            )
            session = self._sessions.pop(user_id, None) if user_id is not None else None
        if session is None:
            return False
        await session.view_model.stop()
        logger.info("Closed dashboard session for user %s", user_id)
        return True

    async def close_all(self) -> None:
        async with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            await session.view_model.stop()


class DashboardService:
    def __init__(self, sessions: DashboardSessions, identity: Identity) -> None:
        self._sessions = sessions
        self._identity = identity

    async def get_view(self) -> DashboardView:
        vm = await self._sessions.open(self._identity)
        return DashboardView.from_snapshot(vm.snapshot())

    async def update_filters(self, payload: FilterUpdate) -> DashboardView:
        vm = await self._sessions.open(self._identity)
        if payload.search is not None:
            vm.set_search(payload.search)
        if payload.base is not None:
            vm.set_base(payload.base)
        if payload.status is not None:
            vm.set_status(payload.status)
        if payload.contract is not None:
            vm.set_contract(payload.contract)
        return DashboardView.from_snapshot(vm.snapshot())

    async def toggle_group(self, group: str) -> DashboardView:
        vm = await self._sessions.open(self._identity)
        return DashboardView.from_snapshot(vm.toggle_group(group))

    async def reset_filters(self) -> DashboardView:
        vm = await self._sessions.open(self._identity)
        return DashboardView.from_snapshot(vm.reset_filters())

    async def select_sort(self, payload: SortRequest) -> DashboardView:
        vm = await self._sessions.open(self._identity)
        return DashboardView.from_snapshot(vm.select_sort(payload.column))

    async def refresh(self) -> DashboardView:
        vm = await self._sessions.open(self._identity)
        return DashboardView.from_snapshot(await vm.refresh())
