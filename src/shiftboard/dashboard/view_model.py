"""Per-session dashboard state machine.

Lifecycle::

    idle -> profile_loading -> profile_error | profile_ready
    profile_ready -> fetching -> fetch_error | fetch_ready
    fetch_ready / fetch_error --(timer | refresh)--> fetching
    any --stop()--> idle

Filter and sort mutators are synchronous: they re-derive the snapshot from
the last successful fetch without touching the backend.  Fetches follow
last-fetch-wins: starting a fetch cancels the one in flight, and a result
whose generation is no longer current is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from shiftboard.dashboard.classifier import classify_rows
from shiftboard.dashboard.engine import apply_filters, base_options
from shiftboard.dashboard.fetcher import DEFAULT_PAGE_SIZE, FeedSource, fetch_all
from shiftboard.dashboard.models import (
    DEFAULT_FULL_TIME_HOURS,
    DEFAULT_HEAD_OFFICE_BASES,
    ClassifiedRow,
    ContractFilter,
    DashboardCounts,
    DashboardSnapshot,
    FilterState,
    Scope,
    SortColumn,
    SortState,
    ViewerProfile,
    ViewPhase,
)
from shiftboard.dashboard.scope import resolve_scope
from shiftboard.dashboard.sorting import sort_rows
from shiftboard.domain.exceptions import FetchError, ShiftboardError

if TYPE_CHECKING:
    from shiftboard.config import Settings

logger = logging.getLogger(__name__)

ProfileLoader = Callable[[], Awaitable[ViewerProfile]]

PROFILE_LOAD_ERROR = "Falha ao carregar perfil."
UNEXPECTED_FETCH_ERROR = "Falha ao atualizar dados."


@dataclass(frozen=True)
class DashboardOptions:
    page_size: int = DEFAULT_PAGE_SIZE
    refresh_interval: float = 300.0
    page_timeout: float = 30.0
    max_retries: int = 2
    retry_backoff: float = 0.5
    full_time_hours: frozenset[float] = DEFAULT_FULL_TIME_HOURS
    head_office_bases: frozenset[str] = DEFAULT_HEAD_OFFICE_BASES

    @classmethod
    def from_settings(cls, settings: "Settings") -> "DashboardOptions":
        return cls(
            page_size=settings.DASHBOARD_PAGE_SIZE,
            refresh_interval=settings.REFRESH_INTERVAL_SECONDS,
            page_timeout=settings.FETCH_PAGE_TIMEOUT_SECONDS,
            max_retries=settings.FETCH_MAX_RETRIES,
            retry_backoff=settings.FETCH_RETRY_BACKOFF_SECONDS,
            full_time_hours=frozenset(settings.FULL_TIME_HOURS),
            head_office_bases=frozenset(b.upper() for b in settings.HEAD_OFFICE_BASES),
        )


class DashboardViewModel:
    def __init__(
        self,
        source: FeedSource,
        load_profile: ProfileLoader,
        options: DashboardOptions | None = None,
    ) -> None:
        self._source = source
        self._load_profile = load_profile
        self._options = options or DashboardOptions()

        self._phase = ViewPhase.IDLE
        self._profile: ViewerProfile | None = None
        self._scope: Scope | None = None
        self._filters = FilterState()
        self._sort = SortState()
        self._rows: list[ClassifiedRow] = []
        self._bases: list[str] = []
        self._error: str | None = None
        self._loading = False
        self._last_refreshed: datetime | None = None

        self._generation = 0
        self._fetch_task: asyncio.Task | None = None
        self._timer_task: asyncio.Task | None = None
        self._snapshot = DashboardSnapshot()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def phase(self) -> ViewPhase:
        return self._phase

    @property
    def profile(self) -> ViewerProfile | None:
        return self._profile

    def snapshot(self) -> DashboardSnapshot:
        return self._snapshot

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> DashboardSnapshot:
        """Load the profile, run the first fetch and arm the refresh timer."""
        if self._phase != ViewPhase.IDLE:
            return self._snapshot

        self._phase = ViewPhase.PROFILE_LOADING
        self._loading = True
        self._publish()
        generation = self._generation

        try:
            profile = await self._load_profile()
        except ShiftboardError as exc:
            if generation != self._generation:
                return self._snapshot
            logger.error("Profile load failed: %s", exc.message)
            self._phase = ViewPhase.PROFILE_ERROR
            self._error = PROFILE_LOAD_ERROR
            self._loading = False
            self._publish()
            return self._snapshot

        if generation != self._generation:
            logger.debug("Stopped while loading the profile")
            return self._snapshot

        self._profile = profile
        self._scope = resolve_scope(profile, head_office_bases=self._options.head_office_bases)
        self._filters = FilterState.initial(self._scope)
        self._phase = ViewPhase.PROFILE_READY
        self._publish()

        if await self._fetch():
            self._schedule_timer()
        return self._snapshot

    async def refresh(self) -> DashboardSnapshot:
        """Fetch now and restart the timer from completion."""
        if self._profile is None:
            return self._snapshot
        self._cancel_timer()
        if await self._fetch():
            self._schedule_timer()
        return self._snapshot

    async def stop(self) -> None:
        """Tear down timer and in-flight fetch; return to idle."""
        pending = [t for t in (self._timer_task, self._fetch_task) if t is not None and not t.done()]
        self._cancel_timer()
        self._cancel_fetch()
        self._generation += 1
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        self._phase = ViewPhase.IDLE
        self._profile = None
        self._scope = None
        self._filters = FilterState()
        self._sort = SortState()
        self._rows = []
        self._bases = []
        self._error = None
        self._loading = False
        self._last_refreshed = None
        self._publish()

    # ------------------------------------------------------------------
    # Filter / sort mutators
    # ------------------------------------------------------------------

    def set_search(self, text: str) -> DashboardSnapshot:
        return self._update_filters(search=text)

    def set_base(self, base: str) -> DashboardSnapshot:
        if self._scope is None or not self._scope.can_view_all_bases:
            logger.debug("Ignoring base selection for a single-base viewer")
            return self._snapshot
        return self._update_filters(base=base)

    def set_status(self, status: str) -> DashboardSnapshot:
        return self._update_filters(status=status)

    def set_contract(self, contract: ContractFilter | str) -> DashboardSnapshot:
        return self._update_filters(contract=ContractFilter(contract))

    def toggle_group(self, group: str) -> DashboardSnapshot:
        self._filters = self._filters.with_group_toggled(group)
        self._publish()
        return self._snapshot

    def reset_filters(self) -> DashboardSnapshot:
        self._filters = FilterState.initial(self._scope) if self._scope else FilterState()
        self._publish()
        return self._snapshot

    def select_sort(self, column: SortColumn | str) -> DashboardSnapshot:
        self._sort = self._sort.select(SortColumn(column))
        self._publish()
        return self._snapshot

    def _update_filters(self, **changes: object) -> DashboardSnapshot:
        self._filters = FilterState(**{**self._filters.model_dump(), **changes})
        self._publish()
        return self._snapshot

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    async def _fetch(self) -> bool:
        """Run one fetch; True when it finished as the current generation."""
        if self._profile is None:
            return False

        self._cancel_fetch()
        self._generation += 1
        generation = self._generation

        self._phase = ViewPhase.FETCHING
        self._loading = True
        self._publish()

        task = asyncio.create_task(
            fetch_all(
                self._source,
                page_size=self._options.page_size,
                page_timeout=self._options.page_timeout,
                max_retries=self._options.max_retries,
                retry_backoff=self._options.retry_backoff,
            )
        )
        self._fetch_task = task
        try:
            rows = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if generation != self._generation and not (current and current.cancelling()):
                logger.debug("Fetch %d superseded", generation)
                return False
            raise
        except FetchError as exc:
            if generation != self._generation:
                return False
            logger.warning("Dashboard fetch failed: %s", exc.message)
            self._fail(exc.message)
            return True
        except Exception:
            if generation != self._generation:
                return False
            logger.exception("Unexpected error while fetching the dashboard feed")
            self._fail(UNEXPECTED_FETCH_ERROR)
            return True

        if generation != self._generation:
            return False

        self._rows = classify_rows(rows, head_office_bases=self._options.head_office_bases)
        self._bases = base_options(rows, head_office_bases=self._options.head_office_bases)
        self._last_refreshed = datetime.now(timezone.utc)
        self._phase = ViewPhase.FETCH_READY
        self._error = None
        self._loading = False
        self._publish()
        return True

    def _fail(self, message: str) -> None:
        self._phase = ViewPhase.FETCH_ERROR
        self._error = message
        self._loading = False
        self._publish()

    def _cancel_fetch(self) -> None:
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
        self._fetch_task = None

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    async def _auto_refresh(self) -> None:
        while True:
            await asyncio.sleep(self._options.refresh_interval)
            if not await self._fetch():
                return

    def _schedule_timer(self) -> None:
        self._cancel_timer()
        if self._options.refresh_interval > 0:
            self._timer_task = asyncio.create_task(self._auto_refresh())

    def _cancel_timer(self) -> None:
        if self._timer_task is not None and not self._timer_task.done():
            self._timer_task.cancel()
        self._timer_task = None

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def _publish(self) -> None:
        rows: tuple[ClassifiedRow, ...] = ()
        counts = DashboardCounts()
        if self._profile is not None and self._scope is not None:
            result = apply_filters(
                self._rows,
                self._scope,
                self._filters,
                self._profile,
                full_time_hours=self._options.full_time_hours,
            )
            rows = tuple(sort_rows(result.visible, self._sort.column, self._sort.direction))
            counts = result.counts

        self._snapshot = DashboardSnapshot(
            phase=self._phase,
            loading=self._loading,
            error=self._error,
            last_refreshed=self._last_refreshed,
            profile=self._profile,
            scope=self._scope,
            filters=self._filters,
            sort=self._sort,
            rows=rows,
            counts=counts,
            base_options=tuple(self._bases),
        )
