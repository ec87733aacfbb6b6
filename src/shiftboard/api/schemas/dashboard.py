"""Dashboard DTOs: pure Pydantic."""
from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, field_validator
from shiftboard.api.schemas.auth import ProfileRead
from shiftboard.dashboard.models import (
    ALL, ContractFilter, DashboardSnapshot, FunctionGroup, ShiftStatus,
    SortColumn, SortDirection, ViewPhase,
)


class DashboardRowRead(BaseModel):
    model_config = {"from_attributes": True}

    employee_id: str | None = None
    name: str | None = None
    base: str | None = None
    contracted_hours: float | None = None
    job_title: str | None = None
    function_group: FunctionGroup
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None
    first_in: datetime | None = None
    first_out: datetime | None = None
    second_in: datetime | None = None
    second_out: datetime | None = None
    break_minutes: float | None = None
    worked_hours: float | None = None
    expected_hours: float | None = None
    overtime_hours: float | None = None
    status: str | None = None
    status_label: str


class DashboardCountsRead(BaseModel):
    model_config = {"from_attributes": True}

    total: int
    overtime_total: float
    per_status: dict[str, int]
    overtime_active: int
    on_shift: int
    finished: int


class FilterStateRead(BaseModel):
    model_config = {"from_attributes": True}

    search: str
    base: str
    status: str
    contract: ContractFilter
    groups: list[str]


class SortStateRead(BaseModel):
    model_config = {"from_attributes": True}

    column: SortColumn
    direction: SortDirection


class DashboardView(BaseModel):
    phase: ViewPhase
    loading: bool
    error: str | None = None
    last_refreshed: datetime | None = None
    profile: ProfileRead | None = None
    can_view_all_bases: bool = False
    filters: FilterStateRead
    sort: SortStateRead
    counts: DashboardCountsRead
    base_options: list[str]
    rows: list[DashboardRowRead]

    @classmethod
    def from_snapshot(cls, snapshot: DashboardSnapshot) -> "DashboardView":
        return cls(
            phase=snapshot.phase,
            loading=snapshot.loading,
            error=snapshot.error,
            last_refreshed=snapshot.last_refreshed,
            profile=ProfileRead.model_validate(snapshot.profile) if snapshot.profile else None,
            can_view_all_bases=bool(snapshot.scope and snapshot.scope.can_view_all_bases),
            filters=FilterStateRead.model_validate(snapshot.filters),
            sort=SortStateRead.model_validate(snapshot.sort),
            counts=DashboardCountsRead.model_validate(snapshot.counts),
            base_options=list(snapshot.base_options),
            rows=[DashboardRowRead.model_validate(r) for r in snapshot.rows],
        )


class FilterUpdate(BaseModel):
    """Partial filter change; omitted fields keep their current value."""

    search: str | None = None
    base: str | None = None
    status: str | None = None
    contract: ContractFilter | None = None

    @field_validator("status")
    @classmethod
    def known_status(cls, v: str | None) -> str | None:
        if v is not None and v != ALL:
            ShiftStatus(v)
        return v


class SortRequest(BaseModel):
    column: SortColumn
