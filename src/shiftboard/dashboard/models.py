"""Dashboard domain models.

PunchRow and ViewerProfile accept the backend's column names as aliases and
expose English attribute names.  All models here are frozen: filter and sort
mutations produce new instances, the view model swaps them in.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

ALL = "todas"

DEFAULT_HEAD_OFFICE_BASES: frozenset[str] = frozenset({"SEDE", "HQ2"})
DEFAULT_FULL_TIME_HOURS: frozenset[float] = frozenset({180, 210, 220})


def normalize_base(base: str | None) -> str:
    return (base or "").strip().upper()


# ---------------------------------------------------------------------------
# Closed value sets
# ---------------------------------------------------------------------------


class FunctionGroup(str, Enum):
    PAX = "PAX"
    LIDER = "LIDER"
    RAMPA = "RAMPA"
    LIMPEZA = "LIMPEZA"
    OPERADOR = "OPERADOR"
    SECURITY = "SECURITY"
    GSE = "GSE"
    SUPERVISOR = "SUPERVISOR"
    OUTROS = "OUTROS"


class ShiftStatus(str, Enum):
    AWAITING = "aguardando"
    OVERTIME_ACTIVE = "trabalhando em hora extra"
    ON_SHIFT = "trabalhando ok"
    FINISHED = "finalizado ok"
    FINISHED_OVERTIME = "finalizado com hora extra"


STATUS_LABELS: dict[ShiftStatus, str] = {
    ShiftStatus.AWAITING: "Sem batida",
    ShiftStatus.OVERTIME_ACTIVE: "Em hora extra",
    ShiftStatus.ON_SHIFT: "Em jornada",
    ShiftStatus.FINISHED: "Finalizado",
    ShiftStatus.FINISHED_OVERTIME: "Finalizado c/ HE",
}

# Options offered by the status selector, in display order.
STATUS_FILTER_OPTIONS: list[tuple[str, str]] = [
    (ALL, "Todos"),
    (ShiftStatus.OVERTIME_ACTIVE.value, STATUS_LABELS[ShiftStatus.OVERTIME_ACTIVE]),
    (ShiftStatus.ON_SHIFT.value, STATUS_LABELS[ShiftStatus.ON_SHIFT]),
    (ShiftStatus.FINISHED_OVERTIME.value, STATUS_LABELS[ShiftStatus.FINISHED_OVERTIME]),
    (ShiftStatus.FINISHED.value, STATUS_LABELS[ShiftStatus.FINISHED]),
]

GROUP_FILTER_OPTIONS: list[str] = [ALL] + [g.value for g in FunctionGroup]


def status_label(status: str | None) -> str:
    """Display label for a raw status; unknown values are shown as-is."""
    if not status:
        return "-"
    try:
        return STATUS_LABELS[ShiftStatus(status)]
    except ValueError:
        return status


class ContractFilter(str, Enum):
    ALL = "todas"
    FULL = "full"
    PART = "part"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortColumn(str, Enum):
    EMPLOYEE_ID = "employee_id"
    NAME = "name"
    BASE = "base"
    CONTRACTED_HOURS = "contracted_hours"
    JOB_TITLE = "job_title"
    SCHEDULED_START = "scheduled_start"
    SCHEDULED_END = "scheduled_end"
    FIRST_IN = "first_in"
    FIRST_OUT = "first_out"
    SECOND_IN = "second_in"
    SECOND_OUT = "second_out"
    BREAK_MINUTES = "break_minutes"
    WORKED_HOURS = "worked_hours"
    EXPECTED_HOURS = "expected_hours"
    OVERTIME_HOURS = "overtime_hours"
    STATUS = "status"


class ViewPhase(str, Enum):
    IDLE = "idle"
    PROFILE_LOADING = "profile_loading"
    PROFILE_ERROR = "profile_error"
    PROFILE_READY = "profile_ready"
    FETCHING = "fetching"
    FETCH_ERROR = "fetch_error"
    FETCH_READY = "fetch_ready"


# ---------------------------------------------------------------------------
# Rows and profile
# ---------------------------------------------------------------------------


class PunchRow(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    employee_id: str | None = Field(default=None, alias="matricula")
    name: str | None = Field(default=None, alias="nome")
    base: str | None = Field(default=None, alias="colaborador_filial")
    contracted_hours: float | None = Field(default=None, alias="carga_horaria")
    job_title: str | None = Field(default=None, alias="funcao")
    scheduled_start: datetime | None = Field(default=None, alias="entrada_escala")
    scheduled_end: datetime | None = Field(default=None, alias="saida_escala")
    first_in: datetime | None = Field(default=None, alias="entrada1")
    first_out: datetime | None = Field(default=None, alias="saida1")
    second_in: datetime | None = Field(default=None, alias="entrada2")
    second_out: datetime | None = Field(default=None, alias="saida2")
    break_minutes: float | None = Field(default=None, alias="intervalo_min")
    worked_hours: float | None = Field(default=None, alias="horas_trabalhadas")
    expected_hours: float | None = None
    overtime_hours: float | None = Field(default=None, alias="hora_extra")
    status: str | None = None

    @field_validator("employee_id", mode="before")
    @classmethod
    def _employee_id_as_text(cls, v: object) -> object:
        if isinstance(v, int):
            return str(v)
        return v

    def has_any_punch(self) -> bool:
        return any((self.first_in, self.first_out, self.second_in, self.second_out))

    @property
    def normalized_base(self) -> str:
        return normalize_base(self.base)

    @property
    def status_label(self) -> str:
        return status_label(self.status)


class ClassifiedRow(PunchRow):
    function_group: FunctionGroup


class ViewerProfile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str | None = Field(default=None, alias="nome")
    base: str | None = Field(default=None, alias="filial")
    job_title: str | None = Field(default=None, alias="funcao")
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Scope(BaseModel):
    model_config = ConfigDict(frozen=True)

    can_view_all_bases: bool
    default_base: str = ""


# ---------------------------------------------------------------------------
# Filter and sort state
# ---------------------------------------------------------------------------


class FilterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    search: str = ""
    base: str = ""
    status: str = ALL
    contract: ContractFilter = ContractFilter.ALL
    groups: tuple[str, ...] = (ALL,)

    @field_validator("base")
    @classmethod
    def _normalize_base(cls, v: str) -> str:
        return normalize_base(v)

    @field_validator("status")
    @classmethod
    def _known_status(cls, v: str) -> str:
        if v != ALL:
            ShiftStatus(v)
        return v

    @field_validator("groups")
    @classmethod
    def _exclusive_all(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("groups must not be empty")
        for group in v:
            if group != ALL:
                FunctionGroup(group)
        if ALL in v and len(v) > 1:
            raise ValueError(f"'{ALL}' cannot be combined with concrete groups")
        return v

    @classmethod
    def initial(cls, scope: Scope) -> "FilterState":
        return cls(base="" if scope.can_view_all_bases else scope.default_base)

    def with_group_toggled(self, group: str) -> "FilterState":
        """Toggle one group; ``todas`` clears the selection back to all."""
        if group == ALL:
            return self.model_copy(update={"groups": (ALL,)})
        FunctionGroup(group)
        concrete = [g for g in self.groups if g != ALL]
        if group in concrete:
            concrete.remove(group)
        else:
            concrete.append(group)
        return self.model_copy(update={"groups": tuple(concrete) or (ALL,)})


class SortState(BaseModel):
    model_config = ConfigDict(frozen=True)

    column: SortColumn = SortColumn.NAME
    direction: SortDirection = SortDirection.ASC

    def select(self, column: SortColumn) -> "SortState":
        if column == self.column:
            flipped = SortDirection.DESC if self.direction == SortDirection.ASC else SortDirection.ASC
            return SortState(column=column, direction=flipped)
        return SortState(column=column, direction=SortDirection.ASC)


# ---------------------------------------------------------------------------
# Aggregates and snapshot
# ---------------------------------------------------------------------------


class DashboardCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int = 0
    overtime_total: float = 0.0
    per_status: dict[str, int] = Field(default_factory=dict)

    @computed_field
    @property
    def overtime_active(self) -> int:
        return self.per_status.get(ShiftStatus.OVERTIME_ACTIVE.value, 0)

    @computed_field
    @property
    def on_shift(self) -> int:
        return self.per_status.get(ShiftStatus.ON_SHIFT.value, 0)

    @computed_field
    @property
    def finished(self) -> int:
        return sum(n for status, n in self.per_status.items() if status.startswith("finalizado"))


class DashboardSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: ViewPhase = ViewPhase.IDLE
    loading: bool = False
    error: str | None = None
    last_refreshed: datetime | None = None
    profile: ViewerProfile | None = None
    scope: Scope | None = None
    filters: FilterState = Field(default_factory=FilterState)
    sort: SortState = Field(default_factory=SortState)
    rows: tuple[ClassifiedRow, ...] = ()
    counts: DashboardCounts = Field(default_factory=DashboardCounts)
    base_options: tuple[str, ...] = ()
