"""Who may create a portal account.

Only managers, coordinators and supervisors (by job title), plus an explicit
allowlist of employee ids that sign up as admins.  Both tables come from
configuration.
"""
from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

REFUSAL_REASON = "Cadastro permitido apenas para gerente, coordenador ou supervisor."


class EmployeeRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    employee_id: str = Field(alias="matricula")
    name: str | None = Field(default=None, alias="nome")
    base: str | None = Field(default=None, alias="filial")
    job_title: str | None = Field(default=None, alias="funcao")

    @field_validator("employee_id", mode="before")
    @classmethod
    def _as_text(cls, v: object) -> object:
        if isinstance(v, int):
            return str(v)
        return v


class Eligibility(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    is_admin: bool
    reason: str | None = None

    @property
    def role(self) -> str:
        return "admin" if self.is_admin else "user"


def evaluate_eligibility(
    employee: EmployeeRecord,
    admin_ids: Iterable[str],
    allowed_terms: Iterable[str],
) -> Eligibility:
    is_admin = employee.employee_id in set(admin_ids)
    title = (employee.job_title or "").upper()
    by_title = any(term.upper() in title for term in allowed_terms)
    allowed = is_admin or by_title
    return Eligibility(
        allowed=allowed,
        is_admin=is_admin,
        reason=None if allowed else REFUSAL_REASON,
    )


def mask_name(name: str | None) -> str:
    """Show only the first name: ``"Maria Silva"`` → ``"Maria ****"``."""
    parts = (name or "").split()
    if not parts:
        return "****"
    return f"{parts[0]} ****"
