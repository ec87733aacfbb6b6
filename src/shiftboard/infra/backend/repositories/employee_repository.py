from __future__ import annotations

from shiftboard.domain.eligibility import EmployeeRecord
from shiftboard.infra.backend.client import BackendClient


class EmployeeRepository:
    """Read-only access to the employee registry (``colaboradores``).

    Signup happens before the caller has a session, so lookups use the
    service-role key.
    """

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def get_by_employee_id(self, employee_id: str) -> EmployeeRecord | None:
        rows = await self._client.select(
            "colaboradores",
            columns="matricula,nome,filial,funcao",
            eq={"matricula": employee_id},
            service=True,
            limit=1,
        )
        return EmployeeRecord.model_validate(rows[0]) if rows else None
