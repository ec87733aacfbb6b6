from __future__ import annotations

from shiftboard.dashboard.models import ViewerProfile
from shiftboard.infra.backend.client import BackendClient

PROFILE_COLUMNS = "id,nome,filial,funcao,role"


class ProfileRepository:
    def __init__(self, client: BackendClient, access_token: str | None = None) -> None:
        self._client = client
        self._access_token = access_token

    async def get_by_id(self, user_id: str) -> ViewerProfile | None:
        rows = await self._client.select(
            "profiles",
            columns=PROFILE_COLUMNS,
            eq={"id": user_id},
            access_token=self._access_token,
            limit=1,
        )
        return ViewerProfile.model_validate(rows[0]) if rows else None

    async def exists_for_employee(self, employee_id: str) -> bool:
        """Service-role lookup: is this employee id already registered?"""
        rows = await self._client.select(
            "profiles",
            columns="id",
            eq={"matricula": employee_id},
            service=True,
            limit=1,
        )
        return bool(rows)
