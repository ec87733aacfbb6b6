"""Signup use-case service: registry lookup, eligibility, account creation."""
from __future__ import annotations
import logging
from collections.abc import Iterable
from shiftboard.api.schemas.employees import EmployeeLookupRead
from shiftboard.api.schemas.signup import SignupRequest, SignupResponse
from shiftboard.domain.eligibility import evaluate_eligibility, mask_name
from shiftboard.domain.exceptions import (
    BackendError, ConflictError, ForbiddenError, InvalidRequestError, NotFoundError,
)
from shiftboard.infra.backend.client import BackendClient
from shiftboard.infra.backend.repositories.employee_repository import EmployeeRepository
from shiftboard.infra.backend.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)


class SignupService:
    def __init__(
        self,
        client: BackendClient,
        *,
        admin_ids: Iterable[str],
        allowed_terms: Iterable[str],
        site_url: str = "",
    ) -> None:
        self._client = client
        self._admin_ids = frozenset(admin_ids)
        self._allowed_terms = tuple(allowed_terms)
        self._site_url = site_url.rstrip("/")

    async def lookup(self, employee_id: str) -> EmployeeLookupRead:
        employee_id = employee_id.strip()
        if not employee_id:
            raise InvalidRequestError("Employee id is required.")
        employee = await EmployeeRepository(self._client).get_by_employee_id(employee_id)
        if employee is None:
            raise NotFoundError("Employee not found.")

        eligibility = evaluate_eligibility(employee, self._admin_ids, self._allowed_terms)
        return EmployeeLookupRead(
            name=mask_name(employee.name),
            base=employee.base or "",
            job_title=employee.job_title or "",
            allow_signup=eligibility.allowed,
            allow_reason=eligibility.reason,
        )

    async def sign_up(self, payload: SignupRequest) -> SignupResponse:
        employee = await EmployeeRepository(self._client).get_by_employee_id(payload.employee_id)
        if employee is None:
            raise InvalidRequestError("Employee id not found in the registry.")

        eligibility = evaluate_eligibility(employee, self._admin_ids, self._allowed_terms)
        if not eligibility.allowed:
            raise ForbiddenError(eligibility.reason or "Signup not allowed.")

        if await ProfileRepository(self._client).exists_for_employee(employee.employee_id):
            raise ConflictError("Employee id already registered.")

        try:
            body = await self._client.sign_up(
                payload.email,
                payload.password,
                data={
                    "matricula": employee.employee_id,
                    "nome": employee.name,
                    "filial": employee.base,
                    "funcao": employee.job_title,
                    "role": eligibility.role,
                },
                captcha_token=payload.captcha_token,
                redirect_to=f"{self._site_url}/auth/confirm" if self._site_url else None,
            )
        except BackendError as exc:
            if exc.status_code < 500:
                raise InvalidRequestError(exc.detail) from exc
            raise

        user = body.get("user") or body
        logger.info("Signup created for employee %s (role=%s)", employee.employee_id, eligibility.role)
        return SignupResponse(
            message="Signup created. Check your email to confirm.",
            user_id=user.get("id"),
        )
