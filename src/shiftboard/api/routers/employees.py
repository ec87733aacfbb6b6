"""Employee registry lookup (used by the signup form before an account exists)."""
from fastapi import APIRouter, Depends
from shiftboard.api.deps import get_signup_service
from shiftboard.api.schemas.employees import EmployeeLookupRead
from shiftboard.services.signup_service import SignupService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("/{employee_id}", response_model=EmployeeLookupRead)
async def lookup_employee(
    employee_id: str, service: SignupService = Depends(get_signup_service),
) -> EmployeeLookupRead:
    return await service.lookup(employee_id)
