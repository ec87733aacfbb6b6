"""Signup endpoint."""
from fastapi import APIRouter, Depends
from shiftboard.api.deps import get_signup_service
from shiftboard.api.schemas.signup import SignupRequest, SignupResponse
from shiftboard.services.signup_service import SignupService

router = APIRouter(prefix="/signup", tags=["signup"])


@router.post("", response_model=SignupResponse, status_code=201)
async def signup(
    payload: SignupRequest, service: SignupService = Depends(get_signup_service),
) -> SignupResponse:
    return await service.sign_up(payload)
