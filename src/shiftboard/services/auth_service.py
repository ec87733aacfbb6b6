"""Auth use-case service: sign-in/out and token → identity."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from shiftboard.api.schemas.auth import LoginRequest, ProfileRead, SessionRead
from shiftboard.domain.exceptions import AuthenticationError, BackendError, NotFoundError
from shiftboard.infra.backend.client import BackendClient
from shiftboard.infra.backend.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    access_token: str
    user_id: str


class AuthService:
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def sign_in(self, payload: LoginRequest) -> SessionRead:
        try:
            body = await self._client.sign_in_with_password(payload.email, payload.password)
        except BackendError as exc:
            if exc.status_code in (400, 401):
                raise AuthenticationError("Invalid email or password.") from exc
            raise
        return SessionRead(
            access_token=body["access_token"],
            user_id=body["user"]["id"],
            expires_in=body.get("expires_in"),
        )

    async def identify(self, access_token: str) -> Identity:
        try:
            user = await self._client.get_user(access_token)
        except BackendError as exc:
            if exc.status_code in (401, 403):
                raise AuthenticationError("Session expired or invalid.") from exc
            raise
        return Identity(access_token=access_token, user_id=user["id"])

    async def sign_out(self, access_token: str) -> None:
        try:
            await self._client.sign_out(access_token)
        except BackendError as exc:
            if exc.status_code in (401, 403):
                raise AuthenticationError("Session expired or invalid.") from exc
            raise

    async def get_profile(self, identity: Identity) -> ProfileRead:
        profile = await ProfileRepository(self._client, identity.access_token).get_by_id(identity.user_id)
        if profile is None:
            raise NotFoundError(f"Profile {identity.user_id} not found")
        return ProfileRead.model_validate(profile)
