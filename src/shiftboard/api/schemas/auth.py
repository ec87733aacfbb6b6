"""Auth DTOs: pure Pydantic."""
from __future__ import annotations
from pydantic import BaseModel, field_validator


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("email must not be empty")
        return v

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("password must not be empty")
        return v


class SessionRead(BaseModel):
    access_token: str
    user_id: str
    expires_in: int | None = None


class ProfileRead(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str | None = None
    base: str | None = None
    job_title: str | None = None
    role: str | None = None
    is_admin: bool = False
