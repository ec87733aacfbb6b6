"""Signup DTOs: pure Pydantic."""
from __future__ import annotations
from pydantic import BaseModel, field_validator


class SignupRequest(BaseModel):
    employee_id: str
    email: str
    password: str
    captcha_token: str

    @field_validator("employee_id", "captcha_token")
    @classmethod
    def strip_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

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


class SignupResponse(BaseModel):
    message: str
    user_id: str | None = None
