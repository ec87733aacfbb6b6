"""Employee registry DTOs: pure Pydantic."""
from __future__ import annotations
from pydantic import BaseModel


class EmployeeLookupRead(BaseModel):
    name: str
    base: str
    job_title: str
    allow_signup: bool
    allow_reason: str | None = None
