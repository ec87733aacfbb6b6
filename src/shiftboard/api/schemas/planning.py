"""Planning DTOs: pure Pydantic."""
from __future__ import annotations
from datetime import date
from pydantic import BaseModel


class PlanningBases(BaseModel):
    bases: list[str]
    selected_base: str
    planning_date: date
    can_view_all_bases: bool
