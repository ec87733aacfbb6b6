"""Column sort for the dashboard table."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from shiftboard.dashboard.models import PunchRow, SortColumn, SortDirection

RowT = TypeVar("RowT", bound=PunchRow)


def sort_key(row: PunchRow, column: SortColumn) -> str:
    """Lower-cased text of the cell; empty, ``None`` and zero all sort as ``""``."""
    value = getattr(row, column.value)
    if not value:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).lower()


def sort_rows(
    rows: Iterable[RowT],
    column: SortColumn = SortColumn.NAME,
    direction: SortDirection = SortDirection.ASC,
) -> list[RowT]:
    """Stable lexicographic sort on the stringified column value.

    Descending order inverts the key comparison only; rows with equal keys
    keep their input order in both directions.
    """
    return sorted(
        rows,
        key=lambda row: sort_key(row, column),
        reverse=direction == SortDirection.DESC,
    )
