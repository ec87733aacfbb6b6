"""Filtering and aggregation over classified rows.

Two stages.  The *scoped* set passes every dimension except status; status
counters are computed there so they describe the whole scoped population.
The *visible* set additionally passes the status filter; ``total`` and
``overtime_total`` are computed over it.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from shiftboard.dashboard.models import (
    ALL,
    DEFAULT_FULL_TIME_HOURS,
    DEFAULT_HEAD_OFFICE_BASES,
    ClassifiedRow,
    ContractFilter,
    DashboardCounts,
    FilterState,
    PunchRow,
    Scope,
    ViewerProfile,
    normalize_base,
)


@dataclass(frozen=True)
class FilterResult:
    visible: list[ClassifiedRow]
    counts: DashboardCounts


def is_full_time(
    contracted_hours: float | None,
    full_time_hours: Iterable[float] = DEFAULT_FULL_TIME_HOURS,
) -> bool:
    if contracted_hours is None:
        return False
    return contracted_hours in frozenset(full_time_hours)


def _base_ok(row: ClassifiedRow, scope: Scope, filters: FilterState, own_base: str) -> bool:
    row_base = row.normalized_base
    if scope.can_view_all_bases:
        return not filters.base or row_base == filters.base
    return bool(own_base) and row_base == own_base


def _contract_ok(row: ClassifiedRow, contract: ContractFilter, full_time: frozenset[float]) -> bool:
    if contract == ContractFilter.ALL:
        return True
    full = is_full_time(row.contracted_hours, full_time)
    return full if contract == ContractFilter.FULL else not full


def _search_ok(row: ClassifiedRow, needle: str) -> bool:
    if not needle:
        return True
    return needle in (row.name or "").lower() or needle in (row.employee_id or "").lower()


def scope_rows(
    rows: Iterable[ClassifiedRow],
    scope: Scope,
    filters: FilterState,
    profile: ViewerProfile,
    *,
    full_time_hours: Iterable[float] = DEFAULT_FULL_TIME_HOURS,
) -> list[ClassifiedRow]:
    """Rows passing every dimension except status."""
    own_base = normalize_base(profile.base)
    full_time = frozenset(full_time_hours)
    needle = filters.search.strip().lower()
    all_groups = ALL in filters.groups

    return [
        row
        for row in rows
        if row.has_any_punch()
        and _base_ok(row, scope, filters, own_base)
        and _contract_ok(row, filters.contract, full_time)
        and (all_groups or row.function_group.value in filters.groups)
        and _search_ok(row, needle)
    ]


def apply_filters(
    rows: Iterable[ClassifiedRow],
    scope: Scope,
    filters: FilterState,
    profile: ViewerProfile,
    *,
    full_time_hours: Iterable[float] = DEFAULT_FULL_TIME_HOURS,
) -> FilterResult:
    scoped = scope_rows(rows, scope, filters, profile, full_time_hours=full_time_hours)

    if filters.status == ALL:
        visible = scoped
    else:
        visible = [row for row in scoped if row.status == filters.status]

    per_status = Counter(row.status for row in scoped if row.status)
    counts = DashboardCounts(
        total=len(visible),
        overtime_total=sum(row.overtime_hours or 0.0 for row in visible),
        per_status=dict(per_status),
    )
    return FilterResult(visible=visible, counts=counts)


def base_options(
    rows: Sequence[PunchRow],
    *,
    head_office_bases: Iterable[str] = DEFAULT_HEAD_OFFICE_BASES,
) -> list[str]:
    """Distinct operational bases present in the feed, sorted."""
    blocked = frozenset(head_office_bases)
    bases = {row.normalized_base for row in rows}
    return sorted(b for b in bases if b and b not in blocked)
