"""Base-level visibility for a viewer."""

from __future__ import annotations

from collections.abc import Iterable

from shiftboard.dashboard.models import (
    DEFAULT_HEAD_OFFICE_BASES,
    Scope,
    ViewerProfile,
    normalize_base,
)


def resolve_scope(
    profile: ViewerProfile,
    *,
    head_office_bases: Iterable[str] = DEFAULT_HEAD_OFFICE_BASES,
) -> Scope:
    """Admins and head-office staff see every base; everyone else sees their own."""
    own_base = normalize_base(profile.base)
    can_view_all = profile.is_admin or own_base in frozenset(head_office_bases)
    return Scope(
        can_view_all_bases=can_view_all,
        default_base="" if can_view_all else own_base,
    )
