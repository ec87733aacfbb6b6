"""Tests for viewer scope resolution."""
from shiftboard.dashboard.models import FilterState, ViewerProfile
from shiftboard.dashboard.scope import resolve_scope


def _profile(**kw) -> ViewerProfile:
    return ViewerProfile(id="u1", **kw)


def test_admin_sees_all_bases():
    scope = resolve_scope(_profile(role="admin", filial="GRU"))
    assert scope.can_view_all_bases is True
    assert scope.default_base == ""


def test_head_office_viewer_sees_all_bases():
    scope = resolve_scope(_profile(role="user", filial="sede"))
    assert scope.can_view_all_bases is True


def test_operational_viewer_is_pinned_to_own_base():
    scope = resolve_scope(_profile(role="user", filial=" gru "))
    assert scope.can_view_all_bases is False
    assert scope.default_base == "GRU"


def test_viewer_without_base():
    scope = resolve_scope(_profile(role="user"))
    assert scope.can_view_all_bases is False
    assert scope.default_base == ""


def test_initial_filters_follow_scope():
    pinned = resolve_scope(_profile(role="user", filial="BSB"))
    assert FilterState.initial(pinned).base == "BSB"
    wide = resolve_scope(_profile(role="admin", filial="BSB"))
    assert FilterState.initial(wide).base == ""
