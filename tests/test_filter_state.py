"""Tests for filter state validation and group toggling."""
import pytest
from pydantic import ValidationError

from shiftboard.dashboard.models import (
    ALL,
    ContractFilter,
    DashboardCounts,
    FilterState,
    PunchRow,
    status_label,
)


def test_defaults():
    state = FilterState()
    assert state.search == ""
    assert state.base == ""
    assert state.status == ALL
    assert state.contract == ContractFilter.ALL
    assert state.groups == (ALL,)


def test_base_is_normalized():
    assert FilterState(base="  gru ").base == "GRU"


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        FilterState(status="de folga")


def test_empty_groups_are_rejected():
    with pytest.raises(ValidationError):
        FilterState(groups=())


def test_all_cannot_be_combined_with_groups():
    with pytest.raises(ValidationError):
        FilterState(groups=(ALL, "PAX"))


def test_toggle_group_adds_and_removes():
    state = FilterState().with_group_toggled("PAX")
    assert state.groups == ("PAX",)
    state = state.with_group_toggled("RAMPA")
    assert state.groups == ("PAX", "RAMPA")
    state = state.with_group_toggled("PAX")
    assert state.groups == ("RAMPA",)


def test_removing_last_group_falls_back_to_all():
    state = FilterState(groups=("GSE",)).with_group_toggled("GSE")
    assert state.groups == (ALL,)


def test_selecting_all_clears_groups():
    state = FilterState(groups=("GSE", "PAX")).with_group_toggled(ALL)
    assert state.groups == (ALL,)


def test_toggle_unknown_group_fails():
    with pytest.raises(ValueError):
        FilterState().with_group_toggled("PILOTO")


def test_status_labels():
    assert status_label("trabalhando em hora extra") == "Em hora extra"
    assert status_label("aguardando") == "Sem batida"
    assert status_label("em treinamento") == "em treinamento"
    assert status_label(None) == "-"


def test_counts_derive_status_buckets():
    counts = DashboardCounts(total=4, per_status={
        "trabalhando ok": 2,
        "finalizado ok": 1,
        "finalizado com hora extra": 3,
    })
    assert counts.on_shift == 2
    assert counts.overtime_active == 0
    assert counts.finished == 4


def test_punch_row_accepts_numeric_employee_id_and_detects_punches():
    row = PunchRow.model_validate({"matricula": 123, "nome": "X", "saida2": "2026-10-19T18:00:00Z"})
    assert row.employee_id == "123"
    assert row.has_any_punch()
    assert not PunchRow(matricula="1").has_any_punch()
