"""Tests for signup eligibility rules."""
import pytest

from shiftboard.domain.eligibility import (
    REFUSAL_REASON,
    EmployeeRecord,
    evaluate_eligibility,
    mask_name,
)

TERMS = ("GERENTE", "COORDENADOR", "SUPERVISOR")


def _employee(title, matricula="100"):
    return EmployeeRecord(matricula=matricula, nome="Maria Silva", filial="GRU", funcao=title)


@pytest.mark.parametrize("title", ["GERENTE DE BASE", "coordenador de rampa", "SUPERVISOR DE AEROPORTO"])
def test_management_titles_are_allowed(title):
    result = evaluate_eligibility(_employee(title), admin_ids=[], allowed_terms=TERMS)
    assert result.allowed
    assert not result.is_admin
    assert result.role == "user"
    assert result.reason is None


def test_other_titles_are_refused():
    result = evaluate_eligibility(_employee("AUXILIAR DE RAMPA"), admin_ids=[], allowed_terms=TERMS)
    assert not result.allowed
    assert result.reason == REFUSAL_REASON


def test_missing_title_is_refused():
    result = evaluate_eligibility(_employee(None), admin_ids=[], allowed_terms=TERMS)
    assert not result.allowed


def test_admin_allowlist_overrides_title():
    result = evaluate_eligibility(_employee("ANALISTA", matricula="521"), admin_ids=["521"], allowed_terms=TERMS)
    assert result.allowed
    assert result.is_admin
    assert result.role == "admin"


def test_numeric_employee_id_is_text():
    assert EmployeeRecord.model_validate({"matricula": 521}).employee_id == "521"


@pytest.mark.parametrize(
    "name, expected",
    [("Maria Silva", "Maria ****"), ("  Joao  ", "Joao ****"), ("", "****"), (None, "****")],
)
def test_mask_name(name, expected):
    assert mask_name(name) == expected
