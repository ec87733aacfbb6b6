"""Tests for job-title classification."""
import pytest

from shiftboard.dashboard.classifier import classify, classify_rows
from shiftboard.dashboard.models import FunctionGroup, PunchRow


@pytest.mark.parametrize(
    "title, expected",
    [
        ("AGENTE DE PASSAGEIROS", FunctionGroup.PAX),
        ("BALANCEIRO", FunctionGroup.PAX),
        ("ATENDENTE DE CHECK-IN", FunctionGroup.PAX),
        ("LIDER DE RAMPA", FunctionGroup.LIDER),
        ("LOADMASTER", FunctionGroup.LIDER),
        ("AUXILIAR DE RAMPA", FunctionGroup.RAMPA),
        ("ASSISTENTE DE LOGISTICA", FunctionGroup.RAMPA),
        ("AUXILIAR DE LIMPEZA", FunctionGroup.LIMPEZA),
        ("OPERADOR DE EQUIPAMENTOS", FunctionGroup.OPERADOR),
        ("AGENTE DE PROTECAO", FunctionGroup.SECURITY),
        ("MECANICO DIESEL", FunctionGroup.GSE),
        ("TECNICO DE MANUTENCAO", FunctionGroup.GSE),
        ("SUPERVISOR DE AEROPORTO", FunctionGroup.SUPERVISOR),
        ("ANALISTA FINANCEIRO", FunctionGroup.OUTROS),
    ],
)
def test_classify_by_title(title, expected):
    assert classify(title, "GRU") == expected


def test_first_matching_rule_wins():
    # contains both a LIDER term and the RAMPA term
    assert classify("LIDER DE RAMPA", "GRU") == FunctionGroup.LIDER
    # PAX is checked before SUPERVISOR
    assert classify("SUPERVISOR DE ATENDIMENTO", "GRU") == FunctionGroup.PAX


def test_title_match_is_case_insensitive():
    assert classify("auxiliar de rampa", "gru") == FunctionGroup.RAMPA


def test_head_office_base_is_always_outros():
    assert classify("AUXILIAR DE RAMPA", "SEDE") == FunctionGroup.OUTROS
    assert classify("AUXILIAR DE RAMPA", " sede ") == FunctionGroup.OUTROS


def test_custom_head_office_bases():
    assert classify("AUXILIAR DE RAMPA", "SEDE", head_office_bases={"CWB"}) == FunctionGroup.RAMPA
    assert classify("AUXILIAR DE RAMPA", "CWB", head_office_bases={"CWB"}) == FunctionGroup.OUTROS


def test_missing_title_is_outros():
    assert classify(None, "GRU") == FunctionGroup.OUTROS
    assert classify("", None) == FunctionGroup.OUTROS


def test_classify_rows_keeps_fields():
    row = PunchRow(matricula="7", nome="Ana", colaborador_filial="GRU", funcao="AUXILIAR DE RAMPA")
    [classified] = classify_rows([row])
    assert classified.function_group == FunctionGroup.RAMPA
    assert classified.employee_id == "7"
    assert classified.name == "Ana"
