"""Job-title → function-group classification.

An ordered cascade of substring rules; the first matching rule wins.  Order
matters because terms overlap ("LIDER DE RAMPA" also contains "RAMPA").
Head-office staff are never classified operationally.
"""

from __future__ import annotations

from collections.abc import Iterable

from shiftboard.dashboard.models import (
    DEFAULT_HEAD_OFFICE_BASES,
    ClassifiedRow,
    FunctionGroup,
    PunchRow,
    normalize_base,
)

CLASSIFICATION_RULES: tuple[tuple[FunctionGroup, tuple[str, ...]], ...] = (
    (FunctionGroup.PAX, ("PASSAG", "PAX", "BALANCEIRO", "AGENTE DE PESO", "ATEND")),
    (FunctionGroup.LIDER, ("LIDER DE OPERACOES", "LIDER DE RAMPA", "LOADMASTER")),
    (FunctionGroup.RAMPA, ("RAMPA", "LOGISTICA")),
    (FunctionGroup.LIMPEZA, ("LIMPEZA",)),
    (FunctionGroup.OPERADOR, ("OPERADOR",)),
    (FunctionGroup.SECURITY, ("SECURITY", "PROTECAO")),
    (
        FunctionGroup.GSE,
        (
            "MANUTENCAO",
            "MECANICO",
            "ELETRICISTA",
            "MONTADOR",
            "PINTOR",
            "SERRALHEIRO",
            "SOLDADOR",
            "TECNICO",
            "OFICINA",
        ),
    ),
    (FunctionGroup.SUPERVISOR, ("SUPERVISOR DE AEROPORTO", "SUPERVISOR")),
)


def classify(
    job_title: str | None,
    base: str | None,
    *,
    head_office_bases: Iterable[str] = DEFAULT_HEAD_OFFICE_BASES,
) -> FunctionGroup:
    """Return the function group for a (job title, base) pair. Never fails."""
    if normalize_base(base) in head_office_bases:
        return FunctionGroup.OUTROS

    title = (job_title or "").upper()
    for group, terms in CLASSIFICATION_RULES:
        if any(term in title for term in terms):
            return group
    return FunctionGroup.OUTROS


def classify_rows(
    rows: Iterable[PunchRow],
    *,
    head_office_bases: Iterable[str] = DEFAULT_HEAD_OFFICE_BASES,
) -> list[ClassifiedRow]:
    head_office = frozenset(head_office_bases)
    return [
        ClassifiedRow(
            **row.model_dump(),
            function_group=classify(row.job_title, row.base, head_office_bases=head_office),
        )
        for row in rows
    ]
