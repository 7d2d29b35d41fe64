from __future__ import annotations

from datetime import datetime

from src.absence_registry.absence_registry.core.enums import ConflictSource
from src.absence_registry.absence_registry.records.duplicates import (
    find_batch_conflict,
    normalize_identification,
    storage_conflict,
)
from src.absence_registry.absence_registry.records.model import NewRecord, StoredIdentification


def _rec(identificacion: str, dependencia: str) -> NewRecord:
    return NewRecord(
        dependencia=dependencia,
        identificacion=identificacion,
        grado="SGOS",
        nombres_completos="Nombre Apellido",
        motivo="Vacaciones",
        detalle="",
        usuario="x@y.com",
        creado_en=datetime(2026, 10, 18, 9, 0),
    )


def test_normalize_trims_and_uppercases():
    assert normalize_identification("  abc123 ") == "ABC123"


def test_case_insensitive_repeat_cites_first_unit():
    conflict = find_batch_conflict([_rec("abc123", "A"), _rec("ABC123", "B")])

    assert conflict is not None
    assert conflict.dependencia == "A"
    assert conflict.identificacion == "ABC123"
    assert conflict.source == ConflictSource.PAYLOAD


def test_whitespace_repeat_detected():
    conflict = find_batch_conflict([_rec("0102", "A"), _rec("9999", "B"), _rec(" 0102 ", "C")])

    assert conflict is not None
    assert conflict.dependencia == "A"


def test_accented_identification_is_a_different_key():
    assert normalize_identification("josé1") == "JOSÉ1"
    assert normalize_identification("JOSÉ1") != normalize_identification("JOSE1")
    assert find_batch_conflict([_rec("JOSÉ1", "A"), _rec("JOSE1", "B")]) is None


def test_first_occurrence_wins_whatever_the_order():
    rows = [_rec("Z1", "C"), _rec("x7", "B"), _rec("X7", "A"), _rec("z1", "D")]

    conflict = find_batch_conflict(rows)

    # x7/X7 repeats before z1 does
    assert conflict.dependencia == "B"
    assert conflict.identificacion == "X7"


def test_unique_batch_has_no_conflict():
    assert find_batch_conflict([_rec("1", "A"), _rec("2", "A"), _rec("3", "B")]) is None


def test_storage_conflict_reports_first_row():
    conflict = storage_conflict(
        [StoredIdentification("ABC", "Unidad 1"), StoredIdentification("DEF", "Unidad 2")]
    )

    assert conflict.dependencia == "Unidad 1"
    assert conflict.source == ConflictSource.DATABASE
    assert "ya está registrada" in conflict.message
    assert storage_conflict([]) is None
