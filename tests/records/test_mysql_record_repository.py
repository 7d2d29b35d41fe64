from __future__ import annotations

from datetime import datetime
from pathlib import Path

import mysql.connector
import pytest

from src.absence_registry.absence_registry.records.model import NewRecord, StoredIdentification
from src.absence_registry.absence_registry.records.mysql_record_repository import MySQLRecordRepository

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


class StubCursor:
    def __init__(self, factory: "StubConnectionFactory"):
        self._factory = factory
        self._rows: list[dict] = []

    def execute(self, sql, params=()):
        self._factory.statements.append((" ".join(sql.split()), tuple(params)))
        self._rows = self._factory.select_results.pop(0) if self._factory.select_results else []

    def executemany(self, sql, rows):
        self._factory.inserted.append(list(rows))
        if self._factory.insert_error is not None:
            raise self._factory.insert_error

    def fetchall(self):
        return self._rows

    def close(self):
        pass


class StubConnection:
    def __init__(self, factory: "StubConnectionFactory"):
        self._factory = factory
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return StubCursor(self._factory)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class StubConnectionFactory:
    """Plays back SELECT results in order; optionally fails the INSERT."""

    def __init__(self, *, select_results=(), insert_error=None):
        self.select_results = [list(rows) for rows in select_results]
        self.insert_error = insert_error
        self.statements: list[tuple[str, tuple]] = []
        self.inserted: list[list[tuple]] = []
        self.connections: list[StubConnection] = []

    def connect(self):
        conn = StubConnection(self)
        self.connections.append(conn)
        return conn


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


def test_stored_identification_blocks_batch_without_insert():
    factory = StubConnectionFactory(select_results=[[{"identificacion": "abc123", "dependencia": "Unidad Z"}]])
    repo = MySQLRecordRepository(factory)

    outcome = repo.insert_all_if_absent([_rec(" abc123", "A"), _rec("9", "B")])

    assert outcome.inserted == 0
    assert outcome.conflicts == [StoredIdentification(identificacion="abc123", dependencia="Unidad Z")]
    assert factory.inserted == []
    sql, params = factory.statements[0]
    assert "FOR UPDATE" in sql
    assert "ORDER BY id" in sql
    assert params == ("9", "ABC123")


def test_clean_batch_is_inserted_and_committed_in_one_transaction():
    factory = StubConnectionFactory(select_results=[[]])
    repo = MySQLRecordRepository(factory)

    outcome = repo.insert_all_if_absent([_rec("1", "A"), _rec("2", "B")])

    assert outcome.inserted == 2
    assert outcome.conflicts == []
    assert len(factory.connections) == 1
    conn = factory.connections[0]
    assert conn.committed and not conn.rolled_back and conn.closed
    assert [row[1] for row in factory.inserted[0]] == ["1", "2"]


def test_duplicate_key_rolls_back_and_reports_stored_row():
    factory = StubConnectionFactory(
        select_results=[[], [{"identificacion": "ABC123", "dependencia": "Unidad Z"}]],
        insert_error=mysql.connector.IntegrityError(msg="Duplicate entry", errno=1062),
    )
    repo = MySQLRecordRepository(factory)

    outcome = repo.insert_all_if_absent([_rec("abc123", "A")])

    assert outcome.inserted == 0
    assert outcome.conflicts == [StoredIdentification(identificacion="ABC123", dependencia="Unidad Z")]
    first, second = factory.connections
    assert first.rolled_back and not first.committed
    assert "FOR UPDATE" not in factory.statements[-1][0]


def test_other_integrity_errors_propagate_after_rollback():
    factory = StubConnectionFactory(
        select_results=[[]],
        insert_error=mysql.connector.IntegrityError(msg="Column cannot be null", errno=1048),
    )
    repo = MySQLRecordRepository(factory)

    with pytest.raises(mysql.connector.IntegrityError):
        repo.insert_all_if_absent([_rec("1", "A")])

    assert len(factory.connections) == 1
    assert factory.connections[0].rolled_back
    assert not factory.connections[0].committed


def test_normalized_identification_column_compares_exact_bytes():
    column = next(
        line for line in SCHEMA_PATH.read_text(encoding="utf-8").splitlines()
        if line.strip().startswith("identificacion_norm ")
    )

    assert "COLLATE utf8mb4_bin" in column
    assert "UPPER(TRIM(identificacion))" in column
