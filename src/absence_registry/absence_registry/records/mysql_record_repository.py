from __future__ import annotations

import logging
from typing import Sequence

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import DUPLICATE_KEY_ERRNO, db_cursor, fetchall, in_placeholders
from .duplicates import normalized_keys
from .model import InsertOutcome, NewRecord, Record, StoredIdentification, UnitTotal
from .repository import RecordRepository

logger = logging.getLogger(__name__)

_RECORD_COLUMNS = """
    id, dependencia, identificacion, grado, nombres_completos, motivo, detalle, usuario, creado_en
"""


def _to_record(row: dict) -> Record:
    return Record(
        record_id=int(row["id"]),
        dependencia=row["dependencia"],
        identificacion=row["identificacion"],
        grado=row["grado"],
        nombres_completos=row["nombres_completos"],
        motivo=row["motivo"],
        detalle=row.get("detalle") or "",
        usuario=row["usuario"],
        creado_en=row.get("creado_en"),
    )


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_conflicts(self, cur, keys: Sequence[str], *, for_update: bool) -> list[StoredIdentification]:
        cur.execute(
            f"""
            SELECT identificacion, dependencia
            FROM registros
            WHERE identificacion_norm IN ({in_placeholders(keys)})
            ORDER BY id
            {"FOR UPDATE" if for_update else ""}
            """,
            tuple(keys),
        )
        return [
            StoredIdentification(identificacion=r["identificacion"], dependencia=r["dependencia"])
            for r in fetchall(cur)
        ]

    def insert_all_if_absent(self, records: Sequence[NewRecord]) -> InsertOutcome:
        if not records:
            return InsertOutcome()

        keys = normalized_keys(records)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # FOR UPDATE also gap-locks the unique index, so a concurrent
                # batch with the same identification waits for this one.
                conflicts = self._select_conflicts(cur, keys, for_update=True)
                if conflicts:
                    return InsertOutcome(conflicts=conflicts)

                cur.executemany(
                    """
                    INSERT INTO registros
                        (dependencia, identificacion, grado, nombres_completos, motivo, detalle, usuario, creado_en)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    [
                        (
                            r.dependencia,
                            r.identificacion,
                            r.grado,
                            r.nombres_completos,
                            r.motivo,
                            r.detalle,
                            r.usuario,
                            r.creado_en,
                        )
                        for r in records
                    ],
                )
                return InsertOutcome(inserted=len(records))
        except mysql.connector.IntegrityError as e:
            if e.errno != DUPLICATE_KEY_ERRNO:
                raise
            logger.warning("Unique index rejected batch from %s", records[0].usuario)
            with db_cursor(self._conn_factory) as (_, cur):
                conflicts = self._select_conflicts(cur, keys, for_update=False)
            if not conflicts:
                raise
            return InsertOutcome(conflicts=conflicts)

    def list_for_user(self, usuario: str) -> Sequence[Record]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM registros
                WHERE usuario=%s
                ORDER BY dependencia, creado_en DESC
                """,
                (usuario,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def totals_by_unit(self) -> Sequence[UnitTotal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT dependencia, COUNT(id) AS total
                FROM registros
                GROUP BY dependencia
                ORDER BY total DESC, dependencia
                """
            )
            return [UnitTotal(dependencia=r["dependencia"], total=int(r["total"])) for r in fetchall(cur)]

    def delete_owned(self, *, record_id: int, usuario: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM registros WHERE id=%s AND usuario=%s", (record_id, usuario))
            return cur.rowcount > 0
