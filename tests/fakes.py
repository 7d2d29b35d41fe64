from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from src.absence_registry.absence_registry.records.duplicates import normalize_identification
from src.absence_registry.absence_registry.records.model import (
    InsertOutcome,
    NewRecord,
    Record,
    StoredIdentification,
    UnitTotal,
)
from src.absence_registry.absence_registry.users.model import NewUser, User


class InMemoryRecords:
    def __init__(self, rows: Sequence[Record] = ()):
        self.rows: list[Record] = list(rows)
        self._id = max((r.record_id for r in self.rows), default=0)

    def insert_all_if_absent(self, records: Sequence[NewRecord]) -> InsertOutcome:
        keys = {normalize_identification(r.identificacion) for r in records}
        conflicts = [
            StoredIdentification(identificacion=r.identificacion, dependencia=r.dependencia)
            for r in self.rows
            if normalize_identification(r.identificacion) in keys
        ]
        if conflicts:
            return InsertOutcome(conflicts=conflicts)

        for r in records:
            self._id += 1
            self.rows.append(
                Record(
                    record_id=self._id,
                    dependencia=r.dependencia,
                    identificacion=r.identificacion,
                    grado=r.grado,
                    nombres_completos=r.nombres_completos,
                    motivo=r.motivo,
                    detalle=r.detalle,
                    usuario=r.usuario,
                    creado_en=r.creado_en,
                )
            )
        return InsertOutcome(inserted=len(records))

    def list_for_user(self, usuario: str) -> Sequence[Record]:
        mine = [r for r in self.rows if r.usuario == usuario]
        mine.sort(key=lambda r: r.creado_en, reverse=True)
        mine.sort(key=lambda r: r.dependencia)
        return mine

    def totals_by_unit(self) -> Sequence[UnitTotal]:
        counts = Counter(r.dependencia for r in self.rows)
        return [
            UnitTotal(dependencia=dep, total=total)
            for dep, total in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        ]

    def delete_owned(self, *, record_id: int, usuario: str) -> bool:
        for r in self.rows:
            if r.record_id == record_id and r.usuario == usuario:
                self.rows.remove(r)
                return True
        return False


class InMemoryUsers:
    def __init__(self, users: Sequence[User] = (), *, failing_batches: Sequence[int] = ()):
        self.users: dict[str, User] = {u.email: u for u in users}
        self.failing_batches = set(failing_batches)
        self.batch_calls = 0

    def get_by_email(self, email: str) -> Optional[User]:
        return self.users.get(email)

    def list_existing_emails(self, emails: Sequence[str]) -> set[str]:
        return {e for e in emails if e in self.users}

    def create_many(self, users: Sequence[NewUser]) -> int:
        self.batch_calls += 1
        if self.batch_calls in self.failing_batches:
            raise RuntimeError("insert failed")
        for u in users:
            self.users[u.email] = User(
                user_id=len(self.users) + 1,
                email=u.email,
                password_hash=u.password_hash,
                name=u.name,
                unidad=u.unidad,
            )
        return len(users)
