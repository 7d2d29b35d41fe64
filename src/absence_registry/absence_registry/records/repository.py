from __future__ import annotations

from typing import Protocol, Sequence

from .model import InsertOutcome, NewRecord, Record, UnitTotal


class RecordRepository(Protocol):
    def insert_all_if_absent(self, records: Sequence[NewRecord]) -> InsertOutcome:
        """Insert every row in one transaction unless a normalized identification is already stored."""

        raise NotImplementedError

    def list_for_user(self, usuario: str) -> Sequence[Record]:
        """Rows owned by ``usuario`` ordered by unit, newest first within a unit."""

        raise NotImplementedError

    def totals_by_unit(self) -> Sequence[UnitTotal]:
        raise NotImplementedError

    def delete_owned(self, *, record_id: int, usuario: str) -> bool:
        raise NotImplementedError
