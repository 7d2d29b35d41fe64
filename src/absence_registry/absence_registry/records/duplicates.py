"""Duplicate-identification checks applied to a submitted batch."""
from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ConflictSource
from .model import Conflict, NewRecord, StoredIdentification


def normalize_identification(value: str) -> str:
    return (value or "").strip().upper()


def find_batch_conflict(records: Sequence[NewRecord]) -> Optional[Conflict]:
    """First repeated identification within the batch.

    The reported unit is the one of the first occurrence; the reported
    identification is spelled as in the repeating row.
    """
    seen: dict[str, NewRecord] = {}
    for record in records:
        key = normalize_identification(record.identificacion)
        first = seen.get(key)
        if first is not None:
            return Conflict(
                identificacion=record.identificacion,
                dependencia=first.dependencia,
                source=ConflictSource.PAYLOAD,
            )
        seen[key] = record
    return None


def storage_conflict(rows: Sequence[StoredIdentification]) -> Optional[Conflict]:
    if not rows:
        return None
    row = rows[0]
    return Conflict(identificacion=row.identificacion, dependencia=row.dependencia, source=ConflictSource.DATABASE)


def normalized_keys(records: Sequence[NewRecord]) -> list[str]:
    return sorted({normalize_identification(r.identificacion) for r in records})
