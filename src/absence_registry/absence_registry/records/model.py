from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import ConflictSource


@dataclass(frozen=True)
class NewRecord:
    """A validated, trimmed row waiting to be inserted."""

    dependencia: str
    identificacion: str
    grado: str
    nombres_completos: str
    motivo: str
    detalle: str
    usuario: str
    creado_en: datetime


@dataclass(frozen=True)
class Record:
    record_id: int
    dependencia: str
    identificacion: str
    grado: str
    nombres_completos: str
    motivo: str
    detalle: str
    usuario: str
    creado_en: Optional[datetime]

    def to_api(self) -> dict:
        return {
            "id": self.record_id,
            "dependencia": self.dependencia,
            "identificacion": self.identificacion,
            "grado": self.grado,
            "nombresCompletos": self.nombres_completos,
            "motivo": self.motivo,
            "detalle": self.detalle,
            "usuario": self.usuario,
            "creadoEn": self.creado_en.isoformat() if self.creado_en else None,
        }


@dataclass(frozen=True)
class UnitTotal:
    dependencia: str
    total: int

    def to_api(self) -> dict:
        return {"dependencia": self.dependencia, "total": self.total}


@dataclass(frozen=True)
class StoredIdentification:
    identificacion: str
    dependencia: str


@dataclass(frozen=True)
class Conflict:
    identificacion: str
    dependencia: str
    source: ConflictSource

    @property
    def message(self) -> str:
        if self.source == ConflictSource.PAYLOAD:
            return f"La identificación {self.identificacion} ya fue ingresada en la dependencia {self.dependencia}."
        return f"La identificación {self.identificacion} ya está registrada en la dependencia {self.dependencia}."

    def to_api(self) -> dict:
        return {
            "identificacion": self.identificacion,
            "dependencia": self.dependencia,
            "source": self.source.value,
        }


@dataclass(frozen=True)
class InsertOutcome:
    """Result of the check-and-insert transaction.

    Either ``inserted`` rows were committed, or nothing was and ``conflicts``
    lists the stored rows that collided.
    """

    inserted: int = 0
    conflicts: list[StoredIdentification] = field(default_factory=list)
