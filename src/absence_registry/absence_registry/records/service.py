from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import Violations
from ..core.constants import find_motivo_option
from ..core.exceptions import DuplicateIdentificationError, NotFoundError, ValidationError
from .duplicates import find_batch_conflict, storage_conflict
from .model import NewRecord, Record, UnitTotal
from .repository import RecordRepository

logger = logging.getLogger(__name__)


def require_usuario(raw: Optional[str], message: str = "Debe especificar el usuario a consultar.") -> str:
    usuario = (raw or "").strip() if isinstance(raw, str) else ""
    if not usuario:
        raise ValidationError(message)
    return usuario


class RecordService:
    """Use cases around absence records: submit, list, aggregate, delete."""

    def __init__(self, records: RecordRepository, *, clock: Callable[[], datetime] = now_local):
        self._records = records
        self._clock = clock

    def parse_submission(self, payload: dict) -> list[NewRecord]:
        """Validate a ``{usuario, registros}`` body into trimmed rows.

        Every violation is collected before raising, with paths such as
        ``registros[1].grado``.
        """
        if not isinstance(payload, dict):
            raise ValidationError("Datos de entrada inválidos")

        v = Violations()
        usuario = v.string(payload, "usuario")
        items = v.non_empty_list(payload, "registros")

        created_at = self._clock()
        out: list[NewRecord] = []
        for index, item in enumerate(items):
            prefix = f"registros[{index}]"
            if not isinstance(item, dict):
                v.add(prefix, "Debe ser un objeto")
                continue
            dependencia = v.string(item, "dependencia", path=f"{prefix}.dependencia")
            identificacion = v.string(item, "identificacion", path=f"{prefix}.identificacion")
            grado = v.string(item, "grado", path=f"{prefix}.grado")
            nombres = v.string(item, "nombresCompletos", path=f"{prefix}.nombresCompletos")
            motivo = v.string(item, "motivo", path=f"{prefix}.motivo")
            detalle = v.string(item, "detalle", path=f"{prefix}.detalle", required=False)
            if v:
                continue
            out.append(
                NewRecord(
                    dependencia=dependencia,
                    identificacion=identificacion,
                    grado=grado,
                    nombres_completos=nombres,
                    motivo=find_motivo_option(motivo) or motivo,
                    detalle=detalle or "",
                    usuario=usuario or "",
                    creado_en=created_at,
                )
            )

        v.raise_if_any()
        return out

    def submit(self, payload: dict) -> int:
        records = self.parse_submission(payload)

        conflict = find_batch_conflict(records)
        if conflict:
            logger.info("Batch rejected, repeated identification %s", conflict.identificacion)
            raise DuplicateIdentificationError(conflict)

        outcome = self._records.insert_all_if_absent(records)
        conflict = storage_conflict(outcome.conflicts)
        if conflict:
            logger.info("Batch rejected, identification %s already stored", conflict.identificacion)
            raise DuplicateIdentificationError(conflict)

        logger.info("%d records stored for %s", outcome.inserted, records[0].usuario)
        return outcome.inserted

    def list_for_user(self, usuario: str) -> Sequence[Record]:
        return self._records.list_for_user(require_usuario(usuario))

    def totals_by_unit(self) -> Sequence[UnitTotal]:
        return self._records.totals_by_unit()

    def delete(self, *, record_id: int, usuario: str) -> None:
        usuario = require_usuario(usuario, "Debe especificar el usuario para eliminar.")
        if not self._records.delete_owned(record_id=int(record_id), usuario=usuario):
            raise NotFoundError("Registro no encontrado.")
        logger.info("Record %s deleted by %s", record_id, usuario)
