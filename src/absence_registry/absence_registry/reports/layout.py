from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence

from ..common.datetime_utils import format_short_es
from ..records.model import Record

EMPTY_CELL = "—"


@dataclass(frozen=True)
class ColumnSpec:
    header: str
    ratio: float
    min_width: float
    accessor: Callable[[Record], str]


@dataclass(frozen=True)
class Column:
    spec: ColumnSpec
    width: float

    @property
    def header(self) -> str:
        return self.spec.header

    def cell(self, record: Record) -> str:
        return self.spec.accessor(record) or EMPTY_CELL


def _detalle(record: Record) -> str:
    detalle = (record.detalle or "").strip()
    return detalle or EMPTY_CELL


def _creado_en(record: Record) -> str:
    return format_short_es(record.creado_en) if record.creado_en else "Sin fecha"


RECORD_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("Dependencia", 0.18, 100, lambda r: r.dependencia),
    ColumnSpec("Identificación", 0.12, 85, lambda r: r.identificacion),
    ColumnSpec("Grado", 0.07, 55, lambda r: r.grado),
    ColumnSpec("Nombres completos", 0.19, 140, lambda r: r.nombres_completos),
    ColumnSpec("Motivo", 0.18, 130, lambda r: r.motivo),
    ColumnSpec("Detalle", 0.16, 120, _detalle),
    ColumnSpec("Creado en", 0.10, 95, _creado_en),
)


def allocate_columns(body_width: float, specs: Sequence[ColumnSpec] = RECORD_COLUMNS) -> list[Column]:
    """Split ``body_width`` between columns.

    Non-last columns take ``floor(body_width * ratio)`` raised to their
    minimum and capped at what is left; the last column takes the rest, so
    the widths always add up to ``body_width``.
    """
    remaining = body_width
    columns: list[Column] = []
    last = len(specs) - 1

    for index, spec in enumerate(specs):
        width = remaining if index == last else math.floor(body_width * spec.ratio)
        width = max(width, spec.min_width)
        width = min(width, remaining)
        columns.append(Column(spec=spec, width=width))
        remaining -= width

    return columns
