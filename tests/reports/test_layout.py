from __future__ import annotations

import pytest

from src.absence_registry.absence_registry.reports.layout import (
    RECORD_COLUMNS,
    ColumnSpec,
    allocate_columns,
)
from src.absence_registry.absence_registry.reports.pdf import MARGIN, PAGE_SIZE


def _specs(*pairs):
    return [ColumnSpec(f"c{i}", ratio, minimum, lambda r: "") for i, (ratio, minimum) in enumerate(pairs)]


def test_a4_landscape_widths():
    body = PAGE_SIZE[0] - 2 * MARGIN

    widths = [c.width for c in allocate_columns(body)]

    assert widths[:6] == [137, 91, 55, 144, 137, 121]
    assert sum(widths) == pytest.approx(body, abs=1e-9)


@pytest.mark.parametrize("body,pairs", [
    (761.89, [(0.18, 100), (0.12, 85), (0.07, 55), (0.19, 140), (0.18, 130), (0.16, 120), (0.10, 95)]),
    (500.0, [(0.5, 10), (0.5, 10)]),
    (300.5, [(0.1, 200), (0.1, 200), (0.1, 200)]),
    (1000.0, [(0.05, 0), (0.05, 0), (0.05, 0)]),
    (123.456, [(1.0, 0)]),
    (80.0, [(0.9, 0), (0.9, 0), (0.2, 50)]),
])
def test_widths_always_fill_body(body, pairs):
    columns = allocate_columns(body, _specs(*pairs))

    assert len(columns) == len(pairs)
    assert sum(c.width for c in columns) == pytest.approx(body, abs=1e-9)
    assert all(c.width >= 0 for c in columns)


def test_minimum_width_raises_small_ratio():
    columns = allocate_columns(1000.0, _specs((0.01, 60), (0.5, 0), (0.1, 0)))

    assert columns[0].width == 60
    assert columns[1].width == 500
    assert columns[2].width == pytest.approx(440)


def test_minimums_never_overflow_body():
    columns = allocate_columns(300.5, _specs((0.1, 200), (0.1, 200), (0.1, 200)))

    assert [c.width for c in columns] == [200, pytest.approx(100.5), 0]


def test_record_columns_headers():
    assert [c.header for c in RECORD_COLUMNS] == [
        "Dependencia", "Identificación", "Grado", "Nombres completos", "Motivo", "Detalle", "Creado en",
    ]
