"""Landscape A4 report of absence records drawn with the reportlab canvas.

Positions are tracked top-down (``cursor`` grows towards the bottom of the
page) and converted to reportlab's bottom-up coordinates when drawing.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from ..common.datetime_utils import format_long_es
from ..records.model import Record
from .layout import RECORD_COLUMNS, Column, allocate_columns

logger = logging.getLogger(__name__)

PAGE_SIZE = landscape(A4)
MARGIN = 40

BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
BODY_SIZE = 10
BODY_LEADING = 12

CELL_PADDING_X = 6
ROW_PADDING = 8
ROW_EXTRA = 6
ROW_GAP = 2
TABLE_HEADER_HEIGHT = 26

HEADER_IMAGE_RATIO = 0.18
WATERMARK_WIDTH_RATIO = 0.5
WATERMARK_OPACITY = 0.07
# Degrees in top-down page coordinates; the sign flips on reportlab's bottom-up canvas.
WATERMARK_ROTATION = -30

QR_SIZE = 120

NO_RECORDS_MESSAGE = "No existen registros para mostrar."

TEXT_DARK = HexColor("#111827")
TEXT_BODY = HexColor("#1f2937")
TEXT_MUTED = HexColor("#475569")
HEADER_FILL = HexColor("#e2e8f0")
HEADER_TEXT = HexColor("#0f172a")
GRID = HexColor("#cbd5f5")


@dataclass
class RenderSummary:
    """What was drawn where; page numbers start at 1."""

    pages: int = 1
    watermark_pages: list[int] = field(default_factory=list)
    table_header_pages: list[int] = field(default_factory=list)
    row_pages: list[int] = field(default_factory=list)
    header_image_drawn: bool = False
    qr_drawn: bool = False


@dataclass(frozen=True)
class RenderedReport:
    content: bytes
    summary: RenderSummary


def _image_reader(data: Optional[bytes], label: str) -> Optional[ImageReader]:
    if not data:
        return None
    try:
        reader = ImageReader(io.BytesIO(data))
        reader.getSize()
        return reader
    except Exception:
        logger.exception("Ignoring unreadable %s image", label)
        return None


class RecordsPdfRenderer:
    def __init__(
        self,
        *,
        title: str,
        watermark: Optional[bytes] = None,
        header_image: Optional[bytes] = None,
        pagesize: tuple[float, float] = PAGE_SIZE,
        margin: float = MARGIN,
    ):
        self.title = title
        self.watermark = _image_reader(watermark, "watermark")
        self.header_image = _image_reader(header_image, "header")
        self.pagesize = pagesize
        self.margin = margin

    @property
    def body_width(self) -> float:
        return self.pagesize[0] - 2 * self.margin

    def columns(self) -> list[Column]:
        return allocate_columns(self.body_width, RECORD_COLUMNS)

    def render(
        self,
        records: Sequence[Record],
        *,
        usuario: str,
        generated_at: datetime,
        verification_code: str,
        qr_png: Optional[bytes] = None,
    ) -> RenderedReport:
        buf = io.BytesIO()
        writer = _ReportWriter(self, canvas.Canvas(buf, pagesize=self.pagesize))
        writer.canv.setTitle(self.title)
        writer.canv.setAuthor(usuario)

        writer.draw_watermark()
        writer.draw_header_band()
        writer.draw_intro(usuario=usuario, generated_at=generated_at, verification_code=verification_code)

        if not records:
            writer.draw_no_records()
        else:
            writer.draw_table(records)
            qr = _image_reader(qr_png, "QR")
            if qr is not None:
                writer.draw_qr(qr, verification_code)

        writer.canv.showPage()
        writer.canv.save()
        return RenderedReport(content=buf.getvalue(), summary=writer.summary)


class _ReportWriter:
    def __init__(self, renderer: RecordsPdfRenderer, canv: canvas.Canvas):
        self.r = renderer
        self.canv = canv
        self.page_width, self.page_height = renderer.pagesize
        self.left = renderer.margin
        self.cursor = renderer.margin
        self.columns = renderer.columns()
        self.summary = RenderSummary()

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.r.margin

    def _y(self, top: float) -> float:
        return self.page_height - top

    def _text(self, x: float, top: float, text: str, *, font: str, size: float, color) -> None:
        self.canv.setFont(font, size)
        self.canv.setFillColor(color)
        self.canv.drawString(x, self._y(top + size), text)

    def _centered(self, top: float, text: str, *, font: str, size: float, color) -> None:
        self.canv.setFont(font, size)
        self.canv.setFillColor(color)
        self.canv.drawCentredString(self.left + self.r.body_width / 2, self._y(top + size), text)

    def draw_watermark(self) -> None:
        if self.r.watermark is None:
            return
        size = self.page_width * WATERMARK_WIDTH_RATIO
        c = self.canv
        c.saveState()
        c.setFillAlpha(WATERMARK_OPACITY)
        c.translate(self.page_width / 2, self.page_height / 2)
        c.rotate(-WATERMARK_ROTATION)
        c.drawImage(
            self.r.watermark, -size / 2, -size / 2,
            width=size, height=size, preserveAspectRatio=True, anchor="c", mask="auto",
        )
        c.restoreState()
        self.summary.watermark_pages.append(self.summary.pages)

    def draw_header_band(self) -> None:
        if self.r.header_image is None:
            self.cursor = self.r.margin + 24
            return
        height = self.r.body_width * HEADER_IMAGE_RATIO
        self.canv.drawImage(
            self.r.header_image, self.left, self._y(self.r.margin + height),
            width=self.r.body_width, height=height, mask="auto",
        )
        self.summary.header_image_drawn = True
        self.cursor = self.r.margin + height + 16

    def draw_intro(self, *, usuario: str, generated_at: datetime, verification_code: str) -> None:
        for line in simpleSplit(self.r.title, BOLD_FONT, 20, self.r.body_width):
            self._centered(self.cursor, line, font=BOLD_FONT, size=20, color=TEXT_DARK)
            self.cursor += 24
        self.cursor += 6

        for line in (
            f"Usuario: {usuario}",
            f"Generado: {format_long_es(generated_at)}",
            f"Código de verificación: {verification_code}",
        ):
            self._text(self.left, self.cursor, line, font=BODY_FONT, size=12, color=TEXT_BODY)
            self.cursor += 15
        self.cursor += 30

    def draw_no_records(self) -> None:
        self._text(self.left, self.cursor, NO_RECORDS_MESSAGE, font=BODY_FONT, size=12, color=TEXT_MUTED)
        self.cursor += 15

    def new_page(self, *, repeat_table_header: bool) -> None:
        self.canv.showPage()
        self.summary.pages += 1
        self.cursor = self.r.margin
        self.draw_watermark()
        if repeat_table_header:
            self.draw_table_header()

    def ensure_space(self, height: float, *, repeat_table_header: bool = True) -> None:
        if self.cursor + height > self.bottom_limit:
            self.new_page(repeat_table_header=repeat_table_header)

    def draw_table_header(self) -> None:
        c = self.canv
        top = self.cursor
        x = self.left
        for col in self.columns:
            c.setFillColor(HEADER_FILL)
            c.rect(x, self._y(top + TABLE_HEADER_HEIGHT), col.width, TABLE_HEADER_HEIGHT, stroke=0, fill=1)
            lines = simpleSplit(col.header, BOLD_FONT, BODY_SIZE, self._text_width(col)) or [col.header]
            self._text(x + CELL_PADDING_X, top + (TABLE_HEADER_HEIGHT - 12) / 2, lines[0],
                       font=BOLD_FONT, size=BODY_SIZE, color=HEADER_TEXT)
            x += col.width

        c.setStrokeColor(GRID)
        c.setLineWidth(0.5)
        c.line(self.left, self._y(top + TABLE_HEADER_HEIGHT), x, self._y(top + TABLE_HEADER_HEIGHT))
        self.cursor = top + TABLE_HEADER_HEIGHT + 1
        self.summary.table_header_pages.append(self.summary.pages)

    @staticmethod
    def _text_width(col: Column) -> float:
        return max(col.width - 2 * CELL_PADDING_X, 1)

    def wrap_row(self, record: Record) -> tuple[list[list[str]], float]:
        cells = []
        for col in self.columns:
            text = col.cell(record)
            cells.append(simpleSplit(text, BODY_FONT, BODY_SIZE, self._text_width(col)) or [text])
        tallest = max(len(lines) for lines in cells) * BODY_LEADING
        return cells, tallest + 2 * ROW_PADDING + ROW_EXTRA

    def draw_table(self, records: Sequence[Record]) -> None:
        self.draw_table_header()
        for index, record in enumerate(records):
            cells, row_height = self.wrap_row(record)
            self.ensure_space(row_height + (0 if index == 0 else ROW_GAP))
            self.draw_row(cells, row_height)

    def draw_row(self, cells: list[list[str]], row_height: float) -> None:
        c = self.canv
        top = self.cursor
        x = self.left
        c.setStrokeColor(GRID)
        c.setLineWidth(0.5)
        for col, lines in zip(self.columns, cells):
            c.rect(x, self._y(top + row_height), col.width, row_height, stroke=1, fill=0)
            line_top = top + ROW_PADDING
            for line in lines:
                self._text(x + CELL_PADDING_X, line_top, line, font=BODY_FONT, size=BODY_SIZE, color=TEXT_BODY)
                line_top += BODY_LEADING
            x += col.width

        self.summary.row_pages.append(self.summary.pages)
        self.cursor = top + row_height + ROW_GAP

    def draw_qr(self, qr: ImageReader, verification_code: str) -> None:
        self.ensure_space(QR_SIZE + 40, repeat_table_header=False)
        top = self.cursor
        x = self.left + (self.r.body_width - QR_SIZE) / 2
        self.canv.drawImage(qr, x, self._y(top + QR_SIZE), width=QR_SIZE, height=QR_SIZE)
        self._centered(top + QR_SIZE + 6, f"Código: {verification_code}", font=BODY_FONT, size=9, color=TEXT_MUTED)
        self.cursor = top + QR_SIZE + 20
        self.summary.qr_drawn = True
