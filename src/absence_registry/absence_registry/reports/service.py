from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import iso_utc, now_local_aware
from ..records.repository import RecordRepository
from ..records.service import require_usuario
from .assets import CachedImage
from .pdf import RecordsPdfRenderer, RenderSummary
from .qr import build_verification_payload, make_qr_png

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9_\-@.]+")


def report_filename(usuario: str, generated_at: datetime) -> str:
    safe_usuario = _UNSAFE_FILENAME_CHARS.sub("_", usuario)
    timestamp = re.sub(r"[:.]", "-", iso_utc(generated_at))
    return f"registro-novedades-{safe_usuario}-{timestamp}.pdf"


@dataclass(frozen=True)
class UserReport:
    filename: str
    content: bytes
    verification_code: str
    total: int
    summary: RenderSummary


class ReportService:
    """Use case: export one user's records as a verifiable PDF."""

    def __init__(
        self,
        records: RecordRepository,
        *,
        title: str,
        watermark: Optional[CachedImage] = None,
        header_image: Optional[CachedImage] = None,
        clock: Callable[[], datetime] = now_local_aware,
        code_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
        qr_factory: Callable[[str], Optional[bytes]] = make_qr_png,
    ):
        self._records = records
        self._title = title
        self._watermark = watermark
        self._header_image = header_image
        self._clock = clock
        self._code_factory = code_factory
        self._qr_factory = qr_factory

    def build_user_report(self, usuario: str) -> UserReport:
        usuario = require_usuario(usuario)
        records = list(self._records.list_for_user(usuario))

        generated_at = self._clock()
        verification_code = self._code_factory()
        payload = build_verification_payload(
            usuario=usuario,
            generated_at=generated_at,
            total=len(records),
            verification_code=verification_code,
        )

        renderer = RecordsPdfRenderer(
            title=self._title,
            watermark=self._watermark.get() if self._watermark else None,
            header_image=self._header_image.get() if self._header_image else None,
        )
        rendered = renderer.render(
            records,
            usuario=usuario,
            generated_at=generated_at,
            verification_code=verification_code,
            qr_png=self._qr_factory(payload),
        )
        logger.info(
            "PDF for %s: %d records, %d pages, code %s",
            usuario, len(records), rendered.summary.pages, verification_code,
        )
        return UserReport(
            filename=report_filename(usuario, generated_at),
            content=rendered.content,
            verification_code=verification_code,
            total=len(records),
            summary=rendered.summary,
        )
