from __future__ import annotations

import io
import json
import logging
from datetime import datetime
from typing import Optional

import qrcode

from ..common.datetime_utils import iso_utc

logger = logging.getLogger(__name__)


def build_verification_payload(*, usuario: str, generated_at: datetime, total: int, verification_code: str) -> str:
    return json.dumps(
        {
            "usuario": usuario,
            "emitidoEn": iso_utc(generated_at),
            "totalRegistros": total,
            "codigoVerificacion": verification_code,
        },
        ensure_ascii=False,
    )


def make_qr_png(payload: str) -> Optional[bytes]:
    """PNG bytes for ``payload``, or None when the QR cannot be built."""
    try:
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=6,
            border=1,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
    except Exception:
        logger.exception("Could not generate verification QR code")
        return None
