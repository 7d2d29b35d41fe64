"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""
from __future__ import annotations

from typing import Optional

DEFAULT_REPORT_TITLE = "Personal que no laboró en el Referéndum y Consulta Popular 2025"
DEFAULT_WATERMARK_PATH = "static/logo.png"
DEFAULT_HEADER_IMAGE_PATH = "static/cabecera.png"

USER_IMPORT_BATCH_SIZE = 50
MIN_PASSWORD_LENGTH = 6

MOTIVO_OPTIONS = (
    "Otros",
    "Hospitalización",
    "Descanso Domiciliario",
    "Imputables a vacaciones",
    "Maternidad o Parto",
    "PATERNIDAD",
    "Licencias sin remuneración",
    "Liceacias con remuneración",
    "Por calamidad doméstica",
    "Aprehensión",
    "Ausencia injustificada por más de 3 días",
    "Detención",
    "Fallecido(a)",
    "Vacaciones",
    "Accidentes de Tránsito",
)

_MOTIVO_LOOKUP = {option.strip().upper(): option for option in MOTIVO_OPTIONS}


def find_motivo_option(value: str) -> Optional[str]:
    """Return the catalogue spelling of a reason, matching case-insensitively."""
    normalized = (value or "").strip().upper()
    if not normalized:
        return None
    return _MOTIVO_LOOKUP.get(normalized)
