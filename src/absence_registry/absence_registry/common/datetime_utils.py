from __future__ import annotations

from datetime import datetime, timezone

_MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)
_WEEKDAYS = ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_local_aware() -> datetime:
    """Local time carrying its UTC offset."""
    return datetime.now().astimezone()


def format_long_es(value: datetime) -> str:
    """e.g. 'sábado, 18 de octubre de 2026, 10:31:05'."""
    return (
        f"{_WEEKDAYS[value.weekday()]}, {value.day} de {_MONTHS[value.month - 1]} de {value.year}, "
        f"{value.strftime('%H:%M:%S')}"
    )


def format_short_es(value: datetime) -> str:
    """e.g. '18 oct 2026, 10:31'."""
    return f"{value.day} {_MONTHS[value.month - 1][:3]} {value.year}, {value.strftime('%H:%M')}"


def iso_utc(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
