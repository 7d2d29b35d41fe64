from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import ValidationError, Violation

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} no es válido")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} debe tener al menos {min_len} caracteres")
    return value


def is_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value or ""))


class Violations:
    """Collects field-level constraint failures before raising them together.

    Each check returns the cleaned value (or None when the check failed), so
    callers can build their objects in one pass and call ``raise_if_any``.
    """

    def __init__(self) -> None:
        self._items: list[Violation] = []

    def __bool__(self) -> bool:
        return bool(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[Violation]:
        return list(self._items)

    def add(self, field: str, message: str) -> None:
        self._items.append(Violation(field=field, message=message))

    def string(self, data: dict, key: str, *, path: Optional[str] = None, required: bool = True, default: str = "") -> Optional[str]:
        field = path or key
        value: Any = data.get(key)
        if value is None:
            if required:
                self.add(field, "Campo obligatorio")
                return None
            return default
        if not isinstance(value, str):
            self.add(field, "Debe ser texto")
            return None
        value = value.strip()
        if required and not value:
            self.add(field, "No puede estar vacío")
            return None
        return value

    def min_length(self, value: Optional[str], field: str, min_len: int) -> Optional[str]:
        if value is None:
            return None
        if len(value) < min_len:
            self.add(field, f"Debe tener al menos {min_len} caracteres")
            return None
        return value

    def email(self, value: Optional[str], field: str) -> Optional[str]:
        if value is None:
            return None
        if not is_email(value):
            self.add(field, "Correo electrónico no válido")
            return None
        return value

    def non_empty_list(self, data: dict, key: str) -> list:
        value = data.get(key)
        if not isinstance(value, list):
            self.add(key, "Debe ser una lista")
            return []
        if not value:
            self.add(key, "Debe contener al menos un elemento")
        return value

    def raise_if_any(self, message: str = "Datos de entrada inválidos") -> None:
        if self._items:
            raise ValidationError(message, self._items)
