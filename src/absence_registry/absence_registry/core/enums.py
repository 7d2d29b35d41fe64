from __future__ import annotations

from enum import Enum


class ConflictSource(str, Enum):
    """Where a duplicated identification was found."""

    PAYLOAD = "payload"
    DATABASE = "database"
