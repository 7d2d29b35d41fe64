from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: an account allowed to submit records.

    Plain data only; no DB access here.
    """

    user_id: int
    email: str
    password_hash: str
    name: str
    unidad: Optional[str]
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewUser:
    email: str
    password_hash: str
    name: str
    unidad: Optional[str] = None
