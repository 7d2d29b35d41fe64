from __future__ import annotations

import csv
import logging
import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import Violations
from ..core.constants import MIN_PASSWORD_LENGTH, USER_IMPORT_BATCH_SIZE
from ..core.exceptions import AuthenticationError
from .model import NewUser
from .repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciales inválidas"


@dataclass(frozen=True)
class LoginResult:
    """What the client receives after a successful login."""

    token: str
    user_id: int
    email: str
    name: str
    unidad: Optional[str]

    def user_payload(self) -> dict:
        return {"id": self.user_id, "email": self.email, "name": self.name, "unidad": self.unidad}


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def validate_credentials(payload: dict) -> tuple[str, str]:
        v = Violations()
        email = v.email(v.string(payload, "email"), "email")
        password = v.min_length(v.string(payload, "password"), "password", MIN_PASSWORD_LENGTH)
        v.raise_if_any()
        return email, password

    def authenticate(self, email: str, password: str) -> LoginResult:
        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("Login ok for %s", user.email)
        return LoginResult(
            token=str(uuid.uuid4()),
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            unidad=user.unidad,
        )


@dataclass(frozen=True)
class UserEntry:
    email: str
    name: str
    unidad: Optional[str] = None


@dataclass
class ImportSummary:
    total_in_file: int
    unique: int
    existing: int
    duplicates: list[str] = field(default_factory=list)
    created: list[UserEntry] = field(default_factory=list)
    failed_batches: list[int] = field(default_factory=list)


def generate_user_name(email: str) -> str:
    """'juan.perez@x.com' -> 'Juan Perez'."""
    local_part = email.split("@")[0]
    parts = [p for p in re.split(r"[._-]", local_part) if p]
    name = " ".join(p[:1].upper() + p[1:] for p in parts)
    return name or email


def parse_user_lines(lines: Iterable[str], *, default_unidad: str = "") -> list[UserEntry]:
    """Parse ``correo[,nombre[,unidad]]`` lines, skipping anything without a usable e-mail."""
    entries: list[UserEntry] = []
    for raw in lines:
        line = raw.strip()
        if not line or "@" not in line:
            continue

        parts = [p.strip() for p in line.split(",")]
        email = parts[0].lower()
        if "@" not in email or len(email) < 5:
            continue

        name = parts[1] if len(parts) > 1 and parts[1] else generate_user_name(email)
        unidad = parts[2] if len(parts) > 2 and parts[2] else (default_unidad or None)
        entries.append(UserEntry(email=email, name=name, unidad=unidad))
    return entries


class UserImportService:
    """Use case: provision many accounts sharing one temporary password."""

    def __init__(self, users: UserRepository, *, batch_size: int = USER_IMPORT_BATCH_SIZE):
        self._users = users
        self._batch_size = batch_size

    def import_users(self, entries: Sequence[UserEntry], *, temp_password: str) -> ImportSummary:
        unique: dict[str, UserEntry] = {}
        duplicates: list[str] = []
        for entry in entries:
            if entry.email in unique:
                duplicates.append(entry.email)
            else:
                unique[entry.email] = entry

        if duplicates:
            logger.warning("%d duplicated e-mails in input, keeping the first occurrence", len(duplicates))

        existing = self._users.list_existing_emails(list(unique))
        if existing:
            logger.info("%d users already exist and will be skipped", len(existing))

        summary = ImportSummary(
            total_in_file=len(entries),
            unique=len(unique),
            existing=len(existing),
            duplicates=duplicates,
        )

        pending = [e for e in unique.values() if e.email not in existing]
        if not pending:
            logger.info("No new users to create")
            return summary

        # One hash shared by every new account.
        password_hash = generate_password_hash(temp_password)
        total_batches = (len(pending) + self._batch_size - 1) // self._batch_size

        for index in range(0, len(pending), self._batch_size):
            batch = pending[index:index + self._batch_size]
            batch_number = index // self._batch_size + 1
            try:
                self._users.create_many(
                    [NewUser(email=e.email, password_hash=password_hash, name=e.name, unidad=e.unidad) for e in batch]
                )
            except Exception:
                logger.exception("Batch %d/%d failed", batch_number, total_batches)
                summary.failed_batches.append(batch_number)
                continue
            logger.info("Batch %d/%d: %d users created", batch_number, total_batches, len(batch))
            summary.created.extend(batch)

        return summary


def write_credentials_csv(path: str | Path, created: Sequence[UserEntry], *, temp_password: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_ALL)
        writer.writerow(["Email", "Nombre", "Unidad", "Contraseña Temporal"])
        for entry in created:
            writer.writerow([entry.email, entry.name, entry.unidad or "", temp_password])
