from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders
from .model import NewUser, User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, email, password_hash, name, unidad, created_at
                FROM users
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(
                user_id=int(row["id"]),
                email=row["email"],
                password_hash=row["password_hash"],
                name=row["name"],
                unidad=row.get("unidad"),
                created_at=row.get("created_at"),
            )

    def list_existing_emails(self, emails: Sequence[str]) -> set[str]:
        if not emails:
            return set()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT email FROM users WHERE email IN ({in_placeholders(emails)})",
                tuple(emails),
            )
            return {r["email"] for r in fetchall(cur)}

    def create_many(self, users: Sequence[NewUser]) -> int:
        if not users:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT INTO users (email, password_hash, name, unidad) VALUES (%s, %s, %s, %s)",
                [(u.email, u.password_hash, u.name, u.unidad) for u in users],
            )
            return len(users)
