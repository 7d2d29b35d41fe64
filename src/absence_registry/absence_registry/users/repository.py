from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewUser, User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_existing_emails(self, emails: Sequence[str]) -> set[str]:
        raise NotImplementedError

    def create_many(self, users: Sequence[NewUser]) -> int:
        raise NotImplementedError
