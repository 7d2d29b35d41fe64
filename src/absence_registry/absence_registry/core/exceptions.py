from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, violations: Sequence[Violation] = ()):
        super().__init__(message)
        self.violations = list(violations)

    def to_dict(self) -> list[dict]:
        return [{"field": v.field, "message": v.message} for v in self.violations]


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotFoundError(DomainError):
    """Raised when the target row does not exist or belongs to someone else."""


class DuplicateIdentificationError(DomainError):
    """Raised when a batch reuses an identification already taken."""

    def __init__(self, conflict):
        self.conflict = conflict
        super().__init__(conflict.message)
