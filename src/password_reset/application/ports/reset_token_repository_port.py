"""Port for reset token persistence operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class ResetTokenCreateInput:
    """Input payload for inserting a reset token record."""

    user_id: int
    token_hash: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class ResetTokenRecord:
    """Persisted reset token model. Only the token digest is ever stored."""

    id: int
    user_id: int
    token_hash: str
    issued_at: datetime
    expires_at: datetime
    used_at: datetime | None
    revoked_at: datetime | None

    def is_outstanding(self, *, now: datetime) -> bool:
        """Return whether the token is unused, unrevoked and unexpired at ``now``."""

        return self.used_at is None and self.revoked_at is None and self.expires_at > now


class ResetTokenRepositoryPort(Protocol):
    """Reset token persistence contract."""

    def create_token(self, payload: ResetTokenCreateInput) -> ResetTokenRecord:
        """Persist a new reset token record."""

    def get_by_hash(self, *, token_hash: str) -> ResetTokenRecord | None:
        """Return token record by digest regardless of state."""

    def list_outstanding_for_user(self, *, user_id: int, now: datetime) -> list[ResetTokenRecord]:
        """Return unused, unrevoked, unexpired tokens for one user."""

    def mark_used(self, *, token_id: int, used_at: datetime) -> bool:
        """Mark one unused token as used; return False if it was already consumed."""

    def revoke_outstanding_for_user(self, *, user_id: int, revoked_at: datetime) -> int:
        """Revoke all unused, unrevoked tokens for one user and return affected count."""
