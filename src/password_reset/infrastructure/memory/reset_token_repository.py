"""Process-local reset token store used when no database is configured."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from password_reset.application.ports.reset_token_repository_port import (
    ResetTokenCreateInput,
    ResetTokenRecord,
    ResetTokenRepositoryPort,
)


class InMemoryResetTokenRepository(ResetTokenRepositoryPort):
    """Reset token repository backed by a dict keyed by record id."""

    def __init__(self) -> None:
        self._records: dict[int, ResetTokenRecord] = {}
        self._next_id = 1

    def create_token(self, payload: ResetTokenCreateInput) -> ResetTokenRecord:
        if any(record.token_hash == payload.token_hash for record in self._records.values()):
            raise ValueError("token hash already exists")

        record = ResetTokenRecord(
            id=self._next_id,
            user_id=payload.user_id,
            token_hash=payload.token_hash,
            issued_at=payload.issued_at,
            expires_at=payload.expires_at,
            used_at=None,
            revoked_at=None,
        )
        self._records[record.id] = record
        self._next_id += 1
        return record

    def get_by_hash(self, *, token_hash: str) -> ResetTokenRecord | None:
        for record in self._records.values():
            if record.token_hash == token_hash:
                return record
        return None

    def list_outstanding_for_user(self, *, user_id: int, now: datetime) -> list[ResetTokenRecord]:
        return [
            record
            for record in self._records.values()
            if record.user_id == user_id and record.is_outstanding(now=now)
        ]

    def mark_used(self, *, token_id: int, used_at: datetime) -> bool:
        record = self._records.get(token_id)
        if record is None or record.used_at is not None:
            return False
        self._records[token_id] = replace(record, used_at=used_at)
        return True

    def revoke_outstanding_for_user(self, *, user_id: int, revoked_at: datetime) -> int:
        revoked = 0
        for record in list(self._records.values()):
            if record.user_id != user_id or record.used_at is not None:
                continue
            if record.revoked_at is not None:
                continue
            self._records[record.id] = replace(record, revoked_at=revoked_at)
            revoked += 1
        return revoked
