"""SQLAlchemy adapter for reset token persistence."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, cast

import sqlalchemy as sa
from sqlalchemy.engine import CursorResult
from sqlalchemy.orm import Session, sessionmaker

from password_reset.application.ports.reset_token_repository_port import (
    ResetTokenCreateInput,
    ResetTokenRecord,
    ResetTokenRepositoryPort,
)
from password_reset.infrastructure.db.metadata import reset_tokens


class SqlAlchemyResetTokenRepository(ResetTokenRepositoryPort):
    """Reset token repository backed by SQLAlchemy sessions."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def create_token(self, payload: ResetTokenCreateInput) -> ResetTokenRecord:
        """Persist a token digest row and return the inserted record."""

        statement = sa.insert(reset_tokens).values(
            user_id=payload.user_id,
            token_hash=payload.token_hash,
            issued_at=payload.issued_at.astimezone(UTC),
            expires_at=payload.expires_at.astimezone(UTC),
        ).returning(*reset_tokens.c)

        with self._session_factory() as session:
            row = session.execute(statement).mappings().one()
            session.commit()

        return _to_reset_token_record(row)

    def get_by_hash(self, *, token_hash: str) -> ResetTokenRecord | None:
        statement = sa.select(*reset_tokens.c).where(
            reset_tokens.c.token_hash == token_hash,
        ).limit(1)

        with self._session_factory() as session:
            row = session.execute(statement).mappings().first()

        if row is None:
            return None
        return _to_reset_token_record(row)

    def list_outstanding_for_user(self, *, user_id: int, now: datetime) -> list[ResetTokenRecord]:
        """Return unused, unrevoked, unexpired tokens for user in issue order."""

        statement = (
            sa.select(*reset_tokens.c)
            .where(
                reset_tokens.c.user_id == user_id,
                reset_tokens.c.used_at.is_(None),
                reset_tokens.c.revoked_at.is_(None),
                reset_tokens.c.expires_at > now.astimezone(UTC),
            )
            .order_by(reset_tokens.c.id)
        )

        with self._session_factory() as session:
            rows = session.execute(statement).mappings().all()

        return [_to_reset_token_record(row) for row in rows]

    def mark_used(self, *, token_id: int, used_at: datetime) -> bool:
        statement = (
            sa.update(reset_tokens)
            .where(
                reset_tokens.c.id == token_id,
                reset_tokens.c.used_at.is_(None),
            )
            .values(used_at=used_at.astimezone(UTC))
        )

        with self._session_factory() as session:
            result = cast(CursorResult[Any], session.execute(statement))
            session.commit()

        return int(result.rowcount or 0) == 1

    def revoke_outstanding_for_user(self, *, user_id: int, revoked_at: datetime) -> int:
        statement = (
            sa.update(reset_tokens)
            .where(
                reset_tokens.c.user_id == user_id,
                reset_tokens.c.used_at.is_(None),
                reset_tokens.c.revoked_at.is_(None),
            )
            .values(revoked_at=revoked_at.astimezone(UTC))
        )

        with self._session_factory() as session:
            result = cast(CursorResult[Any], session.execute(statement))
            session.commit()

        return int(result.rowcount or 0)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back; every stored value is UTC.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def _to_reset_token_record(row: sa.RowMapping) -> ResetTokenRecord:
    return ResetTokenRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        token_hash=cast(str, row["token_hash"]),
        issued_at=cast(datetime, _as_utc(row["issued_at"])),
        expires_at=cast(datetime, _as_utc(row["expires_at"])),
        used_at=_as_utc(row["used_at"]),
        revoked_at=_as_utc(row["revoked_at"]),
    )
