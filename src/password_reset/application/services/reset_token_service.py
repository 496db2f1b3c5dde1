"""Reset token issuers: random single-use tokens and the legacy static token."""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from password_reset.application.ports.reset_token_issuer_port import ResetTokenIssuerPort
from password_reset.application.ports.reset_token_repository_port import (
    ResetTokenCreateInput,
    ResetTokenRepositoryPort,
)

DEFAULT_STATIC_TOKEN = "123"
DEFAULT_TOKEN_TTL = timedelta(hours=1)
_TOKEN_BYTES = 32

logger = logging.getLogger(__name__)


def hash_reset_token(token: str) -> str:
    """Return the SHA-256 hex digest stored in place of a plaintext token."""

    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _generate_token() -> str:
    return secrets.token_urlsafe(_TOKEN_BYTES)


class StaticResetTokenIssuer(ResetTokenIssuerPort):
    """Issue one fixed token for every user and request.

    Tokens never expire, are never tracked as outstanding and can be redeemed
    any number of times.
    """

    def __init__(self, token: str = DEFAULT_STATIC_TOKEN) -> None:
        if not token:
            raise ValueError("static token cannot be blank")
        self._token = token

    def issue(self, *, user_id: int) -> str:
        _ = user_id
        return self._token

    def has_outstanding(self, *, user_id: int) -> bool:
        _ = user_id
        return False

    def redeem(self, *, user_id: int, token: str) -> bool:
        _ = user_id
        return hmac.compare_digest(token.encode("utf-8"), self._token.encode("utf-8"))


class ResetTokenService(ResetTokenIssuerPort):
    """Issue unguessable, expiring, single-use reset tokens bound to one user."""

    def __init__(
        self,
        repository: ResetTokenRepositoryPort,
        *,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        now: Callable[[], datetime] = _utc_now,
        token_factory: Callable[[], str] = _generate_token,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("token ttl must be positive")
        self._repository = repository
        self._ttl = ttl
        self._now = now
        self._token_factory = token_factory

    def issue(self, *, user_id: int) -> str:
        """Revoke earlier outstanding tokens for user and issue a fresh one."""

        issued_at = self._now()
        revoked = self._repository.revoke_outstanding_for_user(
            user_id=user_id,
            revoked_at=issued_at,
        )
        token = self._token_factory()
        record = self._repository.create_token(
            ResetTokenCreateInput(
                user_id=user_id,
                token_hash=hash_reset_token(token),
                issued_at=issued_at,
                expires_at=issued_at + self._ttl,
            )
        )
        logger.info(
            "reset_token_issued user_id=%s token_id=%s revoked_previous=%s expires_at=%s",
            user_id,
            record.id,
            revoked,
            record.expires_at.isoformat(),
        )
        return token

    def has_outstanding(self, *, user_id: int) -> bool:
        outstanding = self._repository.list_outstanding_for_user(user_id=user_id, now=self._now())
        return bool(outstanding)

    def redeem(self, *, user_id: int, token: str) -> bool:
        """Consume token when it belongs to user and is still outstanding."""

        record = self._repository.get_by_hash(token_hash=hash_reset_token(token))
        if record is None:
            logger.warning("reset_token_redeem_rejected user_id=%s reason=unknown", user_id)
            return False
        if record.user_id != user_id:
            logger.warning(
                "reset_token_redeem_rejected user_id=%s token_id=%s reason=foreign_user",
                user_id,
                record.id,
            )
            return False

        now = self._now()
        if not record.is_outstanding(now=now):
            logger.warning(
                "reset_token_redeem_rejected user_id=%s token_id=%s reason=not_outstanding",
                user_id,
                record.id,
            )
            return False

        if not self._repository.mark_used(token_id=record.id, used_at=now):
            logger.warning(
                "reset_token_redeem_rejected user_id=%s token_id=%s reason=already_used",
                user_id,
                record.id,
            )
            return False

        logger.info("reset_token_redeemed user_id=%s token_id=%s", user_id, record.id)
        return True
