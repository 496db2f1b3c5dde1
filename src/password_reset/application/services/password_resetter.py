"""Application service composing and dispatching password reset links."""

from __future__ import annotations

import logging
from enum import StrEnum
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from password_reset.application.ports.notification_sender_port import NotificationSenderPort
from password_reset.application.ports.reset_token_issuer_port import ResetTokenIssuerPort
from password_reset.application.services.reset_token_service import StaticResetTokenIssuer
from password_reset.domain.password import Password
from password_reset.domain.user import User

DEFAULT_RESET_BASE_URL = "http://techstore.com/reset"
DEFAULT_MESSAGE_TEMPLATE = "Seu link: {link}"

logger = logging.getLogger(__name__)


class DuplicateSendPolicy(StrEnum):
    """What ``reset`` does when the user already holds an outstanding token."""

    RESEND = "resend"
    SUPPRESS_OUTSTANDING = "suppress_outstanding"


class ResetDestination(StrEnum):
    """Which user contact field receives the reset link."""

    EMAIL = "email"
    TELEPHONE = "telephone"


class InvalidResetTokenError(PermissionError):
    """Raised when a reset token cannot be redeemed for the given user."""

    def __init__(self, *, user_id: int) -> None:
        super().__init__(f"invalid or expired reset token for user: {user_id}")
        self.user_id = user_id


class PasswordResetter:
    """Send reset links through a notification sender and complete resets."""

    def __init__(
        self,
        sender: NotificationSenderPort,
        *,
        token_issuer: ResetTokenIssuerPort | None = None,
        base_url: str = DEFAULT_RESET_BASE_URL,
        message_template: str = DEFAULT_MESSAGE_TEMPLATE,
        duplicate_policy: DuplicateSendPolicy = DuplicateSendPolicy.RESEND,
        destination: ResetDestination = ResetDestination.EMAIL,
    ) -> None:
        if "{link}" not in message_template:
            raise ValueError("message template must contain a {link} placeholder")
        self._sender = sender
        self._token_issuer = token_issuer if token_issuer is not None else StaticResetTokenIssuer()
        self._base_url = base_url
        self._message_template = message_template
        self._duplicate_policy = duplicate_policy
        self._destination = destination

    def reset(self, user: User) -> None:
        """Send one reset link to the user's configured contact field.

        The destination (email by default) is passed to the sender unchanged
        and sender failures propagate to the caller.
        """

        if (
            self._duplicate_policy is DuplicateSendPolicy.SUPPRESS_OUTSTANDING
            and self._token_issuer.has_outstanding(user_id=user.id)
        ):
            logger.info("password_reset_suppressed user_id=%s reason=outstanding_token", user.id)
            return

        token = self._token_issuer.issue(user_id=user.id)
        message = self._message_template.format(link=self.build_link(token))
        self._sender.send(self._destination_for(user), message)
        logger.info(
            "password_reset_sent user_id=%s destination=%s",
            user.id,
            self._destination.value,
        )

    def build_link(self, token: str) -> str:
        """Return the reset link with token appended to any existing query."""

        parts = urlsplit(self._base_url)
        query = [
            (key, value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
            if key != "token"
        ]
        query.append(("token", token))
        return urlunsplit(parts._replace(query=urlencode(query)))

    def _destination_for(self, user: User) -> str:
        if self._destination is ResetDestination.TELEPHONE:
            return user.telephone
        return user.email

    def complete_reset(self, *, user: User, token: str, new_password: Password) -> None:
        """Redeem token for user and replace the credential on success."""

        if not self._token_issuer.redeem(user_id=user.id, token=token):
            raise InvalidResetTokenError(user_id=user.id)
        user.change_password(new_password)
        logger.info("password_reset_completed user_id=%s", user.id)
