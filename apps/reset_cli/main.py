"""reset-cli entrypoint and service wiring."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from datetime import timedelta

from password_reset.application.ports.notification_sender_port import NotificationSenderPort
from password_reset.application.ports.reset_token_issuer_port import ResetTokenIssuerPort
from password_reset.application.services.password_resetter import (
    DuplicateSendPolicy,
    PasswordResetter,
    ResetDestination,
)
from password_reset.application.services.reset_token_service import (
    ResetTokenService,
    StaticResetTokenIssuer,
)
from password_reset.config.settings import Settings, load_settings
from password_reset.domain.user import User
from password_reset.infrastructure.db.reset_token_repository import SqlAlchemyResetTokenRepository
from password_reset.infrastructure.db.session import create_session_factory
from password_reset.infrastructure.logging import configure_logging
from password_reset.infrastructure.notifications.email_sender import SmtpEmailNotificationSender
from password_reset.infrastructure.notifications.logging_sender import LoggingNotificationSender
from password_reset.infrastructure.notifications.sms_sender import HttpSmsNotificationSender

logger = logging.getLogger(__name__)


def build_notification_sender(settings: Settings) -> NotificationSenderPort:
    """Build the configured notification transport."""

    if settings.notification_transport == "smtp":
        assert settings.smtp_host is not None and settings.smtp_sender is not None
        return SmtpEmailNotificationSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender_address=settings.smtp_sender,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            subject=settings.smtp_subject,
            timeout_seconds=settings.notification_timeout_seconds,
        )
    if settings.notification_transport == "sms":
        assert settings.sms_gateway_url is not None
        return HttpSmsNotificationSender(
            gateway_url=str(settings.sms_gateway_url),
            api_token=settings.sms_gateway_token,
            timeout_seconds=settings.notification_timeout_seconds,
        )
    return LoggingNotificationSender()


def build_token_issuer(settings: Settings) -> ResetTokenIssuerPort:
    """Build the static legacy issuer or the database-backed random-token service."""

    if settings.reset_token_mode == "static":
        return StaticResetTokenIssuer(settings.reset_static_token)

    assert settings.database_url is not None
    return ResetTokenService(
        SqlAlchemyResetTokenRepository(create_session_factory(settings.database_url)),
        ttl=timedelta(seconds=settings.reset_token_ttl_seconds),
    )


def build_password_resetter(settings: Settings) -> PasswordResetter:
    """Build reset orchestrator with configured transport and token issuer."""

    return PasswordResetter(
        build_notification_sender(settings),
        token_issuer=build_token_issuer(settings),
        base_url=str(settings.reset_base_url),
        message_template=settings.reset_message_template,
        duplicate_policy=DuplicateSendPolicy(settings.reset_duplicate_policy),
        destination=ResetDestination(settings.reset_destination),
    )


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send one password reset link.")
    parser.add_argument("--user-id", type=int, required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--telephone", default="")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run one reset notification using environment-driven wiring."""

    args = _parse_args(argv)
    settings = load_settings()
    configure_logging(level=settings.log_level)

    user = User(args.user_id, args.email, args.telephone, None)
    resetter = build_password_resetter(settings)
    logger.info(
        "reset_cli_started user_id=%s transport=%s token_mode=%s",
        user.id,
        settings.notification_transport,
        settings.reset_token_mode,
    )
    resetter.reset(user)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
