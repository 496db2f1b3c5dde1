from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from alembic.config import Config
from pydantic import ValidationError

from alembic import command
from apps.reset_cli.main import (
    build_notification_sender,
    build_password_resetter,
    build_token_issuer,
    main,
)
from password_reset.application.services.reset_token_service import (
    ResetTokenService,
    StaticResetTokenIssuer,
)
from password_reset.config.settings import Settings, load_settings
from password_reset.domain.user import User
from password_reset.infrastructure.notifications import sms_sender
from password_reset.infrastructure.notifications.email_sender import SmtpEmailNotificationSender
from password_reset.infrastructure.notifications.logging_sender import LoggingNotificationSender
from password_reset.infrastructure.notifications.sms_sender import HttpSmsNotificationSender


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "RESET_TOKEN_MODE",
        "RESET_STATIC_TOKEN",
        "RESET_DESTINATION",
        "NOTIFICATION_TRANSPORT",
        "SMTP_HOST",
        "SMTP_SENDER",
        "SMS_GATEWAY_URL",
        "DATABASE_URL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    load_settings.cache_clear()


def _upgrade_head(tmp_path: Path, filename: str) -> str:
    database_url = f"sqlite+pysqlite:///{tmp_path / filename}"

    alembic_config = Config()
    alembic_config.set_main_option(
        "script_location",
        str(Path(__file__).resolve().parents[2] / "alembic"),
    )
    alembic_config.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(alembic_config, "head")

    return database_url


def test_default_transport_is_logging_sender() -> None:
    sender = build_notification_sender(Settings(_env_file=None))

    assert isinstance(sender, LoggingNotificationSender)


def test_smtp_transport_builds_email_sender(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTIFICATION_TRANSPORT", "smtp")
    monkeypatch.setenv("SMTP_HOST", "smtp.example.org")
    monkeypatch.setenv("SMTP_SENDER", "no-reply@techstore.com")

    sender = build_notification_sender(Settings(_env_file=None))

    assert isinstance(sender, SmtpEmailNotificationSender)


def test_sms_transport_builds_sms_sender(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTIFICATION_TRANSPORT", "sms")
    monkeypatch.setenv("RESET_DESTINATION", "telephone")
    monkeypatch.setenv("SMS_GATEWAY_URL", "https://sms.example.org/messages")

    sender = build_notification_sender(Settings(_env_file=None))

    assert isinstance(sender, HttpSmsNotificationSender)


def test_static_mode_builds_static_issuer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESET_TOKEN_MODE", "static")
    monkeypatch.setenv("RESET_STATIC_TOKEN", "legacy")

    issuer = build_token_issuer(Settings(_env_file=None))

    assert isinstance(issuer, StaticResetTokenIssuer)
    assert issuer.issue(user_id=1) == "legacy"


def test_issued_mode_with_database_persists_tokens(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("RESET_TOKEN_MODE", "issued")
    monkeypatch.setenv("DATABASE_URL", _upgrade_head(tmp_path, "cli.db"))

    issuer = build_token_issuer(Settings(_env_file=None))

    assert isinstance(issuer, ResetTokenService)
    token = issuer.issue(user_id=3)
    assert issuer.has_outstanding(user_id=3) is True
    assert issuer.redeem(user_id=3, token=token) is True


def test_static_mode_resetter_reproduces_legacy_message(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setenv("RESET_TOKEN_MODE", "static")
    resetter = build_password_resetter(Settings(_env_file=None))

    with caplog.at_level(logging.INFO):
        resetter.reset(User(1, "a@b.com", "555-1234", None))

    assert resetter.build_link("123") == "http://techstore.com/reset?token=123"
    assert "notification_logged destination=a***@b.com" in caplog.text
    assert f"message_chars={len('Seu link: http://techstore.com/reset?token=123')}" in caplog.text


def test_main_sends_one_reset_and_returns_zero(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setenv("RESET_TOKEN_MODE", "static")

    with caplog.at_level(logging.INFO):
        exit_code = main(["--user-id", "5", "--email", "a@b.com"])

    assert exit_code == 0
    assert "reset_cli_started user_id=5 transport=log token_mode=static" in caplog.text
    assert "password_reset_sent user_id=5" in caplog.text


def test_main_requires_email() -> None:
    with pytest.raises(SystemExit):
        main(["--user-id", "5"])


class RecordingSmsTransport:
    calls: list[dict[str, object]] = []

    def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
        timeout_seconds: float,
    ) -> sms_sender.SmsHttpResponse:
        _ = headers, timeout_seconds
        RecordingSmsTransport.calls.append({"method": method, "url": url, "body": body})
        return sms_sender.SmsHttpResponse(status_code=202, body_bytes=b"{}")


def test_sms_wiring_delivers_reset_link_to_user_telephone(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    RecordingSmsTransport.calls.clear()
    monkeypatch.setattr(sms_sender, "UrllibSmsHttpTransport", RecordingSmsTransport)
    monkeypatch.setenv("NOTIFICATION_TRANSPORT", "sms")
    monkeypatch.setenv("RESET_DESTINATION", "telephone")
    monkeypatch.setenv("SMS_GATEWAY_URL", "https://sms.example.org/messages")
    resetter = build_password_resetter(Settings(_env_file=None))

    resetter.reset(User(1, "a@b.com", "+55 71 99999-0000", None))

    assert len(RecordingSmsTransport.calls) == 1
    payload = json.loads(RecordingSmsTransport.calls[0]["body"])  # type: ignore[arg-type]
    assert payload == {
        "to": "+55 71 99999-0000",
        "message": "Seu link: http://techstore.com/reset?token=123",
    }


def test_sms_transport_with_email_destination_is_rejected(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("NOTIFICATION_TRANSPORT", "sms")
    monkeypatch.setenv("SMS_GATEWAY_URL", "https://sms.example.org/messages")

    with pytest.raises(ValidationError):
        build_password_resetter(Settings(_env_file=None))


def test_default_wiring_uses_static_issuer_and_email_destination(
    caplog: pytest.LogCaptureFixture,
) -> None:
    settings = Settings(_env_file=None)
    resetter = build_password_resetter(settings)

    with caplog.at_level(logging.INFO):
        resetter.reset(User(1, "a@b.com", "+55 71 99999-0000", None))

    assert isinstance(build_token_issuer(settings), StaticResetTokenIssuer)
    assert "destination=a***@b.com" in caplog.text
    assert "password_reset_sent user_id=1 destination=email" in caplog.text


def test_issued_mode_without_database_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESET_TOKEN_MODE", "issued")

    with pytest.raises(ValidationError):
        main(["--user-id", "5", "--email", "a@b.com"])
