"""SMTP email notification sender."""

from __future__ import annotations

import logging
import smtplib
from collections.abc import Callable
from email.message import EmailMessage

from password_reset.application.ports.notification_sender_port import (
    NotificationDeliveryError,
    NotificationSenderPort,
)
from password_reset.infrastructure.logging import mask_destination

DEFAULT_SUBJECT = "Redefinição de senha"

logger = logging.getLogger(__name__)

SmtpFactory = Callable[..., smtplib.SMTP]


class SmtpEmailNotificationSender(NotificationSenderPort):
    """Deliver messages as plain-text emails over one SMTP connection per send."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        sender_address: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        subject: str = DEFAULT_SUBJECT,
        timeout_seconds: float = 10.0,
        smtp_factory: SmtpFactory = smtplib.SMTP,
    ) -> None:
        self._host = host
        self._port = port
        self._sender_address = sender_address
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._subject = subject
        self._timeout_seconds = timeout_seconds
        self._smtp_factory = smtp_factory

    def send(self, destination: str, message: str) -> None:
        email = self._build_email(destination=destination, body=message)
        try:
            with self._smtp_factory(self._host, self._port, timeout=self._timeout_seconds) as smtp:
                if self._use_tls:
                    smtp.starttls()
                if self._username is not None and self._password is not None:
                    smtp.login(self._username, self._password)
                smtp.send_message(email)
        except (smtplib.SMTPException, OSError) as error:
            logger.warning(
                "email_send_failed destination=%s host=%s error=%s",
                mask_destination(destination),
                self._host,
                error,
            )
            raise NotificationDeliveryError(transport="smtp", reason=str(error)) from error

        logger.info("email_sent destination=%s host=%s", mask_destination(destination), self._host)

    def _build_email(self, *, destination: str, body: str) -> EmailMessage:
        email = EmailMessage()
        email["From"] = self._sender_address
        email["To"] = destination
        email["Subject"] = self._subject
        email.set_content(body)
        return email
