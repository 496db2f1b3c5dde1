"""Development notification sender that only writes to the log."""

from __future__ import annotations

import logging

from password_reset.application.ports.notification_sender_port import NotificationSenderPort
from password_reset.infrastructure.logging import mask_destination

logger = logging.getLogger(__name__)


class LoggingNotificationSender(NotificationSenderPort):
    """Record deliveries in the log without contacting any transport.

    The message body carries a live reset token, so only its length is logged.
    """

    def send(self, destination: str, message: str) -> None:
        logger.info(
            "notification_logged destination=%s message_chars=%s",
            mask_destination(destination),
            len(message),
        )
