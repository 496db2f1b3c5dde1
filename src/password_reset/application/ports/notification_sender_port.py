"""Port for delivering one message to one destination."""

from __future__ import annotations

from typing import Protocol


class NotificationDeliveryError(RuntimeError):
    """Raised by transports when a message cannot be delivered."""

    def __init__(self, *, transport: str, reason: str) -> None:
        super().__init__(f"{transport} delivery failed: {reason}")
        self.transport = transport
        self.reason = reason


class NotificationSenderPort(Protocol):
    """Notification transport contract (email, SMS, log, ...)."""

    def send(self, destination: str, message: str) -> None:
        """Deliver message to destination or raise on delivery failure."""
