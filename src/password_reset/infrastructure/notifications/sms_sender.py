"""HTTP SMS gateway notification sender."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from password_reset.application.ports.notification_sender_port import (
    NotificationDeliveryError,
    NotificationSenderPort,
)
from password_reset.infrastructure.logging import mask_destination

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmsHttpResponse:
    """Normalized HTTP response data returned by transport implementations."""

    status_code: int
    body_bytes: bytes


class SmsHttpTransportPort(Protocol):
    """Transport protocol used by the SMS gateway sender."""

    def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
        timeout_seconds: float,
    ) -> SmsHttpResponse:
        """Execute one HTTP request and return normalized response data."""


class UrllibSmsHttpTransport:
    """urllib-based blocking transport for SMS gateway calls."""

    def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
        timeout_seconds: float,
    ) -> SmsHttpResponse:
        request = Request(url=url, data=body, headers=headers, method=method)
        try:
            with urlopen(request, timeout=timeout_seconds) as response:
                status_code = int(response.getcode())
                payload = response.read()
                return SmsHttpResponse(status_code=status_code, body_bytes=payload)
        except HTTPError as error:
            payload = error.read()
            return SmsHttpResponse(status_code=int(error.code), body_bytes=payload)
        except URLError as error:
            raise NotificationDeliveryError(
                transport="sms",
                reason=f"transport connection failure: {error}",
            ) from error


class HttpSmsNotificationSender(NotificationSenderPort):
    """Deliver messages by POSTing JSON ``{"to", "message"}`` to an SMS gateway."""

    def __init__(
        self,
        *,
        gateway_url: str,
        api_token: str | None = None,
        transport: SmsHttpTransportPort | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._gateway_url = gateway_url
        self._api_token = api_token
        self._transport = transport or UrllibSmsHttpTransport()
        self._timeout_seconds = timeout_seconds

    def send(self, destination: str, message: str) -> None:
        headers = {"Content-Type": "application/json"}
        if self._api_token is not None:
            headers["Authorization"] = f"Bearer {self._api_token}"
        body = json.dumps({"to": destination, "message": message}, ensure_ascii=False).encode(
            "utf-8"
        )

        response = self._transport.request(
            method="POST",
            url=self._gateway_url,
            headers=headers,
            body=body,
            timeout_seconds=self._timeout_seconds,
        )
        if not 200 <= response.status_code < 300:
            logger.warning(
                "sms_send_failed destination=%s status=%s",
                mask_destination(destination),
                response.status_code,
            )
            raise NotificationDeliveryError(
                transport="sms",
                reason=f"gateway returned status {response.status_code}",
            )

        logger.info(
            "sms_sent destination=%s status=%s",
            mask_destination(destination),
            response.status_code,
        )
