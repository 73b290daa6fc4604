"""Outbound email via the Resend HTTP API.

POST {resend_api_url} with from, to[], subject, html, optional text and
reply_to; the response body carries the provider message id.
"""

from contextlib import asynccontextmanager
from typing import Any

import httpx

from villagetech.application.dtos.notification import EmailMessage
from villagetech.infrastructure.exceptions import EmailDeliveryError, EmailNotConfiguredError
from villagetech.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ResendEmailTransport:
    """IEmailTransport backed by Resend."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = "https://api.resend.com/emails",
        default_from: str = "noreply@villagetech.com",
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._default_from = default_from
        self._timeout = timeout
        self._shared_http = http_client

    @asynccontextmanager
    async def _http_cm(self):
        """Yield shared HTTP client or a short-lived one."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient() as client:
            yield client

    def _payload(self, message: EmailMessage) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": message.from_email or self._default_from,
            "to": list(message.to),
            "subject": message.subject,
            "html": message.html_body,
        }
        if message.text_body:
            payload["text"] = message.text_body
        if message.reply_to:
            payload["reply_to"] = message.reply_to
        return payload

    async def send(self, message: EmailMessage) -> str | None:
        """Send message; return the Resend message id. Raises EmailDeliveryError."""
        try:
            async with self._http_cm() as client:
                response = await client.post(
                    self._api_url,
                    json=self._payload(message),
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    timeout=self._timeout,
                )
        except httpx.HTTPError as e:
            logger.error("Resend request failed: %s", e)
            raise EmailDeliveryError(f"Email provider unreachable: {e!s}") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                reason = body.get("message") or response.reason_phrase
            else:
                reason = response.text or response.reason_phrase
            logger.error("Resend rejected email (status=%d): %s", response.status_code, reason)
            raise EmailDeliveryError(str(reason), status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = None
        message_id = body.get("id") if isinstance(body, dict) else None
        logger.info("Email sent via Resend: id=%s recipients=%d", message_id, len(message.to))
        return message_id


class UnconfiguredEmailTransport:
    """IEmailTransport used when no provider is configured: logs and reports failure."""

    async def send(self, message: EmailMessage) -> str | None:
        logger.warning(
            "Email service not configured; not sending %r to %d recipients",
            message.subject[:80],
            len(message.to),
        )
        raise EmailNotConfiguredError()
