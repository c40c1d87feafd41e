"""WhatsApp adapter for a self-hosted multi-device gateway.

Handles:
- POST /webhook  → gateway events (text and image messages, delivery acks)

Sends messages through the gateway's REST API (/send/message, /send/image,
/send/file) with Basic auth and an X-Device-Id header.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any

import httpx
from fastapi import APIRouter, Request
from pydantic import ValidationError

from visitbot.config import WhatsAppSettings
from visitbot.schemas.messages import InboundMessage, WebhookEvent

logger = logging.getLogger(__name__)

whatsapp_router = APIRouter(tags=["whatsapp"])

RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})

# Strong references so dispatch tasks are not garbage-collected mid-flight.
_background_tasks: set[asyncio.Task[Any]] = set()


# ── Outbound ─────────────────────────────────────────────────────────


class WhatsAppGateway:
    """HTTP client for the WhatsApp gateway.

    Every send method returns True on success and False once all attempts
    are used up; delivery failures are logged, never raised.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        device_id: str = "",
        timeout: float = 15.0,
        max_attempts: int = 3,
        backoff_seconds: float = 2.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._device_id = device_id
        self._timeout = timeout
        self._max_attempts = max(1, max_attempts)
        self._backoff_seconds = backoff_seconds

    @classmethod
    def from_settings(cls, wa: WhatsAppSettings) -> WhatsAppGateway:
        return cls(
            base_url=wa.whatsapp_gateway_url,
            token=wa.whatsapp_gateway_token,
            device_id=wa.whatsapp_device_id,
            timeout=wa.whatsapp_timeout,
            max_attempts=wa.whatsapp_max_attempts,
            backoff_seconds=wa.whatsapp_backoff_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._base_url)

    def _auth_headers(self) -> dict[str, str]:
        """Build Authorization and device headers for gateway calls."""
        headers: dict[str, str] = {}
        if self._token:
            encoded = base64.b64encode(self._token.encode()).decode()
            headers["Authorization"] = f"Basic {encoded}"
        if self._device_id:
            headers["X-Device-Id"] = self._device_id
        return headers

    async def send_text(self, to: str, text: str, reply_to: str | None = None) -> bool:
        """Send a plain text message.

        Args:
            to: Recipient JID (officer or group).
            text: Message body.
            reply_to: Optional message id to quote.
        """
        payload: dict[str, Any] = {"phone": to, "message": text}
        if reply_to:
            payload["reply_message_id"] = reply_to
        return await self._post("/send/message", to, json=payload)

    async def send_image(self, to: str, image_url: str, caption: str = "", compress: bool = True) -> bool:
        """Send an image the gateway downloads from ``image_url``."""
        data = {
            "phone": to,
            "caption": caption,
            "image_url": image_url,
            "compress": str(compress).lower(),
        }
        return await self._post("/send/image", to, data=data)

    async def send_document(self, to: str, content: bytes, filename: str, caption: str = "") -> bool:
        """Upload a file (PDF, spreadsheet) as a document message."""
        data = {"phone": to, "caption": caption}
        files = {"file": (filename, content, "application/octet-stream")}
        return await self._post("/send/file", to, data=data, files=files)

    async def _post(self, path: str, to: str, **kwargs: Any) -> bool:
        if not self.is_configured:
            logger.warning("WhatsApp gateway not configured, dropping message to %s", to)
            return False

        url = f"{self._base_url}{path}"
        for attempt in range(1, self._max_attempts + 1):
            try:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.post(url, headers=self._auth_headers(), **kwargs)
                if resp.status_code in RETRYABLE_STATUS:
                    logger.warning(
                        "Gateway %s returned %s for %s (attempt %d/%d)",
                        path, resp.status_code, to, attempt, self._max_attempts,
                    )
                else:
                    resp.raise_for_status()
                    return True
            except httpx.TransportError:
                logger.warning(
                    "Gateway %s unreachable for %s (attempt %d/%d)",
                    path, to, attempt, self._max_attempts, exc_info=True,
                )
            except httpx.HTTPStatusError:
                logger.exception("Gateway %s rejected message to %s", path, to)
                return False

            if attempt < self._max_attempts:
                await asyncio.sleep(self._backoff_seconds * 2 ** (attempt - 1))

        logger.error("Giving up on %s to %s after %d attempts", path, to, self._max_attempts)
        return False


# ── Webhook endpoint ─────────────────────────────────────────────────


@whatsapp_router.post("/webhook")
async def receive_webhook(request: Request) -> dict[str, str]:
    """Receive gateway events (POST).

    Messages are dispatched in a background task so the gateway gets its
    200 immediately.
    """
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        return {"status": "not_configured"}

    try:
        event = WebhookEvent.model_validate(await request.json())
    except (ValidationError, ValueError):
        logger.warning("Malformed webhook body ignored")
        return {"status": "invalid"}

    if not event.is_message or event.payload is None:
        logger.debug("Ignoring gateway event %s", event.event)
        return {"status": "ignored"}

    message = InboundMessage.from_webhook(event.payload)
    logger.info(
        "Message %s from %s in %s: %r",
        message.message_id, message.sender, message.chat_id, message.text[:80],
    )

    task = asyncio.create_task(dispatcher.dispatch(message))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return {"status": "ok"}
