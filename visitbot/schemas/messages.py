"""Inbound message schemas.

``WebhookEvent`` mirrors the JSON the WhatsApp gateway POSTs to us;
``InboundMessage`` is the normalized form the conversation layer works with.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

GROUP_SUFFIX = "@g.us"


class WebhookImage(BaseModel):
    """Image attachment as reported by the gateway."""

    model_config = ConfigDict(extra="ignore")

    media_path: str | None = None
    mime_type: str | None = None
    caption: str | None = None


class WebhookMessage(BaseModel):
    """The ``payload`` part of a gateway event."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = ""
    chat_id: str = ""
    sender: str = Field(default="", alias="from")
    from_lid: str | None = None
    from_name: str | None = None
    timestamp: str | None = None
    body: str | None = None
    replied_to_id: str | None = None
    image: WebhookImage | None = None


class WebhookEvent(BaseModel):
    """Top-level gateway webhook body."""

    model_config = ConfigDict(extra="ignore")

    device_id: str | None = None
    event: str | None = None
    payload: WebhookMessage | None = None

    @property
    def is_message(self) -> bool:
        """Delivery receipts and other non-message events carry no text to handle."""
        if self.payload is None:
            return False
        return self.event in (None, "", "message")


class InboundMessage(BaseModel):
    """A chat message addressed to the bot."""

    model_config = ConfigDict(frozen=True)

    message_id: str
    sender: str  # officer JID, session key
    chat_id: str  # where the message was posted (DM or group)
    text: str = ""
    sender_name: str | None = None
    image_url: str | None = None

    @property
    def is_group(self) -> bool:
        return self.chat_id.endswith(GROUP_SUFFIX)

    @classmethod
    def from_webhook(cls, message: WebhookMessage) -> InboundMessage:
        """Normalize a gateway payload.

        For image messages the caption is the text, so a command can be
        sent together with a photo of the visit.
        """
        text = message.body or ""
        image_url = None
        if message.image is not None:
            image_url = message.image.media_path
            if not text:
                text = message.image.caption or ""
        sender = message.sender or message.chat_id
        return cls(
            message_id=message.id,
            sender=sender,
            chat_id=message.chat_id or sender,
            text=text.strip(),
            sender_name=message.from_name,
            image_url=image_url,
        )
