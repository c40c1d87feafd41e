"""``.cancel``: abandon the current visit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from visitbot.conversation.commands.base import Command
from visitbot.conversation.prompts import replies

if TYPE_CHECKING:
    from visitbot.channels.whatsapp import WhatsAppGateway
    from visitbot.conversation.service import SessionService
    from visitbot.schemas.messages import InboundMessage

logger = logging.getLogger(__name__)


class CancelCommand(Command):
    trigger = "cancel"
    aliases = ("batal",)

    def __init__(self, sessions: SessionService, gateway: WhatsAppGateway) -> None:
        self._sessions = sessions
        self._gateway = gateway

    async def execute(self, message: InboundMessage, argument: str) -> None:
        try:
            cancelled = await self._sessions.cancel(message.sender)
        except Exception:
            logger.exception("Failed to cancel session for %s", message.sender)
            await self._gateway.send_text(message.chat_id, replies.GENERAL_ERROR)
            return
        reply = replies.CANCELLED if cancelled else replies.NOTHING_TO_CANCEL
        await self._gateway.send_text(message.chat_id, reply)
