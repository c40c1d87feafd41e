"""REGISTER: first-time officers introduce themselves."""

from __future__ import annotations

from typing import TYPE_CHECKING

from visitbot.conversation.handlers.base import StateHandler
from visitbot.conversation.prompts import replies
from visitbot.models.enums import ConversationState, InputOutcome

if TYPE_CHECKING:
    from visitbot.channels.whatsapp import WhatsAppGateway
    from visitbot.conversation.service import SessionService
    from visitbot.repositories.users import UserRepository
    from visitbot.schemas.messages import InboundMessage


class RegisterHandler(StateHandler):
    """Stores the officer label (upper case, as on the bills) and resumes the visit."""

    state = ConversationState.REGISTER

    def __init__(self, sessions: SessionService, gateway: WhatsAppGateway, users: UserRepository) -> None:
        super().__init__(sessions, gateway)
        self._users = users

    async def handle_input(self, message: InboundMessage) -> InputOutcome:
        label = message.text.strip().upper()
        if not label:
            return await self.reject(message, replies.EMPTY_REGISTER)

        await self._users.register(message.sender, label)
        await self._sessions.refresh(message.sender)
        return InputOutcome.ACCEPTED
