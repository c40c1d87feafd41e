"""Base classes for state handlers.

A state handler receives the officer's answer while their session is in
one particular state. Most states just validate one field, so
FieldHandler does the common part: parse, reply with the validation
error, or hand the value to SessionService.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from visitbot.conversation.prompts import replies
from visitbot.exceptions import InvalidInputError
from visitbot.models.enums import ConversationState, InputOutcome

if TYPE_CHECKING:
    from visitbot.channels.whatsapp import WhatsAppGateway
    from visitbot.conversation.service import SessionService
    from visitbot.schemas.messages import InboundMessage

logger = logging.getLogger(__name__)


class StateHandler:
    """Handles input for one ConversationState."""

    state: ClassVar[ConversationState]

    def __init__(self, sessions: SessionService, gateway: WhatsAppGateway) -> None:
        self._sessions = sessions
        self._gateway = gateway

    async def handle_input(self, message: InboundMessage) -> InputOutcome:
        raise NotImplementedError

    async def reject(self, message: InboundMessage, reply: str) -> InputOutcome:
        """Send a validation error to the officer; the session is left as is."""
        logger.info("%s rejected input from %s: %s", self.state.value, message.sender, reply)
        await self._gateway.send_text(message.sender, reply)
        return InputOutcome.REJECTED

    async def apologize(self, message: InboundMessage) -> None:
        """Tell the officer their answer could not be processed."""
        await self._gateway.send_text(message.sender, replies.GENERAL_ERROR)


class FieldHandler(StateHandler):
    """Fills a single PartialVisit field from the officer's answer."""

    field: ClassVar[str]

    def parse(self, text: str) -> Any:
        """Turn the answer into the field value.

        Return None to store nothing and ask again; raise InvalidInputError
        to reply with a specific message.
        """
        raise NotImplementedError

    async def handle_input(self, message: InboundMessage) -> InputOutcome:
        try:
            value = self.parse(message.text)
        except InvalidInputError as exc:
            return await self.reject(message, exc.reply)

        if value is None:
            await self._sessions.update(message.sender)
            return InputOutcome.IGNORED

        changes: dict[str, Any] = {self.field: value}
        if message.image_url:
            changes["image_url"] = message.image_url
        await self._sessions.update(message.sender, **changes)
        return InputOutcome.ACCEPTED
