"""Tell the officer what the conversation needs next.

SessionService calls ``notify`` after every transition, including ones
that leave the state unchanged, which is how a rejected answer gets its
question asked again. COMPLETED has no question; it is handed to the
finalizer (set at startup) which saves the visit.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from visitbot.conversation.prompts import render_prompt
from visitbot.models.enums import ConversationState

if TYPE_CHECKING:
    from visitbot.channels.whatsapp import WhatsAppGateway
    from visitbot.conversation.session_store import ConversationSession

logger = logging.getLogger(__name__)

Finalizer = Callable[["ConversationSession"], Awaitable[None]]


class StateNotifier:
    """Sends the per-state prompt, or finalizes a completed session."""

    def __init__(self, gateway: WhatsAppGateway) -> None:
        self._gateway = gateway
        self._finalize: Finalizer | None = None

    def set_finalizer(self, fn: Finalizer) -> None:
        """Set the coroutine run when a session reaches COMPLETED."""
        self._finalize = fn

    async def notify(self, session: ConversationSession) -> None:
        if session.state == ConversationState.COMPLETED:
            if self._finalize is None:
                logger.error("Session for %s completed but no finalizer is set", session.user_id)
                return
            await self._finalize(session)
            return

        text = render_prompt(session.state, session.visit)
        if text is None:
            logger.warning("No prompt for state %s", session.state.value)
            return
        sent = await self._gateway.send_text(session.user_id, text)
        logger.info("Prompted %s for %s (sent=%s)", session.user_id, session.state.value, sent)
