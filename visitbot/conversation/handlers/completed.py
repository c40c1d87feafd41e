"""COMPLETED: save the finished visit and confirm it to the officer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from visitbot.conversation.handlers.base import StateHandler
from visitbot.conversation.prompts import VISIT_TYPE_LABELS, build_success_message, replies
from visitbot.models.enums import ConversationState, InputOutcome

if TYPE_CHECKING:
    from visitbot.channels.whatsapp import WhatsAppGateway
    from visitbot.conversation.service import SessionService
    from visitbot.conversation.session_store import ConversationSession
    from visitbot.repositories.visits import VisitRepository
    from visitbot.schemas.messages import InboundMessage

logger = logging.getLogger(__name__)


class CompletedHandler(StateHandler):
    """Persists the visit.

    ``finalize`` runs as soon as a session reaches COMPLETED. If the save
    fails the session stays in COMPLETED, and any later message from the
    officer lands in ``handle_input`` and retries it.
    """

    state = ConversationState.COMPLETED

    def __init__(self, sessions: SessionService, gateway: WhatsAppGateway, visits: VisitRepository) -> None:
        super().__init__(sessions, gateway)
        self._visits = visits

    async def finalize(self, session: ConversationSession) -> bool:
        """Save, drop the session, and send the summary. Returns False when the save failed."""
        visit = session.visit
        try:
            await self._visits.save(visit)
        except Exception:
            logger.exception("Failed to save %s visit for %s", visit.visit_type.value, visit.user_id)
            await self._gateway.send_text(
                visit.user_id,
                replies.SAVE_FAILED.format(visit_type=VISIT_TYPE_LABELS[visit.visit_type]),
            )
            return False

        await self._sessions.finish(visit.user_id)
        await self._gateway.send_text(visit.user_id, build_success_message(visit))
        return True

    async def handle_input(self, message: InboundMessage) -> InputOutcome:
        session = await self._sessions.get(message.sender)
        if session is None or session.state != ConversationState.COMPLETED:
            return InputOutcome.IGNORED
        saved = await self.finalize(session)
        return InputOutcome.ACCEPTED if saved else InputOutcome.REJECTED
