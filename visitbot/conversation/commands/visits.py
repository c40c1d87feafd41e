"""Commands that open a visit conversation.

    .tagihan <SPK> <note...>      billing visit
    .moni <SPK> <note...>         monitoring visit
    .janji <SPK> <note...>        payment promise only
    .canvasing <note...>          prospecting a new customer
    .survey <note...>             survey of a loan applicant

For billing and payment promises the note is also scanned for a reminder
date and a promised amount, so ".tagihan 1075123 janji bayar 2jt
2026-11-02" can skip two questions.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar
from zoneinfo import ZoneInfo

from visitbot.conversation.commands.base import Command
from visitbot.conversation.prompts import build_group_notice, replies
from visitbot.conversation.states import requires_spk
from visitbot.models.enums import VisitType
from visitbot.parsers import find_date, parse_first_number
from visitbot.schemas.visit import PartialVisit

if TYPE_CHECKING:
    from visitbot.channels.whatsapp import WhatsAppGateway
    from visitbot.conversation.service import SessionService
    from visitbot.repositories.bills import BillRepository
    from visitbot.schemas.messages import InboundMessage

logger = logging.getLogger(__name__)

# Visit types whose command text may already carry a reminder date and amount.
_SCHEDULED_TYPES = frozenset({VisitType.BILLING, VisitType.INFORMATIONAL})


class VisitCommand(Command):
    """Starts a session for ``visit_type``."""

    visit_type: ClassVar[VisitType]

    def __init__(
        self,
        sessions: SessionService,
        bills: BillRepository,
        gateway: WhatsAppGateway,
        minimum_appointment: int = 3000,
        timezone: str = "Asia/Jakarta",
    ) -> None:
        self._sessions = sessions
        self._bills = bills
        self._gateway = gateway
        self._minimum_appointment = minimum_appointment
        self._tz = ZoneInfo(timezone)

    async def _reply(self, message: InboundMessage, text: str) -> None:
        await self._gateway.send_text(message.chat_id, text, reply_to=message.message_id or None)

    async def execute(self, message: InboundMessage, argument: str) -> None:
        existing = await self._sessions.get(message.sender)
        if existing is not None:
            await self._reply(message, replies.ONGOING_SESSION.format(state=existing.state.value))
            return

        try:
            if requires_spk(self.visit_type):
                await self._start_with_bill(message, argument)
            else:
                await self._start_prospect(message, argument)
        except Exception:
            logger.exception("Failed to start %s visit for %s", self.visit_type.value, message.sender)
            await self._reply(message, replies.GENERAL_ERROR)

    async def _start_with_bill(self, message: InboundMessage, argument: str) -> None:
        parts = argument.split(maxsplit=1)
        if not parts:
            await self._reply(message, replies.MISSING_SPK)
            return
        spk = parts[0]
        note = parts[1].strip() if len(parts) > 1 else ""

        bill = await self._bills.find_by_spk(spk)
        if bill is None:
            await self._reply(message, replies.BILL_NOT_FOUND)
            return

        visit = PartialVisit(
            user_id=message.sender,
            visit_type=self.visit_type,
            note=note or None,
            image_url=message.image_url,
        )
        if self.visit_type in _SCHEDULED_TYPES:
            visit = self._with_schedule(visit, note)

        logger.info(
            "Starting %s for %s: spk=%s reminder=%s appointment=%s",
            self.visit_type.value, message.sender, spk, visit.reminder_date, visit.appointment,
        )
        await self._sessions.start(visit, bill)

        if message.is_group:
            await self._gateway.send_text(message.chat_id, build_group_notice(bill))

    async def _start_prospect(self, message: InboundMessage, argument: str) -> None:
        note = argument.strip()
        if not note:
            await self._reply(message, replies.MISSING_NOTE)
            return

        visit = PartialVisit(
            user_id=message.sender,
            visit_type=self.visit_type,
            note=note,
            image_url=message.image_url,
        )
        logger.info("Starting %s for %s", self.visit_type.value, message.sender)
        await self._sessions.start(visit)

    def _with_schedule(self, visit: PartialVisit, note: str) -> PartialVisit:
        """Pick a future reminder date and a large-enough amount out of the note."""
        reminder, remainder = find_date(note)
        if reminder is not None and reminder < datetime.now(self._tz).date():
            reminder = None

        appointment = parse_first_number(remainder)
        if appointment is not None and appointment < self._minimum_appointment:
            logger.debug("Appointment %d below minimum, ignored", appointment)
            appointment = None

        return visit.merge({"reminder_date": reminder, "appointment": appointment})


class BillingCommand(VisitCommand):
    trigger = "tagihan"
    aliases = ("billing",)
    visit_type = VisitType.BILLING


class MonitoringCommand(VisitCommand):
    trigger = "moni"
    aliases = ("monitoring",)
    visit_type = VisitType.MONITORING


class CanvasingCommand(VisitCommand):
    trigger = "canvasing"
    visit_type = VisitType.CANVASING


class SurveyCommand(VisitCommand):
    trigger = "survey"
    visit_type = VisitType.SURVEY


class InformationalCommand(VisitCommand):
    trigger = "janji"
    aliases = ("informational",)
    visit_type = VisitType.INFORMATIONAL
