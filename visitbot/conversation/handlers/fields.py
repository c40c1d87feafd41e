"""Handlers for the single-field states (ADD_*)."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from visitbot.conversation.handlers.base import FieldHandler
from visitbot.conversation.prompts import replies
from visitbot.exceptions import BillNotFoundError, InvalidInputError
from visitbot.models.enums import ConversationState, InputOutcome
from visitbot.parsers import InvalidDateError, parse_date, parse_first_number

if TYPE_CHECKING:
    from visitbot.channels.whatsapp import WhatsAppGateway
    from visitbot.conversation.service import SessionService
    from visitbot.schemas.messages import InboundMessage

logger = logging.getLogger(__name__)

SKIP_WORD = "kosong"

MIN_ADDRESS_LENGTH = 9
MAX_ADDRESS_LENGTH = 500

INTEREST_LEVELS: dict[str, str] = {
    "1": "Sangat tertarik",
    "2": "Tertarik",
    "3": "Belum Tertarik",
    "4": "Tidak Tertarik",
}


class SpkHandler(FieldHandler):
    state = ConversationState.ADD_SPK
    field = "spk"

    def parse(self, text: str) -> str | None:
        parts = text.split()
        return parts[0] if parts else None

    async def handle_input(self, message: InboundMessage) -> InputOutcome:
        try:
            return await super().handle_input(message)
        except BillNotFoundError:
            return await self.reject(message, replies.BILL_NOT_FOUND)


class CaptionHandler(FieldHandler):
    state = ConversationState.ADD_CAPTION
    field = "note"

    def parse(self, text: str) -> str:
        if not text.strip():
            raise InvalidInputError(replies.EMPTY_CAPTION)
        return text.strip()


class LimitHandler(FieldHandler):
    """Requested plafond for a survey, e.g. "5,7jt"."""

    state = ConversationState.ADD_LIMIT
    field = "plafond"

    def parse(self, text: str) -> int | None:
        return parse_first_number(text)


class AppointmentHandler(FieldHandler):
    """Promised payment amount. Amounts below the minimum are not kept."""

    state = ConversationState.ADD_APPOINTMENT
    field = "appointment"

    def __init__(self, sessions: SessionService, gateway: WhatsAppGateway, minimum: int = 3000) -> None:
        super().__init__(sessions, gateway)
        self._minimum = minimum

    def parse(self, text: str) -> int | None:
        amount = parse_first_number(text)
        if amount is None:
            raise InvalidInputError(replies.APPOINTMENT_NOT_FOUND)
        if amount < self._minimum:
            logger.debug("Appointment %d below minimum %d, discarded", amount, self._minimum)
            return None
        return amount


class ReminderHandler(FieldHandler):
    """Reminder date; "kosong" skips it by storing yesterday, which never fires."""

    state = ConversationState.ADD_REMINDER
    field = "reminder_date"

    def __init__(self, sessions: SessionService, gateway: WhatsAppGateway, timezone: str = "Asia/Jakarta") -> None:
        super().__init__(sessions, gateway)
        self._tz = ZoneInfo(timezone)

    def today(self) -> date:
        return datetime.now(self._tz).date()

    def parse(self, text: str) -> date:
        if text.strip().lower() == SKIP_WORD:
            return self.today() - timedelta(days=1)
        try:
            reminder = parse_date(text)
        except InvalidDateError as exc:
            raise InvalidInputError(replies.REMINDER_INVALID_DATE) from exc
        except ValueError as exc:
            raise InvalidInputError(replies.REMINDER_BAD_FORMAT) from exc
        if reminder < self.today():
            raise InvalidInputError(replies.REMINDER_IN_PAST)
        return reminder


class NameHandler(FieldHandler):
    state = ConversationState.ADD_NAME
    field = "name"

    def parse(self, text: str) -> str:
        if not text.strip():
            raise InvalidInputError(replies.EMPTY_NAME)
        return text.strip()


class InterestHandler(FieldHandler):
    """Prospect interest, answered with 1-4."""

    state = ConversationState.ADD_INTERESTED
    field = "interest_level"

    def parse(self, text: str) -> str:
        level = INTEREST_LEVELS.get(text.strip())
        if level is None:
            raise InvalidInputError(replies.INTEREST_NOT_FOUND)
        return level


class AddressHandler(FieldHandler):
    state = ConversationState.ADD_ADDRESS
    field = "address"

    def parse(self, text: str) -> str:
        address = text.strip()
        if not address:
            raise InvalidInputError(replies.ADDRESS_EMPTY)
        if len(address) < MIN_ADDRESS_LENGTH:
            raise InvalidInputError(replies.ADDRESS_TOO_SHORT.format(minimum=MIN_ADDRESS_LENGTH))
        if len(address) > MAX_ADDRESS_LENGTH:
            raise InvalidInputError(replies.ADDRESS_TOO_LONG.format(maximum=MAX_ADDRESS_LENGTH))
        return address


class BusinessConditionHandler(FieldHandler):
    state = ConversationState.ADD_USAHA
    field = "business_condition"

    def parse(self, text: str) -> str:
        value = text.strip()
        if not value:
            raise InvalidInputError(replies.EMPTY_USAHA)
        if value.lower() == SKIP_WORD:
            return "-"
        return value
