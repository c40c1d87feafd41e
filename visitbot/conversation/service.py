"""Session transitions: start, update, cancel, finish.

Every change is computed on a copy of the record and written back with a
single ``put`` only after all lookups succeeded, so a failed bill lookup
leaves the stored session exactly as it was.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from visitbot.conversation.session_store import ConversationSession, SessionStore
from visitbot.conversation.states import resolve_state
from visitbot.exceptions import BillNotFoundError, SessionActiveError, SessionNotFoundError
from visitbot.models.enums import ConversationState
from visitbot.schemas.visit import PartialVisit

if TYPE_CHECKING:
    from visitbot.conversation.notifier import StateNotifier
    from visitbot.models.bill import Bill
    from visitbot.repositories.bills import BillRepository
    from visitbot.repositories.users import UserRepository

logger = logging.getLogger(__name__)


def seed_from_bill(visit: PartialVisit, bill: Bill) -> PartialVisit:
    """Fill still-empty customer fields from the bill. Existing values win."""
    return visit.merge({
        "spk": bill.no_spk,
        "name": bill.name,
        "address": bill.address,
        "debit_tray": bill.debit_tray,
        "interest": bill.last_interest,
        "principal": bill.last_principal,
        "plafond": bill.plafond,
        "penalty": bill.penalty,
    })


class SessionService:
    """Owns every write to the session store."""

    def __init__(
        self,
        store: SessionStore,
        bills: BillRepository,
        users: UserRepository,
        notifier: StateNotifier,
    ) -> None:
        self._store = store
        self._bills = bills
        self._users = users
        self._notifier = notifier

    async def is_active(self, user_id: str) -> bool:
        return await self._store.is_active(user_id)

    async def get(self, user_id: str) -> ConversationSession | None:
        return await self._store.get(user_id)

    async def next_state(self, visit: PartialVisit) -> ConversationState:
        """Unregistered officers must register first; otherwise the checklist decides."""
        if not await self._users.is_registered(visit.user_id):
            return ConversationState.REGISTER
        return resolve_state(visit)

    async def start(self, visit: PartialVisit, bill: Bill | None = None) -> ConversationSession:
        """Open a session for a new visit and ask the first question.

        Raises:
            SessionActiveError: The officer already has a session.
        """
        user_id = visit.user_id
        if await self._store.is_active(user_id):
            raise SessionActiveError(user_id)

        if bill is not None:
            visit = seed_from_bill(visit, bill)

        session = ConversationSession(state=await self.next_state(visit), visit=visit)
        await self._store.put(user_id, session)
        logger.info("Session started for %s: %s -> %s", user_id, visit.visit_type.value, session.state.value)

        await self._notifier.notify(session)
        return session

    async def update(self, user_id: str, **changes: Any) -> ConversationSession:
        """Fill empty fields, re-resolve the state, store, and notify.

        Passing no changes simply re-asks the current question. A newly
        supplied ``spk`` is looked up and seeds the customer fields.

        Raises:
            SessionNotFoundError: No session for ``user_id``.
            BillNotFoundError: ``spk`` given but unknown; nothing is stored.
        """
        session = await self._store.get(user_id)
        if session is None:
            raise SessionNotFoundError(user_id)

        visit = session.visit
        spk = changes.pop("spk", None)
        if spk and visit.is_missing("spk"):
            bill = await self._bills.find_by_spk(spk)
            if bill is None:
                raise BillNotFoundError(spk)
            visit = seed_from_bill(visit, bill)

        visit = visit.merge(changes)
        previous = session.state
        session = ConversationSession(state=await self.next_state(visit), visit=visit)
        await self._store.put(user_id, session)
        logger.info("Session %s: %s -> %s", user_id, previous.value, session.state.value)

        await self._notifier.notify(session)
        return session

    async def refresh(self, user_id: str) -> ConversationSession:
        """Re-resolve after something outside the record changed (e.g. registration)."""
        return await self.update(user_id)

    async def cancel(self, user_id: str) -> bool:
        """Drop the session. Returns False when there was none."""
        removed = await self._store.remove(user_id)
        if removed is not None:
            logger.info("Session cancelled for %s in state %s", user_id, removed.state.value)
        return removed is not None

    async def finish(self, user_id: str) -> None:
        """Remove a session whose visit has been saved."""
        await self._store.remove(user_id)
        logger.info("Session finished for %s", user_id)
