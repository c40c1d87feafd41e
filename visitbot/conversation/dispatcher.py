"""Conversation dispatcher: decides who handles each inbound message.

Routing:
- No active session → command router.
- Active session, group chat → ignored (only DMs drive a conversation).
- Active session, registered command (e.g. .cancel) → command router.
- Active session, anything else → the handler for the session's state.

A state handler that raises leaves the session as it was and the officer
gets a generic apology.

With ``serialize_per_user`` enabled, state handling for one officer runs
one message at a time behind a per-officer asyncio.Lock.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import TYPE_CHECKING

from visitbot.models.enums import DispatchOutcome

if TYPE_CHECKING:
    from visitbot.conversation.handlers.base import StateHandler
    from visitbot.conversation.registry import HandlerRegistry
    from visitbot.conversation.router import CommandRouter
    from visitbot.conversation.session_store import SessionStore
    from visitbot.models.enums import ConversationState
    from visitbot.schemas.messages import InboundMessage

logger = logging.getLogger(__name__)


class ConversationDispatcher:
    """Entry point for every normalized inbound message."""

    def __init__(
        self,
        store: SessionStore,
        states: HandlerRegistry[ConversationState, StateHandler],
        router: CommandRouter,
        serialize_per_user: bool = False,
    ) -> None:
        self._store = store
        self._states = states
        self._router = router
        self._serialize_per_user = serialize_per_user
        # A lock lives only while some dispatch for that officer holds or awaits it.
        self._user_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    async def dispatch(self, message: InboundMessage) -> DispatchOutcome:
        """Route one message. Never raises; failures come back as FAILED."""
        try:
            return await self._route(message)
        except Exception:
            logger.exception("Dispatch failed for message %s from %s", message.message_id, message.sender)
            return DispatchOutcome.FAILED

    async def _route(self, message: InboundMessage) -> DispatchOutcome:
        if not await self._store.is_active(message.sender):
            return await self._router.dispatch(message)

        if message.is_group:
            logger.debug("Ignoring group message %s from %s with active session", message.message_id, message.sender)
            return DispatchOutcome.IGNORED_GROUP

        if self._router.match(message) is not None:
            return await self._router.dispatch(message)

        if self._serialize_per_user:
            async with self._lock_for(message.sender):
                return await self._handle_state(message)
        return await self._handle_state(message)

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._user_locks[user_id] = lock
        return lock

    async def _handle_state(self, message: InboundMessage) -> DispatchOutcome:
        # Re-read: the session may have moved on (or ended) while waiting for the lock.
        session = await self._store.get(message.sender)
        if session is None:
            return await self._router.dispatch(message)

        handler = self._states.get(session.state)
        if handler is None:
            logger.error("No handler for state %s", session.state.value)
            return DispatchOutcome.NO_MATCH

        try:
            outcome = await handler.handle_input(message)
        except Exception:
            logger.exception(
                "State %s failed on message %s from %s",
                session.state.value, message.message_id, message.sender,
            )
            await handler.apologize(message)
            return DispatchOutcome.FAILED

        logger.info(
            "State %s handled message %s from %s: %s",
            session.state.value, message.message_id, message.sender, outcome.value,
        )
        return DispatchOutcome.STATE_HANDLED
