"""Command router: prefix parsing, trigger lookup, duplicate-delivery guard.

The gateway may deliver the same message twice (webhook retries). While a
message id is being handled, further deliveries of it are dropped with
ALREADY_PROCESSING. The check and the insert happen with no await in
between, so on one event loop exactly one delivery wins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from visitbot.models.enums import DispatchOutcome

if TYPE_CHECKING:
    from visitbot.conversation.commands.base import Command
    from visitbot.conversation.registry import HandlerRegistry
    from visitbot.schemas.messages import InboundMessage

logger = logging.getLogger(__name__)


class CommandRouter:
    """Maps ``<prefix><trigger> <argument>`` messages to commands."""

    def __init__(self, commands: HandlerRegistry[str, Command], prefix: str = ".") -> None:
        self._commands = commands
        self._prefix = prefix
        self._in_flight: set[str] = set()

    def parse(self, text: str) -> tuple[Command, str] | None:
        """Split a message into (command, argument), or None if it is not a known command."""
        text = text.strip()
        if not text.startswith(self._prefix):
            return None
        head, _, argument = text[len(self._prefix):].partition(" ")
        command = self._commands.get(head.strip().lower())
        if command is None:
            return None
        return command, argument.strip()

    def match(self, message: InboundMessage) -> Command | None:
        parsed = self.parse(message.text)
        return parsed[0] if parsed else None

    async def dispatch(self, message: InboundMessage) -> DispatchOutcome:
        message_id = message.message_id
        if message_id:
            if message_id in self._in_flight:
                logger.warning("Message %s already being processed, skipping", message_id)
                return DispatchOutcome.ALREADY_PROCESSING
            self._in_flight.add(message_id)

        try:
            parsed = self.parse(message.text)
            if parsed is None:
                logger.debug("No command in message %s from %s", message_id, message.sender)
                return DispatchOutcome.NO_MATCH

            command, argument = parsed
            logger.info("Running %r for %s", command, message.sender)
            try:
                await command.execute(message, argument)
            except Exception:
                logger.exception("Command %r failed for message %s", command, message_id)
                return DispatchOutcome.FAILED
            return DispatchOutcome.HANDLED
        finally:
            if message_id:
                self._in_flight.discard(message_id)
