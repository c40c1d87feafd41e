"""Startup-built lookup tables for commands and state handlers.

Both registries are filled once from a literal list in build_dispatcher
and frozen; registering the same key twice is a startup error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Generic, TypeVar

from visitbot.exceptions import DuplicateRegistrationError, VisitBotError
from visitbot.models.enums import ConversationState

if TYPE_CHECKING:
    from visitbot.conversation.commands.base import Command
    from visitbot.conversation.handlers.base import StateHandler

K = TypeVar("K")
V = TypeVar("V")


class HandlerRegistry(Generic[K, V]):
    """A dict that refuses duplicate keys and, once frozen, any new keys."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: dict[K, V] = {}
        self._frozen = False

    def register(self, key: K, handler: V) -> None:
        if self._frozen:
            msg = f"{self.name} registry is frozen"
            raise VisitBotError(msg)
        if key in self._handlers:
            raise DuplicateRegistrationError(self.name, key)
        self._handlers[key] = handler

    def freeze(self) -> None:
        self._frozen = True

    def get(self, key: K) -> V | None:
        return self._handlers.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def __iter__(self) -> Iterator[K]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


def build_state_registry(handlers: Iterable[StateHandler]) -> HandlerRegistry[ConversationState, StateHandler]:
    """Register each handler under its ``state``. Every state must be covered."""
    registry: HandlerRegistry[ConversationState, StateHandler] = HandlerRegistry("state handler")
    for handler in handlers:
        registry.register(handler.state, handler)

    missing = [state.value for state in ConversationState if state not in registry]
    if missing:
        msg = f"No state handler for: {', '.join(missing)}"
        raise VisitBotError(msg)

    registry.freeze()
    return registry


def build_command_registry(commands: Iterable[Command]) -> HandlerRegistry[str, Command]:
    """Register each command under its trigger and aliases (lower case)."""
    registry: HandlerRegistry[str, Command] = HandlerRegistry("command")
    for command in commands:
        for trigger in (command.trigger, *command.aliases):
            registry.register(trigger.lower(), command)
    registry.freeze()
    return registry
