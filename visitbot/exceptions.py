"""Domain exceptions.

Handlers translate these into Indonesian replies; anything else that
escapes a handler is logged by the router or dispatcher.
"""

from __future__ import annotations


class VisitBotError(Exception):
    """Base class for every error raised by visitbot itself."""


class BillNotFoundError(VisitBotError):
    """No bill row exists for the given SPK number."""

    def __init__(self, spk: str) -> None:
        super().__init__(f"No bill found for SPK {spk!r}")
        self.spk = spk


class SessionNotFoundError(VisitBotError):
    """The officer has no active conversation session."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"No active session for {user_id}")
        self.user_id = user_id


class SessionActiveError(VisitBotError):
    """The officer already has a session and tried to start another."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"Session already active for {user_id}")
        self.user_id = user_id


class DuplicateRegistrationError(VisitBotError):
    """Two handlers were registered under the same key."""

    def __init__(self, registry: str, key: object) -> None:
        super().__init__(f"Duplicate {registry} registration for {key!r}")
        self.registry = registry
        self.key = key


class InvalidInputError(VisitBotError):
    """An officer's answer failed validation.

    ``reply`` is the message sent back to the officer.
    """

    def __init__(self, reply: str) -> None:
        super().__init__(reply)
        self.reply = reply
