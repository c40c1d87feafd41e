"""Command base class.

A command is triggered by a prefixed first word, e.g. ".tagihan" or
".cancel". The router strips the prefix and trigger and passes the rest
of the text as ``argument``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from visitbot.schemas.messages import InboundMessage


class Command:
    """One chat command."""

    trigger: ClassVar[str]
    aliases: ClassVar[tuple[str, ...]] = ()

    async def execute(self, message: InboundMessage, argument: str) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} trigger={self.trigger}>"
