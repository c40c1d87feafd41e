"""Chat commands (".tagihan", ".cancel", ...)."""

from visitbot.conversation.commands.base import Command
from visitbot.conversation.commands.cancel import CancelCommand
from visitbot.conversation.commands.visits import (
    BillingCommand,
    CanvasingCommand,
    InformationalCommand,
    MonitoringCommand,
    SurveyCommand,
    VisitCommand,
)

__all__ = [
    "BillingCommand",
    "CancelCommand",
    "CanvasingCommand",
    "Command",
    "InformationalCommand",
    "MonitoringCommand",
    "SurveyCommand",
    "VisitCommand",
]
