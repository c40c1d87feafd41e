"""State handlers, one per ConversationState."""

from visitbot.conversation.handlers.base import FieldHandler, StateHandler
from visitbot.conversation.handlers.completed import CompletedHandler
from visitbot.conversation.handlers.fields import (
    AddressHandler,
    AppointmentHandler,
    BusinessConditionHandler,
    CaptionHandler,
    InterestHandler,
    LimitHandler,
    NameHandler,
    ReminderHandler,
    SpkHandler,
)
from visitbot.conversation.handlers.register import RegisterHandler

__all__ = [
    "AddressHandler",
    "AppointmentHandler",
    "BusinessConditionHandler",
    "CaptionHandler",
    "CompletedHandler",
    "FieldHandler",
    "InterestHandler",
    "LimitHandler",
    "NameHandler",
    "RegisterHandler",
    "ReminderHandler",
    "SpkHandler",
    "StateHandler",
]
