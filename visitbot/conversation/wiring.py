"""Build the conversation object graph.

Every command and state handler is listed here explicitly; there is no
discovery. Called once from the FastAPI lifespan.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from visitbot.conversation.commands import (
    BillingCommand,
    CancelCommand,
    CanvasingCommand,
    InformationalCommand,
    MonitoringCommand,
    SurveyCommand,
)
from visitbot.conversation.dispatcher import ConversationDispatcher
from visitbot.conversation.handlers import (
    AddressHandler,
    AppointmentHandler,
    BusinessConditionHandler,
    CaptionHandler,
    CompletedHandler,
    InterestHandler,
    LimitHandler,
    NameHandler,
    RegisterHandler,
    ReminderHandler,
    SpkHandler,
)
from visitbot.conversation.notifier import StateNotifier
from visitbot.conversation.registry import build_command_registry, build_state_registry
from visitbot.conversation.router import CommandRouter
from visitbot.conversation.service import SessionService

if TYPE_CHECKING:
    from visitbot.channels.whatsapp import WhatsAppGateway
    from visitbot.conversation.session_store import SessionStore
    from visitbot.repositories.bills import BillRepository
    from visitbot.repositories.users import UserRepository
    from visitbot.repositories.visits import VisitRepository


def build_dispatcher(
    *,
    store: SessionStore,
    gateway: WhatsAppGateway,
    bills: BillRepository,
    users: UserRepository,
    visits: VisitRepository,
    prefix: str = ".",
    minimum_appointment: int = 3000,
    timezone: str = "Asia/Jakarta",
    serialize_per_user: bool = False,
) -> ConversationDispatcher:
    """Wire notifier, session service, handlers, commands, router and dispatcher."""
    notifier = StateNotifier(gateway)
    sessions = SessionService(store, bills, users, notifier)

    completed = CompletedHandler(sessions, gateway, visits)
    notifier.set_finalizer(completed.finalize)

    states = build_state_registry([
        RegisterHandler(sessions, gateway, users),
        SpkHandler(sessions, gateway),
        CaptionHandler(sessions, gateway),
        LimitHandler(sessions, gateway),
        AppointmentHandler(sessions, gateway, minimum=minimum_appointment),
        ReminderHandler(sessions, gateway, timezone=timezone),
        NameHandler(sessions, gateway),
        InterestHandler(sessions, gateway),
        AddressHandler(sessions, gateway),
        BusinessConditionHandler(sessions, gateway),
        completed,
    ])

    visit_options = {"minimum_appointment": minimum_appointment, "timezone": timezone}
    commands = build_command_registry([
        BillingCommand(sessions, bills, gateway, **visit_options),
        MonitoringCommand(sessions, bills, gateway, **visit_options),
        CanvasingCommand(sessions, bills, gateway, **visit_options),
        SurveyCommand(sessions, bills, gateway, **visit_options),
        InformationalCommand(sessions, bills, gateway, **visit_options),
        CancelCommand(sessions, gateway),
    ])

    router = CommandRouter(commands, prefix=prefix)
    return ConversationDispatcher(store, states, router, serialize_per_user=serialize_per_user)
