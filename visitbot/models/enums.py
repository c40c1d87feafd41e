"""Domain enums used across SQLAlchemy models, Pydantic schemas and the conversation layer.

All enums use str mixin for JSON serialization.
"""

from __future__ import annotations

from enum import Enum


class VisitType(str, Enum):
    """Kind of field visit an officer reports."""

    BILLING = "billing"  # collection visit on an overdue loan
    MONITORING = "monitoring"
    CANVASING = "canvasing"  # prospecting a new customer
    SURVEY = "survey"
    INFORMATIONAL = "informational"  # payment promise only


class ConversationState(str, Enum):
    """Which field the bot is currently asking the officer for."""

    REGISTER = "register"
    ADD_SPK = "add_spk"
    ADD_CAPTION = "add_caption"
    ADD_LIMIT = "add_limit"
    ADD_APPOINTMENT = "add_appointment"
    ADD_REMINDER = "add_reminder"
    ADD_NAME = "add_name"
    ADD_INTERESTED = "add_interested"
    ADD_ADDRESS = "add_address"
    ADD_USAHA = "add_usaha"
    COMPLETED = "completed"


class UserRole(str, Enum):
    """Officer permission level."""

    MEMBER = "member"
    ADMIN = "admin"


class DispatchOutcome(str, Enum):
    """Result of routing one inbound message."""

    HANDLED = "handled"
    STATE_HANDLED = "state_handled"
    NO_MATCH = "no_match"
    ALREADY_PROCESSING = "already_processing"
    IGNORED_GROUP = "ignored_group"
    FAILED = "failed"


class InputOutcome(str, Enum):
    """What a state handler did with the officer's answer."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    IGNORED = "ignored"
