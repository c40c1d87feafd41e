"""Next-state resolution for the visit conversation.

The conversation has no fixed transition table. After every answer the
record is checked against REQUIREMENTS, an ordered checklist: the first
row that applies to the visit type and whose field is still missing
decides what to ask for next. When nothing is missing the visit is
COMPLETED.

Registration is not part of the checklist; SessionService checks the
officer registry before consulting it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from visitbot.models.enums import ConversationState, VisitType
from visitbot.schemas.visit import PartialVisit

S = ConversationState
T = VisitType


@dataclass(frozen=True)
class Requirement:
    """One checklist row: ask for ``state`` when the row applies and its field is missing."""

    visit_types: frozenset[VisitType]
    is_missing: Callable[[PartialVisit], bool]
    state: ConversationState

    def matches(self, visit: PartialVisit) -> bool:
        return visit.visit_type in self.visit_types and self.is_missing(visit)


def _missing(field: str) -> Callable[[PartialVisit], bool]:
    return lambda visit: visit.is_missing(field)


def _reminder_after_appointment(visit: PartialVisit) -> bool:
    # Billing only asks for a reminder once a payment was promised.
    return not visit.is_missing("appointment") and visit.is_missing("reminder_date")


ALL_TYPES = frozenset(VisitType)

# Order matters: the first match wins.
REQUIREMENTS: list[Requirement] = [
    Requirement(frozenset({T.INFORMATIONAL}), _missing("spk"), S.ADD_SPK),
    Requirement(frozenset({T.INFORMATIONAL}), _missing("appointment"), S.ADD_APPOINTMENT),
    Requirement(frozenset({T.INFORMATIONAL}), _missing("reminder_date"), S.ADD_REMINDER),
    Requirement(frozenset({T.BILLING, T.MONITORING}), _missing("spk"), S.ADD_SPK),
    Requirement(ALL_TYPES - {T.SURVEY, T.INFORMATIONAL}, _missing("note"), S.ADD_CAPTION),
    Requirement(frozenset({T.SURVEY}), _missing("plafond"), S.ADD_LIMIT),
    Requirement(frozenset({T.BILLING}), _missing("appointment"), S.ADD_APPOINTMENT),
    Requirement(frozenset({T.BILLING}), _reminder_after_appointment, S.ADD_REMINDER),
    Requirement(ALL_TYPES, _missing("name"), S.ADD_NAME),
    Requirement(frozenset({T.CANVASING}), _missing("interest_level"), S.ADD_INTERESTED),
    Requirement(frozenset({T.CANVASING}), _missing("address"), S.ADD_ADDRESS),
    Requirement(ALL_TYPES, _missing("business_condition"), S.ADD_USAHA),
]

TERMINAL_STATE = S.COMPLETED


def resolve_state(visit: PartialVisit) -> ConversationState:
    """Return the next state for ``visit``. Pure: reads nothing but the record."""
    for requirement in REQUIREMENTS:
        if requirement.matches(visit):
            return requirement.state
    return TERMINAL_STATE


def requires_spk(visit_type: VisitType) -> bool:
    """Whether a visit command of this type must start with an SPK number."""
    return any(
        requirement.state == S.ADD_SPK and visit_type in requirement.visit_types
        for requirement in REQUIREMENTS
    )
