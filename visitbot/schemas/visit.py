"""PartialVisit: the visit record an officer is filling in during a conversation.

Fields start empty and are filled one answer at a time. Filling is
monotonic: ``merge`` only ever writes into empty fields, so a value the
officer (or the bill lookup) already supplied is never overwritten.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, Field

from visitbot.models.enums import VisitType


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class PartialVisit(BaseModel):
    """A visit report in progress, keyed by the officer's JID."""

    user_id: str
    visit_type: VisitType
    visit_date: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Customer (seeded from the bill when an SPK is known)
    spk: str | None = None
    name: str | None = None
    address: str | None = None
    debit_tray: int | None = None
    interest: int | None = None
    principal: int | None = None
    plafond: int | None = None
    penalty: int | None = None

    # Officer input
    note: str | None = None
    image_url: str | None = None
    appointment: int | None = None
    reminder_date: date | None = None
    business_condition: str | None = None
    interest_level: str | None = None

    def is_missing(self, field: str) -> bool:
        """True when ``field`` is unset or blank text."""
        return _is_blank(getattr(self, field))

    def merge(self, changes: Mapping[str, Any]) -> PartialVisit:
        """Return a copy with every still-empty field filled from ``changes``.

        Blank values in ``changes`` are skipped, and fields that already
        hold a value keep it.
        """
        updates = {
            field: value
            for field, value in changes.items()
            if field in type(self).model_fields and self.is_missing(field) and not _is_blank(value)
        }
        return self.model_copy(update=updates, deep=True)
