"""Visit model: a completed field-visit report."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import BigInteger, Date, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from visitbot.models.base import Base, TimestampMixin
from visitbot.models.enums import VisitType


class Visit(TimestampMixin, Base):
    """One persisted visit report, written when a conversation completes."""

    __tablename__ = "visits"

    user_id: Mapped[str] = mapped_column(String(100), index=True, comment="Officer WhatsApp JID")
    visit_type: Mapped[str] = mapped_column(String(20), default=VisitType.BILLING.value, index=True)
    visit_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    # Customer
    spk: Mapped[str | None] = mapped_column(String(30), index=True)
    name: Mapped[str | None] = mapped_column(String(200))
    address: Mapped[str | None] = mapped_column(Text)

    # Amounts copied from the bill at visit time
    debit_tray: Mapped[int | None] = mapped_column(BigInteger)
    interest: Mapped[int | None] = mapped_column(BigInteger)
    principal: Mapped[int | None] = mapped_column(BigInteger)
    plafond: Mapped[int | None] = mapped_column(BigInteger)
    penalty: Mapped[int | None] = mapped_column(BigInteger)

    # Officer input
    note: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(Text)
    appointment: Mapped[int | None] = mapped_column(BigInteger, comment="Promised payment (Rp)")
    reminder_date: Mapped[date | None] = mapped_column(Date, index=True)
    business_condition: Mapped[str | None] = mapped_column(Text)
    interest_level: Mapped[str | None] = mapped_column(String(30))

    def __repr__(self) -> str:
        return f"<Visit id={self.id} type={self.visit_type} spk={self.spk}>"
