"""Bill model: one outstanding loan per SPK number.

Rows are loaded from the core-banking export; visitbot only reads them.
Money columns hold whole rupiah.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import BigInteger, Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from visitbot.models.base import Base, TimestampMixin


class Bill(TimestampMixin, Base):
    """An outstanding loan account."""

    __tablename__ = "bills"

    no_spk: Mapped[str] = mapped_column(String(30), unique=True, index=True)
    customer_id: Mapped[str | None] = mapped_column(String(30))
    name: Mapped[str | None] = mapped_column(String(200))
    address: Mapped[str | None] = mapped_column(Text)
    branch: Mapped[str | None] = mapped_column(String(100))
    account_officer: Mapped[str | None] = mapped_column(String(100), index=True)
    product: Mapped[str | None] = mapped_column(String(100))

    # Amounts
    plafond: Mapped[int | None] = mapped_column(BigInteger)
    principal: Mapped[int | None] = mapped_column(BigInteger)
    debit_tray: Mapped[int | None] = mapped_column(BigInteger)
    last_interest: Mapped[int | None] = mapped_column(BigInteger)
    last_principal: Mapped[int | None] = mapped_column(BigInteger)
    last_installment: Mapped[int | None] = mapped_column(BigInteger)
    penalty_interest: Mapped[int | None] = mapped_column(BigInteger)
    penalty_principal: Mapped[int | None] = mapped_column(BigInteger)

    # Dates
    realization_date: Mapped[date | None] = mapped_column(Date)
    due_date: Mapped[date | None] = mapped_column(Date)

    @property
    def penalty(self) -> int:
        """Total penalty: interest penalty plus principal penalty."""
        return (self.penalty_interest or 0) + (self.penalty_principal or 0)

    def __repr__(self) -> str:
        return f"<Bill spk={self.no_spk} name={self.name}>"
