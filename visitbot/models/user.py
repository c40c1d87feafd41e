"""Officer model, keyed by WhatsApp JID.

An officer must register (give their account-officer label) before any
visit can be completed.
"""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from visitbot.models.base import Base, TimestampMixin
from visitbot.models.enums import UserRole


class User(TimestampMixin, Base):
    """A field officer talking to the bot."""

    __tablename__ = "users"

    jid: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    account_officer: Mapped[str] = mapped_column(String(100))
    role: Mapped[str] = mapped_column(String(20), default=UserRole.MEMBER.value)

    def __repr__(self) -> str:
        return f"<User jid={self.jid} ao={self.account_officer} role={self.role}>"
