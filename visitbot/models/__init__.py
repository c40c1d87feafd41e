"""SQLAlchemy ORM models. Import from here to ensure every table is registered."""

from visitbot.models.base import Base, TimestampMixin
from visitbot.models.bill import Bill
from visitbot.models.user import User
from visitbot.models.visit import Visit

__all__ = [
    "Base",
    "Bill",
    "TimestampMixin",
    "User",
    "Visit",
]
