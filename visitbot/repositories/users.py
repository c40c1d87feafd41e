"""Officer registry."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from visitbot.models.enums import UserRole
from visitbot.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Registration lookups keyed by WhatsApp JID."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, jid: str) -> User | None:
        async with self._session_factory() as db:
            result = await db.execute(select(User).where(User.jid == jid))
            return result.scalar_one_or_none()

    async def is_registered(self, jid: str) -> bool:
        return await self.get(jid) is not None

    async def register(self, jid: str, account_officer: str) -> User:
        """Register an officer. Idempotent: an existing row is returned unchanged.

        Args:
            jid: The officer's WhatsApp JID.
            account_officer: Officer label as written on the bills (upper case).

        Returns:
            The stored User.
        """
        async with self._session_factory() as db:
            result = await db.execute(select(User).where(User.jid == jid))
            user = result.scalar_one_or_none()
            if user is not None:
                return user

            user = User(jid=jid, account_officer=account_officer, role=UserRole.MEMBER.value)
            db.add(user)
            await db.commit()

        logger.info("Registered officer %s as %s", jid, account_officer)
        return user
