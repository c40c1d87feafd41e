"""Bill lookup by SPK number."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from visitbot.models.bill import Bill

logger = logging.getLogger(__name__)


class BillRepository:
    """Read-only access to the bills table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_spk(self, spk: str) -> Bill | None:
        """Return the bill for ``spk``, or None when the number is unknown."""
        async with self._session_factory() as db:
            result = await db.execute(select(Bill).where(Bill.no_spk == spk.strip()))
            bill = result.scalar_one_or_none()
        if bill is None:
            logger.info("Bill not found for SPK %s", spk)
        return bill
