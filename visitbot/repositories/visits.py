"""Visit persistence and reminder queries."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from visitbot.models.visit import Visit
from visitbot.schemas.visit import PartialVisit

logger = logging.getLogger(__name__)


def visit_from_partial(partial: PartialVisit) -> Visit:
    """Build the ORM row for a completed conversation record."""
    data = partial.model_dump()
    data["visit_type"] = partial.visit_type.value
    return Visit(**data)


class VisitRepository:
    """Writes completed visits and finds the ones due for a reminder."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, partial: PartialVisit) -> Visit:
        """Persist a completed visit. Errors propagate to the caller."""
        visit = visit_from_partial(partial)
        async with self._session_factory() as db:
            db.add(visit)
            await db.commit()
        logger.info("Saved %s visit %s for %s", visit.visit_type, visit.id, visit.user_id)
        return visit

    async def find_due_reminders(self, day: date) -> list[Visit]:
        """All visits whose reminder date is ``day``, oldest first."""
        async with self._session_factory() as db:
            result = await db.execute(
                select(Visit)
                .where(Visit.reminder_date == day)
                .order_by(Visit.user_id, Visit.visit_date)
            )
            return list(result.scalars().all())
