"""Daily visit reminders, sent by a morning cron job.

At 07:30 Asia/Jakarta (configurable) every officer with a visit whose
reminder date is today gets one message per visit.

Wired into the FastAPI lifespan via APScheduler's AsyncIOScheduler.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from visitbot.conversation.prompts import build_reminder_message

if TYPE_CHECKING:
    from visitbot.channels.whatsapp import WhatsAppGateway
    from visitbot.config import ReminderSettings
    from visitbot.repositories.visits import VisitRepository

logger = logging.getLogger(__name__)

REMINDER_JOB_ID = "visit_reminders"


class ReminderJob:
    """Finds today's reminders and sends them."""

    def __init__(self, visits: VisitRepository, gateway: WhatsAppGateway, timezone: str = "Asia/Jakarta") -> None:
        self._visits = visits
        self._gateway = gateway
        self._tz = ZoneInfo(timezone)

    async def run(self, today: date | None = None) -> dict[str, int]:
        """Send every reminder due ``today``. Returns a summary dict.

        A failure for one visit does not stop the others.
        """
        day = today or datetime.now(self._tz).date()
        summary: dict[str, int] = {"due": 0, "sent": 0, "failed": 0}

        try:
            visits = await self._visits.find_due_reminders(day)
        except Exception:
            logger.exception("Reminder job could not load visits for %s", day)
            return summary

        summary["due"] = len(visits)
        if not visits:
            logger.info("No reminders to send for %s", day)
            return summary

        for visit in visits:
            sent = await self._gateway.send_text(visit.user_id, build_reminder_message(visit))
            if sent:
                summary["sent"] += 1
            else:
                summary["failed"] += 1
                logger.warning("Reminder for visit %s to %s not delivered", visit.id, visit.user_id)

        logger.info("Reminder job for %s complete: %s", day, summary)
        return summary


def create_reminder_scheduler(job: ReminderJob, config: ReminderSettings) -> AsyncIOScheduler:
    """Build (but do not start) the scheduler running ``job`` once a day."""
    tz = ZoneInfo(config.reminder_timezone)
    scheduler = AsyncIOScheduler(timezone=tz)
    scheduler.add_job(
        job.run,
        CronTrigger(hour=config.reminder_hour, minute=config.reminder_minute, timezone=tz),
        id=REMINDER_JOB_ID,
        replace_existing=True,
        coalesce=True,
        misfire_grace_time=3600,
    )
    return scheduler
