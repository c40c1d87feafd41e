"""FastAPI application entry point: wires everything together.

Usage:
    python -m visitbot.main

Serves the gateway webhook and health check, and runs the daily reminder
scheduler in the same event loop.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from visitbot.channels.whatsapp import WhatsAppGateway, whatsapp_router
from visitbot.config import settings
from visitbot.conversation.session_store import build_session_store
from visitbot.conversation.wiring import build_dispatcher
from visitbot.db.engine import async_session_factory, db_lifespan, redis_client
from visitbot.repositories.bills import BillRepository
from visitbot.repositories.users import UserRepository
from visitbot.repositories.visits import VisitRepository
from visitbot.scheduling.reminders import ReminderJob, create_reminder_scheduler

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s | %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)

# ── FastAPI lifespan ─────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup and shutdown lifecycle."""
    logger.info("Starting visitbot (env=%s)", settings.environment)

    # 1. Database
    async with db_lifespan():
        logger.info("Database initialized")

        # 2. Outbound gateway and repositories
        gateway = WhatsAppGateway.from_settings(settings.whatsapp)
        if not gateway.is_configured:
            logger.warning("WHATSAPP_GATEWAY_URL not set, outbound messages will be dropped")
        bills = BillRepository(async_session_factory)
        users = UserRepository(async_session_factory)
        visits = VisitRepository(async_session_factory)

        # 3. Conversation
        conv = settings.conversation
        store = build_session_store(conv.session_backend, redis_client, ttl_seconds=conv.session_ttl_seconds)
        app.state.dispatcher = build_dispatcher(
            store=store,
            gateway=gateway,
            bills=bills,
            users=users,
            visits=visits,
            prefix=conv.message_prefix,
            minimum_appointment=conv.minimum_appointment,
            timezone=settings.reminder.reminder_timezone,
            serialize_per_user=conv.serialize_per_user,
        )
        logger.info("Conversation dispatcher ready (prefix=%r)", conv.message_prefix)

        # 4. Reminder scheduler
        scheduler = None
        if settings.reminder.reminder_enabled:
            job = ReminderJob(visits, gateway, timezone=settings.reminder.reminder_timezone)
            scheduler = create_reminder_scheduler(job, settings.reminder)
            scheduler.start()
            logger.info(
                "Reminder scheduler started (%02d:%02d %s)",
                settings.reminder.reminder_hour,
                settings.reminder.reminder_minute,
                settings.reminder.reminder_timezone,
            )
        else:
            logger.warning("REMINDER_ENABLED is false, daily reminders disabled")

        try:
            yield
        finally:
            logger.info("Shutting down visitbot...")
            if scheduler is not None:
                scheduler.shutdown(wait=False)
                logger.info("Reminder scheduler stopped")

    logger.info("visitbot shutdown complete")


# ── FastAPI app ──────────────────────────────────────────────────────

app = FastAPI(
    title="visitbot API",
    description="WhatsApp field-visit reporting for loan officers",
    version="0.1.0",
    lifespan=lifespan,
)
app.include_router(whatsapp_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "session_backend": settings.conversation.session_backend,
    }


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "visitbot.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
