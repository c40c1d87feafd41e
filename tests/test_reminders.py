"""Tests for visitbot/scheduling/reminders.py: the daily reminder job."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from visitbot.config import ReminderSettings
from visitbot.models.visit import Visit
from visitbot.scheduling.reminders import REMINDER_JOB_ID, ReminderJob, create_reminder_scheduler


def _visit(user_id: str, name: str) -> Visit:
    return Visit(user_id=user_id, visit_type="billing", name=name, spk="1", appointment=50_000)


@pytest.fixture
def visits():
    repo = MagicMock()
    repo.find_due_reminders = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def gateway():
    gw = MagicMock()
    gw.send_text = AsyncMock(return_value=True)
    return gw


class TestReminderJob:
    @pytest.mark.asyncio
    async def test_nothing_due(self, visits, gateway):
        summary = await ReminderJob(visits, gateway).run(today=date(2026, 10, 19))

        assert summary == {"due": 0, "sent": 0, "failed": 0}
        visits.find_due_reminders.assert_awaited_once_with(date(2026, 10, 19))
        gateway.send_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sends_one_message_per_visit(self, visits, gateway):
        visits.find_due_reminders.return_value = [_visit("628111", "Budi"), _visit("628222", "Sari")]

        summary = await ReminderJob(visits, gateway).run(today=date(2026, 10, 19))

        assert summary == {"due": 2, "sent": 2, "failed": 0}
        recipients = [c.args[0] for c in gateway.send_text.call_args_list]
        assert recipients == ["628111", "628222"]
        assert "Nama: Budi" in gateway.send_text.call_args_list[0].args[1]

    @pytest.mark.asyncio
    async def test_failed_delivery_does_not_stop_others(self, visits, gateway):
        visits.find_due_reminders.return_value = [_visit("628111", "Budi"), _visit("628222", "Sari")]
        gateway.send_text.side_effect = [False, True]

        summary = await ReminderJob(visits, gateway).run(today=date(2026, 10, 19))

        assert summary == {"due": 2, "sent": 1, "failed": 1}

    @pytest.mark.asyncio
    async def test_load_failure_is_logged_not_raised(self, visits, gateway):
        visits.find_due_reminders.side_effect = RuntimeError("db down")

        summary = await ReminderJob(visits, gateway).run(today=date(2026, 10, 19))

        assert summary == {"due": 0, "sent": 0, "failed": 0}
        gateway.send_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_defaults_to_today_in_timezone(self, visits, gateway):
        await ReminderJob(visits, gateway, timezone="Asia/Jakarta").run()
        day = visits.find_due_reminders.call_args.args[0]
        assert isinstance(day, date)


class TestScheduler:
    def test_job_registered(self, visits, gateway):
        job = ReminderJob(visits, gateway)
        config = ReminderSettings(reminder_hour=6, reminder_minute=15)

        scheduler = create_reminder_scheduler(job, config)

        registered = scheduler.get_job(REMINDER_JOB_ID)
        assert registered is not None
        assert "hour='6'" in str(registered.trigger)
        assert "minute='15'" in str(registered.trigger)
        assert not scheduler.running
