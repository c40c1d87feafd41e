"""Tests for the repositories against a mocked async session."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.conftest import make_bill
from visitbot.models.enums import UserRole, VisitType
from visitbot.models.user import User
from visitbot.models.visit import Visit
from visitbot.repositories.bills import BillRepository
from visitbot.repositories.users import UserRepository
from visitbot.repositories.visits import VisitRepository, visit_from_partial
from visitbot.schemas.visit import PartialVisit


@pytest.fixture
def mock_db():
    """Create a mock async DB session."""
    db = AsyncMock()
    db.execute = AsyncMock()
    db.commit = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def session_factory(mock_db):
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=mock_db)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory


def _scalar(value) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestBillRepository:
    @pytest.mark.asyncio
    async def test_found(self, session_factory, mock_db):
        bill = make_bill()
        mock_db.execute.return_value = _scalar(bill)

        assert await BillRepository(session_factory).find_by_spk(" 123456789012 ") is bill

    @pytest.mark.asyncio
    async def test_not_found(self, session_factory, mock_db):
        mock_db.execute.return_value = _scalar(None)
        assert await BillRepository(session_factory).find_by_spk("0") is None


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_register_new_officer(self, session_factory, mock_db):
        mock_db.execute.return_value = _scalar(None)

        user = await UserRepository(session_factory).register("628111", "ANDI")

        assert user.jid == "628111"
        assert user.account_officer == "ANDI"
        assert user.role == UserRole.MEMBER.value
        mock_db.add.assert_called_once_with(user)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_register_is_idempotent(self, session_factory, mock_db):
        existing = User(jid="628111", account_officer="ANDI", role="member")
        mock_db.execute.return_value = _scalar(existing)

        assert await UserRepository(session_factory).register("628111", "OTHER") is existing
        mock_db.add.assert_not_called()
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_is_registered(self, session_factory, mock_db):
        mock_db.execute.return_value = _scalar(None)
        assert await UserRepository(session_factory).is_registered("628999") is False


class TestVisitRepository:
    def test_visit_from_partial(self):
        partial = PartialVisit(
            user_id="628111", visit_type=VisitType.SURVEY, name="Sari", reminder_date=date(2099, 1, 1),
        )
        visit = visit_from_partial(partial)

        assert isinstance(visit, Visit)
        assert visit.visit_type == "survey"
        assert visit.name == "Sari"
        assert visit.reminder_date == date(2099, 1, 1)
        assert visit.visit_date == partial.visit_date

    @pytest.mark.asyncio
    async def test_save_commits(self, session_factory, mock_db):
        partial = PartialVisit(user_id="628111", visit_type=VisitType.BILLING, spk="1")

        visit = await VisitRepository(session_factory).save(partial)

        mock_db.add.assert_called_once_with(visit)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_save_error_propagates(self, session_factory, mock_db):
        mock_db.commit.side_effect = RuntimeError("constraint")
        partial = PartialVisit(user_id="628111", visit_type=VisitType.BILLING)

        with pytest.raises(RuntimeError):
            await VisitRepository(session_factory).save(partial)

    @pytest.mark.asyncio
    async def test_find_due_reminders(self, session_factory, mock_db):
        row = Visit(user_id="628111", visit_type="billing")
        result = MagicMock()
        result.scalars.return_value.all.return_value = [row]
        mock_db.execute.return_value = result

        assert await VisitRepository(session_factory).find_due_reminders(date(2026, 10, 19)) == [row]
