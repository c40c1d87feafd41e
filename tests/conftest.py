"""Shared fixtures: mocked collaborators and a fully wired dispatcher."""

from __future__ import annotations

import itertools
from unittest.mock import AsyncMock, MagicMock

import pytest

from visitbot.conversation.session_store import InMemorySessionStore
from visitbot.conversation.wiring import build_dispatcher
from visitbot.models.bill import Bill
from visitbot.schemas.messages import InboundMessage

OFFICER = "6281234567890@s.whatsapp.net"
GROUP = "120363025555555555@g.us"

_ids = itertools.count(1)


def make_message(
    text: str,
    sender: str = OFFICER,
    chat_id: str | None = None,
    message_id: str | None = None,
    image_url: str | None = None,
) -> InboundMessage:
    """Build an inbound message; DM unless chat_id says otherwise."""
    return InboundMessage(
        message_id=message_id or f"MSG{next(_ids)}",
        sender=sender,
        chat_id=chat_id or sender,
        text=text,
        image_url=image_url,
    )


def make_bill(**overrides) -> Bill:
    """An in-memory Bill row (never flushed)."""
    data = {
        "no_spk": "123456789012",
        "name": "Budi",
        "address": "Desa Lamuk RT 006 RW 008",
        "plafond": 50_000_000,
        "debit_tray": 1_500_000,
        "last_interest": 250_000,
        "last_principal": 1_000_000,
        "last_installment": 1_250_000,
        "penalty_interest": 10_000,
        "penalty_principal": 5_000,
    }
    data.update(overrides)
    return Bill(**data)


def sent_texts(gateway: MagicMock) -> list[str]:
    """Every text passed to gateway.send_text, in order."""
    return [c.args[1] for c in gateway.send_text.call_args_list]


@pytest.fixture()
def gateway():
    gw = MagicMock()
    gw.send_text = AsyncMock(return_value=True)
    gw.send_image = AsyncMock(return_value=True)
    gw.send_document = AsyncMock(return_value=True)
    return gw


@pytest.fixture()
def bills():
    repo = MagicMock()
    known = {"123456789012": make_bill()}
    repo.find_by_spk = AsyncMock(side_effect=lambda spk: known.get(spk))
    repo.known = known
    return repo


@pytest.fixture()
def users():
    repo = MagicMock()
    repo.is_registered = AsyncMock(return_value=True)
    repo.register = AsyncMock()
    return repo


@pytest.fixture()
def visits():
    repo = MagicMock()
    repo.save = AsyncMock()
    repo.find_due_reminders = AsyncMock(return_value=[])
    return repo


@pytest.fixture()
def store():
    return InMemorySessionStore()


@pytest.fixture()
def make_dispatcher(store, gateway, bills, users, visits):
    """Factory for a dispatcher wired to the mocked collaborators."""
    def _make(**options):
        return build_dispatcher(
            store=store,
            gateway=gateway,
            bills=bills,
            users=users,
            visits=visits,
            **options,
        )
    return _make
