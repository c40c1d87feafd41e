"""Tests for state prompts and summary messages."""

from __future__ import annotations

from datetime import date

import pytest

from tests.conftest import make_bill
from visitbot.conversation.prompts import (
    STATE_PROMPTS,
    build_group_notice,
    build_reminder_message,
    build_success_message,
    render_prompt,
)
from visitbot.models.enums import ConversationState, VisitType
from visitbot.models.visit import Visit
from visitbot.schemas.visit import PartialVisit


def _visit(visit_type: VisitType = VisitType.BILLING, **fields) -> PartialVisit:
    return PartialVisit(user_id="628111@s.whatsapp.net", visit_type=visit_type, **fields)


class TestStatePrompts:
    def test_every_asking_state_has_prompt(self):
        asking = set(ConversationState) - {ConversationState.COMPLETED}
        assert asking <= set(STATE_PROMPTS)

    @pytest.mark.parametrize("state", [s for s in ConversationState if s != ConversationState.COMPLETED])
    def test_renders_without_placeholders(self, state):
        text = render_prompt(state, _visit(name="Budi"))
        assert text
        assert "{" not in text

    def test_completed_has_no_prompt(self):
        assert render_prompt(ConversationState.COMPLETED, _visit()) is None

    def test_name_inserted(self):
        assert "tagihan an Budi" in render_prompt(ConversationState.ADD_CAPTION, _visit(name="Budi"))

    def test_address_default_name(self):
        text = render_prompt(ConversationState.ADD_ADDRESS, _visit(VisitType.CANVASING))
        assert "alamat lengkap calon nasabah" in text

    def test_usaha_example_depends_on_type(self):
        prospect = render_prompt(ConversationState.ADD_USAHA, _visit(VisitType.SURVEY, name="Sari"))
        existing = render_prompt(ConversationState.ADD_USAHA, _visit(VisitType.MONITORING, name="Budi"))
        assert "Usaha Kue Kering" in prospect
        assert "omset stabil" in existing


class TestSuccessMessage:
    def test_billing(self):
        text = build_success_message(_visit(
            spk="123", name="Budi", note="janji", appointment=1_500_000, reminder_date=date(2099, 1, 2),
        ))
        assert text.startswith("✅ *Data Tagihan Berhasil Disimpan*")
        assert "• SPK: 123" in text
        assert "• Janji Bayar: Rp1.500.000" in text
        assert "• Reminder: 2099-01-02" in text
        assert text.endswith("Data tagihan telah tersimpan di sistem.")

    def test_empty_fields_left_out(self):
        text = build_success_message(_visit(VisitType.SURVEY, name="Sari", business_condition="-"))
        assert "Plafond" not in text
        assert "• Kondisi Usaha: -" in text

    def test_informational(self):
        text = build_success_message(_visit(VisitType.INFORMATIONAL, spk="1", appointment=5000))
        assert "Data Janji Bayar Berhasil Disimpan" in text
        assert "• Janji Bayar: Rp5.000" in text

    def test_canvasing(self):
        text = build_success_message(_visit(
            VisitType.CANVASING, name="Sari", address="Desa Lamuk", interest_level="Tertarik",
        ))
        assert "• Minat: Tertarik" in text
        assert "• Alamat: Desa Lamuk" in text


class TestOtherMessages:
    def test_group_notice(self):
        text = build_group_notice(make_bill(address=None))
        assert "No SPK: 123456789012" in text
        assert "Alamat: -" in text
        assert text.endswith("ayok japri")

    def test_reminder(self):
        visit = Visit(name="Budi", spk="123", address=None, appointment=2_000_000, note="bawa kwitansi")
        text = build_reminder_message(visit)
        assert text.startswith("🔔 *REMINDER KUNJUNGAN HARI INI*")
        assert "Alamat: -" in text
        assert "Janji Bayar: Rp2.000.000" in text
        assert "Catatan: bawa kwitansi" in text
