"""Per-state questions sent to the officer after every transition.

Templates take ``{name}``, the customer name when already known.
"""

from __future__ import annotations

from visitbot.models.enums import ConversationState, VisitType
from visitbot.schemas.visit import PartialVisit

REGISTER_PROMPT = """Hai!!! Kamu akan simpan data {name} di database tagihan hari ini

Tapi Kamu Belum terdaftar pada database user kami, silahkan kirim nama panggilan anda."""

ADD_SPK_PROMPT = """Silahkan masukkan nomor SPK untuk tagihan {name}.

Contoh: 1075xxxxxxxxx"""

ADD_CAPTION_PROMPT = """Silahkan masukkan caption/keterangan untuk tagihan an {name}

Contoh: Penagihan Slamet Agustus Janji Bayar Tanggal 21"""

ADD_LIMIT_PROMPT = """Silahkan masukkan plafond yang diajukan oleh {name}

Format: 10,0rb|ribu|jt|juta|million|m|k
Contoh: 5,7jt"""

ADD_APPOINTMENT_PROMPT = """Apakah {name} berjanji akan bayar tagihan pada tanggal yang telah ditentukan?

Masukkan nominal janji bayar.
Format: 10,0rb|ribu|jt|juta|million|m|k
Contoh: 1,5jt"""

ADD_REMINDER_PROMPT = """Silahkan masukkan tanggal reminder untuk tagihan {name}

Format: YYYY-MM-DD
Contoh: 2026-01-12
Kirim "kosong" jika tidak perlu reminder."""

ADD_NAME_PROMPT = """Silahkan masukkan nama lengkap nasabah/calon nasabah.
Contoh: Budi Santoso"""

ADD_INTERESTED_PROMPT = """Seberapa tertarik {name} dengan produk kita?

1. Sangat tertarik
2. Tertarik
3. Belum Tertarik
4. Tidak Tertarik

Balas dengan angka 1-4."""

ADD_ADDRESS_PROMPT = """Silahkan masukkan alamat lengkap {name}.
Contoh: Desa Lamuk RT 006 RW 008"""

ADD_USAHA_PROSPECT_PROMPT = """Jelaskan kondisi usaha {name}, atau kosong jika tidak ingin mengisi kondisi usaha.
Contoh: Usaha Kue Kering"""

ADD_USAHA_PROMPT = """Jelaskan kondisi usaha {name}, atau kosong jika tidak ingin mengisi kondisi usaha.
Contoh: Usaha berjalan lancar, omset stabil, sudah memiliki produk yang berkualitas"""

STATE_PROMPTS: dict[ConversationState, str] = {
    ConversationState.REGISTER: REGISTER_PROMPT,
    ConversationState.ADD_SPK: ADD_SPK_PROMPT,
    ConversationState.ADD_CAPTION: ADD_CAPTION_PROMPT,
    ConversationState.ADD_LIMIT: ADD_LIMIT_PROMPT,
    ConversationState.ADD_APPOINTMENT: ADD_APPOINTMENT_PROMPT,
    ConversationState.ADD_REMINDER: ADD_REMINDER_PROMPT,
    ConversationState.ADD_NAME: ADD_NAME_PROMPT,
    ConversationState.ADD_INTERESTED: ADD_INTERESTED_PROMPT,
    ConversationState.ADD_ADDRESS: ADD_ADDRESS_PROMPT,
    ConversationState.ADD_USAHA: ADD_USAHA_PROMPT,
}


def render_prompt(state: ConversationState, visit: PartialVisit) -> str | None:
    """The question for ``state``, or None for states that ask nothing (COMPLETED)."""
    template = STATE_PROMPTS.get(state)
    if template is None:
        return None

    if state == ConversationState.ADD_USAHA and visit.visit_type in (VisitType.CANVASING, VisitType.SURVEY):
        template = ADD_USAHA_PROSPECT_PROMPT

    name = visit.name or ""
    if state == ConversationState.ADD_ADDRESS and not name:
        name = "calon nasabah"
    return template.format(name=name)
