"""Short fixed replies: validation errors, command errors, acknowledgements."""

from __future__ import annotations

# ── Commands ─────────────────────────────────────────────────────────

BILL_NOT_FOUND = "No SPK tidak ditemukan"
GENERAL_ERROR = "Terjadi kesalahan saat memproses tagihan"
MISSING_SPK = "Anda belum memasukkan no SPK"
MISSING_NOTE = "Anda belum memasukkan catatan"
ONGOING_SESSION = (
    "Anda memiliki proses pengisian LKN/RKH yang belum selesai: {state}. "
    "Harap selesaikan terlebih dahulu atau kirim .cancel untuk membatalkan."
)
CANCELLED = "Aksi Dibatalkan"
NOTHING_TO_CANCEL = "Tidak ada proses yang sedang berjalan."

# ── State answers ────────────────────────────────────────────────────

EMPTY_CAPTION = "Catatan tidak boleh kosong. Silahkan masukkan catatan kunjungan."
EMPTY_NAME = "Nama tidak boleh kosong. Silahkan masukkan nama lengkap."
EMPTY_REGISTER = "Nama panggilan tidak boleh kosong. Silahkan kirim nama panggilan anda."
EMPTY_USAHA = "Kondisi usaha tidak boleh kosong. Kirim \"kosong\" jika tidak ingin mengisi."
APPOINTMENT_NOT_FOUND = "Saya tidak dapat menemukan nominalnya"
INTEREST_NOT_FOUND = "Saya tidak dapat menemukan jawaban yang anda kirim silahkan kirim lagi"

REMINDER_IN_PAST = "Tidak Mungkin dong reminder nya kemarin, yok isi lagi"
REMINDER_BAD_FORMAT = (
    "Format tanggal tidak valid. Silakan masukkan tanggal dengan format yang benar "
    "(contoh: 2024-12-31 atau 31/12/2024)"
)
REMINDER_INVALID_DATE = (
    "Terjadi kesalahan pada tanggal yang dimasukkan. "
    "Pastikan tanggal valid (contoh: 31 Februari tidak valid)"
)

ADDRESS_EMPTY = "Alamat tidak boleh kosong. Silahkan masukkan alamat lengkap."
ADDRESS_TOO_SHORT = "Alamat terlalu pendek. Minimal {minimum} karakter. Silahkan masukkan alamat yang lebih lengkap."
ADDRESS_TOO_LONG = "Alamat terlalu panjang. Maksimal {maximum} karakter."

SAVE_FAILED = """❌ Maaf, terjadi kesalahan saat menyimpan data {visit_type}.

Silakan coba lagi atau hubungi administrator jika masalah berlanjut."""
