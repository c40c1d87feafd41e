"""Multi-line messages built from a record: save confirmations, group notices, reminders."""

from __future__ import annotations

from typing import TYPE_CHECKING

from visitbot.formatters import format_date, format_rupiah, or_dash
from visitbot.models.enums import VisitType
from visitbot.schemas.visit import PartialVisit

if TYPE_CHECKING:
    from visitbot.models.bill import Bill
    from visitbot.models.visit import Visit

VISIT_TYPE_LABELS: dict[VisitType, str] = {
    VisitType.BILLING: "tagihan",
    VisitType.MONITORING: "monitoring",
    VisitType.CANVASING: "canvasing",
    VisitType.SURVEY: "survey",
    VisitType.INFORMATIONAL: "janji bayar",
}

_HEADERS: dict[VisitType, tuple[str, str]] = {
    VisitType.BILLING: ("✅ *Data Tagihan Berhasil Disimpan*", "📋 *Detail Tagihan:*"),
    VisitType.MONITORING: ("✅ *Data Monitoring Berhasil Disimpan*", "📊 *Detail Monitoring:*"),
    VisitType.CANVASING: ("✅ *Data Canvasing Berhasil Disimpan*", "🎯 *Detail Canvasing:*"),
    VisitType.SURVEY: ("✅ *Data Survey Berhasil Disimpan*", "📝 *Detail Survey:*"),
    VisitType.INFORMATIONAL: ("✅ *Data Janji Bayar Berhasil Disimpan*", "🤝 *Detail Janji Bayar:*"),
}

# (label, field) pairs shown per visit type, in display order.
_SUMMARY_FIELDS: dict[VisitType, list[tuple[str, str]]] = {
    VisitType.BILLING: [
        ("SPK", "spk"),
        ("Nama", "name"),
        ("Catatan", "note"),
        ("Reminder", "reminder_date"),
        ("Janji Bayar", "appointment"),
    ],
    VisitType.MONITORING: [
        ("SPK", "spk"),
        ("Nama", "name"),
        ("Catatan", "note"),
        ("Kondisi Usaha", "business_condition"),
    ],
    VisitType.CANVASING: [
        ("Nama", "name"),
        ("Alamat", "address"),
        ("Minat", "interest_level"),
        ("Kondisi Usaha", "business_condition"),
    ],
    VisitType.SURVEY: [
        ("Nama", "name"),
        ("Plafond", "plafond"),
        ("Kondisi Usaha", "business_condition"),
    ],
    VisitType.INFORMATIONAL: [
        ("SPK", "spk"),
        ("Nama", "name"),
        ("Janji Bayar", "appointment"),
        ("Reminder", "reminder_date"),
    ],
}

_MONEY_FIELDS = {"appointment", "plafond"}


def _display(field: str, value: object) -> str:
    if field in _MONEY_FIELDS:
        return format_rupiah(value)  # type: ignore[arg-type]
    if field == "reminder_date":
        return format_date(value)  # type: ignore[arg-type]
    return str(value)


def build_success_message(visit: PartialVisit) -> str:
    """Confirmation sent after a visit is saved. Empty fields are left out."""
    title, detail = _HEADERS[visit.visit_type]
    lines = [title, "", detail]
    for label, field in _SUMMARY_FIELDS[visit.visit_type]:
        if visit.is_missing(field):
            continue
        lines.append(f"• {label}: {_display(field, getattr(visit, field))}")
    lines.append("")
    lines.append(f"Terima kasih! Data {VISIT_TYPE_LABELS[visit.visit_type]} telah tersimpan di sistem.")
    return "\n".join(lines)


def build_group_notice(bill: Bill) -> str:
    """Bill summary posted when a command is sent from a group chat."""
    return (
        f"No SPK: {bill.no_spk}\n"
        f"Nama: {or_dash(bill.name)}\n"
        f"Alamat: {or_dash(bill.address)}\n"
        f"Tunggakan: {format_rupiah(bill.last_installment)}\n\n"
        "Namun ada data yang belum diisi, ayok japri"
    )


def build_reminder_message(visit: Visit) -> str:
    """Morning reminder for a visit scheduled today."""
    lines = [
        "🔔 *REMINDER KUNJUNGAN HARI INI*",
        "",
        f"Nama: {or_dash(visit.name)}",
        f"SPK: {or_dash(visit.spk)}",
        f"Alamat: {or_dash(visit.address)}",
    ]
    if visit.appointment:
        lines.append(f"Janji Bayar: {format_rupiah(visit.appointment)}")
    if visit.note:
        lines.append("")
        lines.append(f"Catatan: {visit.note}")
    lines.append("")
    lines.append("_Jangan lupa kunjungan hari ini!_")
    return "\n".join(lines)
