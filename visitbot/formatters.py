"""Indonesian formatting helpers for chat messages."""

from __future__ import annotations

from datetime import date


def format_rupiah(amount: int | None) -> str:
    """Format whole rupiah with dot grouping: 1234567 -> "Rp1.234.567"."""
    if amount is None:
        return "Rp0"
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(int(amount)):,}".replace(",", ".")
    return f"{sign}Rp{grouped}"


def format_date(value: date | None) -> str:
    """Format as YYYY-MM-DD, the format officers are asked to type."""
    if value is None:
        return "-"
    return value.isoformat()


def or_dash(value: str | None) -> str:
    """Show "-" for an empty text field."""
    if value is None or not str(value).strip():
        return "-"
    return str(value)
