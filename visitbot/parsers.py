"""Free-text parsers for officer input: rupiah amounts and dates.

Officers type amounts the way they speak them ("5jt", "750 rb", "1.250.000",
"2,5 juta") and dates in either ISO or Indonesian day-first order.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation

# ── Amounts ──────────────────────────────────────────────────────────

_UNIT_MULTIPLIERS: dict[str, int] = {
    "rb": 1_000,
    "ribu": 1_000,
    "k": 1_000,
    "jt": 1_000_000,
    "juta": 1_000_000,
    "m": 1_000_000,
    "million": 1_000_000,
}

# Longest units first so "juta" is not read as "jt" + leftovers.
_NUMBER_RE = re.compile(
    r"(\d+(?:[.,]\d+)*)\s*(ribu|rb|juta|jt|million|m|k)?(?![a-z\d])",
    re.IGNORECASE,
)


def _to_decimal(digits: str) -> Decimal:
    """Interpret Indonesian separators.

    A trailing group of exactly three digits means every separator is a
    thousands separator ("1.250.000", "12,000"). Otherwise the last
    separator is the decimal point ("2,5", "1.5").
    """
    groups = re.split(r"[.,]", digits)
    if len(groups) == 1 or len(groups[-1]) == 3:
        return Decimal("".join(groups))
    return Decimal(f"{''.join(groups[:-1])}.{groups[-1]}")


def parse_numbers(text: str | None) -> list[int]:
    """Every amount found in ``text``, in order, as whole rupiah."""
    if not text:
        return []
    numbers: list[int] = []
    for match in _NUMBER_RE.finditer(text):
        digits, unit = match.group(1), match.group(2)
        try:
            value = _to_decimal(digits)
        except InvalidOperation:
            continue
        if unit:
            value *= _UNIT_MULTIPLIERS[unit.lower()]
        numbers.append(int(value))
    return numbers


def parse_first_number(text: str | None) -> int | None:
    """The first amount in ``text``, or None when there is none."""
    numbers = parse_numbers(text)
    return numbers[0] if numbers else None


# ── Dates ────────────────────────────────────────────────────────────

_ISO_DATE_RE = re.compile(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b")
_DMY_DATE_RE = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b")


class InvalidDateError(ValueError):
    """The text looks like a date but names a day that does not exist."""


def parse_date(text: str) -> date:
    """Parse a whole answer as ``YYYY-MM-DD`` or ``DD/MM/YYYY``.

    Raises:
        InvalidDateError: Well-formed but impossible, e.g. 2026-02-30.
        ValueError: Not in either accepted format.
    """
    value = text.strip()
    iso = _ISO_DATE_RE.fullmatch(value)
    dmy = _DMY_DATE_RE.fullmatch(value)
    if iso:
        year, month, day = (int(part) for part in iso.groups())
    elif dmy:
        day, month, year = (int(part) for part in dmy.groups())
    else:
        msg = f"Unrecognized date format: {text!r}"
        raise ValueError(msg)
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(str(exc)) from exc


def find_date(text: str | None) -> tuple[date | None, str]:
    """Find the first valid date inside free text.

    Returns:
        (the date or None, the text with that date removed). Removing it
        keeps the year from being picked up later as an amount.
    """
    if not text:
        return None, text or ""
    for pattern in (_ISO_DATE_RE, _DMY_DATE_RE):
        for match in pattern.finditer(text):
            try:
                found = parse_date(match.group(0))
            except ValueError:
                continue
            remainder = (text[: match.start()] + text[match.end():]).strip()
            return found, re.sub(r"\s{2,}", " ", remainder)
    return None, text
