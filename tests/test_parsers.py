"""Tests for amount/date parsing and rupiah formatting."""

from __future__ import annotations

from datetime import date

import pytest

from visitbot.formatters import format_rupiah, or_dash
from visitbot.parsers import (
    InvalidDateError,
    find_date,
    parse_date,
    parse_first_number,
    parse_numbers,
)


class TestParseNumbers:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("5jt", 5_000_000),
            ("5,7jt", 5_700_000),
            ("1.5 juta", 1_500_000),
            ("750rb", 750_000),
            ("750 ribu", 750_000),
            ("20k", 20_000),
            ("2m", 2_000_000),
            ("3 million", 3_000_000),
            ("1.250.000", 1_250_000),
            ("12,000", 12_000),
            ("3000", 3000),
            ("5JT", 5_000_000),
        ],
    )
    def test_single_amount(self, text, expected):
        assert parse_first_number(text) == expected

    def test_first_of_many(self):
        assert parse_numbers("bayar 2jt lalu 500rb") == [2_000_000, 500_000]
        assert parse_first_number("bayar 2jt lalu 500rb") == 2_000_000

    def test_no_number(self):
        assert parse_first_number("belum ada janji") is None
        assert parse_first_number("") is None
        assert parse_first_number(None) is None

    def test_unit_must_end_the_word(self):
        """'5 malam' is five, not five million."""
        assert parse_first_number("5 malam") == 5

    def test_digits_glued_to_letters_ignored(self):
        assert parse_numbers("abc123xyz") == []


class TestParseDate:
    def test_iso(self):
        assert parse_date("2026-11-02") == date(2026, 11, 2)

    def test_day_first(self):
        assert parse_date("31/12/2026") == date(2026, 12, 31)

    def test_surrounding_whitespace(self):
        assert parse_date("  2026-01-12 ") == date(2026, 1, 12)

    def test_impossible_date(self):
        with pytest.raises(InvalidDateError):
            parse_date("2026-02-30")

    def test_bad_format(self):
        with pytest.raises(ValueError) as exc_info:
            parse_date("besok")
        assert not isinstance(exc_info.value, InvalidDateError)


class TestFindDate:
    def test_date_removed_from_remainder(self):
        found, rest = find_date("janji bayar 2026-11-02 2jt")
        assert found == date(2026, 11, 2)
        assert rest == "janji bayar 2jt"
        # The year no longer shadows the amount
        assert parse_first_number(rest) == 2_000_000

    def test_day_first_in_text(self):
        found, _ = find_date("ketemu 05/01/2027 siang")
        assert found == date(2027, 1, 5)

    def test_invalid_date_skipped(self):
        found, rest = find_date("tanggal 2026-02-30")
        assert found is None
        assert rest == "tanggal 2026-02-30"

    def test_no_text(self):
        assert find_date(None) == (None, "")


class TestFormatRupiah:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (1_234_567, "Rp1.234.567"),
            (0, "Rp0"),
            (999, "Rp999"),
            (None, "Rp0"),
            (-5000, "-Rp5.000"),
        ],
    )
    def test_grouping(self, amount, expected):
        assert format_rupiah(amount) == expected

    def test_or_dash(self):
        assert or_dash(None) == "-"
        assert or_dash("  ") == "-"
        assert or_dash("Budi") == "Budi"
