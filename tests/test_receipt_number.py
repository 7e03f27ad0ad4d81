"""Unit tests for fee receipt number generation."""

import re

from app.api.v1.fees.receipt import generate_receipt_number


def test_receipt_number_format() -> None:
    """REC + 6 digits + 3 uppercase alphanumerics."""
    number = generate_receipt_number()
    assert len(number) == 12
    assert re.fullmatch(r"REC\d{6}[A-Z0-9]{3}", number)


def test_uses_last_six_timestamp_digits() -> None:
    assert generate_receipt_number(now_ms=1734163200123).startswith("REC200123")


def test_short_timestamp_is_zero_padded() -> None:
    assert generate_receipt_number(now_ms=42).startswith("REC000042")


def test_random_suffix_varies() -> None:
    suffixes = {generate_receipt_number(now_ms=1)[-3:] for _ in range(50)}
    assert len(suffixes) > 1
