"""Tests for signature counter tracking."""

import pytest

from ctap_conformance.counters import (
    ALL_ZERO,
    INCREASING,
    INCREASING_BY_ONE,
    NOT_INCREASING,
    SINGLE_READINGS,
    CounterChecker,
    signature_counter,
)


def test_no_readings_are_constant_zero() -> None:
    """Reports constant zero when nothing was registered."""
    assert CounterChecker().summary() == ALL_ZERO


@pytest.mark.parametrize(
    ("readings", "summary"),
    [
        ({"a": [0, 0, 0]}, ALL_ZERO),
        ({"a": [1, 2, 3], "b": [7, 8]}, INCREASING_BY_ONE),
        ({"a": [1, 2, 5]}, INCREASING),
        ({"a": [3, 3]}, NOT_INCREASING),
        ({"a": [1, 2], "b": [9, 4]}, NOT_INCREASING),
        ({"a": [5]}, SINGLE_READINGS),
        ({"a": [5], "b": [0]}, SINGLE_READINGS),
    ],
)
def test_summary(readings: dict[str, list[int]], summary: str) -> None:
    """Classifies counter behavior across all named counters."""
    checker = CounterChecker()
    for name, values in readings.items():
        for value in values:
            checker.register(name, value)

    assert checker.summary() == summary


def test_signature_counter_reads_big_endian() -> None:
    """Reads the four bytes after the RP ID hash and flags."""
    auth_data = bytes(32) + b"\x45" + b"\x00\x00\x01\x02" + b"extra"

    assert signature_counter(auth_data) == 0x0102


def test_signature_counter_short_data() -> None:
    """Returns None for truncated authenticator data."""
    assert signature_counter(bytes(36)) is None
