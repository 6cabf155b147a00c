"""Tests for status codes."""

import logging

import pytest

from ctap_conformance.status import Status


@pytest.mark.parametrize(
    ("status", "symbol"),
    [
        (Status.OK, "CTAP2_OK"),
        (Status.ERR_OTHER, "CTAP1_ERR_OTHER"),
        (Status.ERR_INVALID_COMMAND, "CTAP1_ERR_INVALID_COMMAND"),
        (Status.ERR_CBOR_UNEXPECTED_TYPE, "CTAP2_ERR_CBOR_UNEXPECTED_TYPE"),
        (Status.ERR_MISSING_PARAMETER, "CTAP2_ERR_MISSING_PARAMETER"),
        (Status.ERR_VENDOR_FIRST, "CTAP2_ERR_VENDOR_FIRST"),
    ],
)
def test_symbol(status: Status, symbol: str) -> None:
    """Uses the protocol names of the codes."""
    assert status.symbol == symbol


def test_symbols_are_unique() -> None:
    """Gives every code its own name."""
    symbols = [status.symbol for status in Status]

    assert len(symbols) == len(set(symbols))


def test_only_ok_is_success() -> None:
    """Treats exactly one code as success."""
    assert [status for status in Status if status.is_success] == [Status.OK]


def test_from_code_known() -> None:
    """Maps known bytes to their member."""
    assert Status.from_code(0x00) is Status.OK
    assert Status.from_code(0x14) is Status.ERR_MISSING_PARAMETER


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (0xE5, Status.ERR_EXTENSION_FIRST),
        (0xF7, Status.ERR_VENDOR_FIRST),
        (0x50, Status.ERR_OTHER),
    ],
)
def test_from_code_unknown(
    code: int, expected: Status, caplog: pytest.LogCaptureFixture
) -> None:
    """Collapses unknown bytes onto a range start or ERR_OTHER."""
    with caplog.at_level(logging.WARNING):
        assert Status.from_code(code) is expected

    assert f"0x{code:02X}" in caplog.text
