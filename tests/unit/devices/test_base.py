"""Tests for response parsing."""

import cbor2
import pytest

from ctap_conformance.devices.base import parse_response
from ctap_conformance.errors import TransportError
from ctap_conformance.models.outcome import Failure, Success
from ctap_conformance.status import Status


def test_parse_success_with_body() -> None:
    """Decodes the CBOR body of a success."""
    body = cbor2.dumps({1: ["FIDO_2_0"]})

    assert parse_response(b"\x00" + body) == Success(value={1: ["FIDO_2_0"]})


def test_parse_success_without_body() -> None:
    """Returns an empty success for a bare status byte."""
    assert parse_response(b"\x00") == Success()


def test_parse_failure() -> None:
    """Returns the status of a rejected command."""
    assert parse_response(b"\x14") == Failure(status=Status.ERR_MISSING_PARAMETER)


def test_parse_empty_response() -> None:
    """Raises for an empty response."""
    with pytest.raises(TransportError):
        parse_response(b"")


def test_parse_malformed_body() -> None:
    """Raises for a body that is not CBOR."""
    with pytest.raises(TransportError, match="malformed CBOR"):
        parse_response(b"\x00\xff\xff")


def test_failure_cannot_hold_success() -> None:
    """Rejects the success status in a failure."""
    with pytest.raises(ValueError):
        Failure(status=Status.OK)
