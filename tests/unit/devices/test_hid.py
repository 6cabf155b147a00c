"""Tests for the HID device plugin."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import cbor2
import pytest
from fido2.ctap import CtapError
from fido2.hid import CTAPHID

from ctap_conformance.commands import Command
from ctap_conformance.devices.hid import HidConfig, HidDevice
from ctap_conformance.devices.hid.device import find_device
from ctap_conformance.errors import TransportError
from ctap_conformance.models.outcome import Failure, Success
from ctap_conformance.status import Status


def make_hid(path: str) -> MagicMock:
    """Create a fake fido2 HID device."""
    hid = MagicMock()
    hid.descriptor.path = path
    return hid


@pytest.fixture
def hid_devices() -> Iterator[list[MagicMock]]:
    """Patch device enumeration with two fake authenticators."""
    devices = [make_hid("/dev/hidraw0"), make_hid("/dev/hidraw1")]
    with patch(
        "ctap_conformance.devices.hid.device.CtapHidDevice.list_devices",
        side_effect=lambda: iter(devices),
    ):
        yield devices


def test_find_device_first(hid_devices: list[MagicMock]) -> None:
    """Picks the first authenticator without a path."""
    assert find_device(None) is hid_devices[0]


def test_find_device_by_path(hid_devices: list[MagicMock]) -> None:
    """Picks the authenticator with the configured path."""
    assert find_device("/dev/hidraw1") is hid_devices[1]


def test_find_device_missing(hid_devices: list[MagicMock]) -> None:
    """Raises when no authenticator matches."""
    with pytest.raises(TransportError, match="/dev/hidraw9"):
        find_device("/dev/hidraw9")


async def test_from_config_closes_device(hid_devices: list[MagicMock]) -> None:
    """Closes the HID handle when the context exits."""
    async with HidDevice.from_config(HidConfig(path="/dev/hidraw1")) as device:
        assert device.hid is hid_devices[1]
        hid_devices[1].close.assert_not_called()

    hid_devices[1].close.assert_called_once()


async def test_send_frames_command_and_payload() -> None:
    """Prefixes the command byte and parses the response."""
    hid = make_hid("/dev/hidraw0")
    hid.call.return_value = b"\x00" + cbor2.dumps({1: "packed"})
    device = HidDevice(hid=hid)

    outcome = await device.send(Command.MAKE_CREDENTIAL, b"\xa0")

    hid.call.assert_called_once_with(CTAPHID.CBOR, b"\x01\xa0")
    assert outcome == Success(value={1: "packed"})


async def test_send_returns_failure_status() -> None:
    """Returns the status byte of a rejection."""
    hid = make_hid("/dev/hidraw0")
    hid.call.return_value = b"\x11"

    outcome = await HidDevice(hid=hid).send(Command.GET_ASSERTION, b"\x2a")

    assert outcome == Failure(status=Status.ERR_CBOR_UNEXPECTED_TYPE)


@pytest.mark.parametrize(
    "error", [OSError("device gone"), CtapError(CtapError.ERR.CHANNEL_BUSY)]
)
async def test_send_wraps_transport_errors(error: Exception) -> None:
    """Turns HID errors into TransportError."""
    hid = make_hid("/dev/hidraw0")
    hid.call.side_effect = error

    with pytest.raises(TransportError, match="CLIENT_PIN"):
        await HidDevice(hid=hid).send(Command.CLIENT_PIN, b"")
