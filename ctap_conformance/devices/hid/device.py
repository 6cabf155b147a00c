"""USB HID authenticator backed by python-fido2."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from fido2.ctap import CtapError
from fido2.hid import CTAPHID, CtapHidDevice

from ctap_conformance.commands import Command
from ctap_conformance.devices.base import Device, parse_response
from ctap_conformance.devices.hid.config import HidConfig
from ctap_conformance.errors import TransportError
from ctap_conformance.models.outcome import Outcome

log = logging.getLogger(__name__)


def find_device(path: str | None) -> CtapHidDevice:
    """Return the HID authenticator at ``path``, or the first one found.

    Raises:
        TransportError: If no matching authenticator is connected

    """
    for device in CtapHidDevice.list_devices():
        if path is None or device.descriptor.path == path:
            return device

    raise TransportError(
        f"No HID authenticator found at {path}" if path else "No HID authenticator found"
    )


@dataclass(frozen=True, kw_only=True)
class HidDevice(Device):
    """Authenticator reached over CTAPHID framing."""

    hid: CtapHidDevice = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(cls, config: HidConfig) -> AsyncGenerator["HidDevice", None]:
        """Open the configured authenticator and close it when done."""
        hid = await asyncio.to_thread(find_device, config.path)
        log.info("Using HID authenticator %s", hid.descriptor.path)
        try:
            yield cls(hid=hid)
        finally:
            hid.close()

    async def send(self, command: Command, payload: bytes) -> Outcome:
        """Send a CTAPHID_CBOR message and parse the response."""
        log.debug("Sending %s with %d byte payload", command.name, len(payload))
        try:
            response = await asyncio.to_thread(
                self.hid.call, CTAPHID.CBOR, bytes([command]) + payload
            )
        except (OSError, CtapError) as e:
            raise TransportError(f"{command.name} exchange failed: {e}") from e
        return parse_response(response)
