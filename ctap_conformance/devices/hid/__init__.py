"""USB HID device module."""

from ctap_conformance.devices.hid.config import HidConfig
from ctap_conformance.devices.hid.device import HidDevice
from ctap_conformance.devices.hid.manifest import hid_manifest

__all__ = ["HidConfig", "HidDevice", "hid_manifest"]
