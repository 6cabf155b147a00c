"""HID device manifest."""

from ctap_conformance.devices.hid.config import HidConfig
from ctap_conformance.devices.hid.device import HidDevice
from ctap_conformance.devices.manifest import DeviceManifest

hid_manifest = DeviceManifest(
    config_cls=HidConfig,
    device_factory=HidDevice.from_config,
)
