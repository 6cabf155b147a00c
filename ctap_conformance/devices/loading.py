"""Resolution of device plugins registered as entry points."""

import logging
from contextlib import AbstractAsyncContextManager
from importlib.metadata import entry_points
from typing import Any

from ctap_conformance.devices.base import Device
from ctap_conformance.devices.manifest import DeviceManifest
from ctap_conformance.errors import DeviceNotFoundError

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "ctap_conformance.devices"


def load_device_manifest(key: str) -> DeviceManifest[Any]:
    """Load the manifest registered under ``key``, e.g. ``"hid"``.

    Raises:
        DeviceNotFoundError: If nothing is registered under the key, or the
            entry point does not refer to a device manifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        available = ", ".join(sorted(entry_points(group=ENTRY_POINT_GROUP).names))
        raise DeviceNotFoundError(
            f"Unknown device {key!r}, available devices: {available or 'none'}"
        )

    manifest = matches[key].load()
    if not isinstance(manifest, DeviceManifest):
        raise DeviceNotFoundError(
            f"Entry point {key!r} refers to a {type(manifest).__name__}, "
            "not a device manifest"
        )
    return manifest


def open_device(key: str, config_json: str) -> AbstractAsyncContextManager[Device]:
    """Resolve a device plugin and open it with a JSON configuration.

    Raises:
        DeviceNotFoundError: If the plugin cannot be resolved
        DeviceConfigError: If the configuration is rejected

    """
    log.info("Loading device: %s", key)
    return load_device_manifest(key).open(config_json)
