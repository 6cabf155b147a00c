"""Exceptions shared across the conformance engine."""


class PayloadDefinitionError(Exception):
    """Raised when a reference payload or mutation target is malformed."""


class TrackerStateError(Exception):
    """Raised when the device tracker is used out of order."""


class TransportError(Exception):
    """Raised when bytes cannot be exchanged with the device."""


class DiscoveryError(Exception):
    """Raised when capability discovery fails."""


class DeviceSetupError(Exception):
    """Raised when a device plugin cannot be resolved or configured."""


class DeviceNotFoundError(DeviceSetupError):
    """Raised when no device plugin is registered under a key."""


class DeviceConfigError(DeviceSetupError):
    """Raised when a device configuration fails validation."""
