"""Device manifests, the unit a device plugin registers."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel, ValidationError

from ctap_conformance.devices.base import Device
from ctap_conformance.errors import DeviceConfigError

type DeviceFactory[ConfigT] = Callable[[ConfigT], AbstractAsyncContextManager[Device]]


@dataclass(frozen=True, kw_only=True)
class DeviceManifest[ConfigT: BaseModel]:
    """Configuration model and factory of one kind of device.

    The factory returns an async context manager, so a device is only
    connected while a run uses it.
    """

    config_cls: type[ConfigT]
    device_factory: DeviceFactory[ConfigT]

    def parse_config(self, config_json: str) -> ConfigT:
        """Validate a JSON device configuration.

        Raises:
            DeviceConfigError: If the JSON is malformed or does not fit the
                configuration model

        """
        try:
            return self.config_cls.model_validate_json(config_json)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(map(str, error['loc'])) or 'config'}: {error['msg']}"
                for error in e.errors()
            )
            raise DeviceConfigError(
                f"Invalid {self.config_cls.__name__}: {problems}"
            ) from e

    def open(self, config_json: str) -> AbstractAsyncContextManager[Device]:
        """Validate ``config_json`` and return the device's context manager."""
        return self.device_factory(self.parse_config(config_json))
