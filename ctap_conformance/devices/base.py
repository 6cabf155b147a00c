"""Abstract base class for authenticator devices."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import cbor2

from ctap_conformance.commands import Command
from ctap_conformance.errors import TransportError
from ctap_conformance.models.outcome import Failure, Outcome, Success
from ctap_conformance.status import Status


def parse_response(data: bytes) -> Outcome:
    """Split a raw CTAP response into its status and CBOR body.

    Raises:
        TransportError: If the response is empty or the body is not CBOR

    """
    if not data:
        raise TransportError("Device returned an empty response")

    status = Status.from_code(data[0])
    if not status.is_success:
        return Failure(status=status)

    body = data[1:]
    if not body:
        return Success()
    try:
        return Success(value=cbor2.loads(body))
    except cbor2.CBORDecodeError as e:
        raise TransportError(f"Device returned malformed CBOR: {e}") from e


@dataclass(frozen=True, kw_only=True)
class Device(ABC):
    """Abstract base for a connected authenticator.

    Only one exchange is in flight at a time. Transport framing, channel
    setup and keepalive handling belong to the implementation.
    """

    @abstractmethod
    async def send(self, command: Command, payload: bytes) -> Outcome:
        """Send one command and wait for its response.

        Args:
            command: Authenticator command byte
            payload: CBOR encoded parameters, possibly empty

        Returns:
            Decoded outcome of the exchange

        Raises:
            TransportError: If the exchange with the device failed

        """
