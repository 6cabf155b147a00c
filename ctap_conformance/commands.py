"""Authenticator commands and capability discovery."""

from collections.abc import Mapping, Sequence
from enum import IntEnum
from typing import Any

from ctap_conformance.errors import DiscoveryError


class Command(IntEnum):
    """Authenticator API command bytes."""

    MAKE_CREDENTIAL = 0x01
    GET_ASSERTION = 0x02
    GET_INFO = 0x04
    CLIENT_PIN = 0x06
    RESET = 0x07
    GET_NEXT_ASSERTION = 0x08
    BIO_ENROLLMENT = 0x09
    CREDENTIAL_MANAGEMENT = 0x0A
    SELECTION = 0x0B
    LARGE_BLOBS = 0x0C
    CONFIG = 0x0D


class InfoKey(IntEnum):
    """Member keys of the GetInfo response map."""

    VERSIONS = 0x01
    EXTENSIONS = 0x02
    AAGUID = 0x03
    OPTIONS = 0x04
    MAX_MSG_SIZE = 0x05
    PIN_UV_AUTH_PROTOCOLS = 0x06
    MAX_CREDENTIAL_COUNT_IN_LIST = 0x07
    MAX_CREDENTIAL_ID_LENGTH = 0x08
    TRANSPORTS = 0x09
    ALGORITHMS = 0x0A


def capabilities_from_info(
    response: Any,
) -> tuple[Sequence[str], Sequence[str], Mapping[str, bool]]:
    """Extract versions, extensions and options from a GetInfo response.

    Args:
        response: Decoded GetInfo response map

    Returns:
        Tuple of (versions, extensions, options)

    Raises:
        DiscoveryError: If the response is not a map or advertises no versions

    """
    if not isinstance(response, Mapping):
        raise DiscoveryError(f"GetInfo response is not a map: {response!r}")

    versions = response.get(InfoKey.VERSIONS)
    if not isinstance(versions, list) or not versions:
        raise DiscoveryError("GetInfo response does not list any versions")

    extensions = response.get(InfoKey.EXTENSIONS, [])
    options = response.get(InfoKey.OPTIONS, {})
    if not isinstance(extensions, list) or not isinstance(options, Mapping):
        raise DiscoveryError("GetInfo extensions or options are malformed")

    return (
        [str(version) for version in versions],
        [str(extension) for extension in extensions],
        {str(name): bool(value) for name, value in options.items()},
    )
