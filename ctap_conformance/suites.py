"""Reference payloads for the commands tested by default."""

import hashlib
from collections.abc import Sequence

from ctap_conformance.commands import Command
from ctap_conformance.models.definition import (
    CommandDefinition,
    InnerArrayTarget,
    InnerMapTarget,
    ReferencePayload,
)

ES256 = -7
PIN_UV_AUTH_PROTOCOL_ONE = 1
GET_PIN_RETRIES = 0x01


def _credential_descriptor() -> dict[str, object]:
    return {"type": "public-key", "id": bytes(32), "transports": ["usb"]}


def make_credential(rp_id: str) -> CommandDefinition:
    client_data_hash = hashlib.sha256(b"make credential").digest()
    rp = {"id": rp_id, "name": "Conformance RP"}
    user = {"id": b"\x01" * 16, "name": "conformance", "displayName": "Conformance"}
    algorithm = {"alg": ES256, "type": "public-key"}
    options = {"rk": False}

    return CommandDefinition(
        command=Command.MAKE_CREDENTIAL,
        payload=ReferencePayload(
            name="MakeCredential",
            parameters={
                0x01: client_data_hash,
                0x02: rp,
                0x03: user,
                0x04: [algorithm],
                0x05: [_credential_descriptor()],
                0x07: options,
            },
            required=frozenset({0x01, 0x02, 0x03, 0x04}),
        ),
        inner_maps=[
            InnerMapTarget(key=0x02, inner_map=rp),
            InnerMapTarget(key=0x03, inner_map=user),
            InnerMapTarget(key=0x04, inner_map=algorithm, wrap_in_array=True),
            InnerMapTarget(key=0x05, inner_map=_credential_descriptor(), wrap_in_array=True),
            InnerMapTarget(key=0x07, inner_map=options),
        ],
        inner_arrays=[
            InnerArrayTarget(key=0x04, elements=[algorithm]),
            InnerArrayTarget(key=0x05, elements=[_credential_descriptor()]),
        ],
        descriptor_lists=[0x05],
    )


def get_assertion(rp_id: str) -> CommandDefinition:
    client_data_hash = hashlib.sha256(b"get assertion").digest()
    options = {"up": True}

    return CommandDefinition(
        command=Command.GET_ASSERTION,
        payload=ReferencePayload(
            name="GetAssertion",
            parameters={
                0x01: rp_id,
                0x02: client_data_hash,
                0x03: [_credential_descriptor()],
                0x05: options,
            },
            required=frozenset({0x01, 0x02}),
        ),
        inner_maps=[
            InnerMapTarget(key=0x03, inner_map=_credential_descriptor(), wrap_in_array=True),
            InnerMapTarget(key=0x05, inner_map=options),
        ],
        inner_arrays=[InnerArrayTarget(key=0x03, elements=[_credential_descriptor()])],
        descriptor_lists=[0x03],
    )


def get_pin_retries() -> CommandDefinition:
    return CommandDefinition(
        command=Command.CLIENT_PIN,
        payload=ReferencePayload(
            name="ClientPin GetPinRetries",
            parameters={0x01: PIN_UV_AUTH_PROTOCOL_ONE, 0x02: GET_PIN_RETRIES},
            required=frozenset({0x01, 0x02}),
        ),
    )


def default_suite(rp_id: str) -> Sequence[CommandDefinition]:
    """Definitions run by the command line tool, in execution order."""
    return [make_credential(rp_id), get_assertion(rp_id), get_pin_retries()]
