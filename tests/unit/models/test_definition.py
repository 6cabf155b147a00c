"""Tests for reference payload definitions."""

import pytest
from pydantic import ValidationError

from ctap_conformance.commands import Command
from ctap_conformance.models.definition import CommandDefinition, ReferencePayload
from ctap_conformance.suites import default_suite


def test_required_keys_must_have_values() -> None:
    """Rejects required keys without a reference value."""
    with pytest.raises(ValidationError, match="Required keys"):
        ReferencePayload(name="Broken", parameters={1: b""}, required=frozenset({1, 2}))


def test_reference_payload_is_frozen() -> None:
    """Does not allow reassigning fields."""
    payload = ReferencePayload(name="GetInfo")

    with pytest.raises(ValidationError):
        payload.name = "Other"  # type: ignore[misc]


def test_mixed_key_types() -> None:
    """Keeps integer and text keys apart."""
    payload = ReferencePayload(
        name="Mixed", parameters={1: "a", "1": "b"}, required=frozenset({"1"})
    )

    assert payload.parameters == {1: "a", "1": "b"}
    assert payload.required == frozenset({"1"})


def test_command_from_byte() -> None:
    """Accepts command bytes for the command field."""
    definition = CommandDefinition(
        command=0x06, payload=ReferencePayload(name="ClientPin")
    )

    assert definition.command is Command.CLIENT_PIN
    assert definition.inner_maps == []
    assert not definition.requires_auth


def test_default_suite_commands() -> None:
    """Covers MakeCredential, GetAssertion and ClientPin."""
    suite = default_suite("example.com")

    assert [definition.command for definition in suite] == [
        Command.MAKE_CREDENTIAL,
        Command.GET_ASSERTION,
        Command.CLIENT_PIN,
    ]
    assert suite[0].payload.parameters[0x02]["id"] == "example.com"
    assert suite[1].payload.parameters[0x01] == "example.com"
