"""Interface to the PIN/UV auth protocol state."""

from typing import Any, Protocol

from ctap_conformance.commands import Command
from ctap_conformance.models.definition import ParameterKey


class AuthState(Protocol):
    """Owner of the PIN/UV auth token lifecycle.

    The conformance engine asks it to authorize reference payloads but never
    touches its keys or tokens.
    """

    def authorize(
        self, command: Command, parameters: dict[ParameterKey, Any]
    ) -> dict[ParameterKey, Any]:
        """Return ``parameters`` with the auth members the command needs."""
        ...
