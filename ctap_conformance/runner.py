"""Conformance runner feeding mutation cases to a single device."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ctap_conformance.auth import AuthState
from ctap_conformance.commands import Command, capabilities_from_info
from ctap_conformance.counters import signature_counter
from ctap_conformance.devices.base import Device
from ctap_conformance.errors import (
    DiscoveryError,
    PayloadDefinitionError,
    TransportError,
)
from ctap_conformance.models.definition import CommandDefinition
from ctap_conformance.models.outcome import (
    Failure,
    Outcome,
    Success,
    outcome_status,
)
from ctap_conformance.mutation import MutationCase, generate_cases
from ctap_conformance.tracker import DeviceTracker

log = logging.getLogger(__name__)

# Response member holding authenticator data, per command.
AUTH_DATA_KEYS: Mapping[Command, int] = {
    Command.MAKE_CREDENTIAL: 0x02,
    Command.GET_ASSERTION: 0x02,
}


@dataclass(frozen=True, kw_only=True)
class ConformanceRunner:
    """Runs negative tests against one device, one exchange at a time."""

    __test__ = False

    device: Device
    tracker: DeviceTracker
    auth: AuthState | None = None

    async def discover(self) -> None:
        """Query GetInfo and initialize the tracker with the capabilities.

        Raises:
            DiscoveryError: If the device rejects GetInfo or answers garbage

        """
        log.info("Discovering device capabilities...")
        outcome = await self.device.send(Command.GET_INFO, b"")
        self.tracker.check_and_report(outcome, "GetInfo discovery")

        match outcome:
            case Success(value=response):
                versions, extensions, options = capabilities_from_info(response)
                self.tracker.initialize(versions, extensions, options)
            case Failure(status=status):
                raise DiscoveryError(f"GetInfo failed with {status.symbol}")

    async def run_suite(self, definitions: Sequence[CommandDefinition]) -> int:
        """Run every command definition in order.

        Returns:
            Total number of cases sent

        """
        total = 0
        for definition in definitions:
            total += await self.run_command(definition)
        log.info("Sent %d case(s) for %d command(s)", total, len(definitions))
        return total

    async def run_command(self, definition: CommandDefinition) -> int:
        """Send every mutation case of one command and check the responses.

        Returns:
            Number of cases sent

        Raises:
            PayloadDefinitionError: If the definition is unusable, before any
                case is sent
            TransportError: If an exchange fails; remaining cases are skipped

        """
        if definition.requires_auth:
            if self.auth is None:
                raise PayloadDefinitionError(
                    f"{definition.command.name} needs an auth state, none was given"
                )
            parameters = self.auth.authorize(
                definition.command, dict(definition.payload.parameters)
            )
            payload = definition.payload.model_copy(update={"parameters": parameters})
            definition = definition.model_copy(update={"payload": payload})

        command = definition.command
        log.info("Testing %s with malformed payloads", command.name)

        sent = 0
        for case in generate_cases(definition):
            try:
                outcome = await self.device.send(command, case.encode())
            except TransportError as e:
                log.error("Transport failure during %s: %s", case.description, e)
                self.tracker.add_problem(
                    f"Transport failure during {case.description}, "
                    f"remaining {command.name} cases were skipped"
                )
                raise
            sent += 1
            self._evaluate(command, case, outcome)

        log.info("Finished %s after %d case(s)", command.name, sent)
        return sent

    def _evaluate(self, command: Command, case: MutationCase, outcome: Outcome) -> None:
        if isinstance(outcome, Success):
            self._register_counter(command, outcome.value)

        if case.expected is None:
            log.debug(
                "%s answered with %s", case.description, outcome_status(outcome).symbol
            )
            self.tracker.check_and_report(True, case.description)
            return

        self.tracker.check_and_report(
            case.expected, outcome_status(outcome), case.description
        )

    def _register_counter(self, command: Command, response: object) -> None:
        if command not in AUTH_DATA_KEYS or not isinstance(response, dict):
            return
        auth_data = response.get(AUTH_DATA_KEYS[command])
        if isinstance(auth_data, bytes):
            if (counter := signature_counter(auth_data)) is not None:
                self.tracker.register_counter(command.name, counter)
