"""Outcome of a single device exchange."""

from dataclasses import dataclass
from typing import Any

from ctap_conformance.status import Status


@dataclass(frozen=True, kw_only=True)
class Success:
    """The device accepted the command and answered with a payload."""

    value: Any = None


@dataclass(frozen=True, kw_only=True)
class Failure:
    """The device rejected the command with a non-success status."""

    status: Status

    def __post_init__(self) -> None:
        if self.status is Status.OK:
            raise ValueError("A failure cannot carry the success status")


type Outcome = Success | Failure


def outcome_status(outcome: Outcome) -> Status:
    """Return the status an outcome stands for."""
    match outcome:
        case Success():
            return Status.OK
        case Failure(status=status):
            return status
