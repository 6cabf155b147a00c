"""Tracking of signature counters reported by the authenticator."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

# Offset of the 32-bit signature counter inside authenticator data, after the
# 32-byte RP ID hash and the flags byte.
_COUNTER_OFFSET = 33
_COUNTER_LENGTH = 4

ALL_ZERO = "All counters were constant zero."
INCREASING_BY_ONE = "All counters were strictly increasing by 1."
INCREASING = "All counters were strictly increasing, but not always by 1."
NOT_INCREASING = "Some counters were not strictly increasing."
SINGLE_READINGS = "No counter was read more than once."


def signature_counter(auth_data: bytes) -> int | None:
    """Read the signature counter from authenticator data, if present."""
    end = _COUNTER_OFFSET + _COUNTER_LENGTH
    if len(auth_data) < end:
        return None
    return int.from_bytes(auth_data[_COUNTER_OFFSET:end], "big")


@dataclass(kw_only=True)
class CounterChecker:
    """Collects counter readings per counter name and summarizes them."""

    readings: dict[str, list[int]] = field(default_factory=lambda: defaultdict(list))

    def register(self, name: str, value: int) -> None:
        """Record one reading of the named counter."""
        log.debug("Counter %s reads %d", name, value)
        self.readings[name].append(value)

    def summary(self) -> str:
        """Describe how the counters behaved over the run."""
        if all(value == 0 for values in self.readings.values() for value in values):
            return ALL_ZERO

        steps = [
            later - earlier
            for values in self.readings.values()
            for earlier, later in zip(values, values[1:])
        ]
        if not steps:
            return SINGLE_READINGS
        if any(step <= 0 for step in steps):
            return NOT_INCREASING
        if all(step == 1 for step in steps):
            return INCREASING_BY_ONE
        return INCREASING
