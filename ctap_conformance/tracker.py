"""Tracks device capabilities, check outcomes and findings of a conformance run."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ctap_conformance.counters import CounterChecker
from ctap_conformance.errors import TrackerStateError
from ctap_conformance.models.outcome import Failure, Success
from ctap_conformance.models.report import CheckRecord, ReportDocument
from ctap_conformance.sink import Emphasis, ReportSink, StreamSink
from ctap_conformance.status import Status

log = logging.getLogger(__name__)

MUTABLE_OPTIONS = frozenset({"clientPin", "bioEnroll"})
"""Options whose value changes at runtime, so only their presence counts."""


@dataclass(frozen=True, kw_only=True)
class CapabilitySet:
    """Versions, extensions and options advertised by a device."""

    versions: frozenset[str] = frozenset()
    extensions: frozenset[str] = frozenset()
    options: Mapping[str, bool] = field(default_factory=dict)


def statuses_match(expected: Status, actual: Status) -> bool:
    """Compare an expected status with the one the device returned.

    Equal codes match. ``ERR_OTHER`` on either side matches any failure, but
    never the success code.
    """
    if expected is actual:
        return True
    if Status.ERR_OTHER in (expected, actual):
        return not expected.is_success and not actual.is_success
    return False


@dataclass(kw_only=True)
class DeviceTracker:
    """Accumulates everything learned about one device in one run.

    Capabilities are set once from discovery. Checks, problems, observations
    and status mismatch warnings only ever grow and are rendered at the end
    by ``report_findings`` or ``generate_results_json``.
    """

    sink: ReportSink = field(default_factory=StreamSink)
    counters: CounterChecker = field(default_factory=CounterChecker)
    _capabilities: CapabilitySet | None = field(default=None, init=False)
    _checks: list[CheckRecord] = field(default_factory=list, init=False)
    _problems: list[str] = field(default_factory=list, init=False)
    _observations: list[str] = field(default_factory=list, init=False)
    _warnings: list[str] = field(default_factory=list, init=False)

    def initialize(
        self,
        versions: Iterable[str],
        extensions: Iterable[str],
        options: Mapping[str, bool],
    ) -> None:
        """Store the capabilities advertised by the device.

        Raises:
            TrackerStateError: If the tracker was already initialized

        """
        if self._capabilities is not None:
            raise TrackerStateError("Device capabilities were already initialized")

        self._capabilities = CapabilitySet(
            versions=frozenset(versions),
            extensions=frozenset(extensions),
            options={
                name: True if name in MUTABLE_OPTIONS else bool(value)
                for name, value in options.items()
            },
        )
        log.info(
            "Device supports versions %s",
            ", ".join(sorted(self._capabilities.versions)),
        )

    @property
    def capabilities(self) -> CapabilitySet:
        """Capabilities of the device, empty before initialization."""
        return self._capabilities or CapabilitySet()

    def has_version(self, name: str) -> bool:
        return name in self.capabilities.versions

    def has_extension(self, name: str) -> bool:
        return name in self.capabilities.extensions

    def has_option(self, name: str) -> bool:
        return self.capabilities.options.get(name, False)

    def add_observation(self, text: str) -> None:
        self._observations.append(text)

    def add_problem(self, text: str) -> None:
        self._problems.append(text)

    def register_counter(self, name: str, value: int) -> None:
        """Record a signature counter reading."""
        self.counters.register(name, value)

    def check_status(self, *args: Any) -> bool:
        """Check a status, a status pair or an outcome.

        Accepted forms:
            check_status(actual): ``actual`` must be the success code.
            check_status(expected, actual): see ``statuses_match``.
            check_status(outcome): a ``Success`` always passes, a ``Failure``
                fails.

        Mismatches print a diagnostic line to the sink.
        """
        match args:
            case (Success(),):
                return True
            case (Failure(status=actual),) | (Status() as actual,):
                if not actual.is_success:
                    self.sink.line(f"The failing error code is `{actual.symbol}`.")
                return actual.is_success
            case (Status() as expected, Status() as actual):
                if expected is not actual:
                    self.sink.line(
                        f"Expected error code `{expected.symbol}`, "
                        f"got `{actual.symbol}`."
                    )
                return statuses_match(expected, actual)
        raise TypeError(f"Unsupported arguments for check_status: {args!r}")

    def check_and_report(self, *args: Any) -> bool:
        """Run a check and record its outcome under a label.

        Accepted forms:
            check_and_report(passed, label)
            check_and_report(outcome, label)
            check_and_report(expected, actual, label)

        A status pair that differs but still passes through the
        ``ERR_OTHER`` wildcard adds a mismatch warning to the report instead
        of a failure.
        """
        match args:
            case (bool() as passed, str() as label):
                return self._record(label, passed)
            case (Success() | Failure() as outcome, str() as label):
                actual = Status.OK if isinstance(outcome, Success) else outcome.status
                return self._record(
                    label,
                    self.check_status(outcome),
                    f"{label} - expected {Status.OK.symbol}, got {actual.symbol}",
                )
            case (Status() as expected, Status() as actual, str() as label):
                passed = self.check_status(expected, actual)
                if passed and expected is not actual:
                    self._warnings.append(
                        f"Expected error code {expected.symbol}, got {actual.symbol}"
                    )
                return self._record(
                    label,
                    passed,
                    f"{label} - expected {expected.symbol}, got {actual.symbol}",
                )
        raise TypeError(f"Unsupported arguments for check_and_report: {args!r}")

    def _record(self, label: str, passed: bool, message: str | None = None) -> bool:
        self._checks.append(CheckRecord(label=label, passed=passed, message=message))
        if not passed:
            log.warning("Failed test: %s", message or label)
        return passed

    @property
    def checks(self) -> list[CheckRecord]:
        return list(self._checks)

    @property
    def passed_count(self) -> int:
        return sum(1 for check in self._checks if check.passed)

    @property
    def failed_checks(self) -> list[CheckRecord]:
        return [check for check in self._checks if not check.passed]

    def report_findings(self, sink: ReportSink | None = None) -> None:
        """Render the human-readable report.

        Args:
            sink: Destination for the report, defaults to the tracker's sink

        """
        sink = sink or self.sink

        sink.line(self.counters.summary())
        sink.line("")
        for text in [*self._problems, *self._observations]:
            sink.line(text)
        sink.line("")
        for warning in self._warnings:
            sink.emphasized(warning, Emphasis.WARNING)
        sink.line("")
        for check in self.failed_checks:
            sink.emphasized(check.failure_text, Emphasis.FAILURE)
        sink.line(f"Passed {self.passed_count} out of {len(self._checks)} tests.")

    def generate_results_json(self, commit: str, date: str) -> dict[str, Any]:
        """Build the structured report.

        Args:
            commit: Commit of the tool that produced the results
            date: Date of the run

        Returns:
            JSON-compatible report with the fields of ``ReportDocument``

        """
        document = ReportDocument(
            passed_test_count=self.passed_count,
            total_test_count=len(self._checks),
            failed_tests=[check.label for check in self.failed_checks],
            problems=list(self._problems),
            observations=list(self._observations),
            counter=self.counters.summary(),
            date=date,
            commit=commit,
        )
        return document.model_dump(mode="json")
