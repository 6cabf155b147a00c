"""Models for conformance run results."""

from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import Field

from ctap_conformance.models.base import Model


@dataclass(frozen=True, kw_only=True)
class CheckRecord:
    """Outcome of one pass/fail check.

    ``message`` holds the enriched failure text when the check compared
    status codes.
    """

    label: str
    passed: bool
    message: str | None = None

    @property
    def failure_text(self) -> str:
        """Text shown for this check in the failure list."""
        return self.message or self.label


class ReportDocument(Model):
    """Structured report consumed by downstream tooling.

    Field names and types are a stability contract.
    """

    passed_test_count: int = Field(..., description="Number of passed checks")
    total_test_count: int = Field(..., description="Number of checks")
    failed_tests: Sequence[str] = Field(
        default_factory=list, description="Labels of failed checks in call order"
    )
    problems: Sequence[str] = Field(default_factory=list, description="Problems")
    observations: Sequence[str] = Field(
        default_factory=list, description="Observations"
    )
    counter: str = Field(..., description="Signature counter summary")
    date: str = Field(..., description="Date of the run")
    commit: str = Field(..., description="Commit of the tool that ran the tests")
