"""Test factories for generating test data."""

from polyfactory import Use
from polyfactory.factories import DataclassFactory
from polyfactory.factories.pydantic_factory import ModelFactory

from ctap_conformance.models.report import CheckRecord, ReportDocument


class CheckRecordFactory(DataclassFactory[CheckRecord]):
    """Factory for CheckRecord."""

    __model__ = CheckRecord

    message = None


class ReportDocumentFactory(ModelFactory[ReportDocument]):
    """Factory for ReportDocument."""

    failed_tests = Use(list[str])
    problems = Use(list[str])
    observations = Use(list[str])
