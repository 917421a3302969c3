"""Pydantic models for the runner's JSON report."""

from collections.abc import Mapping, Sequence

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from affected_specs.models.base import Model

PASSED = "passed"


class ReportModel(Model):
    """Base for report models, keyed by the runner's camelCase names."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class AssertionReport(ReportModel):
    """A single assertion inside a suite."""

    full_name: str
    status: str


class SuiteReport(ReportModel):
    """One test file's outcome."""

    name: str
    status: str
    start_time: int
    end_time: int
    message: str = ""
    assertion_results: Sequence[AssertionReport] = Field(default_factory=list)


class LinePosition(ReportModel):
    """Position of a statement boundary."""

    line: int


class StatementRange(ReportModel):
    """Source span of one instrumented statement."""

    start: LinePosition
    end: LinePosition


class FileCoverage(ReportModel):
    """Coverage data for one source file."""

    statement_map: Mapping[str, StatementRange] = Field(default_factory=dict)


class RunnerReport(ReportModel):
    """Top-level report written by ``--json``."""

    num_total_tests: int
    num_total_test_suites: int
    test_results: Sequence[SuiteReport] = Field(default_factory=list)
    coverage_map: Mapping[str, FileCoverage] | None = None
