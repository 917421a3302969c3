"""Turn runner suite records into normalized test results."""

from collections.abc import Mapping, Sequence

from affected_specs.models.report import PASSED, RunnerReport, SuiteReport
from affected_specs.models.result import TestResult

PASS_MARKER = " [+] "
FAIL_MARKER = " [!] "


def format_details(suite: SuiteReport) -> Sequence[str]:
    """Return one line per assertion, in the runner's order."""
    return [
        (PASS_MARKER if assertion.status == PASSED else FAIL_MARKER)
        + assertion.full_name
        for assertion in suite.assertion_results
    ]


def normalize_suite(
    suite: SuiteReport, coverage: Mapping[str, str] | None = None
) -> TestResult:
    """Convert one suite record, durations going from milliseconds to seconds."""
    return TestResult(
        name=suite.name,
        status="pass" if suite.status == PASSED else "fail",
        duration=(suite.end_time - suite.start_time) / 1000,
        details=format_details(suite),
        message=suite.message,
        coverage=coverage if coverage is not None else {},
    )


def normalize_results(
    report: RunnerReport, coverage: Mapping[str, str] | None = None
) -> Sequence[TestResult]:
    """Convert every suite of the report, attaching the same coverage to each."""
    return [normalize_suite(suite, coverage) for suite in report.test_results]
