"""Extract and decode the JSON report from the runner's stdout."""

import json
import logging

from pydantic import ValidationError

from affected_specs.errors import (
    MalformedReportError,
    NoEffectError,
    ReportNotFoundError,
)
from affected_specs.models.report import RunnerReport
from affected_specs.runner import RunnerInvocation

log = logging.getLogger(__name__)

# Older runner releases open the report with "success", newer ones with the
# "num*" counters. Coverage mode prints a text table before the report.
REPORT_START_MARKERS = ('{"success"', '{"num')


def locate_report_start(stdout: str) -> int | None:
    """Return the index where the JSON report begins, or None if absent."""
    positions = [
        index
        for marker in REPORT_START_MARKERS
        if (index := stdout.find(marker)) != -1
    ]
    return min(positions) if positions else None


def decode_report(invocation: RunnerInvocation) -> RunnerReport:
    """Decode the report from the first report-start marker to the end.

    Raises:
        ReportNotFoundError: If stdout contains no report-start marker
        MalformedReportError: If the payload is not a valid report

    """
    start = locate_report_start(invocation.stdout)
    if start is None:
        raise ReportNotFoundError(
            f"Command '{invocation.command_line}' did not produce a JSON report "
            f"on stdout: {invocation.stdout}",
            command=invocation.command_line,
            stdout=invocation.stdout,
            stderr=invocation.stderr,
        )

    if start:
        log.debug("Skipping %d characters of non-JSON output", start)

    try:
        data = json.loads(invocation.stdout[start:])
        return RunnerReport.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise MalformedReportError(
            f"Command '{invocation.command_line}' did not produce a valid JSON "
            f"report on stdout: {e}",
            command=invocation.command_line,
            stdout=invocation.stdout,
            stderr=invocation.stderr,
        ) from e


def parse_report(invocation: RunnerInvocation) -> RunnerReport:
    """Decode the report and reject runs that executed nothing.

    Raises:
        NoEffectError: If the runner reports zero tests and zero suites

    """
    report = decode_report(invocation)
    if report.num_total_tests == 0 and report.num_total_test_suites == 0:
        raise NoEffectError("No tests to run.")
    return report
