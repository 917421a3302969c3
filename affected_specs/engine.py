"""Select, run and normalize the tests affected by a change."""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from affected_specs.coverage import map_coverage
from affected_specs.models.config import SelectorConfig
from affected_specs.models.result import TestResult
from affected_specs.normalizer import normalize_results
from affected_specs.report_parser import parse_report
from affected_specs.runner import invoke_runner
from affected_specs.selector import RunContext, select_affected_tests

log = logging.getLogger(__name__)


async def run(
    paths: Iterable[str | Path],
    project_root: Path,
    config: SelectorConfig,
) -> Sequence[TestResult]:
    """Run the suites affected by ``paths`` and return one result per suite.

    Args:
        paths: Changed paths, relative to the project root or absolute
        project_root: Root of the project under test
        config: Selection and runner settings

    Returns:
        Normalized results, all carrying the run's coverage when enabled

    Raises:
        NoEffectError: If nothing was selected or the runner ran no tests
        MalformedReportError: If the runner output holds no valid report
        TimeoutError: If the runner exceeds the configured timeout

    """
    context = RunContext.create(project_root, config)

    affected = select_affected_tests(context, paths)
    suite_ids = affected.suite_ids()
    log.info(
        "Selected %d suite(s) from %d changed path(s): %s",
        len(suite_ids),
        len(affected),
        ", ".join(suite_ids),
    )

    invocation = await invoke_runner(context.project_root, config, suite_ids)
    if invocation.exit_code != 0:
        log.warning("Runner exited with non-zero code %d", invocation.exit_code)

    report = parse_report(invocation)

    coverage = None
    if config.coverage_enabled:
        coverage = map_coverage(report, context.project_root)
        log.info("Coverage collected for %d file(s)", len(coverage))

    return normalize_results(report, coverage)
