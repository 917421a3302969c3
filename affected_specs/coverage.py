"""Expand statement coverage into per-line markers."""

import logging
from collections.abc import Mapping
from pathlib import Path

from affected_specs.models.report import FileCoverage, RunnerReport

log = logging.getLogger(__name__)

COVERED = "C"
UNCOVERED = "U"


def count_lines(path: Path) -> int:
    """Count lines, including a last line without a trailing newline."""
    with path.open("rb") as f:
        return sum(1 for _ in f)


def build_line_markers(line_count: int, file_coverage: FileCoverage) -> str:
    """Mark lines touched by any statement as covered.

    Lines are 1-based and each range's end line is exclusive. Character
    ``i`` of the result describes line ``i + 1``.
    """
    markers = [UNCOVERED] * line_count
    for statement in file_coverage.statement_map.values():
        first = max(statement.start.line, 1)
        stop = min(statement.end.line, line_count + 1)
        for line in range(first, stop):
            markers[line - 1] = COVERED
    return "".join(markers)


def map_coverage(report: RunnerReport, project_root: Path) -> Mapping[str, str]:
    """Build the line markers for every file in the report's coverage map.

    Relative file names resolve against the project root. A covered file
    that cannot be read is left out of the result.
    """
    if not report.coverage_map:
        return {}

    markers: dict[str, str] = {}
    for file_name, file_coverage in report.coverage_map.items():
        try:
            line_count = count_lines(project_root / file_name)
        except OSError as e:
            log.warning("Skipping coverage for %s: %s", file_name, e)
            continue
        markers[file_name] = build_line_markers(line_count, file_coverage)

    return markers
