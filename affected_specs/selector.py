"""Select the test suites affected by a set of changed paths."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from affected_specs.errors import NoEffectError
from affected_specs.include_filter import get_included_files
from affected_specs.locator import find_test_file
from affected_specs.models.config import SelectorConfig
from affected_specs.paths import (
    classify_path,
    resolve_path,
    suite_id_from_located_file,
    suite_id_from_test_file,
)

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class AffectedTestSet:
    """Mapping of each triggering path to the suite it selects."""

    entries: dict[Path, str] = field(default_factory=dict)

    def add(self, path: Path, suite_id: str) -> None:
        """Record the suite selected by a changed path."""
        self.entries[path] = suite_id

    def suite_ids(self) -> Sequence[str]:
        """Return suite identifiers, first-seen order, without duplicates."""
        return list(dict.fromkeys(self.entries.values()))

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, kw_only=True)
class RunContext:
    """State scoped to a single selection-and-run pass."""

    project_root: Path
    config: SelectorConfig
    affected: AffectedTestSet = field(default_factory=AffectedTestSet)

    @classmethod
    def create(cls, project_root: Path, config: SelectorConfig) -> "RunContext":
        """Build a context with a normalized absolute root."""
        return cls(project_root=project_root.resolve(), config=config)


def select_affected_tests(
    context: RunContext, paths: Iterable[str | Path]
) -> AffectedTestSet:
    """Resolve changed paths into the suites that must run.

    Spec and snapshot files select themselves. Other sources are matched to
    a spec file through the test directories, after the include pattern (if
    any) has filtered them. The include pattern never filters spec or
    snapshot files.

    Args:
        context: Run context receiving the selection
        paths: Changed paths, relative to the project root or absolute

    Returns:
        The context's affected test set

    Raises:
        NoEffectError: If no path selects any suite

    """
    root = context.project_root
    config = context.config
    included: frozenset[Path] | None = None
    if config.include is not None:
        included = get_included_files(root, config.include)

    for raw_path in paths:
        changed = classify_path(resolve_path(raw_path, root), config)

        if changed.kind == "ignored":
            log.debug("Skipping %s", changed.path)
            continue

        if changed.is_test_file:
            context.affected.add(changed.path, suite_id_from_test_file(changed.path))
            continue

        if included is not None and changed.path not in included:
            log.debug("Skipping %s, not matched by include pattern", changed.path)
            continue

        test_file = find_test_file(changed.path, changed.extension, root, config)
        if test_file is None or not test_file.is_file():
            log.debug("No test file found for %s", changed.path)
            continue

        suite_id = suite_id_from_located_file(test_file, config.test_suffix)
        log.info("%s is covered by %s", changed.path, suite_id)
        context.affected.add(changed.path, suite_id)

    if not context.affected:
        raise NoEffectError("No tests to run.")

    return context.affected
