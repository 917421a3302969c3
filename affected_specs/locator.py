"""Find the spec file belonging to a changed source file."""

import glob
import logging
from collections.abc import Sequence
from pathlib import Path

from affected_specs.models.config import SelectorConfig

log = logging.getLogger(__name__)

MAX_SEARCH_DEPTH = 4


def get_search_locations(test_dirs: Sequence[str]) -> Sequence[str]:
    """Return glob directories to search, nearest first.

    The configured names come first as-is, then each name followed by one
    to ``MAX_SEARCH_DEPTH`` levels of subdirectories.
    """
    locations = [name.strip("/") for name in test_dirs]
    for name in list(locations):
        for depth in range(1, MAX_SEARCH_DEPTH + 1):
            locations.append(name + "/*" * depth)
    return locations


def get_candidate_names(path: Path, extension: str, test_suffix: str) -> Sequence[str]:
    """Return file name patterns that may hold the tests for ``path``.

    ``Button.jsx`` yields ``*Button.jsx`` then ``*Button.spec.js``.
    """
    stem = path.name[: -len(extension) - 1] if extension else path.name
    return [
        "*" + glob.escape(path.name),
        "*" + glob.escape(stem) + test_suffix,
    ]


def find_test_file(
    path: Path,
    extension: str,
    project_root: Path,
    config: SelectorConfig,
) -> Path | None:
    """Search the test directories for the spec file covering ``path``.

    Every (location, candidate) pair is tried in order and the first match is
    returned. Matches resolving outside the project root, and the source
    file itself (compared case-insensitively), are skipped.

    Returns:
        The located spec file, or None when nothing qualifies

    """
    source_key = str(path).casefold()
    candidates = get_candidate_names(path, extension, config.test_suffix)

    for location in get_search_locations(config.test_dirs):
        for candidate in candidates:
            for found in sorted(project_root.glob(f"{location}/{candidate}")):
                resolved = found.resolve()
                if not resolved.is_relative_to(project_root):
                    log.debug("Ignoring %s outside of the project root", found)
                    continue
                if str(resolved).casefold() == source_key:
                    continue
                return resolved

    return None
