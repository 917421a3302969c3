"""Resolve the ``include`` pattern into the set of eligible source files."""

import logging
import re
from collections.abc import Sequence
from pathlib import Path

log = logging.getLogger(__name__)

INCLUDED_EXTENSIONS = ("js", "jsx")
MAX_INCLUDE_DEPTH = 3


def expand_braces(pattern: str) -> Sequence[str]:
    """Expand shell-style ``{a,b}`` alternatives, nested ones included.

    An unbalanced brace is kept literally.
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    alternatives: list[str] = []
    last = start + 1
    for index in range(start, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                alternatives.append(pattern[last:index])
                end = index
                break
        elif char == "," and depth == 1:
            alternatives.append(pattern[last:index])
            last = index + 1
    else:
        return [pattern]

    prefix, suffix = pattern[:start], pattern[end + 1 :]
    expanded: list[str] = []
    for alternative in alternatives:
        expanded.extend(expand_braces(prefix + alternative + suffix))
    return expanded


def resolve_include_dirs(project_root: Path, include: str) -> Sequence[Path]:
    """Return the directories under the root matching the include pattern."""
    directories: list[Path] = []
    for pattern in expand_braces(include):
        # glob-style "**" matches a single path component, like "*"
        relative = re.sub(r"\*{2,}", "*", pattern).strip("/")
        candidates = [project_root] if not relative else project_root.glob(relative)
        directories.extend(sorted(c for c in candidates if c.is_dir()))
    return directories


def get_included_files(project_root: Path, include: str) -> frozenset[Path]:
    """Return source files up to three levels beneath each included directory.

    Args:
        project_root: Absolute project root
        include: Brace/glob pattern relative to the root (e.g. "/js/{app,lib}")

    Returns:
        Resolved file paths, empty when the pattern matches no directory

    """
    files: set[Path] = set()
    directories = resolve_include_dirs(project_root, include)
    if not directories:
        log.info("Include pattern %r matched no directories", include)
        return frozenset()

    for directory in directories:
        for depth in range(MAX_INCLUDE_DEPTH):
            for extension in INCLUDED_EXTENSIONS:
                pattern = "*/" * depth + f"*.{extension}"
                files.update(path.resolve() for path in directory.glob(pattern))

    log.debug(
        "Include pattern %r resolved to %d file(s) in %d directories",
        include,
        len(files),
        len(directories),
    )
    return frozenset(files)
