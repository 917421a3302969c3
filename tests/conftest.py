"""Shared fixtures for building throwaway project trees."""

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

import pytest

WriteFileFn: TypeAlias = Callable[..., Path]


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Return an empty project root with symlinks resolved."""
    root = tmp_path.resolve() / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_file(project_root: Path) -> WriteFileFn:
    """Return a function creating a file (and its parents) under the root."""

    def _write(relative: str, content: str = "") -> Path:
        path = project_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
