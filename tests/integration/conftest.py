"""Fixtures for integration tests."""

import json
import subprocess
from pathlib import Path
from typing import Any, Protocol

import pytest


class CommitFn(Protocol):
    """Protocol for git commit function."""

    def __call__(self, message: str) -> str:
        """Create a commit and return its SHA."""


class FakeRunner(Protocol):
    """Protocol for the fake runner controller."""

    def __call__(self, report: dict[str, Any], banner: str = "") -> Path:
        """Set the output of the next run and return the args file path."""


@pytest.fixture
def git_repo(project_root: Path) -> Path:
    """Initialize a git repository in the project root."""
    for command in (
        ["git", "init"],
        ["git", "config", "user.email", "test@example.com"],
        ["git", "config", "user.name", "Test"],
    ):
        subprocess.run(command, cwd=project_root, check=True, capture_output=True)
    return project_root


@pytest.fixture
def git_commit(git_repo: Path) -> CommitFn:
    """Return a function to create commits in the test repo."""

    def _commit(message: str) -> str:
        subprocess.run(
            ["git", "add", "-A"],
            cwd=git_repo,
            check=True,
            capture_output=True,
        )
        subprocess.run(
            ["git", "commit", "--allow-empty", "-m", message],
            cwd=git_repo,
            check=True,
            capture_output=True,
        )
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=git_repo,
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()

    return _commit


@pytest.fixture
def fake_runner(project_root: Path) -> FakeRunner:
    """Install a shell script at the default runner location.

    The script records its arguments one per line and prints a canned report.
    """
    bin_dir = project_root / "node_modules" / ".bin"
    bin_dir.mkdir(parents=True)
    runner = bin_dir / "jest"
    runner.write_text(
        "#!/bin/sh\n"
        'here="$(dirname "$0")"\n'
        'printf "%s\\n" "$@" > "$here/args.txt"\n'
        'cat "$here/stdout.txt"\n'
    )
    runner.chmod(0o755)

    def _configure(report: dict[str, Any], banner: str = "") -> Path:
        (bin_dir / "stdout.txt").write_text(banner + json.dumps(report))
        return bin_dir / "args.txt"

    return _configure
