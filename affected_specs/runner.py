"""Invoke the external test runner on the selected suites."""

import asyncio
import logging
import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from affected_specs.models.config import SelectorConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class RunnerInvocation:
    """A finished runner process with its captured output."""

    command: Sequence[str]
    exit_code: int
    stdout: str
    stderr: str

    @property
    def command_line(self) -> str:
        """Return the command as a copy-pasteable shell string."""
        return shlex.join(self.command)


def build_command(
    project_root: Path, config: SelectorConfig, suite_ids: Sequence[str]
) -> Sequence[str]:
    """Build the runner command line.

    Suite identifiers are deduplicated keeping their first-seen order, and
    ``--coverage`` is appended unless coverage is explicitly disabled.
    """
    runner = Path(config.runner)
    if not runner.is_absolute():
        runner = project_root / runner

    command = [str(runner), "--json", *dict.fromkeys(suite_ids)]
    if config.coverage_enabled:
        command.append("--coverage")
    return command


async def invoke_runner(
    project_root: Path, config: SelectorConfig, suite_ids: Sequence[str]
) -> RunnerInvocation:
    """Run the test runner once in the project root and capture its output.

    Raises:
        TimeoutError: If the runner does not exit within ``config.timeout``

    """
    command = build_command(project_root, config, suite_ids)
    log.info("Running: %s", shlex.join(command))

    process = await asyncio.create_subprocess_exec(
        *command,
        cwd=project_root,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(
            process.communicate(), timeout=config.timeout
        )
    except TimeoutError:
        process.kill()
        await process.wait()
        raise TimeoutError(
            f"Runner did not finish within {config.timeout} seconds"
        ) from None

    invocation = RunnerInvocation(
        command=command,
        exit_code=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )
    log.info("Runner exited with code %d", invocation.exit_code)
    return invocation
