"""List the files changed between two git references."""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

log = logging.getLogger(__name__)


async def get_changed_files(
    project_root: Path,
    base_ref: str,
    head_ref: str,
) -> Sequence[str]:
    """Get list of changed files between two git refs, relative to the root."""
    resolved_base = await resolve_ref(project_root, base_ref)
    resolved_head = await resolve_ref(project_root, head_ref)

    process = await asyncio.create_subprocess_exec(
        "git",
        "diff",
        "--name-only",
        "--relative",
        resolved_base,
        resolved_head,
        cwd=project_root,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()

    if process.returncode != 0:
        raise RuntimeError(f"Git diff failed: {stderr.decode().strip()}")

    output = stdout.decode().strip()
    changed = output.split("\n") if output else []
    log.info("%d file(s) changed between %s and %s", len(changed), base_ref, head_ref)
    return changed


async def resolve_ref(project_root: Path, ref: str) -> str:
    """Return a name git can diff against for ``ref``.

    Shallow CI checkouts of a change often carry the target branch only as a
    remote-tracking ref, so ``main`` falls back to ``origin/main``.

    Raises:
        RuntimeError: If neither the ref nor its remote-tracking form exists

    """
    candidates = [ref]
    if not ref.startswith(("origin/", "refs/")):
        candidates.append(f"origin/{ref}")

    for candidate in candidates:
        if await ref_exists(project_root, candidate):
            return candidate

    raise RuntimeError(
        f"Cannot resolve git ref '{ref}' in {project_root} "
        f"(tried: {', '.join(candidates)})"
    )


async def ref_exists(project_root: Path, ref: str) -> bool:
    """Return whether ``ref`` names a commit in the project's repository."""
    process = await asyncio.create_subprocess_exec(
        "git",
        "rev-parse",
        "--verify",
        "--quiet",
        f"{ref}^{{commit}}",
        cwd=project_root,
        stdout=asyncio.subprocess.DEVNULL,
        stderr=asyncio.subprocess.DEVNULL,
    )
    await process.communicate()
    return process.returncode == 0
