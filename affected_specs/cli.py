"""CLI entry point for running the tests affected by a change."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from affected_specs.changes import get_changed_files
from affected_specs.config_loader import load_selector_config
from affected_specs.engine import run
from affected_specs.errors import MalformedReportError, NoEffectError
from affected_specs.models.config import SelectorConfig
from affected_specs.models.result import TestResult

STATUS_SYMBOLS = {
    "pass": "✅",
    "fail": "❌",
}


def log_results_summary(log: logging.Logger, results: Sequence[TestResult]) -> None:
    """Log a formatted summary of test results with assertion details."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for result in results:
        symbol = STATUS_SYMBOLS.get(result.status, "?")
        log.info(
            "%s %s: %s (%.2fs)", symbol, result.name, result.status, result.duration
        )
        for line in result.details:
            log.info("  %s", line)
        if result.message:
            log.info("  Message: %s", result.message)


def format_output(results: Sequence[TestResult]) -> dict[str, Any]:
    """Format results for JSON output, coverage listed once for the run."""
    coverage: Mapping[str, str] = results[0].coverage if results else {}
    return {
        "total": len(results),
        "passed": sum(1 for r in results if r.status == "pass"),
        "failed": sum(1 for r in results if r.status == "fail"),
        "results": [
            {
                "name": result.name,
                "status": result.status,
                "duration": result.duration,
                "details": list(result.details),
                "message": result.message,
            }
            for result in results
        ],
        "coverage": dict(coverage),
    }


def build_config(
    config_path: Path | None,
    overrides: Mapping[str, Any],
) -> SelectorConfig:
    """Load the config file, if any, and apply command line overrides."""
    config = load_selector_config(config_path) if config_path else SelectorConfig()
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config
    return SelectorConfig.model_validate({**config.model_dump(), **updates})


async def run_selection(
    paths: Sequence[str],
    project_root: Path,
    config: SelectorConfig,
    base_ref: str | None = None,
    head_ref: str = "HEAD",
) -> int:
    """Run the affected tests and return exit code."""
    log = logging.getLogger("affected_specs")

    changed_paths = list(paths)
    if base_ref is not None:
        log.info("Detecting changed files (base_ref=%s)", base_ref)
        try:
            changed_paths.extend(
                await get_changed_files(project_root, base_ref, head_ref)
            )
        except RuntimeError as e:
            log.error("%s", e)
            return 2

    try:
        results = await run(changed_paths, project_root, config)
    except NoEffectError as e:
        log.info("%s", e)
        print(json.dumps(format_output([])))
        return 0
    except MalformedReportError as e:
        log.error("%s", e)
        log.error("Command: %s", e.command)
        log.error("Stdout:\n%s", e.stdout)
        log.error("Stderr:\n%s", e.stderr)
        return 2
    except TimeoutError as e:
        log.error("%s", e)
        return 2
    except FileNotFoundError as e:
        log.error("Test runner not found: %s", e)
        return 2

    log_results_summary(log, results)
    print(json.dumps(format_output(results), indent=2))

    return 1 if any(result.status == "fail" for result in results) else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run the test suites affected by changed files"
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Changed files, relative to the project root or absolute",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Project root (default: current directory)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML or JSON config file, settings top-level or under 'jest'",
    )
    parser.add_argument(
        "--base-ref",
        help="Also test files changed since this git reference",
    )
    parser.add_argument(
        "--head-ref",
        default="HEAD",
        help="Git reference compared with --base-ref (default: HEAD)",
    )
    parser.add_argument(
        "--include",
        help="Brace/glob pattern of source directories eligible for lookup",
    )
    parser.add_argument(
        "--test-dir",
        dest="test_dirs",
        action="append",
        help="Directory name searched for spec files (repeatable)",
    )
    parser.add_argument(
        "--coverage",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Collect line coverage (default: enabled)",
    )
    parser.add_argument("--runner", help="Path to the test runner binary")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for the runner",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = build_config(
        args.config,
        {
            "include": args.include,
            "test_dirs": args.test_dirs,
            "coverage": args.coverage,
            "runner": args.runner,
            "timeout": args.timeout,
        },
    )

    exit_code = asyncio.run(
        run_selection(
            paths=args.paths,
            project_root=args.project_root,
            config=config,
            base_ref=args.base_ref,
            head_ref=args.head_ref,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
