"""Tests for CLI module."""

import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from affected_specs.cli import (
    build_config,
    format_output,
    log_results_summary,
    run_selection,
)
from affected_specs.errors import MalformedReportError, NoEffectError
from affected_specs.models.config import SelectorConfig
from affected_specs.models.result import TestResult
from affected_specs.testing.factories import TestResultFactory


def test_log_results_summary_pass(caplog: pytest.LogCaptureFixture) -> None:
    """Logs passing suites with their assertion lines."""
    results = [
        TestResult(
            name="tests/Button.spec.js",
            status="pass",
            duration=1.5,
            details=[" [+] Button renders"],
        )
    ]

    with caplog.at_level(logging.INFO):
        log_results_summary(logging.getLogger(), results)

    assert "Test Results Summary:" in caplog.text
    assert "✅ tests/Button.spec.js: pass (1.50s)" in caplog.text
    assert "[+] Button renders" in caplog.text


def test_log_results_summary_failure_message(caplog: pytest.LogCaptureFixture) -> None:
    """Logs the failure message of failed suites."""
    results = [
        TestResult(
            name="tests/Card.spec.js",
            status="fail",
            duration=0.25,
            message="expected true to be false",
        )
    ]

    with caplog.at_level(logging.INFO):
        log_results_summary(logging.getLogger(), results)

    assert "❌ tests/Card.spec.js: fail (0.25s)" in caplog.text
    assert "Message: expected true to be false" in caplog.text


def test_format_output_empty() -> None:
    """Returns empty totals when no results."""
    assert format_output([]) == {
        "total": 0,
        "passed": 0,
        "failed": 0,
        "results": [],
        "coverage": {},
    }


def test_format_output_mixed_results() -> None:
    """Counts passes and failures and lists coverage once."""
    coverage = {"/p/src/A.js": "CU"}
    results = [
        TestResultFactory.build(status="pass", coverage=coverage),
        TestResultFactory.build(status="fail", coverage=coverage),
        TestResultFactory.build(status="fail", coverage=coverage),
    ]

    output = format_output(results)

    assert output["total"] == 3
    assert output["passed"] == 1
    assert output["failed"] == 2
    assert output["coverage"] == coverage
    assert "coverage" not in output["results"][0]


def test_build_config_defaults() -> None:
    """Uses defaults without a config file or overrides."""
    assert build_config(None, {"include": None, "coverage": None}) == SelectorConfig()


def test_build_config_overrides_file(tmp_path: Path) -> None:
    """Applies command line values over the config file."""
    path = tmp_path / "config.yaml"
    path.write_text("include: /src\ncoverage: true\ntest.dirs: [spec]\n")

    config = build_config(
        path, {"include": "/lib", "coverage": False, "test_dirs": None}
    )

    assert config.include == "/lib"
    assert config.coverage is False
    assert list(config.test_dirs) == ["spec"]


class TestRunSelection:
    """Tests for run_selection function."""

    async def test_returns_zero_when_all_pass(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Returns 0 and prints the summary when every suite passes."""
        with patch(
            "affected_specs.cli.run",
            new_callable=AsyncMock,
            return_value=[TestResultFactory.build(status="pass")],
        ) as mock_run:
            exit_code = await run_selection(
                ["src/A.js"], Path("/project"), SelectorConfig()
            )

        assert exit_code == 0
        mock_run.assert_called_once_with(
            ["src/A.js"], Path("/project"), SelectorConfig()
        )
        assert json.loads(capsys.readouterr().out)["passed"] == 1

    async def test_returns_one_on_failure(self) -> None:
        """Returns 1 when any suite fails."""
        with patch(
            "affected_specs.cli.run",
            new_callable=AsyncMock,
            return_value=[
                TestResultFactory.build(status="pass"),
                TestResultFactory.build(status="fail"),
            ],
        ):
            exit_code = await run_selection(
                ["src/A.js"], Path("/project"), SelectorConfig()
            )

        assert exit_code == 1

    async def test_no_effect_is_success(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Returns 0 with zero totals when there is nothing to run."""
        with patch(
            "affected_specs.cli.run",
            new_callable=AsyncMock,
            side_effect=NoEffectError("No tests to run."),
        ):
            exit_code = await run_selection(
                ["README.md"], Path("/project"), SelectorConfig()
            )

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["total"] == 0

    async def test_malformed_report_logs_output(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Returns 2 and logs the runner's command and output."""
        error = MalformedReportError(
            "bad report", command="jest --json A", stdout="garbage", stderr="trace"
        )

        with (
            patch("affected_specs.cli.run", new_callable=AsyncMock, side_effect=error),
            caplog.at_level(logging.ERROR),
        ):
            exit_code = await run_selection(
                ["src/A.js"], Path("/project"), SelectorConfig()
            )

        assert exit_code == 2
        assert "Command: jest --json A" in caplog.text
        assert "garbage" in caplog.text
        assert "trace" in caplog.text

    async def test_timeout_returns_two(self) -> None:
        """Returns 2 when the runner times out."""
        with patch(
            "affected_specs.cli.run",
            new_callable=AsyncMock,
            side_effect=TimeoutError("Runner did not finish within 5 seconds"),
        ):
            exit_code = await run_selection(
                ["src/A.js"], Path("/project"), SelectorConfig(timeout=5)
            )

        assert exit_code == 2

    async def test_missing_runner_returns_two(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Returns 2 and logs when the runner binary does not exist."""
        with (
            patch(
                "affected_specs.cli.run",
                new_callable=AsyncMock,
                side_effect=FileNotFoundError(
                    2, "No such file or directory", "/project/node_modules/.bin/jest"
                ),
            ),
            caplog.at_level(logging.ERROR),
        ):
            exit_code = await run_selection(
                ["src/A.js"], Path("/project"), SelectorConfig()
            )

        assert exit_code == 2
        assert "Test runner not found" in caplog.text
        assert "node_modules/.bin/jest" in caplog.text

    async def test_unresolvable_base_ref_returns_two(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Returns 2 without running anything when git cannot list changes."""
        with (
            patch(
                "affected_specs.cli.get_changed_files",
                new_callable=AsyncMock,
                side_effect=RuntimeError("Cannot resolve git ref 'nope'"),
            ),
            patch("affected_specs.cli.run", new_callable=AsyncMock) as mock_run,
            caplog.at_level(logging.ERROR),
        ):
            exit_code = await run_selection(
                [], Path("/project"), SelectorConfig(), base_ref="nope"
            )

        assert exit_code == 2
        assert "Cannot resolve git ref 'nope'" in caplog.text
        mock_run.assert_not_called()

    async def test_adds_files_changed_since_base_ref(self) -> None:
        """Adds git changes to the explicitly given paths."""
        with (
            patch(
                "affected_specs.cli.get_changed_files",
                new_callable=AsyncMock,
                return_value=["src/B.js"],
            ) as mock_changes,
            patch(
                "affected_specs.cli.run",
                new_callable=AsyncMock,
                return_value=[TestResultFactory.build(status="pass")],
            ) as mock_run,
        ):
            await run_selection(
                ["src/A.js"], Path("/project"), SelectorConfig(), base_ref="main"
            )

        mock_changes.assert_called_once_with(Path("/project"), "main", "HEAD")
        assert mock_run.call_args.args[0] == ["src/A.js", "src/B.js"]


class TestMain:
    """Tests for main CLI entry point."""

    def test_exits_with_run_result(self) -> None:
        """Main function exits with the result from run_selection()."""
        from affected_specs.cli import main

        with (
            patch(
                "sys.argv",
                [
                    "affected-specs",
                    "src/A.js",
                    "--project-root",
                    "/project",
                    "--no-coverage",
                    "--test-dir",
                    "spec",
                ],
            ),
            patch("affected_specs.cli.run_selection") as mock_run_selection,
            patch("affected_specs.cli.asyncio.run", return_value=1) as mock_run,
            pytest.raises(SystemExit) as exc_info,
        ):
            main()

        assert exc_info.value.code == 1
        mock_run.assert_called_once()
        kwargs = mock_run_selection.call_args.kwargs
        assert kwargs["paths"] == ["src/A.js"]
        assert kwargs["project_root"] == Path("/project")
        assert kwargs["config"].coverage is False
        assert list(kwargs["config"].test_dirs) == ["spec"]
