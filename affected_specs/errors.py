"""Errors raised while selecting, running and reading tests."""


class NoEffectError(Exception):
    """Raised when a run has nothing to execute or nothing to report.

    This is a successful no-op, not a failure: callers are expected to
    treat it as "no tests to run".
    """


class MalformedReportError(Exception):
    """Raised when the runner's stdout holds no decodable report."""

    def __init__(self, message: str, *, command: str, stdout: str, stderr: str):
        super().__init__(message)
        self.command = command
        self.stdout = stdout
        self.stderr = stderr


class ReportNotFoundError(MalformedReportError):
    """Raised when stdout holds no report-start marker at all."""
