"""Models for normalized test results."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Result of a single test suite from one runner invocation.

    Coverage is a run-wide artifact: every result of the same run carries
    the same mapping.
    """

    __test__ = False

    name: str
    status: Literal["pass", "fail"]
    duration: float
    details: Sequence[str] = field(default_factory=list)
    message: str = ""
    coverage: Mapping[str, str] = field(default_factory=dict)
