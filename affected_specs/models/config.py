"""Configuration for test selection and runner invocation."""

from collections.abc import Sequence
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from affected_specs.models.base import Model

DEFAULT_TEST_DIRS = ("tests", "Tests")
DISABLED_WORDS = frozenset({"disabled", "false", "off", "no", "0"})


class SelectorConfig(Model):
    """Settings read from the ``jest`` section of the project config."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    include: str | None = Field(
        default=None,
        description="Brace/glob pattern of directories holding relevant sources",
    )
    test_dirs: Sequence[str] = Field(
        default=DEFAULT_TEST_DIRS,
        alias="test.dirs",
        description="Directory names searched for spec files",
    )
    coverage: bool | None = Field(
        default=None, description="Coverage switch (None means default, enabled)"
    )
    runner: str = Field(
        default="node_modules/.bin/jest",
        description="Runner binary, relative paths resolve against the project root",
    )
    test_suffix: str = Field(default=".spec.js", description="Spec file suffix")
    snapshot_suffix: str = Field(default=".js.snap", description="Snapshot suffix")
    extensions: Sequence[str] = Field(
        default=("js", "jsx", "snap"),
        description="Extensions eligible for test lookup",
    )
    timeout: float | None = Field(
        default=None, description="Seconds to wait for the runner (None waits forever)"
    )

    @field_validator("test_dirs", mode="before")
    @classmethod
    def _default_when_empty(cls, value: Any) -> Any:
        if not value:
            return DEFAULT_TEST_DIRS
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("coverage", mode="before")
    @classmethod
    def _parse_coverage_switch(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() not in DISABLED_WORDS
        return value

    @property
    def coverage_enabled(self) -> bool:
        """Coverage runs unless explicitly turned off."""
        return self.coverage is not False
