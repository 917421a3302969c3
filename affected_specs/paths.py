"""Classify changed paths by their role in the test suite."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TypeAlias

from affected_specs.models.config import SelectorConfig

PathKind: TypeAlias = Literal["test", "snapshot", "source", "ignored"]


@dataclass(frozen=True, kw_only=True)
class ChangedPath:
    """A changed file resolved under the project root."""

    path: Path
    extension: str
    kind: PathKind

    @property
    def is_test_file(self) -> bool:
        """Spec and snapshot files select themselves."""
        return self.kind in {"test", "snapshot"}


def resolve_path(path: str | Path, project_root: Path) -> Path:
    """Return an absolute, normalized path, relative ones taken from the root."""
    return (project_root / path).resolve()


def path_extension(path: Path) -> str:
    """Return the text after the last dot of the file name, without the dot."""
    return path.suffix.removeprefix(".")


def classify_path(path: Path, config: SelectorConfig) -> ChangedPath:
    """Decide whether a path is a spec, a snapshot, source, or irrelevant.

    Directories and unknown extensions are ignored rather than rejected.
    """
    extension = path_extension(path)

    kind: PathKind
    if path.is_dir() or extension not in config.extensions:
        kind = "ignored"
    elif path.name.endswith(config.test_suffix):
        kind = "test"
    elif path.name.endswith(config.snapshot_suffix):
        kind = "snapshot"
    else:
        kind = "source"

    return ChangedPath(path=path, extension=extension, kind=kind)


def suite_id_from_test_file(path: Path) -> str:
    """Return the base name cut at its first dot.

    ``Foo.spec.js`` becomes ``Foo`` and ``Bar.test.js.snap`` becomes ``Bar``.
    """
    return path.name.split(".", 1)[0]


def suite_id_from_located_file(path: Path, test_suffix: str) -> str:
    """Return the base name with the spec suffix stripped, if it has one."""
    if path.name == test_suffix:
        return path.name
    return path.name.removesuffix(test_suffix)
