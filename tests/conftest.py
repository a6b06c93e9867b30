"""Shared pytest fixtures for the create-mern-project test suite.

Provides reusable fixtures for:
- Run configurations pointing at a temporary base directory
- Validated project specs
- A recording ``CommandRunner`` double with configurable exit statuses
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from create_mern_project.config import Config
from create_mern_project.scaffolder import ProjectSpec


# ---------------------------------------------------------------------------
# Command runner double
# ---------------------------------------------------------------------------


class RecordingRunner:
    """``CommandRunner`` that records calls instead of launching processes.

    Args:
        statuses: Exit status per sub-project directory name (``backend``,
            ``client``, or the project directory name for root).  Missing
            entries succeed with 0.
        launch_errors: Directory names whose launch raises the given error.
    """

    def __init__(
        self,
        statuses: dict[str, int] | None = None,
        launch_errors: dict[str, OSError] | None = None,
    ) -> None:
        self.statuses = statuses or {}
        self.launch_errors = launch_errors or {}
        self.calls: list[tuple[Path, tuple[str, ...]]] = []

    async def run(self, workdir: Path, argv: Sequence[str]) -> int:
        self.calls.append((Path(workdir), tuple(argv)))
        if workdir.name in self.launch_errors:
            raise self.launch_errors[workdir.name]
        return self.statuses.get(workdir.name, 0)

    @property
    def workdirs(self) -> list[Path]:
        return [workdir for workdir, _ in self.calls]


@pytest.fixture
def recording_runner() -> RecordingRunner:
    """A runner where every install succeeds."""
    return RecordingRunner()


@pytest.fixture
def make_runner():
    """Factory for a ``RecordingRunner`` with configured failures."""
    return RecordingRunner


# ---------------------------------------------------------------------------
# Configuration & specs
# ---------------------------------------------------------------------------


@pytest.fixture
def make_config(tmp_path: Path):
    """Factory for a ``Config`` rooted at ``tmp_path``."""

    def _make(project_name: str = "demo", **kwargs) -> Config:
        return Config(project_name=project_name, base_dir=tmp_path, **kwargs)

    return _make


@pytest.fixture
def shopcart_spec(tmp_path: Path) -> ProjectSpec:
    """Spec for a project called ``shopcart`` under ``tmp_path``."""
    return ProjectSpec.from_config(Config(project_name="shopcart", base_dir=tmp_path))


@pytest.fixture
def demo_spec(tmp_path: Path) -> ProjectSpec:
    """Spec for a project called ``demo`` under ``tmp_path``."""
    return ProjectSpec.from_config(Config(project_name="demo", base_dir=tmp_path))
