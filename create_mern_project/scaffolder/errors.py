"""Exceptions raised while scaffolding a project.

Every failure is terminal for the run: the pipeline stops at the first
``ScaffoldError`` and reports it.  Nothing is retried or rolled back.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import InstallStep


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class InvalidProjectName(ScaffoldError):
    """Raised when a project name cannot be used as a package/database name."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid project name {name!r}: {reason}")


class TargetNotEmpty(ScaffoldError):
    """Raised when the target directory already exists and has entries."""

    def __init__(self, target: Path) -> None:
        self.target = target
        super().__init__(
            f'Target directory "{target}" exists and is not empty. '
            "Remove it or choose another project name."
        )


class FilesystemWriteFailure(ScaffoldError):
    """Raised when a directory cannot be created or a file cannot be written."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")


class InstallFailure(ScaffoldError):
    """Raised when an install step exits non-zero or cannot be launched.

    Exactly one of ``returncode`` and ``launch_error`` is set.
    """

    def __init__(
        self,
        step: "InstallStep",
        returncode: int | None = None,
        launch_error: OSError | None = None,
    ) -> None:
        self.step = step
        self.returncode = returncode
        self.launch_error = launch_error
        if launch_error is not None:
            detail = f"could not be launched: {launch_error}"
        else:
            detail = f"exited with code {returncode}"
        super().__init__(
            f"{step.subproject} install failed: `{step.command}` "
            f"(in {step.workdir}) {detail}"
        )
