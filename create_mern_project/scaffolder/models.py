"""Data models for a scaffolding run.

``ProjectSpec`` is the single validated input shared by every phase.  The
planner turns it into ``SubProject`` values made of ``FileEntry`` items; the
installer turns materialized sub-projects into ``InstallStep`` values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..config import Config, PortConfig
from .errors import InvalidProjectName

# npm package names must be lowercase; MongoDB database names may not
# contain "." and are limited to 64 bytes, and "<name>_db" must fit.
PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")
MAX_PROJECT_NAME_LENGTH = 61


def validate_project_name(name: str) -> str:
    """Return *name* unchanged if it is usable, else raise ``ValueError``."""
    if not name:
        raise ValueError("name must not be empty")
    if len(name) > MAX_PROJECT_NAME_LENGTH:
        raise ValueError(
            f"name must be at most {MAX_PROJECT_NAME_LENGTH} characters"
        )
    if not PROJECT_NAME_PATTERN.match(name):
        raise ValueError(
            "use lowercase letters, digits, '-' and '_' only, "
            "starting with a letter or digit"
        )
    return name


class ProjectSpec(BaseModel):
    """Validated, immutable description of the project being generated."""

    model_config = ConfigDict(frozen=True)

    name: str
    target: Path
    ports: PortConfig = Field(default_factory=PortConfig)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_project_name(value)

    @property
    def db_name(self) -> str:
        return f"{self.name}_db"

    @property
    def mongo_uri(self) -> str:
        return f"mongodb://127.0.0.1:27017/{self.db_name}"

    @classmethod
    def from_config(cls, config: Config) -> "ProjectSpec":
        """Build the spec for *config*, raising ``InvalidProjectName`` on bad names."""
        try:
            return cls(
                name=config.project_name,
                target=config.target_dir,
                ports=config.ports,
            )
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"].removeprefix("Value error, ")
            raise InvalidProjectName(config.project_name, reason) from exc


@dataclass(frozen=True)
class FileEntry:
    """A planned output file: path relative to its sub-project root, and content."""

    path: str
    content: str


@dataclass
class SubProject:
    """One output root (backend, client or the project root itself)."""

    name: str
    root: str
    directories: list[str] = field(default_factory=list)
    files: list[FileEntry] = field(default_factory=list)

    def paths(self) -> list[str]:
        """Return file paths relative to the project target."""
        return [_join(self.root, entry.path) for entry in self.files]


@dataclass(frozen=True)
class InstallStep:
    """One invocation of the install command inside a sub-project root."""

    subproject: str
    workdir: Path
    argv: tuple[str, ...]

    @property
    def command(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class InstallResult:
    """Outcome of a successful install step."""

    step: InstallStep
    returncode: int
    duration: float


def _join(root: str, path: str) -> str:
    return f"{root}/{path}" if root else path
