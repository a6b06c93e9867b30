"""create-mern-project configuration.

Centralised, typed configuration for a scaffolding run. All settings use
Pydantic v2 models so they can be validated at construction time and built
from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_PROJECT_NAME = "my-mern-app"


def _env_port(name: str) -> int:
    raw = os.environ[name]
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer port, got {raw!r}") from None


class PortConfig(BaseModel):
    """Local ports baked into the generated project.

    ``backend`` is written to ``backend/.env`` and to the Vite proxy target;
    ``frontend`` is the Vite dev server port and only appears in the summary.
    """

    backend: int = Field(default=5000, ge=1, le=65535)
    frontend: int = Field(default=5173, ge=1, le=65535)

    def as_dict(self) -> dict[str, int]:
        """Return a plain ``{service: port}`` mapping."""
        return {"backend": self.backend, "frontend": self.frontend}


class InstallConfig(BaseModel):
    """The external dependency-installation command."""

    command: str = Field(default="npm", min_length=1)
    args: list[str] = Field(default_factory=lambda: ["install"])

    @property
    def argv(self) -> list[str]:
        """Full argument vector, executable first."""
        return [self.command, *self.args]


class Config(BaseModel):
    """Global configuration for one scaffolding run.

    Instances are created once by the CLI entry point and handed to
    ``Pipeline``.  Nothing below the entry point reads the process
    environment or the current working directory.  ``base_dir`` is always
    absolute; a relative value is anchored when the model is built.
    """

    project_name: str = Field(default=DEFAULT_PROJECT_NAME)
    base_dir: Path = Field(default=Path("."), validate_default=True)
    ports: PortConfig = Field(default_factory=PortConfig)
    install: InstallConfig = Field(default_factory=InstallConfig)

    @field_validator("base_dir")
    @classmethod
    def _absolute_base_dir(cls, value: Path) -> Path:
        return value.absolute()

    @property
    def target_dir(self) -> Path:
        """Directory the project is generated into."""
        return self.base_dir / self.project_name

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            MERN_PROJECT_NAME, MERN_BASE_DIR, MERN_BACKEND_PORT,
            MERN_FRONTEND_PORT, MERN_INSTALL_COMMAND.

        Keyword *overrides* win over the environment.

        Raises:
            ValueError: a port variable is not an integer.
            pydantic.ValidationError: a value is out of range or empty.
        """
        port_kwargs: dict[str, Any] = {}
        if os.environ.get("MERN_BACKEND_PORT"):
            port_kwargs["backend"] = _env_port("MERN_BACKEND_PORT")
        if os.environ.get("MERN_FRONTEND_PORT"):
            port_kwargs["frontend"] = _env_port("MERN_FRONTEND_PORT")

        install_kwargs: dict[str, Any] = {}
        if os.environ.get("MERN_INSTALL_COMMAND"):
            install_kwargs["command"] = os.environ["MERN_INSTALL_COMMAND"]

        kwargs: dict[str, Any] = {
            "project_name": os.environ.get("MERN_PROJECT_NAME", DEFAULT_PROJECT_NAME),
            "base_dir": Path(os.environ.get("MERN_BASE_DIR") or Path.cwd()).resolve(),
            "ports": PortConfig(**port_kwargs),
            "install": InstallConfig(**install_kwargs),
        }
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
