"""Dependency installation for a materialized project.

Runs the install command (``npm install`` by default) once per sub-project
root, one at a time, with the child's output streamed straight to the
terminal.  The first failure stops the sequence; later steps are never
started and nothing is retried.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Protocol, Sequence

from ..config import InstallConfig
from ..utils import console, format_duration, run_command
from .errors import InstallFailure
from .models import InstallResult, InstallStep, SubProject


class CommandRunner(Protocol):
    """Runs one external command and reports its exit status."""

    async def run(self, workdir: Path, argv: Sequence[str]) -> int:
        ...


class SubprocessRunner:
    """Production runner: a real child process with inherited stdio."""

    async def run(self, workdir: Path, argv: Sequence[str]) -> int:
        return await run_command(list(argv), cwd=workdir)


def plan_install_steps(
    target: Path,
    subprojects: list[SubProject],
    install: InstallConfig | None = None,
) -> list[InstallStep]:
    """Build one ``InstallStep`` per sub-project, preserving their order."""
    install = install or InstallConfig()
    return [
        InstallStep(
            subproject=sp.name,
            workdir=target / sp.root if sp.root else target,
            argv=tuple(install.argv),
        )
        for sp in subprojects
    ]


class InstallOrchestrator:
    """Runs install steps sequentially with fail-fast semantics."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner: CommandRunner = runner or SubprocessRunner()

    async def run(self, steps: list[InstallStep]) -> list[InstallResult]:
        """Execute *steps* in order.

        Returns:
            One result per step, all with exit status 0.

        Raises:
            InstallFailure: a step exited non-zero or could not be launched.
                Steps after it are not attempted.
        """
        results: list[InstallResult] = []
        for step in steps:
            console.print(
                f"  [cyan]>[/cyan] [bold]{step.subproject}[/bold]: "
                f"{step.command} [dim]({step.workdir})[/dim]"
            )
            started = time.monotonic()
            try:
                returncode = await self.runner.run(step.workdir, step.argv)
            except OSError as exc:
                raise InstallFailure(step, launch_error=exc) from exc

            if returncode != 0:
                raise InstallFailure(step, returncode=returncode)

            elapsed = time.monotonic() - started
            console.print(
                f"  [green]+[/green] {step.subproject} installed in "
                f"{format_duration(elapsed)}"
            )
            results.append(InstallResult(step=step, returncode=returncode, duration=elapsed))
        return results
