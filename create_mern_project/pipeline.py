"""create-mern-project pipeline orchestrator.

Implements the three-phase scaffolding run:

Phase 1: PLAN        -- Validate the project name and compute every file.
Phase 2: MATERIALIZE -- Check the target is empty, create directories, write files.
Phase 3: INSTALL     -- Run ``npm install`` in backend, client, then root.

Each phase gates the next; the first failure stops the run.

Usage::

    create-mern-project my-app
    python -m create_mern_project my-app
"""

from __future__ import annotations

import asyncio
import sys
import time
import traceback
from typing import Any

from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel

from create_mern_project.config import DEFAULT_PROJECT_NAME, Config
from create_mern_project.scaffolder import (
    CommandRunner,
    InstallOrchestrator,
    Materializer,
    ProjectSpec,
    ScaffoldError,
    SubProject,
    TemplateRenderer,
    plan_install_steps,
    plan_layout,
)
from create_mern_project.utils import (
    PHASE_NAMES,
    console,
    format_duration,
    print_error,
    print_phase_header,
    print_success,
    print_summary_table,
    print_warning,
)


class Pipeline:
    """Drives PLAN, MATERIALIZE and INSTALL for one project.

    Attributes:
        config: Run configuration (project name, base directory, ports,
            install command).
        state: Dictionary that accumulates results from each phase.
        error: The failure that stopped the run, if any.
    """

    def __init__(
        self,
        config: Config,
        runner: CommandRunner | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.materializer = Materializer()
        self.installer = InstallOrchestrator(runner)
        self.spec: ProjectSpec | None = None
        self.layout: list[SubProject] = []
        self.error: BaseException | None = None
        self.state: dict[str, Any] = {
            "project_name": config.project_name,
            "target": str(config.target_dir),
            "phases_completed": [],
            "phases_failed": [],
            "files_written": 0,
            "installs": [],
            "success": False,
        }

    _PHASE_METHODS: dict[int, str] = {
        1: "phase1_plan",
        2: "phase2_materialize",
        3: "phase3_install",
    }

    async def run(self) -> dict[str, Any]:
        """Execute all phases in order, stopping at the first failure.

        Returns:
            The final state dictionary, including a top-level ``success``
            boolean and, on failure, ``failed_phase``, ``error_type`` and
            ``error``.
        """
        pipeline_start = time.monotonic()

        console.print(
            Panel(
                f"[bold bright_cyan]Creating MERN project[/bold bright_cyan]\n"
                f"Project : {escape(self.config.project_name)}\n"
                f"Target  : {escape(str(self.config.target_dir))}",
                title="[bold]create-mern-project[/bold]",
                border_style="bright_cyan",
            )
        )

        all_success = True

        for phase_num in sorted(self._PHASE_METHODS):
            phase_name = PHASE_NAMES[phase_num]
            print_phase_header(phase_num, phase_name)

            phase_start = time.monotonic()
            try:
                result = await getattr(self, self._PHASE_METHODS[phase_num])()
                elapsed = time.monotonic() - phase_start
                self.state[f"phase{phase_num}"] = result
                self.state["phases_completed"].append(phase_num)
                print_success(
                    f"Phase {phase_num} ({phase_name}) completed in {format_duration(elapsed)}"
                )

            except ScaffoldError as exc:
                all_success = False
                self._record_failure(phase_num, exc)
                print_error(f"✖ Failed: {escape(str(exc))}")
                break

            except Exception as exc:
                all_success = False
                self._record_failure(phase_num, exc)
                print_error(f"✖ Failed: {escape(str(exc))}")
                console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
                break

        total_elapsed = time.monotonic() - pipeline_start
        self.state["success"] = all_success
        self.state["total_duration"] = format_duration(total_elapsed)

        self._print_final_summary()
        return self.state

    def _record_failure(self, phase_num: int, exc: BaseException) -> None:
        self.error = exc
        self.state["phases_failed"].append(phase_num)
        self.state["failed_phase"] = PHASE_NAMES[phase_num]
        self.state["error_type"] = type(exc).__name__
        self.state["error"] = str(exc)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    async def phase1_plan(self) -> dict[str, Any]:
        """Validate the project name and compute the full layout."""
        self.spec = ProjectSpec.from_config(self.config)
        self.layout = plan_layout(self.spec, self.renderer)

        for subproject in self.layout:
            console.print(
                f"  [green]+[/green] {subproject.name}: "
                f"{len(subproject.files)} file(s), "
                f"{len(subproject.directories)} director(y/ies)"
            )

        return {
            "target": str(self.spec.target),
            "files": [path for sp in self.layout for path in sp.paths()],
        }

    async def phase2_materialize(self) -> dict[str, Any]:
        """Write the planned layout to disk."""
        assert self.spec is not None
        written = await self.materializer.materialize(self.spec.target, self.layout)
        self.state["files_written"] = len(written)
        console.print(
            "\nFiles created. Installing dependencies. This may take a few minutes..."
        )
        return {"written": [str(p) for p in written]}

    async def phase3_install(self) -> dict[str, Any]:
        """Run the install command in backend, client and root."""
        assert self.spec is not None
        steps = plan_install_steps(self.spec.target, self.layout, self.config.install)
        results = await self.installer.run(steps)
        self.state["installs"] = [r.step.subproject for r in results]
        return {
            "steps": [
                {
                    "subproject": r.step.subproject,
                    "command": r.step.command,
                    "duration": format_duration(r.duration),
                }
                for r in results
            ]
        }

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def _print_final_summary(self) -> None:
        console.print()
        summary = {
            "Project": self.config.project_name,
            "Target": str(self.config.target_dir),
            "Phases completed": ", ".join(
                PHASE_NAMES[p] for p in self.state["phases_completed"]
            ) or "none",
            "Files written": str(self.state["files_written"]),
            "Installs": ", ".join(self.state["installs"]) or "none",
            "Duration": self.state.get("total_duration", "?"),
        }
        if not self.state["success"]:
            summary["Failed phase"] = self.state.get("failed_phase", "?")
        print_summary_table(summary, title="Run Summary")

        if not self.state["success"]:
            if self.state.get("files_written"):
                print_warning(
                    "Files already written were left in place. Remove "
                    f"{escape(str(self.config.target_dir))} before re-running."
                )
            return

        ports = self.config.ports
        print_success("✅ Installation complete!")
        console.print(
            Panel(
                f"cd {escape(self.config.project_name)}\n"
                "npm run dev\n\n"
                f"Backend:  http://localhost:{ports.backend}\n"
                f"Frontend: http://localhost:{ports.frontend}",
                title="[bold]Next steps[/bold]",
                border_style="green",
            )
        )
        console.print("Note: Edit backend/.env if you want to set a remote MONGO_URI\n")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-mern-project`` and ``python -m create_mern_project``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="create-mern-project",
        description="Scaffold an Express + MongoDB backend and a Vite + React client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-mern-project\n"
            "  create-mern-project shopcart\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help=f"Name of the project directory to create (default: {DEFAULT_PROJECT_NAME})",
    )
    args = parser.parse_args(argv)

    # An empty name argument falls back to the default, like an omitted one.
    try:
        config = Config.from_env(project_name=args.project_name or None)
    except (ValueError, ValidationError) as exc:
        print_error(f"✖ Failed: invalid configuration: {escape(str(exc))}")
        sys.exit(1)

    pipeline = Pipeline(config)
    result = asyncio.run(pipeline.run())

    if not result.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
