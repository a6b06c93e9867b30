"""create-mern-project scaffolder -- plans, writes and installs a MERN project.

The three building blocks are used in sequence by ``Pipeline``:

* :func:`plan_layout` computes every directory and file for a ``ProjectSpec``.
* :class:`Materializer` writes them under the target directory.
* :class:`InstallOrchestrator` runs ``npm install`` in backend, client and
  root, stopping at the first failure.

Quick usage::

    from create_mern_project.config import Config
    from create_mern_project.scaffolder import (
        InstallOrchestrator, Materializer, ProjectSpec, plan_install_steps, plan_layout,
    )

    spec = ProjectSpec.from_config(Config(project_name="shopcart", base_dir=Path("/tmp")))
    layout = plan_layout(spec)
    await Materializer().materialize(spec.target, layout)
    await InstallOrchestrator().run(plan_install_steps(spec.target, layout))
"""

from create_mern_project.scaffolder.errors import (
    FilesystemWriteFailure,
    InstallFailure,
    InvalidProjectName,
    ScaffoldError,
    TargetNotEmpty,
)
from create_mern_project.scaffolder.installer import (
    CommandRunner,
    InstallOrchestrator,
    SubprocessRunner,
    plan_install_steps,
)
from create_mern_project.scaffolder.materializer import Materializer, check_target
from create_mern_project.scaffolder.models import (
    FileEntry,
    InstallResult,
    InstallStep,
    ProjectSpec,
    SubProject,
)
from create_mern_project.scaffolder.planner import plan_layout
from create_mern_project.scaffolder.templates import TemplateRenderer

__all__ = [
    "CommandRunner",
    "FileEntry",
    "FilesystemWriteFailure",
    "InstallFailure",
    "InstallOrchestrator",
    "InstallResult",
    "InstallStep",
    "InvalidProjectName",
    "Materializer",
    "ProjectSpec",
    "ScaffoldError",
    "SubProject",
    "SubprocessRunner",
    "TargetNotEmpty",
    "TemplateRenderer",
    "check_target",
    "plan_install_steps",
    "plan_layout",
]
