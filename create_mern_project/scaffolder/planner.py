"""Layout planning: ``ProjectSpec`` in, ordered ``SubProject`` list out.

Every generated file is produced by a pure function of the spec, registered
in a static table keyed by its path relative to the sub-project root.  JSON
manifests are built as dicts and serialised; everything else is a Jinja2
template.  Nothing here touches the target filesystem, so the same spec
always yields byte-identical output.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from .models import FileEntry, ProjectSpec, SubProject
from .templates import TemplateRenderer

FileSource = Callable[[ProjectSpec, TemplateRenderer], str]


# ---------------------------------------------------------------------------
# Template context
# ---------------------------------------------------------------------------


def build_context(spec: ProjectSpec) -> dict[str, Any]:
    """Build the Jinja2 template context for *spec*."""
    return {
        "project_name": spec.name,
        "db_name": spec.db_name,
        "mongo_uri": spec.mongo_uri,
        "ports": spec.ports.as_dict(),
    }


def _template(template_path: str) -> FileSource:
    def render(spec: ProjectSpec, renderer: TemplateRenderer) -> str:
        return renderer.render(template_path, build_context(spec))

    return render


def _manifest(build: Callable[[ProjectSpec], dict[str, Any]]) -> FileSource:
    def render(spec: ProjectSpec, renderer: TemplateRenderer) -> str:
        return json.dumps(build(spec), indent=2)

    return render


# ---------------------------------------------------------------------------
# Manifests
# ---------------------------------------------------------------------------


def backend_manifest(spec: ProjectSpec) -> dict[str, Any]:
    """``backend/package.json``: Express + Mongoose service."""
    return {
        "name": f"{spec.name}-backend",
        "version": "1.0.0",
        "type": "module",
        "main": "server.js",
        "scripts": {
            "dev": "nodemon server.js",
            "start": "node server.js",
        },
        "dependencies": {
            "express": "^4.19.2",
            "mongoose": "^8.6.0",
            "cors": "^2.8.5",
            "dotenv": "^16.4.5",
        },
        "devDependencies": {
            "nodemon": "^3.1.0",
        },
    }


def client_manifest(spec: ProjectSpec) -> dict[str, Any]:
    """``client/package.json``: Vite + React app."""
    return {
        "name": f"{spec.name}-client",
        "private": True,
        "version": "0.0.0",
        "type": "module",
        "scripts": {
            "dev": "vite",
            "build": "vite build",
            "preview": "vite preview",
        },
        "dependencies": {
            "react": "^18.3.1",
            "react-dom": "^18.3.1",
        },
        "devDependencies": {
            "vite": "^5.3.4",
            "@vitejs/plugin-react": "^4.3.1",
        },
    }


def root_manifest(spec: ProjectSpec) -> dict[str, Any]:
    """Root ``package.json``; ``npm run dev`` starts both halves via concurrently."""
    return {
        "name": spec.name,
        "version": "0.1.0",
        "private": True,
        "type": "module",
        "scripts": {
            "dev": 'concurrently "npm --prefix backend run dev" "npm --prefix client run dev"',
            "dev:server": "npm --prefix backend run dev",
            "dev:client": "npm --prefix client run dev",
            "start": "npm --prefix backend run start",
            "build": "npm --prefix client run build",
        },
        "devDependencies": {
            "concurrently": "^8.2.0",
        },
    }


# ---------------------------------------------------------------------------
# File tables (relative path -> source), in write order
# ---------------------------------------------------------------------------

BACKEND_DIRECTORIES: tuple[str, ...] = ("src/models", "src/controllers", "src/routes")

BACKEND_FILES: dict[str, FileSource] = {
    "package.json": _manifest(backend_manifest),
    "server.js": _template("backend/server.js.j2"),
    "src/models/user.model.js": _template("backend/user.model.js.j2"),
    "src/controllers/user.controller.js": _template("backend/user.controller.js.j2"),
    "src/routes/user.routes.js": _template("backend/user.routes.js.j2"),
    ".env.example": _template("backend/dotenv.j2"),
    ".env": _template("backend/dotenv.j2"),
}

CLIENT_DIRECTORIES: tuple[str, ...] = ("src",)

CLIENT_FILES: dict[str, FileSource] = {
    "package.json": _manifest(client_manifest),
    "index.html": _template("client/index.html.j2"),
    "vite.config.js": _template("client/vite.config.js.j2"),
    "src/main.jsx": _template("client/main.jsx.j2"),
    "src/App.jsx": _template("client/App.jsx.j2"),
    "src/styles.css": _template("client/styles.css.j2"),
}

ROOT_DIRECTORIES: tuple[str, ...] = ()

ROOT_FILES: dict[str, FileSource] = {
    "package.json": _manifest(root_manifest),
    ".gitignore": _template("root/gitignore.j2"),
}

# (name, root relative to target, directories, files); order is materialize
# and install order.
LAYOUT: tuple[tuple[str, str, tuple[str, ...], dict[str, FileSource]], ...] = (
    ("backend", "backend", BACKEND_DIRECTORIES, BACKEND_FILES),
    ("client", "client", CLIENT_DIRECTORIES, CLIENT_FILES),
    ("root", "", ROOT_DIRECTORIES, ROOT_FILES),
)


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------


def plan_layout(
    spec: ProjectSpec, renderer: TemplateRenderer | None = None
) -> list[SubProject]:
    """Compute every directory and file for *spec*.

    Returns:
        Sub-projects in the order they must be materialized and installed:
        backend, client, root.
    """
    renderer = renderer or TemplateRenderer()
    subprojects: list[SubProject] = []
    for name, root, directories, files in LAYOUT:
        subprojects.append(
            SubProject(
                name=name,
                root=root,
                directories=list(directories),
                files=[
                    FileEntry(path=path, content=source(spec, renderer))
                    for path, source in files.items()
                ],
            )
        )
    return subprojects
