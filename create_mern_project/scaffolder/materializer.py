"""Filesystem materialization of a planned layout.

Turns the planner's ``SubProject`` list into real directories and files
under the project target.  The target must be absent or empty; that is
checked before anything is created.  Failures abort immediately and leave
whatever was already written on disk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..utils import console, ensure_dir, write_text
from .errors import FilesystemWriteFailure, TargetNotEmpty
from .models import SubProject


def check_target(target: Path) -> None:
    """Raise ``TargetNotEmpty`` if *target* is a directory with any entry in it.

    An unreadable target is reported as ``FilesystemWriteFailure``.
    """
    try:
        occupied = target.is_dir() and any(target.iterdir())
    except OSError as exc:
        raise FilesystemWriteFailure(target, exc) from exc
    if occupied:
        raise TargetNotEmpty(target)


class Materializer:
    """Creates sub-project directories and writes their files, in order."""

    def __init__(self, verbose: bool = True) -> None:
        self.verbose = verbose

    async def materialize(
        self, target: Path, subprojects: list[SubProject]
    ) -> list[Path]:
        """Write *subprojects* under *target*.

        Sub-projects are processed in the given order; within each one the
        declared directories are created first, then every file is written
        (parent directories on demand, existing files overwritten).

        Returns:
            Written file paths, in write order.

        Raises:
            TargetNotEmpty: *target* already has entries.  Nothing is written.
            FilesystemWriteFailure: a directory or file could not be created.
        """
        check_target(target)
        await self._mkdir(target)

        written: list[Path] = []
        for subproject in subprojects:
            written.extend(await self._materialize_one(target, subproject))
        return written

    async def _materialize_one(
        self, target: Path, subproject: SubProject
    ) -> list[Path]:
        root = target / subproject.root if subproject.root else target

        for directory in subproject.directories:
            await self._mkdir(root / directory)

        written: list[Path] = []
        for entry in subproject.files:
            path = root / entry.path
            try:
                await asyncio.to_thread(write_text, path, entry.content)
            except OSError as exc:
                raise FilesystemWriteFailure(path, exc) from exc
            written.append(path)

        if self.verbose:
            console.print(
                f"  [green]+[/green] {subproject.name}: "
                f"{len(written)} file(s) in {root}"
            )
        return written

    @staticmethod
    async def _mkdir(path: Path) -> None:
        try:
            await asyncio.to_thread(ensure_dir, path)
        except OSError as exc:
            raise FilesystemWriteFailure(path, exc) from exc
