"""Unit tests for utility functions (create_mern_project.utils).

Tests cover:
- run_command (exit status, cwd, missing executable, empty command)
- ensure_dir / write_text
- format_duration
- PHASE_NAMES / PHASE_COLORS constants
- Rich output helpers
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from create_mern_project.utils import (
    PHASE_COLORS,
    PHASE_NAMES,
    ensure_dir,
    format_duration,
    print_error,
    print_phase_header,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    write_text,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    async def test_success_returns_zero(self):
        assert await run_command([sys.executable, "-c", "pass"]) == 0

    @pytest.mark.unit
    async def test_returns_exit_status(self):
        code = await run_command([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert code == 3

    @pytest.mark.unit
    async def test_runs_in_cwd(self, tmp_path: Path):
        code = await run_command(
            [sys.executable, "-c", "open('marker.txt', 'w').write('here')"],
            cwd=tmp_path,
        )
        assert code == 0
        assert (tmp_path / "marker.txt").read_text() == "here"

    @pytest.mark.unit
    async def test_missing_executable_raises(self):
        with pytest.raises(FileNotFoundError, match="nonexistent-binary-12345-xyz"):
            await run_command(["nonexistent-binary-12345-xyz", "install"])

    @pytest.mark.unit
    async def test_empty_command_raises(self):
        with pytest.raises(ValueError):
            await run_command([])


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestEnsureDir:
    @pytest.mark.unit
    def test_creates_nested(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"
        assert ensure_dir(target) == target
        assert target.is_dir()

    @pytest.mark.unit
    def test_existing_is_fine(self, tmp_path: Path):
        ensure_dir(tmp_path)
        assert tmp_path.is_dir()


class TestWriteText:
    @pytest.mark.unit
    def test_creates_parents(self, tmp_path: Path):
        path = tmp_path / "x" / "y.txt"
        write_text(path, "hello")
        assert path.read_text(encoding="utf-8") == "hello"

    @pytest.mark.unit
    def test_overwrites(self, tmp_path: Path):
        path = tmp_path / "y.txt"
        path.write_text("old")
        write_text(path, "new")
        assert path.read_text(encoding="utf-8") == "new"


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    def test_seconds(self):
        assert format_duration(3.7) == "3.7s"

    @pytest.mark.unit
    def test_minutes(self):
        assert format_duration(65.2) == "1m 5s"

    @pytest.mark.unit
    def test_hours(self):
        assert format_duration(3661.0) == "1h 1m 1s"

    @pytest.mark.unit
    def test_negative(self):
        assert format_duration(-1) == "0.0s"


# ---------------------------------------------------------------------------
# Constants & output helpers
# ---------------------------------------------------------------------------


class TestPhaseConstants:
    @pytest.mark.unit
    def test_three_phases(self):
        assert PHASE_NAMES == {1: "PLAN", 2: "MATERIALIZE", 3: "INSTALL"}

    @pytest.mark.unit
    def test_every_phase_has_color(self):
        assert set(PHASE_COLORS) == set(PHASE_NAMES)


class TestRichHelpers:
    @pytest.mark.unit
    def test_print_helpers_use_console(self):
        with patch("create_mern_project.utils.console") as mock_console:
            print_success("ok")
            print_error("bad")
            print_warning("careful")
        assert mock_console.print.call_count == 3
        assert "ok" in mock_console.print.call_args_list[0].args[0]
        assert "red" in mock_console.print.call_args_list[1].args[0]

    @pytest.mark.unit
    def test_print_phase_header(self):
        with patch("create_mern_project.utils.console") as mock_console:
            print_phase_header(2, "materialize")
        assert mock_console.print.call_count == 3

    @pytest.mark.unit
    def test_print_summary_table(self):
        with patch("create_mern_project.utils.console") as mock_console:
            print_summary_table({"Project": "demo"}, title="Run Summary")
        table = mock_console.print.call_args_list[0].args[0]
        assert table.title == "Run Summary"
        assert table.row_count == 1
