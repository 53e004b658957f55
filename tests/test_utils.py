"""Unit tests for utility functions (buildassets.utils).

Tests cover:
- normalise_name (case, spaces, idempotence, pass-through characters)
- ensure_dir (relative, nested, existing, failure propagation)
- Rich output helpers (print_summary_table, print_success, print_error)
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from buildassets.utils import (
    ensure_dir,
    normalise_name,
    print_error,
    print_success,
    print_summary_table,
)


# ---------------------------------------------------------------------------
# normalise_name
# ---------------------------------------------------------------------------


class TestNormaliseName:
    @pytest.mark.unit
    def test_lowercases_and_hyphenates(self):
        assert normalise_name("My App") == "my-app"

    @pytest.mark.unit
    def test_already_normalised(self):
        assert normalise_name("my-app") == "my-app"

    @pytest.mark.unit
    def test_empty(self):
        assert normalise_name("") == ""

    @pytest.mark.unit
    def test_idempotent(self):
        for name in ("My App", "Some  Thing", "ÜBER App!", "a_b c"):
            once = normalise_name(name)
            assert normalise_name(once) == once

    @pytest.mark.unit
    def test_repeated_spaces_each_become_hyphens(self):
        assert normalise_name("A  B") == "a--b"

    @pytest.mark.unit
    def test_other_characters_pass_through(self):
        assert normalise_name("Hello, World! v2.0_beta") == "hello,-world!-v2.0_beta"

    @pytest.mark.unit
    def test_unicode_is_lowercased_not_stripped(self):
        assert normalise_name("Café Ünïcode") == "café-ünïcode"

    @pytest.mark.unit
    def test_tabs_are_not_spaces(self):
        assert normalise_name("My\tApp") == "my\tapp"


# ---------------------------------------------------------------------------
# ensure_dir
# ---------------------------------------------------------------------------


class TestEnsureDir:
    @pytest.mark.unit
    def test_creates_nested_directories(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"
        result = ensure_dir(target)
        assert result == target
        assert target.is_dir()

    @pytest.mark.unit
    def test_existing_directory_is_fine(self, tmp_path: Path):
        assert ensure_dir(tmp_path) == tmp_path

    @pytest.mark.unit
    def test_relative_path_resolves_against_cwd(self, tmp_path: Path):
        cwd = os.getcwd()
        os.chdir(tmp_path)
        try:
            result = ensure_dir("build/out")
        finally:
            os.chdir(cwd)
        assert result.is_absolute()
        assert result.resolve() == (tmp_path / "build" / "out").resolve()
        assert result.is_dir()

    @pytest.mark.unit
    def test_file_in_the_way_raises(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a dir", encoding="utf-8")
        with pytest.raises(OSError):
            ensure_dir(blocker / "child")

    @pytest.mark.unit
    def test_mkdir_error_propagates_unchanged(self, tmp_path: Path):
        error = PermissionError("denied")
        with patch.object(Path, "mkdir", side_effect=error):
            with pytest.raises(PermissionError) as excinfo:
                ensure_dir(tmp_path / "nope")
        assert excinfo.value is error


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_summary_table(self):
        out = Console(record=True, width=80)
        print_summary_table({"Directory": "/tmp/build", "Files written": "3"}, title="Done", out=out)
        text = out.export_text()
        assert "Done" in text
        assert "/tmp/build" in text

    @pytest.mark.unit
    def test_print_success_to_custom_console(self):
        out = Console(record=True, width=80)
        print_success("Successfully updated [build]", out=out)
        assert "Successfully updated [build]" in out.export_text()

    @pytest.mark.unit
    def test_print_success_quiet_console_prints_nothing(self):
        out = Console(record=True, quiet=True)
        print_success("hidden", out=out)
        assert out.export_text() == ""

    @pytest.mark.unit
    def test_print_error_uses_error_console(self):
        recorder = Console(record=True, width=80)
        with patch("buildassets.utils.error_console", recorder):
            print_error("config file missing")
        assert "Error: config file missing" in recorder.export_text()
