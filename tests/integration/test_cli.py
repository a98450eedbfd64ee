"""
Integration Tests for cli.py.

Runs the CLI as a subprocess from the project root. Each test points the
file store at its own tmp_path so runs never touch the real data directory.
"""

import json
import os
import re
import subprocess
import sys
from pathlib import Path

import pytest

# Project root for running commands
PROJECT_ROOT = Path(__file__).parent.parent.parent

pytestmark = pytest.mark.integration


@pytest.fixture
def run_cli(tmp_path):
    """Run cli.py against a file store in tmp_path."""
    env = {
        **os.environ,
        "TOODOOIST_STORAGE_BACKEND": "file",
        "TOODOOIST_STORAGE_DIRECTORY": str(tmp_path),
        "COLUMNS": "200",
    }

    def run(*args: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, "cli.py", *args],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            env=env,
        )

    return run


def _created_id(result: subprocess.CompletedProcess) -> int:
    match = re.search(r"Created note (\d+)", result.stdout)
    assert match, result.stdout + result.stderr
    return int(match.group(1))


class TestCliBasics:
    """Help, info and config output."""

    def test_help_returns_zero_exit_code(self, run_cli):
        """Should return exit code 0 for --help."""
        result = run_cli("--help")

        assert result.returncode == 0
        assert "Usage:" in result.stdout
        assert "--service" in result.stdout

    def test_info_service_succeeds(self, run_cli):
        """Should display application name and services."""
        result = run_cli("--service", "info")

        assert result.returncode == 0
        assert "Toodooist" in result.stdout
        assert "Storage: file" in result.stdout

    def test_config_service_displays_yaml_settings(self, run_cli):
        """Should display configuration from YAML files."""
        result = run_cli("--service", "config")

        assert result.returncode == 0
        assert "Application Settings" in result.stdout
        assert "Board Settings" in result.stdout
        assert "toodooist_data" in result.stdout

    def test_invalid_service_is_usage_error(self, run_cli):
        """Should reject services that don't exist."""
        result = run_cli("--service", "nope")
        assert result.returncode == 2


class TestCliNotes:
    """Creating, listing and dragging notes through the CLI."""

    def test_empty_board_lists_hint(self, run_cli):
        result = run_cli("--service", "list")

        assert result.returncode == 0
        assert "No notes yet" in result.stdout

    def test_add_persists_note(self, run_cli, tmp_path):
        result = run_cli(
            "--service", "add", "--text", "  Call the plumber ",
            "--due", "2024-01-12", "--color", "mint",
        )

        assert result.returncode == 0
        note_id = _created_id(result)
        [record] = json.loads((tmp_path / "toodooist_data.json").read_text(encoding="utf-8"))
        assert record["id"] == note_id
        assert record["description"] == "Call the plumber"
        assert record["date"] == "2024-01-12"
        assert record["color"] == "#D5E5D5"
        assert record["position"] == {"x": 0.0, "y": 0.0}

    def test_add_then_list(self, run_cli):
        note_id = _created_id(run_cli("--service", "add", "--text", "Buy milk"))

        result = run_cli("--service", "list")

        assert result.returncode == 0
        assert str(note_id) in result.stdout
        assert "Buy milk" in result.stdout
        assert "flow" in result.stdout

    def test_add_without_text_is_usage_error(self, run_cli):
        result = run_cli("--service", "add")
        assert result.returncode == 2

    def test_add_rejects_too_long_text(self, run_cli, tmp_path):
        result = run_cli("--service", "add", "--text", "x" * 121)

        assert result.returncode == 1
        assert "Rejected" in result.stderr
        assert not (tmp_path / "toodooist_data.json").exists()

    def test_drag_places_note(self, run_cli, tmp_path):
        note_id = _created_id(run_cli("--service", "add", "--text", "Move me"))

        result = run_cli("--service", "drag", "--note-id", str(note_id), "--to", "300", "200")

        assert result.returncode == 0
        assert f"Note {note_id} placed at 300, 200" in result.stdout
        [record] = json.loads((tmp_path / "toodooist_data.json").read_text(encoding="utf-8"))
        assert record["position"] == {"x": 300.0, "y": 200.0}

    def test_drag_to_trash_deletes(self, run_cli, tmp_path):
        keep = _created_id(run_cli("--service", "add", "--text", "Keep"))
        gone = _created_id(run_cli("--service", "add", "--text", "Trash me"))

        result = run_cli("--service", "drag", "--note-id", str(gone), "--trash")

        assert result.returncode == 0
        assert f"Note {gone} moved to trash" in result.stdout
        records = json.loads((tmp_path / "toodooist_data.json").read_text(encoding="utf-8"))
        assert [r["id"] for r in records] == [keep]

    def test_drag_unknown_note_fails(self, run_cli):
        result = run_cli("--service", "drag", "--note-id", "1", "--to", "10", "10")

        assert result.returncode == 1
        assert "not found" in result.stderr

    def test_corrupt_store_lists_empty(self, run_cli, tmp_path):
        (tmp_path / "toodooist_data.json").write_text("{broken", encoding="utf-8")

        result = run_cli("--service", "list")

        assert result.returncode == 0
        assert "No notes yet" in result.stdout
