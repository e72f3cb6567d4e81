"""Tests for project_reclaim/cli.py module."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from project_reclaim.cli import main
from tests.assertions import assert_equal
from tests.project_test_utils import age_tree, make_cargo_project, make_npm_project, write_file


@pytest.fixture(autouse=True)
def fixture_terminal_stdout(monkeypatch):
    """Run as if attached to a terminal so text output is the default."""
    monkeypatch.setattr("project_reclaim.args_parser.stdout_is_terminal", lambda: True)


@pytest.fixture(name="stale_project")
def fixture_stale_project(tmp_path):
    """Cargo project with build output, untouched for over a year."""
    project = make_cargo_project(tmp_path.resolve() / "work" / "demo", target_bytes=4096)
    age_tree(project)
    return project


def test_list_mode_reports_without_cleaning(stale_project, capsys):
    """--list prints projects and changes nothing."""
    exit_code = main([str(stale_project.parent), "--list"])
    out = capsys.readouterr().out
    assert exit_code == 0
    assert f"{stale_project} (Cargo; VCS: none)" in out
    assert "Found 1 project(s); 4.0 KiB can be freed." in out
    assert (stale_project / "target").is_dir()


def test_list_mode_includes_fresh_and_clean_projects(tmp_path, capsys):
    """Listing ignores age and build state by default."""
    project = make_cargo_project(tmp_path.resolve() / "fresh")
    assert main([str(tmp_path), "--list"]) == 0
    assert str(project) in capsys.readouterr().out


def test_json_output(stale_project, capsys):
    """--json prints one object per project and no summary."""
    assert main([str(stale_project.parent), "--list", "--json"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    data = json.loads(lines[0])
    assert data["path"] == str(stale_project)
    assert data["freeable_bytes"] == 4096


def test_clean_with_yes(stale_project, capsys):
    """--yes cleans without prompting."""
    with patch("builtins.input") as mock_input:
        exit_code = main([str(stale_project.parent), "--yes"])
    mock_input.assert_not_called()
    assert exit_code == 0
    assert not (stale_project / "target").exists()
    assert (stale_project / "Cargo.toml").is_file()
    assert "Cleanup complete." in capsys.readouterr().out


def test_clean_after_confirmation(stale_project):
    """Pressing Enter accepts the default answer."""
    with patch("builtins.input", return_value=""):
        assert main([str(stale_project.parent)]) == 0
    assert not (stale_project / "target").exists()


def test_user_declines(stale_project, capsys):
    """Declining leaves every project alone."""
    with patch("builtins.input", return_value="n"):
        assert main([str(stale_project.parent)]) == 0
    assert (stale_project / "target").is_dir()
    assert "Aborted by user." in capsys.readouterr().out


def test_dry_run_prints_actions(stale_project, capsys):
    """--dry-run shows removals and performs none."""
    assert main([str(stale_project.parent), "--dry-run"]) == 0
    out = capsys.readouterr().out
    assert f"rm -r '{stale_project / 'target'}'" in out
    assert (stale_project / "target").is_dir()


def test_recent_projects_are_not_cleaned(tmp_path, capsys):
    """Clean mode skips projects modified within the minimum age."""
    project = make_cargo_project(tmp_path.resolve() / "fresh", target_bytes=10)
    assert main([str(tmp_path), "--yes"]) == 0
    assert "No matching projects found." in capsys.readouterr().out
    assert (project / "target").is_dir()


def test_min_stale_zero_cleans_recent_projects(tmp_path):
    """An explicit zero age includes fresh projects."""
    project = make_cargo_project(tmp_path.resolve() / "fresh", target_bytes=10)
    assert main([str(tmp_path), "--yes", "--min-stale", "0"]) == 0
    assert not (project / "target").exists()


def test_type_filter(tmp_path, capsys):
    """--type restricts discovery to the named tools."""
    root = tmp_path.resolve()
    make_cargo_project(root / "rust")
    web = make_npm_project(root / "web")
    assert main([str(root), "--list", "--type", "node"]) == 0
    out = capsys.readouterr().out
    assert str(web) in out
    assert str(root / "rust") not in out


def test_missing_root_exits_with_one(tmp_path):
    """Unresolvable roots fail the run."""
    assert main([str(tmp_path / "missing"), "--list"]) == 1


def test_configuration_error_exits_with_one(monkeypatch):
    """Invalid configuration fails before any work."""
    monkeypatch.setenv("PROJECT_RECLAIM_MIN_STALE", "whenever")
    assert main(["--list"]) == 1


def test_clean_failure_exits_with_two(tmp_path, capsys):
    """Failed cleans are counted and reported; other projects continue."""
    root = tmp_path.resolve()
    write_file(root / "service" / "pom.xml", "<project/>")
    other = make_cargo_project(root / "tool", target_bytes=10)
    age_tree(root)
    with patch("project_reclaim.build_tools.base.subprocess.run") as mock_run:
        mock_run.return_value = MagicMock(returncode=1)
        exit_code = main([str(root), "--yes"])
    assert exit_code == 2
    assert not (other / "target").exists()
    assert "Completed with 1 error(s)" in capsys.readouterr().out


def test_archive_outermost_projects(tmp_path):
    """--archive cleans everything, then archives only outer projects."""
    root = tmp_path.resolve()
    outer = make_cargo_project(root / "outer", name="outer", target_bytes=10)
    make_npm_project(outer / "web", module_bytes=10)
    age_tree(root)
    assert main([str(root), "--yes", "--archive"]) == 0
    assert sorted(path.name for path in outer.iterdir()) == ["outer.tar.xz"]
    assert not (root / ".outer~1").exists()


def test_archive_failure_exits_with_two(stale_project):
    """An archive collision is an error for that project only."""
    write_file(stale_project / "demo.tar.xz", b"already here")
    age_tree(stale_project)
    assert main([str(stale_project.parent), "--yes", "--archive"]) == 2
    assert (stale_project / "Cargo.toml").is_file()


class TestJsonMode:
    """In JSON mode stdout carries only JSON lines."""

    def test_redirected_output_defaults_to_json(self, stale_project, capsys, monkeypatch):
        """Without a terminal the report is JSON and the summary is omitted."""
        monkeypatch.setattr("project_reclaim.args_parser.stdout_is_terminal", lambda: False)
        assert main([str(stale_project.parent), "--list"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert_equal([json.loads(line)["path"] for line in lines], [str(stale_project)])

    def test_prompt_and_status_go_to_stderr(self, stale_project, capsys):
        """Confirmation and completion messages stay off stdout."""
        with patch("builtins.input", return_value="y"):
            assert main([str(stale_project.parent), "--json"]) == 0
        captured = capsys.readouterr()
        for line in captured.out.splitlines():
            json.loads(line)
        assert "Clean up those projects?" in captured.err
        assert "Cleanup complete." in captured.err
        assert not (stale_project / "target").exists()

    def test_dry_run_actions_go_to_stderr(self, stale_project, capsys):
        """Dry-run actions are not mixed into the JSON stream."""
        assert main([str(stale_project.parent), "--json", "--dry-run"]) == 0
        captured = capsys.readouterr()
        assert_equal(len(captured.out.splitlines()), 1)
        assert f"rm -r '{stale_project / 'target'}'" in captured.err
