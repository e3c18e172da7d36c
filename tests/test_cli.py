"""Tests for CLI interface."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from flutter_cleaner import __version__
from flutter_cleaner.cli import app
from flutter_cleaner.config import Config, load_config, save_config
from flutter_cleaner.models import CleanOutcome

runner = CliRunner()


@pytest.fixture
def workspace(tmp_path, make_project, isolated_home):
    """A root holding one Flutter project with 6 KB of caches."""
    root = tmp_path / "work"
    make_project(root / "app", build_files=10, build_bytes=4096, dart_tool_bytes=2048)
    return root


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"flutter-cleaner version {__version__}" in result.stdout

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "flutter-cleaner version" in result.stdout


class TestHelp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("scan", "clean", "doctor", "config"):
            assert command in result.stdout

    def test_clean_help(self):
        result = runner.invoke(app, ["clean", "--help"])
        assert result.exit_code == 0
        assert "--apply" in result.stdout
        assert "--trash" in result.stdout


class TestScan:
    def test_requires_roots(self, isolated_home):
        result = runner.invoke(app, ["scan"])
        assert result.exit_code == 1
        assert "No scan roots specified" in result.output

    def test_json_output(self, workspace):
        result = runner.invoke(app, ["--json", "scan", "--root", str(workspace)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["summary"]["totalProjects"] == 1
        assert data["summary"]["totalReclaimableSize"] == 6144
        kinds = [t["type"] for t in data["priorityProjects"][0]["targets"]]
        assert kinds == ["build", "dart_tool"]

    def test_human_output(self, workspace):
        result = runner.invoke(app, ["scan", "-r", str(workspace)])
        assert result.exit_code == 0
        assert "Scan Results" in result.stdout
        assert "6.00 KB" in result.stdout

    def test_depth(self, workspace):
        result = runner.invoke(app, ["--json", "scan", "-r", str(workspace), "--depth", "1"])
        assert json.loads(result.stdout)["summary"]["totalProjects"] == 0

    def test_negative_depth_rejected(self, workspace):
        result = runner.invoke(app, ["scan", "-r", str(workspace), "--depth", "-1"])
        assert result.exit_code != 0

    def test_profile_restricts_targets(self, workspace):
        (workspace / "app" / ".idea").mkdir()
        (workspace / "app" / ".idea" / "workspace.xml").write_text("x" * 10)

        safe = runner.invoke(app, ["--json", "scan", "-r", str(workspace), "--profile", "safe"])
        aggressive = runner.invoke(
            app, ["--json", "scan", "-r", str(workspace), "--profile", "aggressive"]
        )

        assert json.loads(safe.stdout)["summary"]["totalReclaimableSize"] == 6144
        assert json.loads(aggressive.stdout)["summary"]["totalReclaimableSize"] == 6154

    def test_unknown_profile(self, workspace):
        result = runner.invoke(app, ["scan", "-r", str(workspace), "--profile", "nope"])
        assert result.exit_code == 1
        assert "Unknown profile" in result.output

    def test_uses_configured_roots(self, workspace):
        save_config(Config(preferred_roots=[str(workspace)]))

        result = runner.invoke(app, ["--json", "scan"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["summary"]["totalProjects"] == 1


class TestClean:
    def test_requires_apply(self, workspace):
        result = runner.invoke(app, ["clean", "-r", str(workspace)])

        assert result.exit_code == 1
        assert "--apply flag is required" in result.output
        assert (workspace / "app" / "build").exists()

    def test_apply_yes(self, workspace):
        result = runner.invoke(app, ["--json", "clean", "-r", str(workspace), "--apply", "--yes"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["reclaimedSize"] == 6144
        assert data["success"]
        assert len(data["deletedPaths"]) == 2
        assert not (workspace / "app" / "build").exists()
        assert not (workspace / "app" / ".dart_tool").exists()
        assert (workspace / "app" / "pubspec.yaml").exists()

    def test_human_output(self, workspace):
        result = runner.invoke(app, ["clean", "-r", str(workspace), "-a", "-y"])
        assert result.exit_code == 0
        assert "Cleaning complete!" in result.stdout

    def test_confirmation_declined(self, workspace):
        result = runner.invoke(app, ["clean", "-r", str(workspace), "--apply"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.stdout
        assert (workspace / "app" / "build").exists()

    def test_confirmation_accepted(self, workspace):
        result = runner.invoke(app, ["clean", "-r", str(workspace), "--apply"], input="y\n")

        assert result.exit_code == 0
        assert not (workspace / "app" / "build").exists()

    def test_nothing_to_clean(self, tmp_path, make_project, isolated_home):
        make_project(tmp_path / "empty" / "app")

        result = runner.invoke(app, ["clean", "-r", str(tmp_path / "empty"), "--apply"])

        assert result.exit_code == 0
        assert "No cache files found to clean." in result.stdout

    def test_failure_exit_code(self, workspace):
        with patch("flutter_cleaner.cleaner.delete_directly", return_value=False):
            result = runner.invoke(
                app, ["--json", "clean", "-r", str(workspace), "--apply", "--yes"]
            )

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert not data["success"]
        assert len(data["failedPaths"]) == 2

    def test_json_confirmation_keeps_stdout_clean(self, workspace):
        result = runner.invoke(
            app, ["--json", "clean", "-r", str(workspace), "--apply"], input="y\n"
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["reclaimedSize"] == 6144
        assert not (workspace / "app" / "build").exists()

    def test_json_confirmation_declined(self, workspace):
        result = runner.invoke(
            app, ["--json", "clean", "-r", str(workspace), "--apply"], input="n\n"
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["deletedPaths"] == []
        assert (workspace / "app" / "build").exists()

    def test_closed_stdin_cancels(self, workspace):
        result = runner.invoke(app, ["clean", "-r", str(workspace), "--apply"], input="")

        assert result.exit_code == 0
        assert "Cancelled." in result.stdout
        assert (workspace / "app" / "build").exists()

    def test_json_nothing_to_clean(self, tmp_path, make_project, isolated_home):
        make_project(tmp_path / "empty" / "app")

        result = runner.invoke(
            app, ["--json", "clean", "-r", str(tmp_path / "empty"), "--apply"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "deletedPaths": [],
            "failedPaths": {},
            "reclaimedSize": 0,
            "success": True,
        }

    @patch("flutter_cleaner.cli.CacheCleaner")
    def test_trash_flag(self, mock_cleaner, workspace):
        mock_cleaner.return_value.clean_scan_result.return_value = CleanOutcome()
        result = runner.invoke(app, ["clean", "-r", str(workspace), "--apply", "--yes", "--trash"])

        assert result.exit_code == 0
        assert mock_cleaner.call_args.kwargs["move_to_trash"] is True


class TestDoctor:
    @patch("flutter_cleaner.doctor.get_tool_version", return_value="Not found")
    def test_json(self, mock_version, isolated_home):
        result = runner.invoke(app, ["--json", "doctor"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["homeDirectory"] == str(isolated_home)
        assert "pubCache" in data["cacheLocations"]

    @patch("flutter_cleaner.doctor.get_tool_version", return_value="Flutter 3.22.0")
    def test_human(self, mock_version, isolated_home):
        result = runner.invoke(app, ["doctor"])
        assert result.exit_code == 0
        assert "Environment Information" in result.stdout
        assert "Flutter 3.22.0" in result.stdout


class TestConfigCommand:
    def test_show_defaults(self, isolated_home):
        result = runner.invoke(app, ["--json", "config", "--show"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"preferredRoots": [], "defaultTargets": []}

    def test_set_profile_and_root(self, isolated_home):
        result = runner.invoke(app, ["config", "--profile", "medium", "--add-root", "~/code"])

        assert result.exit_code == 0
        assert "Configuration saved" in result.stdout
        config = load_config()
        assert config.profile == "medium"
        assert config.preferred_roots == ["~/code"]

    def test_add_root_twice(self, isolated_home):
        runner.invoke(app, ["config", "--add-root", "/src"])
        runner.invoke(app, ["config", "--add-root", "/src"])
        assert load_config().preferred_roots == ["/src"]

    def test_unknown_profile(self, isolated_home):
        result = runner.invoke(app, ["config", "--profile", "wild"])
        assert result.exit_code == 1
        assert load_config() is None

    def test_reset(self, isolated_home):
        save_config(Config(preferred_roots=["/src"]))

        result = runner.invoke(app, ["config", "--reset"])

        assert result.exit_code == 0
        assert "Configuration reset." in result.stdout
        assert load_config() is None
