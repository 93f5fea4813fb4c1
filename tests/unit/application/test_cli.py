"""Unit tests for the typer command line."""
from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from vercel_local_cron import __version__
from vercel_local_cron.cli import app

runner = CliRunner()


def _vercel_json(tmp_path, crons):
    path = tmp_path / "vercel.json"
    path.write_text(json.dumps({"crons": crons}))
    return path


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "run" in result.output
        assert "install" in result.output


# ---------------------------------------------------------------------------
# jobs
# ---------------------------------------------------------------------------
class TestJobsCommand:
    def test_lists_jobs(self, tmp_path):
        path = _vercel_json(tmp_path, [{"path": "/api/a", "schedule": "0 0 * * *"}])
        result = runner.invoke(app, ["jobs", "--config", str(path)])
        assert result.exit_code == 0
        assert "/api/a" in result.output
        assert "0 0 * * *" in result.output

    def test_flags_invalid_schedule(self, tmp_path):
        path = _vercel_json(tmp_path, [{"path": "/api/b", "schedule": "nope"}])
        result = runner.invoke(app, ["jobs", "-c", str(path)])
        assert result.exit_code == 0
        assert "invalid" in result.output

    def test_no_jobs(self, tmp_path):
        path = _vercel_json(tmp_path, [])
        result = runner.invoke(app, ["jobs", "--config", str(path)])
        assert result.exit_code == 0
        assert "No cron jobs defined" in result.output

    def test_missing_config(self, tmp_path):
        result = runner.invoke(app, ["jobs", "--config", str(tmp_path / "vercel.json")])
        assert result.exit_code == 1
        assert "not found" in result.output


# ---------------------------------------------------------------------------
# install
# ---------------------------------------------------------------------------
class TestInstallCommand:
    def test_updates_package_json(self, tmp_path):
        (tmp_path / "package.json").write_text('{"scripts": {"dev": "next dev"}}')
        (tmp_path / "yarn.lock").write_text("")
        result = runner.invoke(app, ["install", str(tmp_path)])
        assert result.exit_code == 0
        assert "yarn" in result.output
        assert "Updated package.json dev script" in result.output
        assert "yarn dev" in result.output
        assert json.loads((tmp_path / "package.json").read_text())["scripts"]["dev"] == "vercel-local-cron run"

    def test_already_configured(self, tmp_path):
        (tmp_path / "package.json").write_text('{"scripts": {"dev": "vercel-local-cron run"}}')
        result = runner.invoke(app, ["install", str(tmp_path)])
        assert result.exit_code == 0
        assert "already configured" in result.output

    def test_missing_package_json(self, tmp_path):
        result = runner.invoke(app, ["install", str(tmp_path)])
        assert result.exit_code == 1
        assert "Installation failed" in result.output


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------
class TestRunCommand:
    def test_nothing_to_schedule_exits_zero(self, tmp_path, clean_env):
        _vercel_json(tmp_path, [])
        result = runner.invoke(app, ["run", "--cwd", str(tmp_path)])
        assert result.exit_code == 0

    def test_missing_config_exits_one(self, tmp_path, clean_env):
        result = runner.invoke(app, ["run", "--cwd", str(tmp_path), "--json-logs"])
        assert result.exit_code == 1

    def test_options_from_environment(self, tmp_path, clean_env, monkeypatch: pytest.MonkeyPatch):
        config = tmp_path / "custom.json"
        config.write_text("{}")
        monkeypatch.setenv("LOCAL_CRON_CONFIG", str(config))
        monkeypatch.setenv("LOCAL_CRON_CWD", str(tmp_path))
        result = runner.invoke(app, ["run"])
        assert result.exit_code == 0
