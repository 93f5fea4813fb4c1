"""Unit tests for the package.json dev-script installer."""
from __future__ import annotations

import json

import pytest

from vercel_local_cron.application.install import (
    DEV_SCRIPT,
    InstallResult,
    detect_package_manager,
    install_dev_script,
)
from vercel_local_cron.config import ConfigurationError


def _package(tmp_path, data):
    path = tmp_path / "package.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return path


# ---------------------------------------------------------------------------
# detect_package_manager
# ---------------------------------------------------------------------------
class TestDetectPackageManager:
    @pytest.mark.parametrize(
        "lockfile,manager",
        [("bun.lockb", "bun"), ("pnpm-lock.yaml", "pnpm"), ("yarn.lock", "yarn"), ("package-lock.json", "npm")],
    )
    def test_lockfiles(self, tmp_path, lockfile, manager):
        (tmp_path / lockfile).write_text("")
        assert detect_package_manager(tmp_path) == manager

    def test_no_lockfile_means_npm(self, tmp_path):
        assert detect_package_manager(tmp_path) == "npm"

    def test_bun_takes_precedence(self, tmp_path):
        (tmp_path / "yarn.lock").write_text("")
        (tmp_path / "bun.lockb").write_text("")
        assert detect_package_manager(tmp_path) == "bun"


# ---------------------------------------------------------------------------
# install_dev_script
# ---------------------------------------------------------------------------
class TestInstallDevScript:
    def test_rewrites_dev_script(self, tmp_path):
        path = _package(tmp_path, {"name": "app", "scripts": {"dev": "next dev", "build": "next build"}})
        result = install_dev_script(tmp_path)
        assert result == InstallResult(package_manager="npm", updated=True, previous_script="next dev")
        data = json.loads(path.read_text())
        assert data["scripts"] == {"dev": DEV_SCRIPT, "build": "next build"}
        assert data["name"] == "app"

    def test_output_format(self, tmp_path):
        path = _package(tmp_path, {"name": "app"})
        install_dev_script(tmp_path)
        text = path.read_text()
        assert text.endswith("}\n")
        assert '\n  "name": "app",\n' in text

    def test_creates_scripts_section(self, tmp_path):
        path = _package(tmp_path, {"name": "app"})
        result = install_dev_script(tmp_path)
        assert result.previous_script is None
        assert json.loads(path.read_text())["scripts"] == {"dev": DEV_SCRIPT}

    def test_already_configured_left_untouched(self, tmp_path):
        original = '{"scripts": {"dev": "vercel-local-cron run --port-timeout 5"}}'
        path = _package(tmp_path, original)
        result = install_dev_script(tmp_path)
        assert not result.updated
        assert path.read_text() == original

    def test_reports_detected_manager(self, tmp_path):
        (tmp_path / "pnpm-lock.yaml").write_text("")
        _package(tmp_path, {})
        result = install_dev_script(tmp_path)
        assert result.package_manager == "pnpm"
        assert result.run_dev_command == "pnpm dev"

    def test_run_dev_command_for_npm(self):
        assert InstallResult("npm", True, None).run_dev_command == "npm run dev"

    def test_defaults_to_cwd(self, tmp_path, monkeypatch):
        _package(tmp_path, {})
        monkeypatch.chdir(tmp_path)
        assert install_dev_script().updated

    def test_missing_package_json(self, tmp_path):
        with pytest.raises(ConfigurationError, match="package.json not found"):
            install_dev_script(tmp_path)

    @pytest.mark.parametrize("content", ["{ nope", "[1, 2]", '{"scripts": "next dev"}'])
    def test_malformed_package_json(self, tmp_path, content):
        path = _package(tmp_path, content)
        with pytest.raises(ConfigurationError, match="Failed to update package.json"):
            install_dev_script(tmp_path)
        assert path.read_text() == content
