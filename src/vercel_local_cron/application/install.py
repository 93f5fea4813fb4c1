"""Application install – point a Next.js project's ``dev`` script at this tool."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from vercel_local_cron.config.validation import ConfigurationError
from vercel_local_cron.observability.logging import get_logger

__all__ = ["DEV_SCRIPT", "InstallResult", "detect_package_manager", "install_dev_script"]

logger = get_logger(__name__)

DEV_SCRIPT = "vercel-local-cron run"
_TOOL_NAME = "vercel-local-cron"

# Checked in order; npm is the fallback.
_LOCKFILES: tuple[tuple[str, str], ...] = (
    ("bun.lockb", "bun"),
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
)


@dataclass(frozen=True)
class InstallResult:
    package_manager: str
    updated: bool
    previous_script: str | None

    @property
    def run_dev_command(self) -> str:
        return "npm run dev" if self.package_manager == "npm" else f"{self.package_manager} dev"


def detect_package_manager(project_dir: str | Path) -> str:
    root = Path(project_dir)
    for lockfile, manager in _LOCKFILES:
        if (root / lockfile).exists():
            return manager
    return "npm"


def install_dev_script(project_dir: str | Path | None = None) -> InstallResult:
    """Rewrite ``scripts.dev`` in ``package.json`` to run ``vercel-local-cron``.

    Leaves the file untouched when the dev script already uses the tool.
    """
    root = Path(project_dir) if project_dir is not None else Path.cwd()
    manager = detect_package_manager(root)
    package_json = root / "package.json"

    try:
        package = json.loads(package_json.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(f"package.json not found at {package_json}", cause=exc) from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Failed to update package.json: {exc}", cause=exc) from exc
    if not isinstance(package, dict):
        raise ConfigurationError("Failed to update package.json: top level is not an object")

    scripts = package.setdefault("scripts", {})
    if not isinstance(scripts, dict):
        raise ConfigurationError('Failed to update package.json: "scripts" is not an object')

    current = scripts.get("dev")
    if isinstance(current, str) and _TOOL_NAME in current:
        logger.info("install.already_configured", dev_script=current)
        return InstallResult(package_manager=manager, updated=False, previous_script=current)

    scripts["dev"] = DEV_SCRIPT
    package_json.write_text(json.dumps(package, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("install.dev_script_updated", previous=current, package_manager=manager)
    return InstallResult(package_manager=manager, updated=True, previous_script=current)
