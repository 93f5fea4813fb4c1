"""Command line interface: ``vercel-local-cron run | jobs | install``."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from vercel_local_cron import __version__
from vercel_local_cron.adapters.http import DEFAULT_DISPATCH_TIMEOUT
from vercel_local_cron.adapters.process import DEFAULT_DEV_COMMAND
from vercel_local_cron.application.install import install_dev_script
from vercel_local_cron.application.runner import LocalCronRunner, RunnerOptions, preview_jobs
from vercel_local_cron.config import DEFAULT_CONFIG_FILE, ConfigurationError, load_job_definitions
from vercel_local_cron.observability.logging import configure_logging

app = typer.Typer(
    name="vercel-local-cron",
    help="Run Vercel cron jobs against your local Next.js dev server.",
    no_args_is_help=True,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Run Vercel cron jobs against your local Next.js dev server."""


@app.command()
def run(
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", envvar="LOCAL_CRON_CONFIG", help="Path to vercel.json."
    ),
    env_file: list[str] = typer.Option(
        [".env.local"], "--env-file", envvar="LOCAL_CRON_ENV_FILE", help="Dotenv file(s) to load (repeatable)."
    ),
    command: str = typer.Option(
        DEFAULT_DEV_COMMAND, "--command", envvar="LOCAL_CRON_COMMAND", help="Dev server command to wrap."
    ),
    cwd: Optional[Path] = typer.Option(None, "--cwd", envvar="LOCAL_CRON_CWD", help="Project directory."),
    port_timeout: float = typer.Option(
        30.0, "--port-timeout", envvar="LOCAL_CRON_PORT_TIMEOUT",
        help="Seconds to wait for the server's port before falling back to PORT or 3000.",
    ),
    dispatch_timeout: float = typer.Option(
        DEFAULT_DISPATCH_TIMEOUT, "--dispatch-timeout", envvar="LOCAL_CRON_DISPATCH_TIMEOUT",
        help="Seconds before a cron request is aborted.",
    ),
    log_level: str = typer.Option("INFO", "--log-level", envvar="LOCAL_CRON_LOG_LEVEL"),
    json_logs: bool = typer.Option(False, "--json-logs", envvar="LOCAL_CRON_JSON_LOGS", help="Emit JSON log lines."),
) -> None:
    """Start the dev server and run its cron jobs until it exits."""
    configure_logging(log_level, json_logs=json_logs)
    options = RunnerOptions(
        config_file=config,
        env_files=tuple(env_file),
        command=command,
        cwd=cwd,
        port_timeout=port_timeout,
        dispatch_timeout=dispatch_timeout,
    )
    exit_code = asyncio.run(LocalCronRunner(options).run())
    raise typer.Exit(exit_code)


@app.command()
def jobs(
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", envvar="LOCAL_CRON_CONFIG", help="Path to vercel.json."
    ),
) -> None:
    """List the cron jobs in vercel.json and when each would run next."""
    try:
        definitions = load_job_definitions(config)
    except ConfigurationError as exc:
        console.print(f"[red]✗ {exc.message}[/red]")
        raise typer.Exit(1) from exc

    if not definitions:
        console.print("[yellow]No cron jobs defined in vercel.json[/yellow]")
        return

    table = Table(title="Cron jobs")
    table.add_column("Path")
    table.add_column("Schedule")
    table.add_column("Next run (UTC)")
    for row in preview_jobs(definitions):
        if row["error"]:
            next_run = f"[red]invalid: {row['error']}[/red]"
        else:
            next_run = row["next_run"] or "never"
        table.add_row(row["path"], row["schedule"], next_run)
    console.print(table)


@app.command()
def install(
    project_dir: Path = typer.Argument(Path("."), help="Next.js project directory."),
) -> None:
    """Make the project's `dev` script run through vercel-local-cron."""
    try:
        result = install_dev_script(project_dir)
    except ConfigurationError as exc:
        console.print(f"[red]✗ Installation failed: {exc.message}[/red]")
        raise typer.Exit(1) from exc

    console.print(f"Detected package manager: [bold]{result.package_manager}[/bold]")
    if result.updated:
        console.print("[green]✓ Updated package.json dev script[/green]")
    else:
        console.print("[yellow]Dev script already configured with vercel-local-cron[/yellow]")
    console.print("\nNext steps:")
    console.print("  1. Make sure vercel.json defines your cron jobs")
    console.print("  2. Add CRON_SECRET to .env.local if your routes check it")
    console.print(f"  3. Run: {result.run_dev_command}")
