"""Config – read cron job definitions from ``vercel.json``."""
from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from vercel_local_cron.application.scheduler.job import JobDefinition
from vercel_local_cron.config.validation import ConfigurationError

DEFAULT_CONFIG_FILE = "vercel.json"


def parse_job_definitions(config: Any, *, source: str = DEFAULT_CONFIG_FILE) -> tuple[JobDefinition, ...]:
    """Validate an already-decoded ``vercel.json`` mapping.

    A missing or empty ``crons`` list means there is nothing to schedule and
    yields an empty tuple. Anything malformed raises
    :class:`ConfigurationError` naming the offending entry.
    """
    if not isinstance(config, Mapping):
        raise ConfigurationError(f"{source} must contain a JSON object")

    crons = config.get("crons")
    if crons is None:
        return ()
    if not isinstance(crons, list):
        raise ConfigurationError(f'{source} "crons" field must be an array')

    jobs: list[JobDefinition] = []
    for index, entry in enumerate(crons):
        if not isinstance(entry, Mapping):
            raise ConfigurationError(f"{source} crons[{index}] must be an object")
        for field in ("path", "schedule"):
            value = entry.get(field)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f'{source} crons[{index}] missing required "{field}" field',
                    detail={"index": index, "field": field},
                )
        path = entry["path"].strip()
        if not path.startswith("/"):
            raise ConfigurationError(
                f'{source} crons[{index}] "path" must start with "/" (got {path!r})',
                detail={"index": index, "field": "path"},
            )
        jobs.append(JobDefinition(path=path, schedule=entry["schedule"].strip()))
    return tuple(jobs)


def load_job_definitions(path: str | Path | None = None) -> tuple[JobDefinition, ...]:
    """Read and validate a ``vercel.json`` file (default: ``./vercel.json``)."""
    config_path = Path(path) if path is not None else Path.cwd() / DEFAULT_CONFIG_FILE
    config_path = config_path.resolve()
    try:
        content = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(f"{config_path.name} not found at {config_path}", cause=exc) from exc
    except OSError as exc:
        raise ConfigurationError(f"Could not read {config_path}: {exc}", cause=exc) from exc

    try:
        config = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"{config_path.name} is not valid JSON: {exc.msg} (line {exc.lineno})", cause=exc
        ) from exc
    return parse_job_definitions(config, source=config_path.name)


__all__ = ["DEFAULT_CONFIG_FILE", "load_job_definitions", "parse_job_definitions"]
