"""Shared fixtures: isolate structlog/logging config and cron env vars per test."""

from __future__ import annotations

import logging
import os

import pytest
import structlog

_CRON_ENV_VARS = ("CRON_SECRET", "PORT")


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def clean_env():
    """Remove CRON_SECRET / PORT before and after the test.

    Needed because dotenv loading writes straight into ``os.environ``.
    """
    saved = {name: os.environ.pop(name) for name in _CRON_ENV_VARS if name in os.environ}
    yield
    for name in _CRON_ENV_VARS:
        os.environ.pop(name, None)
    os.environ.update(saved)
