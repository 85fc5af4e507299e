"""Pytest fixtures for container hook tests."""

from __future__ import annotations

import itertools
import logging
import os
import time
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from container_hooks.config import Settings, override_settings, reset_settings
from container_hooks.core.tracing import RecordingTracer

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Generator[Settings, None, None]:
    """Provide test settings that do not log span boundaries."""
    settings = Settings(log_level="DEBUG", trace_spans=False)
    override_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None, None, None]:
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Hook scripts
# ---------------------------------------------------------------------------


@pytest.fixture
def make_hook(tmp_path: Path) -> Callable[[str], str]:
    """Return a factory writing an executable /bin/sh hook script.

    The factory takes the script body and returns the script path.
    """
    counter = itertools.count()

    def _make(body: str) -> str:
        path = tmp_path / f"hook-{next(counter)}.sh"
        path.write_text(f"#!/bin/sh\n{body}\n")
        path.chmod(0o755)
        return str(path)

    return _make


@pytest.fixture
def tracer() -> RecordingTracer:
    return RecordingTracer()


@pytest.fixture
def wait_until_gone() -> Callable[[int], bool]:
    """Return a poller that waits until a pid no longer exists (reaped)."""

    def _wait(pid: int, timeout: float = 3.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            try:
                os.kill(pid, 0)
            except ProcessLookupError:
                return True
            time.sleep(0.05)
        return False

    return _wait
