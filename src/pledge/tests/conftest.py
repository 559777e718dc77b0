"""Shared fixtures: fresh settings and captured logs for every test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from pledge.foundation.config import clear_settings_cache
from pledge.observability import MemoryRenderer, configure_logging


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ignore PLEDGE_* from the outer environment and reset the settings cache."""
    for name in ("PLEDGE_STRICT_SETTLEMENT", "PLEDGE_OBSERVER_ERRORS", "PLEDGE_LOG_LEVEL", "PLEDGE_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def logs() -> MemoryRenderer:
    """Capture every log entry at debug level."""
    renderer = MemoryRenderer()
    configure_logging(level="DEBUG", renderer=renderer)
    return renderer
