"""Tests for settings and logging configuration."""

from __future__ import annotations

import io

import orjson
import pytest
from pydantic import ValidationError

from pledge.foundation.config import PledgeSettings, clear_settings_cache, get_settings
from pledge.observability import JsonRenderer, NoOpRenderer, configure_logging, get_logger


# ═════════════════════════════════════════════════════════════════════════════
# Settings
# ═════════════════════════════════════════════════════════════════════════════


def test_defaults() -> None:
    settings = PledgeSettings()
    assert settings.strict_settlement is True
    assert settings.observer_errors == "raise"
    assert settings.logging.level == "WARNING"
    assert settings.logging.format == "console"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLEDGE_STRICT_SETTLEMENT", "false")
    monkeypatch.setenv("PLEDGE_OBSERVER_ERRORS", "log")
    monkeypatch.setenv("PLEDGE_LOG_LEVEL", "debug")
    settings = PledgeSettings()
    assert settings.strict_settlement is False
    assert settings.observer_errors == "log"
    assert settings.logging.level == "DEBUG"


def test_invalid_observer_policy_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLEDGE_OBSERVER_ERRORS", "ignore")
    with pytest.raises(ValidationError):
        PledgeSettings()


def test_get_settings_is_cached_until_cleared(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("PLEDGE_STRICT_SETTLEMENT", "false")
    assert get_settings().strict_settlement is True
    clear_settings_cache()
    assert get_settings().strict_settlement is False


# ═════════════════════════════════════════════════════════════════════════════
# Logging
# ═════════════════════════════════════════════════════════════════════════════


def test_json_renderer_writes_lines() -> None:
    out = io.StringIO()
    configure_logging(format="json", level="INFO", output=out)
    log = get_logger("pledge.test", component="producer")
    log.debug("hidden")
    log.info("fetch started", attempt=1)

    lines = out.getvalue().splitlines()
    assert len(lines) == 1
    record = orjson.loads(lines[0])
    assert record["event"] == "fetch started"
    assert record["level"] == "info"
    assert record["logger"] == "pledge.test"
    assert record["component"] == "producer"
    assert record["attempt"] == 1


def test_console_renderer_writes_key_values() -> None:
    out = io.StringIO()
    configure_logging(format="console", level="DEBUG", output=out)
    get_logger("pledge.test").bind(request="r1").warning("slow")
    line = out.getvalue()
    assert "[warning]" in line
    assert "slow" in line
    assert "request='r1'" in line


def test_configure_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLEDGE_LOG_FORMAT", "none")
    clear_settings_cache()
    assert isinstance(configure_logging(), NoOpRenderer)


def test_unknown_format_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging(format="xml", level="INFO")


def test_json_renderer_is_default_for_json() -> None:
    assert isinstance(configure_logging(format="json", level="INFO"), JsonRenderer)
