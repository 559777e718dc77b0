"""Structured logging for settlement and dispatch.

Human-readable console output for development, JSON lines for production.

Quick Start:
    >>> from pledge.observability import configure_logging, get_logger
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("my-producer")
    >>> log.info("fetch started", url="https://example.com")

Without arguments, configure_logging() reads PLEDGE_LOG_FORMAT and
PLEDGE_LOG_LEVEL through LoggingSettings.
"""

from __future__ import annotations

import logging
import sys
import time
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, TextIO, runtime_checkable

_COLORS = {"dim": "\033[2m", "bold": "\033[1m", "cyan": "\033[36m", "red": "\033[31m", "reset": "\033[0m"}
_NO_COLORS = dict.fromkeys(_COLORS, "")
_LEVEL_COLORS = {
    "debug": "\033[34m",
    "info": "\033[32m",
    "warning": "\033[33m",
    "error": "\033[31m",
    "critical": "\033[41m",
}


@dataclass(slots=True)
class LogEntry:
    """Single log record with merged context."""

    timestamp: float
    level: str
    event: str
    context: dict[str, object]

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Colored console output. Format: timestamp [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        parts = [
            f"{c['dim']}{entry.ts_human}{c['reset']}",
            f"{_LEVEL_COLORS.get(entry.level, '') if self.colors else ''}[{entry.level}]{c['reset']}",
            f"{c['bold']}{entry.event}{c['reset']}",
        ]
        parts += [f"{c['cyan']}{k}{c['reset']}={v!r}" for k, v in sorted(entry.context.items()) if k != "exc_info"]
        print(" ".join(parts), file=self.output)
        if "exc_info" in entry.context:
            print(f"{c['red']}{entry.context['exc_info']}{c['reset']}", file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        payload = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(payload, option=orjson.OPT_NON_STR_KEYS, default=repr).decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer."""

    def render(self, entry: LogEntry) -> None:
        pass


@dataclass(slots=True)
class MemoryRenderer:
    """Keeps entries in memory, for assertions in tests."""

    entries: list[LogEntry] = field(default_factory=list)

    def render(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def events(self, level: str | None = None) -> list[str]:
        return [e.event for e in self.entries if level is None or e.level == level]


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. bind() returns a new logger.

    Example:
        >>> log = BoundLogger(context={"logger": "pledge.promise"})
        >>> log.debug("settled", outcome="ok")
    """

    context: dict[str, object] = field(default_factory=dict)

    def bind(self, **kw: object) -> BoundLogger:
        return BoundLogger(context={**self.context, **kw})

    def _log(self, level: int, event: str, **kw: object) -> None:
        if level < _level:
            return
        _get_renderer().render(LogEntry(time.time(), logging.getLevelName(level).lower(), event, {**self.context, **kw}))

    def debug(self, event: str, **kw: object) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: object) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: object) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: object) -> None: self._log(logging.ERROR, event, **kw)

    def exception(self, event: str, exc: BaseException | None = None, **kw: object) -> None:
        """Log at error level with a formatted traceback."""
        exc_info = "".join(traceback.format_exception(exc)) if exc is not None else traceback.format_exc()
        self._log(logging.ERROR, event, exc_info=exc_info, **kw)


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────

_renderer: LogRenderer | None = None
_level: int = logging.WARNING


def configure_logging(
    format: str | None = None,  # noqa: A002
    level: str | None = None,
    *,
    output: TextIO | None = None,
    renderer: LogRenderer | None = None,
) -> LogRenderer:
    """Configure global logging. Format: "console" (human), "json" (machine), "none".

    Missing arguments fall back to LoggingSettings. An explicit renderer
    overrides format.
    """
    global _renderer, _level
    if format is None or level is None:
        from pledge.foundation.config import get_settings
        cfg = get_settings().logging
        format = format or cfg.format
        level = level or cfg.level
    _level = getattr(logging, level.upper(), logging.WARNING)
    if renderer is None:
        match format:
            case "console": renderer = ConsoleRenderer(output=output or sys.stderr)
            case "json": renderer = JsonRenderer(output=output or sys.stdout)
            case "none": renderer = NoOpRenderer()
            case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _renderer = renderer
    return renderer


def get_logger(name: str | None = None, **initial_context: object) -> BoundLogger:
    """Get a structured logger. Name is added to context as 'logger'."""
    return BoundLogger(context={**initial_context, **({"logger": name} if name else {})})


def _get_renderer() -> LogRenderer:
    global _renderer
    if _renderer is None:
        _renderer = ConsoleRenderer()
    return _renderer
