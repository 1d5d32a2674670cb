"""Public engine logging API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from engine.diagnostics.json_codec import dumps_text

_STANDARD_RECORD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    }
)


@dataclass(frozen=True, slots=True)
class EngineLoggingConfig:
    """Engine logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dumps_text(payload, lenient=True)


def get_logger(name: str) -> logging.Logger:
    """Return namespaced logger instance."""
    return logging.getLogger(name)


def configure_logging(config: EngineLoggingConfig) -> None:
    """Install root handlers for ``config``."""
    from engine.runtime.logging import configure_engine_logging

    configure_engine_logging(config)


def shutdown_logging() -> None:
    """Flush and stop any background log sink."""
    from engine.runtime.logging import shutdown_engine_logging

    shutdown_engine_logging()


def resolve_log_level_name(default: str = "INFO") -> str:
    """Level name from ``ENGINE_LOG_LEVEL``, then ``LOG_LEVEL``, then ``default``."""
    from engine.runtime.logging import resolve_log_level_name as _resolve

    return _resolve(default)
