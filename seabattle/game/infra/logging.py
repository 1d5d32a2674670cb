"""App-level logging policy over the engine logging API."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime

from engine.api.logging import (
    EngineLoggingConfig,
    JsonFormatter,
    configure_logging,
    resolve_log_level_name,
)
from seabattle.game.infra.app_data import resolve_logs_dir

__all__ = ["JsonFormatter", "build_logging_config", "setup_logging"]


def build_logging_config(*, to_file: bool = True) -> EngineLoggingConfig:
    """Read ``SEABATTLE_LOG_LEVEL``/``LOG_LEVEL`` and ``LOG_FORMAT`` into a pipeline config."""
    level_name = os.getenv("SEABATTLE_LOG_LEVEL") or resolve_log_level_name("INFO")
    return EngineLoggingConfig(
        level_name=level_name.strip().upper(),
        console_format=os.getenv("LOG_FORMAT", "text").strip().lower(),
        file_path=_resolve_run_log_file_path() if to_file else None,
        file_format="json",
    )


def setup_logging(*, to_file: bool = True) -> EngineLoggingConfig:
    config = build_logging_config(to_file=to_file)
    configure_logging(config)
    logging.getLogger(__name__).info("logging_file=%s", config.file_path)
    return config


def _resolve_run_log_file_path() -> str:
    base_dir = resolve_logs_dir()
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(base_dir / f"seabattle_run_{stamp}.jsonl")
