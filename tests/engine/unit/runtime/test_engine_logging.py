from __future__ import annotations

import logging
from logging.handlers import QueueHandler

import pytest

from engine.api.logging import (
    EngineLoggingConfig,
    configure_logging,
    resolve_log_level_name,
    shutdown_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield root
    shutdown_logging()
    root.handlers.clear()
    root.handlers.extend(original_handlers)
    root.setLevel(original_level)


def test_console_only_config_installs_single_stream_handler(restore_root_logger) -> None:
    configure_logging(EngineLoggingConfig(level_name="debug"))
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)
    assert restore_root_logger.level == logging.DEBUG


def test_file_config_writes_json_lines_through_queue(restore_root_logger, tmp_path) -> None:
    log_file = tmp_path / "logs" / "run.jsonl"
    configure_logging(EngineLoggingConfig(level_name="INFO", file_path=str(log_file)))
    assert isinstance(restore_root_logger.handlers[0], QueueHandler)

    logging.getLogger("test.engine.file").info("hello %s", "file", extra={"turn": 3})
    shutdown_logging()

    text = log_file.read_text(encoding="utf-8")
    assert '"msg":"hello file"' in text
    assert '"fields":{"turn":3}' in text


def test_unknown_level_falls_back_to_info(restore_root_logger) -> None:
    configure_logging(EngineLoggingConfig(level_name="chatty"))
    assert restore_root_logger.level == logging.INFO


def test_resolve_log_level_name_prefers_engine_variable(monkeypatch) -> None:
    monkeypatch.delenv("ENGINE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    assert resolve_log_level_name("warning") == "WARNING"
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert resolve_log_level_name() == "ERROR"
    monkeypatch.setenv("ENGINE_LOG_LEVEL", " debug ")
    assert resolve_log_level_name() == "DEBUG"
