import logging

from engine.api.logging import configure_logging, shutdown_logging
from seabattle.game.infra.app_data import ensure_app_data_dirs, resolve_app_data_root, resolve_logs_dir
from seabattle.game.infra.logging import JsonFormatter, build_logging_config


def test_json_formatter_includes_fields_and_message() -> None:
    logger = logging.getLogger("test.json.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
        extra={"custom": 1},
    )
    payload = JsonFormatter().format(record)
    assert '"msg":"hello world"' in payload
    assert '"fields":{"custom":1}' in payload


def test_build_logging_config_reads_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEABATTLE_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("SEABATTLE_LOG_DIR", raising=False)
    monkeypatch.delenv("SEABATTLE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("ENGINE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    config = build_logging_config(to_file=False)
    assert config.level_name == "DEBUG"
    assert config.console_format == "json"
    assert config.file_path is None

    monkeypatch.setenv("SEABATTLE_LOG_LEVEL", "warning")
    assert build_logging_config(to_file=False).level_name == "WARNING"


def test_build_logging_config_writes_under_app_data_logs(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEABATTLE_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("SEABATTLE_LOG_DIR", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "text")
    try:
        configure_logging(build_logging_config())
        assert logging.getLogger().level == logging.DEBUG
        logging.getLogger("test.logging.file.path").info("hello")
    finally:
        shutdown_logging()

    files = list((tmp_path / "appdata" / "logs").glob("seabattle_run_*.jsonl"))
    assert files


def test_app_data_paths(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEABATTLE_APP_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("SEABATTLE_LOG_DIR", str(tmp_path / "elsewhere"))
    assert resolve_app_data_root() == tmp_path / "data"
    assert resolve_logs_dir() == tmp_path / "elsewhere"
    paths = ensure_app_data_dirs()
    assert paths["replays"].is_dir()
    assert paths["logs"].is_dir()
