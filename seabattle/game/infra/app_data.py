"""App-data paths for logs and replay scripts."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_app_data_root() -> Path:
    """``SEABATTLE_APP_DATA_DIR`` if set (relative to the project root), else ``appdata/``."""
    configured = os.getenv("SEABATTLE_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_project_root() / candidate
    return resolve_project_root() / "appdata"


def resolve_project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def resolve_logs_dir() -> Path:
    configured = os.getenv("SEABATTLE_LOG_DIR", "").strip()
    if configured:
        return Path(configured)
    return resolve_app_data_root() / "logs"


def resolve_replays_dir() -> Path:
    return resolve_app_data_root() / "replays"


def ensure_app_data_dirs() -> dict[str, Path]:
    """Create app-data directories and return resolved paths."""
    paths = {
        "root": resolve_app_data_root(),
        "logs": resolve_logs_dir(),
        "replays": resolve_replays_dir(),
    }
    for path in paths.values():
        path.mkdir(parents=True, exist_ok=True)
    return paths
