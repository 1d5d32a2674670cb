"""Env-file loading and game configuration from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from seabattle.game.app.state import DEFAULT_PREMATCH_SECONDS, DEFAULT_TURN_SECONDS, GameConfig

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILES = (
    "appdata/config/.env.app",
    "appdata/config/.env.app.local",
    ".env.app",
    ".env.app.local",
)


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into the process environment.

    Blank lines, ``#`` comments and lines without ``=`` are skipped. Matching
    single or double quotes around a value are stripped.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        if not key:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files in order; later files win when ``override_existing`` is set."""
    for path in tuple(paths) if paths is not None else DEFAULT_ENV_FILES:
        load_env_file(path, override_existing=override_existing)


def load_game_config() -> GameConfig:
    """Build a ``GameConfig`` from ``SEABATTLE_*`` variables.

    ``SEABATTLE_TURN_SECONDS=0`` switches the turn clock off.
    """
    config = GameConfig(
        turn_seconds=max(0, _int("SEABATTLE_TURN_SECONDS", DEFAULT_TURN_SECONDS)),
        prematch_seconds=max(0, _int("SEABATTLE_PREMATCH_SECONDS", DEFAULT_PREMATCH_SECONDS)),
        shared_board=_flag("SEABATTLE_SHARED_BOARD", True),
        movement_enabled=_flag("SEABATTLE_MOVEMENT_ENABLED", True),
    )
    logger.debug("game_config %s", config)
    return config


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return default


def _resolve_env_path(path: str) -> Path:
    """Resolve from the working directory first, then the project root."""
    candidate = Path(path)
    if candidate.exists() or candidate.is_absolute():
        return candidate
    return Path(__file__).resolve().parents[3] / path
