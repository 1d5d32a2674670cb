"""Headless entry point: replay a JSON-lines intent script and print the outcome."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from engine.api.codec import dumps_text
from engine.api.logging import get_logger, shutdown_logging
from seabattle.game.app.game_engine import GameEngine
from seabattle.game.app.services.intent_replay import replay_lines, summarize
from seabattle.game.core.errors import InvalidArgumentError
from seabattle.game.infra.app_data import ensure_app_data_dirs
from seabattle.game.infra.config import load_default_env_files, load_game_config
from seabattle.game.infra.logging import setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seabattle",
        description="Replay a JSON-lines intent script through the sea battle rules engine.",
    )
    parser.add_argument("script", type=Path, help="File with one JSON intent per line.")
    parser.add_argument("--turn-seconds", type=int, help="Override SEABATTLE_TURN_SECONDS.")
    parser.add_argument(
        "--separate-boards",
        action="store_true",
        help="Give each side its own board instead of a shared one.",
    )
    parser.add_argument("--no-movement", action="store_true", help="Disable manual movement.")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the replay; returns a process exit code."""
    args = build_parser().parse_args(argv)
    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging(to_file=not args.no_log_file)
    logger.info("app_data_paths root=%s logs=%s", paths["root"], paths["logs"])

    config = load_game_config()
    if args.turn_seconds is not None:
        config = replace(config, turn_seconds=max(0, args.turn_seconds))
    if args.separate_boards:
        config = replace(config, shared_board=False)
    if args.no_movement:
        config = replace(config, movement_enabled=False)

    engine = GameEngine(config)
    try:
        with args.script.open(encoding="utf-8") as handle:
            state = replay_lines(engine, handle)
    except (OSError, InvalidArgumentError) as exc:
        logger.error("replay_failed script=%s error=%s", args.script, exc)
        return 1
    finally:
        shutdown_logging()
    sys.stdout.write(dumps_text(summarize(state), pretty=True) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
