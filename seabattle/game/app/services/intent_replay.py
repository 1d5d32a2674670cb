"""Drive a ``GameEngine`` from JSON-lines intent scripts."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from engine.api.codec import loads
from seabattle.game.app.game_engine import GameEngine
from seabattle.game.app.services.server_sync import decode_server_event
from seabattle.game.app.state import GameState
from seabattle.game.core.errors import InvalidArgumentError
from seabattle.game.core.models import Coord, Side, Winner

logger = logging.getLogger(__name__)

type IntentHandler = Callable[[GameEngine, Mapping[str, Any]], GameState]


def _coord(payload: Mapping[str, Any]) -> Coord:
    raw = payload.get("coord")
    if not isinstance(raw, Mapping) or not isinstance(raw.get("row"), int) or not isinstance(raw.get("col"), int):
        raise InvalidArgumentError(f"Intent needs a coord object with integer row/col, got {raw!r}.")
    return Coord(raw["row"], raw["col"])


def _side(payload: Mapping[str, Any]) -> Side | None:
    raw = payload.get("side")
    if raw is None:
        return None
    try:
        return Side(raw)
    except ValueError as exc:
        raise InvalidArgumentError(f"Unknown side: {raw!r}.") from exc


_HANDLERS: dict[str, IntentHandler] = {
    "init": lambda engine, _p: engine.init(),
    "start": lambda engine, _p: engine.start(),
    "reset": lambda engine, _p: engine.reset(),
    "tick": lambda engine, p: engine.tick(int(p.get("seconds", 1))),
    "timeout": lambda engine, _p: engine.timeout(),
    "deploy": lambda engine, p: engine.deploy(_coord(p), side=_side(p)),
    "select_deployment_cell": lambda engine, p: engine.select_deployment_cell(_coord(p), side=_side(p)),
    "confirm_deployment": lambda engine, p: engine.confirm_deployment(side=_side(p)),
    "select_unit": lambda engine, p: engine.select_unit(str(p["unit_id"]), side=_side(p)),
    "move": lambda engine, p: engine.move(_coord(p), side=_side(p)),
    "queue_shot": lambda engine, p: engine.queue_shot(_coord(p), side=_side(p)),
    "unqueue_shot": lambda engine, p: engine.unqueue_shot(_coord(p), side=_side(p)),
    "clear_shots": lambda engine, p: engine.clear_shots(side=_side(p)),
    "confirm_turn": lambda engine, p: engine.confirm_turn(side=_side(p)),
    "end": lambda engine, p: engine.end(Winner(p["winner"])),
    "server_event": lambda engine, p: engine.apply_server_event(decode_server_event(p["event"])),
}


def apply_intent(engine: GameEngine, payload: Mapping[str, Any]) -> GameState:
    """Run one ``{"intent": name, ...}`` record against ``engine``."""
    name = payload.get("intent")
    handler = _HANDLERS.get(name) if isinstance(name, str) else None
    if handler is None:
        raise InvalidArgumentError(f"Unknown intent: {name!r}.")
    try:
        return handler(engine, payload)
    except InvalidArgumentError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Malformed {name} intent: {exc}") from exc


def replay_lines(engine: GameEngine, lines: Iterable[str]) -> GameState:
    """Apply every non-blank, non-comment JSON line in order."""
    state = engine.state
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            payload = loads(line)
        except ValueError as exc:
            raise InvalidArgumentError(f"Line {line_no}: invalid JSON ({exc}).") from exc
        if not isinstance(payload, Mapping):
            raise InvalidArgumentError(f"Line {line_no}: expected a JSON object.")
        before = engine.revision
        state = apply_intent(engine, payload)
        if engine.revision == before:
            logger.info("replay_intent_ignored line=%d intent=%s", line_no, payload.get("intent"))
    return state


def summarize(state: GameState) -> dict[str, Any]:
    """JSON-ready digest of ``state``."""
    return {
        "phase": state.phase.value,
        "winner": state.winner.value if state.winner is not None else None,
        "turn": {
            "number": state.turn.number,
            "active_side": state.turn.active_side.value,
            "time_remaining": state.turn.time_remaining,
            "available_shots": state.turn.available_shots,
            "action": state.turn.action.value,
            "pending_shots": [coord.label for coord in state.turn.pending_shots],
            "pending_deployment_id": state.turn.pending_deployment_id,
        },
        "fleets": {
            side.value: [
                {
                    "id": unit.unit_id,
                    "class": unit.current_class.value,
                    "health": unit.health,
                    "position": unit.position.label if unit.position is not None else None,
                }
                for unit in fleet
            ]
            for side, fleet in state.fleets.items()
        },
        "log": [f"{entry.seq}. [{entry.kind}] {entry.message}" for entry in state.event_log],
    }
