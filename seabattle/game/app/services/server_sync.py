"""Authoritative server events and how they fold into the local game state."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from engine.api.codec import dumps_bytes, loads
from seabattle.game.app.services.action_flow import move, queue_shot, select_unit
from seabattle.game.app.services.deployment_flow import deploy
from seabattle.game.app.services.intent_policy import reject
from seabattle.game.app.services.match_setup import end_game
from seabattle.game.app.services.turn_flow import confirm_turn
from seabattle.game.app.state import GameState
from seabattle.game.core.errors import InvalidArgumentError
from seabattle.game.core.fleet import find_unit
from seabattle.game.core.models import Coord, Side, Winner

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UnitDeployed:
    side: Side
    unit_id: str
    coord: Coord


@dataclass(frozen=True, slots=True)
class UnitMoved:
    side: Side
    unit_id: str
    coord: Coord


@dataclass(frozen=True, slots=True)
class ShotResolved:
    """A shot the server accepted; it joins the active side's volley."""

    side: Side
    coord: Coord


@dataclass(frozen=True, slots=True)
class TurnAdvanced:
    side: Side


@dataclass(frozen=True, slots=True)
class GameEnded:
    winner: Winner


type ServerEvent = UnitDeployed | UnitMoved | ShotResolved | TurnAdvanced | GameEnded

_TYPE_NAMES: dict[type, str] = {
    UnitDeployed: "unit_deployed",
    UnitMoved: "unit_moved",
    ShotResolved: "shot_resolved",
    TurnAdvanced: "turn_advanced",
    GameEnded: "game_ended",
}


def apply_server_event(state: GameState, event: ServerEvent) -> GameState:
    """Replay ``event`` through the same transitions a local intent would use.

    Events the local rules refuse leave ``state`` unchanged; events naming
    units that do not exist raise ``InvalidArgumentError``.
    """
    logger.debug("server_event type=%s", _TYPE_NAMES.get(type(event), type(event).__name__))
    if isinstance(event, UnitDeployed):
        unit = find_unit(state.fleet(event.side), event.unit_id)
        if state.turn.pending_deployment_id != unit.unit_id:
            return reject(state, "unit_deployed", f"{unit.unit_id} is not the pending unit")
        return deploy(state, event.coord, side=event.side)
    if isinstance(event, UnitMoved):
        find_unit(state.fleet(event.side), event.unit_id)
        selected = state
        if state.turn.selected_unit_id != event.unit_id:
            selected = select_unit(state, event.unit_id, side=event.side)
            if selected is state:
                return state
        moved = move(selected, event.coord, side=event.side)
        return state if moved is selected else moved
    if isinstance(event, ShotResolved):
        return queue_shot(state, event.coord, side=event.side)
    if isinstance(event, TurnAdvanced):
        return confirm_turn(state, side=event.side)
    if isinstance(event, GameEnded):
        return end_game(state, event.winner)
    raise InvalidArgumentError(f"Unsupported server event: {type(event).__name__}.")


def encode_server_event(event: ServerEvent) -> dict[str, Any]:
    """Wire form: a ``type`` tag plus the event fields, coordinates as row/col objects."""
    name = _TYPE_NAMES.get(type(event))
    if name is None:
        raise InvalidArgumentError(f"Unsupported server event: {type(event).__name__}.")
    payload: dict[str, Any] = {"type": name}
    for field_name in event.__dataclass_fields__:
        value = getattr(event, field_name)
        if isinstance(value, Coord):
            value = {"row": value.row, "col": value.col}
        elif isinstance(value, (Side, Winner)):
            value = value.value
        payload[field_name] = value
    return payload


def decode_server_event(payload: Mapping[str, Any]) -> ServerEvent:
    """Parse a wire payload; anything malformed raises ``InvalidArgumentError``."""
    if not isinstance(payload, Mapping):
        raise InvalidArgumentError(f"Server event must be an object, got {type(payload).__name__}.")
    kind = payload.get("type")
    try:
        if kind == "unit_deployed":
            return UnitDeployed(
                side=Side(payload["side"]),
                unit_id=_text(payload["unit_id"]),
                coord=_coord(payload["coord"]),
            )
        if kind == "unit_moved":
            return UnitMoved(
                side=Side(payload["side"]),
                unit_id=_text(payload["unit_id"]),
                coord=_coord(payload["coord"]),
            )
        if kind == "shot_resolved":
            return ShotResolved(side=Side(payload["side"]), coord=_coord(payload["coord"]))
        if kind == "turn_advanced":
            return TurnAdvanced(side=Side(payload["side"]))
        if kind == "game_ended":
            return GameEnded(winner=Winner(payload["winner"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Malformed {kind} event: {exc}") from exc
    raise InvalidArgumentError(f"Unknown server event type: {kind!r}.")


def server_event_to_bytes(event: ServerEvent) -> bytes:
    return dumps_bytes(encode_server_event(event))


def server_event_from_bytes(data: bytes | str) -> ServerEvent:
    try:
        payload = loads(data)
    except ValueError as exc:
        raise InvalidArgumentError(f"Server event is not valid JSON: {exc}") from exc
    return decode_server_event(payload)


def _coord(raw: Any) -> Coord:
    if not isinstance(raw, Mapping):
        raise TypeError(f"coord must be an object, got {type(raw).__name__}")
    row, col = raw["row"], raw["col"]
    if isinstance(row, bool) or isinstance(col, bool) or not isinstance(row, int) or not isinstance(col, int):
        raise TypeError("coord row/col must be integers")
    return Coord(row, col)


def _text(raw: Any) -> str:
    if not isinstance(raw, str):
        raise TypeError(f"unit_id must be a string, got {type(raw).__name__}")
    return raw
