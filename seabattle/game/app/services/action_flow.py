"""Battle intents: unit selection, one manual move, or a volley of queued shots."""

from __future__ import annotations

import logging

from seabattle.game.app.events import GameEventKind
from seabattle.game.app.services.intent_policy import reject, rejection_reason
from seabattle.game.app.state import GameState
from seabattle.game.app.state_machine import GamePhase, TurnAction
from seabattle.game.core.errors import InvalidArgumentError
from seabattle.game.core.fleet import find_unit, replace_unit, unit_at, validate_fleet
from seabattle.game.core.models import Coord, Side, Unit, require_in_bounds
from seabattle.game.core.movement import available_movement_cells, manual_move
from seabattle.game.core.rules import sync_own_markers

logger = logging.getLogger(__name__)

_BATTLE = (GamePhase.BATTLE,)


def select_unit(state: GameState, unit_id: str, *, side: Side | None = None) -> GameState:
    """Select a unit to move, or deselect it when it is already selected."""
    owner = _owner_of(state, unit_id)
    reason = rejection_reason(state, side=side, phases=_BATTLE)
    if reason is not None:
        return reject(state, "select_unit", reason)
    turn = state.turn
    if owner is not turn.active_side:
        return reject(state, "select_unit", f"{unit_id} belongs to {owner}")
    if not state.config.movement_enabled:
        return reject(state, "select_unit", "manual movement is disabled")
    if turn.action is not TurnAction.NONE:
        return reject(state, "select_unit", f"turn already committed to {turn.action}")
    if unit_id == turn.just_deployed_id:
        return reject(state, "select_unit", f"{unit_id} was deployed this turn")
    if unit_id in turn.moved_unit_ids:
        return reject(state, "select_unit", f"{unit_id} already moved this turn")
    unit = find_unit(state.fleet(owner), unit_id)
    if not unit.deployed:
        return reject(state, "select_unit", f"{unit_id} is not on the board")
    if turn.selected_unit_id == unit_id:
        return state.with_turn(selected_unit_id=None, movement_cells=frozenset())
    return state.with_turn(
        selected_unit_id=unit_id,
        movement_cells=available_movement_cells(unit, state.fleet(owner)),
    )


def move(state: GameState, coord: Coord, *, side: Side | None = None) -> GameState:
    """Move the selected unit one step; this commits the turn to MOVEMENT."""
    require_in_bounds(coord)
    reason = rejection_reason(state, side=side, phases=_BATTLE)
    if reason is not None:
        return reject(state, "move", reason)
    turn = state.turn
    if turn.action is TurnAction.ATTACK:
        return reject(state, "move", "shots already queued this turn")
    if turn.selected_unit_id is None:
        return reject(state, "move", "no unit selected")
    if coord not in turn.movement_cells:
        return reject(state, "move", f"{coord.label} is not reachable")
    active = turn.active_side
    fleet = state.fleet(active)
    unit = find_unit(fleet, turn.selected_unit_id)
    moved = manual_move(unit, coord, fleet)
    if moved is None:
        return reject(state, "move", f"{coord.label} is not reachable")

    next_fleet = replace_unit(fleet, moved)
    validate_fleet(next_fleet)
    board = sync_own_markers(state.board(active), fleet, next_fleet)
    next_state = state.with_fleet(active, next_fleet).with_board(active, board)
    next_state = next_state.with_turn(
        action=TurnAction.MOVEMENT,
        moved_unit_ids=turn.moved_unit_ids | {unit.unit_id},
        selected_unit_id=None,
        movement_cells=frozenset(),
    )
    return next_state.log(
        GameEventKind.MOVED,
        f"{active} moved {unit.current_class} {_label(unit)} -> {coord.label}.",
        side=active,
        coord=coord,
        unit_class=unit.current_class,
    )


def queue_shot(state: GameState, coord: Coord, *, side: Side | None = None) -> GameState:
    """Queue a shot at ``coord``; the first one commits the turn to ATTACK."""
    require_in_bounds(coord)
    reason = rejection_reason(state, side=side, phases=_BATTLE)
    if reason is not None:
        return reject(state, "queue_shot", reason)
    turn = state.turn
    if turn.action is TurnAction.MOVEMENT:
        return reject(state, "queue_shot", "a unit already moved this turn")
    if coord in turn.pending_shots:
        return reject(state, "queue_shot", f"{coord.label} already targeted")
    if unit_at(state.fleet(turn.active_side), coord) is not None:
        return reject(state, "queue_shot", f"{coord.label} holds one of our own units")
    if len(turn.pending_shots) >= turn.available_shots:
        return reject(state, "queue_shot", "no shots left this turn")
    logger.debug("shot_queued cell=%s queued=%d", coord.label, len(turn.pending_shots) + 1)
    return state.with_turn(
        pending_shots=(*turn.pending_shots, coord),
        action=TurnAction.ATTACK,
        selected_unit_id=None,
        movement_cells=frozenset(),
    )


def unqueue_shot(state: GameState, coord: Coord, *, side: Side | None = None) -> GameState:
    """Drop one queued shot. The turn stays committed to ATTACK."""
    require_in_bounds(coord)
    reason = rejection_reason(state, side=side, phases=_BATTLE)
    if reason is not None:
        return reject(state, "unqueue_shot", reason)
    if coord not in state.turn.pending_shots:
        return reject(state, "unqueue_shot", f"{coord.label} is not queued")
    return state.with_turn(
        pending_shots=tuple(shot for shot in state.turn.pending_shots if shot != coord)
    )


def clear_shots(state: GameState, *, side: Side | None = None) -> GameState:
    reason = rejection_reason(state, side=side, phases=_BATTLE)
    if reason is not None:
        return reject(state, "clear_shots", reason)
    if not state.turn.pending_shots:
        return state
    return state.with_turn(pending_shots=())


def _owner_of(state: GameState, unit_id: str) -> Side:
    for side, fleet in state.fleets.items():
        if any(unit.unit_id == unit_id for unit in fleet):
            return side
    raise InvalidArgumentError(f"Unknown unit id: {unit_id}.")


def _label(unit: Unit) -> str:
    return unit.position.label if unit.position is not None else "port"
