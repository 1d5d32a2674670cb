"""Deployment intents: put the pending unit onto the own edge row."""

from __future__ import annotations

import logging
from dataclasses import replace

from seabattle.game.app.events import GameEventKind
from seabattle.game.app.services.intent_policy import reject, rejection_reason
from seabattle.game.app.services.phase_flow import PhaseFlowService
from seabattle.game.app.state import GameState
from seabattle.game.app.state_machine import GamePhase
from seabattle.game.core.fleet import (
    available_shots,
    deploy_unit,
    find_unit,
    is_valid_deployment_position,
    replace_unit,
    validate_fleet,
)
from seabattle.game.core.models import CellStatus, Coord, Side, Unit, require_in_bounds

logger = logging.getLogger(__name__)

_DEPLOYMENT = (GamePhase.DEPLOYMENT,)


def select_deployment_cell(state: GameState, coord: Coord, *, side: Side | None = None) -> GameState:
    """Remember a target cell for the pending unit without deploying it yet."""
    require_in_bounds(coord)
    reason = rejection_reason(state, side=side, phases=_DEPLOYMENT)
    if reason is not None:
        return reject(state, "select_deployment_cell", reason)
    active = state.turn.active_side
    if not is_valid_deployment_position(coord, state.fleet(active), active):
        return reject(state, "select_deployment_cell", f"{coord.label} is not a free deployment cell")
    if state.turn.pending_deployment_cell == coord:
        return state
    return state.with_turn(pending_deployment_cell=coord)


def confirm_deployment(state: GameState, *, side: Side | None = None) -> GameState:
    """Deploy the pending unit onto the previously selected cell."""
    cell = state.turn.pending_deployment_cell
    if cell is None:
        return reject(state, "confirm_deployment", "no deployment cell selected")
    return deploy(state, cell, side=side)


def deploy(state: GameState, coord: Coord, *, side: Side | None = None) -> GameState:
    """Deploy the pending unit at ``coord``; illegal requests leave ``state`` as is."""
    require_in_bounds(coord)
    reason = rejection_reason(state, side=side, phases=_DEPLOYMENT)
    if reason is not None:
        return reject(state, "deploy", reason)
    pending_id = state.turn.pending_deployment_id
    if pending_id is None:
        return reject(state, "deploy", "no unit waiting for deployment")
    active = state.turn.active_side
    fleet = state.fleet(active)
    if not is_valid_deployment_position(coord, fleet, active):
        return reject(state, "deploy", f"{coord.label} is not a free deployment cell")
    return place_unit(state, find_unit(fleet, pending_id), coord)


def place_unit(state: GameState, unit: Unit, coord: Coord) -> GameState:
    """Deploy ``unit`` at an already validated ``coord`` and switch to battle."""
    side = unit.side
    fleet = replace_unit(state.fleet(side), deploy_unit(unit, coord))
    validate_fleet(fleet)
    board = state.board(side).copy()
    board.mark(coord, CellStatus.UNIT, unit.unit_id)
    next_state = state.with_fleet(side, fleet).with_board(side, board)
    next_state = next_state.with_turn(
        just_deployed_id=unit.unit_id,
        pending_deployment_id=None,
        pending_deployment_cell=None,
        available_shots=available_shots(fleet),
    )
    next_state = replace(next_state, phase=PhaseFlowService.require(state.phase, "deployed"))
    logger.debug("unit_deployed unit=%s cell=%s", unit.unit_id, coord.label)
    return next_state.log(
        GameEventKind.DEPLOYED,
        f"{side} deployed {unit.unit_class} at {coord.label}.",
        side=side,
        coord=coord,
        unit_class=unit.unit_class,
    )
