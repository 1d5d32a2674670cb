"""Turn completion, timeouts and the turn clock."""

from __future__ import annotations

import logging
from dataclasses import replace

from seabattle.game.app.events import GameEventKind
from seabattle.game.app.services.deployment_flow import place_unit
from seabattle.game.app.services.intent_policy import reject, rejection_reason
from seabattle.game.app.services.phase_flow import PhaseFlowService
from seabattle.game.app.state import GameState, TurnState
from seabattle.game.app.state_machine import GamePhase
from seabattle.game.core.errors import InvalidArgumentError
from seabattle.game.core.fleet import (
    auto_deploy_position,
    available_shots,
    find_unit,
    next_undeployed,
    validate_fleet,
)
from seabattle.game.core.models import ShotResult, Side, Winner
from seabattle.game.core.movement import advance_fleet
from seabattle.game.core.rules import check_game_over, sync_own_markers
from seabattle.game.core.shot_resolution import ShotOutcome, resolve_shot
from seabattle.game.core.visibility import recompute_visibility

logger = logging.getLogger(__name__)

_LIVE = (GamePhase.DEPLOYMENT, GamePhase.BATTLE)


def begin_turn(state: GameState, *, number: int, side: Side, trigger: str | None = None) -> GameState:
    """Hand the turn to ``side`` with a fresh clock and shot budget.

    Without an explicit ``trigger`` the phase follows the side's reserve: anything
    left to deploy means DEPLOYMENT, otherwise BATTLE.
    """
    fleet = state.fleet(side)
    pending = next_undeployed(fleet)
    if trigger is None:
        trigger = "next_deployment" if pending is not None else "next_battle"
    phase = PhaseFlowService.require(state.phase, trigger)
    turn = TurnState(
        number=number,
        active_side=side,
        time_remaining=state.config.turn_budget(),
        available_shots=available_shots(fleet),
        pending_deployment_id=pending.unit_id if pending is not None else None,
    )
    next_state = replace(state, phase=phase, turn=turn)
    doing = f"deploy {pending.unit_class}" if pending is not None else "act"
    logger.debug("turn_started number=%d side=%s phase=%s", number, side, phase)
    return next_state.log(GameEventKind.TURN, f"Turn {number + 1}: {side} to {doing}.", side=side)


def start_match(state: GameState) -> GameState:
    """Leave PREMATCH and give PLAYER the first deployment turn."""
    if not PhaseFlowService.allows(state.phase, "start"):
        return reject(state, "start_match", f"cannot start during {state.phase}")
    state = replace(state, prematch_remaining=0)
    logger.info("match_started turn_seconds=%s", state.config.turn_budget())
    return begin_turn(state, number=0, side=Side.PLAYER, trigger="start")


def confirm_turn(state: GameState, *, side: Side | None = None) -> GameState:
    """End the active side's battle turn; with nothing queued this is a pass."""
    reason = rejection_reason(state, side=side, phases=(GamePhase.BATTLE,))
    if reason is not None:
        return reject(state, "confirm_turn", reason)
    return complete_turn(state)


def complete_turn(state: GameState) -> GameState:
    """Resolve queued shots, auto-advance, refresh visibility, then pass the turn."""
    if state.phase not in _LIVE:
        raise InvalidArgumentError(f"Cannot complete a turn during {state.phase}.")
    side = state.turn.active_side
    enemy = side.opponent

    enemy_before = state.fleet(enemy)
    for coord in state.turn.pending_shots:
        resolution = resolve_shot(coord, state.fleet(enemy), state.board(side))
        state = state.with_fleet(enemy, resolution.fleet).with_board(side, resolution.board)
        state = _log_shot(state, side, resolution.outcome)
    if state.fleet(enemy) is not enemy_before:
        state = state.with_board(
            enemy, sync_own_markers(state.board(enemy), enemy_before, state.fleet(enemy))
        )

    fleet = state.fleet(side)
    exempt = set(state.turn.moved_unit_ids)
    if state.turn.just_deployed_id is not None:
        exempt.add(state.turn.just_deployed_id)
    advanced = advance_fleet(fleet, exempt)
    validate_fleet(advanced)
    state = state.with_fleet(side, advanced).with_board(
        side, sync_own_markers(state.board(side), fleet, advanced)
    )

    state = refresh_visibility(state)
    winner = check_game_over(state.fleet(Side.PLAYER), state.fleet(Side.OPPONENT))
    if winner is not None:
        return finish(state, winner)
    return begin_turn(state, number=state.turn.number + 1, side=enemy)


def handle_timeout(state: GameState) -> GameState:
    """Run out the active side's clock.

    A pending deployment goes to the first free cell of the edge row; queued
    shots are discarded unfired. Either way the turn then completes.
    """
    if state.phase is GamePhase.DEPLOYMENT:
        side = state.turn.active_side
        pending_id = state.turn.pending_deployment_id
        if pending_id is not None:
            fleet = state.fleet(side)
            coord = auto_deploy_position(fleet, side)
            if coord is not None:
                state = place_unit(state, find_unit(fleet, pending_id), coord)
        state = state.log(GameEventKind.INFO, f"{side} ran out of time.", side=side)
        return complete_turn(state)
    if state.phase is GamePhase.BATTLE:
        side = state.turn.active_side
        burned = len(state.turn.pending_shots)
        state = state.with_turn(pending_shots=(), selected_unit_id=None, movement_cells=frozenset())
        message = f"{side} ran out of time."
        if burned:
            message = f"{side} ran out of time; {burned} queued shot(s) lost."
        state = state.log(GameEventKind.INFO, message, side=side)
        return complete_turn(state)
    return reject(state, "timeout", f"no turn running during {state.phase}")


def tick(state: GameState, seconds: int = 1) -> GameState:
    """Advance the prematch countdown or the turn clock by ``seconds``.

    A turn committed to MOVEMENT completes on the first tick after the move.
    """
    if seconds < 0:
        raise InvalidArgumentError(f"tick seconds must be >= 0, got {seconds}.")
    if state.phase is GamePhase.PREMATCH:
        remaining = max(0, state.prematch_remaining - seconds)
        if remaining == 0:
            return start_match(state)
        return replace(state, prematch_remaining=remaining)
    if state.phase not in _LIVE:
        return state
    if state.turn.completion_due:
        return complete_turn(state)
    if state.turn.time_remaining is None or seconds == 0:
        return state
    remaining = max(0, state.turn.time_remaining - seconds)
    if remaining == 0:
        return handle_timeout(state)
    return state.with_turn(time_remaining=remaining)


def refresh_visibility(state: GameState) -> GameState:
    """Recompute each kept view from its own side's detection radii."""
    for side in Side:
        if not state.has_board(side):
            continue
        board = recompute_visibility(
            state.board(side), state.fleet(side), state.fleet(side.opponent)
        )
        state = state.with_board(side, board)
    return state


def finish(state: GameState, winner: Winner) -> GameState:
    """Close the match with ``winner``; further intents are rejected."""
    state = replace(
        state,
        phase=PhaseFlowService.require(state.phase, "game_over"),
        winner=winner,
        turn=replace(
            state.turn,
            time_remaining=None,
            pending_shots=(),
            selected_unit_id=None,
            movement_cells=frozenset(),
            pending_deployment_id=None,
            pending_deployment_cell=None,
        ),
    )
    message = "Game over: draw." if winner is Winner.DRAW else f"Game over: {winner} wins."
    logger.info("game_over winner=%s turn=%d", winner, state.turn.number)
    return state.log(GameEventKind.INFO, message)


def _log_shot(state: GameState, side: Side, outcome: ShotOutcome) -> GameState:
    coord = outcome.coord
    if outcome.result is ShotResult.MISS:
        return state.log(GameEventKind.MISS, f"{side} missed at {coord.label}.", side=side, coord=coord)
    unit = outcome.unit
    unit_class = unit.current_class if unit is not None else None
    if outcome.result is ShotResult.DESTROYED:
        return state.log(
            GameEventKind.DESTROYED,
            f"{side} destroyed a {unit.unit_class} at {coord.label}.",
            side=side,
            coord=coord,
            unit_class=unit.unit_class,
        )
    return state.log(
        GameEventKind.HIT,
        f"{side} hit a {unit_class} at {coord.label}.",
        side=side,
        coord=coord,
        unit_class=unit_class,
    )
