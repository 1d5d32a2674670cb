"""Match lifecycle entry points: lobby, init, reset and forced end."""

from __future__ import annotations

import logging
from dataclasses import replace

from seabattle.game.app.events import GameEventKind
from seabattle.game.app.services.intent_policy import reject
from seabattle.game.app.services.phase_flow import PhaseFlowService
from seabattle.game.app.services.turn_flow import finish
from seabattle.game.app.state import GameConfig, GameState, TurnState
from seabattle.game.app.state_machine import GamePhase
from seabattle.game.core.board import BoardState, create_empty_board
from seabattle.game.core.errors import InvalidArgumentError
from seabattle.game.core.fleet import create_fleet
from seabattle.game.core.models import Side, Winner

logger = logging.getLogger(__name__)


def lobby_state(config: GameConfig | None = None) -> GameState:
    """Empty pre-game state: no fleets, unknown boards."""
    config = config or GameConfig()
    return GameState(
        config=config,
        phase=GamePhase.LOBBY,
        turn=TurnState(),
        fleets={Side.PLAYER: (), Side.OPPONENT: ()},
        boards=_fresh_boards(config),
    )


def init_game(config: GameConfig | None = None) -> GameState:
    """Fresh fleets in port, fresh boards and the prematch countdown."""
    config = config or GameConfig()
    if config.prematch_seconds < 0:
        raise InvalidArgumentError(f"prematch_seconds must be >= 0, got {config.prematch_seconds}.")
    state = GameState(
        config=config,
        phase=PhaseFlowService.require(GamePhase.LOBBY, "init"),
        turn=TurnState(time_remaining=config.turn_budget()),
        fleets={side: create_fleet(side) for side in Side},
        boards=_fresh_boards(config),
        prematch_remaining=config.prematch_seconds,
    )
    logger.info(
        "game_initialized turn_seconds=%s shared_board=%s movement=%s",
        config.turn_budget(),
        config.shared_board,
        config.movement_enabled,
    )
    return state.log(GameEventKind.INFO, "Game created.")


def reset_game(state: GameState) -> GameState:
    """Discard the match and return to the lobby, keeping the config."""
    fresh = lobby_state(state.config)
    return replace(fresh, phase=PhaseFlowService.require(state.phase, "reset"))


def end_game(state: GameState, winner: Winner) -> GameState:
    """Close the match with an externally decided ``winner``."""
    if not PhaseFlowService.allows(state.phase, "game_over"):
        return reject(state, "end_game", f"cannot end during {state.phase}")
    return finish(state, winner)


def _fresh_boards(config: GameConfig) -> dict[Side, BoardState]:
    if config.shared_board:
        return {Side.PLAYER: create_empty_board()}
    return {side: create_empty_board() for side in Side}
