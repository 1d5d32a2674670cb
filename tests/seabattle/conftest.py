from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import replace

import pytest

from seabattle.game.app.services.match_setup import init_game
from seabattle.game.app.services.turn_flow import start_match
from seabattle.game.app.state import GameConfig, GameState, TurnState
from seabattle.game.app.state_machine import GamePhase
from seabattle.game.core.fleet import available_shots, deploy_unit, find_unit, replace_unit
from seabattle.game.core.models import CellStatus, Coord, Side

type Placements = Mapping[str, Coord]


def place_units(state: GameState, placements: Placements) -> GameState:
    """Put units straight onto the board, bypassing deployment turns."""
    for unit_id, coord in placements.items():
        side = Side.PLAYER if unit_id.startswith("player") else Side.OPPONENT
        fleet = state.fleet(side)
        state = state.with_fleet(side, replace_unit(fleet, deploy_unit(find_unit(fleet, unit_id), coord)))
        board = state.board(side).copy()
        board.mark(coord, CellStatus.UNIT, unit_id)
        state = state.with_board(side, board)
    return state


def battle_state(
    placements: Placements,
    *,
    config: GameConfig | None = None,
    active: Side = Side.PLAYER,
    number: int = 4,
) -> GameState:
    config = config or GameConfig(turn_seconds=0)
    state = place_units(start_match(init_game(config)), placements)
    turn = TurnState(
        number=number,
        active_side=active,
        time_remaining=config.turn_budget(),
        available_shots=available_shots(state.fleet(active)),
    )
    return replace(state, phase=GamePhase.BATTLE, turn=turn)


@pytest.fixture
def untimed_config() -> GameConfig:
    return GameConfig(turn_seconds=0, prematch_seconds=0)


@pytest.fixture
def make_battle_state() -> Callable[..., GameState]:
    return battle_state


@pytest.fixture
def deploying_state(untimed_config: GameConfig) -> GameState:
    """PLAYER's first deployment turn."""
    return start_match(init_game(untimed_config))
