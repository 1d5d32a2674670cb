import pytest

from seabattle.game.app.events import GameEventKind
from seabattle.game.app.services.action_flow import clear_shots, move, queue_shot, select_unit, unqueue_shot
from seabattle.game.app.state import GameConfig
from seabattle.game.app.state_machine import TurnAction
from seabattle.game.core.errors import InvalidArgumentError
from seabattle.game.core.fleet import find_unit
from seabattle.game.core.models import CellStatus, Coord, Side

PLACEMENTS = {
    "player-single-0": Coord(2, 2),
    "player-double-4": Coord(2, 5),
    "opponent-double-4": Coord(7, 5),
}


@pytest.fixture
def battle(make_battle_state):
    return make_battle_state(PLACEMENTS)


def test_select_unit_exposes_movement_cells(battle) -> None:
    state = select_unit(battle, "player-single-0")
    assert state.turn.selected_unit_id == "player-single-0"
    assert Coord(3, 3) in state.turn.movement_cells
    assert len(state.turn.movement_cells) == 8


def test_select_same_unit_again_deselects(battle) -> None:
    selected = select_unit(battle, "player-single-0")
    cleared = select_unit(selected, "player-single-0")
    assert cleared.turn.selected_unit_id is None
    assert cleared.turn.movement_cells == frozenset()


def test_select_unit_rejections(battle, make_battle_state) -> None:
    assert select_unit(battle, "opponent-double-4") is battle
    assert select_unit(battle, "player-single-1") is battle
    assert select_unit(battle, "player-single-0", side=Side.OPPONENT) is battle

    just_deployed = battle.with_turn(just_deployed_id="player-single-0")
    assert select_unit(just_deployed, "player-single-0") is just_deployed

    no_movement = make_battle_state(PLACEMENTS, config=GameConfig(turn_seconds=0, movement_enabled=False))
    assert select_unit(no_movement, "player-single-0") is no_movement


def test_select_unknown_unit_raises(battle) -> None:
    with pytest.raises(InvalidArgumentError):
        select_unit(battle, "player-single-42")


def test_move_commits_turn_to_movement(battle) -> None:
    state = move(select_unit(battle, "player-single-0"), Coord(3, 3))
    unit = find_unit(state.fleet(Side.PLAYER), "player-single-0")
    assert unit.position == Coord(3, 3)
    assert state.turn.action is TurnAction.MOVEMENT
    assert state.turn.moved_unit_ids == {"player-single-0"}
    assert state.turn.selected_unit_id is None
    assert state.turn.completion_due
    board = state.board(Side.PLAYER)
    assert board.cell(Coord(3, 3)).unit_id == "player-single-0"
    assert board.status_at(Coord(2, 2)) is CellStatus.EMPTY
    assert state.event_log[-1].kind is GameEventKind.MOVED


def test_only_one_move_per_turn(battle) -> None:
    state = move(select_unit(battle, "player-single-0"), Coord(3, 3))
    assert select_unit(state, "player-double-4") is state
    assert select_unit(state, "player-single-0") is state


def test_move_requires_reachable_cell(battle) -> None:
    selected = select_unit(battle, "player-single-0")
    assert move(selected, Coord(5, 5)) is selected
    assert move(battle, Coord(3, 3)) is battle


def test_move_onto_own_unit_is_ignored(make_battle_state) -> None:
    state = make_battle_state({"player-single-0": Coord(2, 2), "player-single-1": Coord(2, 3)})
    selected = select_unit(state, "player-single-0")
    assert Coord(2, 3) not in selected.turn.movement_cells
    assert move(selected, Coord(2, 3)) is selected


def test_queue_shot_commits_turn_to_attack(battle) -> None:
    assert battle.turn.available_shots == 3
    state = queue_shot(battle, Coord(7, 5))
    assert state.turn.pending_shots == (Coord(7, 5),)
    assert state.turn.action is TurnAction.ATTACK
    assert select_unit(state, "player-single-0") is state
    assert move(state, Coord(3, 3)) is state


def test_queue_shot_limits(battle) -> None:
    state = queue_shot(battle, Coord(7, 5))
    assert queue_shot(state, Coord(7, 5)) is state
    state = queue_shot(queue_shot(state, Coord(7, 4)), Coord(7, 6))
    assert len(state.turn.pending_shots) == 3
    assert queue_shot(state, Coord(0, 0)) is state


def test_queue_shot_refuses_own_unit_cells(battle) -> None:
    assert queue_shot(battle, Coord(2, 2)) is battle
    assert queue_shot(battle, Coord(2, 5)) is battle


def test_queue_shot_clears_selection(battle) -> None:
    state = queue_shot(select_unit(battle, "player-single-0"), Coord(7, 5))
    assert state.turn.selected_unit_id is None


def test_unqueue_and_clear_keep_attack_lock(battle) -> None:
    state = queue_shot(queue_shot(battle, Coord(7, 5)), Coord(7, 4))
    state = unqueue_shot(state, Coord(7, 5))
    assert state.turn.pending_shots == (Coord(7, 4),)
    assert unqueue_shot(state, Coord(1, 1)) is state

    cleared = clear_shots(state)
    assert cleared.turn.pending_shots == ()
    assert cleared.turn.action is TurnAction.ATTACK
    assert clear_shots(cleared) is cleared
    assert select_unit(cleared, "player-single-0") is cleared


def test_shot_intents_need_battle_phase(deploying_state) -> None:
    assert queue_shot(deploying_state, Coord(5, 5)) is deploying_state
    assert clear_shots(deploying_state) is deploying_state


def test_opponent_turn_blocks_player_intents(make_battle_state) -> None:
    state = make_battle_state(PLACEMENTS, active=Side.OPPONENT)
    assert queue_shot(state, Coord(2, 2), side=Side.PLAYER) is state
    shot = queue_shot(state, Coord(2, 2), side=Side.OPPONENT)
    assert shot.turn.pending_shots == (Coord(2, 2),)
    assert shot.turn.action is TurnAction.ATTACK
