import logging

from engine.api.events import create_event_bus
from seabattle.game.app.events import GameEvent, GameEventKind
from seabattle.game.app.game_engine import GameEngine
from seabattle.game.app.services.server_sync import UnitDeployed
from seabattle.game.app.state import GameConfig
from seabattle.game.app.state_machine import GamePhase
from seabattle.game.core.models import Coord, Side, Winner


def _started_engine() -> GameEngine:
    engine = GameEngine(GameConfig(turn_seconds=0, prematch_seconds=0))
    engine.init()
    engine.start()
    return engine


def test_engine_starts_in_lobby() -> None:
    engine = GameEngine()
    assert engine.state.phase is GamePhase.LOBBY
    assert engine.revision == 0
    assert engine.config == GameConfig()


def test_accepted_intents_bump_revision() -> None:
    engine = _started_engine()
    revision = engine.revision
    state = engine.deploy(Coord(0, 1))
    assert engine.revision == revision + 1
    assert state is engine.state
    assert state.phase is GamePhase.BATTLE


def test_illegal_intents_keep_revision() -> None:
    engine = _started_engine()
    before = engine.state
    revision = engine.revision
    assert engine.deploy(Coord(5, 5)) is before
    assert engine.queue_shot(Coord(5, 5)) is before
    assert engine.confirm_turn() is before
    assert engine.deploy(Coord(9, 1), side=Side.OPPONENT) is before
    assert engine.revision == revision


def test_subscribers_receive_new_log_entries() -> None:
    engine = _started_engine()
    received: list[GameEvent] = []
    subscription = engine.subscribe(received.append)

    engine.deploy(Coord(0, 1))
    assert [entry.kind for entry in received] == [GameEventKind.DEPLOYED]

    engine.confirm_turn()
    assert [entry.kind for entry in received][1:] == [GameEventKind.TURN]
    assert [entry.seq for entry in received] == list(range(received[0].seq, received[0].seq + 2))

    engine.unsubscribe(subscription)
    engine.deploy(Coord(9, 1))
    assert len(received) == 2


def test_reinit_publishes_fresh_log() -> None:
    bus = create_event_bus()
    engine = GameEngine(GameConfig(turn_seconds=0), event_bus=bus)
    engine.init()
    received: list[GameEvent] = []
    bus.subscribe(GameEvent, received.append)
    engine.init(GameConfig(turn_seconds=15))
    assert engine.config.turn_seconds == 15
    assert [entry.seq for entry in received] == [1]
    assert engine.event_bus is bus


def test_engine_full_flow_through_server_event() -> None:
    engine = _started_engine()
    state = engine.apply_server_event(UnitDeployed(Side.PLAYER, "player-single-0", Coord(0, 4)))
    assert state.turn.just_deployed_id == "player-single-0"
    state = engine.end(Winner.PLAYER)
    assert state.phase is GamePhase.ENDED
    state = engine.reset()
    assert state.phase is GamePhase.LOBBY


def test_tick_and_timeout_entry_points() -> None:
    engine = GameEngine(GameConfig(turn_seconds=5, prematch_seconds=1))
    engine.init()
    assert engine.tick().phase is GamePhase.DEPLOYMENT
    assert engine.tick(2).turn.time_remaining == 3
    state = engine.timeout()
    assert state.turn.active_side is Side.OPPONENT


def test_two_step_deployment_through_engine() -> None:
    engine = _started_engine()
    engine.select_deployment_cell(Coord(0, 6))
    state = engine.confirm_deployment()
    assert state.fleet(Side.PLAYER)[0].position == Coord(0, 6)


def _engine_in_battle() -> GameEngine:
    engine = _started_engine()
    engine.deploy(Coord(0, 1))
    engine.confirm_turn()
    engine.deploy(Coord(9, 1))
    engine.confirm_turn()
    engine.deploy(Coord(0, 2))
    return engine


def test_shot_entry_points() -> None:
    engine = _engine_in_battle()
    state = engine.queue_shot(Coord(9, 1))
    assert state.turn.pending_shots == (Coord(9, 1),)
    assert engine.unqueue_shot(Coord(9, 1)).turn.pending_shots == ()
    engine.queue_shot(Coord(9, 1))
    assert engine.clear_shots().turn.pending_shots == ()


def test_move_entry_points() -> None:
    engine = _engine_in_battle()
    assert engine.select_unit("player-single-0").turn.selected_unit_id == "player-single-0"
    state = engine.move(Coord(1, 1))
    assert state.fleet(Side.PLAYER)[0].position == Coord(1, 1)
    assert engine.queue_shot(Coord(9, 1)) is state
    assert engine.tick().turn.active_side is Side.OPPONENT


def test_accepted_intents_logged_at_info(caplog) -> None:
    engine = GameEngine(GameConfig(turn_seconds=0))
    with caplog.at_level(logging.INFO, logger="seabattle.game.app.game_engine"):
        engine.init()
    records = [record for record in caplog.records if record.name == "seabattle.game.app.game_engine"]
    assert records
    assert records[-1].intent == "init"
