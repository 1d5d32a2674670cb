"""Stateful facade over the pure transitions.

Holds the current ``GameState`` in an engine state store, runs every intent as a
transition, and fans newly appended log entries out on an event bus.
"""

from __future__ import annotations

from collections.abc import Callable

from engine.api.events import EventBus, Subscription, create_event_bus
from engine.api.gameplay import StateStore, create_state_store
from engine.api.logging import get_logger
from seabattle.game.app.events import GameEvent
from seabattle.game.app.services import action_flow, deployment_flow, match_setup, turn_flow
from seabattle.game.app.services.server_sync import ServerEvent, apply_server_event
from seabattle.game.app.state import GameConfig, GameState
from seabattle.game.core.models import Coord, Side, Winner

logger = get_logger(__name__)


class GameEngine:
    """Single-writer owner of one match."""

    def __init__(self, config: GameConfig | None = None, *, event_bus: EventBus | None = None) -> None:
        self._config = config or GameConfig()
        self._bus = event_bus if event_bus is not None else create_event_bus()
        self._store: StateStore[GameState] = create_state_store(match_setup.lobby_state(self._config))

    @property
    def state(self) -> GameState:
        return self._store.peek()

    @property
    def revision(self) -> int:
        return self._store.revision()

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    def subscribe(self, handler: Callable[[GameEvent], None]) -> Subscription:
        """Receive every log entry appended from now on."""
        return self._bus.subscribe(GameEvent, handler)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._bus.unsubscribe(subscription)

    def init(self, config: GameConfig | None = None) -> GameState:
        if config is not None:
            self._config = config
        new_config = self._config
        return self._dispatch("init", lambda _state: match_setup.init_game(new_config))

    def start(self) -> GameState:
        return self._dispatch("start", turn_flow.start_match)

    def reset(self) -> GameState:
        return self._dispatch("reset", match_setup.reset_game)

    def end(self, winner: Winner) -> GameState:
        return self._dispatch("end", lambda state: match_setup.end_game(state, winner))

    def tick(self, seconds: int = 1) -> GameState:
        return self._dispatch("tick", lambda state: turn_flow.tick(state, seconds), quiet=True)

    def timeout(self) -> GameState:
        return self._dispatch("timeout", turn_flow.handle_timeout)

    def deploy(self, coord: Coord, *, side: Side | None = None) -> GameState:
        return self._dispatch("deploy", lambda state: deployment_flow.deploy(state, coord, side=side))

    def select_deployment_cell(self, coord: Coord, *, side: Side | None = None) -> GameState:
        return self._dispatch(
            "select_deployment_cell",
            lambda state: deployment_flow.select_deployment_cell(state, coord, side=side),
        )

    def confirm_deployment(self, *, side: Side | None = None) -> GameState:
        return self._dispatch(
            "confirm_deployment",
            lambda state: deployment_flow.confirm_deployment(state, side=side),
        )

    def select_unit(self, unit_id: str, *, side: Side | None = None) -> GameState:
        return self._dispatch(
            "select_unit", lambda state: action_flow.select_unit(state, unit_id, side=side)
        )

    def move(self, coord: Coord, *, side: Side | None = None) -> GameState:
        return self._dispatch("move", lambda state: action_flow.move(state, coord, side=side))

    def queue_shot(self, coord: Coord, *, side: Side | None = None) -> GameState:
        return self._dispatch(
            "queue_shot", lambda state: action_flow.queue_shot(state, coord, side=side)
        )

    def unqueue_shot(self, coord: Coord, *, side: Side | None = None) -> GameState:
        return self._dispatch(
            "unqueue_shot", lambda state: action_flow.unqueue_shot(state, coord, side=side)
        )

    def clear_shots(self, *, side: Side | None = None) -> GameState:
        return self._dispatch("clear_shots", lambda state: action_flow.clear_shots(state, side=side))

    def confirm_turn(self, *, side: Side | None = None) -> GameState:
        return self._dispatch("confirm_turn", lambda state: turn_flow.confirm_turn(state, side=side))

    def apply_server_event(self, event: ServerEvent) -> GameState:
        return self._dispatch("server_event", lambda state: apply_server_event(state, event))

    def _dispatch(
        self,
        intent: str,
        transition: Callable[[GameState], GameState],
        *,
        quiet: bool = False,
    ) -> GameState:
        before = self._store.snapshot()
        after = self._store.apply(transition)
        if after.revision == before.revision:
            return after.value
        state = after.value
        appended = _appended_entries(before.value.event_log, state.event_log)
        if not quiet or appended:
            logger.info(
                "intent_applied intent=%s phase=%s turn=%d revision=%d",
                intent,
                state.phase,
                state.turn.number,
                after.revision,
                extra={"intent": intent, "new_entries": len(appended)},
            )
        self._bus.publish_all(appended)
        return state


def _appended_entries(
    previous: tuple[GameEvent, ...], current: tuple[GameEvent, ...]
) -> tuple[GameEvent, ...]:
    """Entries added by one transition; a restarted log counts as all new."""
    if len(current) >= len(previous) and all(
        old is new for old, new in zip(previous, current, strict=False)
    ):
        return current[len(previous):]
    return current
