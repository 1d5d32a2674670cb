"""Game state aggregate passed through every transition."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from seabattle.game.app.events import GameEvent, GameEventKind, append_event
from seabattle.game.app.state_machine import GamePhase, TurnAction
from seabattle.game.core.board import BoardState, create_empty_board
from seabattle.game.core.models import Coord, Fleet, Side, UnitClass, Winner

UNLIMITED_TURN_SECONDS = 0
DEFAULT_TURN_SECONDS = 30
DEFAULT_PREMATCH_SECONDS = 3


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Per-game settings fixed at ``init``.

    ``turn_seconds`` of ``UNLIMITED_TURN_SECONDS`` (or less) disables the turn clock.
    """

    turn_seconds: int = DEFAULT_TURN_SECONDS
    prematch_seconds: int = DEFAULT_PREMATCH_SECONDS
    shared_board: bool = True
    movement_enabled: bool = True

    @property
    def unlimited(self) -> bool:
        return self.turn_seconds <= UNLIMITED_TURN_SECONDS

    def turn_budget(self) -> int | None:
        return None if self.unlimited else self.turn_seconds


@dataclass(frozen=True, slots=True)
class TurnState:
    """Turn-scoped fields; a fresh instance starts every turn."""

    number: int = 0
    active_side: Side = Side.PLAYER
    time_remaining: int | None = None
    available_shots: int = 0
    action: TurnAction = TurnAction.NONE
    moved_unit_ids: frozenset[str] = frozenset()
    just_deployed_id: str | None = None
    pending_shots: tuple[Coord, ...] = ()
    selected_unit_id: str | None = None
    movement_cells: frozenset[Coord] = frozenset()
    pending_deployment_id: str | None = None
    pending_deployment_cell: Coord | None = None

    @property
    def completion_due(self) -> bool:
        """A committed move ends the turn on the next clock tick."""
        return self.action is TurnAction.MOVEMENT


@dataclass(frozen=True, slots=True)
class GameState:
    """Whole-game snapshot. Never mutated; transitions build new instances."""

    config: GameConfig
    phase: GamePhase
    turn: TurnState
    fleets: dict[Side, Fleet]
    boards: dict[Side, BoardState]
    winner: Winner | None = None
    prematch_remaining: int = 0
    event_log: tuple[GameEvent, ...] = field(default_factory=tuple)

    @property
    def active_side(self) -> Side:
        return self.turn.active_side

    def fleet(self, side: Side) -> Fleet:
        return self.fleets[side]

    def has_board(self, side: Side) -> bool:
        return side in self.boards

    def board(self, side: Side) -> BoardState:
        """``side``'s own view of the sea.

        With a shared board only PLAYER keeps a view; the other side gets a blank
        scratch board whose marks are dropped by ``with_board``.
        """
        board = self.boards.get(side)
        return board if board is not None else create_empty_board()

    def with_fleet(self, side: Side, fleet: Fleet) -> GameState:
        return replace(self, fleets={**self.fleets, side: fleet})

    def with_board(self, side: Side, board: BoardState) -> GameState:
        if side not in self.boards:
            return self
        return replace(self, boards={**self.boards, side: board})

    def with_turn(self, **changes: object) -> GameState:
        return replace(self, turn=replace(self.turn, **changes))

    def log(
        self,
        kind: GameEventKind,
        message: str,
        *,
        side: Side | None = None,
        coord: Coord | None = None,
        unit_class: UnitClass | None = None,
    ) -> GameState:
        return replace(
            self,
            event_log=append_event(
                self.event_log, kind, message, side=side, coord=coord, unit_class=unit_class
            ),
        )
