"""Shot outcome evaluation (miss/hit/destroyed)."""

from __future__ import annotations

from dataclasses import dataclass, replace

from seabattle.game.core.board import BoardState
from seabattle.game.core.fleet import replace_unit, unit_at
from seabattle.game.core.models import CellStatus, Coord, Fleet, ShotResult, Unit, require_in_bounds


@dataclass(frozen=True, slots=True)
class ShotOutcome:
    """What one shot did. ``unit``/``updated_unit`` are the target before and after."""

    coord: Coord
    result: ShotResult
    unit: Unit | None = None
    updated_unit: Unit | None = None

    @property
    def hit(self) -> bool:
        return self.result is not ShotResult.MISS


@dataclass(frozen=True, slots=True)
class ShotResolution:
    """Shot outcome plus the target fleet and shooter board after the shot."""

    outcome: ShotOutcome
    fleet: Fleet
    board: BoardState


def apply_hit(unit: Unit) -> Unit:
    """Take one point of health; at zero the unit leaves the board."""
    health = max(0, unit.health - 1)
    if health == 0:
        return replace(unit, health=0, position=None)
    return replace(unit, health=health)


def resolve_shot(coord: Coord, target_fleet: Fleet, board: BoardState) -> ShotResolution:
    """Resolve a shot at ``coord`` against ``target_fleet``, marking ``board``.

    Neither input is modified; the returned resolution carries fresh copies.
    """
    require_in_bounds(coord, board.size)
    next_board = board.copy()
    target = unit_at(target_fleet, coord)
    if target is None:
        next_board.mark(coord, CellStatus.MISS)
        return ShotResolution(
            outcome=ShotOutcome(coord=coord, result=ShotResult.MISS),
            fleet=target_fleet,
            board=next_board,
        )

    updated = apply_hit(target)
    next_board.mark(coord, CellStatus.HIT)
    result = ShotResult.DESTROYED if updated.destroyed else ShotResult.HIT
    return ShotResolution(
        outcome=ShotOutcome(coord=coord, result=result, unit=target, updated_unit=updated),
        fleet=replace_unit(target_fleet, updated),
        board=next_board,
    )
