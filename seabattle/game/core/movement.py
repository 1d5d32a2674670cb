"""Manual one-step moves and the automatic forward creep."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import replace

from seabattle.game.core.fleet import is_occupied
from seabattle.game.core.models import Coord, Fleet, Unit, in_bounds, neighbours


def available_movement_cells(unit: Unit, fleet: Fleet) -> frozenset[Coord]:
    """Adjacent cells (diagonals included) not taken by the unit's own fleet."""
    if unit.position is None:
        return frozenset()
    return frozenset(
        cell
        for cell in neighbours(unit.position)
        if not is_occupied(fleet, cell, ignore_id=unit.unit_id)
    )


def manual_move(unit: Unit, target: Coord, fleet: Fleet) -> Unit | None:
    """Move one step in any of eight directions; ``None`` when the move is illegal."""
    if unit.position is None:
        return None
    if target not in available_movement_cells(unit, fleet):
        return None
    return replace(unit, position=target)


def auto_advance(unit: Unit, fleet: Fleet) -> Unit:
    """Creep one row toward the enemy edge, or stay put when blocked or at the edge."""
    if unit.position is None:
        return unit
    target = Coord(unit.position.row + unit.side.forward_sign, unit.position.col)
    if not in_bounds(target):
        return unit
    if is_occupied(fleet, target, ignore_id=unit.unit_id):
        return unit
    return replace(unit, position=target)


def advance_fleet(fleet: Fleet, exempt_ids: Collection[str] = ()) -> Fleet:
    """Auto-advance every deployed unit outside ``exempt_ids``.

    Blocking is judged against the fleet as it stood before the pass, so a unit
    directly behind another one waits a turn even if the leader moves.
    """
    return tuple(
        unit if unit.unit_id in exempt_ids or not unit.deployed else auto_advance(unit, fleet)
        for unit in fleet
    )
