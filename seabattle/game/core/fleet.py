"""Fleet construction, lookup and deployment rules."""

from __future__ import annotations

from dataclasses import replace

from seabattle.game.core.errors import InvalidArgumentError, InvariantViolationError
from seabattle.game.core.models import (
    BOARD_SIZE,
    DEPLOYMENT_ORDER,
    UNIT_COUNTS,
    Coord,
    Fleet,
    Side,
    Unit,
)


def create_fleet(side: Side) -> Fleet:
    """Build a fresh, fully undeployed fleet for ``side``."""
    units: list[Unit] = []
    serial = 0
    for unit_class in DEPLOYMENT_ORDER:
        for _ in range(UNIT_COUNTS[unit_class]):
            units.append(
                Unit(
                    unit_id=f"{side.value.lower()}-{unit_class.value.lower()}-{serial}",
                    side=side,
                    unit_class=unit_class,
                    health=unit_class.health,
                )
            )
            serial += 1
    return tuple(units)


def find_unit(fleet: Fleet, unit_id: str) -> Unit:
    """Return the unit with ``unit_id``; unknown ids are a caller bug."""
    for unit in fleet:
        if unit.unit_id == unit_id:
            return unit
    raise InvalidArgumentError(f"Unknown unit id: {unit_id}.")


def unit_at(fleet: Fleet, coord: Coord) -> Unit | None:
    """Return the deployed unit standing on ``coord``, if any."""
    for unit in fleet:
        if unit.position == coord:
            return unit
    return None


def is_occupied(fleet: Fleet, coord: Coord, *, ignore_id: str | None = None) -> bool:
    return any(unit.position == coord and unit.unit_id != ignore_id for unit in fleet)


def replace_unit(fleet: Fleet, updated: Unit) -> Fleet:
    """Return a fleet with the unit sharing ``updated.unit_id`` swapped out."""
    replaced = False
    units: list[Unit] = []
    for unit in fleet:
        if unit.unit_id == updated.unit_id:
            units.append(updated)
            replaced = True
        else:
            units.append(unit)
    if not replaced:
        raise InvalidArgumentError(f"Unknown unit id: {updated.unit_id}.")
    return tuple(units)


def next_undeployed(fleet: Fleet) -> Unit | None:
    """First unit still waiting in port, singles first, creation order within a class."""
    for unit_class in DEPLOYMENT_ORDER:
        for unit in fleet:
            if unit.unit_class is unit_class and not unit.deployed and not unit.destroyed:
                return unit
    return None


def is_valid_deployment_position(coord: Coord, fleet: Fleet, side: Side) -> bool:
    """Deployment is legal on the side's own edge row, on a free cell."""
    if coord.row != side.deployment_row:
        return False
    if not 0 <= coord.col < BOARD_SIZE:
        return False
    return not is_occupied(fleet, coord)


def deploy_unit(unit: Unit, coord: Coord) -> Unit:
    return replace(unit, position=coord)


def auto_deploy_position(fleet: Fleet, side: Side) -> Coord | None:
    """First free cell of the deployment row, scanning columns left to right."""
    for col in range(BOARD_SIZE):
        candidate = Coord(side.deployment_row, col)
        if is_valid_deployment_position(candidate, fleet, side):
            return candidate
    return None


def available_shots(fleet: Fleet) -> int:
    """Current firepower: sum of the ranks of every deployed unit."""
    return sum(unit.shots for unit in fleet if unit.deployed)


def has_ever_deployed(fleet: Fleet) -> bool:
    return any(unit.deployed or unit.destroyed for unit in fleet)


def validate_fleet(fleet: Fleet) -> None:
    """Raise when two deployed units share a cell or ids repeat."""
    seen_ids: set[str] = set()
    seen_cells: set[Coord] = set()
    for unit in fleet:
        if unit.unit_id in seen_ids:
            raise InvariantViolationError(f"Duplicate unit id: {unit.unit_id}.")
        seen_ids.add(unit.unit_id)
        if unit.position is None:
            continue
        if unit.position in seen_cells:
            raise InvariantViolationError(
                f"Two units share cell {unit.position.label} in one fleet."
            )
        seen_cells.add(unit.position)
