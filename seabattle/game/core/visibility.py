"""Fog-of-war recompute from each fleet's detection radii."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from seabattle.game.core.board import BoardState, status_code
from seabattle.game.core.models import BOARD_SIZE, CellStatus, Coord, Fleet, cells_within


@dataclass(frozen=True, slots=True)
class VisibilityZone:
    """Square of cells one unit currently observes."""

    unit_id: str
    center: Coord
    radius: int
    cells: tuple[Coord, ...]


def detection_mask(fleet: Fleet, size: int = BOARD_SIZE) -> np.ndarray:
    """Boolean grid of every cell inside some deployed unit's detection square."""
    mask = np.zeros((size, size), dtype=np.bool_)
    for unit in fleet:
        if unit.position is None:
            continue
        radius = unit.detection_radius
        row, col = unit.position.row, unit.position.col
        mask[max(0, row - radius) : row + radius + 1, max(0, col - radius) : col + radius + 1] = True
    return mask


def visible_cells(fleet: Fleet, size: int = BOARD_SIZE) -> frozenset[Coord]:
    rows, cols = np.nonzero(detection_mask(fleet, size))
    return frozenset(Coord(int(row), int(col)) for row, col in zip(rows, cols, strict=True))


def visibility_zones(fleet: Fleet, size: int = BOARD_SIZE) -> tuple[VisibilityZone, ...]:
    return tuple(
        VisibilityZone(
            unit_id=unit.unit_id,
            center=unit.position,
            radius=unit.detection_radius,
            cells=tuple(cells_within(unit.position, unit.detection_radius, size)),
        )
        for unit in fleet
        if unit.position is not None
    )


def recompute_visibility(
    board: BoardState,
    own_fleet: Fleet,
    enemy_fleet: Fleet,
) -> BoardState:
    """Return ``board`` seen through ``own_fleet``'s detection radii.

    Visible cells holding an enemy unit become UNIT with that unit's id; other
    visible cells only ever go from UNKNOWN to EMPTY. Cells out of range keep
    their last known status and drop the visible flag.
    """
    next_board = board.copy()
    mask = detection_mask(own_fleet, board.size)
    next_board.visible = mask

    unknown = next_board.status == status_code(CellStatus.UNKNOWN)
    next_board.status[mask & unknown] = status_code(CellStatus.EMPTY)

    for enemy in enemy_fleet:
        if enemy.position is None:
            continue
        if mask[enemy.position.row, enemy.position.col]:
            next_board.mark(enemy.position, CellStatus.UNIT, enemy.unit_id)
    return next_board
