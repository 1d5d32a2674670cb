"""Board state representation and copy-on-write helpers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from seabattle.game.core.models import BOARD_SIZE, CellStatus, Coord, require_in_bounds

_STATUS_CODES: dict[CellStatus, int] = {
    CellStatus.UNKNOWN: 0,
    CellStatus.EMPTY: 1,
    CellStatus.UNIT: 2,
    CellStatus.HIT: 3,
    CellStatus.MISS: 4,
}
_CODE_STATUSES: dict[int, CellStatus] = {code: status for status, code in _STATUS_CODES.items()}


def status_code(status: CellStatus) -> int:
    return _STATUS_CODES[status]


@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only view of one board cell."""

    coord: Coord
    status: CellStatus
    unit_id: str | None
    visible: bool


@dataclass(slots=True, eq=False)
class BoardState:
    """Numpy-backed board: status codes, visibility flags and unit markers.

    Rule functions never mutate a board they were handed; they work on ``copy()``.
    """

    size: int = BOARD_SIZE
    status: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    )
    visible: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.bool_)
    )
    unit_ids: dict[Coord, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.status.shape != (self.size, self.size):
            self.status = np.zeros((self.size, self.size), dtype=np.int8)
        if self.visible.shape != (self.size, self.size):
            self.visible = np.zeros((self.size, self.size), dtype=np.bool_)

    def copy(self) -> BoardState:
        return BoardState(
            size=self.size,
            status=self.status.copy(),
            visible=self.visible.copy(),
            unit_ids=dict(self.unit_ids),
        )

    def status_at(self, coord: Coord) -> CellStatus:
        require_in_bounds(coord, self.size)
        return _CODE_STATUSES[int(self.status[coord.row, coord.col])]

    def cell(self, coord: Coord) -> Cell:
        """Return the cell view at ``coord``; off-board coordinates raise."""
        require_in_bounds(coord, self.size)
        return Cell(
            coord=coord,
            status=_CODE_STATUSES[int(self.status[coord.row, coord.col])],
            unit_id=self.unit_ids.get(coord),
            visible=bool(self.visible[coord.row, coord.col]),
        )

    def cells(self) -> Iterator[Cell]:
        for row in range(self.size):
            for col in range(self.size):
                yield self.cell(Coord(row, col))

    def mark(self, coord: Coord, status: CellStatus, unit_id: str | None = None) -> None:
        """Set a cell status in place. Only call on a board you own."""
        require_in_bounds(coord, self.size)
        self.status[coord.row, coord.col] = _STATUS_CODES[status]
        if status is CellStatus.UNIT and unit_id is not None:
            self.unit_ids[coord] = unit_id
        else:
            self.unit_ids.pop(coord, None)

    def count(self, status: CellStatus) -> int:
        return int(np.count_nonzero(self.status == _STATUS_CODES[status]))

    def same_as(self, other: BoardState) -> bool:
        return (
            self.size == other.size
            and np.array_equal(self.status, other.status)
            and np.array_equal(self.visible, other.visible)
            and self.unit_ids == other.unit_ids
        )


def create_empty_board(size: int = BOARD_SIZE) -> BoardState:
    """Build a fully unknown, fully hidden board."""
    return BoardState(size=size)
