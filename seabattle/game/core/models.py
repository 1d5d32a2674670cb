"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from seabattle.game.core.errors import InvalidArgumentError, InvariantViolationError

BOARD_SIZE = 10
COLUMN_LABELS = "ABCDEFGHIJ"


class Side(StrEnum):
    """Fleet owner. PLAYER holds the near edge, OPPONENT the far edge."""

    PLAYER = "PLAYER"
    OPPONENT = "OPPONENT"

    @property
    def opponent(self) -> Side:
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER

    @property
    def deployment_row(self) -> int:
        return 0 if self is Side.PLAYER else BOARD_SIZE - 1

    @property
    def forward_sign(self) -> int:
        return 1 if self is Side.PLAYER else -1


class UnitClass(StrEnum):
    """Ship classes; the rank drives health, firepower and detection."""

    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    TRIPLE = "TRIPLE"
    QUADRUPLE = "QUADRUPLE"

    @property
    def rank(self) -> int:
        return CLASS_RANKS[self]

    @property
    def health(self) -> int:
        return UNIT_HEALTH[self]

    @property
    def shots(self) -> int:
        return SHOTS_PER_UNIT[self]

    @property
    def detection_radius(self) -> int:
        return DETECTION_RADIUS[self]

    @classmethod
    def from_rank(cls, rank: int) -> UnitClass:
        """Return the class with the given rank (1..4)."""
        for unit_class, class_rank in CLASS_RANKS.items():
            if class_rank == rank:
                return unit_class
        raise InvalidArgumentError(f"No unit class has rank {rank}.")


CLASS_RANKS: dict[UnitClass, int] = {
    UnitClass.SINGLE: 1,
    UnitClass.DOUBLE: 2,
    UnitClass.TRIPLE: 3,
    UnitClass.QUADRUPLE: 4,
}

UNIT_HEALTH: dict[UnitClass, int] = dict(CLASS_RANKS)
SHOTS_PER_UNIT: dict[UnitClass, int] = dict(CLASS_RANKS)
DETECTION_RADIUS: dict[UnitClass, int] = dict(CLASS_RANKS)

UNIT_COUNTS: dict[UnitClass, int] = {
    UnitClass.SINGLE: 4,
    UnitClass.DOUBLE: 3,
    UnitClass.TRIPLE: 2,
    UnitClass.QUADRUPLE: 1,
}

DEPLOYMENT_ORDER: tuple[UnitClass, ...] = (
    UnitClass.SINGLE,
    UnitClass.DOUBLE,
    UnitClass.TRIPLE,
    UnitClass.QUADRUPLE,
)


class CellStatus(StrEnum):
    """What a side knows about one cell."""

    UNKNOWN = "UNKNOWN"
    EMPTY = "EMPTY"
    UNIT = "UNIT"
    HIT = "HIT"
    MISS = "MISS"


class ShotResult(StrEnum):
    """Result of a single resolved shot."""

    MISS = "MISS"
    HIT = "HIT"
    DESTROYED = "DESTROYED"


class Winner(StrEnum):
    """Final outcome of a finished game."""

    PLAYER = "PLAYER"
    OPPONENT = "OPPONENT"
    DRAW = "DRAW"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int

    @property
    def label(self) -> str:
        """Human cell label, column letter then 1-based row ("A1")."""
        if not in_bounds(self):
            return f"({self.row}, {self.col})"
        return f"{COLUMN_LABELS[self.col]}{self.row + 1}"


def in_bounds(coord: Coord, size: int = BOARD_SIZE) -> bool:
    """Return whether the coordinate lies on the board."""
    return 0 <= coord.row < size and 0 <= coord.col < size


def require_in_bounds(coord: Coord, size: int = BOARD_SIZE) -> Coord:
    """Return the coordinate or raise for an off-board one."""
    if not in_bounds(coord, size):
        raise InvalidArgumentError(f"Coordinate ({coord.row}, {coord.col}) is off the board.")
    return coord


def chebyshev_distance(a: Coord, b: Coord) -> int:
    return max(abs(a.row - b.row), abs(a.col - b.col))


def cells_within(center: Coord, radius: int, size: int = BOARD_SIZE) -> list[Coord]:
    """On-board cells within Chebyshev ``radius`` of ``center``, center included."""
    result: list[Coord] = []
    for row in range(max(0, center.row - radius), min(size, center.row + radius + 1)):
        for col in range(max(0, center.col - radius), min(size, center.col + radius + 1)):
            result.append(Coord(row, col))
    return result


def neighbours(coord: Coord, size: int = BOARD_SIZE) -> list[Coord]:
    """The up-to-eight on-board cells adjacent to ``coord``."""
    return [cell for cell in cells_within(coord, 1, size) if cell != coord]


@dataclass(frozen=True, slots=True)
class Unit:
    """One ship. ``deployed`` is derived from ``position``."""

    unit_id: str
    side: Side
    unit_class: UnitClass
    health: int
    position: Coord | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.health <= self.unit_class.health:
            raise InvariantViolationError(
                f"Unit {self.unit_id} health {self.health} outside 0..{self.unit_class.health}."
            )
        if self.health == 0 and self.position is not None:
            raise InvariantViolationError(f"Destroyed unit {self.unit_id} still has a position.")

    @property
    def deployed(self) -> bool:
        return self.position is not None

    @property
    def destroyed(self) -> bool:
        return self.health == 0

    @property
    def current_class(self) -> UnitClass:
        """Displayed class; it drops with damage so that rank equals health."""
        if self.health == 0:
            return self.unit_class
        return UnitClass.from_rank(self.health)

    @property
    def rank(self) -> int:
        return self.health

    @property
    def shots(self) -> int:
        return self.current_class.shots if self.deployed else 0

    @property
    def detection_radius(self) -> int:
        return self.current_class.detection_radius


Fleet = tuple[Unit, ...]
