"""Game log entries emitted by turn transitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from seabattle.game.core.models import Coord, Side, UnitClass


class GameEventKind(StrEnum):
    HIT = "HIT"
    MISS = "MISS"
    DESTROYED = "DESTROYED"
    DEPLOYED = "DEPLOYED"
    MOVED = "MOVED"
    TURN = "TURN"
    INFO = "INFO"


@dataclass(frozen=True, slots=True)
class GameEvent:
    """One line of the battle log. ``seq`` is 1-based and gapless per game."""

    seq: int
    kind: GameEventKind
    message: str
    side: Side | None = None
    coord: Coord | None = None
    unit_class: UnitClass | None = None


def append_event(
    log: tuple[GameEvent, ...],
    kind: GameEventKind,
    message: str,
    *,
    side: Side | None = None,
    coord: Coord | None = None,
    unit_class: UnitClass | None = None,
) -> tuple[GameEvent, ...]:
    entry = GameEvent(
        seq=len(log) + 1,
        kind=kind,
        message=message,
        side=side,
        coord=coord,
        unit_class=unit_class,
    )
    return (*log, entry)
