"""Win detection and own-board bookkeeping shared by the turn flow."""

from __future__ import annotations

from seabattle.game.core.board import BoardState
from seabattle.game.core.fleet import has_ever_deployed
from seabattle.game.core.models import CellStatus, Fleet, Winner


def is_defeated(fleet: Fleet) -> bool:
    """A side is beaten once it has put ships to sea and none are left afloat."""
    if not has_ever_deployed(fleet):
        return False
    return not any(unit.deployed and unit.health > 0 for unit in fleet)


def check_game_over(player_fleet: Fleet, opponent_fleet: Fleet) -> Winner | None:
    """Return the winner, ``Winner.DRAW`` on mutual defeat, or ``None`` while running."""
    player_beaten = is_defeated(player_fleet)
    opponent_beaten = is_defeated(opponent_fleet)
    if player_beaten and opponent_beaten:
        return Winner.DRAW
    if player_beaten:
        return Winner.OPPONENT
    if opponent_beaten:
        return Winner.PLAYER
    return None


def sync_own_markers(board: BoardState, before: Fleet, after: Fleet) -> BoardState:
    """Move a side's own UNIT markers to follow its units' new positions.

    A marker is only cleared if it still names the unit, so HIT/MISS marks left
    by shots on that cell survive.
    """
    previous = {unit.unit_id: unit.position for unit in before}
    changed = [unit for unit in after if previous.get(unit.unit_id) != unit.position]
    if not changed:
        return board
    next_board = board.copy()
    for unit in changed:
        old = previous.get(unit.unit_id)
        if old is not None and next_board.unit_ids.get(old) == unit.unit_id:
            next_board.mark(old, CellStatus.EMPTY)
    for unit in changed:
        if unit.position is not None:
            next_board.mark(unit.position, CellStatus.UNIT, unit.unit_id)
    return next_board
