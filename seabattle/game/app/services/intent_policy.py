"""Shared legality checks for player intents."""

from __future__ import annotations

import logging

from seabattle.game.app.state import GameState
from seabattle.game.app.state_machine import GamePhase
from seabattle.game.core.models import Side

logger = logging.getLogger(__name__)


def rejection_reason(
    state: GameState,
    *,
    side: Side | None,
    phases: tuple[GamePhase, ...],
) -> str | None:
    """Return why an intent cannot run now, or ``None`` when phase and side allow it.

    ``side=None`` means the caller speaks for whoever is active.
    """
    if state.phase not in phases:
        return f"not allowed during {state.phase}"
    if side is not None and side is not state.turn.active_side:
        return f"{side} is not the active side"
    return None


def reject(state: GameState, intent: str, reason: str) -> GameState:
    """Log a refused intent and hand back ``state`` untouched."""
    logger.debug(
        "intent_rejected intent=%s reason=%s",
        intent,
        reason,
        extra={"phase": state.phase.value, "turn": state.turn.number},
    )
    return state
