"""Game phases and per-turn action categories."""

from enum import StrEnum


class GamePhase(StrEnum):
    """Top-level game phases."""

    LOBBY = "LOBBY"
    PREMATCH = "PREMATCH"
    DEPLOYMENT = "DEPLOYMENT"
    BATTLE = "BATTLE"
    ENDED = "ENDED"


class TurnAction(StrEnum):
    """Action category chosen for the current turn; movement and attack exclude each other."""

    NONE = "NONE"
    MOVEMENT = "MOVEMENT"
    ATTACK = "ATTACK"
