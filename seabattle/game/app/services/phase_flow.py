"""Phase transitions for the match lifecycle."""

from __future__ import annotations

from engine.api.flow import FlowTransition, create_flow_program
from seabattle.game.app.state_machine import GamePhase
from seabattle.game.core.errors import InvariantViolationError

_LIVE = (GamePhase.DEPLOYMENT, GamePhase.BATTLE)


class PhaseFlowService:
    """Pure lookups over the lobby -> prematch -> deployment/battle -> ended table."""

    _PROGRAM = create_flow_program(
        (
            FlowTransition(trigger="init", sources=(), target=GamePhase.PREMATCH),
            FlowTransition(
                trigger="start",
                sources=(GamePhase.PREMATCH,),
                target=GamePhase.DEPLOYMENT,
            ),
            FlowTransition(
                trigger="deployed",
                sources=(GamePhase.DEPLOYMENT,),
                target=GamePhase.BATTLE,
            ),
            FlowTransition(trigger="next_deployment", sources=_LIVE, target=GamePhase.DEPLOYMENT),
            FlowTransition(trigger="next_battle", sources=_LIVE, target=GamePhase.BATTLE),
            FlowTransition(
                trigger="game_over",
                sources=(GamePhase.PREMATCH, *_LIVE),
                target=GamePhase.ENDED,
            ),
            FlowTransition(trigger="reset", sources=(), target=GamePhase.LOBBY),
        )
    )

    @staticmethod
    def resolve(current: GamePhase, trigger: str) -> GamePhase | None:
        return PhaseFlowService._PROGRAM.resolve(current, trigger)

    @staticmethod
    def allows(current: GamePhase, trigger: str) -> bool:
        return PhaseFlowService._PROGRAM.resolve(current, trigger) is not None

    @staticmethod
    def triggers_from(current: GamePhase) -> tuple[str, ...]:
        return PhaseFlowService._PROGRAM.triggers_from(current)

    @staticmethod
    def require(current: GamePhase, trigger: str) -> GamePhase:
        """Resolve ``trigger`` for a caller that already checked it is legal."""
        target = PhaseFlowService._PROGRAM.resolve(current, trigger)
        if target is None:
            raise InvariantViolationError(f"No {trigger!r} transition from {current}.")
        return target
