"""Public flow/state-machine API contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class FlowContext[TState]:
    """Transition evaluation context handed to guards."""

    trigger: str
    source: TState
    target: TState
    payload: object | None = None


type TransitionGuard[TState] = Callable[[FlowContext[TState]], bool]


@dataclass(frozen=True, slots=True)
class FlowTransition[TState]:
    """One row of a transition table.

    ``sources`` empty means the trigger applies from any state.
    """

    trigger: str
    sources: tuple[TState, ...]
    target: TState
    guard: TransitionGuard[TState] | None = None

    def matches(self, trigger: str, current_state: TState) -> bool:
        if self.trigger != trigger:
            return False
        return not self.sources or current_state in self.sources


class FlowProgram[TState](Protocol):
    """Reusable transition table for stateless next-state queries."""

    def resolve(
        self, current_state: TState, trigger: str, *, payload: object | None = None
    ) -> TState | None:
        """Resolve next state for a trigger, or ``None`` when no row allows it."""

    def triggers_from(self, current_state: TState) -> tuple[str, ...]:
        """Return the triggers that have at least one row leaving ``current_state``."""


def create_flow_program[TState](
    transitions: tuple[FlowTransition[TState], ...],
) -> FlowProgram[TState]:
    """Create the default transition program implementation."""
    from engine.runtime.flow import RuntimeFlowProgram

    return RuntimeFlowProgram(transitions)
