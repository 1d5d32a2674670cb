"""Public gameplay state-store API contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class StateSnapshot[TState]:
    """Versioned state snapshot from the state store."""

    value: TState
    revision: int


class StateStore[TState](Protocol):
    """Typed store for one immutable gameplay state value."""

    def snapshot(self) -> StateSnapshot[TState]:
        """Return current state snapshot."""

    def peek(self) -> TState:
        """Return current state value."""

    def set(self, value: TState) -> StateSnapshot[TState]:
        """Replace state value and increment revision."""

    def apply(self, transition: Callable[[TState], TState]) -> StateSnapshot[TState]:
        """Run a pure transition; bump revision only if it produced a new value."""

    def revision(self) -> int:
        """Return current revision number."""


def create_state_store[TState](initial_state: TState) -> StateStore[TState]:
    """Create default state-store implementation."""
    from engine.gameplay.state_store import RuntimeStateStore

    return RuntimeStateStore(initial_state)
