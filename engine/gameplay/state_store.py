"""Gameplay state-store implementation."""

from __future__ import annotations

from collections.abc import Callable

from engine.api.gameplay import StateSnapshot


class RuntimeStateStore[TState]:
    """Versioned holder for an immutable state value.

    Values are never copied: transitions return new objects, and handing back the
    very same object signals "nothing changed".
    """

    def __init__(self, initial_state: TState) -> None:
        self._value = initial_state
        self._revision = 0

    def snapshot(self) -> StateSnapshot[TState]:
        return StateSnapshot(value=self._value, revision=self._revision)

    def peek(self) -> TState:
        return self._value

    def set(self, value: TState) -> StateSnapshot[TState]:
        """Replace state value and increment revision."""
        self._value = value
        self._revision += 1
        return self.snapshot()

    def apply(self, transition: Callable[[TState], TState]) -> StateSnapshot[TState]:
        """Run ``transition`` on the current value; identity result keeps the revision."""
        next_value = transition(self._value)
        if next_value is self._value:
            return self.snapshot()
        return self.set(next_value)

    def revision(self) -> int:
        return self._revision
