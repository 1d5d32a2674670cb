"""Transition-table executor."""

from __future__ import annotations

from engine.api.flow import FlowContext, FlowTransition


class RuntimeFlowProgram[TState]:
    """Deterministic first-match resolver over an immutable transition table."""

    def __init__(self, transitions: tuple[FlowTransition[TState], ...]) -> None:
        self._transitions = transitions

    def resolve(
        self, current_state: TState, trigger: str, *, payload: object | None = None
    ) -> TState | None:
        for transition in self._transitions:
            if not transition.matches(trigger, current_state):
                continue
            if transition.guard is not None:
                context = FlowContext(
                    trigger=trigger,
                    source=current_state,
                    target=transition.target,
                    payload=payload,
                )
                if not transition.guard(context):
                    continue
            return transition.target
        return None

    def triggers_from(self, current_state: TState) -> tuple[str, ...]:
        seen: list[str] = []
        for transition in self._transitions:
            if not transition.sources or current_state in transition.sources:
                if transition.trigger not in seen:
                    seen.append(transition.trigger)
        return tuple(seen)
