"""Public event bus API contracts."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Subscription:
    """Token returned by ``subscribe``; hand it back to ``unsubscribe``."""

    id: int


class EventBus(Protocol):
    """Synchronous fan-out of match log entries to listeners.

    Handlers run inline on the caller's thread, in subscription order, and see
    every published event that is an instance of the type they subscribed to.
    """

    def subscribe[TEvent](
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Register ``handler`` for ``event_type`` and its subclasses."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Drop a handler; unknown or already dropped tokens are ignored."""

    def publish(self, event: object) -> int:
        """Deliver one event; returns how many handlers ran."""

    def publish_all(self, events: Iterable[object]) -> int:
        """Deliver a batch in order, e.g. the entries one intent appended."""


def create_event_bus() -> EventBus:
    from engine.runtime.events import RuntimeEventBus

    return RuntimeEventBus()
