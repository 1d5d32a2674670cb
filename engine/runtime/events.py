"""Synchronous in-process event bus."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from engine.api.events import Subscription

EventHandler = Callable[[Any], None]


class RuntimeEventBus:
    """Type-filtered pub/sub. Handlers run inline, in subscription order."""

    def __init__(self) -> None:
        self._next_id = 1
        self._subscriptions: dict[int, tuple[type[object], EventHandler]] = {}

    def subscribe[TEvent](
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        sub_id = self._next_id
        self._next_id += 1
        self._subscriptions[sub_id] = (event_type, handler)
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscriptions.pop(subscription.id, None)

    def publish(self, event: object) -> int:
        """Deliver one event to every handler subscribed to its type."""
        invoked = 0
        for subscribed_type, handler in tuple(self._subscriptions.values()):
            if isinstance(event, subscribed_type):
                handler(event)
                invoked += 1
        return invoked

    def publish_all(self, events: Iterable[object]) -> int:
        return sum(self.publish(event) for event in events)
