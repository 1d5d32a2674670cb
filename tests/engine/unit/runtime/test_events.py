from __future__ import annotations

from dataclasses import dataclass

from engine.api.events import create_event_bus


@dataclass(frozen=True, slots=True)
class BaseEvent:
    name: str


@dataclass(frozen=True, slots=True)
class DerivedEvent(BaseEvent):
    code: int


@dataclass(frozen=True, slots=True)
class OtherEvent:
    name: str


def test_event_bus_publish_invokes_subscribers() -> None:
    bus = create_event_bus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(event.name))

    invoked = bus.publish(BaseEvent(name="hello"))

    assert invoked == 1
    assert seen == ["hello"]


def test_event_bus_supports_polymorphic_subscription() -> None:
    bus = create_event_bus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(event.name))

    invoked = bus.publish(DerivedEvent(name="child", code=42))

    assert invoked == 1
    assert seen == ["child"]


def test_event_bus_filters_by_type() -> None:
    bus = create_event_bus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(event.name))

    assert bus.publish(OtherEvent(name="elsewhere")) == 0
    assert seen == []


def test_event_bus_unsubscribe_stops_dispatch() -> None:
    bus = create_event_bus()
    seen: list[str] = []
    subscription = bus.subscribe(BaseEvent, lambda event: seen.append(event.name))
    bus.unsubscribe(subscription)
    bus.unsubscribe(subscription)

    invoked = bus.publish(BaseEvent(name="ignored"))

    assert invoked == 0
    assert seen == []


def test_event_bus_publish_all_keeps_order() -> None:
    bus = create_event_bus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(f"a:{event.name}"))
    bus.subscribe(BaseEvent, lambda event: seen.append(f"b:{event.name}"))

    invoked = bus.publish_all([BaseEvent(name="1"), OtherEvent(name="x"), BaseEvent(name="2")])

    assert invoked == 4
    assert seen == ["a:1", "b:1", "a:2", "b:2"]
