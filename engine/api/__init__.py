"""Public engine API contracts."""

from engine.api.events import EventBus, Subscription, create_event_bus
from engine.api.flow import FlowContext, FlowProgram, FlowTransition, create_flow_program
from engine.api.gameplay import StateSnapshot, StateStore, create_state_store
from engine.api.logging import EngineLoggingConfig, get_logger

__all__ = [
    "EngineLoggingConfig",
    "EventBus",
    "FlowContext",
    "FlowProgram",
    "FlowTransition",
    "StateSnapshot",
    "StateStore",
    "Subscription",
    "create_event_bus",
    "create_flow_program",
    "create_state_store",
    "get_logger",
]
