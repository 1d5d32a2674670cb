"""Engine runtime modules."""

from engine.runtime.events import RuntimeEventBus
from engine.runtime.flow import RuntimeFlowProgram
from engine.runtime.logging import configure_engine_logging, shutdown_engine_logging

__all__ = [
    "RuntimeEventBus",
    "RuntimeFlowProgram",
    "configure_engine_logging",
    "shutdown_engine_logging",
]
