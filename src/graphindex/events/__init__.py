"""graphindex Event Bus - graph mutation signals and their delivery."""

from .bus import EventBus, EventHandler
from .event import GraphSignal
from .local_bus import InMemoryEventBus

__all__ = [
    # Core interfaces
    "EventBus",
    "EventHandler",
    # Signals
    "GraphSignal",
    # Implementations
    "InMemoryEventBus",
]
