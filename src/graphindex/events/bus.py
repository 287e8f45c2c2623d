"""
Event Bus - Abstract interface for in-process signal delivery.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from .event import GraphSignal


# Type alias for event handlers
EventHandler = Callable[[Any], None]


class EventBus(ABC):
    """
    Abstract base class for event bus implementations.

    The indexing layer only needs the registration half of this interface;
    ``publish`` is what the primary graph engine calls on each mutation.
    """

    @abstractmethod
    def subscribe(self, signal: GraphSignal, handler: EventHandler) -> None:
        """
        Register a handler for a signal.

        Args:
            signal: Signal to listen to
            handler: Callable receiving the signal payload
        """
        ...

    @abstractmethod
    def unsubscribe(self, signal: GraphSignal, handler: Optional[EventHandler] = None) -> None:
        """
        Remove a handler, or every handler of the signal when none is given.

        Args:
            signal: Signal to stop listening to
            handler: Handler previously passed to subscribe
        """
        ...

    @abstractmethod
    def publish(self, signal: GraphSignal, payload: Any) -> None:
        """
        Deliver a payload to every handler registered for the signal.

        Args:
            signal: Signal being raised
            payload: Signal payload
        """
        ...
