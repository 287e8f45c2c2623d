"""
In-process synchronous event bus.
"""

from collections import defaultdict
from typing import Any, Dict, List, Optional
import logging

from .bus import EventBus, EventHandler
from .event import GraphSignal


logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    Delivers signals synchronously, in registration order, on the caller's thread.

    Handlers are fire-and-forget: a failing handler is logged and the
    remaining handlers still run. Nothing is raised back to the publisher.
    """

    def __init__(self) -> None:
        self._handlers: Dict[GraphSignal, List[EventHandler]] = defaultdict(list)

    def subscribe(self, signal: GraphSignal, handler: EventHandler) -> None:
        self._handlers[GraphSignal(signal)].append(handler)
        logger.debug(f"Subscribed handler to {GraphSignal(signal).value}")

    def unsubscribe(self, signal: GraphSignal, handler: Optional[EventHandler] = None) -> None:
        signal = GraphSignal(signal)
        if handler is None:
            self._handlers.pop(signal, None)
            return
        handlers = self._handlers.get(signal, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, signal: GraphSignal, payload: Any) -> None:
        signal = GraphSignal(signal)
        for handler in list(self._handlers.get(signal, [])):
            try:
                handler(payload)
            except Exception as e:
                logger.error(
                    f"Handler failed for {signal.value}: {e}",
                    exc_info=True,
                    extra={"signal": signal.value},
                )

    def handler_count(self, signal: GraphSignal) -> int:
        """Number of handlers registered for a signal."""
        return len(self._handlers.get(GraphSignal(signal), []))
