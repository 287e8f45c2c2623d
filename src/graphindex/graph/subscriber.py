"""
Graph Index Subscriber - binds graph mutation signals to an index.

Every touch or delete in the primary graph is forwarded to the index as
it happens. Delivery is at-least-once and best effort: handlers return
nothing to the event source and a failed sync does not undo the mutation.
"""

from typing import TYPE_CHECKING, Any, Dict
import logging

from graphindex.events import EventBus, EventHandler, GraphSignal

if TYPE_CHECKING:
    from graphindex.graph.base import GraphIndex


logger = logging.getLogger(__name__)


class GraphIndexSubscriber:
    """
    Listener that keeps a graph index in sync with the primary graph.

    This subscriber:
    1. Indexes every touched entity (node upsert or edge replace)
    2. Cascades node deletions to incident edges
    3. Removes deleted edges

    Handler errors are not caught here; they reach the event bus, which is
    the hosting process's reporting boundary.
    """

    def __init__(self, event_bus: EventBus, index: "GraphIndex"):
        """
        Initialize the subscriber.

        Args:
            event_bus: Event bus delivering graph signals
            index: Index receiving the mutations
        """
        self.event_bus = event_bus
        self.index = index
        self._handlers: Dict[GraphSignal, EventHandler] = {
            GraphSignal.ENTITY_TOUCHED: self._handle_entity_touched,
            GraphSignal.NODE_DELETED: self._handle_node_deleted,
            GraphSignal.EDGE_DELETED: self._handle_edge_deleted,
        }
        self._running = False

    def start(self) -> None:
        """Subscribe to the three graph signals."""
        if self._running:
            return
        for signal, handler in self._handlers.items():
            self.event_bus.subscribe(signal, handler)
        self._running = True
        logger.info(f"Graph index subscriber started ({type(self.index).__name__})")

    def stop(self) -> None:
        """Unsubscribe from the graph signals."""
        if not self._running:
            return
        for signal, handler in self._handlers.items():
            self.event_bus.unsubscribe(signal, handler)
        self._running = False
        logger.info("Graph index subscriber stopped")

    @property
    def running(self) -> bool:
        return self._running

    def _handle_entity_touched(self, entity: Any) -> None:
        self.index.index(entity)

    def _handle_node_deleted(self, entity_id: str) -> None:
        self.index.node_deleted(entity_id)

    def _handle_edge_deleted(self, entity_id: str) -> None:
        self.index.edge_deleted(entity_id)
