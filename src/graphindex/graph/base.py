"""
Graph Index - the contract every indexing backend implements.

An index mirrors the primary graph into an external, queryable store. It is
stateless between calls; the only thing it owns is the backend handle it
was constructed with.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Union
import logging

from graphindex.events import EventBus
from graphindex.graph.entity import Entity, EntityKind
from graphindex.graph.errors import MalformedEntity, UnrecognizedEntityKind
from graphindex.graph.query_builder import build_edge_count, build_node_count
from graphindex.graph.result import QueryResult
from graphindex.graph.subscriber import GraphIndexSubscriber


logger = logging.getLogger(__name__)


class GraphIndex(ABC):
    """
    Abstract interface for graph index backends.

    When an event bus is given, the index subscribes itself to the graph
    mutation signals at construction time.
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._subscriber = None
        if event_bus is not None:
            self._subscriber = GraphIndexSubscriber(event_bus, self)
            self._subscriber.start()

    @property
    @abstractmethod
    def client(self) -> Any:
        """Direct access to the backend handle, for diagnostics."""
        ...

    @abstractmethod
    def query(self, query: str, params: Optional[Dict[str, Any]] = None) -> QueryResult:
        """
        Run arbitrary query text with named ``$parameters``.

        Args:
            query: Cypher query
            params: Parameter bindings

        Returns:
            Normalized result
        """
        ...

    @abstractmethod
    def check_node_uniqueness(self, field_name: str, field_value: Any, label: Optional[str] = None) -> bool:
        """
        Return True when no node (of ``label``, if given) has ``field_name`` equal to ``field_value``.
        """
        ...

    def index(self, entity: Union[Entity, Mapping[str, Any]]) -> None:
        """
        Index a node or an edge, depending on the marker in its id.

        Args:
            entity: Entity record, or its mapping form

        Raises:
            UnrecognizedEntityKind: If the id marker is neither a node nor an edge
        """
        if not isinstance(entity, Entity):
            entity = Entity.model_validate(entity)

        logger.info(
            f"Index request received by {entity.id}, a {entity.label}",
            extra={"entity_id": entity.id, "label": entity.label},
        )

        kind = entity.kind
        if kind is EntityKind.NODE:
            self.index_node(entity)
        elif kind is EntityKind.EDGE:
            if not entity.tail or not entity.head:
                raise MalformedEntity(f"Edge {entity.id} is missing its tail or head")
            self.index_edge(entity)
        else:
            raise UnrecognizedEntityKind(entity.id)

    @abstractmethod
    def index_node(self, entity: Entity) -> None:
        """Create the node, or overwrite its attributes when it already exists."""
        ...

    @abstractmethod
    def index_edge(self, entity: Entity) -> None:
        """Replace the edge: delete any existing copy, then create it."""
        ...

    @abstractmethod
    def node_deleted(self, entity_id: str) -> None:
        """Delete the node and every edge incident to it."""
        ...

    @abstractmethod
    def edge_deleted(self, entity_id: str) -> None:
        """Delete the edge with this identity."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """
        Delete the whole destination graph.

        WARNING: Irreversible; meant for resets and tests.
        """
        ...

    @abstractmethod
    def create_index(self, label: str, field_name: str) -> None:
        """Create a supporting index on a label/property pair. Safe to repeat."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if the backend is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...

    def close(self) -> None:
        """Stop listening to graph signals and release the backend handle."""
        if self._subscriber is not None:
            self._subscriber.stop()
            self._subscriber = None

    def stats(self) -> Dict[str, Any]:
        """
        Get stats about the destination graph.

        Returns:
            Dictionary with node and edge counts
        """
        nodes = self.query(*build_node_count())
        edges = self.query(*build_edge_count())
        return {
            "nodes": next(nodes.rows())[0],
            "edges": next(edges.rows())[0],
            "healthy": self.health_check(),
        }
