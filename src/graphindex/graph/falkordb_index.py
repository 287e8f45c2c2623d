"""
FalkorDB Index - graph index backed by FalkorDB (the RedisGraph module).

FalkorDB makes a Redis server Cypher-queryable. It has no multi-statement
transactions: edge replace, cascade delete and flush are sent as separate
statements, and a failure between two of them leaves the graph partially
updated.
"""

from typing import Any, Dict, Optional
import logging

from falkordb import FalkorDB
from redis import Redis
from redis.exceptions import RedisError, ResponseError

from graphindex.events import EventBus
from graphindex.graph.base import GraphIndex
from graphindex.graph.entity import Entity
from graphindex.graph.query_builder import (
    CypherQuery,
    build_cascade_node_delete,
    build_edge_delete,
    build_edge_replace,
    build_flush,
    build_index_create,
    build_node_create,
    build_node_lookup,
    build_node_update,
    build_uniqueness_check,
)
from graphindex.graph.result import QueryResult, from_result_set


logger = logging.getLogger(__name__)

# QueryResult statistics exposed by the falkordb client as snake_case attributes
_STATISTICS = (
    "labels_added",
    "labels_removed",
    "nodes_created",
    "nodes_deleted",
    "properties_set",
    "properties_removed",
    "relationships_created",
    "relationships_deleted",
    "indices_created",
    "indices_deleted",
)


def _statistics(result: Any) -> Optional[Dict[str, Any]]:
    stats = {}
    for name in _STATISTICS:
        value = getattr(result, name, None)
        if value is not None:
            stats[name] = value
    return stats or None


class FalkorDBGraphIndex(GraphIndex):
    """Graph index writing to one FalkorDB graph key."""

    def __init__(
        self,
        graph: Any,
        event_bus: Optional[EventBus] = None,
        connection: Optional[Redis] = None,
    ):
        """
        Initialize the index.

        Args:
            graph: Selected FalkorDB graph
            event_bus: Optional event bus to subscribe to
            connection: Redis connection to close with the index, if owned
        """
        self._graph = graph
        self._connection = connection
        super().__init__(event_bus)

    @classmethod
    def connect(
        cls,
        host: str = "localhost",
        port: int = 6379,
        password: Optional[str] = None,
        graph_name: str = "index",
        event_bus: Optional[EventBus] = None,
    ) -> "FalkorDBGraphIndex":
        """Open a FalkorDB connection and select ``graph_name``."""
        db = FalkorDB(host=host, port=port, password=password or None)
        logger.info(f"Connected to FalkorDB at {host}:{port}, graph {graph_name}")
        return cls(db.select_graph(graph_name), event_bus=event_bus, connection=db.connection)

    @property
    def client(self) -> Any:
        return self._graph

    def _execute(self, statement: CypherQuery) -> QueryResult:
        logger.debug(f"Running query: {statement.text}")
        try:
            result = self._graph.query(statement.text, statement.params or None)
        except RedisError as e:
            logger.error(f"Query failed: {e}\nQuery: {statement.text}")
            raise
        return from_result_set(result.result_set, _statistics(result))

    def query(self, query: str, params: Optional[Dict[str, Any]] = None) -> QueryResult:
        return self._execute(CypherQuery(query, params or {}))

    def check_node_uniqueness(self, field_name: str, field_value: Any, label: Optional[str] = None) -> bool:
        result = self._execute(build_uniqueness_check(field_name, field_value, label))
        row = next(result.rows(), (0,))
        return row[0] == 0

    def index_node(self, entity: Entity) -> None:
        existing = self._execute(build_node_lookup(entity.id))
        if len(existing) == 0:
            statement = build_node_create(entity.label, entity.id, entity.attributes)
        else:
            statement = build_node_update(entity.label, entity.id, entity.attributes)
        logger.debug(f"The query will be as follows; {statement.text}")
        self._execute(statement)

    def index_edge(self, entity: Entity) -> None:
        for statement in build_edge_replace(
            entity.label, entity.id, entity.tail, entity.head, entity.attributes
        ):
            self._execute(statement)

    def node_deleted(self, entity_id: str) -> None:
        logger.info(f"Node deletion request received by {entity_id}", extra={"entity_id": entity_id})
        for statement in build_cascade_node_delete(entity_id):
            self._execute(statement)
        logger.info(f"Node {entity_id} deleted", extra={"entity_id": entity_id})

    def edge_deleted(self, entity_id: str) -> None:
        logger.info(f"Edge deletion request received by {entity_id}", extra={"entity_id": entity_id})
        self._execute(build_edge_delete(entity_id))
        logger.info(f"Edge {entity_id} deleted", extra={"entity_id": entity_id})

    def flush(self) -> None:
        logger.warning("Flushing FalkorDB index - this will delete ALL data!")
        for statement in build_flush():
            self._execute(statement)
        logger.info("FalkorDB index flushed")

    def create_index(self, label: str, field_name: str) -> None:
        statement = build_index_create(label, field_name, if_not_exists=False)
        try:
            self._graph.query(statement.text)
        except ResponseError as e:
            # FalkorDB has no IF NOT EXISTS; an existing index is reported as an error
            if "already indexed" in str(e).lower():
                logger.debug(f"Index creation skipped: {e}")
                return
            logger.error(f"Index creation failed: {e}\nQuery: {statement.text}")
            raise
        except RedisError as e:
            logger.error(f"Index creation failed: {e}\nQuery: {statement.text}")
            raise
        logger.info(f"Created index on :{label}({field_name})")

    def health_check(self) -> bool:
        try:
            result = self._execute(CypherQuery("RETURN 1", {}))
            row = next(result.rows(), None)
            return row is not None and row[0] == 1
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False

    def close(self) -> None:
        super().close()
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        logger.info("Disconnected from FalkorDB")
