"""
Neo4j Index - graph index backed by Neo4j over Bolt.

Bolt is the recommended connection mode; it is stateful and binary, hence
more efficient than HTTP. Multi-statement operations (node upsert, edge
replace, cascade delete, flush) run inside one explicit transaction, so a
failure half way leaves the destination graph untouched.
"""

from typing import Any, Callable, Dict, Optional, Sequence
import logging

from neo4j import Driver, GraphDatabase, Transaction, Session
from neo4j.exceptions import DriverError, Neo4jError

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
from graphindex.graph.result import QueryResult, from_records


logger = logging.getLogger(__name__)


class Neo4jGraphIndex(GraphIndex):
    """
    Graph index writing to a Neo4j database.

    The driver is injected and shared by every call; sessions are opened
    per operation.
    """

    def __init__(
        self,
        driver: Driver,
        database: str = "neo4j",
        event_bus: Optional[EventBus] = None,
    ):
        """
        Initialize the index.

        Args:
            driver: Connected Neo4j driver
            database: Database name used for every session
            event_bus: Optional event bus to subscribe to
        """
        self._driver = driver
        self.database = database
        super().__init__(event_bus)

    @classmethod
    def connect(
        cls,
        uri: str = "bolt://localhost:7687",
        username: str = "neo4j",
        password: str = "graphindex_dev",
        database: str = "neo4j",
        event_bus: Optional[EventBus] = None,
    ) -> "Neo4jGraphIndex":
        """Build a driver for ``uri``, verify it and wrap it in an index."""
        driver = GraphDatabase.driver(uri, auth=(username, password))
        try:
            driver.verify_connectivity()
        except (Neo4jError, DriverError) as e:
            logger.error(f"Failed to connect to Neo4j: {e}")
            driver.close()
            raise
        logger.info(f"Connected to Neo4j at {uri}")
        return cls(driver, database=database, event_bus=event_bus)

    @property
    def client(self) -> Driver:
        return self._driver

    def _session(self) -> Session:
        return self._driver.session(database=self.database)

    @staticmethod
    def _run(runner: Any, statement: CypherQuery) -> QueryResult:
        """Run one statement on a session or transaction and normalize it."""
        logger.debug(f"Running query: {statement.text}")
        try:
            result = runner.run(statement.text, statement.params)
            records = list(result)
            summary = result.consume()
        except (Neo4jError, DriverError) as e:
            logger.error(f"Query failed: {e}\nQuery: {statement.text}")
            raise
        return from_records(records, summary.counters)

    def _in_transaction(self, work: Callable[..., Any], *args: Any) -> Any:
        """Run ``work(tx, *args)`` in one write transaction and commit it."""
        with self._session() as session:
            try:
                with session.begin_transaction() as tx:
                    outcome = work(tx, *args)
                    tx.commit()
                    return outcome
            except (Neo4jError, DriverError) as e:
                logger.error(f"Write transaction failed: {e}")
                raise

    def _execute_all(self, tx: Transaction, statements: Sequence[CypherQuery]) -> QueryResult:
        result = QueryResult()
        for statement in statements:
            result = self._run(tx, statement)
        return result

    def query(self, query: str, params: Optional[Dict[str, Any]] = None) -> QueryResult:
        statement = CypherQuery(query, params or {})
        with self._session() as session:
            return self._run(session, statement)

    def check_node_uniqueness(self, field_name: str, field_value: Any, label: Optional[str] = None) -> bool:
        result = self.query(*build_uniqueness_check(field_name, field_value, label))
        row = next(result.rows(), (0,))
        return row[0] == 0

    def _upsert_node(self, tx: Transaction, entity: Entity) -> QueryResult:
        existing = self._run(tx, build_node_lookup(entity.id))
        if len(existing) == 0:
            statement = build_node_create(entity.label, entity.id, entity.attributes)
        else:
            statement = build_node_update(entity.label, entity.id, entity.attributes)
        logger.debug(f"The query will be as follows; {statement.text}")
        return self._run(tx, statement)

    def index_node(self, entity: Entity) -> None:
        self._in_transaction(self._upsert_node, entity)

    def index_edge(self, entity: Entity) -> None:
        statements = build_edge_replace(
            entity.label, entity.id, entity.tail, entity.head, entity.attributes
        )
        self._in_transaction(self._execute_all, statements)

    def node_deleted(self, entity_id: str) -> None:
        logger.info(f"Node deletion request received by {entity_id}", extra={"entity_id": entity_id})
        self._in_transaction(self._execute_all, build_cascade_node_delete(entity_id))
        logger.info(f"Node {entity_id} deleted", extra={"entity_id": entity_id})

    def edge_deleted(self, entity_id: str) -> None:
        logger.info(f"Edge deletion request received by {entity_id}", extra={"entity_id": entity_id})
        self._in_transaction(self._execute_all, [build_edge_delete(entity_id)])
        logger.info(f"Edge {entity_id} deleted", extra={"entity_id": entity_id})

    def flush(self) -> None:
        logger.warning("Flushing Neo4j index - this will delete ALL data!")
        self._in_transaction(self._execute_all, build_flush())
        logger.info("Neo4j index flushed")

    def create_index(self, label: str, field_name: str) -> None:
        # IF NOT EXISTS makes a repeated call a no-op
        self._in_transaction(self._execute_all, [build_index_create(label, field_name)])
        logger.info(f"Created index on :{label}({field_name})")

    def health_check(self) -> bool:
        try:
            result = self.query("RETURN 1 AS health")
            row = next(result.rows(), None)
            return row is not None and row[0] == 1
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False

    def close(self) -> None:
        super().close()
        self._driver.close()
        logger.info("Disconnected from Neo4j")
