"""
Backend selection for the graph index.
"""

from typing import Optional
import logging

from graphindex.events import EventBus
from graphindex.graph.base import GraphIndex
from graphindex.graph.falkordb_index import FalkorDBGraphIndex
from graphindex.graph.neo4j_index import Neo4jGraphIndex
from graphindex.platform.config import Settings, settings as default_settings


logger = logging.getLogger(__name__)

# RedisGraph is the module FalkorDB grew out of and speaks the same protocol
BACKENDS = {
    "neo4j": "neo4j",
    "falkordb": "falkordb",
    "redisgraph": "falkordb",
}


def create_graph_index(
    settings: Optional[Settings] = None,
    event_bus: Optional[EventBus] = None,
) -> GraphIndex:
    """
    Connect to the configured backend and return its index.

    Args:
        settings: Configuration, defaults to the environment settings
        event_bus: Event bus the index subscribes to, if any

    Returns:
        Connected graph index

    Raises:
        ValueError: If INDEX_BACKEND names an unknown backend
    """
    settings = settings or default_settings
    backend = BACKENDS.get(settings.INDEX_BACKEND.strip().lower())

    if backend == "neo4j":
        return Neo4jGraphIndex.connect(
            uri=settings.NEO4J_URI,
            username=settings.NEO4J_USER,
            password=settings.NEO4J_PASSWORD,
            database=settings.NEO4J_DATABASE,
            event_bus=event_bus,
        )
    if backend == "falkordb":
        return FalkorDBGraphIndex.connect(
            host=settings.FALKORDB_HOST,
            port=settings.FALKORDB_PORT,
            password=settings.FALKORDB_PASSWORD,
            graph_name=settings.FALKORDB_GRAPH,
            event_bus=event_bus,
        )

    raise ValueError(
        f"Unknown INDEX_BACKEND {settings.INDEX_BACKEND!r}, expected one of {sorted(BACKENDS)}"
    )
