"""
Graph Module - mirrors graph mutations into an external graph database.

This module provides:
- Entity classification and records
- Cypher query builder
- Canonical query result model
- Neo4j and FalkorDB index backends
- Signal subscriber for event-driven sync
"""

from .base import GraphIndex
from .entity import Entity, EntityKind, classify
from .errors import GraphIndexError, MalformedEntity, UnrecognizedEntityKind
from .factory import create_graph_index
from .falkordb_index import FalkorDBGraphIndex
from .neo4j_index import Neo4jGraphIndex
from .result import QueryResult, QuerySummary
from .subscriber import GraphIndexSubscriber

__all__ = [
    "GraphIndex",
    "Entity",
    "EntityKind",
    "classify",
    "GraphIndexError",
    "MalformedEntity",
    "UnrecognizedEntityKind",
    "create_graph_index",
    "FalkorDBGraphIndex",
    "Neo4jGraphIndex",
    "QueryResult",
    "QuerySummary",
    "GraphIndexSubscriber",
]
