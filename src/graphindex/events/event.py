"""
Graph mutation signals emitted by the primary graph engine.
"""

from enum import Enum


class GraphSignal(str, Enum):
    """Signals the primary graph raises on every mutation."""

    # Payload: the touched entity as a mapping (id, label, attributes[, tail, head])
    ENTITY_TOUCHED = "graphsystem.touched"

    # Payload: the identifier of the removed entity
    NODE_DELETED = "graphsystem.node_deleted"
    EDGE_DELETED = "graphsystem.edge_deleted"
