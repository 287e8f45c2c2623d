"""
Errors raised by the indexing layer.

Backend transport failures are not wrapped: the drivers' own exceptions
(neo4j.exceptions.*, redis.exceptions.*) reach the caller unchanged.
"""


class GraphIndexError(Exception):
    """Base class for indexing errors."""


class UnrecognizedEntityKind(GraphIndexError, ValueError):
    """The identity marker of an entity is outside the node and edge ranges."""

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        self.marker = entity_id[:1]
        super().__init__(f"Unrecognized entity type with header {self.marker!r}")


class MalformedEntity(GraphIndexError, ValueError):
    """An entity record is missing fields its kind requires."""
