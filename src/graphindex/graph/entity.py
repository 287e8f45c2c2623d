"""
Entity records and identity-marker classification.

The first character of an entity id is a hexadecimal type marker:
1-5 are nodes, 6-10 (``6``-``a``) are edges, anything else is invalid.
"""

from enum import Enum
import string
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


NODE_MARKERS = range(1, 6)
EDGE_MARKERS = range(6, 11)


class EntityKind(str, Enum):
    NODE = "node"
    EDGE = "edge"
    INVALID = "invalid"


def classify(entity_id: str) -> EntityKind:
    """Derive the entity kind from the leading marker of ``entity_id``."""
    if not entity_id or entity_id[0] not in string.hexdigits:
        return EntityKind.INVALID
    marker = int(entity_id[0], 16)
    if marker in NODE_MARKERS:
        return EntityKind.NODE
    if marker in EDGE_MARKERS:
        return EntityKind.EDGE
    return EntityKind.INVALID


class Entity(BaseModel):
    """
    A node or edge as delivered by the primary graph on mutation.

    ``tail`` and ``head`` are only meaningful for edges.
    """

    id: str
    label: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    tail: Optional[str] = None
    head: Optional[str] = None

    @property
    def kind(self) -> EntityKind:
        return classify(self.id)
