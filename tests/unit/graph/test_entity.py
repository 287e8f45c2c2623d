"""
Unit tests for identity-marker classification.
"""

import pytest

from graphindex.graph.entity import Entity, EntityKind, classify
from graphindex.graph.errors import UnrecognizedEntityKind


@pytest.mark.parametrize("marker", ["1", "2", "3", "4", "5"])
def test_node_markers(marker):
    assert classify(marker + "a2b") is EntityKind.NODE


@pytest.mark.parametrize("marker", ["6", "7", "8", "9", "a", "A"])
def test_edge_markers(marker):
    assert classify(marker + "f00") is EntityKind.EDGE


@pytest.mark.parametrize("entity_id", ["0abc", "b12", "c", "d9", "e0", "F1", "g12", "-1", " 1", "", "١abc", "１abc", "१x", "６f"])
def test_invalid_markers(entity_id):
    assert classify(entity_id) is EntityKind.INVALID


def test_entity_kind_follows_id():
    node = Entity(id="1a2b", label="Person", attributes={"name": "Ada"})
    edge = Entity(id="6c3d", label="KNOWS", tail="1a2b", head="2b3c")

    assert node.kind is EntityKind.NODE
    assert edge.kind is EntityKind.EDGE
    assert node.tail is None and node.head is None


def test_entity_attributes_default_empty():
    entity = Entity.model_validate({"id": "2ff", "label": "Topic"})
    assert entity.attributes == {}


def test_unrecognized_kind_carries_marker():
    error = UnrecognizedEntityKind("c0ffee")
    assert error.marker == "c"
    assert error.entity_id == "c0ffee"
    assert "'c'" in str(error)
    assert isinstance(error, ValueError)


def test_unrecognized_kind_empty_id():
    assert UnrecognizedEntityKind("").marker == ""
