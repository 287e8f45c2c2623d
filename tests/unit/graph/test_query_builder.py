"""
Unit tests for the Cypher query builder.
"""

import json

import pytest

from graphindex.graph.query_builder import (
    IDENTITY_KEY,
    build_cascade_node_delete,
    build_edge_delete,
    build_edge_replace,
    build_flush,
    build_index_create,
    build_node_create,
    build_node_lookup,
    build_node_update,
    build_uniqueness_check,
    flatten_attributes,
    quote_identifier,
)


class TestQuoteIdentifier:

    def test_plain_name(self):
        assert quote_identifier("Person") == "`Person`"

    def test_backticks_are_doubled(self):
        assert quote_identifier("we`ird") == "`we``ird`"

    def test_injection_stays_inside_identifier(self):
        quoted = quote_identifier("Person`) DETACH DELETE (x")
        assert quoted == "`Person``) DETACH DELETE (x`"


class TestFlattenAttributes:
    """Attribute flattening before properties are bound."""

    def test_simple(self):
        data = {"a": 1, "b": "test", "c": True}
        assert flatten_attributes(data) == {"a": 1, "b": "test", "c": True}

    def test_nested(self):
        data = {"user": {"name": "Bob", "settings": {"theme": "dark"}}, "active": True}
        result = flatten_attributes(data)

        assert result["user_name"] == "Bob"
        assert result["user_settings_theme"] == "dark"
        assert result["active"] is True
        assert "user" not in result

    def test_lists(self):
        data = {
            "tags": ["a", "b", "c"],
            "scores": [1, 2, 3],
            "mixed": [1, "two", 3.0],
            "dicts": [{"a": 1}, {"b": 2}],
        }
        flat = flatten_attributes(data)

        assert flat["tags"] == ["a", "b", "c"]
        assert flat["scores"] == [1, 2, 3]
        assert flat["mixed"] == ["1", "two", "3.0"]
        assert json.loads(flat["dicts"][0]) == {"a": 1}

    def test_bool_and_int_are_not_mixed(self):
        assert flatten_attributes({"flags": [1, True]}) == {"flags": ["1", "True"]}

    def test_none_is_dropped(self):
        assert flatten_attributes({"a": 1, "b": None}) == {"a": 1}

    def test_unsupported_types_are_stringified(self):
        from decimal import Decimal

        assert flatten_attributes({"price": Decimal("10.50")}) == {"price": "10.50"}


def test_node_lookup():
    query = build_node_lookup("1a2b")
    assert query.text == "MATCH (n {udid: $udid}) RETURN n"
    assert query.params == {"udid": "1a2b"}


def test_node_create_binds_every_value():
    query = build_node_create("Person", "1a2b", {"name": 'Ada "the" Countess', "born": 1815})

    assert query.text == "CREATE (n:`Person` {udid: $udid, `name`: $p0, `born`: $p1})"
    assert query.params == {"udid": "1a2b", "p0": 'Ada "the" Countess', "p1": 1815}
    assert "Ada" not in query.text


def test_identity_wins_over_user_attribute():
    query = build_node_create("Person", "1a2b", {IDENTITY_KEY: "spoofed", "name": "Ada"})

    assert query.params[IDENTITY_KEY] == "1a2b"
    assert "spoofed" not in query.params.values()
    assert query.text.count(IDENTITY_KEY) == 2  # key and placeholder


def test_node_update_sets_named_properties_only():
    query = build_node_update("Person", "1a2b", {"name": "Ada Lovelace"})

    assert query.text == (
        "MATCH (n:`Person` {udid: $udid}) SET n.udid = $udid, n.`name` = $p0"
    )
    assert query.params == {"udid": "1a2b", "p0": "Ada Lovelace"}


def test_node_update_without_attributes_still_valid():
    query = build_node_update("Person", "1a2b", {})
    assert query.text.endswith("SET n.udid = $udid")


def test_edge_replace_deletes_then_creates():
    delete, create = build_edge_replace("KNOWS", "6c3d", "1a2b", "2b3c", {"since": 1842})

    assert delete.text == "MATCH ()-[e {udid: $udid}]->() DELETE e"
    assert delete.params == {"udid": "6c3d"}

    assert create.text == (
        "MATCH (t {udid: $tail}), (h {udid: $head}) "
        "CREATE (t)-[e:`KNOWS` {udid: $udid, `since`: $p0}]->(h)"
    )
    assert create.params == {"udid": "6c3d", "tail": "1a2b", "head": "2b3c", "p0": 1842}


def test_cascade_node_delete_is_three_statements():
    outgoing, incoming, node = build_cascade_node_delete("1a2b")

    assert outgoing.text == "MATCH (n {udid: $udid})-[e]->() DELETE e"
    assert incoming.text == "MATCH ()-[e]->(n {udid: $udid}) DELETE e"
    assert node.text == "MATCH (n {udid: $udid}) DELETE n"
    assert all(q.params == {"udid": "1a2b"} for q in (outgoing, incoming, node))


def test_edge_delete():
    query = build_edge_delete("6c3d")
    assert query.text == "MATCH ()-[e {udid: $udid}]->() DELETE e"
    assert query.params == {"udid": "6c3d"}


def test_flush_deletes_edges_before_nodes():
    edges, nodes = build_flush()
    assert edges.text == "MATCH ()-[e]->() DELETE e"
    assert nodes.text == "MATCH (n) DELETE n"


@pytest.mark.parametrize("label", [None, ""])
def test_uniqueness_check_any_label(label):
    query = build_uniqueness_check("email", "ada@example.org", label)

    assert query.text == "MATCH (n) WHERE n.`email` = $value RETURN count(n) AS matches"
    assert query.params == {"value": "ada@example.org"}


def test_uniqueness_check_with_label():
    query = build_uniqueness_check("email", 'x" OR 1=1', "User")

    assert query.text.startswith("MATCH (n:`User`) WHERE n.`email` = $value")
    assert query.params == {"value": 'x" OR 1=1'}


def test_index_create_variants():
    assert build_index_create("Person", "name").text == (
        "CREATE INDEX IF NOT EXISTS FOR (n:`Person`) ON (n.`name`)"
    )
    assert build_index_create("Person", "name", if_not_exists=False).text == (
        "CREATE INDEX FOR (n:`Person`) ON (n.`name`)"
    )
