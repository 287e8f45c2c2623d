"""
Cypher Query Builder - renders index mutations into query text and parameters.

Every value travels as a bound parameter. Labels and property keys cannot be
parameterised in Cypher, so they go through ``quote_identifier`` instead;
checking that they are meaningful names is left to the caller.

Both Neo4j and FalkorDB accept the text produced here.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Tuple
import json


# Reserved property holding the entity id inside the destination graph
IDENTITY_KEY = "udid"


class CypherQuery(NamedTuple):
    """Query text plus its bound parameters."""

    text: str
    params: Dict[str, Any]


def quote_identifier(name: str) -> str:
    """Backtick-quote a label or property key, doubling embedded backticks."""
    return "`" + str(name).replace("`", "``") + "`"


def flatten_attributes(data: Dict[str, Any], parent_key: str = "", sep: str = "_") -> Dict[str, Any]:
    """
    Flatten nested attributes and sanitize values for property storage.

    Nested mappings become ``parent_child`` keys, ``None`` values are dropped,
    lists must be homogeneous primitives or they are serialized to strings,
    and any other type is stored as its string form.

    Args:
        data: Attribute mapping to flatten
        parent_key: Current key prefix for recursion
        sep: Separator for flattened keys

    Returns:
        Flat mapping of property names to storable values
    """
    items: list = []

    for k, v in data.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else str(k)

        if isinstance(v, dict):
            items.extend(flatten_attributes(v, new_key, sep=sep).items())

        elif isinstance(v, list):
            # Graph arrays must be homogeneous; bool and int count as different types
            is_homogeneous_primitives = (
                v and
                all(isinstance(x, (str, int, float, bool)) for x in v) and
                all(type(x) is type(v[0]) for x in v[1:])
            )

            if is_homogeneous_primitives:
                items.append((new_key, v))
            else:
                items.append((new_key, [
                    json.dumps(x) if isinstance(x, (dict, list)) else str(x)
                    for x in v
                ]))

        elif v is None:
            continue

        elif isinstance(v, (str, int, float, bool)):
            items.append((new_key, v))

        else:
            items.append((new_key, str(v)))

    return dict(items)


def _bind_properties(entity_id: str, attributes: Dict[str, Any]) -> Tuple[List[Tuple[str, str]], Dict[str, Any]]:
    """
    Pair each property key with a parameter placeholder.

    The identity always comes first and always wins over a user attribute
    of the same name.
    """
    params: Dict[str, Any] = {IDENTITY_KEY: entity_id}
    pairs = [(IDENTITY_KEY, f"${IDENTITY_KEY}")]

    flat = flatten_attributes(attributes)
    flat.pop(IDENTITY_KEY, None)
    for position, (key, value) in enumerate(flat.items()):
        name = f"p{position}"
        params[name] = value
        pairs.append((quote_identifier(key), f"${name}"))

    return pairs, params


def _property_map(pairs: List[Tuple[str, str]]) -> str:
    return "{" + ", ".join(f"{key}: {placeholder}" for key, placeholder in pairs) + "}"


def build_node_lookup(entity_id: str) -> CypherQuery:
    """Match the node whose identity property equals ``entity_id``."""
    return CypherQuery(
        f"MATCH (n {{{IDENTITY_KEY}: ${IDENTITY_KEY}}}) RETURN n",
        {IDENTITY_KEY: entity_id},
    )


def build_node_create(label: str, entity_id: str, attributes: Dict[str, Any]) -> CypherQuery:
    """Create a labelled node carrying its identity and every attribute."""
    pairs, params = _bind_properties(entity_id, attributes)
    return CypherQuery(
        f"CREATE (n:{quote_identifier(label)} {_property_map(pairs)})",
        params,
    )


def build_node_update(label: str, entity_id: str, attributes: Dict[str, Any]) -> CypherQuery:
    """
    Overwrite the attributes of an existing node in place.

    Only the properties named here are written; the label, other properties
    and incident edges are left as they are.
    """
    pairs, params = _bind_properties(entity_id, attributes)
    assignments = ", ".join(f"n.{key} = {placeholder}" for key, placeholder in pairs)
    return CypherQuery(
        f"MATCH (n:{quote_identifier(label)} {{{IDENTITY_KEY}: ${IDENTITY_KEY}}}) SET {assignments}",
        params,
    )


def build_edge_replace(
    label: str,
    entity_id: str,
    tail: str,
    head: str,
    attributes: Dict[str, Any],
) -> List[CypherQuery]:
    """
    Delete any edge with this identity, then create it afresh from tail to head.

    Edges are replaced on write rather than merged. If either endpoint is
    missing from the destination graph the create statement matches nothing
    and no edge is written.
    """
    pairs, params = _bind_properties(entity_id, attributes)
    params.update({"tail": tail, "head": head})
    return [
        build_edge_delete(entity_id),
        CypherQuery(
            f"MATCH (t {{{IDENTITY_KEY}: $tail}}), (h {{{IDENTITY_KEY}: $head}}) "
            f"CREATE (t)-[e:{quote_identifier(label)} {_property_map(pairs)}]->(h)",
            params,
        ),
    ]


def build_cascade_node_delete(entity_id: str) -> List[CypherQuery]:
    """Delete outgoing edges, incoming edges, then the node itself."""
    params = {IDENTITY_KEY: entity_id}
    match = f"{{{IDENTITY_KEY}: ${IDENTITY_KEY}}}"
    return [
        CypherQuery(f"MATCH (n {match})-[e]->() DELETE e", dict(params)),
        CypherQuery(f"MATCH ()-[e]->(n {match}) DELETE e", dict(params)),
        CypherQuery(f"MATCH (n {match}) DELETE n", dict(params)),
    ]


def build_edge_delete(entity_id: str) -> CypherQuery:
    """Delete the single edge carrying this identity."""
    return CypherQuery(
        f"MATCH ()-[e {{{IDENTITY_KEY}: ${IDENTITY_KEY}}}]->() DELETE e",
        {IDENTITY_KEY: entity_id},
    )


def build_flush() -> List[CypherQuery]:
    """Delete every edge, then every node."""
    return [
        CypherQuery("MATCH ()-[e]->() DELETE e", {}),
        CypherQuery("MATCH (n) DELETE n", {}),
    ]


def build_uniqueness_check(field_name: str, field_value: Any, label: Optional[str] = None) -> CypherQuery:
    """Count nodes, optionally of one label, whose ``field_name`` equals ``field_value``."""
    label_part = f":{quote_identifier(label)}" if label else ""
    return CypherQuery(
        f"MATCH (n{label_part}) WHERE n.{quote_identifier(field_name)} = $value RETURN count(n) AS matches",
        {"value": field_value},
    )


def build_index_create(label: str, field_name: str, if_not_exists: bool = True) -> CypherQuery:
    """
    Create a range index on a label/property pair.

    ``IF NOT EXISTS`` is Neo4j syntax; FalkorDB rejects it and reports an
    already indexed property as an error instead.
    """
    guard = " IF NOT EXISTS" if if_not_exists else ""
    return CypherQuery(
        f"CREATE INDEX{guard} FOR (n:{quote_identifier(label)}) ON (n.{quote_identifier(field_name)})",
        {},
    )


def build_node_count() -> CypherQuery:
    return CypherQuery("MATCH (n) RETURN count(n) AS count", {})


def build_edge_count() -> CypherQuery:
    return CypherQuery("MATCH ()-[e]->() RETURN count(e) AS count", {})
