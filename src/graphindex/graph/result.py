"""
Canonical query result and the normalizers that build it.

Backends answer in two shapes:

(a) row oriented: a sequence of records, each a sequence of values, plus an
    optional counters object with attributes such as ``nodes_created``
    (Neo4j's ``SummaryCounters``);
(b) flat: a single list of rows plus an optional statistics mapping keyed by
    snake_case names (FalkorDB's result set and stats).

Both collapse into ``QueryResult``. Graph entities returned by a driver are
converted to plain property dicts so no driver object leaves this module.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from neo4j.graph import Entity as Neo4jEntity, Path as Neo4jPath


Row = Tuple[Any, ...]

_COUNTERS = (
    ("nodes_created", "nodes_created"),
    ("nodes_deleted", "nodes_deleted"),
    ("edges_created", "relationships_created"),
    ("edges_deleted", "relationships_deleted"),
    ("properties_set", "properties_set"),
)


@dataclass(frozen=True)
class QuerySummary:
    """Mutation statistics of one query; zero/false when the backend reports none."""

    nodes_created: int = 0
    nodes_deleted: int = 0
    edges_created: int = 0
    edges_deleted: int = 0
    properties_set: int = 0
    contains_updates: bool = False


class QueryResult:
    """Rows returned by a query plus its mutation summary."""

    def __init__(self, rows: Iterable[Sequence[Any]] = (), summary: Optional[QuerySummary] = None):
        self._rows: List[Row] = [tuple(row) for row in rows]
        self._summary = summary or QuerySummary()

    def rows(self) -> Iterator[Row]:
        """Iterate over the rows; each call starts from the first row again."""
        return iter(self._rows)

    def summary(self) -> QuerySummary:
        return self._summary

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"QueryResult(rows={len(self._rows)}, summary={self._summary!r})"


def _plain(value: Any) -> Any:
    """Convert driver graph objects to plain Python values."""
    if isinstance(value, Neo4jEntity):
        return dict(value.items())
    if isinstance(value, Neo4jPath):
        return [dict(node.items()) for node in value.nodes]
    if isinstance(value, list):
        return [_plain(v) for v in value]
    properties = getattr(value, "properties", None)
    if isinstance(properties, dict):
        # FalkorDB Node / Edge
        return dict(properties)
    return value


def _summary(get) -> QuerySummary:
    values = {field: int(get(source) or 0) for field, source in _COUNTERS}
    contains_updates = get("contains_updates")
    if contains_updates is None:
        contains_updates = any(values.values())
    return QuerySummary(contains_updates=bool(contains_updates), **values)


def from_records(records: Iterable[Sequence[Any]], counters: Optional[Any] = None) -> QueryResult:
    """
    Normalize a row oriented response (shape a).

    Every column of a record is kept, so a row has one value per returned
    column, the same as shape (b).

    Args:
        records: Records, each a sequence of column values
        counters: Object exposing counter attributes, or None

    Returns:
        Canonical query result
    """
    rows = [tuple(_plain(v) for v in record) for record in records]
    if counters is None:
        return QueryResult(rows)
    return QueryResult(rows, _summary(lambda name: getattr(counters, name, None)))


def from_result_set(result_set: Optional[Iterable[Sequence[Any]]], statistics: Optional[Mapping[str, Any]] = None) -> QueryResult:
    """
    Normalize a flat response (shape b).

    ``contains_updates`` is taken from the statistics when reported and
    otherwise derived from whether any numeric statistic is non-zero.

    Args:
        result_set: List of rows, or None for write-only queries
        statistics: snake_case keyed statistics, or None

    Returns:
        Canonical query result
    """
    rows = [tuple(_plain(v) for v in row) for row in (result_set or [])]
    if statistics is None:
        return QueryResult(rows)

    summary = _summary(statistics.get)
    if "contains_updates" not in statistics and not summary.contains_updates:
        # Labels, indexes and removed properties are updates too
        touched = any(
            isinstance(v, (int, float)) and not isinstance(v, bool) and v > 0
            for k, v in statistics.items()
            if k not in ("run_time_ms", "query_internal_execution_time", "cached_execution")
        )
        if touched:
            summary = replace(summary, contains_updates=True)
    return QueryResult(rows, summary)
