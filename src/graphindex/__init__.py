"""
graphindex - mirrors an in-process property graph into an external graph store.

This package contains:
- graph: indexing adapters (Neo4j, FalkorDB), query builder, result model
- events: graph mutation signals and the event bus capability
- platform: cross-cutting concerns (configuration, logging)
"""

__version__ = "0.1.0"
