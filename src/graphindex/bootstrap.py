"""
graphindex service start-up.

Usage:
    from graphindex.bootstrap import bootstrap

    index = bootstrap(event_bus=graph_engine_events)
"""

from typing import Optional

from graphindex.events import EventBus
from graphindex.graph import GraphIndex, create_graph_index
from graphindex.platform.config import Settings, settings as default_settings
from graphindex.platform.logging import configure_logging, get_logger


logger = get_logger(__name__)


def bootstrap(
    settings: Optional[Settings] = None,
    event_bus: Optional[EventBus] = None,
) -> GraphIndex:
    """
    Configure logging, connect the configured index and create its indexes.

    Args:
        settings: Configuration, defaults to the environment settings
        event_bus: Event bus delivering graph signals

    Returns:
        Connected, subscribed graph index
    """
    settings = settings or default_settings
    configure_logging(settings)

    fields = settings.index_fields

    index = create_graph_index(settings, event_bus)
    for label, field_name in fields:
        index.create_index(label, field_name)

    logger.info(
        "graph_index_ready",
        backend=settings.INDEX_BACKEND,
        subscribed=event_bus is not None,
        indexes=len(fields),
    )
    return index
