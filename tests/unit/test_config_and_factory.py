"""
Unit tests for configuration, backend selection and start-up.
"""

from unittest.mock import MagicMock

import pytest

from graphindex import bootstrap as bootstrap_module
from graphindex.events import InMemoryEventBus
from graphindex.graph import factory
from graphindex.platform.config import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.INDEX_BACKEND == "neo4j"
        assert settings.FALKORDB_GRAPH == "index"
        assert settings.index_fields == []

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("INDEX_BACKEND", "falkordb")
        monkeypatch.setenv("FALKORDB_PORT", "6380")

        settings = Settings()

        assert settings.INDEX_BACKEND == "falkordb"
        assert settings.FALKORDB_PORT == 6380

    def test_index_fields(self):
        settings = Settings(INDEX_FIELDS="Person.name, User.email,")
        assert settings.index_fields == [("Person", "name"), ("User", "email")]

    def test_malformed_index_field(self):
        with pytest.raises(ValueError):
            Settings(INDEX_FIELDS="Person").index_fields


class TestCreateGraphIndex:

    def test_neo4j(self, monkeypatch):
        connect = MagicMock()
        monkeypatch.setattr(factory.Neo4jGraphIndex, "connect", connect)
        bus = InMemoryEventBus()
        settings = Settings(NEO4J_URI="neo4j://graph:7687", NEO4J_DATABASE="index")

        index = factory.create_graph_index(settings, bus)

        assert index is connect.return_value
        connect.assert_called_once_with(
            uri="neo4j://graph:7687",
            username=settings.NEO4J_USER,
            password=settings.NEO4J_PASSWORD,
            database="index",
            event_bus=bus,
        )

    @pytest.mark.parametrize("backend", ["falkordb", "RedisGraph"])
    def test_falkordb(self, monkeypatch, backend):
        connect = MagicMock()
        monkeypatch.setattr(factory.FalkorDBGraphIndex, "connect", connect)

        factory.create_graph_index(Settings(INDEX_BACKEND=backend, FALKORDB_GRAPH="mirror"))

        assert connect.call_args.kwargs["graph_name"] == "mirror"
        assert connect.call_args.kwargs["event_bus"] is None

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="INDEX_BACKEND"):
            factory.create_graph_index(Settings(INDEX_BACKEND="sqlite"))


def test_bootstrap_creates_configured_indexes(monkeypatch):
    index = MagicMock()
    create = MagicMock(return_value=index)
    monkeypatch.setattr(bootstrap_module, "create_graph_index", create)
    monkeypatch.setattr(bootstrap_module, "configure_logging", MagicMock())
    settings = Settings(INDEX_FIELDS="Person.name,User.email")
    bus = InMemoryEventBus()

    assert bootstrap_module.bootstrap(settings, bus) is index

    create.assert_called_once_with(settings, bus)
    assert [c.args for c in index.create_index.call_args_list] == [
        ("Person", "name"),
        ("User", "email"),
    ]
