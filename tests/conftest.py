"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

sys.path.append(os.path.join(os.getcwd(), "src"))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> None:
    """Set up test environment variables."""
    os.environ.setdefault("APP_ENV", "test")
    os.environ.setdefault("LOG_LEVEL", "debug")


def make_neo4j_result(records=(), counters=None):
    """A stand-in for neo4j.Result: iterable records plus consume().counters."""
    result = MagicMock()
    result.__iter__.return_value = [tuple(r) for r in records]
    result.consume.return_value = SimpleNamespace(counters=counters)
    return result


def make_falkordb_result(rows=None, **statistics):
    """A stand-in for falkordb's QueryResult."""
    return SimpleNamespace(result_set=rows if rows is not None else [], **statistics)


@pytest.fixture
def neo4j_tx():
    tx = MagicMock()
    tx.run.return_value = make_neo4j_result()
    return tx


@pytest.fixture
def neo4j_session(neo4j_tx):
    session = MagicMock()
    session.begin_transaction.return_value.__enter__.return_value = neo4j_tx
    session.run.return_value = make_neo4j_result()
    return session


@pytest.fixture
def neo4j_driver(neo4j_session):
    driver = MagicMock()
    driver.session.return_value.__enter__.return_value = neo4j_session
    return driver


@pytest.fixture
def falkordb_graph():
    graph = MagicMock()
    graph.query.return_value = make_falkordb_result()
    return graph


@pytest.fixture
def neo4j_result():
    return make_neo4j_result


@pytest.fixture
def falkordb_result():
    return make_falkordb_result
