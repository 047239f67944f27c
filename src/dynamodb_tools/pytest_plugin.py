"""
pytest fixtures for tests that need a throwaway DynamoDB table.

Enable in a conftest.py with ``pytest_plugins = ["dynamodb_tools.pytest_plugin"]``
and point ``--dynamodb-config`` (or the ``dynamodb_config`` ini key) at a
table config. Override ``dynamodb_client`` to supply your own client.
"""
from pathlib import Path

import pytest

from dynamodb_tools.schema.table import TableConfig
from dynamodb_tools.storage.connector import DynamodbConnector


def pytest_addoption(parser):
    group = parser.getgroup("dynamodb-tools")
    group.addoption(
        "--dynamodb-config",
        dest="dynamodb_config",
        default=None,
        help="Path to the YAML table config used by the dynamodb_connector fixture",
    )
    parser.addini("dynamodb_config", "Path to the YAML table config (relative to rootdir)")


@pytest.fixture
def dynamodb_config(request) -> TableConfig:
    path = request.config.getoption("dynamodb_config")
    if not path:
        ini_path = request.config.getini("dynamodb_config")
        if ini_path:
            path = Path(request.config.rootpath) / ini_path
    if not path:
        pytest.skip("no DynamoDB table config given (--dynamodb-config)")
    return TableConfig.load_from_file(path)


@pytest.fixture
def dynamodb_client():
    return None


@pytest.fixture
def dynamodb_connector(dynamodb_config, dynamodb_client):
    with DynamodbConnector.from_config(dynamodb_config, client=dynamodb_client) as connector:
        yield connector
