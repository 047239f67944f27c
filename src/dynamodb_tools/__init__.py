"""Provision throwaway DynamoDB tables from YAML definitions for integration tests."""

from dynamodb_tools.errors import (
    ConfigParseError,
    ConfigReadError,
    DynamoToolsError,
    MissingFieldError,
    SchemaError,
    TableCreationError,
    TableDeletionError,
    TableDescribeError,
)
from dynamodb_tools.schema.table import (
    AttrType,
    TableAttr,
    TableConfig,
    TableGsi,
    TableInfo,
    TableLsi,
    Throughput,
)
from dynamodb_tools.schema.translate import create_table_input
from dynamodb_tools.storage.connector import DynamodbConnector

__all__ = [
    "AttrType",
    "ConfigParseError",
    "ConfigReadError",
    "DynamoToolsError",
    "DynamodbConnector",
    "MissingFieldError",
    "SchemaError",
    "TableAttr",
    "TableConfig",
    "TableCreationError",
    "TableDeletionError",
    "TableDescribeError",
    "TableGsi",
    "TableInfo",
    "TableLsi",
    "Throughput",
    "create_table_input",
]
