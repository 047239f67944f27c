import atexit
import logging
import uuid
import weakref
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError

from dynamodb_tools.errors import TableCreationError, TableDeletionError, TableDescribeError
from dynamodb_tools.schema.table import TableConfig
from dynamodb_tools.schema.translate import create_table_input
from dynamodb_tools.storage.cleanup import delete_table_quietly, drop_table_async
from dynamodb_tools.storage.client import make_client

logger = logging.getLogger(__name__)

# Poll DynamoDB Local quickly; the botocore default waits 20s between checks.
_WAITER_CONFIG = {"Delay": 1, "MaxAttempts": 60}

# Connectors that still owe a table deletion. Closed synchronously at exit,
# since daemon threads are killed before they can finish.
_open_connectors: "weakref.WeakSet[DynamodbConnector]" = weakref.WeakSet()


def unique_table_name(base_name: str) -> str:
    return f"{base_name}-{uuid.uuid4().hex}"


class DynamodbConnector:
    """
    A DynamoDB client bound to a single table.

    When built from a config carrying ``info``, the table is created under a
    unique name so parallel test runs never collide. With ``delete_on_exit``
    the table is deleted again on ``close()``, when the connector is used as a
    context manager, or on a background thread once it is garbage-collected.
    """

    def __init__(self, client, table_name: str, delete_on_exit: bool = False) -> None:
        self._client = client
        self._table_name = table_name
        self._delete_on_exit = delete_on_exit
        self._closed = False
        self._finalizer = None

        if delete_on_exit:
            self._finalizer = weakref.finalize(self, drop_table_async, client, table_name)
            self._finalizer.atexit = False
            _open_connectors.add(self)

    @classmethod
    def load(cls, path: str | Path, client=None) -> "DynamodbConnector":
        """Load the connector from a YAML configuration file."""
        return cls.from_config(TableConfig.load_from_file(path), client=client)

    @classmethod
    def from_config(cls, config: TableConfig, client=None) -> "DynamodbConnector":
        if client is None:
            client = make_client(config.local_endpoint, config.region)

        if config.info is None:
            return cls(client, config.table_name, delete_on_exit=config.delete_on_exit)

        table_name = unique_table_name(config.info.table_name)
        request = create_table_input(config.info, table_name=table_name)
        try:
            client.create_table(**request)
        except (ClientError, BotoCoreError) as e:
            raise TableCreationError(f"Failed to create table {table_name}: {e}") from e

        try:
            client.get_waiter("table_exists").wait(
                TableName=table_name, WaiterConfig=_WAITER_CONFIG
            )
        except (ClientError, BotoCoreError) as e:
            # the table was accepted but never became usable; don't leave it behind
            delete_table_quietly(client, table_name)
            raise TableCreationError(f"Table {table_name} did not become active: {e}") from e

        logger.info("dynamodb-tools: created table %s", table_name)
        return cls(client, table_name, delete_on_exit=config.delete_on_exit)

    @property
    def client(self):
        return self._client

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def delete_on_exit(self) -> bool:
        return self._delete_on_exit

    @property
    def closed(self) -> bool:
        return self._closed

    def describe(self) -> dict:
        """Return the DescribeTable ``Table`` block for the managed table."""
        try:
            response = self._client.describe_table(TableName=self._table_name)
        except (ClientError, BotoCoreError) as e:
            raise TableDescribeError(f"Failed to describe table {self._table_name}: {e}") from e
        return response["Table"]

    def delete_table(self) -> None:
        """Delete the managed table now, regardless of ``delete_on_exit``."""
        self._detach()
        self._closed = True
        try:
            self._client.delete_table(TableName=self._table_name)
        except (ClientError, BotoCoreError) as e:
            raise TableDeletionError(f"Failed to delete table {self._table_name}: {e}") from e
        logger.info("dynamodb-tools: deleted table %s", self._table_name)

    def close(self, wait: bool = True) -> None:
        """Release the table, deleting it first if ``delete_on_exit`` is set.

        Deletion failures are logged, not raised. Safe to call more than once.
        """
        if self._closed:
            return
        owes_delete = self._detach()
        self._closed = True
        if not owes_delete:
            return
        if wait:
            delete_table_quietly(self._client, self._table_name)
        else:
            drop_table_async(self._client, self._table_name)

    def _detach(self) -> bool:
        """Cancel the drop-time deletion. Returns True if it was still pending."""
        _open_connectors.discard(self)
        if self._finalizer is None:
            return False
        return self._finalizer.detach() is not None

    def __enter__(self) -> "DynamodbConnector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"DynamodbConnector(table_name={self._table_name!r}, "
            f"delete_on_exit={self._delete_on_exit})"
        )


@atexit.register
def _close_open_connectors() -> None:
    for connector in list(_open_connectors):
        try:
            connector.close(wait=True)
        except Exception:
            logger.warning(
                "dynamodb-tools: failed to close %r at exit", connector, exc_info=True
            )
