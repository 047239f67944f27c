import logging
import threading

logger = logging.getLogger(__name__)


def delete_table_quietly(client, table_name: str) -> bool:
    """Delete a table, logging instead of raising on failure. Returns True on success."""
    try:
        client.delete_table(TableName=table_name)
    except Exception:
        logger.warning("dynamodb-tools: failed to delete table %s", table_name, exc_info=True)
        return False
    logger.info("dynamodb-tools: deleted table %s", table_name)
    return True


def drop_table_async(client, table_name: str) -> threading.Thread:
    """Delete a table from a detached daemon thread without waiting for the result."""
    thread = threading.Thread(
        target=delete_table_quietly,
        args=(client, table_name),
        name=f"dynamodb-tools-drop-{table_name}",
        daemon=True,
    )
    thread.start()
    return thread


def list_tables(client, prefix: str | None = None) -> list[str]:
    """Return every table name visible to the client, optionally filtered by prefix."""
    names: list[str] = []
    kwargs: dict = {}

    while True:
        response = client.list_tables(**kwargs)
        names.extend(response.get("TableNames", []))
        last_name = response.get("LastEvaluatedTableName")
        if not last_name:
            break
        kwargs["ExclusiveStartTableName"] = last_name

    if prefix is None:
        return names
    return [name for name in names if name.startswith(prefix)]


def prune_tables(client, base_name: str) -> list[str]:
    """Delete tables left behind by earlier runs of ``base_name`` (named ``{base_name}-{id}``)."""
    deleted = []
    for name in list_tables(client, prefix=f"{base_name}-"):
        if delete_table_quietly(client, name):
            deleted.append(name)
    return deleted
