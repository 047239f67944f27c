import json
import logging
from dataclasses import replace

import click
from botocore.exceptions import BotoCoreError, ClientError

from dynamodb_tools.errors import DynamoToolsError
from dynamodb_tools.schema.table import TableConfig
from dynamodb_tools.schema.translate import create_table_input
from dynamodb_tools.storage.cleanup import list_tables, prune_tables
from dynamodb_tools.storage.client import make_client
from dynamodb_tools.storage.connector import DynamodbConnector

logger = logging.getLogger(__name__)

config_argument = click.argument("config_path", metavar="CONFIG", type=click.Path(dir_okay=False))
endpoint_option = click.option(
    "--endpoint", envvar="DYNAMODB_TOOLS_ENDPOINT",
    help="DynamoDB endpoint URL; overrides local_endpoint from the config",
)
region_option = click.option("--region", envvar="AWS_DEFAULT_REGION")


def _load_config(path: str) -> TableConfig:
    try:
        return TableConfig.load_from_file(path)
    except DynamoToolsError as e:
        raise click.ClickException(str(e)) from e


def _require_info(config: TableConfig, path: str) -> None:
    if config.info is None:
        raise click.ClickException(f"{path} has no 'info' block; nothing to create")


@click.group()
@click.version_option(package_name="dynamodb-tools")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Create and tear down DynamoDB tables described in YAML."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command()
@config_argument
def render(config_path):
    """Print the CreateTable request a config would send."""
    config = _load_config(config_path)
    _require_info(config, config_path)
    try:
        request = create_table_input(config.info)
    except DynamoToolsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json.dumps(request, indent=2))


@cli.command()
@config_argument
@endpoint_option
@region_option
def create(config_path, endpoint, region):
    """Create a uniquely named table from CONFIG and print its name.

    The table is kept; remove it with `delete` or `prune`.
    """
    config = _load_config(config_path)
    _require_info(config, config_path)
    config = replace(
        config,
        local_endpoint=endpoint or config.local_endpoint,
        region=region or config.region,
        delete_on_exit=False,
    )
    try:
        connector = DynamodbConnector.from_config(config)
    except DynamoToolsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(connector.table_name)


@cli.command()
@click.argument("table_name")
@endpoint_option
@region_option
def delete(table_name, endpoint, region):
    """Delete TABLE_NAME."""
    client = make_client(endpoint, region)
    try:
        client.delete_table(TableName=table_name)
    except (ClientError, BotoCoreError) as e:
        raise click.ClickException(f"Failed to delete table {table_name}: {e}") from e
    click.echo(f"Deleted {table_name}")


@cli.command()
@config_argument
@endpoint_option
@region_option
@click.option("--dry-run", is_flag=True, help="List matching tables without deleting them")
def prune(config_path, endpoint, region, dry_run):
    """Delete tables left behind by earlier runs of CONFIG."""
    config = _load_config(config_path)
    _require_info(config, config_path)
    base_name = config.info.table_name
    client = make_client(endpoint or config.local_endpoint, region or config.region)

    try:
        if dry_run:
            for name in list_tables(client, prefix=f"{base_name}-"):
                click.echo(name)
            return
        deleted = prune_tables(client, base_name)
    except (ClientError, BotoCoreError) as e:
        raise click.ClickException(f"Failed to list tables: {e}") from e

    if not deleted:
        click.echo(f"No leftover tables found for '{base_name}'")
        return
    for name in deleted:
        click.echo(f"Deleted {name}")
