# cli.py
import click
import logging
from typing import Optional
from webdav_dynamo.config.settings import get_settings
from webdav_dynamo.db.manager import get_dynamodb_manager
from webdav_dynamo.models import Folder

logger = logging.getLogger(__name__)

table_option = click.option(
    "--table",
    default=None,
    help="Table name (defaults to DYNAMODB_TABLE_NAME)",
)


def _table_name(table: Optional[str]) -> str:
    return table or get_settings().dynamodb_table_name


@click.group()
def cli():
    """CLI commands for the WebDAV entity table"""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  Deployment Mode: {settings.deployment_mode}")
    print(f"  AWS Region: {settings.aws_region}")
    print(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    print(f"  DynamoDB Table: {settings.dynamodb_table_name}")
    print(f"  Read/Write Capacity: {settings.dynamodb_read_capacity}/{settings.dynamodb_write_capacity}")
    print(f"  Log Level: {settings.log_level}")

@cli.command()
@table_option
def create_table(table):
    """Create the entity table if it does not exist"""
    table_name = _table_name(table)
    if get_dynamodb_manager().create_table(table_name):
        print(f"✅ Table {table_name} is ready")
    else:
        print(f"❌ Could not create table {table_name}")
        raise SystemExit(1)

@cli.command()
@table_option
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def delete_table(table, yes):
    """Delete the entity table and everything in it"""
    table_name = _table_name(table)
    if not yes:
        click.confirm(f"Delete table {table_name}?", abort=True)

    if get_dynamodb_manager().delete_table(table_name):
        print(f"✅ Table {table_name} deleted")
    else:
        print(f"❌ Could not delete table {table_name}")
        raise SystemExit(1)

@cli.command()
@table_option
@click.option("--name", default="/", help="Name of the root folder")
def init_root(table, name):
    """Create the root folder unless one already exists"""
    table_name = _table_name(table)
    manager = get_dynamodb_manager()

    root = manager.find_root_folder(table_name)
    if root is not None:
        print(f"Root folder already exists: {root.id}")
        return

    root = Folder(name=name)
    if not manager.put_entity(table_name, root):
        print(f"❌ Could not create root folder in {table_name}")
        raise SystemExit(1)
    print(f"✅ Created root folder: {root.id}")

@cli.command()
@table_option
@click.option("--parent-id", default=None, help="Folder UUID to list (defaults to the root)")
@click.option("--folders-only", "kind", flag_value="folders", help="Only list folders")
@click.option("--files-only", "kind", flag_value="files", help="Only list files")
def ls(table, parent_id, kind):
    """List the children of a folder"""
    table_name = _table_name(table)
    manager = get_dynamodb_manager()

    if parent_id:
        parent = manager.find_entity_by_unique_id(table_name, parent_id)
    else:
        parent = manager.find_root_folder(table_name)

    if not isinstance(parent, Folder):
        print("❌ Folder not found")
        raise SystemExit(1)

    if kind is None:
        children = manager.find_entity_by_parent(table_name, parent)
    else:
        children = manager.find_entity_by_parent_and_type(table_name, parent, kind == "folders")

    for child in sorted(children, key=lambda e: e.name):
        marker = "d" if child.is_directory else "-"
        print(f"{marker} {child.id} {child.name}")

if __name__ == "__main__":
    cli()
