import click

from invtrack.infrastructure.bootstrap import Container
from invtrack.infrastructure.cli.catalog_commands import (
    category_add,
    category_delete,
    category_list,
    category_update,
    location_add,
    location_delete,
    location_list,
    location_update,
)
from invtrack.infrastructure.cli.data_commands import data_export, data_import
from invtrack.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_create,
    inventory_list,
    inventory_low_stock,
    inventory_remove,
    inventory_set,
)
from invtrack.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from invtrack.infrastructure.cli.report_commands import dashboard, movement_list
from invtrack.infrastructure.config import ConfigError, Settings
from invtrack.infrastructure.logging_config import configure_logging
from invtrack.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """invtrack: multi-location inventory tracking"""
    if ctx.obj is None:
        try:
            ctx.obj = Container(Settings.from_env())
        except ConfigError as exc:
            raise click.ClickException(str(exc))
    configure_logging(ctx.obj.settings.log_level)


@cli.command("init-db")
@click.option("--reset", is_flag=True, help="Drop all tables first. Deletes every record.")
@click.pass_obj
def init_db(app: Container, reset: bool) -> None:
    """Create the database tables if they do not exist."""
    if not isinstance(app.uow, SqlUnitOfWork):
        click.echo("Using in-memory storage; nothing to initialise.")
        return

    if reset:
        app.uow.drop_schema()
    app.uow.create_schema()

    click.echo(f"Database ready at {app.settings.database_url}")


@cli.group()
def category() -> None:
    """Manage product categories."""


@cli.group()
def location() -> None:
    """Manage stock locations."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def movement() -> None:
    """Inspect the stock movement history."""


@cli.group()
def data() -> None:
    """Import and export CSV data."""


# Register subcommands
category.add_command(category_add)
category.add_command(category_delete)
category.add_command(category_list)
category.add_command(category_update)
location.add_command(location_add)
location.add_command(location_delete)
location.add_command(location_list)
location.add_command(location_update)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_create)
inventory.add_command(inventory_list)
inventory.add_command(inventory_low_stock)
inventory.add_command(inventory_remove)
inventory.add_command(inventory_set)
movement.add_command(movement_list)
data.add_command(data_export)
data.add_command(data_import)
cli.add_command(dashboard)
