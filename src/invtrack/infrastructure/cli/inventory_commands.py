"""CLI commands for inventory management."""

from __future__ import annotations

import click

from invtrack.application.adjust_stock import AdjustStockHandler
from invtrack.application.create_inventory import CreateInventoryHandler
from invtrack.application.dto import InventoryLineDTO
from invtrack.application.remove_inventory import RemoveInventoryHandler
from invtrack.application.set_inventory import SetInventoryHandler
from invtrack.application.show_inventory import ShowInventoryHandler, ShowLowStockHandler
from invtrack.domain.exceptions import DomainException
from invtrack.infrastructure.bootstrap import Container


@click.command("create")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--location", required=True, help="Location name.")
@click.option("--quantity", required=True, type=int, help="Opening quantity.")
@click.pass_obj
def inventory_create(app: Container, sku: str, location: str, quantity: int) -> None:
    """Stock a product at a location for the first time."""
    handler = CreateInventoryHandler(catalog=app.catalog, stock=app.stock)

    try:
        record = handler.handle(sku, location, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inventory for '{sku}' at '{location}' created with {record.quantity}")


@click.command("set")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--location", required=True, help="Location name.")
@click.option("--quantity", required=True, type=int, help="New on-hand quantity.")
@click.option("--note", default=None, help="Note recorded with the adjustment.")
@click.pass_obj
def inventory_set(
    app: Container, sku: str, location: str, quantity: int, note: str | None
) -> None:
    """Set the on-hand quantity of a product at a location."""
    handler = SetInventoryHandler(catalog=app.catalog, stock=app.stock)

    try:
        handler.handle(sku, location, quantity, note=note)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inventory for '{sku}' at '{location}' set to {quantity}")


@click.command("adjust")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--location", required=True, help="Location name.")
@click.option(
    "--delta", required=True, type=int,
    help="Signed change: positive adds stock, negative removes it.",
)
@click.option("--note", default=None, help="Note recorded with the movement.")
@click.pass_obj
def inventory_adjust(
    app: Container, sku: str, location: str, delta: int, note: str | None
) -> None:
    """Record a stock movement."""
    handler = AdjustStockHandler(catalog=app.catalog, stock=app.stock)

    try:
        movement = handler.handle(sku, location, delta, note=note)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Movement #{movement.id}: {movement.quantity:+d} '{sku}' at '{location}'")


@click.command("remove")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--location", required=True, help="Location name.")
@click.confirmation_option(prompt="Write off the remaining stock and remove the record?")
@click.pass_obj
def inventory_remove(app: Container, sku: str, location: str) -> None:
    """Remove a product's inventory record at a location."""
    handler = RemoveInventoryHandler(catalog=app.catalog, stock=app.stock)

    try:
        handler.handle(sku, location)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inventory for '{sku}' at '{location}' removed")


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
@click.option("--location", default=None, help="Only this location.")
@click.option("--status", default=None, help="In Stock, Low Stock or Out of Stock.")
@click.option("--search", default=None, help="Substring of name, SKU, category or location.")
@click.pass_obj
def inventory_list(
    app: Container,
    category: str | None,
    location: str | None,
    status: str | None,
    search: str | None,
) -> None:
    """Show current inventory levels."""
    handler = ShowInventoryHandler(stock=app.stock)

    try:
        lines = handler.handle(category=category, location=location, status=status, search=search)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_lines(lines, empty="No inventory records found.")


@click.command("low-stock")
@click.pass_obj
def inventory_low_stock(app: Container) -> None:
    """Show rows at or below their minimum stock level."""
    lines = ShowLowStockHandler(stock=app.stock).handle()
    _echo_lines(lines, empty="All items are in stock.")


def _echo_lines(lines: list[InventoryLineDTO], empty: str) -> None:
    if not lines:
        click.echo(empty)
        return

    click.echo(f"{'SKU':<12} {'Product':<20} {'Location':<16} {'Qty':>7} {'Min':>5}  Status")
    click.echo("-" * 76)
    for line in lines:
        click.echo(
            f"{line.sku:<12} {line.product_name:<20} {line.location_name:<16} "
            f"{line.quantity:>7} {line.min_stock_level:>5}  {line.status}"
        )
