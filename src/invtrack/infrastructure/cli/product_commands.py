"""CLI commands for products."""

from __future__ import annotations

import click

from invtrack.application.add_product import AddProductHandler
from invtrack.application.lookup import resolve_product
from invtrack.application.show_product import ListProductsHandler, ShowProductHandler
from invtrack.application.update_product import UpdateProductHandler
from invtrack.domain.exceptions import DomainException
from invtrack.domain.model.catalog import DEFAULT_MIN_STOCK_LEVEL
from invtrack.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Stock keeping unit (must be unique).")
@click.option("--category", required=True, help="Existing category name.")
@click.option("--unit-cost", default="0", show_default=True, help="Unit cost (e.g. 15.00).")
@click.option(
    "--min-stock", type=int, default=DEFAULT_MIN_STOCK_LEVEL, show_default=True,
    help="Low-stock threshold.",
)
@click.option("--description", default=None, help="Optional description.")
@click.pass_obj
def product_add(
    app: Container,
    name: str,
    sku: str,
    category: str,
    unit_cost: str,
    min_stock: int,
    description: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(catalog=app.catalog)

    try:
        product = handler.handle(
            name=name,
            sku=sku,
            category_name=category,
            unit_cost=unit_cost,
            min_stock_level=min_stock,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' ({product.sku}) added at {product.unit_cost}")


@click.command("list")
@click.pass_obj
def product_list(app: Container) -> None:
    """List all products with their total stock."""
    products = ListProductsHandler(catalog=app.catalog, stock=app.stock).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'SKU':<12} {'Name':<20} {'Category':<16} {'Cost':>10} {'Min':>5} {'Stock':>7}")
    click.echo("-" * 75)
    for p in products:
        click.echo(
            f"{p.sku:<12} {p.name:<20} {p.category_name:<16} {p.unit_cost:>10} "
            f"{p.min_stock_level:>5} {p.stock_quantity:>7}"
        )


@click.command("show")
@click.option("--sku", required=True, help="Product SKU.")
@click.pass_obj
def product_show(app: Container, sku: str) -> None:
    """Show a product with its stock per location."""
    try:
        detail = ShowProductHandler(catalog=app.catalog, stock=app.stock).handle(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    p = detail.product
    click.echo(f"Product #{p.id} '{p.name}' ({p.sku})")
    click.echo(f"Category:   {p.category_name}")
    click.echo(f"Unit cost:  {p.unit_cost}")
    click.echo(f"Min stock:  {p.min_stock_level}")
    click.echo(f"Total:      {p.stock_quantity}  ({detail.status})")
    if detail.locations:
        click.echo()
        click.echo(f"  {'Location':<20} {'Qty':>7} {'Status':<14}")
        click.echo(f"  {'-'*43}")
        for line in detail.locations:
            click.echo(f"  {line.location_name:<20} {line.quantity:>7} {line.status:<14}")


@click.command("update")
@click.option("--sku", required=True, help="Current product SKU.")
@click.option("--name", default=None, help="New name.")
@click.option("--new-sku", default=None, help="New SKU.")
@click.option("--category", default=None, help="New category name.")
@click.option("--unit-cost", default=None, help="New unit cost (e.g. 29.99).")
@click.option("--min-stock", type=int, default=None, help="New low-stock threshold.")
@click.option("--description", default=None, help="New description.")
@click.pass_obj
def product_update(
    app: Container,
    sku: str,
    name: str | None,
    new_sku: str | None,
    category: str | None,
    unit_cost: str | None,
    min_stock: int | None,
    description: str | None,
) -> None:
    """Update a product's details."""
    handler = UpdateProductHandler(catalog=app.catalog)

    try:
        product = handler.handle(
            sku,
            name=name,
            new_sku=new_sku,
            category_name=category,
            unit_cost=unit_cost,
            min_stock_level=min_stock,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} ({product.sku}) updated")


@click.command("delete")
@click.option("--sku", required=True, help="Product SKU.")
@click.pass_obj
def product_delete(app: Container, sku: str) -> None:
    """Delete a product that has no inventory and no movement history."""
    try:
        product = resolve_product(app.catalog, sku)
        app.catalog.delete_product(product.id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{sku}' deleted")
