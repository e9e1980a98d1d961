"""CLI commands for the dashboard and the movement history."""

from __future__ import annotations

import click

from invtrack.application.dto import MovementDTO
from invtrack.application.show_dashboard import RECENT_MOVEMENT_LIMIT, ShowDashboardHandler
from invtrack.application.show_movements import ShowMovementsHandler
from invtrack.domain.exceptions import DomainException
from invtrack.infrastructure.bootstrap import Container


@click.command("dashboard")
@click.option(
    "--recent", type=click.IntRange(min=0), default=RECENT_MOVEMENT_LIMIT, show_default=True,
    help="Number of recent movements to list.",
)
@click.pass_obj
def dashboard(app: Container, recent: int) -> None:
    """Show stock totals, low-stock alerts and recent activity."""
    stats = ShowDashboardHandler(stock=app.stock).handle(recent_limit=recent)

    click.echo(f"Products:          {stats.total_products}")
    click.echo(f"Low stock items:   {stats.low_stock_items}")
    click.echo(f"Inventory value:   {stats.inventory_value}")
    click.echo(f"Recent movements:  {stats.recent_movement_count}")

    if stats.low_stock:
        click.echo()
        click.echo("Low stock:")
        for line in stats.low_stock:
            click.echo(
                f"  {line.sku:<12} {line.location_name:<16} "
                f"{line.quantity:>5}/{line.min_stock_level:<5} {line.status}"
            )

    if stats.recent_movements:
        click.echo()
        click.echo("Recent activity:")
        _echo_movements(stats.recent_movements, indent="  ")


@click.command("list")
@click.option("--sku", default=None, help="Only movements of this product.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Newest N movements.")
@click.pass_obj
def movement_list(app: Container, sku: str | None, limit: int | None) -> None:
    """Show the stock movement history, newest first."""
    handler = ShowMovementsHandler(catalog=app.catalog, stock=app.stock)

    try:
        movements = handler.handle(sku=sku, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not movements:
        click.echo("No stock movements found.")
        return

    _echo_movements(movements)


def _echo_movements(movements: list[MovementDTO], indent: str = "") -> None:
    for m in movements:
        click.echo(
            f"{indent}{m.timestamp:<20} {m.product_name:<20} {m.location_name:<16} "
            f"{m.quantity:>+7}  {m.note}"
        )
