"""CLI commands for categories and locations."""

from __future__ import annotations

import click

from invtrack.application.lookup import resolve_category, resolve_location
from invtrack.domain.exceptions import DomainException
from invtrack.infrastructure.bootstrap import Container


# --- Categories ---------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Category name (must be unique).")
@click.option("--description", default=None, help="Optional description.")
@click.pass_obj
def category_add(app: Container, name: str, description: str | None) -> None:
    """Add a product category."""
    try:
        category = app.catalog.create_category(name, description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category.id} '{category.name}' added")


@click.command("list")
@click.pass_obj
def category_list(app: Container) -> None:
    """List all categories."""
    categories = app.catalog.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} Description")
    click.echo("-" * 50)
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<24} {c.description or ''}")


@click.command("update")
@click.option("--name", required=True, help="Current category name.")
@click.option("--new-name", default=None, help="New category name.")
@click.option("--description", default=None, help="New description.")
@click.pass_obj
def category_update(
    app: Container, name: str, new_name: str | None, description: str | None
) -> None:
    """Rename a category or change its description."""
    try:
        category = resolve_category(app.catalog, name)
        category = app.catalog.update_category(category.id, name=new_name, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category.id} '{category.name}' updated")


@click.command("delete")
@click.option("--name", required=True, help="Category name.")
@click.pass_obj
def category_delete(app: Container, name: str) -> None:
    """Delete a category that no product uses."""
    try:
        category = resolve_category(app.catalog, name)
        app.catalog.delete_category(category.id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category '{name}' deleted")


# --- Locations ----------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Location name (must be unique).")
@click.option("--description", default=None, help="Optional description.")
@click.pass_obj
def location_add(app: Container, name: str, description: str | None) -> None:
    """Add a stock location."""
    try:
        location = app.catalog.create_location(name, description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Location #{location.id} '{location.name}' added")


@click.command("list")
@click.pass_obj
def location_list(app: Container) -> None:
    """List all locations."""
    locations = app.catalog.list_locations()
    if not locations:
        click.echo("No locations found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} Description")
    click.echo("-" * 50)
    for loc in locations:
        click.echo(f"{loc.id:<6} {loc.name:<24} {loc.description or ''}")


@click.command("update")
@click.option("--name", required=True, help="Current location name.")
@click.option("--new-name", default=None, help="New location name.")
@click.option("--description", default=None, help="New description.")
@click.pass_obj
def location_update(
    app: Container, name: str, new_name: str | None, description: str | None
) -> None:
    """Rename a location or change its description."""
    try:
        location = resolve_location(app.catalog, name)
        location = app.catalog.update_location(location.id, name=new_name, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Location #{location.id} '{location.name}' updated")


@click.command("delete")
@click.option("--name", required=True, help="Location name.")
@click.pass_obj
def location_delete(app: Container, name: str) -> None:
    """Delete a location that holds no inventory and has no history."""
    try:
        location = resolve_location(app.catalog, name)
        app.catalog.delete_location(location.id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Location '{name}' deleted")
