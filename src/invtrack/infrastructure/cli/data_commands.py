"""CLI commands for CSV import and export."""

from __future__ import annotations

import csv

import click

from invtrack.application.export_data import EXPORT_COLUMNS, EXPORT_KINDS, ExportHandler
from invtrack.application.import_data import BulkImportHandler, ImportKind
from invtrack.domain.exceptions import DomainException
from invtrack.infrastructure.bootstrap import Container


@click.command("import")
@click.option(
    "--type", "kind", required=True,
    type=click.Choice([k.value for k in ImportKind]), help="What the file contains.",
)
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def data_import(app: Container, kind: str, source) -> None:
    """Import rows from a CSV file with a header line.

    Bad rows are reported and skipped; the good ones are kept.
    """
    handler = BulkImportHandler(uow=app.uow, catalog=app.catalog, stock=app.stock)

    try:
        result = handler.handle(kind, csv.DictReader(source))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(result.message)
    for error in result.errors:
        click.echo(f"  row {error.row_number}: {error.message}", err=True)


@click.command("export")
@click.option(
    "--type", "kind", required=True, type=click.Choice(EXPORT_KINDS), help="What to export.",
)
@click.option(
    "--output", "-o", type=click.File("w", encoding="utf-8"), default="-",
    help="Destination file (default: stdout).",
)
@click.pass_obj
def data_export(app: Container, kind: str, output) -> None:
    """Export products, inventory or stock movements as CSV."""
    try:
        rows = ExportHandler(catalog=app.catalog, stock=app.stock).handle(kind)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    writer = csv.DictWriter(output, fieldnames=EXPORT_COLUMNS[kind], lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
