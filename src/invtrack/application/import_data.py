"""Application service: Bulk Import use case.

Imports products, inventory snapshots or stock movements from a sequence
of row mappings (typically read from CSV). Referenced categories and
locations are resolved by exact name and created on the fly.

Each row runs in its own transaction. A row that fails validation or
hits a domain error is rolled back, counted and skipped; the rows
before and after it are unaffected. The call itself only fails for an
unsupported import kind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from invtrack.application.validation import (
    Err,
    InventoryRow,
    MovementRow,
    ProductRow,
    validate_inventory_row,
    validate_movement_row,
    validate_product_row,
)
from invtrack.domain.exceptions import DomainException, EntityNotFoundError, ValidationError
from invtrack.domain.model.catalog import Product
from invtrack.domain.repository.unit_of_work import UnitOfWork
from invtrack.domain.service.catalog_service import CatalogService
from invtrack.domain.service.stock_reconciliation_service import StockReconciliationService

logger = logging.getLogger("invtrack.import")

IMPORTED_INVENTORY_NOTE = "Imported inventory"
IMPORTED_ADJUSTMENT_NOTE = "Imported inventory adjustment"
IMPORTED_MOVEMENT_NOTE = "Imported stock movement"


class ImportKind(Enum):
    PRODUCTS = "products"
    INVENTORY = "inventory"
    MOVEMENTS = "movements"

    @staticmethod
    def parse(value: str | ImportKind) -> ImportKind:
        if isinstance(value, ImportKind):
            return value
        try:
            return ImportKind(value)
        except ValueError:
            raise ValidationError(f"Unsupported import type: {value!r}") from None


@dataclass(frozen=True)
class RowError:
    row_number: int
    message: str


@dataclass(frozen=True)
class ImportResult:
    imported_count: int
    error_count: int
    errors: list[RowError] = field(default_factory=list)

    @property
    def message(self) -> str:
        return (
            f"Import completed with {self.imported_count} items imported "
            f"and {self.error_count} errors"
        )


class BulkImportHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        catalog: CatalogService,
        stock: StockReconciliationService,
    ) -> None:
        self._uow = uow
        self._catalog = catalog
        self._stock = stock

    def handle(self, kind: str | ImportKind, rows: Iterable[Mapping[str, object]]) -> ImportResult:
        kind = ImportKind.parse(kind)
        validate, apply = {
            ImportKind.PRODUCTS: (validate_product_row, self._import_product),
            ImportKind.INVENTORY: (validate_inventory_row, self._import_inventory),
            ImportKind.MOVEMENTS: (validate_movement_row, self._import_movement),
        }[kind]

        imported = 0
        errors: list[RowError] = []
        for row_number, raw in enumerate(rows, start=1):
            result = validate(raw)
            if isinstance(result, Err):
                errors.append(RowError(row_number, str(result.error)))
                logger.warning("Skipping %s row %d: %s", kind.value, row_number, result.error)
                continue
            try:
                with self._uow.transaction():
                    apply(result.value)
            except DomainException as exc:
                errors.append(RowError(row_number, str(exc)))
                logger.warning("Skipping %s row %d: %s", kind.value, row_number, exc)
                continue
            imported += 1

        logger.info(
            "Imported %d %s rows with %d errors", imported, kind.value, len(errors)
        )
        return ImportResult(imported_count=imported, error_count=len(errors), errors=errors)

    # --- Per-kind row handlers (called inside the row's transaction) ---------

    def _import_product(self, row: ProductRow) -> None:
        category = self._catalog.get_or_create_category(row.category_name)
        self._catalog.create_product(
            name=row.name,
            sku=row.sku,
            category_id=category.id,
            unit_cost=row.unit_cost,
            min_stock_level=row.min_stock_level,
            description=row.description or "",
        )

    def _import_inventory(self, row: InventoryRow) -> None:
        product = self._require_product(row.sku)
        location = self._catalog.get_or_create_location(row.location_name)
        existing = self._stock.get_inventory(product.id, location.id)
        note = IMPORTED_ADJUSTMENT_NOTE if existing is not None else IMPORTED_INVENTORY_NOTE
        self._stock.set_absolute_quantity(product.id, location.id, row.quantity, note=note)

    def _import_movement(self, row: MovementRow) -> None:
        product = self._require_product(row.sku)
        location = self._catalog.get_or_create_location(row.location_name)
        self._stock.record_movement(
            product.id, location.id, row.quantity, note=row.note or IMPORTED_MOVEMENT_NOTE
        )

    def _require_product(self, sku: str) -> Product:
        product = self._catalog.find_product_by_sku(sku)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{sku}'")
        return product
