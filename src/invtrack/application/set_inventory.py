"""Application service: Set Inventory use case.

Sets the absolute on-hand quantity of a product at a location. The
difference from the current quantity is written to the ledger.
"""

from __future__ import annotations

from invtrack.application.lookup import resolve_location, resolve_product
from invtrack.domain.model.inventory import InventoryRecord
from invtrack.domain.service.catalog_service import CatalogService
from invtrack.domain.service.stock_reconciliation_service import StockReconciliationService


class SetInventoryHandler:

    def __init__(self, catalog: CatalogService, stock: StockReconciliationService) -> None:
        self._catalog = catalog
        self._stock = stock

    def handle(
        self, sku: str, location_name: str, quantity: int, note: str | None = None
    ) -> InventoryRecord:
        product = resolve_product(self._catalog, sku)
        location = resolve_location(self._catalog, location_name)
        return self._stock.set_absolute_quantity(product.id, location.id, quantity, note=note)
