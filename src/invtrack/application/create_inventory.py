"""Application service: Create Inventory use case (first stock at a location)."""

from __future__ import annotations

from invtrack.application.lookup import resolve_location, resolve_product
from invtrack.domain.model.inventory import InventoryRecord
from invtrack.domain.service.catalog_service import CatalogService
from invtrack.domain.service.stock_reconciliation_service import StockReconciliationService


class CreateInventoryHandler:

    def __init__(self, catalog: CatalogService, stock: StockReconciliationService) -> None:
        self._catalog = catalog
        self._stock = stock

    def handle(self, sku: str, location_name: str, quantity: int) -> InventoryRecord:
        """Fails with DuplicateKeyError if the product is already stocked there."""
        product = resolve_product(self._catalog, sku)
        location = resolve_location(self._catalog, location_name)
        return self._stock.create_initial_inventory(product.id, location.id, quantity)
