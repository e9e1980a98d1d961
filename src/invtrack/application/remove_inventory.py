"""Application service: Remove Inventory use case.

Writes the remaining stock off in the ledger, then drops the aggregate
row. The ledger keeps the pair's full history.
"""

from __future__ import annotations

from invtrack.application.lookup import resolve_location, resolve_product
from invtrack.domain.service.catalog_service import CatalogService
from invtrack.domain.service.stock_reconciliation_service import StockReconciliationService


class RemoveInventoryHandler:

    def __init__(self, catalog: CatalogService, stock: StockReconciliationService) -> None:
        self._catalog = catalog
        self._stock = stock

    def handle(self, sku: str, location_name: str) -> None:
        product = resolve_product(self._catalog, sku)
        location = resolve_location(self._catalog, location_name)
        self._stock.remove_inventory(product.id, location.id)
