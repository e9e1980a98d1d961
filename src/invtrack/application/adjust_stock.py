"""Application service: Adjust Stock use case (manual stock movement)."""

from __future__ import annotations

from invtrack.application.dto import MovementDTO, to_movement_dto
from invtrack.application.lookup import resolve_location, resolve_product
from invtrack.domain.service.catalog_service import CatalogService
from invtrack.domain.service.stock_reconciliation_service import (
    MovementView,
    StockReconciliationService,
)


class AdjustStockHandler:

    def __init__(self, catalog: CatalogService, stock: StockReconciliationService) -> None:
        self._catalog = catalog
        self._stock = stock

    def handle(
        self, sku: str, location_name: str, delta: int, note: str | None = None
    ) -> MovementDTO:
        """Add (positive ``delta``) or remove (negative) stock at a location."""
        product = resolve_product(self._catalog, sku)
        location = resolve_location(self._catalog, location_name)
        movement = self._stock.record_movement(product.id, location.id, delta, note=note)
        return to_movement_dto(
            MovementView(movement=movement, product_name=product.name, location_name=location.name)
        )
