"""Application service: Show Movements use case (ledger history query)."""

from __future__ import annotations

from invtrack.application.dto import MovementDTO, to_movement_dto
from invtrack.application.lookup import resolve_product
from invtrack.domain.service.catalog_service import CatalogService
from invtrack.domain.service.stock_reconciliation_service import StockReconciliationService


class ShowMovementsHandler:

    def __init__(self, catalog: CatalogService, stock: StockReconciliationService) -> None:
        self._catalog = catalog
        self._stock = stock

    def handle(self, sku: str | None = None, limit: int | None = None) -> list[MovementDTO]:
        """Newest first; restricted to one product when ``sku`` is given."""
        product_id = resolve_product(self._catalog, sku).id if sku else None
        views = self._stock.list_movements(limit=limit, product_id=product_id)
        return [to_movement_dto(view) for view in views]
