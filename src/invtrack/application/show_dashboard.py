"""Application service: Show Dashboard use case (query)."""

from __future__ import annotations

from invtrack.application.dto import DashboardDTO, to_inventory_line, to_movement_dto
from invtrack.domain.service.stock_reconciliation_service import StockReconciliationService

RECENT_MOVEMENT_LIMIT = 5


class ShowDashboardHandler:

    def __init__(self, stock: StockReconciliationService) -> None:
        self._stock = stock

    def handle(self, recent_limit: int = RECENT_MOVEMENT_LIMIT) -> DashboardDTO:
        stats = self._stock.get_dashboard_stats()
        return DashboardDTO(
            total_products=stats.total_products,
            low_stock_items=stats.low_stock_items,
            inventory_value=str(stats.inventory_value),
            recent_movement_count=stats.recent_movement_count,
            low_stock=[to_inventory_line(v) for v in self._stock.get_low_stock_items()],
            recent_movements=[
                to_movement_dto(v) for v in self._stock.list_movements(limit=recent_limit)
            ],
        )
