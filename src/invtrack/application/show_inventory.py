"""Application service: Show Inventory use case (query).

Lists aggregate rows with their catalog names and stock status,
optionally filtered. Category, location and status filters are exact
matches; ``search`` is a case-insensitive substring match over product
name, sku, category and location.
"""

from __future__ import annotations

from invtrack.application.dto import InventoryLineDTO, to_inventory_line
from invtrack.domain.exceptions import ValidationError
from invtrack.domain.model.inventory import StockStatus
from invtrack.domain.service.stock_reconciliation_service import (
    InventoryView,
    StockReconciliationService,
)


class ShowInventoryHandler:

    def __init__(self, stock: StockReconciliationService) -> None:
        self._stock = stock

    def handle(
        self,
        category: str | None = None,
        location: str | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> list[InventoryLineDTO]:
        wanted_status = self._parse_status(status) if status else None
        needle = search.lower() if search else None

        lines = []
        for view in self._stock.list_inventory():
            if category and view.category_name != category:
                continue
            if location and view.location_name != location:
                continue
            if wanted_status and view.status != wanted_status:
                continue
            if needle and not self._matches(view, needle):
                continue
            lines.append(to_inventory_line(view))
        return lines

    @staticmethod
    def _matches(view: InventoryView, needle: str) -> bool:
        haystack = (view.product_name, view.product_sku, view.category_name, view.location_name)
        return any(needle in field.lower() for field in haystack)

    @staticmethod
    def _parse_status(raw: str) -> StockStatus:
        for status in StockStatus:
            if raw.lower() in (status.value.lower(), status.name.lower()):
                return status
        raise ValidationError(f"Unknown stock status: {raw!r}")


class ShowLowStockHandler:

    def __init__(self, stock: StockReconciliationService) -> None:
        self._stock = stock

    def handle(self) -> list[InventoryLineDTO]:
        """Low and out-of-stock rows, most critical first."""
        return [to_inventory_line(view) for view in self._stock.get_low_stock_items()]
