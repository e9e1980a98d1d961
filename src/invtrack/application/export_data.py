"""Application service: Export use case.

Produces flat row mappings whose keys match the import columns, so an
export can be edited and fed back through the importer.
"""

from __future__ import annotations

from invtrack.domain.exceptions import ValidationError
from invtrack.domain.service.catalog_service import CatalogService
from invtrack.domain.service.stock_reconciliation_service import StockReconciliationService

EXPORT_COLUMNS = {
    "products": (
        "name", "sku", "description", "categoryName", "unitCost", "minStockLevel", "stockQuantity",
    ),
    "inventory": ("productName", "sku", "locationName", "quantity", "minStockLevel"),
    "stock-movements": ("productName", "sku", "locationName", "quantity", "note", "timestamp"),
}
EXPORT_KINDS = tuple(EXPORT_COLUMNS)


class ExportHandler:

    def __init__(self, catalog: CatalogService, stock: StockReconciliationService) -> None:
        self._catalog = catalog
        self._stock = stock

    def handle(self, kind: str) -> list[dict[str, object]]:
        if kind == "products":
            return self._products()
        if kind == "inventory":
            return self._inventory()
        if kind == "stock-movements":
            return self._movements()
        raise ValidationError(f"Unsupported export type: {kind!r}")

    def _products(self) -> list[dict[str, object]]:
        categories = {c.id: c.name for c in self._catalog.list_categories()}
        return [
            {
                "name": p.name,
                "sku": p.sku,
                "description": p.description or "",
                "categoryName": categories.get(p.category_id, ""),
                "unitCost": str(p.unit_cost.amount),
                "minStockLevel": p.min_stock_level,
                "stockQuantity": self._stock.get_product_total_stock(p.id),
            }
            for p in self._catalog.list_products()
        ]

    def _inventory(self) -> list[dict[str, object]]:
        return [
            {
                "productName": v.product_name,
                "sku": v.product_sku,
                "locationName": v.location_name,
                "quantity": v.quantity,
                "minStockLevel": v.min_stock_level,
            }
            for v in self._stock.list_inventory()
        ]

    def _movements(self) -> list[dict[str, object]]:
        skus = {p.id: p.sku for p in self._catalog.list_products()}
        return [
            {
                "productName": v.product_name,
                "sku": skus.get(v.movement.product_id, ""),
                "locationName": v.location_name,
                "quantity": v.movement.quantity,
                "note": v.movement.note or "",
                "timestamp": v.movement.timestamp.isoformat(),
            }
            for v in self._stock.list_movements()
        ]
