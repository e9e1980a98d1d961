"""Application service: product queries with stock totals."""

from __future__ import annotations

from invtrack.application.dto import LocationStockDTO, ProductDetailDTO, ProductDTO
from invtrack.application.lookup import resolve_product
from invtrack.domain.model.catalog import Product
from invtrack.domain.model.inventory import compute_stock_status
from invtrack.domain.service.catalog_service import CatalogService
from invtrack.domain.service.stock_reconciliation_service import StockReconciliationService


class ListProductsHandler:

    def __init__(self, catalog: CatalogService, stock: StockReconciliationService) -> None:
        self._catalog = catalog
        self._stock = stock

    def handle(self) -> list[ProductDTO]:
        categories = {c.id: c.name for c in self._catalog.list_categories()}
        return [
            _to_dto(p, categories.get(p.category_id, ""), self._stock.get_product_total_stock(p.id))
            for p in self._catalog.list_products()
        ]


class ShowProductHandler:

    def __init__(self, catalog: CatalogService, stock: StockReconciliationService) -> None:
        self._catalog = catalog
        self._stock = stock

    def handle(self, sku: str) -> ProductDetailDTO:
        """A product with its total stock and per-location breakdown."""
        product = resolve_product(self._catalog, sku)
        category = self._catalog.get_category(product.category_id)
        views = [v for v in self._stock.list_inventory() if v.record.product_id == product.id]
        total = self._stock.get_product_total_stock(product.id)
        return ProductDetailDTO(
            product=_to_dto(product, category.name, total),
            status=compute_stock_status(total, product.min_stock_level).value,
            locations=[
                LocationStockDTO(
                    location_name=v.location_name, quantity=v.quantity, status=v.status.value
                )
                for v in views
            ],
        )


def _to_dto(product: Product, category_name: str, stock_quantity: int) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        sku=product.sku,
        category_name=category_name,
        unit_cost=str(product.unit_cost),
        min_stock_level=product.min_stock_level,
        stock_quantity=stock_quantity,
        description=product.description,
    )
