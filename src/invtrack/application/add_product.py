"""Application service: Add Product use case."""

from __future__ import annotations

from invtrack.application.lookup import resolve_category
from invtrack.domain.model.catalog import DEFAULT_MIN_STOCK_LEVEL, Product
from invtrack.domain.model.value_objects import Money
from invtrack.domain.service.catalog_service import CatalogService


class AddProductHandler:

    def __init__(self, catalog: CatalogService) -> None:
        self._catalog = catalog

    def handle(
        self,
        name: str,
        sku: str,
        category_name: str,
        unit_cost: str,
        min_stock_level: int = DEFAULT_MIN_STOCK_LEVEL,
        description: str | None = None,
    ) -> Product:
        """Add a new product to the catalog under an existing category."""
        category = resolve_category(self._catalog, category_name)
        return self._catalog.create_product(
            name=name,
            sku=sku,
            category_id=category.id,
            unit_cost=Money.of(unit_cost),
            min_stock_level=min_stock_level,
            description=description,
        )
