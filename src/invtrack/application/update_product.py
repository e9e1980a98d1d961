"""Application service: Update Product use case."""

from __future__ import annotations

from invtrack.application.lookup import resolve_category, resolve_product
from invtrack.domain.model.catalog import Product
from invtrack.domain.model.value_objects import Money
from invtrack.domain.service.catalog_service import CatalogService


class UpdateProductHandler:

    def __init__(self, catalog: CatalogService) -> None:
        self._catalog = catalog

    def handle(
        self,
        sku: str,
        *,
        name: str | None = None,
        new_sku: str | None = None,
        category_name: str | None = None,
        unit_cost: str | None = None,
        min_stock_level: int | None = None,
        description: str | None = None,
    ) -> Product:
        """Update the given fields of a product; omitted fields stay as they are.

        Stock is not touched. A new unit cost only changes how existing
        stock is valued from now on.
        """
        product = resolve_product(self._catalog, sku)
        category_id = None
        if category_name is not None:
            category_id = resolve_category(self._catalog, category_name).id

        return self._catalog.update_product(
            product.id,
            name=name,
            sku=new_sku,
            category_id=category_id,
            unit_cost=Money.of(unit_cost) if unit_cost is not None else None,
            min_stock_level=min_stock_level,
            description=description,
        )
