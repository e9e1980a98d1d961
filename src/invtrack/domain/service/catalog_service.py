"""Domain service: Catalog maintenance.

CRUD for categories, locations and products on top of the unit of work.
Uniqueness (category/location name, product sku) and referential
integrity (nothing is deleted while something still points at it) are
checked here so every storage backend behaves the same way.
"""

from __future__ import annotations

import logging

from invtrack.domain.exceptions import (
    DuplicateKeyError,
    EntityNotFoundError,
    ReferentialIntegrityError,
)
from invtrack.domain.model.catalog import DEFAULT_MIN_STOCK_LEVEL, Category, Location, Product
from invtrack.domain.model.value_objects import Money
from invtrack.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger("invtrack.catalog")


class CatalogService:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    # --- Categories -----------------------------------------------------------

    def create_category(self, name: str, description: str | None = None) -> Category:
        category = Category.create(name, description)
        with self._uow.transaction():
            if self._uow.categories.get_by_name(category.name) is not None:
                raise DuplicateKeyError(f"Category '{category.name}' already exists")
            category = self._uow.categories.add(category)
        logger.info("Created category #%s '%s'", category.id, category.name)
        return category

    def get_category(self, category_id: int) -> Category:
        with self._uow.transaction():
            category = self._uow.categories.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category #{category_id} not found")
        return category

    def find_category_by_name(self, name: str) -> Category | None:
        with self._uow.transaction():
            return self._uow.categories.get_by_name(name)

    def list_categories(self) -> list[Category]:
        with self._uow.transaction():
            return self._uow.categories.list_all()

    def update_category(
        self, category_id: int, name: str | None = None, description: str | None = None
    ) -> Category:
        with self._uow.transaction():
            category = self.get_category(category_id)
            if name is not None:
                category.rename(name)
                clash = self._uow.categories.get_by_name(category.name)
                if clash is not None and clash.id != category_id:
                    raise DuplicateKeyError(f"Category '{category.name}' already exists")
            if description is not None:
                category.description = description
            self._uow.categories.update(category)
        return category

    def delete_category(self, category_id: int) -> None:
        with self._uow.transaction():
            category = self.get_category(category_id)
            if self._uow.products.list_by_category(category_id):
                raise ReferentialIntegrityError(
                    f"Cannot delete category '{category.name}' that is in use by products"
                )
            self._uow.categories.delete(category_id)
        logger.info("Deleted category #%s '%s'", category_id, category.name)

    def get_or_create_category(self, name: str) -> Category:
        """Resolve a category by exact name, creating it with an empty description."""
        with self._uow.transaction():
            category = self._uow.categories.get_by_name(name)
            if category is None:
                category = self.create_category(name, description="")
        return category

    # --- Locations ------------------------------------------------------------

    def create_location(self, name: str, description: str | None = None) -> Location:
        location = Location.create(name, description)
        with self._uow.transaction():
            if self._uow.locations.get_by_name(location.name) is not None:
                raise DuplicateKeyError(f"Location '{location.name}' already exists")
            location = self._uow.locations.add(location)
        logger.info("Created location #%s '%s'", location.id, location.name)
        return location

    def get_location(self, location_id: int) -> Location:
        with self._uow.transaction():
            location = self._uow.locations.get_by_id(location_id)
        if location is None:
            raise EntityNotFoundError(f"Location #{location_id} not found")
        return location

    def find_location_by_name(self, name: str) -> Location | None:
        with self._uow.transaction():
            return self._uow.locations.get_by_name(name)

    def list_locations(self) -> list[Location]:
        with self._uow.transaction():
            return self._uow.locations.list_all()

    def update_location(
        self, location_id: int, name: str | None = None, description: str | None = None
    ) -> Location:
        with self._uow.transaction():
            location = self.get_location(location_id)
            if name is not None:
                location.rename(name)
                clash = self._uow.locations.get_by_name(location.name)
                if clash is not None and clash.id != location_id:
                    raise DuplicateKeyError(f"Location '{location.name}' already exists")
            if description is not None:
                location.description = description
            self._uow.locations.update(location)
        return location

    def delete_location(self, location_id: int) -> None:
        with self._uow.transaction():
            location = self.get_location(location_id)
            if self._uow.inventory.list_for_location(location_id):
                raise ReferentialIntegrityError(
                    f"Cannot delete location '{location.name}' that has inventory items"
                )
            if self._uow.movements.exists_for_location(location_id):
                raise ReferentialIntegrityError(
                    f"Cannot delete location '{location.name}' that has stock movement history"
                )
            self._uow.locations.delete(location_id)
        logger.info("Deleted location #%s '%s'", location_id, location.name)

    def get_or_create_location(self, name: str) -> Location:
        """Resolve a location by exact name, creating it with an empty description."""
        with self._uow.transaction():
            location = self._uow.locations.get_by_name(name)
            if location is None:
                location = self.create_location(name, description="")
        return location

    # --- Products -------------------------------------------------------------

    def create_product(
        self,
        name: str,
        sku: str,
        category_id: int,
        unit_cost: Money | None = None,
        min_stock_level: int = DEFAULT_MIN_STOCK_LEVEL,
        description: str | None = None,
    ) -> Product:
        with self._uow.transaction():
            product = Product.create(
                name=name,
                sku=sku,
                category_id=category_id,
                unit_cost=unit_cost,
                min_stock_level=min_stock_level,
                description=description,
                now=self._uow.clock(),
            )
            if self._uow.products.get_by_sku(product.sku) is not None:
                raise DuplicateKeyError(f"Product with SKU '{product.sku}' already exists")
            self.get_category(category_id)
            product = self._uow.products.add(product)
        logger.info("Created product #%s sku=%s", product.id, product.sku)
        return product

    def get_product(self, product_id: int) -> Product:
        with self._uow.transaction():
            product = self._uow.products.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        return product

    def find_product_by_sku(self, sku: str) -> Product | None:
        with self._uow.transaction():
            return self._uow.products.get_by_sku(sku)

    def list_products(self) -> list[Product]:
        with self._uow.transaction():
            return self._uow.products.list_all()

    def update_product(
        self,
        product_id: int,
        *,
        name: str | None = None,
        sku: str | None = None,
        category_id: int | None = None,
        unit_cost: Money | None = None,
        min_stock_level: int | None = None,
        description: str | None = None,
    ) -> Product:
        """Apply a partial update to a product.

        Unit cost changes do not touch stock; the next valuation simply
        uses the new cost.
        """
        with self._uow.transaction():
            product = self.get_product(product_id)
            if sku is not None and sku.strip() != product.sku:
                clash = self._uow.products.get_by_sku(sku.strip())
                if clash is not None:
                    raise DuplicateKeyError(f"Product with SKU '{sku.strip()}' already exists")
            if category_id is not None and category_id != product.category_id:
                self.get_category(category_id)
            product.change(
                now=self._uow.clock(),
                name=name,
                sku=sku,
                category_id=category_id,
                unit_cost=unit_cost,
                min_stock_level=min_stock_level,
                description=description,
            )
            self._uow.products.update(product)
        return product

    def delete_product(self, product_id: int) -> None:
        with self._uow.transaction():
            product = self.get_product(product_id)
            if self._uow.inventory.list_for_product(product_id):
                raise ReferentialIntegrityError(
                    f"Cannot delete product '{product.sku}' that has inventory items"
                )
            if self._uow.movements.exists_for_product(product_id):
                raise ReferentialIntegrityError(
                    f"Cannot delete product '{product.sku}' that has stock movement history"
                )
            self._uow.products.delete(product_id)
        logger.info("Deleted product #%s sku=%s", product_id, product.sku)
