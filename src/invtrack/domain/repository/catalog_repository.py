"""Abstract repositories for the catalog entities.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer. Name and sku lookups are exact, case-sensitive
matches.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from invtrack.domain.model.catalog import Category, Location, Product


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: int) -> Category | None:
        """Return a category by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Category | None:
        """Return a category by its exact name, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category ordered by ID."""

    @abstractmethod
    def add(self, category: Category) -> Category:
        """Persist a new category and assign its ID."""

    @abstractmethod
    def update(self, category: Category) -> None:
        """Persist changes to an existing category."""

    @abstractmethod
    def delete(self, category_id: int) -> None:
        """Remove a category."""


class LocationRepository(ABC):

    @abstractmethod
    def get_by_id(self, location_id: int) -> Location | None:
        """Return a location by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Location | None:
        """Return a location by its exact name, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Location]:
        """Return every location ordered by ID."""

    @abstractmethod
    def add(self, location: Location) -> Location:
        """Persist a new location and assign its ID."""

    @abstractmethod
    def update(self, location: Location) -> None:
        """Persist changes to an existing location."""

    @abstractmethod
    def delete(self, location_id: int) -> None:
        """Remove a location."""


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return a product by its exact SKU, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product ordered by ID."""

    @abstractmethod
    def list_by_category(self, category_id: int) -> list[Product]:
        """Return the products assigned to a category."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of products in the catalog."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Persist a new product and assign its ID."""

    @abstractmethod
    def update(self, product: Product) -> None:
        """Persist changes to an existing product."""

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove a product."""
