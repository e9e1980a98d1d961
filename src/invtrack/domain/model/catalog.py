"""Catalog entities: Category, Location and Product.

These are reference data. They carry no stock; the inventory aggregate
and the movement ledger point at them by id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from invtrack.domain.exceptions import ValidationError
from invtrack.domain.model.value_objects import Money

DEFAULT_MIN_STOCK_LEVEL = 10


def _require_text(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


@dataclass
class Category:
    id: int | None
    name: str
    description: str | None = None

    @staticmethod
    def create(name: str, description: str | None = None) -> Category:
        return Category(id=None, name=_require_text(name, "Category name"), description=description)

    def rename(self, name: str) -> None:
        self.name = _require_text(name, "Category name")


@dataclass
class Location:
    id: int | None
    name: str
    description: str | None = None

    @staticmethod
    def create(name: str, description: str | None = None) -> Location:
        return Location(id=None, name=_require_text(name, "Location name"), description=description)

    def rename(self, name: str) -> None:
        self.name = _require_text(name, "Location name")


@dataclass
class Product:
    """A product in the catalog.

    ``unit_cost`` drives inventory valuation and ``min_stock_level`` the
    low-stock classification. Use ``Product.create()`` for new products;
    the plain constructor is for repositories reconstituting stored rows.
    """

    id: int | None
    name: str
    sku: str
    category_id: int
    unit_cost: Money = field(default_factory=Money.zero)
    min_stock_level: int = DEFAULT_MIN_STOCK_LEVEL
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        sku: str,
        category_id: int,
        unit_cost: Money | None = None,
        min_stock_level: int = DEFAULT_MIN_STOCK_LEVEL,
        description: str | None = None,
        now: datetime | None = None,
    ) -> Product:
        now = now or datetime.now(timezone.utc)
        return Product(
            id=None,
            name=_require_text(name, "Product name"),
            sku=_require_text(sku, "SKU"),
            category_id=category_id,
            unit_cost=unit_cost if unit_cost is not None else Money.zero(),
            min_stock_level=_check_min_stock_level(min_stock_level),
            description=description,
            created_at=now,
            updated_at=now,
        )

    def change(
        self,
        *,
        now: datetime,
        name: str | None = None,
        sku: str | None = None,
        category_id: int | None = None,
        unit_cost: Money | None = None,
        min_stock_level: int | None = None,
        description: str | None = None,
    ) -> None:
        """Apply a partial update. ``None`` leaves a field untouched."""
        if name is not None:
            self.name = _require_text(name, "Product name")
        if sku is not None:
            self.sku = _require_text(sku, "SKU")
        if category_id is not None:
            self.category_id = category_id
        if unit_cost is not None:
            self.unit_cost = unit_cost
        if min_stock_level is not None:
            self.min_stock_level = _check_min_stock_level(min_stock_level)
        if description is not None:
            self.description = description
        self.updated_at = now


def _check_min_stock_level(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Minimum stock level must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise ValidationError("Minimum stock level cannot be negative")
    return value
