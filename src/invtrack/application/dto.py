"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from invtrack.domain.service.stock_reconciliation_service import InventoryView, MovementView

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    sku: str
    category_name: str
    unit_cost: str  # formatted, e.g. "$15.00"
    min_stock_level: int
    stock_quantity: int
    description: str | None = None


@dataclass(frozen=True)
class LocationStockDTO:
    location_name: str
    quantity: int
    status: str


@dataclass(frozen=True)
class ProductDetailDTO:
    product: ProductDTO
    status: str
    locations: list[LocationStockDTO]


@dataclass(frozen=True)
class InventoryLineDTO:
    """Output: one aggregate row as displayed to the user."""

    product_name: str
    sku: str
    category_name: str
    location_name: str
    quantity: int
    min_stock_level: int
    status: str  # "In Stock" / "Low Stock" / "Out of Stock"


@dataclass(frozen=True)
class MovementDTO:
    id: int
    product_name: str
    location_name: str
    quantity: int
    note: str
    timestamp: str


@dataclass(frozen=True)
class DashboardDTO:
    total_products: int
    low_stock_items: int
    inventory_value: str
    recent_movement_count: int
    low_stock: list[InventoryLineDTO]
    recent_movements: list[MovementDTO]


def to_inventory_line(view: InventoryView) -> InventoryLineDTO:
    return InventoryLineDTO(
        product_name=view.product_name,
        sku=view.product_sku,
        category_name=view.category_name,
        location_name=view.location_name,
        quantity=view.quantity,
        min_stock_level=view.min_stock_level,
        status=view.status.value,
    )


def to_movement_dto(view: MovementView) -> MovementDTO:
    movement = view.movement
    return MovementDTO(
        id=movement.id,
        product_name=view.product_name,
        location_name=view.location_name,
        quantity=movement.quantity,
        note=movement.note or "",
        timestamp=movement.timestamp.strftime(TIMESTAMP_FORMAT),
    )
