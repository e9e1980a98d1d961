"""Inventory aggregate rows and ledger movements.

Each (product, location) pair has at most one InventoryRecord holding the
current on-hand quantity. Every change to that quantity is also written as
a StockMovement; the ledger is history, the record is current state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from invtrack.domain.exceptions import ValidationError


class StockStatus(Enum):
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"


def compute_stock_status(quantity: int, min_stock_level: int) -> StockStatus:
    """Classify a quantity against a product's minimum.

    At or below the minimum counts as low stock; zero or less is out of
    stock. This is the only place the comparison is made.
    """
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= min_stock_level:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def check_quantity(value: int, label: str = "Quantity") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{label} must be an integer, got {type(value).__name__}"
        )
    return value


@dataclass
class InventoryRecord:
    """Aggregate row for one (product, location) pair.

    Invariants:
    - ``quantity`` is never negative
    - ``quantity`` equals the sum of the ledger deltas for the pair
    """

    id: int | None
    product_id: int
    location_id: int
    quantity: int = 0
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def opening(product_id: int, location_id: int, quantity: int, now: datetime) -> InventoryRecord:
        """Lazily create the row for a pair's first movement."""
        record = InventoryRecord(
            id=None, product_id=product_id, location_id=location_id, quantity=0, updated_at=now
        )
        record.apply(quantity, now)
        return record

    def apply(self, delta: int, now: datetime) -> None:
        """Add a signed delta to the on-hand quantity.

        Raises ValidationError if the result would drop below zero.
        """
        check_quantity(delta, "Movement quantity")
        new_quantity = self.quantity + delta
        if new_quantity < 0:
            raise ValidationError(
                f"Insufficient stock for product #{self.product_id} at location "
                f"#{self.location_id} (have {self.quantity}, change {delta})"
            )
        self.quantity = new_quantity
        self.updated_at = now

    @property
    def pair(self) -> tuple[int, int]:
        return (self.product_id, self.location_id)


@dataclass(frozen=True)
class StockMovement:
    """An immutable ledger entry: a signed quantity change with a timestamp."""

    id: int
    product_id: int
    location_id: int
    quantity: int
    timestamp: datetime
    note: str | None = None

    @property
    def is_removal(self) -> bool:
        return self.quantity < 0
