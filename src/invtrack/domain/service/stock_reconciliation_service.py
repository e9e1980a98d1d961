"""Domain service: Stock Reconciliation.

The only component that mutates both the inventory aggregate and the
movement ledger. Every write runs inside one unit-of-work transaction so
the aggregate row and its ledger entry commit together, which keeps the
record quantity equal to the sum of the pair's movement deltas.

Reads (totals, low-stock list, dashboard) are served from the aggregate
rows. The ledger is write-path history and is never replayed to answer
a stock question.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from invtrack.domain.exceptions import (
    DuplicateKeyError,
    EntityNotFoundError,
    InvalidReferenceError,
    ValidationError,
)
from invtrack.domain.model.inventory import (
    InventoryRecord,
    StockMovement,
    StockStatus,
    check_quantity,
    compute_stock_status,
)
from invtrack.domain.model.value_objects import Money
from invtrack.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger("invtrack.reconciliation")

INITIAL_INVENTORY_NOTE = "Initial inventory"
ADJUSTMENT_NOTE = "Inventory adjustment"
REMOVAL_NOTE = "Inventory removed"


@dataclass(frozen=True)
class InventoryView:
    """An aggregate row joined with the catalog names used for display."""

    record: InventoryRecord
    product_name: str
    product_sku: str
    category_name: str
    location_name: str
    min_stock_level: int
    unit_cost: Money

    @property
    def quantity(self) -> int:
        return self.record.quantity

    @property
    def status(self) -> StockStatus:
        return compute_stock_status(self.record.quantity, self.min_stock_level)

    @property
    def value(self) -> Money:
        return self.unit_cost * self.record.quantity


@dataclass(frozen=True)
class MovementView:
    movement: StockMovement
    product_name: str
    location_name: str


@dataclass(frozen=True)
class DashboardStats:
    total_products: int
    low_stock_items: int
    inventory_value: Money
    recent_movement_count: int


class StockReconciliationService:

    def __init__(self, uow: UnitOfWork, recent_window: timedelta | None = None) -> None:
        """
        Args:
            uow: Unit of work giving access to every repository.
            recent_window: Trailing window for the dashboard movement count.
                ``None`` counts every movement ever recorded.
        """
        self._uow = uow
        self._recent_window = recent_window

    # --- Writes ---------------------------------------------------------------

    def record_movement(
        self, product_id: int, location_id: int, delta: int, note: str | None = None
    ) -> StockMovement:
        """Add (positive) or remove (negative) stock at a location."""
        check_quantity(delta, "Movement quantity")
        if delta == 0:
            raise ValidationError("Movement quantity must not be zero")
        with self._uow.transaction():
            self._require_pair(product_id, location_id)
            _, movement = self._apply(product_id, location_id, delta, note)
        return movement

    def set_absolute_quantity(
        self, product_id: int, location_id: int, new_quantity: int, note: str | None = None
    ) -> InventoryRecord:
        """Move a pair to a known quantity, logging the difference.

        A zero difference still touches the record (creating it at zero if
        absent) but writes nothing to the ledger.
        """
        check_quantity(new_quantity)
        if new_quantity < 0:
            raise ValidationError("Quantity cannot be negative")
        with self._uow.transaction():
            self._require_pair(product_id, location_id)
            existed = self._uow.inventory.get(product_id, location_id) is not None
            record, delta = self._uow.inventory.set_absolute(product_id, location_id, new_quantity)
            if delta != 0:
                if note is None:
                    note = ADJUSTMENT_NOTE if existed else INITIAL_INVENTORY_NOTE
                self._append(product_id, location_id, delta, note)
        return record

    def create_initial_inventory(
        self, product_id: int, location_id: int, quantity: int
    ) -> InventoryRecord:
        """Open the aggregate row for a pair that has never held stock here."""
        check_quantity(quantity)
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative")
        with self._uow.transaction():
            self._require_pair(product_id, location_id)
            if self._uow.inventory.get(product_id, location_id) is not None:
                raise DuplicateKeyError(
                    f"Inventory already exists for product #{product_id} "
                    f"at location #{location_id}"
                )
            record = self._uow.inventory.upsert_delta(product_id, location_id, quantity)
            if quantity != 0:
                self._append(product_id, location_id, quantity, INITIAL_INVENTORY_NOTE)
        return record

    def remove_inventory(self, product_id: int, location_id: int) -> None:
        """Drop a pair's aggregate row, writing off its stock in the ledger."""
        with self._uow.transaction():
            record = self._uow.inventory.get(product_id, location_id)
            if record is None:
                raise EntityNotFoundError(
                    f"No inventory for product #{product_id} at location #{location_id}"
                )
            if record.quantity != 0:
                self._append(product_id, location_id, -record.quantity, REMOVAL_NOTE)
            self._uow.inventory.delete(product_id, location_id)
        logger.info(
            "Removed inventory for product #%s at location #%s (wrote off %s)",
            product_id, location_id, record.quantity,
        )

    # --- Reads ----------------------------------------------------------------

    def get_inventory(self, product_id: int, location_id: int) -> InventoryRecord | None:
        with self._uow.transaction():
            return self._uow.inventory.get(product_id, location_id)

    def get_product_total_stock(self, product_id: int) -> int:
        with self._uow.transaction():
            records = self._uow.inventory.list_for_product(product_id)
        return sum(record.quantity for record in records)

    def list_inventory(self) -> list[InventoryView]:
        with self._uow.transaction():
            return self._inventory_views()

    def get_low_stock_items(self) -> list[InventoryView]:
        """Rows that are low or out of stock, most critical first."""
        with self._uow.transaction():
            views = self._inventory_views()
        critical = [view for view in views if view.status != StockStatus.IN_STOCK]
        critical.sort(
            key=lambda view: (view.quantity / max(view.min_stock_level, 1), view.record.id)
        )
        return critical

    def get_dashboard_stats(self) -> DashboardStats:
        with self._uow.transaction():
            total_products = self._uow.products.count()
            views = self._inventory_views()
            if self._recent_window is None:
                recent = self._uow.movements.count()
            else:
                recent = self._uow.movements.count_since(self._uow.clock() - self._recent_window)

        value = Money.zero()
        low = 0
        for view in views:
            value = value + view.value
            if view.status != StockStatus.IN_STOCK:
                low += 1
        return DashboardStats(
            total_products=total_products,
            low_stock_items=low,
            inventory_value=value,
            recent_movement_count=recent,
        )

    def list_movements(
        self, limit: int | None = None, product_id: int | None = None
    ) -> list[MovementView]:
        """Ledger history joined with product and location names, newest first."""
        with self._uow.transaction():
            if product_id is not None:
                movements = self._uow.movements.list_for_product(product_id)
                if limit is not None:
                    movements = movements[:limit]
            elif limit is not None:
                movements = self._uow.movements.list_recent(limit)
            else:
                movements = self._uow.movements.list_all()
            products = {p.id: p for p in self._uow.products.list_all()}
            locations = {loc.id: loc for loc in self._uow.locations.list_all()}

        views = []
        for movement in movements:
            product = products.get(movement.product_id)
            location = locations.get(movement.location_id)
            views.append(
                MovementView(
                    movement=movement,
                    product_name=product.name if product else "",
                    location_name=location.name if location else "",
                )
            )
        return views

    # --- Internal helpers -----------------------------------------------------

    def _require_pair(self, product_id: int, location_id: int) -> None:
        if self._uow.products.get_by_id(product_id) is None:
            raise InvalidReferenceError(f"Product #{product_id} does not exist")
        if self._uow.locations.get_by_id(location_id) is None:
            raise InvalidReferenceError(f"Location #{location_id} does not exist")

    def _apply(
        self, product_id: int, location_id: int, delta: int, note: str | None
    ) -> tuple[InventoryRecord, StockMovement]:
        # Aggregate first: a negative result is rejected before the ledger is touched.
        record = self._uow.inventory.upsert_delta(product_id, location_id, delta)
        movement = self._append(product_id, location_id, delta, note)
        return record, movement

    def _append(
        self, product_id: int, location_id: int, delta: int, note: str | None
    ) -> StockMovement:
        movement = self._uow.movements.append(product_id, location_id, delta, note)
        logger.info(
            "Movement #%s: product #%s at location #%s %+d (%s)",
            movement.id, product_id, location_id, delta, note or "no note",
        )
        return movement

    def _inventory_views(self) -> list[InventoryView]:
        products = {p.id: p for p in self._uow.products.list_all()}
        categories = {c.id: c for c in self._uow.categories.list_all()}
        locations = {loc.id: loc for loc in self._uow.locations.list_all()}

        views = []
        for record in self._uow.inventory.list_all():
            product = products.get(record.product_id)
            if product is None:
                continue
            category = categories.get(product.category_id)
            location = locations.get(record.location_id)
            views.append(
                InventoryView(
                    record=record,
                    product_name=product.name,
                    product_sku=product.sku,
                    category_name=category.name if category else "",
                    location_name=location.name if location else "",
                    min_stock_level=product.min_stock_level,
                    unit_cost=product.unit_cost,
                )
            )
        return views
