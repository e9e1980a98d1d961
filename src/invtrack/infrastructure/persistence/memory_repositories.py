"""In-memory implementation of the repositories and unit of work.

Everything lives in dicts on a shared ``_Tables`` object. No file I/O.
Entities handed out are copies, so a caller has to go through
``update()`` to change stored state, as with the SQL backend.

A transaction snapshots the tables when it opens and restores the
snapshot if the block raises.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime

from invtrack.domain.exceptions import DuplicateKeyError
from invtrack.domain.model.catalog import Category, Location, Product
from invtrack.domain.model.inventory import InventoryRecord, StockMovement
from invtrack.domain.repository.catalog_repository import (
    CategoryRepository,
    LocationRepository,
    ProductRepository,
)
from invtrack.domain.repository.inventory_repository import InventoryRepository
from invtrack.domain.repository.movement_ledger import MovementLedger
from invtrack.domain.repository.unit_of_work import Clock, UnitOfWork, utc_now

logger = logging.getLogger("invtrack.persistence")


@dataclass
class _Tables:
    categories: dict[int, Category] = field(default_factory=dict)
    locations: dict[int, Location] = field(default_factory=dict)
    products: dict[int, Product] = field(default_factory=dict)
    inventory: dict[tuple[int, int], InventoryRecord] = field(default_factory=dict)
    movements: list[StockMovement] = field(default_factory=list)
    sequences: dict[str, int] = field(default_factory=dict)

    def next_id(self, table: str) -> int:
        self.sequences[table] = self.sequences.get(table, 0) + 1
        return self.sequences[table]

    def restore(self, snapshot: _Tables) -> None:
        self.__dict__.update(snapshot.__dict__)


def _newest_first(movements: list[StockMovement]) -> list[StockMovement]:
    by_id = sorted(movements, key=lambda m: m.id)
    return sorted(by_id, key=lambda m: m.timestamp, reverse=True)


class MemoryCategoryRepository(CategoryRepository):

    def __init__(self, tables: _Tables) -> None:
        self._t = tables

    def get_by_id(self, category_id: int) -> Category | None:
        category = self._t.categories.get(category_id)
        return replace(category) if category else None

    def get_by_name(self, name: str) -> Category | None:
        for category in self._t.categories.values():
            if category.name == name:
                return replace(category)
        return None

    def list_all(self) -> list[Category]:
        return [replace(c) for _, c in sorted(self._t.categories.items())]

    def add(self, category: Category) -> Category:
        if self.get_by_name(category.name) is not None:
            raise DuplicateKeyError(f"Category '{category.name}' already exists")
        stored = replace(category, id=self._t.next_id("categories"))
        self._t.categories[stored.id] = stored
        return replace(stored)

    def update(self, category: Category) -> None:
        clash = self.get_by_name(category.name)
        if clash is not None and clash.id != category.id:
            raise DuplicateKeyError(f"Category '{category.name}' already exists")
        self._t.categories[category.id] = replace(category)

    def delete(self, category_id: int) -> None:
        self._t.categories.pop(category_id, None)


class MemoryLocationRepository(LocationRepository):

    def __init__(self, tables: _Tables) -> None:
        self._t = tables

    def get_by_id(self, location_id: int) -> Location | None:
        location = self._t.locations.get(location_id)
        return replace(location) if location else None

    def get_by_name(self, name: str) -> Location | None:
        for location in self._t.locations.values():
            if location.name == name:
                return replace(location)
        return None

    def list_all(self) -> list[Location]:
        return [replace(loc) for _, loc in sorted(self._t.locations.items())]

    def add(self, location: Location) -> Location:
        if self.get_by_name(location.name) is not None:
            raise DuplicateKeyError(f"Location '{location.name}' already exists")
        stored = replace(location, id=self._t.next_id("locations"))
        self._t.locations[stored.id] = stored
        return replace(stored)

    def update(self, location: Location) -> None:
        clash = self.get_by_name(location.name)
        if clash is not None and clash.id != location.id:
            raise DuplicateKeyError(f"Location '{location.name}' already exists")
        self._t.locations[location.id] = replace(location)

    def delete(self, location_id: int) -> None:
        self._t.locations.pop(location_id, None)


class MemoryProductRepository(ProductRepository):

    def __init__(self, tables: _Tables) -> None:
        self._t = tables

    def get_by_id(self, product_id: int) -> Product | None:
        product = self._t.products.get(product_id)
        return replace(product) if product else None

    def get_by_sku(self, sku: str) -> Product | None:
        for product in self._t.products.values():
            if product.sku == sku:
                return replace(product)
        return None

    def list_all(self) -> list[Product]:
        return [replace(p) for _, p in sorted(self._t.products.items())]

    def list_by_category(self, category_id: int) -> list[Product]:
        return [p for p in self.list_all() if p.category_id == category_id]

    def count(self) -> int:
        return len(self._t.products)

    def add(self, product: Product) -> Product:
        if self.get_by_sku(product.sku) is not None:
            raise DuplicateKeyError(f"Product with SKU '{product.sku}' already exists")
        stored = replace(product, id=self._t.next_id("products"))
        self._t.products[stored.id] = stored
        return replace(stored)

    def update(self, product: Product) -> None:
        clash = self.get_by_sku(product.sku)
        if clash is not None and clash.id != product.id:
            raise DuplicateKeyError(f"Product with SKU '{product.sku}' already exists")
        self._t.products[product.id] = replace(product)

    def delete(self, product_id: int) -> None:
        self._t.products.pop(product_id, None)


class MemoryInventoryRepository(InventoryRepository):

    def __init__(self, tables: _Tables, clock: Clock) -> None:
        self._t = tables
        self._clock = clock

    def get(self, product_id: int, location_id: int) -> InventoryRecord | None:
        record = self._t.inventory.get((product_id, location_id))
        return replace(record) if record else None

    def list_all(self) -> list[InventoryRecord]:
        return sorted((replace(r) for r in self._t.inventory.values()), key=lambda r: r.id)

    def list_for_product(self, product_id: int) -> list[InventoryRecord]:
        return [r for r in self.list_all() if r.product_id == product_id]

    def list_for_location(self, location_id: int) -> list[InventoryRecord]:
        return [r for r in self.list_all() if r.location_id == location_id]

    def upsert_delta(self, product_id: int, location_id: int, delta: int) -> InventoryRecord:
        now = self._clock()
        record = self._t.inventory.get((product_id, location_id))
        if record is None:
            record = InventoryRecord.opening(product_id, location_id, delta, now)
            record.id = self._t.next_id("inventory")
            self._t.inventory[record.pair] = record
        else:
            record.apply(delta, now)
        return replace(record)

    def delete(self, product_id: int, location_id: int) -> None:
        self._t.inventory.pop((product_id, location_id), None)


class MemoryMovementLedger(MovementLedger):

    def __init__(self, tables: _Tables, clock: Clock) -> None:
        self._t = tables
        self._clock = clock

    def append(
        self, product_id: int, location_id: int, delta: int, note: str | None = None
    ) -> StockMovement:
        movement = StockMovement(
            id=self._t.next_id("stock_movements"),
            product_id=product_id,
            location_id=location_id,
            quantity=delta,
            timestamp=self._clock(),
            note=note,
        )
        self._t.movements.append(movement)
        return movement

    def list_all(self) -> list[StockMovement]:
        return _newest_first(self._t.movements)

    def list_recent(self, limit: int) -> list[StockMovement]:
        return self.list_all()[:max(limit, 0)]

    def list_for_product(self, product_id: int) -> list[StockMovement]:
        return [m for m in self.list_all() if m.product_id == product_id]

    def list_for_pair(self, product_id: int, location_id: int) -> list[StockMovement]:
        return [
            m for m in self.list_all()
            if m.product_id == product_id and m.location_id == location_id
        ]

    def count(self) -> int:
        return len(self._t.movements)

    def count_since(self, since: datetime) -> int:
        return sum(1 for m in self._t.movements if m.timestamp >= since)

    def exists_for_product(self, product_id: int) -> bool:
        return any(m.product_id == product_id for m in self._t.movements)

    def exists_for_location(self, location_id: int) -> bool:
        return any(m.location_id == location_id for m in self._t.movements)


class MemoryUnitOfWork(UnitOfWork):
    """Process-local store, used by the tests and by ``INVTRACK_STORAGE=memory``."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self.clock = clock
        self._tables = _Tables()
        self._lock = threading.RLock()
        self._depth = 0

        self.categories = MemoryCategoryRepository(self._tables)
        self.locations = MemoryLocationRepository(self._tables)
        self.products = MemoryProductRepository(self._tables)
        self.inventory = MemoryInventoryRepository(self._tables, self._now)
        self.movements = MemoryMovementLedger(self._tables, self._now)

    def _now(self) -> datetime:
        return self.clock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            outermost = self._depth == 0
            snapshot = copy.deepcopy(self._tables) if outermost else None
            self._depth += 1
            try:
                yield
            except BaseException:
                if outermost:
                    self._tables.restore(snapshot)
                    logger.debug("Rolled back in-memory transaction")
                raise
            finally:
                self._depth -= 1
