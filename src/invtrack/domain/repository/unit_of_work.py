"""Abstract unit of work: one transactional boundary over every repository.

A logical stock change touches the inventory aggregate and the ledger.
Both writes happen inside ``transaction()`` so they commit together or
not at all. Transactions are re-entrant: a nested ``transaction()`` joins
the outermost one, and only the outermost commits or rolls back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractContextManager
from datetime import datetime, timezone

from invtrack.domain.repository.catalog_repository import (
    CategoryRepository,
    LocationRepository,
    ProductRepository,
)
from invtrack.domain.repository.inventory_repository import InventoryRepository
from invtrack.domain.repository.movement_ledger import MovementLedger

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UnitOfWork(ABC):

    categories: CategoryRepository
    locations: LocationRepository
    products: ProductRepository
    inventory: InventoryRepository
    movements: MovementLedger
    clock: Clock

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Open (or join) an atomic, serialized unit of work."""
