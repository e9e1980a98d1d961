"""Abstract append-only ledger of stock movements.

There is no update or delete. Corrections are made by appending a
compensating movement. Listings are newest first; movements sharing a
timestamp keep insertion order (ascending ID).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from invtrack.domain.model.inventory import StockMovement


class MovementLedger(ABC):

    @abstractmethod
    def append(
        self, product_id: int, location_id: int, delta: int, note: str | None = None
    ) -> StockMovement:
        """Record a movement stamped with the current time."""

    @abstractmethod
    def list_all(self) -> list[StockMovement]:
        """Return every movement, newest first."""

    @abstractmethod
    def list_recent(self, limit: int) -> list[StockMovement]:
        """Return at most ``limit`` movements, newest first."""

    @abstractmethod
    def list_for_product(self, product_id: int) -> list[StockMovement]:
        """Return the movements of one product, newest first."""

    @abstractmethod
    def list_for_pair(self, product_id: int, location_id: int) -> list[StockMovement]:
        """Return the movements of one (product, location) pair, newest first."""

    @abstractmethod
    def count(self) -> int:
        """Return the total number of movements."""

    @abstractmethod
    def count_since(self, since: datetime) -> int:
        """Return the number of movements stamped at or after ``since``."""

    @abstractmethod
    def exists_for_product(self, product_id: int) -> bool:
        """True if any movement references the product."""

    @abstractmethod
    def exists_for_location(self, location_id: int) -> bool:
        """True if any movement references the location."""
