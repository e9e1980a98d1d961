"""Abstract repository for the inventory aggregate rows.

``upsert_delta`` is the single mutation primitive; ``set_absolute`` is
built on top of it so every quantity change goes through the same path.
The repository never writes to the movement ledger. Pairing each change
with a ledger entry is the reconciliation service's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from invtrack.domain.model.inventory import InventoryRecord, check_quantity


class InventoryRepository(ABC):

    @abstractmethod
    def get(self, product_id: int, location_id: int) -> InventoryRecord | None:
        """Return the record for a (product, location) pair, or None."""

    @abstractmethod
    def list_all(self) -> list[InventoryRecord]:
        """Return every record ordered by ID."""

    @abstractmethod
    def list_for_product(self, product_id: int) -> list[InventoryRecord]:
        """Return the records of one product across all locations."""

    @abstractmethod
    def list_for_location(self, location_id: int) -> list[InventoryRecord]:
        """Return the records held at one location."""

    @abstractmethod
    def upsert_delta(self, product_id: int, location_id: int, delta: int) -> InventoryRecord:
        """Add ``delta`` to the pair's quantity, creating the record if absent.

        Raises ValidationError if the resulting quantity would be negative.
        """

    @abstractmethod
    def delete(self, product_id: int, location_id: int) -> None:
        """Remove the record for a pair."""

    def set_absolute(
        self, product_id: int, location_id: int, new_quantity: int
    ) -> tuple[InventoryRecord, int]:
        """Move the pair to ``new_quantity`` and return the applied delta."""
        check_quantity(new_quantity)
        current = self.get(product_id, location_id)
        current_quantity = current.quantity if current is not None else 0
        delta = new_quantity - current_quantity
        return self.upsert_delta(product_id, location_id, delta), delta
