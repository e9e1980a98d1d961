"""SQLAlchemy-backed implementations of the repositories.

Rows never leave this module: every read is mapped to a domain object
so callers keep working after the session is closed. Writes are flushed
immediately so constraint violations surface inside the caller's
transaction as domain errors.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import scoped_session

from invtrack.domain.exceptions import (
    DuplicateKeyError,
    ReferentialIntegrityError,
    ValidationError,
)
from invtrack.domain.model.catalog import Category, Location, Product
from invtrack.domain.model.inventory import InventoryRecord, StockMovement
from invtrack.domain.model.value_objects import Money
from invtrack.domain.repository.catalog_repository import (
    CategoryRepository,
    LocationRepository,
    ProductRepository,
)
from invtrack.domain.repository.inventory_repository import InventoryRepository
from invtrack.domain.repository.movement_ledger import MovementLedger
from invtrack.domain.repository.unit_of_work import Clock
from invtrack.infrastructure.persistence.sql_models import (
    CategoryRow,
    InventoryRow,
    LocationRow,
    MovementRow,
    ProductRow,
)


# --- Conversion helpers -------------------------------------------------------


def to_db_time(value: datetime) -> datetime:
    """Normalise to naive UTC for storage."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def from_db_time(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def _flush(session: scoped_session, what: str) -> None:
    try:
        session.flush()
    except IntegrityError as exc:
        if "unique" in str(exc.orig).lower():
            raise DuplicateKeyError(f"{what} already exists") from exc
        if "check constraint" in str(exc.orig).lower():
            raise ValidationError(f"{what} has an out-of-range value") from exc
        raise ReferentialIntegrityError(f"{what} violates a reference constraint") from exc


def _category(row: CategoryRow) -> Category:
    return Category(id=row.id, name=row.name, description=row.description)


def _location(row: LocationRow) -> Location:
    return Location(id=row.id, name=row.name, description=row.description)


def _product(row: ProductRow) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        sku=row.sku,
        category_id=row.category_id,
        unit_cost=Money(Decimal(str(row.unit_cost))),
        min_stock_level=row.min_stock_level,
        description=row.description,
        created_at=from_db_time(row.created_at),
        updated_at=from_db_time(row.updated_at),
    )


def _record(row: InventoryRow) -> InventoryRecord:
    return InventoryRecord(
        id=row.id,
        product_id=row.product_id,
        location_id=row.location_id,
        quantity=row.quantity,
        updated_at=from_db_time(row.updated_at),
    )


def _movement(row: MovementRow) -> StockMovement:
    return StockMovement(
        id=row.id,
        product_id=row.product_id,
        location_id=row.location_id,
        quantity=row.quantity,
        timestamp=from_db_time(row.timestamp),
        note=row.note,
    )


# --- Catalog ------------------------------------------------------------------


class SqlCategoryRepository(CategoryRepository):

    def __init__(self, session: scoped_session) -> None:
        self._session = session

    def get_by_id(self, category_id: int) -> Category | None:
        row = self._session.get(CategoryRow, category_id)
        return _category(row) if row else None

    def get_by_name(self, name: str) -> Category | None:
        row = self._session.scalars(select(CategoryRow).filter_by(name=name)).first()
        return _category(row) if row else None

    def list_all(self) -> list[Category]:
        rows = self._session.scalars(select(CategoryRow).order_by(CategoryRow.id))
        return [_category(row) for row in rows]

    def add(self, category: Category) -> Category:
        row = CategoryRow(name=category.name, description=category.description)
        self._session.add(row)
        _flush(self._session, f"Category '{category.name}'")
        return _category(row)

    def update(self, category: Category) -> None:
        row = self._session.get(CategoryRow, category.id)
        row.name = category.name
        row.description = category.description
        _flush(self._session, f"Category '{category.name}'")

    def delete(self, category_id: int) -> None:
        row = self._session.get(CategoryRow, category_id)
        if row is not None:
            self._session.delete(row)
            _flush(self._session, f"Category #{category_id}")


class SqlLocationRepository(LocationRepository):

    def __init__(self, session: scoped_session) -> None:
        self._session = session

    def get_by_id(self, location_id: int) -> Location | None:
        row = self._session.get(LocationRow, location_id)
        return _location(row) if row else None

    def get_by_name(self, name: str) -> Location | None:
        row = self._session.scalars(select(LocationRow).filter_by(name=name)).first()
        return _location(row) if row else None

    def list_all(self) -> list[Location]:
        rows = self._session.scalars(select(LocationRow).order_by(LocationRow.id))
        return [_location(row) for row in rows]

    def add(self, location: Location) -> Location:
        row = LocationRow(name=location.name, description=location.description)
        self._session.add(row)
        _flush(self._session, f"Location '{location.name}'")
        return _location(row)

    def update(self, location: Location) -> None:
        row = self._session.get(LocationRow, location.id)
        row.name = location.name
        row.description = location.description
        _flush(self._session, f"Location '{location.name}'")

    def delete(self, location_id: int) -> None:
        row = self._session.get(LocationRow, location_id)
        if row is not None:
            self._session.delete(row)
            _flush(self._session, f"Location #{location_id}")


class SqlProductRepository(ProductRepository):

    def __init__(self, session: scoped_session) -> None:
        self._session = session

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return _product(row) if row else None

    def get_by_sku(self, sku: str) -> Product | None:
        row = self._session.scalars(select(ProductRow).filter_by(sku=sku)).first()
        return _product(row) if row else None

    def list_all(self) -> list[Product]:
        rows = self._session.scalars(select(ProductRow).order_by(ProductRow.id))
        return [_product(row) for row in rows]

    def list_by_category(self, category_id: int) -> list[Product]:
        rows = self._session.scalars(
            select(ProductRow).filter_by(category_id=category_id).order_by(ProductRow.id)
        )
        return [_product(row) for row in rows]

    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(ProductRow))

    def add(self, product: Product) -> Product:
        row = ProductRow()
        self._copy(product, row)
        self._session.add(row)
        _flush(self._session, f"Product with SKU '{product.sku}'")
        return _product(row)

    def update(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        self._copy(product, row)
        _flush(self._session, f"Product with SKU '{product.sku}'")

    def delete(self, product_id: int) -> None:
        row = self._session.get(ProductRow, product_id)
        if row is not None:
            self._session.delete(row)
            _flush(self._session, f"Product #{product_id}")

    @staticmethod
    def _copy(product: Product, row: ProductRow) -> None:
        row.name = product.name
        row.sku = product.sku
        row.description = product.description
        row.category_id = product.category_id
        row.unit_cost = product.unit_cost.amount
        row.min_stock_level = product.min_stock_level
        row.created_at = to_db_time(product.created_at)
        row.updated_at = to_db_time(product.updated_at)


# --- Inventory aggregate ------------------------------------------------------


class SqlInventoryRepository(InventoryRepository):

    def __init__(self, session: scoped_session, clock: Clock) -> None:
        self._session = session
        self._clock = clock

    def get(self, product_id: int, location_id: int) -> InventoryRecord | None:
        row = self._row(product_id, location_id)
        return _record(row) if row else None

    def list_all(self) -> list[InventoryRecord]:
        rows = self._session.scalars(select(InventoryRow).order_by(InventoryRow.id))
        return [_record(row) for row in rows]

    def list_for_product(self, product_id: int) -> list[InventoryRecord]:
        rows = self._session.scalars(
            select(InventoryRow).filter_by(product_id=product_id).order_by(InventoryRow.id)
        )
        return [_record(row) for row in rows]

    def list_for_location(self, location_id: int) -> list[InventoryRecord]:
        rows = self._session.scalars(
            select(InventoryRow).filter_by(location_id=location_id).order_by(InventoryRow.id)
        )
        return [_record(row) for row in rows]

    def upsert_delta(self, product_id: int, location_id: int, delta: int) -> InventoryRecord:
        now = self._clock()
        row = self._row(product_id, location_id)
        if row is None:
            record = InventoryRecord.opening(product_id, location_id, delta, now)
            row = InventoryRow(product_id=product_id, location_id=location_id)
            self._session.add(row)
        else:
            record = _record(row)
            record.apply(delta, now)
        row.quantity = record.quantity
        row.updated_at = to_db_time(record.updated_at)
        _flush(self._session, f"Inventory for product #{product_id} at location #{location_id}")
        return _record(row)

    def delete(self, product_id: int, location_id: int) -> None:
        row = self._row(product_id, location_id)
        if row is not None:
            self._session.delete(row)
            _flush(self._session, f"Inventory for product #{product_id}")

    def _row(self, product_id: int, location_id: int) -> InventoryRow | None:
        return self._session.scalars(
            select(InventoryRow).filter_by(product_id=product_id, location_id=location_id)
        ).first()


# --- Ledger -------------------------------------------------------------------


class SqlMovementLedger(MovementLedger):

    def __init__(self, session: scoped_session, clock: Clock) -> None:
        self._session = session
        self._clock = clock

    def append(
        self, product_id: int, location_id: int, delta: int, note: str | None = None
    ) -> StockMovement:
        row = MovementRow(
            product_id=product_id,
            location_id=location_id,
            quantity=delta,
            note=note,
            timestamp=to_db_time(self._clock()),
        )
        self._session.add(row)
        _flush(self._session, "Stock movement")
        return _movement(row)

    def list_all(self) -> list[StockMovement]:
        return [_movement(row) for row in self._session.scalars(self._newest_first())]

    def list_recent(self, limit: int) -> list[StockMovement]:
        rows = self._session.scalars(self._newest_first().limit(max(limit, 0)))
        return [_movement(row) for row in rows]

    def list_for_product(self, product_id: int) -> list[StockMovement]:
        rows = self._session.scalars(self._newest_first().filter_by(product_id=product_id))
        return [_movement(row) for row in rows]

    def list_for_pair(self, product_id: int, location_id: int) -> list[StockMovement]:
        rows = self._session.scalars(
            self._newest_first().filter_by(product_id=product_id, location_id=location_id)
        )
        return [_movement(row) for row in rows]

    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(MovementRow))

    def count_since(self, since: datetime) -> int:
        return self._session.scalar(
            select(func.count())
            .select_from(MovementRow)
            .where(MovementRow.timestamp >= to_db_time(since))
        )

    def exists_for_product(self, product_id: int) -> bool:
        return self._exists(MovementRow.product_id == product_id)

    def exists_for_location(self, location_id: int) -> bool:
        return self._exists(MovementRow.location_id == location_id)

    def _exists(self, condition) -> bool:
        return self._session.scalars(select(MovementRow.id).where(condition).limit(1)).first() is not None

    @staticmethod
    def _newest_first():
        return select(MovementRow).order_by(MovementRow.timestamp.desc(), MovementRow.id.asc())
