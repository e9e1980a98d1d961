"""SQLAlchemy unit of work.

One ``scoped_session`` shared by all repositories. The outermost
``transaction()`` takes a process-wide lock, commits on success, rolls
back on any exception, and closes the session afterwards. Nested calls
join the open transaction.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from invtrack.domain.repository.unit_of_work import Clock, UnitOfWork, utc_now
from invtrack.infrastructure.persistence.sql_models import Base
from invtrack.infrastructure.persistence.sql_repositories import (
    SqlCategoryRepository,
    SqlInventoryRepository,
    SqlLocationRepository,
    SqlMovementLedger,
    SqlProductRepository,
)

logger = logging.getLogger("invtrack.persistence")


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite gets foreign keys and a shared in-memory pool."""
    options: dict = {"echo": echo}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
    engine = create_engine(database_url, **options)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine, clock: Clock = utc_now) -> None:
        self.clock = clock
        self._engine = engine
        self._session = scoped_session(sessionmaker(bind=engine, expire_on_commit=False))
        self._lock = threading.RLock()
        self._depth = 0

        self.categories = SqlCategoryRepository(self._session)
        self.locations = SqlLocationRepository(self._session)
        self.products = SqlProductRepository(self._session)
        self.inventory = SqlInventoryRepository(self._session, self._now)
        self.movements = SqlMovementLedger(self._session, self._now)

    def _now(self):
        return self.clock()

    def create_schema(self) -> None:
        Base.metadata.create_all(self._engine)

    def drop_schema(self) -> None:
        self._session.remove()
        Base.metadata.drop_all(self._engine)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            outermost = self._depth == 0
            self._depth += 1
            try:
                yield
                if outermost:
                    self._session.commit()
            except BaseException:
                if outermost:
                    self._session.rollback()
                    logger.debug("Rolled back database transaction")
                raise
            finally:
                self._depth -= 1
                if outermost:
                    self._session.remove()
