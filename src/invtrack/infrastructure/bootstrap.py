"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from invtrack.domain.repository.unit_of_work import UnitOfWork
from invtrack.domain.service.catalog_service import CatalogService
from invtrack.domain.service.stock_reconciliation_service import StockReconciliationService
from invtrack.infrastructure.config import Settings
from invtrack.infrastructure.persistence.memory_repositories import MemoryUnitOfWork
from invtrack.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork, build_engine


def build_unit_of_work(settings: Settings) -> UnitOfWork:
    if settings.storage == "memory":
        return MemoryUnitOfWork()

    if settings.database_url.startswith("sqlite:///"):
        db_file = settings.database_url[len("sqlite:///"):]
        if db_file and db_file != ":memory:":
            Path(db_file).parent.mkdir(parents=True, exist_ok=True)

    uow = SqlUnitOfWork(build_engine(settings.database_url))
    uow.create_schema()
    return uow


class Container:
    """Holds the unit of work and the services built on it for one process."""

    def __init__(self, settings: Settings, uow: UnitOfWork | None = None) -> None:
        self.settings = settings
        self.uow = uow if uow is not None else build_unit_of_work(settings)
        self.catalog = CatalogService(self.uow)
        self.stock = StockReconciliationService(self.uow, recent_window=settings.recent_window)
