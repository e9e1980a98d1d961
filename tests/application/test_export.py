"""Integration tests for the Export use case."""

import pytest

from invtrack.application.export_data import EXPORT_COLUMNS, ExportHandler
from invtrack.application.import_data import BulkImportHandler
from invtrack.domain.exceptions import ValidationError
from tests.fakes import make_services, seed_catalog


def _setup():
    svc = make_services()
    seed = seed_catalog(svc.catalog)
    svc.stock.create_initial_inventory(seed.widget.id, seed.warehouse.id, 12)
    svc.clock.advance(minutes=1)
    svc.stock.record_movement(seed.widget.id, seed.warehouse.id, -2, note="sale")
    return ExportHandler(catalog=svc.catalog, stock=svc.stock), svc


class TestExport:

    def test_products(self):
        handler, _ = _setup()
        rows = handler.handle("products")
        assert rows[0] == {
            "name": "Widget",
            "sku": "W-1",
            "description": "",
            "categoryName": "Tools",
            "unitCost": "15.00",
            "minStockLevel": 10,
            "stockQuantity": 10,
        }
        assert rows[1]["stockQuantity"] == 0

    def test_inventory(self):
        handler, _ = _setup()
        (row,) = handler.handle("inventory")
        assert row["locationName"] == "Warehouse"
        assert row["quantity"] == 10

    def test_movements_newest_first(self):
        handler, _ = _setup()
        rows = handler.handle("stock-movements")
        assert [r["quantity"] for r in rows] == [-2, 12]
        assert rows[0]["note"] == "sale"
        assert {r["sku"] for r in rows} == {"W-1"}

    @pytest.mark.parametrize("kind", sorted(EXPORT_COLUMNS))
    def test_keys_match_columns(self, kind):
        handler, _ = _setup()
        for row in handler.handle(kind):
            assert tuple(row) == EXPORT_COLUMNS[kind]

    def test_unsupported_kind(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Unsupported export type"):
            handler.handle("orders")

    def test_products_export_reimports_into_empty_store(self):
        handler, source = _setup()
        rows = handler.handle("products")

        target = make_services()
        result = BulkImportHandler(target.uow, target.catalog, target.stock).handle("products", rows)

        assert result.error_count == 0
        imported = target.catalog.find_product_by_sku("G-1")
        assert imported.unit_cost == source.catalog.find_product_by_sku("G-1").unit_cost
        assert imported.min_stock_level == 5
