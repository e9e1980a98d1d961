"""Integration tests for the inventory, product and query use cases."""

import pytest

from invtrack.application.add_product import AddProductHandler
from invtrack.application.adjust_stock import AdjustStockHandler
from invtrack.application.create_inventory import CreateInventoryHandler
from invtrack.application.remove_inventory import RemoveInventoryHandler
from invtrack.application.set_inventory import SetInventoryHandler
from invtrack.application.show_dashboard import ShowDashboardHandler
from invtrack.application.show_inventory import ShowInventoryHandler, ShowLowStockHandler
from invtrack.application.show_movements import ShowMovementsHandler
from invtrack.application.show_product import ListProductsHandler, ShowProductHandler
from invtrack.application.update_product import UpdateProductHandler
from invtrack.domain.exceptions import (
    DuplicateKeyError,
    EntityNotFoundError,
    ValidationError,
)
from invtrack.domain.model.value_objects import Money
from tests.fakes import make_services, seed_catalog


def _setup():
    """Widget: 2 in Warehouse, 30 in Store. Gadget: 50 in Warehouse."""
    svc = make_services()
    seed = seed_catalog(svc.catalog)
    create = CreateInventoryHandler(svc.catalog, svc.stock)
    create.handle("W-1", "Warehouse", 2)
    create.handle("W-1", "Store", 30)
    create.handle("G-1", "Warehouse", 50)
    return svc, seed


class TestProductHandlers:

    def test_add_product_by_category_name(self):
        svc, _ = _setup()
        product = AddProductHandler(svc.catalog).handle("Saw", "S-1", "Tools", "19.99", 4)
        assert product.unit_cost == Money.of("19.99")
        assert product.min_stock_level == 4

    def test_add_product_unknown_category(self):
        svc, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Category not found: 'Paint'"):
            AddProductHandler(svc.catalog).handle("Brush", "B-1", "Paint", "3")

    def test_update_product_sku_and_category(self):
        svc, seed = _setup()
        svc.catalog.create_category("Spares")
        updated = UpdateProductHandler(svc.catalog).handle(
            "W-1", new_sku="W-2", category_name="Spares", unit_cost="16"
        )
        assert updated.sku == "W-2"
        assert svc.catalog.find_product_by_sku("W-1") is None
        assert svc.stock.get_product_total_stock(seed.widget.id) == 32

    def test_list_products_with_totals(self):
        svc, _ = _setup()
        products = ListProductsHandler(svc.catalog, svc.stock).handle()
        assert [(p.sku, p.stock_quantity, p.unit_cost) for p in products] == [
            ("W-1", 32, "$15.00"),
            ("G-1", 50, "$2.50"),
        ]
        assert products[0].category_name == "Tools"

    def test_show_product_breakdown(self):
        svc, _ = _setup()
        detail = ShowProductHandler(svc.catalog, svc.stock).handle("W-1")
        assert detail.status == "In Stock"
        assert [(loc.location_name, loc.quantity, loc.status) for loc in detail.locations] == [
            ("Warehouse", 2, "Low Stock"),
            ("Store", 30, "In Stock"),
        ]


class TestStockHandlers:

    def test_create_twice_rejected(self):
        svc, _ = _setup()
        with pytest.raises(DuplicateKeyError):
            CreateInventoryHandler(svc.catalog, svc.stock).handle("W-1", "Store", 1)

    def test_set_inventory(self):
        svc, seed = _setup()
        record = SetInventoryHandler(svc.catalog, svc.stock).handle("W-1", "Warehouse", 9)
        assert record.quantity == 9
        assert svc.stock.get_product_total_stock(seed.widget.id) == 39

    def test_set_inventory_unknown_location(self):
        svc, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Location not found"):
            SetInventoryHandler(svc.catalog, svc.stock).handle("W-1", "Moon", 9)

    def test_adjust_returns_movement(self):
        svc, _ = _setup()
        dto = AdjustStockHandler(svc.catalog, svc.stock).handle("G-1", "Warehouse", -7, "sale")
        assert (dto.product_name, dto.location_name, dto.quantity, dto.note) == (
            "Gadget", "Warehouse", -7, "sale",
        )
        assert dto.timestamp == "2024-03-01 09:00 UTC"

    def test_remove(self):
        svc, seed = _setup()
        RemoveInventoryHandler(svc.catalog, svc.stock).handle("W-1", "Store")
        assert svc.stock.get_product_total_stock(seed.widget.id) == 2


class TestQueries:

    def test_filter_by_location(self):
        svc, _ = _setup()
        lines = ShowInventoryHandler(svc.stock).handle(location="Warehouse")
        assert [line.sku for line in lines] == ["W-1", "G-1"]

    def test_filter_by_status_name_or_value(self):
        svc, _ = _setup()
        handler = ShowInventoryHandler(svc.stock)
        assert [line.quantity for line in handler.handle(status="Low Stock")] == [2]
        assert [line.quantity for line in handler.handle(status="low_stock")] == [2]

    def test_unknown_status(self):
        svc, _ = _setup()
        with pytest.raises(ValidationError, match="Unknown stock status"):
            ShowInventoryHandler(svc.stock).handle(status="plenty")

    def test_search_is_case_insensitive(self):
        svc, _ = _setup()
        lines = ShowInventoryHandler(svc.stock).handle(search="gadg")
        assert [line.sku for line in lines] == ["G-1"]

    def test_filter_by_category(self):
        svc, _ = _setup()
        assert ShowInventoryHandler(svc.stock).handle(category="Paint") == []
        assert len(ShowInventoryHandler(svc.stock).handle(category="Tools")) == 3

    def test_low_stock(self):
        svc, _ = _setup()
        lines = ShowLowStockHandler(svc.stock).handle()
        assert [(line.sku, line.location_name, line.status) for line in lines] == [
            ("W-1", "Warehouse", "Low Stock"),
        ]

    def test_dashboard(self):
        svc, _ = _setup()
        svc.clock.advance(minutes=1)
        AdjustStockHandler(svc.catalog, svc.stock).handle("G-1", "Warehouse", -50)
        dash = ShowDashboardHandler(svc.stock).handle(recent_limit=2)
        assert dash.total_products == 2
        assert dash.low_stock_items == 2
        assert dash.inventory_value == "$480.00"
        assert dash.recent_movement_count == 4
        assert len(dash.recent_movements) == 2
        assert dash.recent_movements[0].quantity == -50

    def test_movements_for_one_product(self):
        svc, _ = _setup()
        moves = ShowMovementsHandler(svc.catalog, svc.stock).handle(sku="G-1")
        assert [(m.quantity, m.note) for m in moves] == [(50, "Initial inventory")]

    def test_movements_unknown_sku(self):
        svc, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowMovementsHandler(svc.catalog, svc.stock).handle(sku="X")
