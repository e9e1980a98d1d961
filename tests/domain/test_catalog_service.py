"""Unit tests for the CatalogService domain service."""

from datetime import timedelta

import pytest

from invtrack.domain.exceptions import (
    DuplicateKeyError,
    EntityNotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from invtrack.domain.model.value_objects import Money
from tests.fakes import make_services, seed_catalog


class TestCategories:

    def test_create_assigns_ids(self):
        svc = make_services()
        a = svc.catalog.create_category("Tools")
        b = svc.catalog.create_category("Paint")
        assert (a.id, b.id) == (1, 2)
        assert [c.name for c in svc.catalog.list_categories()] == ["Tools", "Paint"]

    def test_duplicate_name_rejected(self):
        svc = make_services()
        svc.catalog.create_category("Tools")
        with pytest.raises(DuplicateKeyError, match="already exists"):
            svc.catalog.create_category("Tools")

    def test_names_are_case_sensitive(self):
        svc = make_services()
        svc.catalog.create_category("Tools")
        assert svc.catalog.create_category("tools").name == "tools"

    def test_blank_name_rejected(self):
        svc = make_services()
        with pytest.raises(ValidationError):
            svc.catalog.create_category("   ")

    def test_rename_to_taken_name_rejected(self):
        svc = make_services()
        svc.catalog.create_category("Tools")
        paint = svc.catalog.create_category("Paint")
        with pytest.raises(DuplicateKeyError):
            svc.catalog.update_category(paint.id, name="Tools")
        assert svc.catalog.get_category(paint.id).name == "Paint"

    def test_update_description(self):
        svc = make_services()
        tools = svc.catalog.create_category("Tools")
        updated = svc.catalog.update_category(tools.id, description="Hand tools")
        assert updated.description == "Hand tools"
        assert svc.catalog.get_category(tools.id).description == "Hand tools"

    def test_get_unknown_raises(self):
        svc = make_services()
        with pytest.raises(EntityNotFoundError):
            svc.catalog.get_category(99)

    def test_get_or_create_reuses_existing(self):
        svc = make_services()
        tools = svc.catalog.create_category("Tools")
        assert svc.catalog.get_or_create_category("Tools").id == tools.id
        created = svc.catalog.get_or_create_category("Paint")
        assert created.description == ""
        assert len(svc.catalog.list_categories()) == 2


class TestCategoryDelete:

    def test_delete_referenced_category_blocked(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        with pytest.raises(ReferentialIntegrityError):
            svc.catalog.delete_category(seed.tools.id)
        assert svc.catalog.find_category_by_name("Tools") is not None

    def test_delete_succeeds_once_products_are_reassigned(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        other = svc.catalog.create_category("Other")
        svc.catalog.update_product(seed.widget.id, category_id=other.id)
        svc.catalog.delete_product(seed.gadget.id)

        svc.catalog.delete_category(seed.tools.id)

        assert svc.catalog.find_category_by_name("Tools") is None


class TestLocations:

    def test_duplicate_name_rejected(self):
        svc = make_services()
        svc.catalog.create_location("Warehouse")
        with pytest.raises(DuplicateKeyError):
            svc.catalog.create_location("Warehouse")

    def test_delete_empty_location(self):
        svc = make_services()
        loc = svc.catalog.create_location("Annex")
        svc.catalog.delete_location(loc.id)
        assert svc.catalog.list_locations() == []

    def test_delete_with_inventory_blocked(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        svc.stock.create_initial_inventory(seed.widget.id, seed.store.id, 3)
        with pytest.raises(ReferentialIntegrityError, match="inventory"):
            svc.catalog.delete_location(seed.store.id)

    def test_delete_with_history_only_blocked(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        svc.stock.create_initial_inventory(seed.widget.id, seed.store.id, 3)
        svc.stock.remove_inventory(seed.widget.id, seed.store.id)
        with pytest.raises(ReferentialIntegrityError, match="history"):
            svc.catalog.delete_location(seed.store.id)


class TestProducts:

    def test_create_uses_clock(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        assert seed.widget.created_at == svc.clock.now
        assert seed.widget.unit_cost == Money.of("15.00")

    def test_duplicate_sku_rejected(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        with pytest.raises(DuplicateKeyError, match="W-1"):
            svc.catalog.create_product("Other", "W-1", seed.tools.id)

    def test_unknown_category_rejected(self):
        svc = make_services()
        with pytest.raises(EntityNotFoundError):
            svc.catalog.create_product("Widget", "W-1", 42)

    def test_partial_update(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        svc.clock.advance(hours=2)

        updated = svc.catalog.update_product(
            seed.widget.id, unit_cost=Money.of("20"), min_stock_level=3
        )

        assert updated.name == "Widget"
        assert updated.unit_cost == Money.of("20")
        assert updated.min_stock_level == 3
        assert updated.updated_at - updated.created_at == timedelta(hours=2)
        assert svc.catalog.get_product(seed.widget.id).min_stock_level == 3

    def test_update_to_taken_sku_rejected(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        with pytest.raises(DuplicateKeyError):
            svc.catalog.update_product(seed.widget.id, sku="G-1")

    def test_update_does_not_touch_stock(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        svc.stock.create_initial_inventory(seed.widget.id, seed.warehouse.id, 4)
        svc.catalog.update_product(seed.widget.id, unit_cost=Money.of("100"))
        assert svc.stock.get_product_total_stock(seed.widget.id) == 4
        assert svc.uow.movements.count() == 1

    def test_delete_with_inventory_blocked(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        svc.stock.create_initial_inventory(seed.widget.id, seed.warehouse.id, 4)
        with pytest.raises(ReferentialIntegrityError):
            svc.catalog.delete_product(seed.widget.id)

    def test_delete_unreferenced_product(self):
        svc = make_services()
        seed = seed_catalog(svc.catalog)
        svc.catalog.delete_product(seed.gadget.id)
        assert svc.catalog.find_product_by_sku("G-1") is None
        with pytest.raises(EntityNotFoundError):
            svc.catalog.delete_product(seed.gadget.id)
