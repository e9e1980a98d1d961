"""Unit tests for stock status classification and the inventory aggregate row."""

from datetime import datetime, timedelta, timezone

import pytest

from invtrack.domain.exceptions import ValidationError
from invtrack.domain.model.catalog import Product
from invtrack.domain.model.inventory import (
    InventoryRecord,
    StockMovement,
    StockStatus,
    check_quantity,
    compute_stock_status,
)

NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


# ── Stock status ─────────────────────────────────────────────────────────────


class TestComputeStockStatus:

    @pytest.mark.parametrize(
        "quantity, minimum, expected",
        [
            (0, 10, StockStatus.OUT_OF_STOCK),
            (1, 10, StockStatus.LOW_STOCK),
            (10, 10, StockStatus.LOW_STOCK),
            (11, 10, StockStatus.IN_STOCK),
            (0, 0, StockStatus.OUT_OF_STOCK),
            (1, 0, StockStatus.IN_STOCK),
        ],
    )
    def test_boundaries(self, quantity, minimum, expected):
        assert compute_stock_status(quantity, minimum) is expected

    def test_display_values(self):
        assert StockStatus.IN_STOCK.value == "In Stock"
        assert StockStatus.LOW_STOCK.value == "Low Stock"
        assert StockStatus.OUT_OF_STOCK.value == "Out of Stock"


class TestCheckQuantity:

    def test_accepts_int(self):
        assert check_quantity(-3) == -3

    def test_rejects_bool(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            check_quantity(True)

    def test_rejects_float(self):
        with pytest.raises(ValidationError, match="Movement quantity"):
            check_quantity(2.0, "Movement quantity")


# ── InventoryRecord ──────────────────────────────────────────────────────────


class TestInventoryRecord:

    def test_opening_sets_quantity(self):
        record = InventoryRecord.opening(1, 2, 25, NOW)
        assert record.id is None
        assert record.quantity == 25
        assert record.pair == (1, 2)
        assert record.updated_at == NOW

    def test_opening_with_negative_rejected(self):
        with pytest.raises(ValidationError, match="Insufficient stock"):
            InventoryRecord.opening(1, 2, -1, NOW)

    def test_apply_adds_and_removes(self):
        record = InventoryRecord(id=1, product_id=1, location_id=1, quantity=5, updated_at=NOW)
        later = NOW + timedelta(minutes=1)
        record.apply(7, later)
        record.apply(-12, later)
        assert record.quantity == 0
        assert record.updated_at == later

    def test_apply_below_zero_rejected_and_unchanged(self):
        record = InventoryRecord(id=1, product_id=1, location_id=1, quantity=5, updated_at=NOW)
        with pytest.raises(ValidationError, match="have 5, change -6"):
            record.apply(-6, NOW + timedelta(minutes=1))
        assert record.quantity == 5
        assert record.updated_at == NOW


class TestStockMovement:

    def test_is_removal(self):
        out = StockMovement(id=1, product_id=1, location_id=1, quantity=-5, timestamp=NOW)
        assert out.is_removal
        assert not StockMovement(id=2, product_id=1, location_id=1, quantity=5, timestamp=NOW).is_removal

    def test_is_immutable(self):
        movement = StockMovement(id=1, product_id=1, location_id=1, quantity=5, timestamp=NOW)
        with pytest.raises(AttributeError):
            movement.quantity = 6


# ── Product ──────────────────────────────────────────────────────────────────


class TestProduct:

    def test_create_defaults(self):
        product = Product.create(name=" Widget ", sku=" W-1 ", category_id=1, now=NOW)
        assert product.name == "Widget"
        assert product.sku == "W-1"
        assert product.min_stock_level == 10
        assert str(product.unit_cost) == "$0.00"
        assert product.created_at == product.updated_at == NOW

    def test_blank_sku_rejected(self):
        with pytest.raises(ValidationError, match="required"):
            Product.create(name="Widget", sku="  ", category_id=1, now=NOW)

    def test_negative_min_stock_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Widget", sku="W-1", category_id=1, min_stock_level=-1, now=NOW)

    def test_change_bumps_updated_at_only(self):
        product = Product.create(name="Widget", sku="W-1", category_id=1, now=NOW)
        later = NOW + timedelta(hours=1)
        product.change(now=later, name="Widget Pro")
        assert product.name == "Widget Pro"
        assert product.created_at == NOW
        assert product.updated_at == later
