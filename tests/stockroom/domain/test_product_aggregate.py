"""Tests for the Product aggregate root."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.reflection import declared_fields
from stockroom.product.events import LowStockAlert, ProductCreated, ProductStockUpdated
from stockroom.product.product import Product, sku_for
from stockroom.shared.money import Money


def _product(**overrides):
    defaults = {
        "name": "Wireless Mouse",
        "description": "Ergonomic 2.4GHz mouse",
        "price": 89.9,
        "category_id": "cat-1",
        "stock_quantity": 25,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductConstruction:
    def test_element_type(self):
        from protean.utils import DomainObjects

        assert Product.element_type == DomainObjects.AGGREGATE

    def test_declared_fields(self):
        fields = declared_fields(Product)
        for name in ("name", "description", "price", "category_id", "stock_quantity", "created_at", "updated_at"):
            assert name in fields

    def test_create_sets_both_timestamps_to_the_same_instant(self):
        product = _product()
        assert product.id is not None
        assert product.created_at == product.updated_at

    def test_create_assigns_sku_from_id(self):
        product = _product()
        assert product.sku == sku_for(product.id)
        assert product.sku.startswith("PRD")
        assert len(product.sku) == 9

    def test_sku_for_uses_first_six_hex_digits(self):
        assert sku_for("3f2a9c1e-0000-4000-8000-000000000000") == "PRD3F2A9C"

    def test_update_keeps_sku(self):
        product = _product()
        sku = product.sku
        product.update(
            name="Gaming Mouse",
            description="Mouse with 16k DPI sensor",
            price=129.9,
            category_id="cat-2",
            stock_quantity=5,
        )
        assert product.sku == sku

    def test_markup_characters_are_kept_verbatim(self):
        product = _product(name="Nuts & Bolts", description="M6 <zinc> plated")
        assert product.name == "Nuts & Bolts"
        assert product.description == "M6 <zinc> plated"

    def test_create_raises_product_created(self):
        product = _product()
        events = [e for e in product._events if isinstance(e, ProductCreated)]
        assert len(events) == 1
        assert events[0].name == "Wireless Mouse"
        assert events[0].stock_quantity == 25

    def test_create_below_threshold_raises_low_stock_alert(self):
        product = _product(stock_quantity=3)
        alerts = [e for e in product._events if isinstance(e, LowStockAlert)]
        assert len(alerts) == 1
        assert alerts[0].current_quantity == 3
        assert alerts[0].threshold == 10

    def test_create_at_threshold_raises_no_alert(self):
        product = _product(stock_quantity=10)
        assert not [e for e in product._events if isinstance(e, LowStockAlert)]

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"name": "  "}, "name"),
            ({"description": ""}, "description"),
            ({"price": -1.0}, "price"),
            ({"stock_quantity": -1}, "stock_quantity"),
        ],
    )
    def test_invalid_details_rejected(self, overrides, field):
        with pytest.raises(ValidationError) as exc:
            _product(**overrides)
        assert field in exc.value.messages


class TestProductUpdate:
    def _update(self, product, **overrides):
        values = {
            "name": product.name,
            "description": product.description,
            "price": product.price,
            "category_id": product.category_id,
            "stock_quantity": product.stock_quantity,
        }
        values.update(overrides)
        product.update(**values)

    def test_update_changes_values_and_keeps_created_at(self):
        product = _product()
        created_at = product.created_at
        updated_at = product.updated_at

        self._update(product, name="Gaming Mouse", price=129.9)

        assert product.name == "Gaming Mouse"
        assert product.price == 129.9
        assert product.created_at == created_at
        assert product.updated_at > updated_at

    def test_update_with_negative_stock_rejected(self):
        product = _product()
        with pytest.raises(ValidationError) as exc:
            self._update(product, stock_quantity=-1)
        assert exc.value.messages["stock_quantity"] == ["Stock quantity cannot be negative"]

    def test_update_to_zero_stock_allowed(self):
        product = _product()
        self._update(product, stock_quantity=0)
        assert product.stock_quantity == 0
        assert product.is_low_stock()

    def test_stock_change_raises_stock_updated(self):
        product = _product(stock_quantity=25)
        self._update(product, stock_quantity=12)

        events = [e for e in product._events if isinstance(e, ProductStockUpdated)]
        assert len(events) == 1
        assert events[0].old_quantity == 25
        assert events[0].new_quantity == 12
        assert events[0].is_low_stock is False

    def test_crossing_into_low_stock_raises_alert(self):
        product = _product(stock_quantity=25)
        self._update(product, stock_quantity=4)
        assert len([e for e in product._events if isinstance(e, LowStockAlert)]) == 1

    def test_unchanged_stock_raises_no_stock_event(self):
        product = _product()
        self._update(product, name="Renamed mouse")
        assert not [e for e in product._events if isinstance(e, ProductStockUpdated)]


class TestProductValuation:
    def test_stock_value(self):
        product = _product(price=89.9, stock_quantity=2)
        assert product.stock_value.amount == pytest.approx(179.8)

    def test_unit_price_is_money(self):
        assert _product(price=10.0).unit_price == Money(amount=10.0)

    def test_stock_view(self):
        product = _product(stock_quantity=0)
        assert product.stock.is_out_of_stock
