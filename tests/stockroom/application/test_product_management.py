"""Application tests for product command handlers, run through the dispatcher."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from stockroom.audit.audit_log import AuditLog
from stockroom.category.management import CreateCategory
from stockroom.product.management import CreateProduct, DeleteProduct, UpdateProduct
from stockroom.product.product import Product
from stockroom.product.queries import SearchProductsByName
from stockroom.registry import dispatcher
from stockroom.shared.context import CurrentUser
from stockroom.shared.dto import DeletedDTO

ALICE = CurrentUser(user_id="u-1", username="alice", is_authenticated=True)


def _create_category(name="Electronics"):
    return dispatcher.dispatch(CreateCategory(name=name, description="Devices and accessories"), user=ALICE)


def _create_product(category_id, user=ALICE, **overrides):
    defaults = {
        "name": "Wireless Mouse",
        "description": "Ergonomic 2.4GHz mouse",
        "price": 89.9,
        "category_id": category_id,
        "stock_quantity": 25,
    }
    defaults.update(overrides)
    return dispatcher.dispatch(CreateProduct(**defaults), user=user)


def _update_command(product, **overrides):
    values = {
        "product_id": product.id,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "category_id": product.category_id,
        "stock_quantity": product.stock_quantity,
    }
    values.update(overrides)
    return UpdateProduct(**values)


def _audit_entries(entity_id):
    return current_domain.repository_for(AuditLog).get_for_entity("Product", entity_id)


class TestCreateProductHandler:
    def test_create_returns_dto_with_category_name(self):
        category = _create_category()
        product = _create_product(category.id)

        assert product.name == "Wireless Mouse"
        assert product.category_name == "Electronics"
        assert product.sku.startswith("PRD")
        assert product.is_low_stock is False
        assert product.created_at == product.updated_at

    def test_create_persists(self):
        category = _create_category()
        product = _create_product(category.id)

        stored = current_domain.repository_for(Product).get(product.id)
        assert stored.name == "Wireless Mouse"
        assert stored.stock_quantity == 25

    def test_names_with_markup_characters_are_stored_verbatim(self):
        category = _create_category(name="Tools & Hardware")
        product = _create_product(category.id, name="Nuts & Bolts", description="M6 <zinc> plated, 100 pack")

        assert product.name == "Nuts & Bolts"
        assert product.description == "M6 <zinc> plated, 100 pack"
        assert product.category_name == "Tools & Hardware"
        assert [found.id for found in dispatcher.dispatch(SearchProductsByName(term="& B"))] == [product.id]

    def test_create_with_unknown_category_reports_unknown(self):
        product = _create_product("missing-category")
        assert product.category_name == "Unknown"

    def test_create_below_threshold_is_low_stock(self):
        category = _create_category()
        assert _create_product(category.id, stock_quantity=9).is_low_stock is True

    def test_create_writes_audit_entry(self):
        category = _create_category()
        product = _create_product(category.id)

        [entry] = _audit_entries(product.id)
        assert entry.action == "Create"
        assert entry.user_id == "u-1"
        assert entry.username == "alice"
        assert entry.entity_name == "Wireless Mouse"
        assert "89.90" in entry.details

    def test_anonymous_caller_is_audited_as_system(self):
        category = _create_category()
        product = _create_product(category.id, user=None)

        [entry] = _audit_entries(product.id)
        assert entry.user_id == "system"
        assert entry.username == "system"

    def test_zero_price_rejected_before_handler(self):
        category = _create_category()
        with pytest.raises(ValidationError) as exc:
            _create_product(category.id, price=0)
        assert exc.value.messages == {"price": ["Input should be greater than 0"]}
        assert current_domain.repository_for(Product).get_total_count() == 0

    def test_all_violations_reported_together(self):
        with pytest.raises(ValidationError) as exc:
            _create_product(None, name="", description="", price=0, stock_quantity=-1)
        assert set(exc.value.messages) == {"name", "description", "price", "category_id", "stock_quantity"}

    def test_overlong_name_does_not_hide_other_violations(self):
        category = _create_category()
        with pytest.raises(ValidationError) as exc:
            _create_product(category.id, name="x" * 300, description="", price=0, stock_quantity=-1)

        assert set(exc.value.messages) == {"name", "description", "price", "stock_quantity"}
        assert exc.value.messages["name"] == ["String should have at most 200 characters"]


class TestUpdateProductHandler:
    def test_update(self):
        category = _create_category()
        product = _create_product(category.id)

        updated = dispatcher.dispatch(
            _update_command(product, name="Gaming Mouse", description="Mouse with 16k DPI sensor", price=129.9),
            user=ALICE,
        )

        assert updated.name == "Gaming Mouse"
        assert updated.price == 129.9
        assert updated.sku == product.sku
        assert updated.created_at == product.created_at
        assert updated.updated_at > product.updated_at

    def test_update_to_zero_stock_succeeds(self):
        category = _create_category()
        product = _create_product(category.id)

        updated = dispatcher.dispatch(_update_command(product, stock_quantity=0), user=ALICE)
        assert updated.stock_quantity == 0
        assert updated.is_low_stock is True

    def test_update_to_negative_stock_fails(self):
        category = _create_category()
        product = _create_product(category.id)

        with pytest.raises(ValidationError) as exc:
            dispatcher.dispatch(_update_command(product, stock_quantity=-1), user=ALICE)
        assert "stock_quantity" in exc.value.messages
        assert current_domain.repository_for(Product).get(product.id).stock_quantity == 25

    def test_update_missing_product_raises_not_found(self):
        category = _create_category()
        product = _create_product(category.id)

        with pytest.raises(ObjectNotFoundError):
            dispatcher.dispatch(_update_command(product, product_id="missing"), user=ALICE)

    def test_update_writes_audit_entry(self):
        category = _create_category()
        product = _create_product(category.id)
        dispatcher.dispatch(_update_command(product, stock_quantity=3), user=ALICE)

        actions = [entry.action for entry in _audit_entries(product.id)]
        assert sorted(actions) == ["Create", "Update"]


class TestDeleteProductHandler:
    def test_delete(self):
        category = _create_category()
        product = _create_product(category.id)

        result = dispatcher.dispatch(DeleteProduct(product_id=product.id), user=ALICE)

        assert result == DeletedDTO(id=product.id)
        assert current_domain.repository_for(Product).get_by_id(product.id) is None

    def test_delete_audit_captures_name(self):
        category = _create_category()
        product = _create_product(category.id)
        dispatcher.dispatch(DeleteProduct(product_id=product.id), user=ALICE)

        deletes = [entry for entry in _audit_entries(product.id) if entry.action == "Delete"]
        assert len(deletes) == 1
        assert deletes[0].entity_name == "Wireless Mouse"

    def test_delete_missing_product_raises_not_found_without_audit(self):
        with pytest.raises(ObjectNotFoundError):
            dispatcher.dispatch(DeleteProduct(product_id="missing"), user=ALICE)
        assert current_domain.repository_for(AuditLog).get_recent(10) == []

    def test_delete_requires_id(self):
        with pytest.raises(ValidationError) as exc:
            dispatcher.dispatch(DeleteProduct(), user=ALICE)
        assert list(exc.value.messages) == ["product_id"]
