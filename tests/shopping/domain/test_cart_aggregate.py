"""Domain tests for the Cart aggregate: lines, quantities and totals."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from shopping.cart.cart import PRODUCT_ALREADY_IN_CART, PRODUCT_NOT_IN_CART, Cart
from shopping.cart.events import CartItemAdded, CartItemQuantityUpdated, CartItemRemoved
from shopping.catalogue.product import Product
from shopping.config import ShoppingSettings, set_settings
from shopping.shared.errors import ConflictError


def _product(name="Notebook", cost=10.0):
    return Product(name=name, cost=cost)


def _make_cart():
    return Cart.create("alice@example.com")


class TestCartCreation:
    def test_new_cart_is_empty(self):
        cart = _make_cart()
        assert cart.user_email == "alice@example.com"
        assert cart.is_empty
        assert cart.total_cost() == Decimal("0")

    def test_create_uses_configured_payment_option(self):
        set_settings(ShoppingSettings(default_payment_option="WALLET"))
        assert _make_cart().payment_option == "WALLET"

    def test_create_with_explicit_payment_option(self):
        assert Cart.create("alice@example.com", payment_option="CARD").payment_option == "CARD"

    def test_create_sets_timestamps(self):
        cart = _make_cart()
        assert cart.created_at is not None
        assert cart.updated_at == cart.created_at


class TestAddItem:
    def test_add_item_copies_product_details(self):
        cart = _make_cart()
        product = _product()
        cart.add_item(product, 3)

        assert len(cart.items) == 1
        item = cart.items[0]
        assert item.product_id == str(product.id)
        assert item.product_name == "Notebook"
        assert item.cost == 10.0
        assert item.quantity == 3

    def test_items_keep_insertion_order(self):
        cart = _make_cart()
        first, second, third = _product("A"), _product("B"), _product("C")
        cart.add_item(first, 1)
        cart.add_item(second, 1)
        cart.add_item(third, 1)

        assert [i.product_id for i in cart.items] == [str(first.id), str(second.id), str(third.id)]

    def test_adding_same_product_twice_is_a_conflict(self):
        cart = _make_cart()
        product = _product()
        cart.add_item(product, 3)

        with pytest.raises(ConflictError) as exc:
            cart.add_item(product, 2)

        assert exc.value.messages == {"product_id": [PRODUCT_ALREADY_IN_CART]}
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_add_item_raises_event(self):
        cart = _make_cart()
        product = _product()
        cart.add_item(product, 2)

        events = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(events) == 1
        assert events[0].product_id == str(product.id)
        assert events[0].quantity == 2
        assert events[0].user_email == "alice@example.com"


class TestFindItem:
    def test_find_item_matches_exact_identifier(self):
        cart = _make_cart()
        product = _product()
        cart.add_item(product, 1)

        assert cart.find_item(product.id).quantity == 1
        assert cart.find_item(str(product.id)).product_name == "Notebook"

    def test_find_item_returns_none_when_absent(self):
        cart = _make_cart()
        cart.add_item(_product(), 1)
        assert cart.find_item("missing") is None


class TestUpdateItemQuantity:
    def test_update_overwrites_quantity(self):
        cart = _make_cart()
        product = _product()
        cart.add_item(product, 1)

        cart.update_item_quantity(product.id, 5)
        assert cart.items[0].quantity == 5

    def test_update_missing_product_fails(self):
        cart = _make_cart()
        cart.add_item(_product(), 1)

        with pytest.raises(ValidationError) as exc:
            cart.update_item_quantity("missing", 2)
        assert exc.value.messages == {"product_id": [PRODUCT_NOT_IN_CART]}

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_update_rejects_non_positive_quantity(self, quantity):
        cart = _make_cart()
        product = _product()
        cart.add_item(product, 2)

        with pytest.raises(ValidationError):
            cart.update_item_quantity(product.id, quantity)
        assert cart.items[0].quantity == 2

    def test_update_raises_event(self):
        cart = _make_cart()
        product = _product()
        cart.add_item(product, 1)
        cart.update_item_quantity(product.id, 4)

        events = [e for e in cart._events if isinstance(e, CartItemQuantityUpdated)]
        assert len(events) == 1
        assert events[0].previous_quantity == 1
        assert events[0].new_quantity == 4


class TestRemoveItem:
    def test_remove_deletes_line(self):
        cart = _make_cart()
        keep, drop = _product("Keep"), _product("Drop")
        cart.add_item(keep, 1)
        cart.add_item(drop, 1)

        cart.remove_item(drop.id)

        assert [i.product_id for i in cart.items] == [str(keep.id)]
        assert any(isinstance(e, CartItemRemoved) for e in cart._events)

    def test_remove_missing_product_fails(self):
        cart = _make_cart()
        with pytest.raises(ValidationError) as exc:
            cart.remove_item("missing")
        assert exc.value.messages == {"product_id": [PRODUCT_NOT_IN_CART]}


class TestTotals:
    def test_total_is_sum_of_cost_times_quantity(self):
        cart = _make_cart()
        cart.add_item(_product("A", 10.0), 2)
        cart.add_item(_product("B", 5.0), 1)
        assert cart.total_cost() == Decimal("25.0")

    def test_total_does_not_drift(self):
        cart = _make_cart()
        cart.add_item(_product("A", 0.1), 1)
        cart.add_item(_product("B", 0.2), 1)
        assert cart.total_cost() == Decimal("0.3")

    def test_item_subtotal(self):
        cart = _make_cart()
        cart.add_item(_product("A", 7.25), 4)
        assert cart.items[0].subtotal == Decimal("29.00")

    def test_total_is_rounded_to_cents_once(self):
        cart = _make_cart()
        cart.add_item(_product("A", 0.333), 3)
        assert cart.total_cost() == Decimal("1.00")

    def test_total_rounds_the_sum_not_each_line(self):
        cart = _make_cart()
        cart.add_item(_product("A", 0.004), 1)
        cart.add_item(_product("B", 0.004), 1)
        assert cart.total_cost() == Decimal("0.01")
