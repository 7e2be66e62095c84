"""Shared BDD fixtures and step definitions for the Shopping domain."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from shopping.cart.manager import add_item, get_cart
from shopping.catalogue.product import Product

EMAIL = "alice@example.com"


@pytest.fixture()
def catalogue():
    """Products created by the scenario, keyed by their label in the feature file."""
    return {}


@pytest.fixture()
def error():
    """Container to capture errors raised by When steps."""
    return {"exc": None}


@given(parsers.cfparse('a product "{label}" costing {cost:f}'))
def _(catalogue, label, cost):
    product = Product(name=label, cost=cost)
    current_domain.repository_for(Product).add(product)
    catalogue[label] = product


@given(parsers.cfparse('their cart holds only {qty:d} of "{label}"'))
def _(catalogue, qty, label):
    add_item(EMAIL, str(catalogue[label].id), qty)


@then(parsers.cfparse('the line for "{label}" has quantity {qty:d}'))
def _(catalogue, label, qty):
    item = get_cart(EMAIL).find_item(catalogue[label].id)
    assert item is not None
    assert item.quantity == qty
