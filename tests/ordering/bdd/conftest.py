"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.items import add_to_cart
from ordering.catalogue.product import Product
from ordering.order.checkout import checkout
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then
from shared.errors import MarketplaceError


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Products created in Given steps, keyed by name."""
    return {}


@pytest.fixture()
def error():
    """Container for the error raised by the last When step."""
    return {"exc": None}


@pytest.fixture()
def placed():
    """Container for the order produced by checkout."""
    return {"order": None}


@pytest.fixture()
def capture(error):
    """Run an operation, stashing any marketplace error instead of raising."""

    def _run(operation, *args, **kwargs):
        try:
            return operation(*args, **kwargs)
        except MarketplaceError as exc:
            error["exc"] = exc
            return None

    return _run


@pytest.fixture()
def current_order(placed):
    def _reload() -> Order:
        return current_domain.repository_for(Order).get(placed["order"].id)

    return _reload


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def _(seller, make_product, products, name, price, stock):
    products[name] = make_product(seller, name=name, price=price, stock=stock)


@given(parsers.cfparse('another seller\'s product "{name}" priced {price:f} with {stock:d} in stock'))
def _(other_seller, make_product, products, name, price, stock):
    products[name] = make_product(other_seller, name=name, price=price, stock=stock)


@given(parsers.cfparse('the buyer has {quantity:d} of "{name}" in the cart'))
def _(buyer, products, name, quantity):
    add_to_cart(buyer, products[name].id, quantity)


@given(parsers.cfparse('the buyer placed an order shipping to "{address}"'))
def _(buyer, placed, address):
    placed["order"] = checkout(buyer, address)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the stock of "{name}" is {stock:d}'))
def _(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name].id).stock_quantity == stock


@then(parsers.cfparse('the order status is "{status}"'))
def _(current_order, status):
    assert current_order().status == status


@then(parsers.cfparse("the request fails with {error_name}"))
def _(error, error_name):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_name


@then(parsers.cfparse('the error message is "{message}"'))
def _(error, message):
    assert error["exc"].message == message
