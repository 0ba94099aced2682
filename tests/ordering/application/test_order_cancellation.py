"""Application tests for buyer cancellation and stock conservation."""

import pytest
from ordering.cart.items import add_to_cart
from ordering.catalogue.product import Product
from ordering.order.cancellation import cancel_order
from ordering.order.checkout import checkout
from ordering.order.order import OrderStatus
from ordering.order.status import update_order_status
from protean import current_domain
from shared.errors import Forbidden, InvalidState, NotFound


@pytest.fixture()
def placed(buyer, seller, make_product):
    mug = make_product(seller, name="Mug", price=10.0, stock=5)
    lamp = make_product(seller, name="Lamp", price=20.0, stock=3)
    add_to_cart(buyer, mug.id, 2)
    add_to_cart(buyer, lamp.id, 1)
    order = checkout(buyer, "1 Main St")
    return order, mug, lamp


class TestCancelOrder:
    def test_restores_stock(self, buyer, placed, stock_of):
        order, mug, lamp = placed
        assert stock_of(mug) == 3
        assert stock_of(lamp) == 2

        cancelled = cancel_order(buyer, order.id)

        assert cancelled.status == OrderStatus.CANCELLED.value
        assert cancelled.cancelled_by == "buyer"
        assert stock_of(mug) == 5
        assert stock_of(lamp) == 3

    def test_second_cancel_rejected_and_stock_restored_once(self, buyer, placed, stock_of):
        order, mug, lamp = placed
        cancel_order(buyer, order.id)

        with pytest.raises(InvalidState) as exc:
            cancel_order(buyer, order.id)

        assert "cancelled" in exc.value.message
        assert stock_of(mug) == 5
        assert stock_of(lamp) == 3

    def test_shipped_order_cannot_be_cancelled(self, buyer, seller, placed, stock_of):
        order, mug, _ = placed
        update_order_status(seller, order.id, "shipped")

        with pytest.raises(InvalidState) as exc:
            cancel_order(buyer, order.id)

        assert "shipped" in exc.value.message
        assert stock_of(mug) == 3

    def test_someone_elses_order_is_not_found(self, other_buyer, placed, stock_of):
        order, mug, _ = placed
        with pytest.raises(NotFound):
            cancel_order(other_buyer, order.id)
        assert stock_of(mug) == 3

    def test_unknown_order(self, buyer):
        with pytest.raises(NotFound):
            cancel_order(buyer, "no-such-order")

    def test_sellers_cannot_use_buyer_cancellation(self, seller, placed):
        order, _, _ = placed
        with pytest.raises(Forbidden):
            cancel_order(seller, order.id)

    def test_deleted_product_is_skipped(self, buyer, placed, stock_of):
        order, mug, lamp = placed
        repo = current_domain.repository_for(Product)
        repo._dao.delete(repo.get(lamp.id))

        cancelled = cancel_order(buyer, order.id)

        assert cancelled.status == "cancelled"
        assert stock_of(mug) == 5


class TestConservation:
    def test_stock_plus_pending_quantities_is_constant(self, buyer, other_buyer, seller, make_product, stock_of):
        mug = make_product(seller, stock=10)

        add_to_cart(buyer, mug.id, 3)
        first = checkout(buyer, "1 Main St")
        add_to_cart(other_buyer, mug.id, 4)
        checkout(other_buyer, "2 Side St")
        assert stock_of(mug) == 3

        cancel_order(buyer, first.id)
        assert stock_of(mug) == 6
