"""Application tests for buyer and seller order projections."""

import pytest
from ordering.cart.items import add_to_cart
from ordering.order.cancellation import cancel_order
from ordering.order.checkout import checkout
from ordering.order.queries import buyer_order, buyer_orders, seller_order, seller_order_stats, seller_orders
from ordering.order.status import update_order_status
from shared.errors import Forbidden, InvalidArgument, NotFound
from shared.principal import Principal, Role


@pytest.fixture()
def mixed_order(buyer, seller, other_seller, make_product):
    """One order holding a Mug from ``seller`` and two Lamps from ``other_seller``."""
    mug = make_product(seller, name="Mug", price=10.0, stock=5)
    lamp = make_product(other_seller, name="Lamp", price=30.0, stock=5)
    add_to_cart(buyer, mug.id, 1)
    add_to_cart(buyer, lamp.id, 2)
    return checkout(buyer, "1 Main St")


class TestBuyerOrders:
    def test_lists_own_orders_newest_first(self, buyer, seller, make_product):
        mug = make_product(seller, stock=10)
        add_to_cart(buyer, mug.id, 1)
        first = checkout(buyer, "1 Main St")
        add_to_cart(buyer, mug.id, 2)
        second = checkout(buyer, "1 Main St")

        views = buyer_orders(buyer)

        assert [view["id"] for view in views] == [str(second.id), str(first.id)]

    def test_lines_joined_with_catalogue(self, buyer, mixed_order):
        [view] = buyer_orders(buyer)

        assert view["total_amount"] == 70.0
        assert len(view["items"]) == 2
        lamp = next(item for item in view["items"] if item["product_name"] == "Lamp")
        assert lamp["quantity"] == 2
        assert lamp["price"] == 30.0
        assert lamp["image_url"] == "https://img.example.com/lamp.png"
        assert lamp["store_name"] == "Sue Seller's Store"

    def test_other_buyers_see_nothing(self, other_buyer, mixed_order):
        assert buyer_orders(other_buyer) == []

    def test_single_order_detail(self, buyer, mixed_order):
        view = buyer_order(buyer, mixed_order.id)
        assert view["id"] == str(mixed_order.id)
        assert view["status"] == "pending"

    def test_single_order_of_someone_else(self, other_buyer, mixed_order):
        with pytest.raises(NotFound):
            buyer_order(other_buyer, mixed_order.id)

    def test_sellers_forbidden(self, seller):
        with pytest.raises(Forbidden):
            buyer_orders(seller)


class TestSellerOrders:
    def test_only_own_lines_and_seller_total(self, seller, other_seller, mixed_order):
        [mine] = seller_orders(seller)
        [theirs] = seller_orders(other_seller)

        assert [item["product_name"] for item in mine["items"]] == ["Mug"]
        assert mine["seller_total"] == 10.0
        assert [item["product_name"] for item in theirs["items"]] == ["Lamp"]
        assert theirs["seller_total"] == 60.0
        assert mine["total_amount"] == theirs["total_amount"] == 70.0

    def test_includes_buyer_contact_and_address(self, seller, mixed_order):
        [view] = seller_orders(seller)
        assert view["buyer_name"] == "Bea Buyer"
        assert view["buyer_email"] == "bea@example.com"
        assert view["shipping_address"] == "1 Main St"

    def test_seller_without_sales_sees_nothing(self, mixed_order):
        nobody = Principal(user_id="seller-999", role=Role.SELLER)
        assert seller_orders(nobody) == []

    def test_status_filter(self, buyer, seller, make_product):
        mug = make_product(seller, stock=10)
        add_to_cart(buyer, mug.id, 1)
        first = checkout(buyer, "1 Main St")
        add_to_cart(buyer, mug.id, 1)
        checkout(buyer, "1 Main St")
        update_order_status(seller, first.id, "shipped")

        shipped = seller_orders(seller, status="shipped")
        pending = seller_orders(seller, status="pending")

        assert [view["id"] for view in shipped] == [str(first.id)]
        assert len(pending) == 1

    def test_bad_status_filter(self, seller):
        with pytest.raises(InvalidArgument):
            seller_orders(seller, status="lost")

    def test_single_order_for_seller(self, seller, other_seller, mixed_order):
        view = seller_order(seller, mixed_order.id)
        assert view["seller_total"] == 10.0

        with pytest.raises(NotFound):
            seller_order(Principal(user_id="seller-999", role=Role.SELLER), mixed_order.id)

    def test_buyers_forbidden(self, buyer):
        with pytest.raises(Forbidden):
            seller_orders(buyer)


class TestSellerStats:
    def test_counts_and_revenue(self, buyer, seller, make_product):
        mug = make_product(seller, price=10.0, stock=20)
        placed = []
        for quantity in (1, 2, 3):
            add_to_cart(buyer, mug.id, quantity)
            placed.append(checkout(buyer, "1 Main St"))

        update_order_status(seller, placed[0].id, "shipped")
        cancel_order(buyer, placed[1].id)

        stats = seller_order_stats(seller)

        assert stats["total_orders"] == 3
        assert stats["by_status"] == {"pending": 1, "shipped": 1, "delivered": 0, "cancelled": 1}
        assert stats["revenue"] == 40.0
