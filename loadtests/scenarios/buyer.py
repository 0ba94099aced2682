"""Buyer load test scenarios.

A stateful SequentialTaskSet journey: register, fill the cart, adjust it,
check out, browse orders and sometimes cancel.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, checkout_data, registration_data
from loadtests.helpers.catalogue import product_ids
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import BuyerState


class BuyerCheckoutJourney(SequentialTaskSet):
    """Register -> Add 2 items -> Update quantity -> View cart -> Checkout ->
    List orders -> Cancel (one time in four).

    Stock contention between buyers is expected, so 409 on add or checkout
    is recorded as a success: it is the ledger refusing to oversell.
    """

    def on_start(self):
        self.state = BuyerState()
        self.products = product_ids()

    @task
    def register(self):
        with self.client.post(
            "/auth/register",
            json=registration_data("buyer"),
            catch_response=True,
            name="POST /auth/register",
        ) as resp:
            if resp.status_code == 201:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Register failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_item_1(self):
        self._add_item()

    @task
    def add_item_2(self):
        self._add_item()

    @task
    def update_quantity(self):
        if not self.state.cart_product_ids:
            return
        product_id = self.state.cart_product_ids[0]
        with self.client.put(
            f"/cart/{product_id}",
            json={"quantity": 1},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /cart/{productId}",
        ) as resp:
            if resp.status_code not in (200, 409):
                resp.failure(f"Update quantity failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.state.headers, name="GET /cart")

    @task
    def checkout(self):
        with self.client.post(
            "/checkout",
            json=checkout_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order"]["id"])
                self.state.cart_product_ids.clear()
            elif resp.status_code == 409:
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def list_orders(self):
        self.client.get("/orders", headers=self.state.headers, name="GET /orders")

    @task
    def maybe_cancel(self):
        if not self.state.order_ids or random.random() > 0.25:
            return
        with self.client.put(
            f"/orders/{self.state.order_ids[-1]}/cancel",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{id}/cancel",
        ) as resp:
            # The seller may already have shipped it
            if resp.status_code not in (200, 409):
                resp.failure(f"Cancel failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()

    def _add_item(self):
        payload = cart_item_data(self.products)
        with self.client.post(
            "/cart",
            json=payload,
            headers=self.state.headers,
            catch_response=True,
            name="POST /cart",
        ) as resp:
            if resp.status_code == 201:
                self.state.cart_product_ids.append(payload["productId"])
            elif resp.status_code == 409:
                resp.success()
            else:
                resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")


class BuyerUser(HttpUser):
    tasks = [BuyerCheckoutJourney]
    wait_time = between(0.5, 2)
