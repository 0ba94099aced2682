"""Seller load test scenarios.

The seeded seller logs in once, then keeps polling its order list and
pushing pending orders forward: pending -> shipped -> delivered.
"""

from locust import HttpUser, between, task

from loadtests.data_generators import next_status
from loadtests.helpers.catalogue import seller_credentials
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import SellerState


class SellerUser(HttpUser):
    wait_time = between(1, 3)

    def on_start(self):
        self.state = SellerState()
        credentials = seller_credentials()
        with self.client.post(
            "/auth/login",
            json={"email": credentials["email"], "password": credentials["password"]},
            catch_response=True,
            name="POST /auth/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Seller login failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task(3)
    def advance_orders(self):
        if not self.state.token:
            return
        resp = self.client.get("/seller/orders", headers=self.state.headers, name="GET /seller/orders")
        if resp.status_code != 200:
            return

        for order in resp.json()[:5]:
            target = next_status(order["status"])
            if target is None:
                continue
            with self.client.put(
                f"/seller/orders/{order['id']}/status",
                json={"status": target},
                headers=self.state.headers,
                catch_response=True,
                name="PUT /seller/orders/{id}/status",
            ) as update:
                if update.status_code == 200:
                    if target == "shipped":
                        self.state.shipped += 1
                    else:
                        self.state.delivered += 1
                # Buyer cancelled in the meantime
                elif update.status_code == 409:
                    update.success()
                else:
                    update.failure(f"Status update failed: {update.status_code} - {extract_error_detail(update)}")

    @task(1)
    def stats(self):
        if self.state.token:
            self.client.get("/seller/orders/stats", headers=self.state.headers, name="GET /seller/orders/stats")
