"""Stock contention scenario.

Every user races for the same low-stock product. The ledger must never
sell more units than were seeded: once stock is gone, add-to-cart and
checkout answer 409 and nothing else. A 500 means a unit of work lost its
version race more times than the retry budget allows.
"""

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import checkout_data, registration_data
from loadtests.helpers.catalogue import hot_product_id
from loadtests.helpers.response import extract_error_detail


class StockContentionUser(HttpUser):
    wait_time = constant_pacing(0.2)

    def on_start(self):
        self.token = None
        resp = self.client.post("/auth/register", json=registration_data("buyer"), name="[CONTENTION] register")
        if resp.status_code == 201:
            self.token = resp.json()["token"]

    @task
    def grab_hot_product(self):
        if not self.token:
            return
        headers = {"Authorization": f"Bearer {self.token}"}
        with self.client.post(
            "/cart",
            json={"productId": hot_product_id(), "quantity": 1},
            headers=headers,
            catch_response=True,
            name="[CONTENTION] POST /cart",
        ) as resp:
            if resp.status_code == 409:
                resp.success()
                return
            if resp.status_code != 201:
                resp.failure(f"Add failed: {resp.status_code} - {extract_error_detail(resp)}")
                return

        with self.client.post(
            "/checkout",
            json=checkout_data(),
            headers=headers,
            catch_response=True,
            name="[CONTENTION] POST /checkout",
        ) as resp:
            if resp.status_code in (201, 409):
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} - {extract_error_detail(resp)}")
