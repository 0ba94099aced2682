"""Marketplace load testing, Locust entry point.

Discovers all user classes from the scenarios package. Seed a catalogue
into the target database first (see ``marketplace-manage seed-catalogue``).

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Buyers and the seller only:
    locust -f loadtests/locustfile.py BuyerUser SellerUser

    # Oversell check:
    locust -f loadtests/locustfile.py StockContentionUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py BuyerUser SellerUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.catalogue import hot_product_id, seeded_catalogue
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.buyer import BuyerUser  # noqa: F401
from loadtests.scenarios.contention import StockContentionUser  # noqa: F401
from loadtests.scenarios.seller import SellerUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Extracts the API error body so you see "Cart is empty" instead of
    just "409".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 500:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    catalogue = seeded_catalogue()
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print(f"[LOADTEST] Seeded products: {len(catalogue['products'])}")
    print(f"[LOADTEST] Hot product stock: {catalogue['hot_product']['stock']}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Report how many units of the hot product the seller sold."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    catalogue = seeded_catalogue()
    seller = catalogue["seller"]
    try:
        login = requests.post(
            f"{environment.host}/auth/login",
            json={"email": seller["email"], "password": seller["password"]},
            timeout=5,
        )
        headers = {"Authorization": f"Bearer {login.json()['token']}"}
        orders = requests.get(f"{environment.host}/seller/orders", headers=headers, timeout=10).json()
    except (requests.RequestException, KeyError, ValueError) as e:
        print(f"[LOADTEST] Could not fetch seller orders: {e}\n")
        return

    sold = sum(
        item["quantity"]
        for order in orders
        if order["status"] != "cancelled"
        for item in order["items"]
        if item["product_id"] == hot_product_id()
    )
    seeded = catalogue["hot_product"]["stock"]
    verdict = "OK" if sold <= seeded else "OVERSOLD"
    print(f"[LOADTEST] Hot product: {sold} sold of {seeded} seeded [{verdict}]\n")
