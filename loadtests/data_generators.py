"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's validation rules
(well-formed email, minimum password length, non-blank address) and use
the exact camelCase field names the request schemas expect.
"""

import random
import uuid

from faker import Faker

fake = Faker()

LOADTEST_PASSWORD = "loadtest-pass"


# ---------- Identity ----------


def valid_email() -> str:
    """Generate emails that pass EmailAddress validation.

    Rules: exactly one @, no spaces, a dotted domain, no leading/trailing
    or consecutive dots. The uuid suffix keeps them unique across users.
    """
    local = fake.user_name()[:20].strip(".")
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:6]}@{domain}"


def full_name() -> str:
    return fake.name()[:255]


def registration_data(user_type: str = "buyer") -> dict:
    """RegisterRequest payload."""
    return {
        "email": valid_email(),
        "password": LOADTEST_PASSWORD,
        "userType": user_type,
        "fullName": full_name(),
    }


# ---------- Ordering ----------


def shipping_address() -> str:
    return fake.address().replace("\n", ", ")


def cart_item_data(product_ids: list[str], max_quantity: int = 3) -> dict:
    """AddToCartRequest payload for a random seeded product."""
    return {
        "productId": random.choice(product_ids),
        "quantity": random.randint(1, max_quantity),
    }


def checkout_data() -> dict:
    return {"shippingAddress": shipping_address()}


def next_status(current: str) -> str | None:
    """The forward fulfilment step a seller would take next, if any."""
    return {"pending": "shipped", "shipped": "delivered"}.get(current)
