"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared
between users. State tracks the session token and the ids returned by
the API so follow-up requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class BuyerState:
    """Tracks state for a single simulated buyer."""

    token: str | None = None
    cart_product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


@dataclass
class SellerState:
    """Tracks state for the seeded seller acting on incoming orders."""

    token: str | None = None
    shipped: int = 0
    delivered: int = 0

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
