"""Ordering bounded context — catalogue stock, shopping carts and the order ledger.

Checkout turns a buyer's cart into an order and reserves stock in a single
unit of work. Cancellation puts that stock back exactly once. Sellers move
orders forward through shipping and delivery.
"""

from protean.domain import Domain
from shared.logging import configure_logging, get_logger


configure_logging(log_file_prefix="ordering")

logger = get_logger(__name__)

ordering = Domain(name="ordering")
