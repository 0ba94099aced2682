"""Error taxonomy shared by the Identity and Ordering contexts.

Each error carries the HTTP status it maps to and a dict of details that is
safe to return to the caller. Storage details never go into ``details``.
"""

from typing import Any


class MarketplaceError(Exception):
    """Base class for all errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, **self.details}


class InvalidArgument(MarketplaceError):
    """Malformed or missing input (blank address, unknown status, bad quantity)."""

    status_code = 400


class Unauthenticated(MarketplaceError):
    """No credential, or a credential that failed verification."""

    status_code = 401


class Forbidden(MarketplaceError):
    """The caller's role does not permit the operation."""

    status_code = 403


class NotFound(MarketplaceError):
    """The entity does not exist or does not belong to the caller."""

    status_code = 404


class InvalidState(MarketplaceError):
    """The entity exists but its state does not permit the operation."""

    status_code = 409


class InsufficientStock(InvalidState):
    """Requested quantity exceeds available stock for a product."""

    def __init__(self, product_id: str, product_name: str | None, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name or product_id}: requested {requested}, available {available}",
            product_id=str(product_id),
            product_name=product_name,
            requested=requested,
            available=available,
        )
        self.product_id = str(product_id)
        self.requested = requested
        self.available = available


class Internal(MarketplaceError):
    """Storage or transaction failure. The unit of work has been rolled back."""

    status_code = 500
