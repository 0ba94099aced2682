"""Domain events for catalogue records touched by the order ledger."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class StockReserved:
    """Stock was taken out of a product for a newly placed order."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
    reserved_at = DateTime(required=True)


@ordering.event(part_of="Product")
class StockRestored:
    """Stock consumed by a cancelled order was put back on the product."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
    restored_at = DateTime(required=True)


@ordering.event(part_of="Store")
class StoreSaved:
    """A seller created or updated their store."""

    __version__ = 1

    store_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    name = String(required=True, sanitize=False)
    created = Boolean(default=False)
    saved_at = DateTime(required=True)
