"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A buyer checked out their cart and an order was recorded.

    ``lines`` holds the captured lines as a JSON list of
    {product_id, seller_id, product_name, quantity, price}.
    """

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    lines = Text(required=True, sanitize=False)
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    shipping_address = Text(required=True, sanitize=False)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """An order left the pending state without being shipped."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_by = String(required=True)
    cancelled_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """A seller moved the order along its fulfilment path."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = Identifier(required=True)
    changed_at = DateTime(required=True)
