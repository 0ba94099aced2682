"""Domain events for the CartEntry aggregate."""

from protean.fields import Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="CartEntry")
class CartItemAdded:
    """A product was put in a buyer's cart, or its quantity was topped up."""

    __version__ = 1

    entry_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    added_quantity = Integer(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="CartEntry")
class CartQuantityUpdated:
    """The quantity of a cart entry was changed."""

    __version__ = 1

    entry_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
