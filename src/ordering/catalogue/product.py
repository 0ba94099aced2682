"""Product aggregate: the catalogue record whose stock the ledger reserves and restores.

Sellers own products through their store. Generic product editing lives
outside this service; the ledger only reads the price and moves the
``stock_quantity`` counter, which can never drop below zero.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text
from shared.errors import InsufficientStock

from ordering.catalogue.events import StockReserved, StockRestored
from ordering.domain import ordering


@ordering.aggregate
class Product:
    seller_id = Identifier(required=True)
    store_id = Identifier()
    name = String(required=True, max_length=255, sanitize=False)
    description = Text(sanitize=False)
    price = Float(required=True, min_value=0.01)
    stock_quantity = Integer(default=0, min_value=0)
    image_url = String(max_length=500, sanitize=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        seller_id,
        name,
        price,
        stock_quantity=0,
        store_id=None,
        description=None,
        image_url=None,
    ):
        now = datetime.now(UTC)
        return cls(
            seller_id=seller_id,
            store_id=store_id,
            name=name,
            description=description,
            price=round(float(price), 2),
            stock_quantity=stock_quantity,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )

    def ensure_available(self, quantity):
        """Stock sufficiency check. Raises before anything is mutated."""
        if quantity > self.stock_quantity:
            raise InsufficientStock(
                product_id=str(self.id),
                product_name=self.name,
                requested=quantity,
                available=self.stock_quantity,
            )

    def reserve_stock(self, quantity, order_id):
        """Take ``quantity`` units out of stock for an order."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self.ensure_available(quantity)

        now = datetime.now(UTC)
        self.stock_quantity -= quantity
        self.updated_at = now

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                remaining=self.stock_quantity,
                reserved_at=now,
            )
        )

    def restore_stock(self, quantity, order_id):
        """Put back stock consumed by a cancelled order."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        self.stock_quantity += quantity
        self.updated_at = now

        self.raise_(
            StockRestored(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                remaining=self.stock_quantity,
                restored_at=now,
            )
        )

    def change_price(self, new_price):
        """Reprice the product. Orders already placed keep their captured price."""
        self.price = round(float(new_price), 2)
        self.updated_at = datetime.now(UTC)
