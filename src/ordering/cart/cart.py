"""Cart entries: the per-buyer mapping of product to desired quantity.

Each (buyer, product) pair appears at most once. Entries only live between
"add to cart" and either removal or a successful checkout, which deletes all
of the buyer's entries in the same unit of work that creates the order.
"""

import uuid
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer

from ordering.cart.events import CartItemAdded, CartQuantityUpdated
from ordering.domain import ordering


@ordering.aggregate
class CartEntry:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()
    updated_at = DateTime()

    @staticmethod
    def entry_id_for(buyer_id, product_id) -> str:
        """One identity per (buyer, product): concurrent first adds land on the same row."""
        return str(uuid.uuid5(uuid.NAMESPACE_URL, f"cart:{buyer_id}:{product_id}"))

    @classmethod
    def create(cls, buyer_id, product_id, quantity):
        now = datetime.now(UTC)
        entry = cls(
            id=cls.entry_id_for(buyer_id, product_id),
            buyer_id=buyer_id,
            product_id=product_id,
            quantity=quantity,
            added_at=now,
            updated_at=now,
        )
        entry.raise_(
            CartItemAdded(
                entry_id=str(entry.id),
                buyer_id=str(buyer_id),
                product_id=str(product_id),
                added_quantity=quantity,
                quantity=quantity,
            )
        )
        return entry

    def increase(self, quantity):
        """Top up an existing entry when the same product is added again."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        self.quantity += quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemAdded(
                entry_id=str(self.id),
                buyer_id=str(self.buyer_id),
                product_id=str(self.product_id),
                added_quantity=quantity,
                quantity=self.quantity,
            )
        )

    def change_quantity(self, new_quantity):
        previous_quantity = self.quantity
        self.quantity = new_quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartQuantityUpdated(
                entry_id=str(self.id),
                buyer_id=str(self.buyer_id),
                product_id=str(self.product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )


@ordering.repository(part_of=CartEntry)
class CartEntryRepository:
    def for_buyer(self, buyer_id) -> list[CartEntry]:
        """All of a buyer's entries, oldest first."""
        entries = self._dao.query.filter(buyer_id=str(buyer_id)).all().items
        return sorted(entries, key=lambda entry: entry.added_at)

    def find_entry(self, buyer_id, product_id) -> CartEntry | None:
        entries = self._dao.query.filter(buyer_id=str(buyer_id), product_id=str(product_id)).all().items
        return entries[0] if entries else None

    def remove(self, entry: CartEntry) -> None:
        self._dao.delete(entry)

    def clear(self, buyer_id) -> int:
        """Delete every entry of the buyer. Returns how many were removed."""
        entries = self.for_buyer(buyer_id)
        for entry in entries:
            self._dao.delete(entry)
        return len(entries)
