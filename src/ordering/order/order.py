"""Order aggregate: the ledger record created by checkout.

Lines capture the product name, seller and unit price at the moment of
checkout, so later catalogue edits never change what the buyer owes.

State Machine:
    PENDING → SHIPPED → DELIVERED
    PENDING → CANCELLED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text
from shared.errors import InvalidArgument, InvalidState

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value):
        """Map a caller-supplied status string onto the vocabulary."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            legal = ", ".join(status.value for status in cls)
            raise InvalidArgument(f"Invalid status. Must be one of: {legal}", field="status", allowed=legal)


class CancellationActor(Enum):
    BUYER = "buyer"
    SELLER = "seller"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """One product in an order, with the name, seller and price captured at checkout."""

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_name = String(required=True, max_length=255, sanitize=False)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def line_total(self):
        return round(self.price * self.quantity, 2)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    buyer_id = Identifier(required=True)
    buyer_email = String(max_length=255, sanitize=False)
    buyer_name = String(max_length=255, sanitize=False)
    total_amount = Float(required=True, min_value=0.0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    shipping_address = Text(required=True, sanitize=False)
    payment_method = String(max_length=50, default="cash_on_delivery")
    cancelled_by = String(max_length=50)
    lines = HasMany(OrderLine)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(
        cls,
        buyer_id,
        shipping_address,
        lines_data,
        buyer_email=None,
        buyer_name=None,
        payment_method="cash_on_delivery",
    ):
        """Record a new pending order.

        Args:
            lines_data: List of dicts with product_id, seller_id, product_name,
                        quantity and price (the unit price at checkout).
        """
        now = datetime.now(UTC)
        lines = [
            OrderLine(
                product_id=line["product_id"],
                seller_id=line["seller_id"],
                product_name=line["product_name"],
                quantity=line["quantity"],
                price=line["price"],
            )
            for line in lines_data
        ]

        order = cls(
            buyer_id=buyer_id,
            buyer_email=buyer_email,
            buyer_name=buyer_name,
            total_amount=round(sum(line.price * line.quantity for line in lines), 2),
            shipping_address=shipping_address,
            payment_method=payment_method,
            created_at=now,
            updated_at=now,
        )
        order.add_lines(lines)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(buyer_id),
                lines=json.dumps(lines_data, default=str),
                item_count=sum(line.quantity for line in lines),
                total_amount=order.total_amount,
                shipping_address=shipping_address,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    @property
    def current_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    def can_transition_to(self, target_status: OrderStatus) -> bool:
        return target_status in _VALID_TRANSITIONS.get(self.current_status, set())

    def _assert_can_transition(self, target_status: OrderStatus):
        current = self.current_status
        if not self.can_transition_to(target_status):
            raise InvalidState(
                f"Cannot change order status from {current.value} to {target_status.value}",
                current_status=current.value,
                requested_status=target_status.value,
            )

    def lines_for_seller(self, seller_id) -> list[OrderLine]:
        return [line for line in self.lines if str(line.seller_id) == str(seller_id)]

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def cancel(self, cancelled_by: CancellationActor):
        """Move a pending order to cancelled. Stock restoration is the caller's job."""
        current = self.current_status
        if current != OrderStatus.PENDING:
            raise InvalidState(
                f"Order cannot be cancelled. Current status: {current.value}",
                current_status=current.value,
            )

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_by = cancelled_by.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                previous_status=current.value,
                cancelled_by=cancelled_by.value,
                cancelled_at=now,
            )
        )

    def change_status(self, target_status: OrderStatus, changed_by):
        """Apply a seller-driven transition. Cancellation goes through ``cancel``."""
        self._assert_can_transition(target_status)
        if target_status == OrderStatus.CANCELLED:
            self.cancel(CancellationActor.SELLER)
            return

        previous = self.current_status
        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous.value,
                new_status=target_status.value,
                changed_by=str(changed_by),
                changed_at=now,
            )
        )
