"""Seller-driven status transitions.

Status belongs to the whole order, so a seller who sold any line in it may
move it along. A seller cancelling a pending order restores stock exactly
like a buyer cancellation does.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from shared.errors import NotFound
from shared.logging import get_logger
from shared.principal import Principal, Role

from ordering.domain import ordering
from ordering.order.cancellation import load_order, restore_stock
from ordering.order.order import Order, OrderStatus
from ordering.utils.retry import retry_on_conflict

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        order = load_order(command.order_id)
        if not order.lines_for_seller(command.seller_id):
            raise NotFound("Order not found", order_id=str(command.order_id))

        target = OrderStatus(command.status)
        previous = order.current_status
        order.change_status(target, changed_by=command.seller_id)
        if target == OrderStatus.CANCELLED:
            restore_stock(order)
        current_domain.repository_for(Order).add(order)
        return previous.value


@retry_on_conflict()
def update_order_status(principal: Principal, order_id, status) -> Order:
    principal.require(Role.SELLER, "update order status")
    target = OrderStatus.parse(status)

    previous = current_domain.process(
        UpdateOrderStatus(order_id=order_id, seller_id=principal.user_id, status=target.value),
        asynchronous=False,
    )
    logger.info(
        "order_status_changed",
        order_id=str(order_id),
        seller_id=principal.user_id,
        previous_status=previous,
        new_status=target.value,
    )
    return load_order(order_id)
