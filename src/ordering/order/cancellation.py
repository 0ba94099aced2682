"""Buyer cancellation — command, handler and the shared stock restoration step."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain
from shared.errors import NotFound
from shared.logging import get_logger
from shared.principal import Principal, Role

from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.order.order import CancellationActor, Order
from ordering.utils.retry import retry_on_conflict

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound("Order not found", order_id=str(order_id))


def restore_stock(order: Order) -> int:
    """Give every line's quantity back to its product. Returns units restored.

    Must run in the same unit of work that marks the order cancelled; the
    pending-only guard on ``Order.cancel`` is what keeps it to a single run.
    Lines whose product has been deleted since checkout are skipped.
    """
    repo = current_domain.repository_for(Product)
    restored = 0
    for line in sorted(order.lines, key=lambda line: str(line.product_id)):
        try:
            product = repo.get(line.product_id)
        except ObjectNotFoundError:
            logger.warning(
                "stock_restore_skipped",
                order_id=str(order.id),
                product_id=str(line.product_id),
                quantity=line.quantity,
            )
            continue

        product.restore_stock(line.quantity, order_id=order.id)
        repo.add(product)
        restored += line.quantity
        logger.info(
            "stock_restored",
            order_id=str(order.id),
            product_id=str(product.id),
            quantity=line.quantity,
            stock_quantity=product.stock_quantity,
        )
    return restored


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load_order(command.order_id)
        if str(order.buyer_id) != str(command.buyer_id):
            raise NotFound("Order not found", order_id=str(command.order_id))

        order.cancel(CancellationActor.BUYER)
        restore_stock(order)
        current_domain.repository_for(Order).add(order)
        return str(order.id)


@retry_on_conflict()
def cancel_order(principal: Principal, order_id) -> Order:
    principal.require(Role.BUYER, "cancel orders")

    current_domain.process(
        CancelOrder(order_id=order_id, buyer_id=principal.user_id),
        asynchronous=False,
    )
    order = load_order(order_id)
    logger.info("order_cancelled", order_id=str(order_id), buyer_id=principal.user_id, cancelled_by="buyer")
    return order
