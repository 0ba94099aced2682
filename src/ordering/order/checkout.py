"""Checkout — turns a buyer's cart into a pending order.

Everything happens in the unit of work of the ``PlaceOrder`` handler: the
order and its lines are recorded, stock is taken from every product and the
cart is emptied. Any failure rolls back all of it. Every check runs before
the first mutation, so a rejected checkout leaves stock and cart untouched.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from shared.errors import InvalidArgument, InvalidState, NotFound
from shared.logging import get_logger
from shared.principal import Principal, Role

from ordering.cart.cart import CartEntry
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.order.order import Order
from ordering.utils.retry import retry_on_conflict

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    buyer_email = String(max_length=255, sanitize=False)
    buyer_name = String(max_length=255, sanitize=False)
    shipping_address = Text(required=True, sanitize=False)


def load_products(product_ids) -> dict[str, Product]:
    """Load products in ascending id order so concurrent units of work touch rows alike."""
    repo = current_domain.repository_for(Product)
    products = {}
    for product_id in sorted({str(pid) for pid in product_ids}):
        try:
            products[product_id] = repo.get(product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found", product_id=product_id)
    return products


def requested_quantities(entries) -> dict[str, int]:
    """Units wanted per product, summing any entries that share a product."""
    quantities = {}
    for entry in entries:
        product_id = str(entry.product_id)
        quantities[product_id] = quantities.get(product_id, 0) + entry.quantity
    return quantities


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(CartEntry)
        entries = cart_repo.for_buyer(command.buyer_id)
        if not entries:
            raise InvalidState("Cart is empty")

        quantities = requested_quantities(entries)
        products = load_products(quantities)
        for product_id, quantity in quantities.items():
            products[product_id].ensure_available(quantity)

        payment_method = (current_domain.config.get("custom") or {}).get("PAYMENT_METHOD", "cash_on_delivery")
        order = Order.place(
            buyer_id=command.buyer_id,
            buyer_email=command.buyer_email,
            buyer_name=command.buyer_name,
            shipping_address=command.shipping_address,
            payment_method=payment_method,
            lines_data=[
                {
                    "product_id": product_id,
                    "seller_id": str(products[product_id].seller_id),
                    "product_name": products[product_id].name,
                    "quantity": quantity,
                    "price": products[product_id].price,
                }
                for product_id, quantity in quantities.items()
            ],
        )

        for product_id, product in products.items():
            product.reserve_stock(quantities[product_id], order_id=order.id)

        current_domain.repository_for(Order).add(order)
        product_repo = current_domain.repository_for(Product)
        for product in products.values():
            product_repo.add(product)
        cart_repo.clear(command.buyer_id)

        return str(order.id)


@retry_on_conflict()
def checkout(principal: Principal, shipping_address) -> Order:
    """Place an order for everything in the buyer's cart.

    Raises:
        Forbidden: the caller is not a buyer.
        InvalidArgument: the shipping address is missing or blank.
        InvalidState: the cart is empty.
        InsufficientStock: a product has less stock than the cart asks for.
        NotFound: a product in the cart no longer exists.
    """
    principal.require(Role.BUYER, "place orders")
    if not isinstance(shipping_address, str) or not shipping_address.strip():
        raise InvalidArgument("Shipping address is required", field="shippingAddress")

    try:
        order_id = current_domain.process(
            PlaceOrder(
                buyer_id=principal.user_id,
                buyer_email=principal.email,
                buyer_name=principal.full_name,
                shipping_address=shipping_address.strip(),
            ),
            asynchronous=False,
        )
    except (InvalidState, NotFound) as exc:
        logger.warning("checkout_rejected", buyer_id=principal.user_id, reason=exc.message, **exc.details)
        raise

    order = current_domain.repository_for(Order).get(order_id)
    logger.info(
        "order_placed",
        order_id=order_id,
        buyer_id=principal.user_id,
        total_amount=order.total_amount,
        line_count=len(order.lines),
    )
    return order
