"""Read projections over the order ledger for buyers and sellers.

Buyer views show every line of the buyer's own orders. Seller views show an
order only when it holds at least one of the seller's lines, and then only
those lines, with a ``seller_total`` computed from them alone.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from shared.errors import NotFound
from shared.principal import Principal, Role

from ordering.catalogue.product import Product
from ordering.catalogue.store import Store
from ordering.order.order import Order, OrderLine, OrderStatus


def _newest_first(orders):
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


class _CatalogueLookup:
    """Per-query cache of products and stores used to decorate order lines."""

    def __init__(self):
        self._products = {}
        self._stores = {}

    def product(self, product_id):
        key = str(product_id)
        if key not in self._products:
            try:
                self._products[key] = current_domain.repository_for(Product).get(key)
            except ObjectNotFoundError:
                self._products[key] = None
        return self._products[key]

    def store_name(self, store_id):
        if not store_id:
            return None
        key = str(store_id)
        if key not in self._stores:
            try:
                self._stores[key] = current_domain.repository_for(Store).get(key).name
            except ObjectNotFoundError:
                self._stores[key] = None
        return self._stores[key]


def _line_view(line: OrderLine, lookup: _CatalogueLookup) -> dict:
    product = lookup.product(line.product_id)
    return {
        "id": str(line.id),
        "product_id": str(line.product_id),
        "seller_id": str(line.seller_id),
        "product_name": product.name if product else line.product_name,
        "image_url": product.image_url if product else None,
        "store_name": lookup.store_name(product.store_id) if product else None,
        "quantity": line.quantity,
        "price": line.price,
        "line_total": line.line_total,
    }


def _order_view(order: Order, lines, lookup: _CatalogueLookup) -> dict:
    return {
        "id": str(order.id),
        "buyer_id": str(order.buyer_id),
        "status": order.status,
        "total_amount": order.total_amount,
        "shipping_address": order.shipping_address,
        "payment_method": order.payment_method,
        "cancelled_by": order.cancelled_by,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "items": [_line_view(line, lookup) for line in lines],
    }


def buyer_orders(principal: Principal) -> list[dict]:
    principal.require(Role.BUYER, "view their orders")
    orders = current_domain.repository_for(Order)._dao.query.filter(buyer_id=str(principal.user_id)).all().items
    lookup = _CatalogueLookup()
    return [_order_view(order, order.lines, lookup) for order in _newest_first(orders)]


def buyer_order(principal: Principal, order_id) -> dict:
    principal.require(Role.BUYER, "view their orders")
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound("Order not found", order_id=str(order_id))
    if str(order.buyer_id) != str(principal.user_id):
        raise NotFound("Order not found", order_id=str(order_id))
    return _order_view(order, order.lines, _CatalogueLookup())


def _seller_order_ids(seller_id) -> set[str]:
    lines = current_domain.repository_for(OrderLine)._dao.query.filter(seller_id=str(seller_id)).all().items
    return {str(line.order_id) for line in lines}


def _seller_view(order: Order, seller_id, lookup: _CatalogueLookup) -> dict:
    lines = order.lines_for_seller(seller_id)
    view = _order_view(order, lines, lookup)
    view["buyer_name"] = order.buyer_name
    view["buyer_email"] = order.buyer_email
    view["seller_total"] = round(sum(line.line_total for line in lines), 2)
    return view


def seller_orders(principal: Principal, status=None) -> list[dict]:
    """Orders holding at least one of the seller's lines, optionally narrowed to one status."""
    principal.require(Role.SELLER, "view seller orders")
    wanted = OrderStatus.parse(status) if status else None

    repo = current_domain.repository_for(Order)
    orders = []
    for order_id in _seller_order_ids(principal.user_id):
        try:
            order = repo.get(order_id)
        except ObjectNotFoundError:
            continue
        if wanted is None or order.current_status == wanted:
            orders.append(order)

    lookup = _CatalogueLookup()
    return [_seller_view(order, principal.user_id, lookup) for order in _newest_first(orders)]


def seller_order_stats(principal: Principal) -> dict:
    """Order counts per status and revenue from the seller's non-cancelled lines."""
    views = seller_orders(principal)
    counts = {status.value: 0 for status in OrderStatus}
    revenue = 0.0
    for view in views:
        counts[view["status"]] += 1
        if view["status"] != OrderStatus.CANCELLED.value:
            revenue += view["seller_total"]

    return {
        "total_orders": len(views),
        "by_status": counts,
        "revenue": round(revenue, 2),
    }


def seller_order(principal: Principal, order_id) -> dict:
    """A single order as the seller sees it: their own lines only."""
    principal.require(Role.SELLER, "view seller orders")
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound("Order not found", order_id=str(order_id))
    if not order.lines_for_seller(principal.user_id):
        raise NotFound("Order not found", order_id=str(order_id))
    return _seller_view(order, principal.user_id, _CatalogueLookup())
