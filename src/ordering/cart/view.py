"""Read-side view of a buyer's cart, joined with current product data."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from shared.principal import Principal, Role

from ordering.cart.cart import CartEntry
from ordering.catalogue.product import Product


def cart_view(principal: Principal) -> dict:
    """Cart lines with product name, price, image and stock, plus totals.

    Entries whose product has been deleted are left out, the same way an
    inner join would drop them.
    """
    principal.require(Role.BUYER, "use a cart")

    entries = current_domain.repository_for(CartEntry).for_buyer(principal.user_id)
    product_repo = current_domain.repository_for(Product)

    items = []
    for entry in entries:
        try:
            product = product_repo.get(entry.product_id)
        except ObjectNotFoundError:
            continue
        items.append(
            {
                "id": str(entry.id),
                "product_id": str(product.id),
                "product_name": product.name,
                "price": product.price,
                "image_url": product.image_url,
                "stock_quantity": product.stock_quantity,
                "quantity": entry.quantity,
                "line_total": round(product.price * entry.quantity, 2),
            }
        )

    return {
        "items": items,
        "total": round(sum(item["line_total"] for item in items), 2),
        "item_count": sum(item["quantity"] for item in items),
    }
