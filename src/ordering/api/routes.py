"""FastAPI routes for the Ordering domain — cart, checkout, orders and seller views.

Every route takes the caller's Principal from ``current_principal`` and
hands it to the ledger operation, which enforces the role. Routes are plain
functions: ledger operations block on the database and on conflict backoff,
so FastAPI runs them in its threadpool.
"""

from fastapi import APIRouter, Depends
from identity.auth.dependencies import current_principal
from shared.principal import Principal

from ordering.api.schemas import (
    AddToCartRequest,
    CheckoutRequest,
    SaveStoreRequest,
    StoreResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from ordering.cart.items import add_to_cart, remove_from_cart, update_cart_quantity
from ordering.cart.view import cart_view
from ordering.catalogue.management import save_store, seller_store
from ordering.catalogue.store import Store
from ordering.order.cancellation import cancel_order
from ordering.order.checkout import checkout
from ordering.order.queries import (
    buyer_order,
    buyer_orders,
    seller_order,
    seller_order_stats,
    seller_orders,
)
from ordering.order.status import update_order_status


def _store_response(store: Store) -> StoreResponse:
    return StoreResponse(
        id=str(store.id),
        seller_id=str(store.seller_id),
        name=store.name,
        description=store.description,
        created_at=store.created_at.isoformat() if store.created_at else None,
        updated_at=store.updated_at.isoformat() if store.updated_at else None,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("")
def get_cart(principal: Principal = Depends(current_principal)) -> dict:
    return cart_view(principal)


@cart_router.post("", status_code=201)
def add_cart_item(body: AddToCartRequest, principal: Principal = Depends(current_principal)) -> dict:
    return add_to_cart(principal, product_id=body.product_id, quantity=body.quantity)


@cart_router.put("/{product_id}")
def update_cart_item(
    product_id: str, body: UpdateCartQuantityRequest, principal: Principal = Depends(current_principal)
) -> dict:
    return update_cart_quantity(principal, product_id=product_id, quantity=body.quantity)


@cart_router.delete("/{product_id}")
def remove_cart_item(product_id: str, principal: Principal = Depends(current_principal)) -> dict:
    return remove_from_cart(principal, product_id=product_id)


# ---------------------------------------------------------------------------
# Checkout & Order Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["orders"])


@checkout_router.post("", status_code=201)
def place_order(body: CheckoutRequest, principal: Principal = Depends(current_principal)) -> dict:
    order = checkout(principal, body.shipping_address)
    return {"message": "Order placed successfully", "order": buyer_order(principal, order.id)}


order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("")
def list_orders(principal: Principal = Depends(current_principal)) -> list[dict]:
    return buyer_orders(principal)


@order_router.get("/{order_id}")
def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> dict:
    return buyer_order(principal, order_id)


@order_router.put("/{order_id}/cancel")
def cancel(order_id: str, principal: Principal = Depends(current_principal)) -> dict:
    cancel_order(principal, order_id)
    return {"message": "Order cancelled successfully", "order": buyer_order(principal, order_id)}


# ---------------------------------------------------------------------------
# Seller Router
# ---------------------------------------------------------------------------
seller_router = APIRouter(prefix="/seller", tags=["seller"])


@seller_router.get("/orders")
def list_seller_orders(status: str | None = None, principal: Principal = Depends(current_principal)) -> list[dict]:
    return seller_orders(principal, status=status)


@seller_router.get("/orders/stats")
def get_seller_stats(principal: Principal = Depends(current_principal)) -> dict:
    return seller_order_stats(principal)


@seller_router.put("/orders/{order_id}/status")
def change_order_status(
    order_id: str, body: UpdateOrderStatusRequest, principal: Principal = Depends(current_principal)
) -> dict:
    update_order_status(principal, order_id, body.status)
    return {"message": "Order status updated", "order": seller_order(principal, order_id)}


@seller_router.get("/store", response_model=StoreResponse)
def get_store(principal: Principal = Depends(current_principal)) -> StoreResponse:
    return _store_response(seller_store(principal))


@seller_router.post("/store", response_model=StoreResponse)
def put_store(body: SaveStoreRequest, principal: Principal = Depends(current_principal)) -> StoreResponse:
    return _store_response(save_store(principal, name=body.store_name, description=body.description))
