"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Request fields keep the camelCase names the web
client sends; responses are snake_case.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str = Field(alias="productId")
    quantity: int = 1

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {"examples": [{"productId": "prod-001", "quantity": 2}]},
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    shipping_address: str | None = Field(None, alias="shippingAddress")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{"shippingAddress": "123 Main St, Springfield, IL 62701"}]
        },
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"status": "shipped"}]}}


# ---------------------------------------------------------------------------
# Store Schemas
# ---------------------------------------------------------------------------
class SaveStoreRequest(BaseModel):
    store_name: str | None = Field(None, alias="storeName", max_length=255)
    description: str | None = None

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{"storeName": "Handmade Goods", "description": "Ceramics and prints"}]
        },
    }


class StoreResponse(BaseModel):
    id: str
    seller_id: str
    name: str
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
