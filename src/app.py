"""Marketplace FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the config overlay in each domain.toml:
#   - "test"       → in-memory stores, testing flag on
#   - "production" → PostgreSQL via DATABASE_URL
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity  # noqa: E402
from ordering.domain import ordering  # noqa: E402
from shared.http import register_domain_context, register_error_handlers

identity.init()
ordering.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/cart": ordering,
    "/checkout": ordering,
    "/orders": ordering,
    "/seller": ordering,
}


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Marketplace API",
    description="Two-sided marketplace: accounts, carts, checkout and the order ledger",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)
register_domain_context(app, ROUTE_DOMAIN_MAP)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from identity.api import router as identity_router  # noqa: E402
from ordering.api import cart_router, checkout_router, order_router, seller_router  # noqa: E402

app.include_router(identity_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(seller_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "identity": {"name": identity.name},
                "ordering": {"name": ordering.name},
            },
        }
    )
