from types import SimpleNamespace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.auth.tokens import issue_token
from ordering.api.routes import cart_router, checkout_router, order_router, seller_router
from shared.http import register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(order_router)
    app.include_router(seller_router)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def headers_for():
    """Factory: Authorization header carrying a session token for a principal."""

    def _headers(principal):
        user = SimpleNamespace(
            id=principal.user_id,
            role=principal.role.value,
            email=principal.email,
            full_name=principal.full_name,
        )
        return {"Authorization": f"Bearer {issue_token(user)}"}

    return _headers
