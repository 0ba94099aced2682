"""Fixtures for cross-domain tests.

Requests go through the same prefix-to-domain routing the application uses,
so a token issued by Identity is honoured by Ordering routes.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.pytest import DomainFixture
from shared.http import register_domain_context, register_error_handlers


@pytest.fixture(scope="session")
def marketplace_beds():
    from identity.domain import identity
    from ordering.domain import ordering

    beds = {"identity": DomainFixture(identity), "ordering": DomainFixture(ordering)}
    for bed in beds.values():
        bed.setup()
    yield beds
    for bed in beds.values():
        bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_beds):
    """Ordering is the current domain inside a test; both are reset afterwards."""
    with marketplace_beds["identity"].domain_context():
        with marketplace_beds["ordering"].domain_context():
            yield


@pytest.fixture()
def client():
    from identity.api import router as identity_router
    from identity.domain import identity
    from ordering.api import cart_router, checkout_router, order_router, seller_router
    from ordering.domain import ordering

    app = FastAPI()
    register_error_handlers(app)
    register_domain_context(
        app,
        {
            "/auth": identity,
            "/cart": ordering,
            "/checkout": ordering,
            "/orders": ordering,
            "/seller": ordering,
        },
    )
    for router in (identity_router, cart_router, checkout_router, order_router, seller_router):
        app.include_router(router)
    return TestClient(app, raise_server_exceptions=False)
