import pytest
from ordering.catalogue.product import Product
from ordering.catalogue.store import Store
from protean import current_domain
from protean.integrations.pytest import DomainFixture
from shared.principal import Principal, Role


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Principals
# ---------------------------------------------------------------------------
@pytest.fixture()
def buyer():
    return Principal(user_id="buyer-001", role=Role.BUYER, email="bea@example.com", full_name="Bea Buyer")


@pytest.fixture()
def other_buyer():
    return Principal(user_id="buyer-002", role=Role.BUYER, email="otto@example.com", full_name="Otto Other")


@pytest.fixture()
def seller():
    return Principal(user_id="seller-001", role=Role.SELLER, email="sal@example.com", full_name="Sal Seller")


@pytest.fixture()
def other_seller():
    return Principal(user_id="seller-002", role=Role.SELLER, email="sue@example.com", full_name="Sue Seller")


# ---------------------------------------------------------------------------
# Catalogue helpers
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    """Factory: persist a product for a seller, opening the seller's store if needed."""

    def _make(seller, name="Mug", price=12.5, stock=5):
        store_repo = current_domain.repository_for(Store)
        store = store_repo.for_seller(seller.user_id)
        if store is None:
            store = Store.open(seller_id=seller.user_id, name=f"{seller.full_name}'s Store")
            store_repo.add(store)

        product = Product.create(
            seller_id=seller.user_id,
            store_id=str(store.id),
            name=name,
            price=price,
            stock_quantity=stock,
            image_url=f"https://img.example.com/{name.lower()}.png",
        )
        current_domain.repository_for(Product).add(product)
        return current_domain.repository_for(Product).get(product.id)

    return _make


@pytest.fixture()
def stock_of():
    def _stock(product):
        return current_domain.repository_for(Product).get(product.id).stock_quantity

    return _stock
