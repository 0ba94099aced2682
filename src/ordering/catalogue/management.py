"""Store management — command, handler and seller-facing operations.

A seller's store is created lazily: the first save opens it, later saves
update its details.
"""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from shared.errors import InvalidArgument, NotFound
from shared.logging import get_logger
from shared.principal import Principal, Role

from ordering.catalogue.store import Store
from ordering.domain import ordering

logger = get_logger(__name__)


@ordering.command(part_of="Store")
class SaveStore:
    seller_id = Identifier(required=True)
    name = String(required=True, max_length=255, sanitize=False)
    description = Text(sanitize=False)


@ordering.command_handler(part_of=Store)
class SaveStoreHandler:
    @handle(SaveStore)
    def save_store(self, command):
        repo = current_domain.repository_for(Store)
        store = repo.for_seller(command.seller_id)
        if store is None:
            store = Store.open(
                seller_id=command.seller_id,
                name=command.name,
                description=command.description,
            )
            logger.info("store_opened", store_id=str(store.id), seller_id=str(command.seller_id))
        else:
            store.update_details(name=command.name, description=command.description)
        repo.add(store)
        return str(store.id)


def save_store(principal: Principal, name, description=None) -> Store:
    principal.require(Role.SELLER, "manage a store")
    name = (name or "").strip()
    if not name:
        raise InvalidArgument("Store name is required", field="storeName")

    store_id = current_domain.process(
        SaveStore(seller_id=principal.user_id, name=name, description=description),
        asynchronous=False,
    )
    return current_domain.repository_for(Store).get(store_id)


def seller_store(principal: Principal) -> Store:
    principal.require(Role.SELLER, "view a store")
    store = current_domain.repository_for(Store).for_seller(principal.user_id)
    if store is None:
        raise NotFound("Store not found")
    return store
