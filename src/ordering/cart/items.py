"""Cart item management — commands, handler and buyer-facing operations."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain
from shared.errors import InvalidArgument, NotFound
from shared.logging import get_logger
from shared.principal import Principal, Role

from ordering.cart.cart import CartEntry
from ordering.cart.view import cart_view
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.utils.retry import retry_on_conflict

logger = get_logger(__name__)


@ordering.command(part_of="CartEntry")
class AddToCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="CartEntry")
class UpdateCartQuantity:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="CartEntry")
class RemoveFromCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)


def _load_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound("Product not found", product_id=str(product_id))


@ordering.command_handler(part_of=CartEntry)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = _load_product(command.product_id)

        repo = current_domain.repository_for(CartEntry)
        entry = repo.find_entry(command.buyer_id, command.product_id)
        existing = entry.quantity if entry else 0
        product.ensure_available(existing + command.quantity)

        if entry is None:
            entry = CartEntry.create(
                buyer_id=command.buyer_id,
                product_id=command.product_id,
                quantity=command.quantity,
            )
        else:
            entry.increase(command.quantity)
        repo.add(entry)
        return str(entry.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(CartEntry)
        entry = repo.find_entry(command.buyer_id, command.product_id)
        if entry is None:
            raise NotFound("Item not in cart", product_id=str(command.product_id))

        product = _load_product(command.product_id)
        product.ensure_available(command.quantity)

        entry.change_quantity(command.quantity)
        repo.add(entry)
        return str(entry.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(CartEntry)
        entry = repo.find_entry(command.buyer_id, command.product_id)
        if entry is None:
            raise NotFound("Item not in cart", product_id=str(command.product_id))
        repo.remove(entry)


def _validated_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidArgument("Quantity must be a whole number of at least 1", field="quantity")
    return quantity


@retry_on_conflict()
def add_to_cart(principal: Principal, product_id, quantity=1) -> dict:
    principal.require(Role.BUYER, "use a cart")
    quantity = _validated_quantity(quantity)

    current_domain.process(
        AddToCart(buyer_id=principal.user_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )
    logger.info("cart_item_added", buyer_id=principal.user_id, product_id=str(product_id), quantity=quantity)
    return cart_view(principal)


@retry_on_conflict()
def update_cart_quantity(principal: Principal, product_id, quantity) -> dict:
    principal.require(Role.BUYER, "use a cart")
    quantity = _validated_quantity(quantity)

    current_domain.process(
        UpdateCartQuantity(buyer_id=principal.user_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )
    return cart_view(principal)


@retry_on_conflict()
def remove_from_cart(principal: Principal, product_id) -> dict:
    principal.require(Role.BUYER, "use a cart")

    current_domain.process(
        RemoveFromCart(buyer_id=principal.user_id, product_id=product_id),
        asynchronous=False,
    )
    return cart_view(principal)
