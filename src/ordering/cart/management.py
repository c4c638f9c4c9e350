"""Cart management — cart lookup and creation.

There is exactly one cart per identity. It is created empty the first time
the identity touches it and lives for as long as the identity does.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


def find_cart(customer_id) -> ShoppingCart | None:
    repo = current_domain.repository_for(ShoppingCart)
    carts = repo._dao.query.filter(customer_id=str(customer_id)).all().items
    return carts[0] if carts else None


def cart_for(customer_id) -> ShoppingCart:
    """Return the identity's cart, creating (and persisting) an empty one on first use."""
    cart = find_cart(customer_id)
    if cart is None:
        cart = ShoppingCart.create(customer_id=str(customer_id))
        current_domain.repository_for(ShoppingCart).add(cart)
        logger.info("Cart created", customer_id=str(customer_id), cart_id=str(cart.id))
    return cart


@ordering.command(part_of="ShoppingCart")
class CreateCart:
    """Ensure the identity has a cart."""

    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        return str(cart_for(command.customer_id).id)
