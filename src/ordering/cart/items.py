"""Cart item management — commands and handler.

Quantities are deliberately not range-checked on the commands: the cart
aggregate rejects them with ``InvalidCartOperation`` so callers get one
consistent error for bad cart input.
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.management import cart_for
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True)
    discount = Float(default=0.0)
    quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    new_quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        cart = cart_for(command.customer_id)
        cart.add_item(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            quantity=command.quantity,
            discount=command.discount,
        )
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = cart_for(command.customer_id)
        cart.update_quantity(product_id=command.product_id, new_quantity=command.new_quantity)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = cart_for(command.customer_id)
        if cart.remove_item(product_id=command.product_id):
            current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = cart_for(command.customer_id)
        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)
