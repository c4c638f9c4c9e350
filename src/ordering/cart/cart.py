"""Shopping Cart aggregate — one cart per identity, keyed by product.

Each line snapshots the product's name and effective (discounted) price at
the time it is added. The cart total is derived from the lines on every
read and never stored. Every mutation validates its input before touching
state, so a rejected operation leaves the cart exactly as it was.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.cart import pricing
from ordering.domain import ordering
from shared.errors import InvalidCartOperation
from shared.store.records import LineItem


def _is_whole_number(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    list_price = Float(min_value=0.0)
    discount = Float(min_value=0.0, max_value=100.0, default=0.0)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def line_total(self) -> float:
        return pricing.line_total(self.unit_price, self.quantity)


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def total(self) -> float:
        return pricing.cart_total(self.items)

    def get_total(self) -> float:
        return self.total

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def snapshot(self) -> tuple[LineItem, ...]:
        """Immutable copy of the lines, detached from the cart."""
        return tuple(
            LineItem(
                product_id=str(item.product_id),
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for item in self.items
        )

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, price, quantity=1, discount=0.0):
        """Add ``quantity`` of a product, or increase the quantity of its existing line."""
        if not _is_whole_number(quantity) or quantity < 1:
            raise InvalidCartOperation({"quantity": ["Quantity must be a whole number of at least 1"]})
        try:
            unit_price = pricing.effective_unit_price(price, discount)
        except (TypeError, ValueError) as exc:
            raise InvalidCartOperation({"price": [str(exc)]}) from None

        now = datetime.now(UTC)
        existing = self.find_item(product_id)
        if existing:
            existing.quantity += quantity
            new_quantity = existing.quantity
            unit_price = existing.unit_price
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    name=name,
                    unit_price=unit_price,
                    list_price=price,
                    discount=discount or 0.0,
                    quantity=quantity,
                    added_at=now,
                )
            )
            new_quantity = quantity

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                quantity=quantity,
                new_quantity=new_quantity,
                unit_price=unit_price,
            )
        )

    def add_product(self, product, quantity=1):
        """Add a catalogue product record (anything with id, name, price and discount)."""
        self.add_item(
            product_id=product.id,
            name=product.name,
            price=product.price,
            quantity=quantity,
            discount=product.discount,
        )

    def update_quantity(self, product_id, new_quantity):
        if not _is_whole_number(new_quantity) or new_quantity < 1:
            raise InvalidCartOperation({"quantity": ["Quantity must be at least 1; remove the item instead"]})

        item = self.find_item(product_id)
        if item is None:
            raise InvalidCartOperation({"product_id": ["Item not found in cart"]})

        previous_quantity = item.quantity
        if previous_quantity == new_quantity:
            return

        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id) -> bool:
        """Remove the line for ``product_id``. Returns False when there was none."""
        item = self.find_item(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))
        return True

    def clear(self):
        """Empty the cart. Only checkout calls this, after the order is persisted."""
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)

        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), customer_id=str(self.customer_id), items_removed=removed))
