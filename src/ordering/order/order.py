"""Order aggregate — an immutable record of what was bought at checkout.

Items, total, customer details and shipping address are snapshots taken at
submission and never change afterwards. Only the status moves, and only by
back-office action.

State Machine:
    pending → processing → shipped → delivered
    pending | processing | shipped → cancelled
    delivered and cancelled are terminal.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged
from shared.store.records import OrderStatus, PaymentMethod, can_transition


@ordering.value_object(part_of="Order")
class CustomerDetails:
    identity_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    full_name = String(required=True, max_length=200)
    phone = String(max_length=30)


@ordering.value_object(part_of="Order")
class ShippingAddress:
    full_name = String(required=True, max_length=200)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@ordering.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)


@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    customer = ValueObject(CustomerDetails, required=True)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    address = ValueObject(ShippingAddress, required=True)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.PAY_ON_DELIVERY.value)
    idempotency_key = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

    @classmethod
    def place(cls, customer, address, items, total, payment_method, idempotency_key=None, created_at=None):
        """Create a pending order from a cart snapshot.

        ``items`` is a sequence of mappings with product_id, name,
        unit_price and quantity.
        """
        if not items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = created_at or datetime.now(UTC)
        order = cls(
            customer_id=customer.identity_id,
            customer=customer,
            address=address,
            items=[OrderItem(**item) for item in items],
            total=total,
            status=OrderStatus.PENDING.value,
            payment_method=payment_method,
            idempotency_key=idempotency_key,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer.identity_id),
                item_count=sum(item["quantity"] for item in items),
                total=total,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    def transition_to(self, status: OrderStatus):
        self._assert_can_transition(status)

        previous = self.status
        now = datetime.now(UTC)
        self.status = status.value
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=status.value,
                changed_at=now,
            )
        )

    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if not can_transition(current, target_status):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})
