"""Order placement — command and handler.

Placement is idempotent on ``idempotency_key``: a retried submission for
the same checkout run returns the order that already exists instead of
creating a second one. The document store adapter runs the lookup and the
write under one lock, so concurrent retries in this process cannot both
miss the existing order.
"""

import json

import structlog
from protean import handle
from protean.fields import DateTime, Float, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import CustomerDetails, Order, ShippingAddress

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer = Text(required=True)  # JSON: identity_id, email, full_name, phone
    address = Text(required=True)  # JSON: shipping address fields
    items = Text(required=True)  # JSON: list of {product_id, name, unit_price, quantity}
    total = Float(required=True)
    payment_method = String(required=True, max_length=30)
    idempotency_key = String(max_length=100)
    created_at = DateTime()


def find_by_idempotency_key(key) -> Order | None:
    if not key:
        return None
    orders = current_domain.repository_for(Order)._dao.query.filter(idempotency_key=key).all().items
    return orders[0] if orders else None


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        existing = find_by_idempotency_key(command.idempotency_key)
        if existing is not None:
            logger.info(
                "Duplicate order submission ignored",
                order_id=str(existing.id),
                idempotency_key=command.idempotency_key,
            )
            return str(existing.id)

        order = Order.place(
            customer=CustomerDetails(**json.loads(command.customer)),
            address=ShippingAddress(**json.loads(command.address)),
            items=json.loads(command.items),
            total=command.total,
            payment_method=command.payment_method,
            idempotency_key=command.idempotency_key,
            created_at=command.created_at,
        )
        current_domain.repository_for(Order).add(order)
        logger.info("Order placed", order_id=str(order.id), total=command.total)
        return str(order.id)
