"""In-memory document store for development and testing.

Behaves like the hosted store (server-assigned ids, idempotent order
creation, merge-on-write profiles) and can be configured at runtime to fail
or stall selected operations, which is how checkout failure paths are
exercised in tests.
"""

import time
from collections.abc import Iterable
from uuid import uuid4

from protean.exceptions import ObjectNotFoundError, ValidationError

from shared.store.port import DocumentStore, DocumentStoreError
from shared.store.records import (
    AddressRecord,
    Collection,
    OrderRecord,
    OrderStatus,
    ProductFilter,
    ProductRecord,
    ProfileRecord,
    can_transition,
)


class FakeDocumentStore(DocumentStore):
    """Configurable in-memory document store."""

    def __init__(self) -> None:
        super().__init__()
        self.products: dict[str, ProductRecord] = {}
        self.orders: dict[str, OrderRecord] = {}
        self.profiles: dict[str, ProfileRecord] = {}
        self.calls: list[dict] = []
        self.fail_on: set[str] = set()
        self.failure_reason: str = "Store unavailable"
        self.delay: float = 0.0

    def configure(
        self,
        fail_on: Iterable[str] = (),
        failure_reason: str = "Store unavailable",
        delay: float = 0.0,
    ) -> None:
        """Make the named operations fail, or stall every call by ``delay`` seconds."""
        self.fail_on = set(fail_on)
        self.failure_reason = failure_reason
        self.delay = delay

    def reset(self) -> None:
        self.products.clear()
        self.orders.clear()
        self.profiles.clear()
        self.calls.clear()
        self.configure()

    def _record(self, operation: str, **kwargs) -> None:
        self.calls.append({"method": operation, **kwargs})
        if self.delay:
            time.sleep(self.delay)
        if operation in self.fail_on:
            raise DocumentStoreError(operation, self.failure_reason)

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def create_order(self, order: OrderRecord) -> str:
        self._record("create_order", idempotency_key=order.idempotency_key)

        with self._order_write_lock:
            if order.idempotency_key:
                for existing in self.orders.values():
                    if existing.idempotency_key == order.idempotency_key:
                        return existing.id

            order_id = str(uuid4())
            self.orders[order_id] = order.model_copy(update={"id": order_id})
        self._publish(Collection.ORDERS, order_id)
        return order_id

    def update_order_status(self, order_id: str, status: OrderStatus) -> OrderRecord:
        self._record("update_order_status", order_id=order_id, status=status.value)
        if order_id not in self.orders:
            raise ObjectNotFoundError(f"Order with id {order_id} does not exist")

        current = self.orders[order_id].status
        if not can_transition(current, status):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {status.value}"]})

        updated = self.orders[order_id].model_copy(update={"status": status})
        self.orders[order_id] = updated
        self._publish(Collection.ORDERS, order_id)
        return updated

    def get_order(self, order_id: str) -> OrderRecord | None:
        self._record("get_order", order_id=order_id)
        return self.orders.get(order_id)

    def list_orders(self, customer_id: str | None = None) -> list[OrderRecord]:
        self._record("list_orders", customer_id=customer_id)
        orders = [
            order
            for order in self.orders.values()
            if customer_id is None or order.customer.identity_id == customer_id
        ]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    # -------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------
    def get_product(self, product_id: str) -> ProductRecord | None:
        self._record("get_product", product_id=product_id)
        return self.products.get(product_id)

    def list_products(self, product_filter: ProductFilter | None = None) -> list[ProductRecord]:
        self._record("list_products")
        product_filter = product_filter or ProductFilter()
        return [p for p in self.products.values() if product_filter.matches(p)]

    def replace_products(self, products: Iterable[dict]) -> int:
        self._record("replace_products")
        self.products.clear()
        for data in products:
            record = ProductRecord(**{"id": str(uuid4()), **data})
            self.products[record.id] = record
            self._publish(Collection.PRODUCTS, record.id)
        return len(self.products)

    # -------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------
    def get_profile(self, identity_id: str) -> ProfileRecord | None:
        self._record("get_profile", identity_id=identity_id)
        return self.profiles.get(identity_id)

    def update_profile(self, identity_id: str, patch: dict) -> ProfileRecord:
        self._record("update_profile", identity_id=identity_id, fields=sorted(patch))

        current = self.profiles.get(identity_id) or ProfileRecord(identity_id=identity_id)
        data = current.model_dump()
        data.update(patch)
        if isinstance(data.get("address"), dict):
            data["address"] = AddressRecord(**data["address"])
        if data.get("wishlist") is not None:
            data["wishlist"] = tuple(data["wishlist"])

        profile = ProfileRecord(**data)
        self.profiles[identity_id] = profile
        self._publish(Collection.USERS, identity_id)
        return profile

    def seed_profile(self, profile: ProfileRecord) -> None:
        """Store a profile directly, bypassing call recording and failures."""
        self.profiles[profile.identity_id] = profile

    def seed_order(self, order: OrderRecord) -> str:
        order_id = order.id or str(uuid4())
        self.orders[order_id] = order.model_copy(update={"id": order_id})
        return order_id
