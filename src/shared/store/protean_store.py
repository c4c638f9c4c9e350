"""Document store backed by the storefront's Protean domains.

Each collection is owned by one bounded context: products by catalogue,
orders by ordering, user profiles by identity. Every call pushes the owning
domain's context, so the adapter can be used from any thread and from
inside another domain's request. Writes go through the domains' commands;
reads go straight to their repositories.

Storage failures surface as ``DocumentStoreError``.
"""

import json
from collections.abc import Iterable
from contextlib import contextmanager

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from sqlalchemy.exc import SQLAlchemyError

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.product.sync import ReplaceCatalogue
from identity.account.account import Account
from identity.account.management import UpdateAccountProfile
from identity.domain import identity
from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.status import UpdateOrderStatus
from shared.store.port import DocumentStore, DocumentStoreError
from shared.store.records import (
    AddressRecord,
    Collection,
    CustomerContact,
    LineItem,
    OrderRecord,
    OrderStatus,
    PaymentMethod,
    ProductFilter,
    ProductRecord,
    ProfileRecord,
    Role,
)

logger = structlog.get_logger(__name__)


@contextmanager
def _storage(domain, operation: str):
    with domain.domain_context():
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("Storage failure", domain=domain.name, operation=operation, error=str(exc))
            raise DocumentStoreError(operation, str(exc)) from exc


# ---------------------------------------------------------------------------
# Aggregate → record translation
# ---------------------------------------------------------------------------
def _product_record(product: Product) -> ProductRecord:
    return ProductRecord(
        id=str(product.id),
        name=product.name,
        price=product.price,
        category=product.category,
        description=product.description or "",
        image=product.image or "",
        stock=product.stock or 0,
        discount=product.discount or 0.0,
        rating=product.rating,
        featured=bool(product.featured),
        is_active=bool(product.is_active),
    )


def _order_record(order: Order) -> OrderRecord:
    customer = order.customer
    address = order.address
    return OrderRecord(
        id=str(order.id),
        items=tuple(
            LineItem(
                product_id=str(item.product_id),
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for item in order.items
        ),
        total=order.total,
        status=OrderStatus(order.status),
        customer=CustomerContact(
            identity_id=str(customer.identity_id),
            email=customer.email,
            full_name=customer.full_name,
            phone=customer.phone,
        ),
        address=AddressRecord(
            full_name=address.full_name,
            street=address.street,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
        ),
        payment_method=PaymentMethod(order.payment_method),
        idempotency_key=order.idempotency_key,
        created_at=order.created_at,
    )


def _profile_record(account: Account) -> ProfileRecord:
    return ProfileRecord(
        identity_id=str(account.user_id),
        email=account.email,
        display_name=account.display_name,
        role=Role(account.role) if account.role else Role.CUSTOMER,
        address=AddressRecord(**account.address.to_dict()) if account.address else None,
        wishlist=tuple(account.wishlist_ids),
    )


class ProteanDocumentStore(DocumentStore):
    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def create_order(self, order: OrderRecord) -> str:
        with self._order_write_lock, _storage(ordering, "create_order"):
            order_id = current_domain.process(
                PlaceOrder(
                    customer=json.dumps(order.customer.model_dump()),
                    address=json.dumps(order.address.model_dump()),
                    items=json.dumps([item.model_dump() for item in order.items]),
                    total=order.total,
                    payment_method=order.payment_method.value,
                    idempotency_key=order.idempotency_key,
                    created_at=order.created_at,
                ),
                asynchronous=False,
            )
        self._publish(Collection.ORDERS, order_id)
        return order_id

    def update_order_status(self, order_id: str, status: OrderStatus) -> OrderRecord:
        with _storage(ordering, "update_order_status"):
            current_domain.process(UpdateOrderStatus(order_id=order_id, status=status.value), asynchronous=False)
            record = _order_record(current_domain.repository_for(Order).get(order_id))
        self._publish(Collection.ORDERS, order_id)
        return record

    def get_order(self, order_id: str) -> OrderRecord | None:
        with _storage(ordering, "get_order"):
            try:
                return _order_record(current_domain.repository_for(Order).get(order_id))
            except ObjectNotFoundError:
                return None

    def list_orders(self, customer_id: str | None = None) -> list[OrderRecord]:
        with _storage(ordering, "list_orders"):
            query = current_domain.repository_for(Order)._dao.query
            if customer_id is not None:
                query = query.filter(customer_id=customer_id)
            orders = [_order_record(order) for order in query.all().items]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    # -------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------
    def get_product(self, product_id: str) -> ProductRecord | None:
        with _storage(catalogue, "get_product"):
            try:
                return _product_record(current_domain.repository_for(Product).get(product_id))
            except ObjectNotFoundError:
                return None

    def list_products(self, product_filter: ProductFilter | None = None) -> list[ProductRecord]:
        product_filter = product_filter or ProductFilter()
        with _storage(catalogue, "list_products"):
            products = current_domain.repository_for(Product)._dao.query.all().items
            records = [_product_record(product) for product in products]
        return [record for record in records if product_filter.matches(record)]

    def replace_products(self, products: Iterable[dict]) -> int:
        with _storage(catalogue, "replace_products"):
            count = current_domain.process(
                ReplaceCatalogue(products=json.dumps(list(products))),
                asynchronous=False,
            )
        self._publish(Collection.PRODUCTS, "*")
        return count

    # -------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------
    def get_profile(self, identity_id: str) -> ProfileRecord | None:
        with _storage(identity, "get_profile"):
            try:
                return _profile_record(current_domain.repository_for(Account).get(identity_id))
            except ObjectNotFoundError:
                return None

    def update_profile(self, identity_id: str, patch: dict) -> ProfileRecord:
        command = {"user_id": identity_id}
        for field in ("email", "display_name"):
            if field in patch:
                command[field] = patch[field]
        if "role" in patch:
            command["role"] = Role(patch["role"]).value
        if "address" in patch:
            address = patch["address"]
            command["address"] = json.dumps(address.model_dump() if isinstance(address, AddressRecord) else address)
        if "wishlist" in patch:
            command["wishlist"] = json.dumps(sorted(patch["wishlist"]))

        with _storage(identity, "update_profile"):
            current_domain.process(UpdateAccountProfile(**command), asynchronous=False)
            record = _profile_record(current_domain.repository_for(Account).get(identity_id))
        self._publish(Collection.USERS, identity_id)
        return record
