"""Document Store port (abstract interface).

The storefront talks to its hosted document database only through this
contract, so the checkout flow can be exercised against the in-memory
``FakeDocumentStore`` and run in production against ``ProteanDocumentStore``
without changing any orchestration code.

Live subscriptions are exposed as a capability at this boundary:
``subscribe(collection, on_change)`` returns an ``unsubscribe`` callable and
adapters call ``_publish`` after every committed write.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

import structlog

from shared.store.records import (
    Collection,
    OrderRecord,
    OrderStatus,
    ProductFilter,
    ProductRecord,
    ProfileRecord,
)

logger = structlog.get_logger(__name__)

ChangeListener = Callable[[Collection, str], None]


class DocumentStoreError(Exception):
    """A remote read or write against the document store failed."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed: {reason}")


class DocumentStore(ABC):
    """Abstract document store interface."""

    def __init__(self) -> None:
        self._listeners: dict[Collection, list[ChangeListener]] = {}
        # Serialises the idempotency lookup with the insert in create_order
        self._order_write_lock = threading.Lock()

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    @abstractmethod
    def create_order(self, order: OrderRecord) -> str:
        """Persist a new order and return its id.

        When ``order.idempotency_key`` matches an order already stored, the
        existing id is returned and nothing new is written. The lookup and the
        write happen under ``_order_write_lock``, so a retry racing a stalled
        first attempt still sees its order.
        """
        ...

    @abstractmethod
    def update_order_status(self, order_id: str, status: OrderStatus) -> OrderRecord:
        """Move an order to ``status`` and return the updated record.

        Raises ``ObjectNotFoundError`` for an unknown order and ``ValidationError``
        for a transition the order status machine does not allow.
        """
        ...

    @abstractmethod
    def get_order(self, order_id: str) -> OrderRecord | None: ...

    @abstractmethod
    def list_orders(self, customer_id: str | None = None) -> list[OrderRecord]:
        """Orders newest first, optionally only those placed by ``customer_id``."""
        ...

    # -------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------
    @abstractmethod
    def get_product(self, product_id: str) -> ProductRecord | None: ...

    @abstractmethod
    def list_products(self, product_filter: ProductFilter | None = None) -> list[ProductRecord]: ...

    @abstractmethod
    def replace_products(self, products: Iterable[dict]) -> int:
        """Delete every product and load ``products`` in their place. Returns the count loaded."""
        ...

    # -------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------
    @abstractmethod
    def get_profile(self, identity_id: str) -> ProfileRecord | None: ...

    @abstractmethod
    def update_profile(self, identity_id: str, patch: dict) -> ProfileRecord:
        """Merge ``patch`` into the profile, creating it when absent."""
        ...

    # -------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------
    def subscribe(self, collection: Collection, on_change: ChangeListener) -> Callable[[], None]:
        listeners = self._listeners.setdefault(collection, [])
        listeners.append(on_change)

        def unsubscribe() -> None:
            if on_change in listeners:
                listeners.remove(on_change)

        return unsubscribe

    def _publish(self, collection: Collection, document_id: str) -> None:
        for listener in list(self._listeners.get(collection, [])):
            try:
                listener(collection, document_id)
            except Exception as exc:
                logger.warning(
                    "Store change listener failed",
                    collection=collection.value,
                    document_id=document_id,
                    error=str(exc),
                )
