"""Records exchanged with the Document Store.

These are the wire shapes of the hosted document collections (products,
orders, users). They are deliberately separate from the Protean aggregates
that back them: callers of the store never see aggregates, and adapters
translate records to and from their own storage.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Forward-only; delivered and cancelled are terminal
ORDER_STATUS_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_STATUS_TRANSITIONS.get(current, frozenset())


class PaymentMethod(Enum):
    PAY_ON_DELIVERY = "pay_on_delivery"
    CARD = "card"  # Reserved; not accepted at checkout yet


class Collection(Enum):
    PRODUCTS = "products"
    ORDERS = "orders"
    USERS = "users"


class ProductRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float = Field(ge=0)
    category: str
    description: str = ""
    image: str = ""
    stock: int = Field(ge=0, default=0)
    discount: float = Field(ge=0, le=100, default=0.0)
    rating: float | None = None
    featured: bool = False
    is_active: bool = True


class ProductFilter(BaseModel):
    """Criteria for ``list_products``. Unset fields do not filter."""

    model_config = ConfigDict(frozen=True)

    category: str | None = None
    featured: bool | None = None
    active_only: bool = True
    search: str | None = None

    def matches(self, product: ProductRecord) -> bool:
        if self.active_only and not product.is_active:
            return False
        if self.category and product.category != self.category:
            return False
        if self.featured is not None and product.featured != self.featured:
            return False
        if self.search:
            needle = self.search.lower()
            if needle not in product.name.lower() and needle not in product.description.lower():
                return False
        return True


class AddressRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    full_name: str
    street: str
    city: str
    state: str
    postal_code: str
    country: str

    def one_line(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.postal_code}, {self.country}"


class CustomerContact(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity_id: str
    email: str
    full_name: str
    phone: str | None = None

    @property
    def first_name(self) -> str:
        return self.full_name.split(" ", 1)[0] if self.full_name else ""


class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    unit_price: float = Field(ge=0)
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


class OrderRecord(BaseModel):
    """An order as stored in the ``orders`` collection.

    ``items`` is a tuple so a placed order can never alias a live cart.
    ``id`` is ``None`` until the store has assigned one.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    items: tuple[LineItem, ...]
    total: float = Field(ge=0)
    status: OrderStatus = OrderStatus.PENDING
    customer: CustomerContact
    address: AddressRecord
    payment_method: PaymentMethod = PaymentMethod.PAY_ON_DELIVERY
    idempotency_key: str | None = None
    created_at: datetime


class ProfileRecord(BaseModel):
    """A document in the ``users`` collection."""

    model_config = ConfigDict(frozen=True)

    identity_id: str
    email: str | None = None
    display_name: str | None = None
    role: Role = Role.CUSTOMER
    address: AddressRecord | None = None
    wishlist: tuple[str, ...] = ()
