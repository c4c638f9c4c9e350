"""Checkout Orchestrator — turns a cart into an order without a transaction boundary.

A run walks the Checkout stage machine:

    begin:  Idle → AddressCapture            (authenticated, non-empty cart, no other run)
    submit: AddressCapture → Submitting      (address and payment method validated)
            save address to profile          (best effort, warning on failure)
            persist order                    (failure → Failed(Submitting), cart kept)
            → NotifyingAdmin → NotifyingCustomer   (failures become warnings)
            → Clearing → Complete            (cart cleared only after the order exists;
                                              failure → Failed(Clearing), resumed by submit)

Every remote call is bounded by ``call_timeout``; an expired call counts as
that stage's failure. A failed run is retried by calling ``submit`` again,
which reuses the run's idempotency key so the store never records a second
order.

The orchestrator reads and writes ordering aggregates, so callers must
have the ordering domain context active.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog
from protean.utils.globals import current_domain

from identity.session import Identity
from ordering.cart.items import ClearCart
from ordering.cart.management import find_cart
from ordering.checkout.checkout import Checkout, CheckoutStage
from shared.errors import (
    AddressValidationError,
    CheckoutInProgress,
    CheckoutStateError,
    EmptyCart,
    Forbidden,
    NotificationFailure,
    PersistenceFailure,
    RemoteCallTimeout,
)
from shared.settings import get_settings
from shared.store.port import DocumentStore, DocumentStoreError
from shared.store.records import AddressRecord, CustomerContact, OrderRecord, PaymentMethod
from shared.utils.remote import call_with_timeout

logger = structlog.get_logger(__name__)

ADDRESS_FIELDS = {
    "full_name": "Full name",
    "street": "Street address",
    "city": "City",
    "state": "State",
    "postal_code": "Postal code",
    "country": "Country",
}

SUPPORTED_PAYMENT_METHODS = {PaymentMethod.PAY_ON_DELIVERY.value}

ADDRESS_NOT_SAVED = "Shipping address could not be saved to your profile"


@dataclass(frozen=True)
class CheckoutResult:
    checkout_id: str
    stage: str
    order_id: str | None
    total: float
    warnings: tuple[str, ...] = ()


def validate_address(address: dict | None, payment_method: str | None) -> dict[str, list[str]]:
    """Per-field error messages for a shipping address form; empty when valid."""
    address = address or {}
    errors = {}
    for field, label in ADDRESS_FIELDS.items():
        value = address.get(field)
        if not isinstance(value, str) or not value.strip():
            errors[field] = [f"{label} is required"]

    if payment_method == PaymentMethod.CARD.value:
        errors["payment_method"] = ["Card payments are coming soon; choose pay on delivery"]
    elif payment_method not in SUPPORTED_PAYMENT_METHODS:
        errors["payment_method"] = [f"Unsupported payment method: {payment_method}"]
    return errors


class CheckoutOrchestrator:
    def __init__(self, document_store: DocumentStore, notifier, call_timeout: float | None = None):
        self.store = document_store
        self.notifier = notifier
        self.call_timeout = get_settings().remote_call_timeout if call_timeout is None else call_timeout

    @property
    def checkouts(self):
        return current_domain.repository_for(Checkout)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def active_run(self, customer_id) -> Checkout | None:
        runs = self.checkouts._dao.query.filter(customer_id=str(customer_id)).all().items
        return next((run for run in runs if run.is_active), None)

    def get(self, checkout_id, identity: Identity) -> Checkout:
        checkout = self.checkouts.get(checkout_id)
        if str(checkout.customer_id) != identity.user_id:
            raise Forbidden("This checkout belongs to another customer")
        return checkout

    def saved_address(self, identity: Identity) -> dict | None:
        """The address saved on the profile, for prefilling the form. ``None`` when unavailable."""
        try:
            profile = call_with_timeout(
                "get_profile", self.store.get_profile, identity.user_id, timeout=self.call_timeout
            )
        except (DocumentStoreError, RemoteCallTimeout) as exc:
            logger.warning("Saved address lookup failed", user_id=identity.user_id, error=str(exc))
            return None
        if profile is None or profile.address is None:
            return None
        return profile.address.model_dump()

    # -------------------------------------------------------------------
    # Idle → AddressCapture
    # -------------------------------------------------------------------
    def begin(self, identity: Identity) -> Checkout:
        cart = find_cart(identity.user_id)
        if cart is None or cart.is_empty:
            raise EmptyCart("Your cart is empty")

        if self.active_run(identity.user_id) is not None:
            raise CheckoutInProgress("A checkout is already in progress for this customer")

        checkout = Checkout.start(customer_id=identity.user_id, cart_id=str(cart.id))
        self.checkouts.add(checkout)
        logger.info("Checkout started", checkout_id=str(checkout.id), customer_id=identity.user_id)
        return checkout

    def abandon(self, checkout_id, identity: Identity) -> Checkout:
        checkout = self.get(checkout_id, identity)
        checkout.abandon()
        self.checkouts.add(checkout)
        logger.info("Checkout abandoned", checkout_id=str(checkout.id))
        return checkout

    # -------------------------------------------------------------------
    # AddressCapture → … → Complete
    # -------------------------------------------------------------------
    def submit(
        self,
        checkout_id,
        identity: Identity,
        address: dict,
        payment_method: str = PaymentMethod.PAY_ON_DELIVERY.value,
        phone: str | None = None,
    ) -> CheckoutResult:
        checkout = self.get(checkout_id, identity)
        if checkout.resumes_at_clearing:
            checkout.resume_clearing()
            self.checkouts.add(checkout)
            logger.info("Checkout resumed at clearing", checkout_id=str(checkout.id), order_id=str(checkout.order_id))
            return self._clear(checkout, identity)

        if checkout.current_stage not in (CheckoutStage.ADDRESS_CAPTURE, CheckoutStage.FAILED):
            raise CheckoutStateError(f"Checkout cannot be submitted while {checkout.stage}")

        errors = validate_address(address, payment_method)
        if errors:
            raise AddressValidationError(errors)
        address = {field: address[field].strip() for field in ADDRESS_FIELDS}

        cart = find_cart(identity.user_id)
        if cart is None or cart.is_empty:
            raise EmptyCart("Your cart is empty")
        lines = cart.snapshot()
        total = cart.get_total()

        checkout.begin_submission(address, payment_method)
        self.checkouts.add(checkout)
        log = logger.bind(checkout_id=str(checkout.id), customer_id=identity.user_id, attempt=checkout.attempts)

        self._save_address(checkout, identity, address)

        order = OrderRecord(
            items=lines,
            total=total,
            customer=CustomerContact(
                identity_id=identity.user_id,
                email=identity.email,
                full_name=address["full_name"],
                phone=phone,
            ),
            address=AddressRecord(**address),
            payment_method=PaymentMethod(payment_method),
            idempotency_key=checkout.idempotency_key,
            created_at=datetime.now(UTC),
        )
        try:
            order_id = call_with_timeout("create_order", self.store.create_order, order, timeout=self.call_timeout)
        except (DocumentStoreError, RemoteCallTimeout) as exc:
            checkout.fail(str(exc))
            self.checkouts.add(checkout)
            log.error("Order could not be persisted; cart kept", error=str(exc))
            raise PersistenceFailure(str(exc), checkout_id=str(checkout.id)) from exc

        placed = order.model_copy(update={"id": order_id})
        checkout.record_order(order_id, total)
        self.checkouts.add(checkout)
        log.info("Order persisted", order_id=order_id, total=total)

        self._notify(checkout, self.notifier.send_order_alert, placed)
        checkout.advance(CheckoutStage.NOTIFYING_CUSTOMER)
        self._notify(checkout, self.notifier.send_order_confirmation, placed)
        checkout.advance(CheckoutStage.CLEARING)
        self.checkouts.add(checkout)

        return self._clear(checkout, identity)

    def _clear(self, checkout: Checkout, identity: Identity) -> CheckoutResult:
        try:
            current_domain.process(ClearCart(customer_id=identity.user_id), asynchronous=False)
        except Exception as exc:
            checkout.fail(str(exc))
            self.checkouts.add(checkout)
            logger.error("Cart could not be cleared; order kept", checkout_id=str(checkout.id), error=str(exc))
            raise PersistenceFailure(str(exc), checkout_id=str(checkout.id)) from exc

        checkout.complete()
        self.checkouts.add(checkout)
        logger.info(
            "Checkout complete",
            checkout_id=str(checkout.id),
            order_id=str(checkout.order_id),
            warnings=len(checkout.warning_list),
        )

        return CheckoutResult(
            checkout_id=str(checkout.id),
            stage=checkout.stage,
            order_id=str(checkout.order_id),
            total=checkout.total or 0.0,
            warnings=tuple(checkout.warning_list),
        )

    def _save_address(self, checkout: Checkout, identity: Identity, address: dict) -> None:
        try:
            call_with_timeout(
                "update_profile",
                self.store.update_profile,
                identity.user_id,
                {"address": address},
                timeout=self.call_timeout,
            )
        except (DocumentStoreError, RemoteCallTimeout) as exc:
            logger.warning("Address save failed", checkout_id=str(checkout.id), error=str(exc))
            checkout.add_warning(ADDRESS_NOT_SAVED)

    def _notify(self, checkout: Checkout, send, order: OrderRecord) -> None:
        stage = checkout.stage
        try:
            result = call_with_timeout(stage, send, order, timeout=self.call_timeout)
            if not result.ok:
                raise NotificationFailure(stage, result.error or "delivery failed")
        except RemoteCallTimeout as exc:
            failure = NotificationFailure(stage, str(exc))
            logger.warning("Notification timed out", checkout_id=str(checkout.id), stage=stage)
            checkout.add_warning(failure.to_warning())
        except NotificationFailure as failure:
            logger.warning("Notification failed", checkout_id=str(checkout.id), stage=stage, error=failure.reason)
            checkout.add_warning(failure.to_warning())
        except Exception as exc:
            failure = NotificationFailure(stage, str(exc) or type(exc).__name__)
            logger.exception("Notification raised", checkout_id=str(checkout.id), stage=stage)
            checkout.add_warning(failure.to_warning())
