"""Storefront error taxonomy.

Validation-style failures extend Protean's ``ValidationError`` so they carry
a field → messages mapping; state and permission failures extend
``InvalidOperationError``. ``PersistenceFailure`` and ``NotificationFailure``
describe remote collaborator failures during checkout.
"""

from protean.exceptions import InvalidOperationError, ValidationError


class InvalidCartOperation(ValidationError):
    """Bad input to a cart mutation. The cart is left unchanged."""


class AddressValidationError(ValidationError):
    """Shipping address form failed validation; ``messages`` holds per-field errors."""


class Unauthenticated(InvalidOperationError):
    """A gated operation was attempted without an authenticated identity."""


class SessionPending(Unauthenticated):
    """The session has not resolved to Authenticated or Anonymous yet."""


class Forbidden(InvalidOperationError):
    """The identity lacks the role required for the operation."""


class EmptyCart(InvalidOperationError):
    """Checkout was attempted with no items in the cart."""


class CheckoutInProgress(InvalidOperationError):
    """Another checkout run for the same customer is still in flight."""


class CheckoutStateError(InvalidOperationError):
    """The checkout run cannot perform the requested step from its current stage."""


class RemoteCallTimeout(Exception):
    """A call to a remote collaborator did not finish within its timeout."""

    def __init__(self, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"{operation} timed out after {timeout:g}s")


class PersistenceFailure(Exception):
    """A checkout write could not be made durable.

    Raised when the order cannot be stored (the cart is kept) or when the cart
    cannot be cleared after the order was stored. Either way the run is left
    Failed and resubmitting it picks up where it stopped.
    """

    def __init__(self, reason: str, checkout_id: str | None = None):
        self.reason = reason
        self.checkout_id = checkout_id
        super().__init__(reason)


class NotificationFailure(Exception):
    """A notification could not be dispatched. Never fatal to checkout."""

    def __init__(self, stage: str, reason: str):
        self.stage = stage
        self.reason = reason
        super().__init__(f"{stage}: {reason}")

    def to_warning(self) -> str:
        return f"Confirmation email may be delayed ({self.stage}: {self.reason})"
