"""Domain events for the Checkout aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Checkout")
class CheckoutStarted:
    __version__ = 1

    checkout_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    started_at = DateTime(required=True)


@ordering.event(part_of="Checkout")
class CheckoutFailed:
    """A remote step failed; the run is halted and may be retried."""

    __version__ = 1

    checkout_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    failed_stage = String(required=True)
    reason = String(required=True)


@ordering.event(part_of="Checkout")
class CheckoutCompleted:
    """The order was placed and the cart cleared. Warnings count failed notifications."""

    __version__ = 1

    checkout_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    warning_count = Integer(default=0)
    completed_at = DateTime(required=True)


@ordering.event(part_of="Checkout")
class CheckoutAbandoned:
    __version__ = 1

    checkout_id = Identifier(required=True)
    customer_id = Identifier(required=True)
