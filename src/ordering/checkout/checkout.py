"""Checkout aggregate — the persisted state of one checkout run.

Stage machine:
    Idle → AddressCapture → Submitting → NotifyingAdmin →
    NotifyingCustomer → Clearing → Complete
    Failed(stage) from any stage after AddressCapture; a failed run may be
    resubmitted or abandoned. Abandoning returns the run to Idle. A run that
    failed while Clearing already has its order and resumes at Clearing.

The idempotency key is fixed the first time the run enters Submitting and
is reused on every retry, so the order store can drop duplicates.
"""

import json
from datetime import UTC, datetime
from enum import Enum
from uuid import NAMESPACE_URL, uuid5

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from ordering.checkout.events import CheckoutAbandoned, CheckoutCompleted, CheckoutFailed, CheckoutStarted
from ordering.domain import ordering
from shared.errors import CheckoutStateError


class CheckoutStage(Enum):
    IDLE = "Idle"
    ADDRESS_CAPTURE = "AddressCapture"
    SUBMITTING = "Submitting"
    NOTIFYING_ADMIN = "NotifyingAdmin"
    NOTIFYING_CUSTOMER = "NotifyingCustomer"
    CLEARING = "Clearing"
    COMPLETE = "Complete"
    FAILED = "Failed"


_VALID_TRANSITIONS = {
    CheckoutStage.IDLE: {CheckoutStage.ADDRESS_CAPTURE},
    CheckoutStage.ADDRESS_CAPTURE: {CheckoutStage.SUBMITTING, CheckoutStage.IDLE},
    CheckoutStage.SUBMITTING: {CheckoutStage.NOTIFYING_ADMIN, CheckoutStage.FAILED},
    CheckoutStage.NOTIFYING_ADMIN: {CheckoutStage.NOTIFYING_CUSTOMER, CheckoutStage.FAILED},
    CheckoutStage.NOTIFYING_CUSTOMER: {CheckoutStage.CLEARING, CheckoutStage.FAILED},
    CheckoutStage.CLEARING: {CheckoutStage.COMPLETE, CheckoutStage.FAILED},
    CheckoutStage.COMPLETE: set(),
    CheckoutStage.FAILED: {CheckoutStage.SUBMITTING, CheckoutStage.CLEARING, CheckoutStage.IDLE},
}

# Stages in which a run blocks the customer from starting another
_ACTIVE_STAGES = {stage for stage in CheckoutStage if stage not in (CheckoutStage.IDLE, CheckoutStage.COMPLETE)}


def idempotency_key_for(customer_id, checkout_id) -> str:
    return str(uuid5(NAMESPACE_URL, f"checkout:{customer_id}:{checkout_id}"))


@ordering.aggregate
class Checkout:
    customer_id = Identifier(required=True)
    cart_id = Identifier()
    stage = String(choices=CheckoutStage, default=CheckoutStage.IDLE.value)
    failed_stage = String(max_length=30)
    failure_reason = String(max_length=500)
    idempotency_key = String(max_length=100)
    order_id = Identifier()
    total = Float(min_value=0.0)
    address = Text()  # JSON: shipping address snapshot
    payment_method = String(max_length=30)
    warnings = Text()  # JSON array of warning messages
    attempts = Integer(default=0)
    started_at = DateTime()
    completed_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def start(cls, customer_id, cart_id):
        now = datetime.now(UTC)
        checkout = cls(
            customer_id=customer_id,
            cart_id=cart_id,
            stage=CheckoutStage.IDLE.value,
            warnings=json.dumps([]),
            started_at=now,
            updated_at=now,
        )
        checkout._move_to(CheckoutStage.ADDRESS_CAPTURE)
        checkout.raise_(CheckoutStarted(checkout_id=str(checkout.id), customer_id=str(customer_id), started_at=now))
        return checkout

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def current_stage(self) -> CheckoutStage:
        return CheckoutStage(self.stage)

    @property
    def is_active(self) -> bool:
        return self.current_stage in _ACTIVE_STAGES

    @property
    def warning_list(self) -> list[str]:
        return json.loads(self.warnings) if self.warnings else []

    @property
    def address_data(self) -> dict | None:
        return json.loads(self.address) if self.address else None

    @property
    def resumes_at_clearing(self) -> bool:
        """A failed run whose order is already stored only needs its cart cleared."""
        return self.current_stage == CheckoutStage.FAILED and self.failed_stage == CheckoutStage.CLEARING.value

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def begin_submission(self, address: dict, payment_method: str):
        self._move_to(CheckoutStage.SUBMITTING)
        if not self.idempotency_key:
            self.idempotency_key = idempotency_key_for(self.customer_id, self.id)
        self.address = json.dumps(address)
        self.payment_method = payment_method
        self.failed_stage = None
        self.failure_reason = None
        self.attempts = (self.attempts or 0) + 1

    def record_order(self, order_id, total=None):
        self.order_id = order_id
        self.total = total
        self._move_to(CheckoutStage.NOTIFYING_ADMIN)

    def advance(self, stage: CheckoutStage):
        self._move_to(stage)

    def resume_clearing(self):
        if not self.resumes_at_clearing:
            raise CheckoutStateError(f"Checkout cannot resume clearing while {self.stage}")
        self._move_to(CheckoutStage.CLEARING)
        self.failed_stage = None
        self.failure_reason = None
        self.attempts = (self.attempts or 0) + 1

    def add_warning(self, message: str):
        warnings = self.warning_list
        warnings.append(message)
        self.warnings = json.dumps(warnings)

    def fail(self, reason: str):
        failed_stage = self.stage
        self._move_to(CheckoutStage.FAILED)
        self.failed_stage = failed_stage
        self.failure_reason = reason
        self.raise_(
            CheckoutFailed(
                checkout_id=str(self.id),
                customer_id=str(self.customer_id),
                failed_stage=failed_stage,
                reason=reason,
            )
        )

    def complete(self):
        self._move_to(CheckoutStage.COMPLETE)
        self.completed_at = self.updated_at
        self.raise_(
            CheckoutCompleted(
                checkout_id=str(self.id),
                customer_id=str(self.customer_id),
                order_id=str(self.order_id),
                warning_count=len(self.warning_list),
                completed_at=self.completed_at,
            )
        )

    def abandon(self):
        if self.current_stage not in (CheckoutStage.ADDRESS_CAPTURE, CheckoutStage.FAILED):
            raise CheckoutStateError(f"Checkout cannot be abandoned while {self.stage}")
        self._move_to(CheckoutStage.IDLE)
        self.raise_(CheckoutAbandoned(checkout_id=str(self.id), customer_id=str(self.customer_id)))

    def _move_to(self, target: CheckoutStage):
        current = self.current_stage
        if target not in _VALID_TRANSITIONS.get(current, set()):
            raise CheckoutStateError(f"Cannot move checkout from {current.value} to {target.value}")
        self.stage = target.value
        self.updated_at = datetime.now(UTC)
