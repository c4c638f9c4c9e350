"""Tests for the Checkout aggregate stage machine."""

import pytest
from ordering.checkout.checkout import Checkout, CheckoutStage, idempotency_key_for
from ordering.checkout.events import CheckoutAbandoned, CheckoutCompleted, CheckoutFailed, CheckoutStarted
from shared.errors import CheckoutStateError


@pytest.fixture()
def checkout():
    return Checkout.start(customer_id="cust-001", cart_id="cart-001")


def _submit(checkout, address):
    checkout.begin_submission(address, "pay_on_delivery")


class TestStart:
    def test_start_enters_address_capture(self, checkout):
        assert checkout.current_stage == CheckoutStage.ADDRESS_CAPTURE
        assert checkout.is_active
        assert checkout.warning_list == []

    def test_start_raises_event(self, checkout):
        assert isinstance(checkout._events[0], CheckoutStarted)


class TestSubmission:
    def test_begin_submission_fixes_idempotency_key(self, checkout, address):
        _submit(checkout, address)

        assert checkout.current_stage == CheckoutStage.SUBMITTING
        assert checkout.idempotency_key == idempotency_key_for("cust-001", checkout.id)
        assert checkout.attempts == 1
        assert checkout.address_data == address

    def test_retry_reuses_key(self, checkout, address):
        _submit(checkout, address)
        key = checkout.idempotency_key
        checkout.fail("store unavailable")

        _submit(checkout, address)

        assert checkout.idempotency_key == key
        assert checkout.attempts == 2
        assert checkout.failure_reason is None

    def test_happy_path_to_complete(self, checkout, address):
        _submit(checkout, address)
        checkout.record_order("order-001")
        checkout.advance(CheckoutStage.NOTIFYING_CUSTOMER)
        checkout.advance(CheckoutStage.CLEARING)
        checkout.complete()

        assert checkout.current_stage == CheckoutStage.COMPLETE
        assert not checkout.is_active
        assert checkout.completed_at is not None
        assert isinstance(checkout._events[-1], CheckoutCompleted)

    def test_cannot_skip_stages(self, checkout):
        with pytest.raises(CheckoutStateError):
            checkout.advance(CheckoutStage.CLEARING)
        assert checkout.current_stage == CheckoutStage.ADDRESS_CAPTURE


class TestFailure:
    def test_fail_records_stage_and_reason(self, checkout, address):
        _submit(checkout, address)
        checkout.fail("store unavailable")

        assert checkout.current_stage == CheckoutStage.FAILED
        assert checkout.failed_stage == CheckoutStage.SUBMITTING.value
        assert checkout.failure_reason == "store unavailable"
        assert checkout.is_active
        assert isinstance(checkout._events[-1], CheckoutFailed)

    def test_cannot_fail_from_address_capture(self, checkout):
        with pytest.raises(CheckoutStateError):
            checkout.fail("nope")

    def test_clearing_failure_resumes_at_clearing(self, checkout, address):
        _submit(checkout, address)
        checkout.record_order("order-001", 25.5)
        checkout.advance(CheckoutStage.NOTIFYING_CUSTOMER)
        checkout.advance(CheckoutStage.CLEARING)
        checkout.fail("cart store unavailable")

        assert checkout.resumes_at_clearing
        checkout.resume_clearing()
        checkout.complete()

        assert checkout.current_stage == CheckoutStage.COMPLETE
        assert checkout.order_id == "order-001"
        assert checkout.total == 25.5
        assert checkout.attempts == 2

    def test_submission_failure_does_not_resume_at_clearing(self, checkout, address):
        _submit(checkout, address)
        checkout.fail("store unavailable")

        assert not checkout.resumes_at_clearing
        with pytest.raises(CheckoutStateError):
            checkout.resume_clearing()


class TestAbandon:
    def test_abandon_from_address_capture(self, checkout):
        checkout.abandon()

        assert checkout.current_stage == CheckoutStage.IDLE
        assert not checkout.is_active
        assert isinstance(checkout._events[-1], CheckoutAbandoned)

    def test_abandon_failed_run(self, checkout, address):
        _submit(checkout, address)
        checkout.fail("store unavailable")
        checkout.abandon()

        assert checkout.current_stage == CheckoutStage.IDLE

    def test_cannot_abandon_while_submitting(self, checkout, address):
        _submit(checkout, address)
        with pytest.raises(CheckoutStateError):
            checkout.abandon()


class TestWarnings:
    def test_warnings_accumulate(self, checkout):
        checkout.add_warning("first")
        checkout.add_warning("second")
        assert checkout.warning_list == ["first", "second"]
