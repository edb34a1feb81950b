import pytest

from src.employee_management.employee_management.core.enums import ApprovalStatus, PaymentStatus, RequestStatus
from src.employee_management.employee_management.core.exceptions import InvalidTransitionError
from src.employee_management.employee_management.core.transitions import (
    APPROVAL_TRANSITIONS,
    PAYMENT_TRANSITIONS,
    REQUEST_TRANSITIONS,
    can_transition,
    ensure_transition,
    next_payment_status,
)


def test_payment_chain():
    assert next_payment_status(PaymentStatus.PENDING) == PaymentStatus.PROCESSING
    assert next_payment_status(PaymentStatus.PROCESSING) == PaymentStatus.PAID
    assert next_payment_status(PaymentStatus.PAID) is None


@pytest.mark.parametrize(
    "current,target",
    [
        (PaymentStatus.PENDING, PaymentStatus.PAID),
        (PaymentStatus.PAID, PaymentStatus.PENDING),
        (PaymentStatus.PROCESSING, PaymentStatus.PROCESSING),
    ],
)
def test_payment_rejects_skip_reverse_and_repeat(current, target):
    assert not can_transition(PAYMENT_TRANSITIONS, current, target)


def test_approval_allows_reconsidering_a_rejection():
    assert can_transition(APPROVAL_TRANSITIONS, ApprovalStatus.REJECTED, ApprovalStatus.APPROVED)
    assert not can_transition(APPROVAL_TRANSITIONS, ApprovalStatus.APPROVED, ApprovalStatus.REJECTED)


def test_ensure_transition_message():
    with pytest.raises(InvalidTransitionError, match="Cannot move pay request from 'approved' to 'rejected'"):
        ensure_transition("pay request", REQUEST_TRANSITIONS, RequestStatus.APPROVED, RequestStatus.REJECTED)
