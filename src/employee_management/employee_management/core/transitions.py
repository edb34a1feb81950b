"""Allowed status transitions for the three workflows.

Every status change goes through `ensure_transition`; anything not listed
here (reverse, skip, repeat) is rejected.
"""
from __future__ import annotations

from enum import Enum
from typing import Mapping, TypeVar

from .enums import ApprovalStatus, PaymentStatus, RequestStatus
from .exceptions import InvalidTransitionError

S = TypeVar("S", bound=Enum)

PAYMENT_TRANSITIONS: Mapping[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PROCESSING}),
    PaymentStatus.PROCESSING: frozenset({PaymentStatus.PAID}),
    PaymentStatus.PAID: frozenset(),
}

APPROVAL_TRANSITIONS: Mapping[ApprovalStatus, frozenset[ApprovalStatus]] = {
    ApprovalStatus.PENDING: frozenset({ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}),
    # a rejected signup can be reconsidered
    ApprovalStatus.REJECTED: frozenset({ApprovalStatus.APPROVED}),
    ApprovalStatus.APPROVED: frozenset(),
}

REQUEST_TRANSITIONS: Mapping[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.APPROVED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
}


def can_transition(table: Mapping[S, frozenset[S]], current: S, target: S) -> bool:
    return target in table.get(current, frozenset())


def ensure_transition(kind: str, table: Mapping[S, frozenset[S]], current: S, target: S) -> S:
    if not can_transition(table, current, target):
        raise InvalidTransitionError(kind, current.value, target.value)
    return target


def next_payment_status(current: PaymentStatus) -> PaymentStatus | None:
    """The single forward step from `current`, or None once paid."""
    allowed = PAYMENT_TRANSITIONS[current]
    return next(iter(allowed)) if allowed else None
