from __future__ import annotations

import threading
from typing import Any, Optional, Sequence

from ..common.formatting import money
from ..common.validators import optional_text, require_choice, require_non_empty, require_number
from ..core.constants import ADMIN_RECIPIENT, DEFAULT_LIST_LIMIT
from ..core.enums import PayRequestType, RequestStatus, Role, Severity
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..core.transitions import REQUEST_TRANSITIONS, ensure_transition
from ..employees.repository import EmployeeRepository
from ..messaging.repository import NotificationSink
from .model import PayRequest
from .repository import PayRequestRepository

logger = get_logger("payrequests")


class PayRequestService:
    """Use case: employees ask for funds outside payroll, admin decides."""

    def __init__(
        self,
        requests: PayRequestRepository,
        employees: EmployeeRepository,
        notifier: NotificationSink,
        *,
        lock: Optional[threading.RLock] = None,
    ):
        self._requests = requests
        self._employees = employees
        self._notifier = notifier
        self._lock = lock or threading.RLock()

    def submit(
        self,
        *,
        current_role: Role,
        employee_id: int,
        amount: Any,
        purpose: str,
        request_type: Any = PayRequestType.ADVANCE,
        description: Optional[str] = None,
    ) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can submit pay requests")

        value = require_number(amount, "Amount")
        if value <= 0:
            raise ValidationError("Amount must be greater than 0")
        purpose = require_non_empty(purpose, "Purpose")
        kind = require_choice(request_type or PayRequestType.ADVANCE, PayRequestType, "Request type")

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        request_id = self._requests.create(
            employee_id=employee.employee_id,
            employee_name=employee.full_name,
            amount=value,
            purpose=purpose,
            description=optional_text(description),
            request_type=kind,
        )
        self._notifier.add_notification(
            ADMIN_RECIPIENT,
            "New Payment Request",
            f"{employee.full_name} submitted a {kind.value} request for {money(value)}",
            Severity.INFO,
        )
        logger.info("pay request %s submitted by employee %s", request_id, employee.employee_id)
        return request_id

    def _decide(
        self,
        *,
        current_role: Role,
        admin_user_id: str,
        request_id: int,
        target: RequestStatus,
        admin_notes: str = "",
    ) -> PayRequest:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        notes = optional_text(admin_notes)
        with self._lock:
            req = self._requests.get(int(request_id))
            if not req:
                raise NotFoundError("Pay request not found")
            ensure_transition("pay request", REQUEST_TRANSITIONS, req.status, target)

            if not self._requests.decide(
                request_id=req.request_id,
                status=target,
                processed_by=str(admin_user_id),
                admin_notes=notes,
            ):
                raise InvalidTransitionError("pay request", req.status.value, target.value)

            if target == RequestStatus.APPROVED:
                self._notifier.add_notification(
                    str(req.employee_id),
                    "Payment Request Approved",
                    f"Your {req.request_type.value} request of {money(req.amount)} has been approved.",
                    Severity.SUCCESS,
                )
            else:
                reason = f" Reason: {notes}" if notes else ""
                self._notifier.add_notification(
                    str(req.employee_id),
                    "Payment Request Rejected",
                    f"Your {req.request_type.value} request of {money(req.amount)} has been rejected.{reason}",
                    Severity.ERROR,
                )

        logger.info("pay request %s -> %s by %s", req.request_id, target.value, admin_user_id)
        decided = self._requests.get(req.request_id)
        if not decided:
            raise NotFoundError("Pay request not found")
        return decided

    def approve(self, *, current_role: Role, admin_user_id: str, request_id: int, admin_notes: str = "") -> PayRequest:
        return self._decide(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            target=RequestStatus.APPROVED,
            admin_notes=admin_notes,
        )

    def reject(self, *, current_role: Role, admin_user_id: str, request_id: int, admin_notes: str = "") -> PayRequest:
        return self._decide(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            target=RequestStatus.REJECTED,
            admin_notes=admin_notes,
        )

    def list_mine(self, *, employee_id: int) -> Sequence[PayRequest]:
        return self._requests.list_requests(employee_id=int(employee_id), limit=DEFAULT_LIST_LIMIT)

    def list_admin(self, *, status: Optional[str] = None) -> Sequence[PayRequest]:
        return self._requests.list_requests(
            status=require_choice(status, RequestStatus, "Status") if status else None,
            limit=500,
        )
