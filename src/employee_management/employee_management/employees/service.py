from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import parse_iso_date
from ..common.validators import (
    optional_text,
    require_choice,
    require_email,
    require_int,
    require_length_between,
    require_min_length,
    require_non_empty,
    require_not_future,
    require_number,
)
from ..core.constants import (
    ADMIN_DISPLAY_NAME,
    ADMIN_RECIPIENT,
    DEFAULT_LEAVE_BALANCE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_PASSWORD_LENGTH,
)
from ..core.enums import ApprovalStatus, Department, Role, Severity
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from ..core.logging_config import get_logger
from ..core.transitions import APPROVAL_TRANSITIONS, ensure_transition
from ..messaging.repository import NotificationSink
from .model import Employee, EmployeePage, EmployeeQuery, NewEmployee
from .repository import EmployeeRepository

logger = get_logger("employees")


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate an employee or the administrator."""

    def __init__(self, employees: EmployeeRepository, *, admin_username: str, admin_password_hash: str):
        self._employees = employees
        self._admin_username = admin_username
        self._admin_password_hash = admin_password_hash

    @staticmethod
    def _check(password_hash: str, password: str) -> bool:
        try:
            return check_password_hash(password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            return False

    def authenticate(self, login: str, password: str, *, role: Role = Role.EMPLOYEE) -> SessionUser:
        login = (login or "").strip()

        if role == Role.ADMIN:
            if login != self._admin_username or not self._check(self._admin_password_hash, password):
                raise AuthenticationError("Invalid credentials")
            return SessionUser(
                user_id=ADMIN_RECIPIENT,
                name=ADMIN_DISPLAY_NAME,
                email=f"{self._admin_username}@company.com",
                role=Role.ADMIN,
            )

        employee = self._employees.get_by_email(login.lower())
        if not employee or not self._check(employee.password_hash, password):
            raise AuthenticationError("Invalid credentials")
        if not employee.is_active or not employee.is_approved:
            raise AuthenticationError("Invalid credentials or account not yet approved")

        return SessionUser(
            user_id=employee.recipient_id,
            name=employee.full_name,
            email=employee.email,
            role=Role.EMPLOYEE,
        )


class EmployeeService:
    """Use case: signup, directory management and the approval workflow."""

    def __init__(
        self,
        employees: EmployeeRepository,
        notifier: NotificationSink,
        *,
        lock: Optional[threading.RLock] = None,
        today=date.today,
    ):
        self._employees = employees
        self._notifier = notifier
        self._lock = lock or threading.RLock()
        self._today = today

    # ---- signup ----
    def register(
        self,
        *,
        full_name: str,
        email: str,
        password: str,
        contact_number: str,
        account_number: str,
        parent_name: str,
        parent_contact: str,
        confirm_password: Optional[str] = None,
        esic_number: Optional[str] = None,
        pf_number: Optional[str] = None,
    ) -> int:
        full_name = require_non_empty(full_name, "Full name")
        email = require_email(email)
        contact_number = require_non_empty(contact_number, "Contact number")
        account_number = require_non_empty(account_number, "Account number")
        parent_name = require_non_empty(parent_name, "Parent name")
        parent_contact = require_non_empty(parent_contact, "Parent contact")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if confirm_password is not None and confirm_password != password:
            raise ValidationError("Passwords do not match")

        with self._lock:
            if self._employees.get_by_email(email):
                raise ConflictError("An account with this email already exists")

            employee_id = self._employees.create(
                NewEmployee(
                    full_name=full_name,
                    email=email,
                    password_hash=generate_password_hash(password),
                    contact_number=contact_number,
                    account_number=account_number,
                    parent_name=parent_name,
                    parent_contact=parent_contact,
                    esic_number=optional_text(esic_number),
                    pf_number=optional_text(pf_number),
                )
            )
            self._notifier.add_notification(
                ADMIN_RECIPIENT,
                "New Employee Registration",
                f"{full_name} has requested to join the company",
                Severity.INFO,
            )

        logger.info("employee %s registered (pending approval)", employee_id)
        return employee_id

    # ---- directory ----
    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def search(
        self,
        *,
        approval_status: Optional[str] = None,
        department: Optional[str] = None,
        is_active: Optional[bool] = True,
        search: Optional[str] = None,
        page: Any = 1,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> EmployeePage:
        query = EmployeeQuery(
            approval_status=require_choice(approval_status, ApprovalStatus, "Status") if approval_status else None,
            department=require_choice(department, Department, "Department").value if department else None,
            is_active=is_active,
            search=optional_text(search),
            page=require_int(page, "Page", minimum=1, default=1),
            page_size=min(require_int(page_size, "Page size", minimum=1, default=DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE),
        )
        return self._employees.search(query)

    def stats(self) -> dict:
        return self._employees.stats()

    def _clean_changes(self, employee: Employee, changes: Mapping[str, Any]) -> dict:
        cleaned: dict[str, Any] = {}
        for key, value in changes.items():
            if key == "full_name":
                cleaned[key] = require_length_between(value, "Full name", 2, 100)
            elif key == "email":
                email = require_email(value)
                other = self._employees.get_by_email(email)
                if other and other.employee_id != employee.employee_id:
                    raise ConflictError("Email address already exists")
                cleaned[key] = email
            elif key in ("contact_number", "account_number", "parent_name", "parent_contact"):
                cleaned[key] = require_non_empty(value, key.replace("_", " ").capitalize())
            elif key in ("esic_number", "pf_number"):
                cleaned[key] = optional_text(value)
            elif key == "department":
                cleaned[key] = require_choice(value, Department, "Department").value if value else None
            elif key == "position":
                cleaned[key] = require_length_between(value, "Position", 2, 100) if value else None
            elif key == "hire_date":
                if value:
                    hire_date = value if isinstance(value, date) else parse_iso_date(value)
                    cleaned[key] = require_not_future(hire_date, "Hire date", today=self._today())
                else:
                    cleaned[key] = None
            elif key == "basic_salary":
                cleaned[key] = None if value in (None, "") else require_number(value, "Salary", minimum=0)
            elif key == "leave_balance":
                cleaned[key] = require_int(value, "Leave balance", minimum=0)
            else:
                raise ValidationError(f"Field '{key}' cannot be updated")
        return cleaned

    def update_profile(self, *, current_role: Role, employee_id: int, changes: Mapping[str, Any]) -> Employee:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        with self._lock:
            employee = self.get(employee_id)
            cleaned = self._clean_changes(employee, changes)
            if not cleaned:
                raise ValidationError("Nothing to update")

            self._employees.update_fields(employee.employee_id, cleaned)
            self._notifier.add_notification(
                employee.recipient_id,
                "Profile Updated",
                "Your profile information has been updated by admin.",
                Severity.INFO,
            )

        logger.info("employee %s updated: %s", employee.employee_id, sorted(cleaned))
        return self.get(employee.employee_id)

    def deactivate(self, *, current_role: Role, employee_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        employee = self.get(employee_id)
        if not employee.is_active:
            return
        if not self._employees.set_active(employee.employee_id, is_active=False):
            raise ValidationError("Deactivating employee failed")
        logger.info("employee %s deactivated", employee.employee_id)

    # ---- approval workflow ----
    def _decide(self, *, current_role: Role, employee_id: int, target: ApprovalStatus) -> Employee:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        with self._lock:
            employee = self.get(employee_id)
            ensure_transition("employee", APPROVAL_TRANSITIONS, employee.approval_status, target)

            approved = target == ApprovalStatus.APPROVED
            changed = self._employees.set_approval(
                employee.employee_id,
                expected=employee.approval_status,
                status=target,
                leave_balance=DEFAULT_LEAVE_BALANCE if approved else None,
            )
            if not changed:
                # someone else moved it first
                raise InvalidTransitionError("employee", employee.approval_status.value, target.value)

            if approved:
                self._notifier.add_notification(
                    employee.recipient_id,
                    "Account Approved",
                    "Your account has been approved. You can now log in and access your dashboard.",
                    Severity.SUCCESS,
                )
            else:
                self._notifier.add_notification(
                    employee.recipient_id,
                    "Account Rejected",
                    "Unfortunately, your account application was not approved.",
                    Severity.ERROR,
                )

        logger.info("employee %s %s -> %s", employee.employee_id, employee.approval_status.value, target.value)
        return self.get(employee.employee_id)

    def approve(self, *, current_role: Role, employee_id: int) -> Employee:
        return self._decide(current_role=current_role, employee_id=employee_id, target=ApprovalStatus.APPROVED)

    def reject(self, *, current_role: Role, employee_id: int) -> Employee:
        return self._decide(current_role=current_role, employee_id=employee_id, target=ApprovalStatus.REJECTED)
