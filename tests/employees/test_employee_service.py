from __future__ import annotations

from datetime import date

import pytest

from src.employee_management.employee_management.core.enums import ApprovalStatus, Role, Severity
from src.employee_management.employee_management.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from src.employee_management.employee_management.employees.service import EmployeeService


@pytest.fixture
def service(employees, notifier, lock, fixed_today):
    return EmployeeService(employees, notifier, lock=lock, today=lambda: fixed_today)


def _signup(service, **kwargs):
    data = dict(
        full_name="Neha Verma",
        email="Neha.Verma@Company.com",
        password="secret123",
        contact_number="9000011111",
        account_number="123456789",
        parent_name="Anil Verma",
        parent_contact="9000022222",
    )
    data.update(kwargs)
    return service.register(**data)


def test_register_creates_pending_employee_and_notifies_admin(service, employees, notifications_repo):
    employee_id = _signup(service)

    emp = employees.get_by_id(employee_id)
    assert emp.approval_status == ApprovalStatus.PENDING
    assert emp.email == "neha.verma@company.com"
    assert emp.password_hash != "secret123"

    admin_inbox = notifications_repo.list_for_user("admin")
    assert [n.title for n in admin_inbox] == ["New Employee Registration"]
    assert "Neha Verma" in admin_inbox[0].message


def test_register_rejects_duplicate_email(service):
    _signup(service)

    with pytest.raises(ConflictError):
        _signup(service, email="neha.verma@company.com")


@pytest.mark.parametrize(
    "overrides",
    [
        {"full_name": "  "},
        {"email": "not-an-email"},
        {"password": "12345"},
        {"parent_contact": ""},
        {"confirm_password": "different"},
    ],
)
def test_register_validation(service, overrides):
    with pytest.raises(ValidationError):
        _signup(service, **overrides)


def test_approve_sets_leave_balance_and_notifies_once(service, employees, notifications_repo, pending_employee):
    employees.update_fields(pending_employee.employee_id, {"leave_balance": 3})

    emp = service.approve(current_role=Role.ADMIN, employee_id=pending_employee.employee_id)

    assert emp.approval_status == ApprovalStatus.APPROVED
    assert emp.leave_balance == 24
    inbox = notifications_repo.list_for_user(str(pending_employee.employee_id))
    assert len(inbox) == 1
    assert inbox[0].title == "Account Approved"
    assert inbox[0].severity == Severity.SUCCESS


def test_reject_then_reconsider(service, notifications_repo, pending_employee):
    emp = service.reject(current_role=Role.ADMIN, employee_id=pending_employee.employee_id)
    assert emp.approval_status == ApprovalStatus.REJECTED

    emp = service.approve(current_role=Role.ADMIN, employee_id=pending_employee.employee_id)
    assert emp.approval_status == ApprovalStatus.APPROVED

    titles = [n.title for n in notifications_repo.list_for_user(str(pending_employee.employee_id))]
    assert titles == ["Account Approved", "Account Rejected"]


def test_approved_is_terminal(service, approved_employee):
    with pytest.raises(InvalidTransitionError):
        service.approve(current_role=Role.ADMIN, employee_id=approved_employee.employee_id)
    with pytest.raises(InvalidTransitionError):
        service.reject(current_role=Role.ADMIN, employee_id=approved_employee.employee_id)


def test_employee_cannot_approve(service, pending_employee):
    with pytest.raises(AuthorizationError):
        service.approve(current_role=Role.EMPLOYEE, employee_id=pending_employee.employee_id)


def test_approve_unknown_employee(service):
    with pytest.raises(NotFoundError):
        service.approve(current_role=Role.ADMIN, employee_id=404)


def test_update_profile_validates_and_notifies(service, notifications_repo, approved_employee):
    emp = service.update_profile(
        current_role=Role.ADMIN,
        employee_id=approved_employee.employee_id,
        changes={"department": "Finance", "basic_salary": "30000", "hire_date": "2025-06-01", "leave_balance": 12},
    )

    assert emp.department == "Finance"
    assert emp.basic_salary == 30000
    assert emp.hire_date == date(2025, 6, 1)
    assert emp.leave_balance == 12
    assert notifications_repo.list_for_user(str(approved_employee.employee_id))[0].title == "Profile Updated"


@pytest.mark.parametrize(
    "changes",
    [
        {"hire_date": "2027-01-01"},
        {"department": "Space Program"},
        {"basic_salary": -1},
        {"password_hash": "x"},
        {},
    ],
)
def test_update_profile_rejects_bad_changes(service, approved_employee, changes):
    with pytest.raises(ValidationError):
        service.update_profile(current_role=Role.ADMIN, employee_id=approved_employee.employee_id, changes=changes)


def test_update_profile_email_conflict(service, employees, approved_employee):
    other = employees.add(email="taken@company.com")

    with pytest.raises(ConflictError):
        service.update_profile(
            current_role=Role.ADMIN,
            employee_id=approved_employee.employee_id,
            changes={"email": other.email},
        )


def test_deactivate_is_soft(service, employees, approved_employee):
    service.deactivate(current_role=Role.ADMIN, employee_id=approved_employee.employee_id)

    emp = employees.get_by_id(approved_employee.employee_id)
    assert emp is not None
    assert emp.is_active is False
    assert service.search().pagination()["total_employees"] == 0


def test_search_filters_and_paginates(service, employees):
    for i in range(12):
        employees.add(
            full_name=f"Dev {i}",
            department="Engineering" if i % 2 else "Sales",
            approval_status=ApprovalStatus.APPROVED,
        )

    page = service.search(department="Engineering", page=1, page_size=4)
    assert len(page.employees) == 4
    assert page.pagination() == {
        "current_page": 1,
        "total_pages": 2,
        "total_employees": 6,
        "has_next_page": True,
        "has_prev_page": False,
    }

    found = service.search(search="dev 1")
    assert {e.full_name for e in found.employees} == {"Dev 1", "Dev 10", "Dev 11"}


def test_search_rejects_unknown_status(service):
    with pytest.raises(ValidationError):
        service.search(approval_status="archived")


def test_stats(service, employees):
    employees.add(department="HR")
    employees.add(department="HR")
    employees.add(department="IT", is_active=False)

    stats = service.stats()
    assert stats["total_active"] == 2
    assert stats["total_inactive"] == 1
    assert stats["departments"] == [{"department": "HR", "count": 2}]
