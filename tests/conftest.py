from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Mapping, Optional

import pytest
from werkzeug.security import generate_password_hash

from src.employee_management.employee_management.core.enums import (
    ApprovalStatus,
    PaymentStatus,
    PayRequestType,
    RequestStatus,
    SenderType,
    Severity,
)
from src.employee_management.employee_management.core.logging_config import reset_logging
from src.employee_management.employee_management.employees.model import (
    Employee,
    EmployeePage,
    EmployeeQuery,
    NewEmployee,
)
from src.employee_management.employee_management.messaging.model import Message, Notification
from src.employee_management.employee_management.messaging.service import NotificationService
from src.employee_management.employee_management.payrequests.model import PayRequest
from src.employee_management.employee_management.payroll.model import MonthlyRecord
from src.employee_management.employee_management.payroll.repository import MonthlyRecordDraft

FIXED_NOW = datetime(2026, 3, 15, 9, 30, 0)


class InMemoryEmployees:
    def __init__(self):
        self.by_id: dict[int, Employee] = {}
        self._id = 0

    def add(self, **overrides) -> Employee:
        """Test helper: insert an employee directly."""
        self._id += 1
        password = overrides.pop("password", "secret123")
        data = dict(
            employee_id=self._id,
            full_name=f"Employee {self._id}",
            email=f"employee{self._id}@company.com",
            password_hash=generate_password_hash(password),
            contact_number="9000000000",
            account_number="0011223344",
            parent_name="Parent",
            parent_contact="9000000001",
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
        )
        data.update(overrides)
        emp = Employee(**data)
        self.by_id[emp.employee_id] = emp
        return emp

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(int(employee_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        for emp in self.by_id.values():
            if emp.email == email:
                return emp
        return None

    def create(self, data: NewEmployee) -> int:
        return self.add(
            full_name=data.full_name,
            email=data.email,
            password_hash=data.password_hash,
            contact_number=data.contact_number,
            account_number=data.account_number,
            parent_name=data.parent_name,
            parent_contact=data.parent_contact,
            esic_number=data.esic_number,
            pf_number=data.pf_number,
        ).employee_id

    def update_fields(self, employee_id: int, fields: Mapping[str, Any]) -> bool:
        emp = self.by_id.get(int(employee_id))
        if not emp:
            return False
        self.by_id[emp.employee_id] = replace(emp, **dict(fields))
        return True

    def set_approval(self, employee_id, *, expected, status, leave_balance=None) -> bool:
        emp = self.by_id.get(int(employee_id))
        if not emp or emp.approval_status != expected:
            return False
        changes: dict[str, Any] = {"approval_status": status}
        if leave_balance is not None:
            changes["leave_balance"] = leave_balance
        self.by_id[emp.employee_id] = replace(emp, **changes)
        return True

    def set_leave_balance(self, employee_id: int, leave_balance: int) -> bool:
        return self.update_fields(employee_id, {"leave_balance": leave_balance})

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        return self.update_fields(employee_id, {"is_active": is_active})

    def search(self, query: EmployeeQuery) -> EmployeePage:
        items = list(self.by_id.values())
        if query.approval_status is not None:
            items = [e for e in items if e.approval_status == query.approval_status]
        if query.department:
            items = [e for e in items if e.department == query.department]
        if query.is_active is not None:
            items = [e for e in items if e.is_active == query.is_active]
        if query.search:
            needle = query.search.lower()
            items = [
                e
                for e in items
                if needle in e.full_name.lower() or needle in e.email.lower() or needle in (e.position or "").lower()
            ]
        items.sort(key=lambda e: e.employee_id, reverse=True)
        start = (query.page - 1) * query.page_size
        return EmployeePage(
            employees=items[start : start + query.page_size],
            total=len(items),
            page=query.page,
            page_size=query.page_size,
        )

    def count_by_status(self, status: ApprovalStatus) -> int:
        return sum(1 for e in self.by_id.values() if e.approval_status == status and e.is_active)

    def stats(self) -> dict:
        active = [e for e in self.by_id.values() if e.is_active]
        departments: dict[str, int] = {}
        for e in active:
            if e.department:
                departments[e.department] = departments.get(e.department, 0) + 1
        return {
            "total_active": len(active),
            "total_inactive": len(self.by_id) - len(active),
            "departments": [{"department": d, "count": n} for d, n in sorted(departments.items())],
        }


class InMemoryRecords:
    def __init__(self):
        self.by_id: dict[int, MonthlyRecord] = {}
        self._id = 0

    def create(self, draft: MonthlyRecordDraft) -> int:
        self._id += 1
        self.by_id[self._id] = MonthlyRecord(
            record_id=self._id,
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
            **draft.__dict__,
        )
        return self._id

    def get(self, record_id: int) -> Optional[MonthlyRecord]:
        return self.by_id.get(int(record_id))

    def get_for_period(self, *, employee_id: int, month: str, year: int) -> Optional[MonthlyRecord]:
        for r in self.by_id.values():
            if (r.employee_id, r.month, r.year) == (employee_id, month, year):
                return r
        return None

    def list_records(self, *, employee_id=None, status=None, limit=500):
        items = list(self.by_id.values())
        if employee_id is not None:
            items = [r for r in items if r.employee_id == employee_id]
        if status is not None:
            items = [r for r in items if r.payment_status == status]
        return sorted(items, key=lambda r: r.record_id, reverse=True)[:limit]

    def update_payment_status(self, *, record_id: int, expected: PaymentStatus, status: PaymentStatus) -> bool:
        rec = self.by_id.get(int(record_id))
        if not rec or rec.payment_status != expected:
            return False
        self.by_id[rec.record_id] = replace(rec, payment_status=status, updated_at=datetime(2026, 3, 16, 10, 0, 0))
        return True

    def total_net_paid(self) -> float:
        return sum(r.net_salary for r in self.by_id.values() if r.payment_status == PaymentStatus.PAID)


class InMemoryPayRequests:
    def __init__(self):
        self.by_id: dict[int, PayRequest] = {}
        self._id = 0

    def create(self, *, employee_id, employee_name, amount, purpose, description, request_type: PayRequestType) -> int:
        self._id += 1
        self.by_id[self._id] = PayRequest(
            request_id=self._id,
            employee_id=employee_id,
            employee_name=employee_name,
            amount=amount,
            purpose=purpose,
            description=description,
            request_type=request_type,
            status=RequestStatus.PENDING,
            created_at=FIXED_NOW,
        )
        return self._id

    def get(self, request_id: int) -> Optional[PayRequest]:
        return self.by_id.get(int(request_id))

    def list_requests(self, *, status=None, employee_id=None, limit=200):
        items = list(self.by_id.values())
        if status is not None:
            items = [r for r in items if r.status == status]
        if employee_id is not None:
            items = [r for r in items if r.employee_id == employee_id]
        return sorted(items, key=lambda r: r.request_id, reverse=True)[:limit]

    def decide(self, *, request_id, status, processed_by, admin_notes=None) -> bool:
        req = self.by_id.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.by_id[req.request_id] = replace(
            req,
            status=status,
            processed_by=processed_by,
            processed_at=datetime(2026, 3, 16, 11, 0, 0),
            admin_notes=admin_notes,
        )
        return True

    def count_by_status(self, status: RequestStatus) -> int:
        return sum(1 for r in self.by_id.values() if r.status == status)


class InMemoryNotifications:
    def __init__(self):
        self.by_id: dict[int, Notification] = {}
        self._id = 0

    def create(self, *, user_id: str, title: str, message: str, severity: Severity) -> int:
        self._id += 1
        self.by_id[self._id] = Notification(
            notification_id=self._id,
            user_id=user_id,
            title=title,
            message=message,
            severity=severity,
            is_read=False,
            created_at=FIXED_NOW,
        )
        return self._id

    def get(self, notification_id: int) -> Optional[Notification]:
        return self.by_id.get(int(notification_id))

    def list_for_user(self, user_id: str, *, unread_only: bool = False, limit: int = 200):
        items = [n for n in self.by_id.values() if n.user_id == user_id and (not unread_only or not n.is_read)]
        return sorted(items, key=lambda n: n.notification_id, reverse=True)[:limit]

    def count_unread(self, user_id: str) -> int:
        return len(self.list_for_user(user_id, unread_only=True))

    def mark_read(self, notification_id: int) -> bool:
        n = self.by_id.get(int(notification_id))
        if not n:
            return False
        self.by_id[n.notification_id] = replace(n, is_read=True)
        return True

    def mark_all_read(self, user_id: str) -> int:
        unread = self.list_for_user(user_id, unread_only=True)
        for n in unread:
            self.mark_read(n.notification_id)
        return len(unread)


class InMemoryMessages:
    def __init__(self):
        self.by_id: dict[int, Message] = {}
        self._id = 0

    def create(self, *, sender_id, sender_name, receiver_id, content, sender_type: SenderType) -> int:
        self._id += 1
        self.by_id[self._id] = Message(
            message_id=self._id,
            sender_id=sender_id,
            sender_name=sender_name,
            receiver_id=receiver_id,
            content=content,
            sender_type=sender_type,
            is_read=False,
            created_at=FIXED_NOW,
        )
        return self._id

    def get(self, message_id: int) -> Optional[Message]:
        return self.by_id.get(int(message_id))

    def list_conversation(self, participant_id: str, *, limit: int = 200):
        items = [m for m in self.by_id.values() if participant_id in (m.sender_id, m.receiver_id)]
        return sorted(items, key=lambda m: m.message_id)[:limit]

    def count_unread_for(self, receiver_id: str) -> int:
        return sum(1 for m in self.by_id.values() if m.receiver_id == receiver_id and not m.is_read)

    def mark_read(self, message_id: int) -> bool:
        m = self.by_id.get(int(message_id))
        if not m:
            return False
        self.by_id[m.message_id] = replace(m, is_read=True)
        return True


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def fixed_today() -> date:
    return FIXED_NOW.date()


@pytest.fixture
def lock():
    return threading.RLock()


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def records() -> InMemoryRecords:
    return InMemoryRecords()


@pytest.fixture
def pay_requests() -> InMemoryPayRequests:
    return InMemoryPayRequests()


@pytest.fixture
def notifications_repo() -> InMemoryNotifications:
    return InMemoryNotifications()


@pytest.fixture
def messages_repo() -> InMemoryMessages:
    return InMemoryMessages()


@pytest.fixture
def notifier(notifications_repo) -> NotificationService:
    return NotificationService(notifications_repo)


@pytest.fixture
def approved_employee(employees) -> Employee:
    return employees.add(
        full_name="Priya Sharma",
        email="priya@company.com",
        approval_status=ApprovalStatus.APPROVED,
        basic_salary=22000.0,
        leave_balance=5,
        department="Engineering",
        position="Software Engineer",
    )


@pytest.fixture
def pending_employee(employees) -> Employee:
    return employees.add(full_name="Arjun Mehta", email="arjun@company.com", password="arjun123")
