from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import DEFAULT_LEAVE_BALANCE
from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Plain data object; no DB access here.
    """

    employee_id: int
    full_name: str
    email: str
    password_hash: str
    contact_number: str
    account_number: str
    parent_name: str
    parent_contact: str
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    is_active: bool = True
    esic_number: Optional[str] = None
    pf_number: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None
    basic_salary: Optional[float] = None
    leave_balance: Optional[int] = DEFAULT_LEAVE_BALANCE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.approval_status == ApprovalStatus.APPROVED

    @property
    def recipient_id(self) -> str:
        """Address used for notifications and messages."""
        return str(self.employee_id)

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "full_name": self.full_name,
            "email": self.email,
            "contact_number": self.contact_number,
            "account_number": self.account_number,
            "parent_name": self.parent_name,
            "parent_contact": self.parent_contact,
            "esic_number": self.esic_number,
            "pf_number": self.pf_number,
            "department": self.department,
            "position": self.position,
            "hire_date": self.hire_date.isoformat() if self.hire_date else None,
            "approval_status": self.approval_status.value,
            "is_approved": self.is_approved,
            "is_active": self.is_active,
            "basic_salary": self.basic_salary,
            "leave_balance": self.leave_balance,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class NewEmployee:
    full_name: str
    email: str
    password_hash: str
    contact_number: str
    account_number: str
    parent_name: str
    parent_contact: str
    esic_number: Optional[str] = None
    pf_number: Optional[str] = None


@dataclass(frozen=True)
class EmployeeQuery:
    approval_status: Optional[ApprovalStatus] = None
    department: Optional[str] = None
    is_active: Optional[bool] = True
    search: Optional[str] = None
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class EmployeePage:
    employees: list[Employee]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.page_size - 1) // self.page_size if self.page_size else 0

    def pagination(self) -> dict:
        return {
            "current_page": self.page,
            "total_pages": self.total_pages,
            "total_employees": self.total,
            "has_next_page": self.page < self.total_pages,
            "has_prev_page": self.page > 1,
        }
