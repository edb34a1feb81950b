from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account type stored in the session after login."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class ApprovalStatus(str, Enum):
    """Review state of a signed-up employee. Only APPROVED may log in."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    PAID = "paid"


class RequestStatus(str, Enum):
    """Decision state of a pay request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayRequestType(str, Enum):
    SALARY = "salary"
    ADVANCE = "advance"
    BONUS = "bonus"
    REIMBURSEMENT = "reimbursement"
    OTHER = "other"


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class SenderType(str, Enum):
    EMPLOYEE = "employee"
    ADMIN = "admin"


class Department(str, Enum):
    HR = "HR"
    ENGINEERING = "Engineering"
    MARKETING = "Marketing"
    SALES = "Sales"
    FINANCE = "Finance"
    OPERATIONS = "Operations"
    IT = "IT"
    LEGAL = "Legal"
    CUSTOMER_SERVICE = "Customer Service"
    RESEARCH = "Research & Development"
