from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from ..common.validators import require_number
from ..core.enums import PaymentStatus

_INPUT_FIELDS = {
    "basic_salary": "Basic salary",
    "total_working_days": "Total working days",
    "present_days": "Present days",
    "half_days": "Half days",
    "overtime_hours": "Overtime hours",
    "bonuses": "Bonuses",
    "deductions": "Deductions",
}


@dataclass(frozen=True)
class PayrollInput:
    """Attendance and compensation figures for one employee-month."""

    basic_salary: float = 0.0
    total_working_days: float = 0.0
    present_days: float = 0.0
    half_days: float = 0.0
    overtime_hours: float = 0.0
    bonuses: float = 0.0
    deductions: float = 0.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PayrollInput":
        # absent, None and "" all count as 0
        return cls(**{k: require_number(data.get(k), label, default=0) for k, label in _INPUT_FIELDS.items()})


@dataclass(frozen=True)
class PayrollBreakdown:
    daily_rate: float
    attendance_salary: float
    overtime_pay: float
    gross_salary: float
    net_salary: float


@dataclass(frozen=True)
class MonthlyRecord:
    """Domain entity: one payroll record per employee and month."""

    record_id: int
    employee_id: int
    employee_name: str
    month: str
    year: int
    basic_salary: float
    total_working_days: int
    present_days: float
    half_days: float
    leave_days: float
    absent_days: float
    overtime_hours: float
    bonuses: float
    deductions: float
    gross_salary: float
    net_salary: float
    payment_status: PaymentStatus
    created_at: datetime
    updated_at: datetime

    @property
    def attendance_percentage(self) -> float:
        if not self.total_working_days:
            return 0.0
        return round(self.present_days / self.total_working_days * 100, 1)

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "month": self.month,
            "year": self.year,
            "basic_salary": self.basic_salary,
            "total_working_days": self.total_working_days,
            "present_days": self.present_days,
            "half_days": self.half_days,
            "leave_days": self.leave_days,
            "absent_days": self.absent_days,
            "overtime_hours": self.overtime_hours,
            "bonuses": self.bonuses,
            "deductions": self.deductions,
            "gross_salary": self.gross_salary,
            "net_salary": self.net_salary,
            "payment_status": self.payment_status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
