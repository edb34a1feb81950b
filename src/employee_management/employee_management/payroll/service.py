from __future__ import annotations

import threading
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import current_month_year, normalize_month, now_local
from ..common.formatting import money
from ..common.validators import require_choice, require_int, require_number
from ..core.constants import DEFAULT_LEAVE_BALANCE, DEFAULT_WORKING_DAYS
from ..core.enums import PaymentStatus, Role, Severity
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from ..core.logging_config import get_logger
from ..core.transitions import PAYMENT_TRANSITIONS, ensure_transition
from ..employees.repository import EmployeeRepository
from ..messaging.repository import NotificationSink
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import MonthlyRecord, PayrollBreakdown, PayrollInput
from .repository import MonthlyRecordDraft, MonthlyRecordRepository

logger = get_logger("payroll")


class MonthlyRecordService:
    """Use case: create monthly payroll records and move them through payment."""

    def __init__(
        self,
        records: MonthlyRecordRepository,
        employees: EmployeeRepository,
        notifier: NotificationSink,
        *,
        calculator: Optional[PayrollCalculator] = None,
        lock: Optional[threading.RLock] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._records = records
        self._employees = employees
        self._notifier = notifier
        self._calculator = calculator or StandardPayrollCalculator()
        self._lock = lock or threading.RLock()
        self._clock = clock

    def preview(self, data: PayrollInput) -> PayrollBreakdown:
        return self._calculator.breakdown(data)

    def create_record(
        self,
        *,
        current_role: Role,
        employee_id: int,
        basic_salary: Any = None,
        total_working_days: Any = None,
        present_days: Any = None,
        half_days: Any = None,
        leave_days: Any = None,
        overtime_hours: Any = None,
        bonuses: Any = None,
        deductions: Any = None,
        month: Any = None,
        year: Any = None,
        payment_status: Any = PaymentStatus.PENDING,
    ) -> MonthlyRecord:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        default_month, default_year = current_month_year(self._clock().date())
        month = normalize_month(month) if month else default_month
        year = require_int(year, "Year", minimum=1900, default=default_year)
        status = require_choice(payment_status or PaymentStatus.PENDING, PaymentStatus, "Payment status")

        # 0 means "not entered", same as missing
        total_days = require_int(total_working_days, "Total working days", minimum=0, default=DEFAULT_WORKING_DAYS)
        total_days = total_days or DEFAULT_WORKING_DAYS
        present = require_int(present_days, "Present days", minimum=0, default=0)
        half = require_int(half_days, "Half days", minimum=0, default=0)
        leave = require_int(leave_days, "Leave days", minimum=0, default=0)
        if present + half + leave > total_days:
            raise ValidationError("Present, half and leave days exceed total working days")

        overtime = require_number(overtime_hours, "Overtime hours", minimum=0, default=0)
        bonus = require_number(bonuses, "Bonuses", minimum=0, default=0)
        deduction = require_number(deductions, "Deductions", minimum=0, default=0)

        with self._lock:
            employee = self._employees.get_by_id(int(employee_id))
            if not employee:
                raise NotFoundError("Employee not found")
            if not employee.is_approved or not employee.is_active:
                raise ValidationError("Salary records can only be added for approved employees")

            if basic_salary in (None, ""):
                basic_salary = employee.basic_salary
            basic = require_number(basic_salary, "Basic salary", minimum=0, default=0)
            if basic <= 0:
                raise ValidationError("Basic salary is required")

            if self._records.get_for_period(employee_id=employee.employee_id, month=month, year=year):
                raise ConflictError(f"A salary record for {month} {year} already exists")

            breakdown = self._calculator.breakdown(
                PayrollInput(
                    basic_salary=basic,
                    total_working_days=total_days,
                    present_days=present,
                    half_days=half,
                    overtime_hours=overtime,
                    bonuses=bonus,
                    deductions=deduction,
                )
            )

            record_id = self._records.create(
                MonthlyRecordDraft(
                    employee_id=employee.employee_id,
                    employee_name=employee.full_name,
                    month=month,
                    year=year,
                    basic_salary=basic,
                    total_working_days=total_days,
                    present_days=present,
                    half_days=half,
                    leave_days=leave,
                    absent_days=total_days - present - half - leave,
                    overtime_hours=overtime,
                    bonuses=bonus,
                    deductions=deduction,
                    gross_salary=breakdown.gross_salary,
                    net_salary=breakdown.net_salary,
                    payment_status=status,
                )
            )

            balance = employee.leave_balance if employee.leave_balance is not None else DEFAULT_LEAVE_BALANCE
            self._employees.set_leave_balance(employee.employee_id, max(0, balance - leave))

            self._notifier.add_notification(
                employee.recipient_id,
                "Monthly Record Added",
                f"Your salary record for {month} {year} has been added. "
                f"Net salary: {money(breakdown.net_salary)}",
                Severity.INFO,
            )

        logger.info(
            "monthly record %s created for employee %s (%s %s, net=%.2f)",
            record_id,
            employee.employee_id,
            month,
            year,
            breakdown.net_salary,
        )
        return self.get(record_id)

    def get(self, record_id: int) -> MonthlyRecord:
        record = self._records.get(int(record_id))
        if not record:
            raise NotFoundError("Salary record not found")
        return record

    def update_payment_status(self, *, current_role: Role, record_id: int, status: Any) -> MonthlyRecord:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        target = require_choice(status, PaymentStatus, "Payment status")

        with self._lock:
            record = self.get(record_id)
            ensure_transition("payment", PAYMENT_TRANSITIONS, record.payment_status, target)

            if not self._records.update_payment_status(
                record_id=record.record_id,
                expected=record.payment_status,
                status=target,
            ):
                raise InvalidTransitionError("payment", record.payment_status.value, target.value)

            self._notifier.add_notification(
                str(record.employee_id),
                "Payment Status Updated",
                f"Your salary payment for {record.month} {record.year} is now {target.value}.",
                Severity.SUCCESS if target == PaymentStatus.PAID else Severity.INFO,
            )

        logger.info(
            "monthly record %s payment %s -> %s", record.record_id, record.payment_status.value, target.value
        )
        return self.get(record.record_id)

    def list_records(self, *, employee_id: Optional[int] = None, status: Optional[str] = None) -> Sequence[MonthlyRecord]:
        return self._records.list_records(
            employee_id=int(employee_id) if employee_id is not None else None,
            status=require_choice(status, PaymentStatus, "Payment status") if status else None,
        )

    def list_for_employee(self, employee_id: int) -> Sequence[MonthlyRecord]:
        return self._records.list_records(employee_id=int(employee_id))
