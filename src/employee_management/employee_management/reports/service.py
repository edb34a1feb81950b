from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import ADMIN_RECIPIENT
from ..core.enums import ApprovalStatus, RequestStatus
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from ..messaging.repository import MessageRepository, NotificationRepository
from ..payrequests.repository import PayRequestRepository
from ..payroll.repository import MonthlyRecordRepository

SALARY_CSV_FIELDS = [
    "Employee",
    "Month",
    "Basic Salary",
    "Present Days",
    "Total Days",
    "Attendance %",
    "Net Salary",
    "Payment Status",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


class PayrollReportService:
    """Read-only aggregates over monthly records for the admin dashboard."""

    def __init__(
        self,
        records: MonthlyRecordRepository,
        employees: EmployeeRepository,
        *,
        pay_requests: Optional[PayRequestRepository] = None,
        messages: Optional[MessageRepository] = None,
        notifications: Optional[NotificationRepository] = None,
    ):
        self._records = records
        self._employees = employees
        self._pay_requests = pay_requests
        self._messages = messages
        self._notifications = notifications

    def _employee(self, employee_id: int):
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def salary_csv_rows(self) -> list[dict]:
        rows = []
        for r in self._records.list_records():
            rows.append(
                {
                    "Employee": r.employee_name,
                    "Month": f"{r.month} {r.year}",
                    "Basic Salary": f"{r.basic_salary:.2f}",
                    "Present Days": _days(r.present_days),
                    "Total Days": r.total_working_days,
                    "Attendance %": f"{r.attendance_percentage:.1f}",
                    "Net Salary": f"{r.net_salary:.2f}",
                    "Payment Status": r.payment_status.value,
                }
            )
        return rows

    def attendance_report(self, employee_id: int) -> ReportData:
        employee = self._employee(employee_id)
        records = self._records.list_records(employee_id=employee.employee_id)

        total_days = sum(r.total_working_days for r in records)
        present = sum(r.present_days for r in records)
        absent = sum(r.absent_days for r in records)

        rows = [
            {
                "month": r.month,
                "year": r.year,
                "total_working_days": r.total_working_days,
                "present_days": r.present_days,
                "half_days": r.half_days,
                "leave_days": r.leave_days,
                "absent_days": r.absent_days,
                "attendance_percentage": r.attendance_percentage,
            }
            for r in records
        ]
        summary = {
            "employee_id": employee.employee_id,
            "employee_name": employee.full_name,
            "total_working_days": total_days,
            "total_present_days": present,
            "total_absent_days": absent,
            "leave_balance": employee.leave_balance,
            "attendance_percentage": round(present / total_days * 100, 1) if total_days else 0.0,
        }
        return ReportData(rows=rows, summary=summary)

    def salary_report(self, employee_id: int) -> ReportData:
        employee = self._employee(employee_id)
        records = self._records.list_records(employee_id=employee.employee_id)

        total_earnings = round(sum(r.net_salary for r in records), 2)
        total_deductions = round(sum(r.deductions for r in records), 2)

        summary = {
            "employee_id": employee.employee_id,
            "employee_name": employee.full_name,
            "basic_salary": employee.basic_salary,
            "total_records": len(records),
            "total_earnings": total_earnings,
            "total_deductions": total_deductions,
            "average_salary": round(total_earnings / len(records), 2) if records else 0.0,
        }
        return ReportData(rows=[r.to_dict() for r in records], summary=summary)

    def admin_overview(self) -> dict:
        overview = {
            "pending_employees": self._employees.count_by_status(ApprovalStatus.PENDING),
            "total_salary_paid": round(self._records.total_net_paid(), 2),
            "pending_pay_requests": 0,
            "unread_messages": 0,
            "unread_notifications": 0,
        }
        if self._pay_requests is not None:
            overview["pending_pay_requests"] = self._pay_requests.count_by_status(RequestStatus.PENDING)
        if self._messages is not None:
            overview["unread_messages"] = self._messages.count_unread_for(ADMIN_RECIPIENT)
        if self._notifications is not None:
            overview["unread_notifications"] = self._notifications.count_unread(ADMIN_RECIPIENT)
        return overview


def _days(value: float):
    # 20.0 -> 20, keeps 20.5
    return int(value) if float(value).is_integer() else value
