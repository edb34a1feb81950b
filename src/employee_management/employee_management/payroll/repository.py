from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import MonthlyRecord


@dataclass(frozen=True)
class MonthlyRecordDraft:
    """A fully computed record that has not been stored yet."""

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
    payment_status: PaymentStatus = PaymentStatus.PENDING


class MonthlyRecordRepository(Protocol):
    def create(self, draft: MonthlyRecordDraft) -> int:
        raise NotImplementedError

    def get(self, record_id: int) -> Optional[MonthlyRecord]:
        raise NotImplementedError

    def get_for_period(self, *, employee_id: int, month: str, year: int) -> Optional[MonthlyRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
        limit: int = 500,
    ) -> Sequence[MonthlyRecord]:
        """Newest first."""

        raise NotImplementedError

    def update_payment_status(self, *, record_id: int, expected: PaymentStatus, status: PaymentStatus) -> bool:
        """Conditional update; stamps updated_at. False when the current status is not `expected`."""

        raise NotImplementedError

    def total_net_paid(self) -> float:
        raise NotImplementedError
