from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..core.enums import ApprovalStatus
from .model import Employee, EmployeePage, EmployeeQuery, NewEmployee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(self, data: NewEmployee) -> int:
        raise NotImplementedError

    def update_fields(self, employee_id: int, fields: Mapping[str, Any]) -> bool:
        """Partial update of profile/compensation columns."""

        raise NotImplementedError

    def set_approval(
        self,
        employee_id: int,
        *,
        expected: ApprovalStatus,
        status: ApprovalStatus,
        leave_balance: Optional[int] = None,
    ) -> bool:
        """Conditional status change; False when the current status is not `expected`."""

        raise NotImplementedError

    def set_leave_balance(self, employee_id: int, leave_balance: int) -> bool:
        raise NotImplementedError

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def search(self, query: EmployeeQuery) -> EmployeePage:
        raise NotImplementedError

    def count_by_status(self, status: ApprovalStatus) -> int:
        raise NotImplementedError

    def stats(self) -> dict:
        """{"total_active": int, "total_inactive": int, "departments": [{"department", "count"}]}"""

        raise NotImplementedError
