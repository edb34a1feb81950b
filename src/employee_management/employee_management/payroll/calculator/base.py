from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollBreakdown, PayrollInput


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def breakdown(self, data: PayrollInput) -> PayrollBreakdown:
        raise NotImplementedError

    def net_salary(self, data: PayrollInput) -> float:
        return self.breakdown(data).net_salary

    def gross_salary(self, data: PayrollInput) -> float:
        return self.breakdown(data).gross_salary
