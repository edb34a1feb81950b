from __future__ import annotations

from ...core.constants import HALF_DAY_FACTOR, HOURS_PER_DAY, OVERTIME_MULTIPLIER
from ..model import PayrollBreakdown, PayrollInput
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Attendance-weighted salary with overtime at 1.5x the hourly rate.

    Gross is the unfloored net plus deductions; only net is floored at 0.
    A zero (or missing) working-day count is treated as 1.
    """

    def breakdown(self, data: PayrollInput) -> PayrollBreakdown:
        total_days = data.total_working_days or 1
        daily_rate = data.basic_salary / total_days

        attendance_salary = data.present_days * daily_rate + data.half_days * daily_rate * HALF_DAY_FACTOR
        overtime_pay = data.overtime_hours * (daily_rate / HOURS_PER_DAY) * OVERTIME_MULTIPLIER
        gross = attendance_salary + overtime_pay + data.bonuses

        return PayrollBreakdown(
            daily_rate=daily_rate,
            attendance_salary=attendance_salary,
            overtime_pay=overtime_pay,
            gross_salary=gross,
            net_salary=max(0.0, gross - data.deductions),
        )
