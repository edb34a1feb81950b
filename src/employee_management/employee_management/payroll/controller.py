from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, current_role, current_user_id, employee_required, ok, payload
from ..common.validators import require_int
from ..container import Container
from .model import PayrollInput

_RECORD_FIELDS = (
    "basic_salary",
    "total_working_days",
    "present_days",
    "half_days",
    "leave_days",
    "overtime_hours",
    "bonuses",
    "deductions",
    "month",
    "year",
    "payment_status",
)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/monthly-records", methods=["GET"], endpoint="admin_monthly_records")
    @admin_required
    def admin_monthly_records():
        employee_id = request.args.get("employee_id", type=int)
        records = container.monthly_record_service.list_records(
            employee_id=employee_id,
            status=request.args.get("status"),
        )
        return ok([r.to_dict() for r in records])

    @app.route("/api/admin/monthly-records", methods=["POST"], endpoint="create_monthly_record")
    @admin_required
    def create_monthly_record():
        data = payload()
        record = container.monthly_record_service.create_record(
            current_role=current_role(),
            employee_id=require_int(data.get("employee_id"), "Employee", minimum=1),
            **{k: data.get(k) for k in _RECORD_FIELDS if k in data},
        )
        return ok(record.to_dict(), message="Monthly record added successfully", status=201)

    @app.route("/api/admin/monthly-records/preview", methods=["POST"], endpoint="preview_monthly_record")
    @admin_required
    def preview_monthly_record():
        b = container.monthly_record_service.preview(PayrollInput.from_mapping(payload()))
        return ok(
            {
                "daily_rate": round(b.daily_rate, 2),
                "attendance_salary": round(b.attendance_salary, 2),
                "overtime_pay": round(b.overtime_pay, 2),
                "gross_salary": round(b.gross_salary, 2),
                "net_salary": round(b.net_salary, 2),
            }
        )

    @app.route(
        "/api/admin/monthly-records/<int:record_id>/status",
        methods=["POST"],
        endpoint="update_payment_status",
    )
    @admin_required
    def update_payment_status(record_id: int):
        data = payload()
        record = container.monthly_record_service.update_payment_status(
            current_role=current_role(),
            record_id=record_id,
            status=data.get("status") or data.get("payment_status"),
        )
        return ok(record.to_dict(), message=f"Payment status updated to {record.payment_status.value}")

    @app.route("/api/me/monthly-records", methods=["GET"], endpoint="my_monthly_records")
    @employee_required
    def my_monthly_records():
        records = container.monthly_record_service.list_for_employee(int(current_user_id()))
        return ok([r.to_dict() for r in records])
