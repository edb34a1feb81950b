from __future__ import annotations

import csv
import io
from datetime import date

from flask import Flask

from ..common.http import admin_required, ok
from ..container import Container
from .service import SALARY_CSV_FIELDS


def register(app: Flask, container: Container) -> None:
    def _write_csv(*, rows: list[dict], fieldnames: list[str], filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/admin/reports/salary.csv", methods=["GET"], endpoint="salary_report_csv")
    @admin_required
    def salary_report_csv():
        rows = container.report_service.salary_csv_rows()
        filename = f"salary_report_{date.today().strftime('%Y%m%d')}.csv"
        return _write_csv(rows=rows, fieldnames=SALARY_CSV_FIELDS, filename=filename)

    @app.route("/api/admin/reports/overview", methods=["GET"], endpoint="admin_overview")
    @admin_required
    def admin_overview():
        return ok(container.report_service.admin_overview())

    @app.route(
        "/api/admin/employees/<int:employee_id>/attendance-report",
        methods=["GET"],
        endpoint="employee_attendance_report",
    )
    @admin_required
    def employee_attendance_report(employee_id: int):
        data = container.report_service.attendance_report(employee_id)
        return ok({"summary": data.summary, "records": data.rows})

    @app.route(
        "/api/admin/employees/<int:employee_id>/salary-report",
        methods=["GET"],
        endpoint="employee_salary_report",
    )
    @admin_required
    def employee_salary_report(employee_id: int):
        data = container.report_service.salary_report(employee_id)
        return ok({"summary": data.summary, "records": data.rows})
