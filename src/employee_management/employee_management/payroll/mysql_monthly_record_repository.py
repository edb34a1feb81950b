from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import PaymentStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, to_float
from .model import MonthlyRecord
from .repository import MonthlyRecordDraft, MonthlyRecordRepository

_COLUMNS = """
    record_id, employee_id, employee_name, month, year, basic_salary, total_working_days,
    present_days, half_days, leave_days, absent_days, overtime_hours, bonuses, deductions,
    gross_salary, net_salary, payment_status, created_at, updated_at
"""


def _row_to_record(r: dict) -> MonthlyRecord:
    return MonthlyRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        employee_name=r["employee_name"],
        month=r["month"],
        year=int(r["year"]),
        basic_salary=to_float(r["basic_salary"]),
        total_working_days=int(r["total_working_days"]),
        present_days=to_float(r["present_days"]),
        half_days=to_float(r["half_days"]),
        leave_days=to_float(r["leave_days"]),
        absent_days=to_float(r["absent_days"]),
        overtime_hours=to_float(r["overtime_hours"]),
        bonuses=to_float(r["bonuses"]),
        deductions=to_float(r["deductions"]),
        gross_salary=to_float(r["gross_salary"]),
        net_salary=to_float(r["net_salary"]),
        payment_status=PaymentStatus(r["payment_status"]),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


class MySQLMonthlyRecordRepository(MonthlyRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, draft: MonthlyRecordDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO monthly_records(
                        employee_id, employee_name, month, year, basic_salary, total_working_days,
                        present_days, half_days, leave_days, absent_days, overtime_hours, bonuses,
                        deductions, gross_salary, net_salary, payment_status
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(draft.employee_id),
                        draft.employee_name,
                        draft.month,
                        int(draft.year),
                        draft.basic_salary,
                        int(draft.total_working_days),
                        draft.present_days,
                        draft.half_days,
                        draft.leave_days,
                        draft.absent_days,
                        draft.overtime_hours,
                        draft.bonuses,
                        draft.deductions,
                        round(draft.gross_salary, 2),
                        round(draft.net_salary, 2),
                        draft.payment_status.value,
                    ),
                )
            except mysql_errors.IntegrityError:
                raise ConflictError(f"A salary record for {draft.month} {draft.year} already exists")
            return int(cur.lastrowid)

    def get(self, record_id: int) -> Optional[MonthlyRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM monthly_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_period(self, *, employee_id: int, month: str, year: int) -> Optional[MonthlyRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM monthly_records WHERE employee_id=%s AND month=%s AND year=%s",
                (int(employee_id), month, int(year)),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
        limit: int = 500,
    ) -> Sequence[MonthlyRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("payment_status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM monthly_records
                WHERE {build_where(clauses)}
                ORDER BY created_at DESC, record_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def update_payment_status(self, *, record_id: int, expected: PaymentStatus, status: PaymentStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE monthly_records
                SET payment_status=%s, updated_at=NOW()
                WHERE record_id=%s AND payment_status=%s
                """,
                (status.value, int(record_id), expected.value),
            )
            return cur.rowcount > 0

    def total_net_paid(self) -> float:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COALESCE(SUM(net_salary), 0) AS total FROM monthly_records WHERE payment_status=%s",
                (PaymentStatus.PAID.value,),
            )
            return to_float(fetchone(cur)["total"])
