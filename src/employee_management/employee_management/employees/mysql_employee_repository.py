from __future__ import annotations

from typing import Any, Mapping, Optional

from mysql.connector import errors as mysql_errors

from ..core.enums import ApprovalStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, optional_float
from .model import Employee, EmployeePage, EmployeeQuery, NewEmployee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, full_name, email, password_hash, contact_number, account_number,
    parent_name, parent_contact, esic_number, pf_number, department, position, hire_date,
    approval_status, is_active, basic_salary, leave_balance, created_at, updated_at
"""

UPDATABLE_COLUMNS = frozenset(
    {
        "full_name",
        "email",
        "contact_number",
        "account_number",
        "parent_name",
        "parent_contact",
        "esic_number",
        "pf_number",
        "department",
        "position",
        "hire_date",
        "basic_salary",
        "leave_balance",
    }
)


def _row_to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        contact_number=row["contact_number"],
        account_number=row["account_number"],
        parent_name=row["parent_name"],
        parent_contact=row["parent_contact"],
        esic_number=row.get("esic_number"),
        pf_number=row.get("pf_number"),
        department=row.get("department"),
        position=row.get("position"),
        hire_date=row.get("hire_date"),
        approval_status=ApprovalStatus(row["approval_status"]),
        is_active=bool(row.get("is_active", True)),
        basic_salary=optional_float(row.get("basic_salary")),
        leave_balance=None if row.get("leave_balance") is None else int(row["leave_balance"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def create(self, data: NewEmployee) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO employees(
                        full_name, email, password_hash, contact_number, account_number,
                        parent_name, parent_contact, esic_number, pf_number, approval_status, is_active
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                    """,
                    (
                        data.full_name,
                        data.email,
                        data.password_hash,
                        data.contact_number,
                        data.account_number,
                        data.parent_name,
                        data.parent_contact,
                        data.esic_number,
                        data.pf_number,
                        ApprovalStatus.PENDING.value,
                    ),
                )
            except mysql_errors.IntegrityError:
                raise ConflictError("An account with this email already exists")
            return int(cur.lastrowid)

    def update_fields(self, employee_id: int, fields: Mapping[str, Any]) -> bool:
        unknown = set(fields) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update columns: {sorted(unknown)}")
        if not fields:
            return False

        assignments = ", ".join(f"{col}=%s" for col in fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {assignments} WHERE employee_id=%s",
                tuple(fields.values()) + (int(employee_id),),
            )
            return cur.rowcount > 0

    def set_approval(
        self,
        employee_id: int,
        *,
        expected: ApprovalStatus,
        status: ApprovalStatus,
        leave_balance: Optional[int] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET approval_status=%s, leave_balance=COALESCE(%s, leave_balance)
                WHERE employee_id=%s AND approval_status=%s
                """,
                (status.value, leave_balance, int(employee_id), expected.value),
            )
            return cur.rowcount > 0

    def set_leave_balance(self, employee_id: int, leave_balance: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET leave_balance=%s WHERE employee_id=%s",
                (int(leave_balance), int(employee_id)),
            )
            return cur.rowcount > 0

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET is_active=%s WHERE employee_id=%s",
                (1 if is_active else 0, int(employee_id)),
            )
            return cur.rowcount > 0

    def search(self, query: EmployeeQuery) -> EmployeePage:
        clauses: list[str] = []
        params: list[object] = []

        if query.approval_status is not None:
            clauses.append("approval_status=%s")
            params.append(query.approval_status.value)
        if query.department:
            clauses.append("department=%s")
            params.append(query.department)
        if query.is_active is not None:
            clauses.append("is_active=%s")
            params.append(1 if query.is_active else 0)
        if query.search:
            like = f"%{query.search}%"
            clauses.append("(full_name LIKE %s OR email LIKE %s OR position LIKE %s)")
            params.extend([like, like, like])

        where = build_where(clauses)
        offset = (query.page - 1) * query.page_size

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM employees WHERE {where}", tuple(params))
            total = int(fetchone(cur)["n"])

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE {where}
                ORDER BY created_at DESC, employee_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(query.page_size), int(offset)]),
            )
            rows = fetchall(cur)

        return EmployeePage(
            employees=[_row_to_employee(r) for r in rows],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )

    def count_by_status(self, status: ApprovalStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM employees WHERE approval_status=%s AND is_active=1",
                (status.value,),
            )
            return int(fetchone(cur)["n"])

    def stats(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT SUM(is_active=1) AS active, SUM(is_active=0) AS inactive
                FROM employees
                """
            )
            totals = fetchone(cur) or {}
            cur.execute(
                """
                SELECT department, COUNT(*) AS n
                FROM employees
                WHERE is_active=1 AND department IS NOT NULL
                GROUP BY department
                ORDER BY n DESC
                """
            )
            departments = [{"department": r["department"], "count": int(r["n"])} for r in fetchall(cur)]

        return {
            "total_active": int(totals.get("active") or 0),
            "total_inactive": int(totals.get("inactive") or 0),
            "departments": departments,
        }

