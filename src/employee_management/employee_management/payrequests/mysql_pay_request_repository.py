from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PayRequestType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, to_float
from .model import PayRequest
from .repository import PayRequestRepository

_COLUMNS = """
    request_id, employee_id, employee_name, amount, purpose, description, request_type,
    status, created_at, processed_at, processed_by, admin_notes
"""


def _row_to_request(r: dict) -> PayRequest:
    return PayRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        employee_name=r["employee_name"],
        amount=to_float(r["amount"]),
        purpose=r["purpose"],
        description=r.get("description"),
        request_type=PayRequestType(r["request_type"]),
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        processed_at=r.get("processed_at"),
        processed_by=r.get("processed_by"),
        admin_notes=r.get("admin_notes"),
    )


class MySQLPayRequestRepository(PayRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        employee_name: str,
        amount: float,
        purpose: str,
        description: Optional[str],
        request_type: PayRequestType,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO pay_requests(employee_id, employee_name, amount, purpose, description, request_type, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    employee_name,
                    amount,
                    purpose,
                    description,
                    request_type.value,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, request_id: int) -> Optional[PayRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM pay_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[PayRequest]:
        clauses: list[str] = []
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM pay_requests
                WHERE {build_where(clauses)}
                ORDER BY created_at DESC, request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        processed_by: str,
        admin_notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE pay_requests
                SET status=%s, processed_by=%s, processed_at=NOW(), admin_notes=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    processed_by,
                    admin_notes,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def count_by_status(self, status: RequestStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM pay_requests WHERE status=%s", (status.value,))
            return int(fetchone(cur)["n"])
