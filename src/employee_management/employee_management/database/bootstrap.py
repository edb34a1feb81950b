from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_LEAVE_BALANCE
from ..core.enums import ApprovalStatus
from ..core.logging_config import get_logger
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchone

logger = get_logger("database.bootstrap")

DEMO_EMPLOYEES = (
    {
        "full_name": "Priya Sharma",
        "email": "priya.sharma@company.com",
        "password": "employee123",
        "contact_number": "9876543210",
        "account_number": "001234567890",
        "parent_name": "Rakesh Sharma",
        "parent_contact": "9876500000",
        "department": "Engineering",
        "position": "Software Engineer",
        "basic_salary": 22000,
        "approval_status": ApprovalStatus.APPROVED,
    },
    {
        "full_name": "Arjun Mehta",
        "email": "arjun.mehta@company.com",
        "password": "employee123",
        "contact_number": "9123456780",
        "account_number": "009876543210",
        "parent_name": "Sunita Mehta",
        "parent_contact": "9123400000",
        "department": "Finance",
        "position": "Accountant",
        "basic_salary": None,
        "approval_status": ApprovalStatus.PENDING,
    },
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
    logger.info("schema applied to %s", conn_factory.config.describe())


def ensure_demo_employees(conn_factory: DatabaseConnection) -> None:
    """Insert demo employees that do not exist yet (matched by email)."""

    with db_cursor(conn_factory) as (_, cur):
        for demo in DEMO_EMPLOYEES:
            cur.execute("SELECT employee_id FROM employees WHERE email=%s", (demo["email"],))
            if fetchone(cur):
                continue
            cur.execute(
                """
                INSERT INTO employees(
                    full_name, email, password_hash, contact_number, account_number,
                    parent_name, parent_contact, department, position,
                    approval_status, basic_salary, leave_balance
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    demo["full_name"],
                    demo["email"],
                    generate_password_hash(demo["password"]),
                    demo["contact_number"],
                    demo["account_number"],
                    demo["parent_name"],
                    demo["parent_contact"],
                    demo["department"],
                    demo["position"],
                    demo["approval_status"].value,
                    demo["basic_salary"],
                    DEFAULT_LEAVE_BALANCE,
                ),
            )
            logger.info("seeded demo employee %s", demo["email"])


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
