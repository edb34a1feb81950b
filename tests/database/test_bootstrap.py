from decimal import Decimal
from pathlib import Path

from src.employee_management.employee_management.database.bootstrap import (
    _iter_sql_statements,
    _strip_create_db_and_use,
)
from src.employee_management.employee_management.database.mysql_base import build_where, to_float

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_creates_every_table_without_switching_database():
    sql = _strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))
    statements = list(_iter_sql_statements(sql))

    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)
    created = {s.split()[5] for s in statements if s.upper().startswith("CREATE TABLE IF NOT EXISTS")}
    assert created == {"employees", "monthly_records", "pay_requests", "messages", "notifications"}


def test_semicolons_inside_quotes_do_not_split():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");"

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
    ]


def test_mysql_helpers():
    assert build_where([]) == "1=1"
    assert build_where(["a=%s", "b=%s"]) == "a=%s AND b=%s"
    assert to_float(Decimal("12.50")) == 12.5
    assert to_float(None) == 0.0
