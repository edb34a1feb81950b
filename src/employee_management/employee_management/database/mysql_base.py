from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..core.logging_config import get_logger
from .connection import DatabaseConnection

logger = get_logger("database")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        logger.debug("rolling back transaction on %s", conn_factory.config.database)
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_float(value: Any, default: float = 0.0) -> float:
    """DECIMAL columns come back as Decimal; the domain works in floats."""
    if value is None:
        return default
    return float(value) if isinstance(value, (Decimal, int, float)) else float(str(value))


def optional_float(value: Any) -> Optional[float]:
    return None if value is None else to_float(value)


def build_where(clauses: list[str]) -> str:
    return " AND ".join(clauses) if clauses else "1=1"
