from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.employee_management.employee_management.core.logging_config import configure_logging, get_logger
from src.employee_management.employee_management.database.bootstrap import apply_schema, list_tables
from src.employee_management.employee_management.database.connection import DBConfig, DatabaseConnection

logger = get_logger("scripts.init_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(dict(settings.DB_CONFIG)))

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(conn, schema_path=schema_path)
    tables = list_tables(conn)
    logger.info("applied schema.sql -> %s (tables=%d)", conn.config.describe(), len(tables))


if __name__ == "__main__":
    main()
