from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.employee_management.employee_management.core.logging_config import configure_logging, get_logger
from src.employee_management.employee_management.database.bootstrap import ensure_demo_employees
from src.employee_management.employee_management.database.connection import DBConfig, DatabaseConnection

logger = get_logger("scripts.seed_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(dict(settings.DB_CONFIG)))

    ensure_demo_employees(conn)
    logger.info("seeded demo employees -> %s", conn.config.describe())


if __name__ == "__main__":
    main()
