"""Employee Management package.

Feature modules (employees, payroll, payrequests, messaging, reports) each
carry a model, a repository protocol with its MySQL implementation, a
service and a thin Flask JSON controller.
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .core.logging_config import configure_logging, get_logger
from .database.bootstrap import apply_schema, ensure_demo_employees, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .employees.controller import register as register_employees
from .messaging.controller import register as register_messaging
from .payrequests.controller import register as register_payrequests
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports

logger = get_logger("app")


def create_app(*, container: Optional[Container] = None) -> Flask:
    """Build the Flask app. A prebuilt container skips every database step."""

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if container is None:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(conn, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_employees(conn)
            logger.info("demo employees ready")

        container = build_container(
            db_config=db_config,
            admin_username=getattr(settings, "ADMIN_USERNAME", "admin"),
            admin_password=getattr(settings, "ADMIN_PASSWORD", "admin123"),
        )

    register_error_handlers(app)
    register_employees(app, container)
    register_payroll(app, container)
    register_payrequests(app, container)
    register_messaging(app, container)
    register_reports(app, container)

    return app
