import io
import logging

from src.employee_management.employee_management.core.logging_config import (
    configure_logging,
    get_logger,
)


def test_loggers_share_the_package_namespace():
    assert get_logger("payroll").name == "employee_management.payroll"


def test_configure_logging_is_idempotent():
    stream = io.StringIO()
    configure_logging(level=logging.INFO, stream=stream)
    configure_logging(level=logging.DEBUG, stream=io.StringIO())

    get_logger("payroll").info("monthly record %s created", 7)

    root = logging.getLogger("employee_management")
    assert len(root.handlers) == 1
    assert root.level == logging.INFO
    assert "INFO [employee_management.payroll] monthly record 7 created" in stream.getvalue()
