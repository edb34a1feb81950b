from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import generate_password_hash

from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService
from .messaging.mysql_messaging_repository import MySQLMessageRepository, MySQLNotificationRepository
from .messaging.repository import MessageRepository, NotificationRepository
from .messaging.service import MessageService, NotificationService
from .payrequests.mysql_pay_request_repository import MySQLPayRequestRepository
from .payrequests.repository import PayRequestRepository
from .payrequests.service import PayRequestService
from .payroll.mysql_monthly_record_repository import MySQLMonthlyRecordRepository
from .payroll.repository import MonthlyRecordRepository
from .payroll.service import MonthlyRecordService
from .reports.service import PayrollReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    records_repo: MonthlyRecordRepository
    pay_requests_repo: PayRequestRepository
    notifications_repo: NotificationRepository
    messages_repo: MessageRepository

    auth_service: AuthService
    employee_service: EmployeeService
    notification_service: NotificationService
    message_service: MessageService
    monthly_record_service: MonthlyRecordService
    pay_request_service: PayRequestService
    report_service: PayrollReportService


def wire_container(
    *,
    conn: Optional[DatabaseConnection],
    employees_repo: EmployeeRepository,
    records_repo: MonthlyRecordRepository,
    pay_requests_repo: PayRequestRepository,
    notifications_repo: NotificationRepository,
    messages_repo: MessageRepository,
    admin_username: str,
    admin_password: str,
) -> Container:
    # one lock for every composite (state change + notification) operation
    lock = threading.RLock()

    notification_service = NotificationService(notifications_repo)
    auth_service = AuthService(
        employees_repo,
        admin_username=admin_username,
        admin_password_hash=generate_password_hash(admin_password),
    )
    employee_service = EmployeeService(employees_repo, notification_service, lock=lock)
    message_service = MessageService(messages_repo, employees_repo, notification_service)
    monthly_record_service = MonthlyRecordService(records_repo, employees_repo, notification_service, lock=lock)
    pay_request_service = PayRequestService(pay_requests_repo, employees_repo, notification_service, lock=lock)
    report_service = PayrollReportService(
        records_repo,
        employees_repo,
        pay_requests=pay_requests_repo,
        messages=messages_repo,
        notifications=notifications_repo,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        records_repo=records_repo,
        pay_requests_repo=pay_requests_repo,
        notifications_repo=notifications_repo,
        messages_repo=messages_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        notification_service=notification_service,
        message_service=message_service,
        monthly_record_service=monthly_record_service,
        pay_request_service=pay_request_service,
        report_service=report_service,
    )


def build_container(*, db_config: dict, admin_username: str = "admin", admin_password: str = "admin123") -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        records_repo=MySQLMonthlyRecordRepository(conn),
        pay_requests_repo=MySQLPayRequestRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        messages_repo=MySQLMessageRepository(conn),
        admin_username=admin_username,
        admin_password=admin_password,
    )
