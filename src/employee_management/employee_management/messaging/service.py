from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_choice, require_non_empty
from ..core.constants import ADMIN_DISPLAY_NAME, ADMIN_RECIPIENT, DEFAULT_LIST_LIMIT
from ..core.enums import Role, SenderType, Severity
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..employees.repository import EmployeeRepository
from .model import Message, Notification
from .repository import MessageRepository, NotificationRepository, NotificationSink

logger = get_logger("messaging")


def recipient_for(role: Role, user_id: str) -> str:
    """Inbox id of the logged-in actor."""
    return ADMIN_RECIPIENT if role == Role.ADMIN else str(user_id)


class NotificationService(NotificationSink):
    """Append-only notification inbox per recipient."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def add_notification(self, user_id: str, title: str, message: str, severity: Severity = Severity.INFO) -> int:
        severity = require_choice(severity, Severity, "Severity")
        notification_id = self._notifications.create(
            user_id=str(user_id),
            title=title,
            message=message,
            severity=severity,
        )
        logger.debug("notification %s -> %s: %s", notification_id, user_id, title)
        return notification_id

    def list_for(self, recipient_id: str, *, unread_only: bool = False) -> Sequence[Notification]:
        return self._notifications.list_for_user(str(recipient_id), unread_only=unread_only, limit=DEFAULT_LIST_LIMIT)

    def unread_count(self, recipient_id: str) -> int:
        return self._notifications.count_unread(str(recipient_id))

    def mark_read(self, *, recipient_id: str, notification_id: int) -> None:
        notification = self._notifications.get(int(notification_id))
        if not notification:
            raise NotFoundError("Notification not found")
        if notification.user_id != str(recipient_id):
            raise AuthorizationError("You cannot modify this notification")
        if notification.is_read:
            return
        self._notifications.mark_read(int(notification_id))

    def mark_all_read(self, *, recipient_id: str) -> int:
        return self._notifications.mark_all_read(str(recipient_id))


class MessageService:
    """Employee <-> administrator messaging. Each message notifies its receiver."""

    def __init__(self, messages: MessageRepository, employees: EmployeeRepository, notifier: NotificationSink):
        self._messages = messages
        self._employees = employees
        self._notifier = notifier

    def send(
        self,
        *,
        current_role: Role,
        sender_id: str,
        content: str,
        receiver_id: Optional[str] = None,
    ) -> int:
        content = require_non_empty(content, "Message")

        if current_role == Role.ADMIN:
            if not receiver_id:
                raise ValidationError("Recipient is required")
            employee = self._employees.get_by_id(int(receiver_id)) if str(receiver_id).isdigit() else None
            if not employee:
                raise NotFoundError("Employee not found")

            message_id = self._messages.create(
                sender_id=ADMIN_RECIPIENT,
                sender_name=ADMIN_DISPLAY_NAME,
                receiver_id=employee.recipient_id,
                content=content,
                sender_type=SenderType.ADMIN,
            )
            self._notifier.add_notification(
                employee.recipient_id,
                "New Message",
                f"{ADMIN_DISPLAY_NAME} sent you a message",
                Severity.INFO,
            )
            return message_id

        sender = self._employees.get_by_id(int(sender_id))
        if not sender:
            raise NotFoundError("Employee not found")

        message_id = self._messages.create(
            sender_id=sender.recipient_id,
            sender_name=sender.full_name,
            receiver_id=ADMIN_RECIPIENT,
            content=content,
            sender_type=SenderType.EMPLOYEE,
        )
        self._notifier.add_notification(
            ADMIN_RECIPIENT,
            "New Message",
            f"{sender.full_name} sent you a message",
            Severity.INFO,
        )
        return message_id

    def conversation(self, *, current_role: Role, user_id: str, employee_id: Optional[str] = None) -> Sequence[Message]:
        if current_role == Role.ADMIN:
            if not employee_id:
                raise ValidationError("Employee is required")
            participant = str(employee_id)
        else:
            participant = str(user_id)
        return self._messages.list_conversation(participant, limit=DEFAULT_LIST_LIMIT)

    def unread_count(self, *, current_role: Role, user_id: str) -> int:
        return self._messages.count_unread_for(recipient_for(current_role, user_id))

    def mark_read(self, *, current_role: Role, user_id: str, message_id: int) -> None:
        message = self._messages.get(int(message_id))
        if not message:
            raise NotFoundError("Message not found")
        if message.receiver_id != recipient_for(current_role, user_id):
            raise AuthorizationError("Only the receiver can mark a message as read")
        if not message.is_read:
            self._messages.mark_read(int(message_id))
