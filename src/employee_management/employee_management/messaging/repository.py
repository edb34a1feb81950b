from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SenderType, Severity
from .model import Message, Notification


class NotificationSink(Protocol):
    """Where workflow services drop their side-effect notifications."""

    def add_notification(self, user_id: str, title: str, message: str, severity: Severity = Severity.INFO) -> int:
        raise NotImplementedError


class NotificationRepository(Protocol):
    def create(self, *, user_id: str, title: str, message: str, severity: Severity) -> int:
        raise NotImplementedError

    def get(self, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_user(self, user_id: str, *, unread_only: bool = False, limit: int = 200) -> Sequence[Notification]:
        """Newest first."""

        raise NotImplementedError

    def count_unread(self, user_id: str) -> int:
        raise NotImplementedError

    def mark_read(self, notification_id: int) -> bool:
        raise NotImplementedError

    def mark_all_read(self, user_id: str) -> int:
        raise NotImplementedError


class MessageRepository(Protocol):
    def create(
        self,
        *,
        sender_id: str,
        sender_name: str,
        receiver_id: str,
        content: str,
        sender_type: SenderType,
    ) -> int:
        raise NotImplementedError

    def get(self, message_id: int) -> Optional[Message]:
        raise NotImplementedError

    def list_conversation(self, participant_id: str, *, limit: int = 200) -> Sequence[Message]:
        """Messages sent or received by `participant_id`, oldest first."""

        raise NotImplementedError

    def count_unread_for(self, receiver_id: str) -> int:
        raise NotImplementedError

    def mark_read(self, message_id: int) -> bool:
        raise NotImplementedError
