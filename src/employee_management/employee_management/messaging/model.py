from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import SenderType, Severity


@dataclass(frozen=True)
class Notification:
    notification_id: int
    user_id: str
    title: str
    message: str
    severity: Severity
    is_read: bool
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "notification_id": self.notification_id,
            "user_id": self.user_id,
            "title": self.title,
            "message": self.message,
            "severity": self.severity.value,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class Message:
    message_id: int
    sender_id: str
    sender_name: str
    receiver_id: str
    content: str
    sender_type: SenderType
    is_read: bool
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "message_id": self.message_id,
            "sender_id": self.sender_id,
            "sender_name": self.sender_name,
            "receiver_id": self.receiver_id,
            "content": self.content,
            "sender_type": self.sender_type.value,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat(),
        }
