from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import SenderType, Severity
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Message, Notification
from .repository import MessageRepository, NotificationRepository


def _row_to_notification(r: dict) -> Notification:
    return Notification(
        notification_id=int(r["notification_id"]),
        user_id=str(r["user_id"]),
        title=r["title"],
        message=r["message"],
        severity=Severity(r["severity"]),
        is_read=bool(r["is_read"]),
        created_at=r["created_at"],
    )


def _row_to_message(r: dict) -> Message:
    return Message(
        message_id=int(r["message_id"]),
        sender_id=str(r["sender_id"]),
        sender_name=r["sender_name"],
        receiver_id=str(r["receiver_id"]),
        content=r["content"],
        sender_type=SenderType(r["sender_type"]),
        is_read=bool(r["is_read"]),
        created_at=r["created_at"],
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: str, title: str, message: str, severity: Severity) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notifications(user_id, title, message, severity, is_read) VALUES(%s,%s,%s,%s,0)",
                (str(user_id), title, message, severity.value),
            )
            return int(cur.lastrowid)

    def get(self, notification_id: int) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT notification_id, user_id, title, message, severity, is_read, created_at
                FROM notifications
                WHERE notification_id=%s
                """,
                (int(notification_id),),
            )
            r = fetchone(cur)
            return _row_to_notification(r) if r else None

    def list_for_user(self, user_id: str, *, unread_only: bool = False, limit: int = 200) -> Sequence[Notification]:
        where = "user_id=%s AND is_read=0" if unread_only else "user_id=%s"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT notification_id, user_id, title, message, severity, is_read, created_at
                FROM notifications
                WHERE {where}
                ORDER BY created_at DESC, notification_id DESC
                LIMIT %s
                """,
                (str(user_id), int(limit)),
            )
            return [_row_to_notification(r) for r in fetchall(cur)]

    def count_unread(self, user_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM notifications WHERE user_id=%s AND is_read=0", (str(user_id),))
            return int(fetchone(cur)["n"])

    def mark_read(self, notification_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE notification_id=%s", (int(notification_id),))
            return cur.rowcount > 0

    def mark_all_read(self, user_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE user_id=%s AND is_read=0", (str(user_id),))
            return int(cur.rowcount)


class MySQLMessageRepository(MessageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        sender_id: str,
        sender_name: str,
        receiver_id: str,
        content: str,
        sender_type: SenderType,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO messages(sender_id, sender_name, receiver_id, content, sender_type, is_read)
                VALUES(%s,%s,%s,%s,%s,0)
                """,
                (str(sender_id), sender_name, str(receiver_id), content, sender_type.value),
            )
            return int(cur.lastrowid)

    def get(self, message_id: int) -> Optional[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT message_id, sender_id, sender_name, receiver_id, content, sender_type, is_read, created_at
                FROM messages
                WHERE message_id=%s
                """,
                (int(message_id),),
            )
            r = fetchone(cur)
            return _row_to_message(r) if r else None

    def list_conversation(self, participant_id: str, *, limit: int = 200) -> Sequence[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT message_id, sender_id, sender_name, receiver_id, content, sender_type, is_read, created_at
                FROM messages
                WHERE sender_id=%s OR receiver_id=%s
                ORDER BY created_at ASC, message_id ASC
                LIMIT %s
                """,
                (str(participant_id), str(participant_id), int(limit)),
            )
            return [_row_to_message(r) for r in fetchall(cur)]

    def count_unread_for(self, receiver_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM messages WHERE receiver_id=%s AND is_read=0", (str(receiver_id),))
            return int(fetchone(cur)["n"])

    def mark_read(self, message_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE messages SET is_read=1 WHERE message_id=%s", (int(message_id),))
            return cur.rowcount > 0
