from __future__ import annotations

from flask import Flask, request

from ..common.http import current_role, current_user_id, login_required, ok, payload
from ..container import Container
from .service import recipient_for


def register(app: Flask, container: Container) -> None:
    def _inbox() -> str:
        return recipient_for(current_role(), current_user_id())

    @app.route("/api/messages", methods=["GET"], endpoint="messages")
    @login_required
    def messages():
        items = container.message_service.conversation(
            current_role=current_role(),
            user_id=current_user_id(),
            employee_id=request.args.get("employee_id"),
        )
        unread = container.message_service.unread_count(current_role=current_role(), user_id=current_user_id())
        return ok([m.to_dict() for m in items], unread=unread)

    @app.route("/api/messages", methods=["POST"], endpoint="send_message")
    @login_required
    def send_message():
        data = payload()
        message_id = container.message_service.send(
            current_role=current_role(),
            sender_id=current_user_id(),
            content=data.get("content", ""),
            receiver_id=data.get("receiver_id"),
        )
        return ok({"message_id": message_id}, message="Message sent", status=201)

    @app.route("/api/messages/<int:message_id>/read", methods=["POST"], endpoint="read_message")
    @login_required
    def read_message(message_id: int):
        container.message_service.mark_read(
            current_role=current_role(),
            user_id=current_user_id(),
            message_id=message_id,
        )
        return ok(message="Message marked as read")

    @app.route("/api/notifications", methods=["GET"], endpoint="notifications")
    @login_required
    def notifications():
        unread_only = request.args.get("unread") in {"1", "true", "yes"}
        items = container.notification_service.list_for(_inbox(), unread_only=unread_only)
        return ok(
            [n.to_dict() for n in items],
            unread=container.notification_service.unread_count(_inbox()),
        )

    @app.route("/api/notifications/<int:notification_id>/read", methods=["POST"], endpoint="read_notification")
    @login_required
    def read_notification(notification_id: int):
        container.notification_service.mark_read(recipient_id=_inbox(), notification_id=notification_id)
        return ok(message="Notification marked as read")

    @app.route("/api/notifications/read-all", methods=["POST"], endpoint="read_all_notifications")
    @login_required
    def read_all_notifications():
        count = container.notification_service.mark_all_read(recipient_id=_inbox())
        return ok({"updated": count}, message="All notifications marked as read")
