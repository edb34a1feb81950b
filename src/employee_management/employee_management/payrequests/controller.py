from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, current_role, current_user_id, employee_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/me/pay-requests", methods=["GET"], endpoint="my_pay_requests")
    @employee_required
    def my_pay_requests():
        items = container.pay_request_service.list_mine(employee_id=int(current_user_id()))
        return ok([r.to_dict() for r in items])

    @app.route("/api/me/pay-requests", methods=["POST"], endpoint="new_pay_request")
    @employee_required
    def new_pay_request():
        data = payload()
        request_id = container.pay_request_service.submit(
            current_role=current_role(),
            employee_id=int(current_user_id()),
            amount=data.get("amount"),
            purpose=data.get("purpose", ""),
            request_type=data.get("request_type") or data.get("type"),
            description=data.get("description"),
        )
        return ok({"request_id": request_id}, message="Payment request submitted", status=201)

    @app.route("/api/admin/pay-requests", methods=["GET"], endpoint="admin_pay_requests")
    @admin_required
    def admin_pay_requests():
        items = container.pay_request_service.list_admin(status=request.args.get("status"))
        return ok([r.to_dict() for r in items])

    @app.route("/api/admin/pay-requests/<int:request_id>/approve", methods=["POST"], endpoint="approve_pay_request")
    @admin_required
    def approve_pay_request(request_id: int):
        req = container.pay_request_service.approve(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            request_id=request_id,
            admin_notes=payload().get("admin_notes", ""),
        )
        return ok(req.to_dict(), message="Payment request approved")

    @app.route("/api/admin/pay-requests/<int:request_id>/reject", methods=["POST"], endpoint="reject_pay_request")
    @admin_required
    def reject_pay_request(request_id: int):
        req = container.pay_request_service.reject(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            request_id=request_id,
            admin_notes=payload().get("admin_notes", ""),
        )
        return ok(req.to_dict(), message="Payment request rejected")
