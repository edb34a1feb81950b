from __future__ import annotations

from datetime import timedelta

from flask import Flask, request, session

from ..common.http import admin_required, current_role, current_user_id, login_required, ok, payload
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..core.logging_config import get_logger
from ..container import Container

logger = get_logger("employees.controller")

_EDITABLE = (
    "full_name",
    "email",
    "contact_number",
    "account_number",
    "parent_name",
    "parent_contact",
    "esic_number",
    "pf_number",
    "department",
    "position",
    "hire_date",
    "basic_salary",
    "leave_balance",
)


def _as_bool(value, default=None):
    if value is None or value == "":
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = payload()
        employee_id = container.employee_service.register(
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            confirm_password=data.get("confirm_password"),
            contact_number=data.get("contact_number", ""),
            account_number=data.get("account_number", ""),
            parent_name=data.get("parent_name", ""),
            parent_contact=data.get("parent_contact", ""),
            esic_number=data.get("esic_number"),
            pf_number=data.get("pf_number"),
        )
        return ok(
            {"employee_id": employee_id},
            message="Registration successful! Please wait for admin approval.",
            status=201,
        )

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = payload()
        try:
            role = Role(data.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError("Invalid role")

        s_user = container.auth_service.authenticate(
            data.get("email") or data.get("username") or "",
            data.get("password", ""),
            role=role,
        )

        session.clear()
        session.permanent = _as_bool(data.get("remember_me"), False)
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["email"] = s_user.email
        session["role"] = s_user.role.value

        logger.info("%s %s logged in", s_user.role.value, s_user.user_id)
        return ok(
            {"user_id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role.value},
            message="Login successful",
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        if current_role() == Role.ADMIN:
            return ok({"user_id": current_user_id(), "name": session.get("name"), "role": Role.ADMIN.value})
        employee = container.employee_service.get(int(current_user_id()))
        return ok({**employee.to_dict(), "role": Role.EMPLOYEE.value})

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees():
        page = container.employee_service.search(
            approval_status=request.args.get("status"),
            department=request.args.get("department"),
            is_active=_as_bool(request.args.get("is_active"), True),
            search=request.args.get("search"),
            page=request.args.get("page", 1),
            page_size=request.args.get("limit"),
        )
        return ok([e.to_dict() for e in page.employees], pagination=page.pagination())

    @app.route("/api/admin/employees/stats", methods=["GET"], endpoint="admin_employee_stats")
    @admin_required
    def admin_employee_stats():
        return ok(container.employee_service.stats())

    @app.route("/api/admin/employees/<int:employee_id>", methods=["GET"], endpoint="admin_employee_detail")
    @admin_required
    def admin_employee_detail(employee_id: int):
        return ok(container.employee_service.get(employee_id).to_dict())

    @app.route("/api/admin/employees/<int:employee_id>", methods=["PUT"], endpoint="admin_employee_update")
    @admin_required
    def admin_employee_update(employee_id: int):
        data = payload()
        changes = {k: data[k] for k in _EDITABLE if k in data}
        employee = container.employee_service.update_profile(
            current_role=current_role(),
            employee_id=employee_id,
            changes=changes,
        )
        return ok(employee.to_dict(), message="Employee updated successfully")

    @app.route("/api/admin/employees/<int:employee_id>", methods=["DELETE"], endpoint="admin_employee_delete")
    @admin_required
    def admin_employee_delete(employee_id: int):
        container.employee_service.deactivate(current_role=current_role(), employee_id=employee_id)
        return ok(message="Employee deleted successfully")

    @app.route("/api/admin/employees/<int:employee_id>/approve", methods=["POST"], endpoint="approve_employee")
    @admin_required
    def approve_employee(employee_id: int):
        employee = container.employee_service.approve(current_role=current_role(), employee_id=employee_id)
        return ok(employee.to_dict(), message="Employee approved")

    @app.route("/api/admin/employees/<int:employee_id>/reject", methods=["POST"], endpoint="reject_employee")
    @admin_required
    def reject_employee(employee_id: int):
        employee = container.employee_service.reject(current_role=current_role(), employee_id=employee_id)
        return ok(employee.to_dict(), message="Employee rejected")
