from __future__ import annotations

from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import DomainError
from ..core.logging_config import get_logger

logger = get_logger("http")


def ok(data: Any = None, *, message: str | None = None, status: int = 200, **extra):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def payload() -> dict:
    """JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def current_role() -> Role:
    return Role(session.get("role"))


def current_user_id() -> str:
    return str(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return fail("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def employee_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue", 401)
        if session.get("role") != Role.EMPLOYEE.value:
            return fail("Employee access required", 403)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), e.status_code)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return fail(e.description or e.name, e.code or 500)

        logger.exception("unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return fail(f"Internal server error: {e}", 500)
        return fail("Internal server error", 500)
