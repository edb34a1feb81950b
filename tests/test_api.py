from __future__ import annotations

import pytest

from src.employee_management.employee_management import create_app
from src.employee_management.employee_management.container import wire_container


@pytest.fixture
def app(monkeypatch, employees, records, pay_requests, notifications_repo, messages_repo):
    monkeypatch.delenv("APP_SETTINGS", raising=False)
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire_container(
        conn=None,
        employees_repo=employees,
        records_repo=records,
        pay_requests_repo=pay_requests,
        notifications_repo=notifications_repo,
        messages_repo=messages_repo,
        admin_username="admin",
        admin_password="admin123",
    )
    return create_app(container=container)


@pytest.fixture
def admin(app):
    client = app.test_client()
    res = client.post("/api/auth/login", json={"username": "admin", "password": "admin123", "role": "admin"})
    assert res.status_code == 200
    return client


def _login(app, email, password):
    client = app.test_client()
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    return client, res


SIGNUP = {
    "full_name": "Neha Verma",
    "email": "neha@company.com",
    "password": "secret123",
    "contact_number": "9000011111",
    "account_number": "123456789",
    "parent_name": "Anil Verma",
    "parent_contact": "9000022222",
}


def test_signup_approval_and_login(app, admin):
    res = app.test_client().post("/api/auth/signup", json=SIGNUP)
    assert res.status_code == 201
    employee_id = res.get_json()["data"]["employee_id"]

    _, res = _login(app, "neha@company.com", "secret123")
    assert res.status_code == 401
    assert res.get_json()["success"] is False

    res = admin.get("/api/admin/employees?status=pending")
    assert [e["employee_id"] for e in res.get_json()["data"]] == [employee_id]
    assert res.get_json()["pagination"]["total_employees"] == 1

    res = admin.post(f"/api/admin/employees/{employee_id}/approve")
    assert res.status_code == 200
    assert res.get_json()["data"]["leave_balance"] == 24

    client, res = _login(app, "neha@company.com", "secret123")
    assert res.status_code == 200
    me = client.get("/api/me").get_json()["data"]
    assert me["email"] == "neha@company.com"
    assert "password_hash" not in me

    notes = client.get("/api/notifications").get_json()
    assert notes["unread"] == 1
    assert notes["data"][0]["title"] == "Account Approved"


def test_duplicate_signup_is_conflict(app):
    client = app.test_client()
    assert client.post("/api/auth/signup", json=SIGNUP).status_code == 201
    res = client.post("/api/auth/signup", json=SIGNUP)
    assert res.status_code == 409


def test_routes_require_login_and_admin(app, approved_employee):
    anon = app.test_client()
    assert anon.get("/api/me").status_code == 401

    client, _ = _login(app, approved_employee.email, "secret123")
    assert client.get("/api/admin/employees").status_code == 403
    assert client.get("/api/admin/reports/salary.csv").status_code == 403


def test_monthly_record_flow(app, admin, approved_employee):
    res = admin.post(
        "/api/admin/monthly-records",
        json={
            "employee_id": approved_employee.employee_id,
            "total_working_days": 22,
            "present_days": 20,
            "half_days": 2,
            "overtime_hours": 10,
            "bonuses": 500,
            "deductions": 1000,
            "month": "March",
            "year": 2026,
        },
    )
    assert res.status_code == 201
    record = res.get_json()["data"]
    assert record["net_salary"] == pytest.approx(22375)

    res = admin.post(f"/api/admin/monthly-records/{record['record_id']}/status", json={"status": "paid"})
    assert res.status_code == 409

    res = admin.post(f"/api/admin/monthly-records/{record['record_id']}/status", json={"status": "processing"})
    assert res.get_json()["data"]["payment_status"] == "processing"

    client, _ = _login(app, approved_employee.email, "secret123")
    mine = client.get("/api/me/monthly-records").get_json()["data"]
    assert [r["record_id"] for r in mine] == [record["record_id"]]

    res = admin.get("/api/admin/reports/salary.csv")
    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    body = res.data.decode("utf-8-sig").splitlines()
    assert body[0] == "Employee,Month,Basic Salary,Present Days,Total Days,Attendance %,Net Salary,Payment Status"
    assert body[1].startswith("Priya Sharma,March 2026,22000.00,20,22,")


def test_validation_errors_are_400(admin, approved_employee):
    res = admin.post(
        "/api/admin/monthly-records",
        json={"employee_id": approved_employee.employee_id, "present_days": 30, "total_working_days": 22},
    )
    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_pay_request_and_messages(app, admin, approved_employee):
    client, _ = _login(app, approved_employee.email, "secret123")

    res = client.post("/api/me/pay-requests", json={"amount": 2500, "purpose": "Rent", "request_type": "advance"})
    assert res.status_code == 201
    request_id = res.get_json()["data"]["request_id"]

    res = admin.post(f"/api/admin/pay-requests/{request_id}/reject", json={"admin_notes": "Not this month"})
    assert res.get_json()["data"]["status"] == "rejected"
    assert admin.post(f"/api/admin/pay-requests/{request_id}/approve").status_code == 409

    assert client.post("/api/messages", json={"content": "Thanks"}).status_code == 201
    convo = admin.get(f"/api/messages?employee_id={approved_employee.employee_id}").get_json()
    assert convo["data"][0]["content"] == "Thanks"
    assert convo["unread"] == 1

    overview = admin.get("/api/admin/reports/overview").get_json()["data"]
    assert overview["pending_pay_requests"] == 0
    assert overview["unread_messages"] == 1


def test_unknown_route_is_json_404(app):
    res = app.test_client().get("/api/nope")
    assert res.status_code == 404
    assert res.get_json()["success"] is False


def test_preview_does_not_store_anything(admin, records):
    res = admin.post(
        "/api/admin/monthly-records/preview",
        json={"basic_salary": 1000, "total_working_days": 22, "present_days": 1, "deductions": 9999},
    )

    assert res.status_code == 200
    assert res.get_json()["data"]["gross_salary"] == pytest.approx(45.45)
    assert res.get_json()["data"]["net_salary"] == 0
    assert records.by_id == {}
    assert admin.post("/api/admin/monthly-records/preview", json={"bonuses": "lots"}).status_code == 400
    assert admin.post("/api/admin/monthly-records/preview", json={"deductions": "nan"}).status_code == 400
