"""
HTTP API tests — auth, tariff, pricing, job pricing merge, statuses.

Tests:
1-5.   Health + admin auth
6.     Public rate card
7-11.  Pricing endpoints
12-15. Job record pricing (/jobs/price)
16-18. Status list + status checks
"""

from decimal import Decimal

import pytest


def _money(value):
    return Decimal(str(value))


def _estimate_payload(**overrides):
    data = {
        "crew_size": 3,
        "estimated_hours": 4,
        "distance_miles": 30,
        "box_count_quoted": 10,
        "mattress_bag_count": 1,
        "materials_cost": 20,
        "preferred_date": "2025-07-15",
    }
    data.update(overrides)
    return data


def _job_record(**overrides):
    """Job as the admin UI holds it: storage field names plus unrelated fields."""
    data = {
        "id": 42,
        "title": "Smith, 2BR apartment",
        "status": "booked",
        "crew_size": 3,
        "estimated_hours": "4",
        "total_distance": "30",
        "box_count_quoted": 10,
        "mattress_bag_count": 1,
        "materials_cost": "20.00",
        "preferred_date": "2025-07-15",
        "origin_city": "Clarksville",
    }
    data.update(overrides)
    return data


# ============================================================
# 1-5. Health + auth
# ============================================================

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_admin_login_and_me(client, admin_headers):
    response = client.get("/api/auth/me", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "admin"
    assert body["company_name"] == "Murray Moving"
    assert body["company_email"] == "info@murraymoving.com"
    assert "company_phone" in body


def test_login_wrong_password(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 401


def test_login_wrong_username(client, admin_password):
    response = client.post("/api/auth/login", json={"username": "root", "password": admin_password})
    assert response.status_code == 401


@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Bearer not-a-token"},
])
def test_admin_endpoints_require_token(client, headers):
    assert client.get("/api/auth/me", headers=headers).status_code == 401
    assert client.post(
        "/api/pricing/estimate", json=_estimate_payload(), headers=headers,
    ).status_code == 401
    assert client.post(
        "/api/jobs/status-check",
        json={"current_status": "lead", "requested_status": "booked"},
        headers=headers,
    ).status_code == 401


# ============================================================
# 6. Rate card
# ============================================================

def test_tariff_is_public(client):
    response = client.get("/api/tariff")
    assert response.status_code == 200
    data = response.json()
    assert _money(data["hourly_rates"]["2"]) == Decimal("149")
    assert _money(data["labor_only_rates"]["2"]) == Decimal("85")
    assert _money(data["travel_base_fee"]) == Decimal("99")
    assert _money(data["mattress_bag_fee"]) == Decimal("15")


# ============================================================
# 7-11. Pricing
# ============================================================

def test_price_estimate(client, admin_headers):
    response = client.post("/api/pricing/estimate", json=_estimate_payload(), headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert _money(data["labor_cost"]) == Decimal("1194")
    assert _money(data["travel_fee"]) == Decimal("218.40")
    assert _money(data["total_estimate"]) == Decimal("1447.40")
    assert _money(data["breakdown"]["billable_hours"]) == Decimal("6")
    assert data["breakdown"]["busy_season"] is True
    assert data["breakdown"]["job_date"] == "2025-07-15"


def test_price_estimate_rejects_bad_input(client, admin_headers):
    for bad in (
        _estimate_payload(crew_size=6),
        _estimate_payload(distance_miles=-5),
        _estimate_payload(estimated_hours=0),
    ):
        response = client.post("/api/pricing/estimate", json=bad, headers=admin_headers)
        assert response.status_code == 422


def test_price_actual(client, admin_headers):
    payload = _estimate_payload()
    payload.pop("estimated_hours")
    payload.update({"actual_hours": 7, "actual_box_count": 13})
    response = client.post("/api/pricing/actual", json=payload, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert _money(data["box_overage_fee"]) == Decimal("5")
    assert _money(data["total_actual"]) == Decimal("1651.40")


def test_price_profit(client, admin_headers):
    response = client.post("/api/pricing/profit", json={
        "revenue": 1000,
        "expenses": {"crew_pay": 400, "fuel_cost": 50},
    }, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert _money(data["total_expenses"]) == Decimal("450")
    assert _money(data["profit"]) == Decimal("550")
    assert _money(data["profit_margin"]) == Decimal("55")


def test_price_profit_without_revenue(client, admin_headers):
    response = client.post("/api/pricing/profit", json={"revenue": 0}, headers=admin_headers)
    assert response.status_code == 200
    assert _money(response.json()["profit_margin"]) == 0


# ============================================================
# 12-15. Job record pricing
# ============================================================

def test_price_job_merges_estimate(client, admin_headers):
    response = client.post("/api/jobs/price", json={"job": _job_record()}, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    job = data["job"]
    assert data["priced"] is True
    assert _money(job["total_estimate"]) == Decimal("1447.40")
    assert _money(job["labor_cost"]) == Decimal("1194")
    assert "box_overage_fee" not in job
    assert job["job_number"].startswith("MV")
    assert job["invoice_number"] is None
    # Untouched fields pass through
    assert job["origin_city"] == "Clarksville"
    assert job["status"] == "booked"


def test_price_job_actual_assigns_invoice(client, admin_headers):
    record = _job_record(
        status="completed", job_number="MV250715-001",
        actual_hours="7", box_count_actual=13,
    )
    response = client.post(
        "/api/jobs/price", json={"job": record, "actual": True}, headers=admin_headers,
    )
    assert response.status_code == 200
    job = response.json()["job"]
    assert job["job_number"] == "MV250715-001"
    assert job["invoice_number"].startswith("INV-")
    assert _money(job["box_overage_fee"]) == Decimal("5")
    assert _money(job["total_actual"]) == Decimal("1651.40")


def test_price_job_missing_inputs_returns_unpriced(client, admin_headers):
    record = _job_record()
    record.pop("estimated_hours")
    response = client.post("/api/jobs/price", json={"job": record}, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["priced"] is False
    assert data["pricing"] is None
    assert "total_estimate" not in data["job"]
    assert data["job"]["job_number"].startswith("MV")


def test_price_job_out_of_range_crew(client, admin_headers):
    response = client.post(
        "/api/jobs/price", json={"job": _job_record(crew_size=8)}, headers=admin_headers,
    )
    assert response.status_code == 400
    assert "crew_size" in response.json()["detail"]


# ============================================================
# 16-18. Statuses
# ============================================================

def test_list_statuses(client):
    response = client.get("/api/jobs/statuses")
    assert response.status_code == 200
    statuses = {s["status"]: s for s in response.json()}
    assert list(statuses) == ["lead", "estimate", "booked", "active", "completed", "paid"]
    assert statuses["active"]["display_name"] == "In Progress"
    assert statuses["booked"]["forward_statuses"] == ["active"]
    assert statuses["booked"]["next_statuses"] == ["estimate", "active"]
    assert statuses["paid"]["terminal"] is True
    assert statuses["paid"]["next_statuses"] == []


def test_status_check_allowed(client, admin_headers):
    response = client.post("/api/jobs/status-check", json={
        "current_status": "completed",
        "requested_status": "paid",
    }, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["allowed"] is True


def test_status_check_rejected_is_not_an_error(client, admin_headers):
    response = client.post("/api/jobs/status-check", json={
        "current_status": "paid",
        "requested_status": "active",
    }, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["allowed"] is False
    assert data["next_statuses"] == []
