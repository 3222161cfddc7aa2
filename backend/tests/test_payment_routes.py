"""
Tests for the payment endpoints
"""
import pytest

from rentals.models import Payment, User
from rentals.services.tenants import create_tenant


@pytest.fixture
def tenant(make_unit, tenant_payload):
    tenant, _ = create_tenant(tenant_payload(make_unit(rent=45000).id))
    return tenant


def test_tenant_pays_current_month_once(client, auth_headers, tenant):
    headers = auth_headers(user=tenant.user)
    body = {"month": 3, "year": 2024, "method": "M-Pesa"}

    first = client.post("/api/payments", json=body, headers=headers)
    second = client.post("/api/payments", json=body, headers=headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.get_json()["payment"]["id"] == second.get_json()["payment"]["id"]
    payment = second.get_json()["payment"]
    assert payment["amount"] == 45000
    assert payment["status"] == "completed"
    assert payment["dueDate"] == "2024-03-05"
    assert Payment.query.count() == 1


def test_payment_requires_period(client, auth_headers, tenant):
    response = client.post("/api/payments", json={"method": "M-Pesa"}, headers=auth_headers(user=tenant.user))
    assert response.status_code == 400


def test_landlord_records_payment_for_tenant(client, auth_headers, tenant):
    response = client.post(
        "/api/payments",
        json={"tenantId": tenant.id, "month": 5, "year": 2024, "method": "Manual"},
        headers=auth_headers(),
    )
    assert response.status_code == 200
    assert response.get_json()["payment"]["tenantId"] == tenant.id


def test_landlord_must_name_tenant(client, auth_headers):
    response = client.post("/api/payments", json={"month": 5, "year": 2024}, headers=auth_headers())
    assert response.status_code == 400


def test_user_without_tenant_record(client, auth_headers, make_user):
    stray = make_user("tenant")
    response = client.post("/api/payments", json={"month": 5, "year": 2024}, headers=auth_headers(user=stray))
    assert response.status_code == 404


def test_my_payments_only_lists_own(client, auth_headers, tenant, make_unit, tenant_payload):
    other, _ = create_tenant(tenant_payload(make_unit().id, email="b@x.com"))
    client.post("/api/payments", json={"month": 1, "year": 2024}, headers=auth_headers(user=tenant.user))
    client.post("/api/payments", json={"month": 1, "year": 2024}, headers=auth_headers(user=other.user))

    response = client.get("/api/payments/my", headers=auth_headers(user=tenant.user))

    payments = response.get_json()["payments"]
    assert len(payments) == 1
    assert payments[0]["tenantId"] == tenant.id


def test_list_payments_filters(client, auth_headers, tenant):
    tenant_headers = auth_headers(user=tenant.user)
    for month in (1, 2, 3):
        client.post("/api/payments", json={"month": month, "year": 2024}, headers=tenant_headers)

    response = client.get("/api/payments?month=2&year=2024", headers=auth_headers())

    payments = response.get_json()["payments"]
    assert [p["month"] for p in payments] == [2]


def test_tenant_cannot_list_all_payments(client, auth_headers, tenant):
    assert client.get("/api/payments", headers=auth_headers(user=tenant.user)).status_code == 403


def test_patch_payment(client, auth_headers, tenant):
    created = client.post(
        "/api/payments", json={"month": 2, "year": 2024}, headers=auth_headers(user=tenant.user)
    ).get_json()["payment"]

    response = client.patch(
        f"/api/payments/{created['id']}",
        json={"status": "pending", "reference": "MANUAL99"},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    payment = response.get_json()["payment"]
    assert payment["status"] == "pending"
    assert payment["reference"] == "MANUAL99"


def test_patch_missing_payment(client, auth_headers):
    response = client.patch("/api/payments/123", json={"status": "completed"}, headers=auth_headers())
    assert response.status_code == 404


def test_tenant_login_user_is_tenant_role(tenant):
    assert User.query.filter(User.id == tenant.user_id).one().role == "tenant"
