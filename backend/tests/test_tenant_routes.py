"""
Tests for the tenant endpoints
"""
from rentals.extensions import db
from rentals.models import Unit, Tenant


def test_create_tenant_returns_credentials(client, auth_headers, make_unit, tenant_payload):
    unit = make_unit(rent=45000)

    response = client.post("/api/tenants", json=tenant_payload(unit.id), headers=auth_headers())

    assert response.status_code == 201
    data = response.get_json()
    assert data["tenant"]["unitId"] == unit.id
    assert data["tenant"]["unit"]["status"] == "occupied"
    assert data["credentials"]["email"] == "a@x.com"
    assert data["credentials"]["password"]
    assert db.session.get(Unit, unit.id).status == "occupied"


def test_created_tenant_can_log_in(client, auth_headers, make_unit, tenant_payload):
    unit = make_unit()
    created = client.post(
        "/api/tenants", json=tenant_payload(unit.id, password="pass1234"), headers=auth_headers()
    ).get_json()

    response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "pass1234"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["user"]["role"] == "tenant"
    me = client.get("/api/tenants/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.get_json()["tenant"]["id"] == created["tenant"]["id"]


def test_create_tenant_missing_fields(client, auth_headers):
    response = client.post("/api/tenants", json={"name": "A"}, headers=auth_headers())
    assert response.status_code == 400
    data = response.get_json()
    assert data["message"] == "Missing required fields"
    assert "unitId" in data["fields"]


def test_create_tenant_on_occupied_unit(client, auth_headers, make_unit, tenant_payload):
    unit = make_unit(status="occupied")
    response = client.post("/api/tenants", json=tenant_payload(unit.id), headers=auth_headers())
    assert response.status_code == 409
    assert Tenant.query.count() == 0


def test_create_tenant_unknown_unit(client, auth_headers, tenant_payload):
    response = client.post("/api/tenants", json=tenant_payload(404), headers=auth_headers())
    assert response.status_code == 404
    assert response.get_json()["message"] == "Unit not found"


def test_tenant_endpoints_require_token(client):
    assert client.get("/api/tenants").status_code == 401


def test_tenant_role_cannot_manage_tenants(client, auth_headers):
    response = client.get("/api/tenants", headers=auth_headers("tenant"))
    assert response.status_code == 403


def test_admin_bypasses_role_check(client, auth_headers):
    response = client.get("/api/tenants", headers=auth_headers("admin"))
    assert response.status_code == 200


def test_list_and_search_tenants(client, auth_headers, make_unit, tenant_payload):
    headers = auth_headers()
    client.post("/api/tenants", json=tenant_payload(make_unit().id), headers=headers)
    client.post("/api/tenants", json=tenant_payload(make_unit().id, name="Bob", email="bob@x.com"), headers=headers)

    all_tenants = client.get("/api/tenants", headers=headers).get_json()
    assert [t["name"] for t in all_tenants["tenants"]] == ["Bob", "A"]
    assert all_tenants["meta"]["totalItems"] == 2

    found = client.get("/api/tenants?q=bob", headers=headers).get_json()
    assert [t["email"] for t in found["tenants"]] == ["bob@x.com"]


def test_tenant_listing_pages(client, auth_headers, make_unit, tenant_payload):
    headers = auth_headers()
    for n in range(3):
        client.post("/api/tenants", json=tenant_payload(make_unit().id, email=f"t{n}@x.com"), headers=headers)

    first = client.get("/api/tenants?perPage=2", headers=headers).get_json()
    assert len(first["tenants"]) == 2
    assert first["meta"] == {"page": 1, "perPage": 2, "totalItems": 3, "totalPages": 2}
    assert "perPage=2" in first["links"]["next"]
    assert "prev" not in first["links"]

    past_end = client.get("/api/tenants?perPage=2&page=9", headers=headers).get_json()
    assert past_end["meta"]["page"] == 2
    assert [t["email"] for t in past_end["tenants"]] == ["t0@x.com"]


def test_vacant_units_listing(client, auth_headers, make_unit):
    vacant = make_unit()
    make_unit(status="maintenance")

    response = client.get("/api/tenants/vacant-units", headers=auth_headers())

    assert [u["id"] for u in response.get_json()["units"]] == [vacant.id]


def test_patch_tenant_reassigns_unit(client, auth_headers, make_unit, tenant_payload):
    headers = auth_headers()
    u1, u2 = make_unit(), make_unit()
    tenant_id = client.post("/api/tenants", json=tenant_payload(u1.id), headers=headers).get_json()["tenant"]["id"]

    response = client.patch(f"/api/tenants/{tenant_id}", json={"unitId": u2.id}, headers=headers)

    assert response.status_code == 200
    assert response.get_json()["tenant"]["unitId"] == u2.id
    assert db.session.get(Unit, u1.id).status == "vacant"
    assert db.session.get(Unit, u2.id).status == "occupied"


def test_patch_tenant_to_taken_unit_conflicts(client, auth_headers, make_unit, tenant_payload):
    headers = auth_headers()
    u1, u2 = make_unit(), make_unit()
    t1 = client.post("/api/tenants", json=tenant_payload(u1.id), headers=headers).get_json()["tenant"]["id"]
    client.post("/api/tenants", json=tenant_payload(u2.id, email="b@x.com"), headers=headers)

    response = client.patch(f"/api/tenants/{t1}", json={"unitId": u2.id}, headers=headers)

    assert response.status_code == 409


def test_delete_tenant(client, auth_headers, make_unit, tenant_payload):
    headers = auth_headers()
    unit = make_unit()
    tenant_id = client.post("/api/tenants", json=tenant_payload(unit.id), headers=headers).get_json()["tenant"]["id"]

    response = client.delete(f"/api/tenants/{tenant_id}", headers=headers)

    assert response.status_code == 204
    assert db.session.get(Unit, unit.id).status == "vacant"
    assert client.get(f"/api/tenants/{tenant_id}", headers=headers).status_code == 404
