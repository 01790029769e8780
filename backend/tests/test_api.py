"""
HTTP-level tests: auth, status-code mapping of domain errors, list envelopes.
"""

from pharmareserve.core.enums import Role

from conftest import TEST_PASSWORD


# ── Auth ─────────────────────────────────────────────────────────────

def test_root(client):
    assert client.get("/").json() == {"message": "PharmaReserve API is running"}


def test_register_login_me(client):
    response = client.post("/auth/register", json={
        "email": "new@example.com", "full_name": "New User", "password": "secret123", "role": "consumer",
    })
    assert response.status_code == 201, response.text
    assert "hashed_password" not in response.json()

    token = client.post("/auth/login", data={"username": "new@example.com", "password": "secret123"}).json()
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token['access_token']}"})

    assert me.status_code == 200
    assert me.json()["role"] == "consumer"


def test_register_admin_is_forbidden(client):
    response = client.post("/auth/register", json={
        "email": "evil@example.com", "full_name": "Evil", "password": "secret123", "role": "admin",
    })
    assert response.status_code == 403


def test_register_duplicate_email(client, make_user):
    user = make_user()
    response = client.post("/auth/register", json={
        "email": user.email, "full_name": "Dup", "password": "secret123",
    })
    assert response.status_code == 409


def test_login_wrong_password(client, make_user):
    user = make_user()
    response = client.post("/auth/login", data={"username": user.email, "password": "wrong"})
    assert response.status_code == 401


def test_inactive_user_cannot_login(client, make_user):
    user = make_user(is_active=False)
    response = client.post("/auth/login", data={"username": user.email, "password": TEST_PASSWORD})
    assert response.status_code == 400


def test_protected_route_requires_token(client):
    assert client.post("/reservations/", json={"medicine_id": 1}).status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_update_password(client, make_user, auth_headers):
    user = make_user()
    headers = auth_headers(user)

    bad = client.put("/auth/updatepassword", headers=headers, json={
        "current_password": "nope", "new_password": "another123",
    })
    assert bad.status_code == 401

    ok = client.put("/auth/updatepassword", headers=headers, json={
        "current_password": TEST_PASSWORD, "new_password": "another123",
    })
    assert ok.status_code == 200
    assert client.post("/auth/login", data={"username": user.email, "password": "another123"}).status_code == 200


def test_users_list_is_admin_only(client, make_user, auth_headers):
    assert client.get("/auth/users", headers=auth_headers(make_user())).status_code == 403

    response = client.get("/auth/users", params={"role": "consumer"}, headers=auth_headers(make_user(Role.ADMIN)))
    assert response.status_code == 200
    assert all(u["role"] == "consumer" for u in response.json())


# ── Pharmacies / medicines ───────────────────────────────────────────

def test_pharmacy_lifecycle_over_http(client, make_user, auth_headers):
    owner = make_user(Role.PHARMACY)
    headers = auth_headers(owner)
    body = {"name": "CityCare", "location": "Downtown", "license": "PH-1", "contact": "555"}

    created = client.post("/pharmacies/", json=body, headers=headers)
    assert created.status_code == 201, created.text
    pharmacy_id = created.json()["id"]
    assert created.json()["verified"] is False

    again = client.post("/pharmacies/", json={**body, "license": "PH-2"}, headers=headers)
    assert again.status_code == 409
    assert again.json()["detail"] == "User already has a pharmacy"

    mine = client.get("/pharmacies/mypharmacy", headers=headers)
    assert mine.json()["id"] == pharmacy_id

    stranger = auth_headers(make_user(Role.PHARMACY))
    assert client.put(f"/pharmacies/{pharmacy_id}", json={"verified": True}, headers=stranger).status_code == 403

    verified = client.put(f"/pharmacies/{pharmacy_id}", json={"verified": True}, headers=headers)
    assert verified.json()["verified"] is True

    listing = client.get("/pharmacies/", params={"verified": "true"}).json()
    assert listing["total"] == 1
    assert listing["pagination"] == {"page": 1, "limit": 10, "pages": 1}

    assert client.delete(f"/pharmacies/{pharmacy_id}", headers=headers).status_code == 204
    assert client.get(f"/pharmacies/{pharmacy_id}").status_code == 404


def test_pharmacy_validation(client, make_user, auth_headers):
    response = client.post(
        "/pharmacies/",
        json={"name": "X", "location": "", "license": "L", "contact": "c"},
        headers=auth_headers(make_user(Role.PHARMACY)),
    )
    assert response.status_code == 422


def test_medicine_crud_over_http(client, make_user, make_pharmacy, auth_headers):
    owner = make_user(Role.PHARMACY)
    pharmacy = make_pharmacy(owner)
    headers = auth_headers(owner)

    created = client.post("/medicines/", headers=headers, json={
        "name": "Paracetamol", "strength": "500mg", "price": 3.5, "pharmacy_id": pharmacy.id,
    })
    assert created.status_code == 201, created.text
    medicine = created.json()
    assert medicine["pharmacy"]["id"] == pharmacy.id

    negative = client.put(f"/medicines/{medicine['id']}", headers=headers, json={"price": -1})
    assert negative.status_code == 422

    updated = client.put(f"/medicines/{medicine['id']}", headers=headers, json={"availability": False})
    assert updated.json()["availability"] is False

    found = client.get("/medicines/", params={"name": "parac", "availability": "false"}).json()
    assert found["count"] == 1

    by_pharmacy = client.get(f"/medicines/pharmacy/{pharmacy.id}").json()
    assert by_pharmacy["total"] == 1

    consumer = auth_headers(make_user(Role.CONSUMER))
    assert client.delete(f"/medicines/{medicine['id']}", headers=consumer).status_code == 403
    assert client.delete(f"/medicines/{medicine['id']}", headers=headers).status_code == 204


# ── Reservations ─────────────────────────────────────────────────────

def test_reservation_flow_over_http(client, make_user, make_pharmacy, make_medicine, auth_headers):
    owner = make_user(Role.PHARMACY)
    pharmacy = make_pharmacy(owner)
    medicine = make_medicine(pharmacy)
    consumer = auth_headers(make_user(Role.CONSUMER))
    other = auth_headers(make_user(Role.CONSUMER))
    pharmacy_headers = auth_headers(owner)

    created = client.post("/reservations/", json={"medicine_id": medicine.id}, headers=consumer)
    assert created.status_code == 201, created.text
    reservation = created.json()
    assert reservation["status"] == "pending"
    assert reservation["pharmacy_id"] == pharmacy.id
    assert reservation["medicine"]["id"] == medicine.id

    duplicate = client.post("/reservations/", json={"medicine_id": medicine.id}, headers=consumer)
    assert duplicate.status_code == 409

    url = f"/reservations/{reservation['id']}"
    assert client.get(url, headers=other).status_code == 403
    assert client.put(url, json={"status": "cancelled"}, headers=other).status_code == 403
    assert client.put(url, json={"status": "confirmed"}, headers=consumer).status_code == 403
    assert client.put(url, json={"status": "unknown"}, headers=consumer).status_code == 422

    confirmed = client.put(url, json={"status": "confirmed"}, headers=pharmacy_headers)
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "confirmed"

    listing = client.get("/reservations/", params={"status": "confirmed"}, headers=pharmacy_headers).json()
    assert listing["total"] == 1

    assert client.delete(url, headers=consumer).status_code == 204
    assert client.get(url, headers=consumer).status_code == 404


def test_reservation_errors_over_http(client, make_user, make_pharmacy, make_medicine, auth_headers):
    pharmacy = make_pharmacy(make_user(Role.PHARMACY))
    unavailable = make_medicine(pharmacy, availability=False)
    consumer = auth_headers(make_user(Role.CONSUMER))

    missing = client.post("/reservations/", json={"medicine_id": 9999}, headers=consumer)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Medicine not found"

    conflict = client.post("/reservations/", json={"medicine_id": unavailable.id}, headers=consumer)
    assert conflict.status_code == 409
    assert conflict.json()["detail"] == "Medicine is not available"

    no_pharmacy = auth_headers(make_user(Role.PHARMACY))
    assert client.get("/reservations/", headers=no_pharmacy).status_code == 404


# ── Admin ────────────────────────────────────────────────────────────

def test_admin_dashboard_and_audit(client, make_user, make_pharmacy, make_medicine, auth_headers):
    owner = make_user(Role.PHARMACY)
    pharmacy = make_pharmacy(owner, verified=True)
    make_medicine(pharmacy)
    make_medicine(pharmacy, availability=False)
    admin = auth_headers(make_user(Role.ADMIN))

    assert client.get("/admin/dashboard-stats", headers=auth_headers(owner)).status_code == 403

    client.put(f"/pharmacies/{pharmacy.id}", json={"verified": False}, headers=admin)

    stats = client.get("/admin/dashboard-stats", headers=admin).json()
    assert stats["total_pharmacies"] == 1
    assert stats["verified_pharmacies"] == 0
    assert stats["total_medicines"] == 2
    assert stats["available_medicines"] == 1
    assert stats["reservations_by_status"] == {"pending": 0, "confirmed": 0, "cancelled": 0}

    logs = client.get("/admin/audit-logs", headers=admin).json()
    assert [log["action"] for log in logs] == ["PHARMACY_VERIFICATION_CHANGED"]


def test_my_pharmacy_requires_pharmacy_role(client, make_user, auth_headers):
    assert client.get("/pharmacies/mypharmacy", headers=auth_headers(make_user(Role.CONSUMER))).status_code == 403
    assert client.get("/pharmacies/mypharmacy", headers=auth_headers(make_user(Role.PHARMACY))).status_code == 404


def test_user_with_pharmacy_cannot_be_deleted(client, make_user, make_pharmacy, auth_headers):
    owner = make_user(Role.PHARMACY)
    make_pharmacy(owner)
    admin = auth_headers(make_user(Role.ADMIN))

    response = client.delete(f"/auth/users/{owner.id}", headers=admin)
    assert response.status_code == 409
    assert response.json()["detail"] == "Resource is still referenced by other records"


def test_audit_rows_outlive_deleted_user(client, make_user, auth_headers):
    owner = make_user(Role.PHARMACY)
    owner_id = owner.id
    headers = auth_headers(owner)
    admin = auth_headers(make_user(Role.ADMIN))

    created = client.post("/pharmacies/", headers=headers, json={
        "name": "Short Lived", "location": "Somewhere", "license": "PH-TMP", "contact": "555",
    })
    assert client.delete(f"/pharmacies/{created.json()['id']}", headers=headers).status_code == 204
    assert client.delete(f"/auth/users/{owner_id}", headers=admin).status_code == 204

    logs = client.get("/admin/audit-logs", headers=admin).json()
    assert {log["action"] for log in logs} == {"PHARMACY_CREATED", "PHARMACY_DELETED"}
    assert all(log["user_id"] is None for log in logs)
