from tests.conftest import API


def test_list_users_requires_admin(client, headers):
    response = client.get(f"{API}/users/", headers=headers)
    assert response.status_code == 403


def test_admin_lists_and_filters_users(client, user, admin_headers):
    response = client.get(f"{API}/users/", headers=admin_headers)
    assert response.status_code == 200
    emails = {u["email"] for u in response.json()}
    assert {"user@example.com", "admin@example.com"} <= emails

    response = client.get(f"{API}/users/", params={"role": "ADMIN"}, headers=admin_headers)
    assert [u["email"] for u in response.json()] == ["admin@example.com"]


def test_admin_creates_user(client, admin_headers):
    payload = {"email": "new@example.com", "name": "New", "password": "longenough"}
    response = client.post(f"{API}/users/", json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["role"] == "USER"

    response = client.post(f"{API}/users/", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_short_password_rejected(client, admin_headers):
    payload = {"email": "short@example.com", "name": "Short", "password": "short"}
    response = client.post(f"{API}/users/", json=payload, headers=admin_headers)
    assert response.status_code == 422


def test_admin_updates_role(client, user, admin_headers):
    response = client.put(f"{API}/users/{user.id}", json={"role": "ADMIN"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "ADMIN"


def test_admin_cannot_deactivate_self(client, admin, admin_headers):
    response = client.put(f"{API}/users/{admin.id}", json={"is_active": False}, headers=admin_headers)
    assert response.status_code == 400


def test_deactivated_user_is_locked_out(client, user, headers, admin_headers):
    client.put(f"{API}/users/{user.id}", json={"is_active": False}, headers=admin_headers)
    response = client.get(f"{API}/auth/me", headers=headers)
    assert response.status_code == 403
