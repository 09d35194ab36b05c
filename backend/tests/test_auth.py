from backoffice.core.config import settings
from backoffice.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from backoffice.schemas.user import UserUpdate
from backoffice.crud.crud_user import user_crud
from tests.conftest import API, PASSWORD


def test_password_hashing():
    hashed = get_password_hash("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)
    assert not verify_password("s3cret-pass", "not-a-bcrypt-hash")


def test_token_claims(user):
    token = create_access_token(user.id, extra_claims={"email": user.email, "role": "USER"})
    payload = decode_access_token(token)
    assert payload["sub"] == str(user.id)
    assert payload["email"] == user.email
    assert payload["exp"] > payload["iat"]


def test_login_with_json_sets_cookie(client, user):
    response = client.post(f"{API}/auth/login", json={"email": user.email, "password": PASSWORD})
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    assert settings.AUTH_COOKIE_NAME in response.cookies

    payload = decode_access_token(data["access_token"])
    assert payload["sub"] == str(user.id)
    assert payload["role"] == "USER"


def test_login_with_form_username(client, user):
    response = client.post(f"{API}/auth/login", data={"username": user.email, "password": PASSWORD})
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_email_is_case_insensitive(client, user):
    response = client.post(f"{API}/auth/login", json={"email": "USER@example.com", "password": PASSWORD})
    assert response.status_code == 200


def test_login_wrong_password(client, user):
    response = client.post(f"{API}/auth/login", json={"email": user.email, "password": "nope-nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_missing_fields(client):
    response = client.post(f"{API}/auth/login", json={"email": "someone@example.com"})
    assert response.status_code == 400


def test_login_inactive_user(client, db, user):
    user_crud.update(db, user, UserUpdate(is_active=False))
    response = client.post(f"{API}/auth/login", json={"email": user.email, "password": PASSWORD})
    assert response.status_code == 403


def test_me_with_bearer(client, user, headers):
    response = client.get(f"{API}/auth/me", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(user.id)
    assert data["email"] == user.email
    assert data["ebay_connected"] is False
    assert "hashed_password" not in data


def test_me_with_cookie(client, user):
    client.post(f"{API}/auth/login", json={"email": user.email, "password": PASSWORD})
    response = client.get(f"{API}/auth/me")
    assert response.status_code == 200
    assert response.json()["email"] == user.email


def test_me_requires_token(client):
    response = client.get(f"{API}/auth/me")
    assert response.status_code == 401
    assert response.json()["detail"] == "Authentication required"


def test_me_rejects_garbage_token(client):
    response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_refresh_issues_new_token(client, headers):
    response = client.post(f"{API}/auth/refresh", headers=headers)
    assert response.status_code == 200
    assert response.json()["access_token"]


def test_logout_clears_cookie(client, user):
    client.post(f"{API}/auth/login", json={"email": user.email, "password": PASSWORD})
    response = client.post(f"{API}/auth/logout")
    assert response.status_code == 200
    assert client.get(f"{API}/auth/me").status_code == 401
