"""
Pytest fixtures for the back-office API.

Provides:
- an in-memory SQLite database (fresh schema per test)
- a TestClient with the request session bound to that database
- a regular user and an admin, with bearer headers
"""
import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("EBAY_APP_ID", "test-app-id")
os.environ.setdefault("EBAY_CERT_ID", "test-cert-id")
os.environ.setdefault("EBAY_REDIRECT_URI", "Test-RuName")
os.environ.setdefault("EBAY_ENVIRONMENT", "sandbox")

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import backoffice.models  # noqa: F401
from backoffice.core import security
from backoffice.core.security import create_access_token
from backoffice.crud.crud_user import user_crud
from backoffice.db.database import Base, get_db
from backoffice.models.user import User, UserRole
from backoffice.schemas.user import UserCreate
from main import app

# cheap hashes keep the suite fast
security.BCRYPT_ROUNDS = 4

API = "/api/v1"
PASSWORD = "password123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db: Session, email: str, role: UserRole = UserRole.USER, name: str = "Test User") -> User:
    return user_crud.create(db, UserCreate(email=email, name=name, password=PASSWORD, role=role))


def auth_headers(user: User) -> dict:
    token = create_access_token(
        user.id,
        extra_claims={"email": user.email, "name": user.name, "role": user.role.value},
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(db) -> User:
    return make_user(db, "user@example.com")


@pytest.fixture
def other_user(db) -> User:
    return make_user(db, "other@example.com", name="Other User")


@pytest.fixture
def admin(db) -> User:
    return make_user(db, "admin@example.com", role=UserRole.ADMIN, name="Admin")


@pytest.fixture
def headers(user) -> dict:
    return auth_headers(user)


@pytest.fixture
def other_headers(other_user) -> dict:
    return auth_headers(other_user)


@pytest.fixture
def admin_headers(admin) -> dict:
    return auth_headers(admin)
