import itertools
import os

# Налаштування мають бути виставлені до імпорту pharmareserve
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from pharmareserve.core.enums import Role
from pharmareserve.core.security import get_password_hash
from pharmareserve.db.database import Base, SessionLocal, engine
from pharmareserve.db.models import Medicine, Pharmacy, User
from pharmareserve.db.store import EntityStore
from pharmareserve.main import app

TEST_PASSWORD = "secret123"


# ── DB ───────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def password_hash():
    # bcrypt повільний, хешуємо один раз на сесію
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db):
    return EntityStore(db)


# ── Factories ────────────────────────────────────────────────────────

@pytest.fixture
def make_user(db, password_hash):
    counter = itertools.count(1)

    def _make(role=Role.CONSUMER, email=None, is_active=True):
        n = next(counter)
        role = Role(role)
        user = User(
            email=email or f"{role.value}{n}@example.com",
            full_name=f"{role.value.title()} {n}",
            role=role.value,
            hashed_password=password_hash,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_pharmacy(db):
    counter = itertools.count(1)

    def _make(owner, **overrides):
        n = next(counter)
        fields = {
            "name": f"Pharmacy {n}",
            "location": "Main St 1",
            "license": f"LIC-{n:04d}",
            "contact": "+1 555 0000",
            "verified": False,
        }
        fields.update(overrides)
        pharmacy = Pharmacy(user_id=owner.id, **fields)
        db.add(pharmacy)
        db.commit()
        db.refresh(pharmacy)
        return pharmacy

    return _make


@pytest.fixture
def make_medicine(db):
    counter = itertools.count(1)

    def _make(pharmacy, **overrides):
        n = next(counter)
        fields = {
            "name": f"Medicine {n}",
            "strength": "500mg",
            "price": 10.0,
            "availability": True,
        }
        fields.update(overrides)
        medicine = Medicine(pharmacy_id=pharmacy.id, **fields)
        db.add(medicine)
        db.commit()
        db.refresh(medicine)
        return medicine

    return _make


# ── HTTP ─────────────────────────────────────────────────────────────

@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    def _headers(user):
        response = client.post(
            "/auth/login",
            data={"username": user.email, "password": TEST_PASSWORD},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _headers
