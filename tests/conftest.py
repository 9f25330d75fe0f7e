"""
Pytest fixtures for DBE tracker tests

Provides an in-memory SQLite database per test, a TestClient wired to it,
and signed-in users (a member, a second member and an admin).
"""
import os

# Must be set before the application modules read settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from backend.dbe_tracker import models  # noqa: E402,F401
from backend.dbe_tracker.core.database import Base, get_db  # noqa: E402
from backend.dbe_tracker.core.security import get_password_hash  # noqa: E402
from backend.dbe_tracker.main import app  # noqa: E402
from backend.dbe_tracker.models.user import User, UserRole  # noqa: E402

PASSWORD = "Passw0rd!"


# ── Helpers ───────────────────────────────────────────────────────────────────

def make_user(db, email, role=UserRole.MEMBER):
    user = User(email=email, password_hash=get_password_hash(PASSWORD), full_name=email.split("@")[0], role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def sign_in(client, email):
    resp = client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def contract_payload(**overrides):
    payload = {
        "tad_project_number": "TAD-2024-001",
        "contract_number": "AER-1001",
        "prime_contractor": "Granite Runway Builders",
        "original_amount": "100000.00",
        "dbe_percentage": "10",
        "award_date": "2024-02-01",
        "final_report": False,
        "subgrants": [],
    }
    payload.update(overrides)
    return payload


def subgrant_payload(**overrides):
    payload = {
        "dbe_firm_name": "Mesa Striping LLC",
        "naics_code": "237310",
        "amount": "12000.00",
        "contract_type": "Subcontract",
        "certified_dbe": True,
        "ethnicity_gender": "Black American/Female",
    }
    payload.update(overrides)
    return payload


def as_decimal(value):
    return Decimal(str(value))


# ── Database ──────────────────────────────────────────────────────────────────

@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# ── API client ────────────────────────────────────────────────────────────────

@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def member(db):
    return make_user(db, "pat@aeronautics.example.gov")


@pytest.fixture()
def other_member(db):
    return make_user(db, "sam@aeronautics.example.gov")


@pytest.fixture()
def admin(db):
    return make_user(db, "admin@aeronautics.example.gov", role=UserRole.ADMIN)


@pytest.fixture()
def member_headers(client, member):
    return sign_in(client, member.email)


@pytest.fixture()
def other_headers(client, other_member):
    return sign_in(client, other_member.email)


@pytest.fixture()
def admin_headers(client, admin):
    return sign_in(client, admin.email)
