"""Shared fixtures: a fresh seeded in-memory database and an API client per test."""

import os

# Must be set before the referrals package reads its settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("JWT_SECRET", "test-secret")

from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from referrals.db.seed import init_db
from referrals.db.session import build_engine, get_db
from referrals.main import app


@dataclass
class Account:
    id: str
    token: str
    user: dict

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


def register(client: TestClient, email: str, user_type: str = "job_seeker", **fields) -> Account:
    payload = {
        "email": email,
        "password": "s3cret-pass",
        "first_name": fields.pop("first_name", "Test"),
        "last_name": fields.pop("last_name", "User"),
        "user_type": user_type,
        **fields,
    }
    resp = client.post("/api/auth/register", json=payload)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return Account(id=body["user"]["id"], token=body["token"], user=body["user"])


def login(client: TestClient, email: str, password: str = "password") -> Account:
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    return Account(id=body["user"]["id"], token=body["token"], user=body["user"])


# ---------------------------------------------------------------------------
# Database / client
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://")
    init_db(engine, seed=True)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@pytest.fixture()
def seeker(client) -> Account:
    return register(client, "seeker@example.com", "job_seeker", first_name="Sam", last_name="Seeker")


@pytest.fixture()
def referrer(client) -> Account:
    return register(client, "ref@example.com", "referrer", first_name="Rita", last_name="Referrer")


@pytest.fixture()
def outsider(client) -> Account:
    return register(client, "outsider@example.com", "job_seeker", first_name="Otto", last_name="Outsider")
