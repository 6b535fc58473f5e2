# tests/conftest.py

import os

# Must be set before the application settings are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_MAX_REQUESTS"] = "10000"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from tasktracker.db.session import sync_engine
from tasktracker.main import app, rate_limiter


@pytest.fixture()
def engine():
    """Shared in-memory engine with a fresh schema for every test."""
    SQLModel.metadata.create_all(sync_engine)
    yield sync_engine
    SQLModel.metadata.drop_all(sync_engine)


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine):
    rate_limiter.reset()
    with TestClient(app) as c:
        yield c


def register(client: TestClient, email: str = "a@x.com", password: str = "secret1", name=None) -> dict:
    body = {"email": email, "password": password}
    if name is not None:
        body["name"] = name
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    return response.json()["user"]


def auth_headers(user_id: int) -> dict:
    return {"x-user-id": str(user_id)}
