# tests/conftest.py

import os

# Configure the app for tests before anything reads settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["TOKEN_EXPIRES_IN"] = "1h"
os.environ["BCRYPT_ROUNDS"] = "10"
os.environ["RATE_LIMIT_MAX"] = "100000"
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from app.db import SessionLocal, engine
from app.models import Base
from main import app


@pytest.fixture(autouse=True)
def fresh_database():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(client) -> dict:
    """Register and log in a user, returning a ready Authorization header."""
    client.post("/api/auth/register", json={"username": "alice", "password": "s3cret!"})
    response = client.post("/api/auth/login", json={"username": "alice", "password": "s3cret!"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def member(client, auth_headers) -> dict:
    response = client.post(
        "/api/members",
        json={"name": "Bob Builder", "email": "bob@example.com", "role": "lead"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()
