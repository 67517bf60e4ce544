"""
Shared fixtures. Environment is set before the application is imported.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin-password"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from chatapp.db.base import Base
from chatapp.db.init_db import bootstrap
from chatapp.db.session import SessionLocal, engine, init_db
from chatapp.main import app
from chatapp.services import user_service

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-password"


@pytest.fixture()
def db():
    """Fresh in-memory database with the bootstrap accounts."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    session = SessionLocal()
    bootstrap(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db):
    """A test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


def login(client, username, password):
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture()
def admin_headers(client):
    """Authorization headers for the bootstrap admin."""
    return {"Authorization": f"Bearer {login(client, ADMIN_USERNAME, ADMIN_PASSWORD)}"}


@pytest.fixture()
def alice(db):
    """A regular user named alice with password 'alice-password'."""
    user, _ = user_service.register_user("alice", db, password="alice-password")
    return user


@pytest.fixture()
def alice_headers(client, alice):
    """Authorization headers for alice."""
    return {"Authorization": f"Bearer {login(client, 'alice', 'alice-password')}"}


@pytest.fixture()
def login_as(client):
    """Log in through the API and return the bearer token."""
    def _login(username, password):
        return login(client, username, password)
    return _login
