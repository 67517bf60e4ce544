"""
Tests for login, token authentication and role guards.
"""
from datetime import timedelta

import pytest

from chatapp.core.exceptions import InvalidCredentialsError, UnauthorizedError
from chatapp.core import security
from chatapp.core.security import create_access_token
from chatapp.models.user import UserRole
from chatapp.services import auth_service


def test_login(client, alice):
    """Test user login."""
    response = client.post(
        "/auth/login",
        json={"username": "alice", "password": "alice-password"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["token_type"] == "bearer"


def test_login_invalid_credentials(client, alice):
    """Wrong password and unknown user both get 401."""
    response = client.post(
        "/auth/login",
        json={"username": "alice", "password": "wrongpassword"}
    )
    assert response.status_code == 401

    response = client.post(
        "/auth/login",
        json={"username": "nonexistent", "password": "wrongpassword"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Incorrect username or password"}


def test_anonymous_cannot_log_in(client):
    """The anonymous account has no password."""
    for password in ("", "dummy", "anonymous"):
        response = client.post(
            "/auth/login",
            json={"username": "anonymous", "password": password}
        )
        assert response.status_code == 401


def test_login_then_authenticate_returns_stored_identity(db, alice):
    """The principal matches the stored username and role."""
    token = auth_service.login("alice", "alice-password", db)
    principal = auth_service.authenticate(token)
    assert principal.username == "alice"
    assert principal.role == UserRole.USER

    admin_token = auth_service.login("admin", "admin-password", db)
    assert auth_service.authenticate(admin_token).role == UserRole.ADMIN


def test_login_service_rejects_bad_password(db, alice):
    """Service level failure is InvalidCredentialsError."""
    with pytest.raises(InvalidCredentialsError):
        auth_service.login("alice", "nope", db)


@pytest.mark.parametrize("username", ["nonexistent", "anonymous"])
def test_failed_login_without_password_hash_still_runs_bcrypt(db, monkeypatch, username):
    """Unknown and password-less accounts go through one bcrypt check like real ones."""
    calls = []
    checkpw = security.bcrypt.checkpw

    def counting_checkpw(password, hashed):
        calls.append(hashed)
        return checkpw(password, hashed)

    monkeypatch.setattr(security.bcrypt, "checkpw", counting_checkpw)

    with pytest.raises(InvalidCredentialsError):
        auth_service.login(username, "whatever", db)
    assert len(calls) == 1


def test_authenticate_collapses_token_errors():
    """Expired, forged and garbage tokens all become UnauthorizedError with the same message."""
    expired = create_access_token("alice", UserRole.USER, expires_delta=timedelta(seconds=-5))
    messages = set()
    for token in (expired, "garbage", expired[:-4] + "abcd"):
        with pytest.raises(UnauthorizedError) as excinfo:
            auth_service.authenticate(token)
        messages.add(excinfo.value.message)
    assert len(messages) == 1


def test_missing_token_is_unauthorized(client):
    """No Authorization header means 401."""
    response = client.get("/messages")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_invalid_token_is_unauthorized(client):
    """A bad token means 401 on every protected endpoint."""
    headers = {"Authorization": "Bearer not-a-token"}
    assert client.get("/messages", headers=headers).status_code == 401
    assert client.post("/messages", json={"content": "hi"}, headers=headers).status_code == 401
    assert client.get("/admin/stats", headers=headers).status_code == 401


def test_non_bearer_scheme_is_unauthorized(client, alice_headers):
    """Only the Bearer scheme is accepted."""
    token = alice_headers["Authorization"].split(" ", 1)[1]
    response = client.get("/messages", headers={"Authorization": f"Basic {token}"})
    assert response.status_code == 401


def test_expired_token_is_unauthorized(client, alice):
    """Expired tokens are rejected."""
    token = create_access_token("alice", UserRole.USER, expires_delta=timedelta(seconds=-5))
    response = client.get("/messages", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_user_cannot_reach_admin_endpoints(client, alice_headers):
    """A valid USER token gets 403 on admin routes."""
    assert client.get("/admin/stats", headers=alice_headers).status_code == 403
    assert client.post("/admin/users", json={"username": "bob"}, headers=alice_headers).status_code == 403
    assert client.delete("/admin/users/admin", headers=alice_headers).status_code == 403


def test_admin_can_use_chat(client, admin_headers):
    """ADMIN satisfies the member guard."""
    response = client.post("/messages", json={"content": "hello from admin"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "admin"


def test_role_is_read_from_token(client, alice):
    """The role claim decides access, not the stored role."""
    token = create_access_token("alice", UserRole.ADMIN)
    response = client.get("/admin/stats", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_token_of_deleted_user_cannot_post(client, admin_headers, alice_headers):
    """Posting needs the user to still exist."""
    assert client.delete("/admin/users/alice", headers=admin_headers).status_code == 204
    response = client.post("/messages", json={"content": "ghost"}, headers=alice_headers)
    assert response.status_code == 401
