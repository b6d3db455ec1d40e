import pytest
from fastapi import status

from conftest import register


def test_register_user(client):
    """Test user registration"""
    response = register(client)
    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["username"] == "alice"
    assert user["email"] == "alice@x.com"
    assert user["preferredModel"] == "gpt-4"
    assert user["hasApiKey"] is False
    assert "password" not in user
    assert "apiKey" not in user


def test_register_sets_session_cookie(client):
    """The session cookie is opaque, httpOnly and lasts seven days"""
    response = register(client)
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("studynotes.sid=")
    assert "HttpOnly" in set_cookie
    assert "Max-Age=604800" in set_cookie
    assert "alice" not in set_cookie


def test_register_stores_hashed_password(client, context):
    """The stored password is a bcrypt hash, and the plaintext still validates"""
    register(client)
    stored = context.storage.get_user_by_email("alice@x.com")
    assert stored.password != "secret1"
    assert stored.password.startswith("$2")
    assert context.storage.validate_user("alice@x.com", "secret1").id == stored.id


def test_register_duplicate_email(client, context):
    """Test registration with duplicate email"""
    first = register(client)
    
    response = register(client, username="alice2", password="another1")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Email already registered"
    
    # First account is untouched
    stored = context.storage.get_user_by_email("alice@x.com")
    assert stored.id == first.json()["user"]["id"]
    assert stored.username == "alice"
    assert context.storage.validate_user("alice@x.com", "secret1") is not None
    assert context.storage.validate_user("alice@x.com", "another1") is None


def test_register_duplicate_username(client):
    """Test registration with duplicate username"""
    register(client)
    response = register(client, email="other@x.com")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Username already taken"


@pytest.mark.parametrize("payload", [
    {"username": "alice", "email": "not-an-email", "password": "secret1"},
    {"username": "alice", "email": "alice@x.com", "password": "123"},
    {"email": "alice@x.com", "password": "secret1"},
    {"username": "", "email": "alice@x.com", "password": "secret1"},
])
def test_register_invalid_payload(client, payload):
    """Shape violations return 400 with a field-level error list"""
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["message"] == "Invalid input data"
    assert len(body["errors"]) >= 1
    assert all("loc" in error and "msg" in error for error in body["errors"])


def test_register_password_too_long_for_bcrypt(client):
    """Length is checked in bytes: 40 two-byte characters exceed bcrypt's 72-byte input"""
    response = register(client, password="é" * 40)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["message"] == "Invalid input data"
    assert [error["loc"][-1] for error in body["errors"]] == ["password"]


def test_register_multibyte_password_within_limit(client):
    response = register(client, password="é" * 36)
    assert response.status_code == status.HTTP_200_OK
    
    login = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "é" * 36})
    assert login.status_code == status.HTTP_200_OK


def test_validation_errors_do_not_echo_input(client):
    """Submitted values (passwords included) never come back in error bodies"""
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "bad", "password": "topsecretvalue"}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "topsecretvalue" not in response.text


def test_login(client, make_client):
    """Test user login"""
    register(client)
    
    other = make_client()
    response = other.post(
        "/api/auth/login",
        json={"email": "alice@x.com", "password": "secret1"}
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["username"] == "alice"
    assert "password" not in response.json()["user"]
    
    me = other.get("/api/auth/me")
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["user"]["email"] == "alice@x.com"


def test_login_invalid_credentials(client):
    """Test login with invalid credentials"""
    register(client)
    response = client.post(
        "/api/auth/login",
        json={"email": "alice@x.com", "password": "wrongpassword"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Invalid credentials"


def test_login_unknown_email(client):
    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@x.com", "password": "secret1"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_invalid_shape(client):
    response = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "123"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Invalid input data"


def test_login_rotates_session(client, context):
    """Logging in again replaces the previous session"""
    register(client)
    old_session_id = client.cookies.get("studynotes.sid")
    
    response = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "secret1"})
    assert response.status_code == status.HTTP_200_OK
    assert client.cookies.get("studynotes.sid") != old_session_id
    assert context.sessions.get(old_session_id) is None
    assert len(context.sessions) == 1


def test_me_requires_authentication(client):
    response = client.get("/api/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Authentication required"


def test_me_with_unknown_session_cookie(client):
    client.cookies.set("studynotes.sid", "forged-session-id")
    response = client.get("/api/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_for_missing_user(client, context):
    """A session whose user no longer exists yields 404"""
    session = context.sessions.create("missing-user-id")
    client.cookies.set("studynotes.sid", session.session_id)
    response = client.get("/api/auth/me")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "User not found"


def test_logout(client):
    """Test logout ends the session"""
    register(client)
    response = client.post("/api/auth/logout")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Logged out successfully"
    
    assert client.get("/api/auth/me").status_code == status.HTTP_401_UNAUTHORIZED


def test_logout_without_session(client):
    """Logging out with no session still succeeds and clears the cookie"""
    response = client.post("/api/auth/logout")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Logged out successfully"
    assert "studynotes.sid=" in response.headers["set-cookie"]


def test_logout_with_stale_cookie(client, context):
    register(client)
    context.sessions.clear()
    response = client.post("/api/auth/logout")
    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/auth/me").status_code == status.HTTP_401_UNAUTHORIZED
