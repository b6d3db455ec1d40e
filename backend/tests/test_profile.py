import pytest
from fastapi import status

from conftest import register


@pytest.fixture
def alice(client):
    """Registered and logged-in user"""
    return register(client).json()["user"]


def test_update_preferred_model(client, alice):
    response = client.put("/api/profile", json={"preferredModel": "claude-3-opus"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["preferredModel"] == "claude-3-opus"
    
    me = client.get("/api/auth/me").json()["user"]
    assert me["preferredModel"] == "claude-3-opus"


def test_update_accepts_snake_case(client, alice):
    response = client.put("/api/profile", json={"preferred_model": "gpt-4-turbo"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["preferredModel"] == "gpt-4-turbo"


def test_api_key_is_encrypted_at_rest(client, context, alice):
    """The API key is stored encrypted and never returned"""
    response = client.put("/api/profile", json={"apiKey": "sk-test-123"})
    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["hasApiKey"] is True
    assert "sk-test-123" not in response.text
    
    stored = context.storage.get_user(alice["id"])
    assert stored.api_key is not None
    assert stored.api_key != "sk-test-123"
    
    assert context.api_key_cipher.decrypt(stored.api_key) == "sk-test-123"


def test_empty_api_key_clears_it(client, context, alice):
    client.put("/api/profile", json={"apiKey": "sk-test-123"})
    response = client.put("/api/profile", json={"apiKey": ""})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["hasApiKey"] is False
    assert context.storage.get_user(alice["id"]).api_key is None


def test_empty_update_returns_current_user(client, alice):
    response = client.put("/api/profile", json={})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["id"] == alice["id"]


def test_update_profile_invalid(client, alice):
    response = client.put("/api/profile", json={"preferredModel": ""})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"]


def test_update_profile_requires_authentication(client):
    response = client.put("/api/profile", json={"preferredModel": "gpt-4"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
