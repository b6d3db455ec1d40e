import asyncio

import httpx
import pytest
from httpx import ASGITransport

from studynotes.config import Settings
from studynotes.main import create_app
from studynotes.storage import MemoryStorage


class CompatibleTestClient:
    """
    Test client over httpx's ASGITransport that keeps cookies between calls

    Each call runs in its own event loop, so the jar is carried over
    explicitly from one AsyncClient to the next.
    """
    def __init__(self, app):
        self.app = app
        # Let the app's own 500 handler produce the response instead of re-raising
        self.transport = ASGITransport(app=app, raise_app_exceptions=False)
        self.base_url = "http://testserver"
        self.cookies = httpx.Cookies()
    
    def request(self, method, url, **kwargs):
        async def _request():
            async with httpx.AsyncClient(
                transport=self.transport, base_url=self.base_url, cookies=self.cookies
            ) as client:
                response = await client.request(method, url, **kwargs)
                self.cookies = httpx.Cookies(client.cookies)
                return response
        return asyncio.run(_request())
    
    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)
    
    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)
    
    def put(self, url, **kwargs):
        return self.request("PUT", url, **kwargs)
    
    def delete(self, url, **kwargs):
        return self.request("DELETE", url, **kwargs)


TestClient = CompatibleTestClient


@pytest.fixture
def settings():
    """Settings isolated from the environment: in-memory SQLite, fast bcrypt"""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        secret_key="test-secret-key",
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(settings):
    """A fresh application (and application context) per test"""
    application = create_app(settings)
    yield application
    application.state.context.shutdown()


@pytest.fixture
def context(app):
    return app.state.context


@pytest.fixture
def client(app):
    """Create a test client"""
    return TestClient(app)


@pytest.fixture
def make_client(app):
    """Factory for extra clients, one per simulated browser"""
    def _make():
        return TestClient(app)
    return _make


@pytest.fixture
def memory_storage():
    return MemoryStorage(bcrypt_rounds=4)


def register(client, username="alice", email="alice@x.com", password="secret1"):
    """Register a user through the API and return the response"""
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password}
    )
