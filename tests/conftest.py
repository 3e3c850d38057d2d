import os
import sys

# Add the project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

os.environ.setdefault("SESSION_SECRET", "test-secret")
os.environ.setdefault("LOG_JSON", "false")

import httpx
import pytest
from starlette.requests import Request

from moulton.web.session import CookieSessionStorage


class FakeProvider:
    """Stands in for the email provider behind an httpx.MockTransport."""

    def __init__(self):
        self.status_code = 200
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code)


def make_request(cookie: str | None = None, query: str = "") -> Request:
    """Build a bare Starlette request carrying an optional Cookie header."""
    headers = []
    if cookie:
        headers.append((b"cookie", cookie.encode("latin-1")))
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/",
            "query_string": query.encode(),
            "headers": headers,
        }
    )


def cookie_from(headers: dict[str, str]) -> str:
    """Turn a Set-Cookie header into the Cookie header a browser would send back."""
    return headers["Set-Cookie"].split(";", 1)[0]


@pytest.fixture
def storage():
    return CookieSessionStorage(secret_key="test-secret", cookie_name="__session")


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def client(provider):
    """Test client over https so the Secure session cookie round-trips."""
    from fastapi.testclient import TestClient

    from moulton.deps import get_http_client
    from moulton.main import app

    async def _override_get_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(provider)) as c:
            yield c

    app.dependency_overrides[get_http_client] = _override_get_http_client

    with TestClient(app, base_url="https://testserver") as client:
        yield client

    # Clear overrides after test
    app.dependency_overrides.clear()
