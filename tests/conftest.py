"""Shared fixtures: environment-driven settings and a mocked PhonePe gateway."""
import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.gateway_client import get_http_client
from app.main import app
from app.utils.rate_limiter import reset_rate_limits

FRONTEND = "https://shop.example.com"

SANDBOX_AUTH_URL = "https://api-preprod.phonepe.com/apis/pg-sandbox/v1/oauth/token"
SANDBOX_TOKEN_PAY_URL = "https://api-preprod.phonepe.com/apis/pg-sandbox/checkout/v2/pay"
SANDBOX_CHECKSUM_PAY_URL = "https://api-preprod.phonepe.com/apis/pg-sandbox/pg/v1/pay"

CONFIG_VARS = [
    "PHONEPE_AUTH_MODE", "PHONEPE_ENV",
    "PHONEPE_CLIENT_ID", "PHONEPE_CLIENT_VERSION", "PHONEPE_CLIENT_SECRET",
    "PHONEPE_MERCHANT_ID", "PHONEPE_SALT_KEY", "PHONEPE_SALT_INDEX",
    "ORDER_ID_PREFIX", "RATE_LIMIT_REQUESTS", "RATE_LIMIT_WINDOW",
    "FRONTEND_ORIGIN", "FRONTEND_REDIRECT_PATH", "LOG_DIR",
]


class FakeGateway:
    """Answers by exact URL and records every outbound request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, url, status=200, json=None, text=None, error=None):
        self.routes[url] = (status, json, text, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) not in self.routes:
            return httpx.Response(404, json={"message": "not mocked"})
        status, json_body, text, error = self.routes[str(request.url)]
        if error is not None:
            raise error(f"cannot reach {request.url}", request=request)
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=json_body)

    def calls_to(self, url):
        return [r for r in self.requests if str(r.url) == url]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


def reload_settings():
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture(autouse=True)
def env(monkeypatch, tmp_path):
    for var in CONFIG_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("FRONTEND_ORIGIN", FRONTEND)
    reload_settings()
    reset_rate_limits()
    yield monkeypatch
    app.dependency_overrides.clear()
    reset_rate_limits()
    get_settings.cache_clear()


@pytest.fixture
def token_env(env):
    env.setenv("PHONEPE_AUTH_MODE", "TOKEN")
    env.setenv("PHONEPE_CLIENT_ID", "client-abc")
    env.setenv("PHONEPE_CLIENT_VERSION", "1")
    env.setenv("PHONEPE_CLIENT_SECRET", "s3cret")
    reload_settings()
    return env


@pytest.fixture
def checksum_env(env):
    env.setenv("PHONEPE_AUTH_MODE", "CHECKSUM")
    env.setenv("PHONEPE_MERCHANT_ID", "PGTESTPAYUAT")
    env.setenv("PHONEPE_SALT_KEY", "salt-key-123")
    env.setenv("PHONEPE_SALT_INDEX", "1")
    reload_settings()
    return env


@pytest.fixture
def gateway():
    fake = FakeGateway()

    async def override_client():
        async with fake.client() as client:
            yield client

    app.dependency_overrides[get_http_client] = override_client
    return fake


@pytest.fixture
def client():
    return TestClient(app)
