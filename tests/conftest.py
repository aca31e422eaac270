"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- Application settings pointing at a fake ING host
- A fake ING API served through httpx.MockTransport
- An audit logger writing under pytest's tmp_path
"""

from decimal import Decimal
from pathlib import Path

import httpx
import pytest

from ing_gateway.config import AuditLogSettings, IngSettings, Settings
from ing_gateway.connectors.ing import IngConnectorConfig
from ing_gateway.infrastructure.audit import PaymentAuditLogger
from ing_gateway.models import PaymentMethod, PaymentRequest

TEST_HOST = "https://api.ing.test"
TEST_CERT_PATH = "/path/to/cert.pem"
TEST_KEY_PATH = "/path/to/key.pem"


class FakeIngApi:
    """
    Stand-in for the ING token and payment-request endpoints.

    Each endpoint serves its queued responses in order and keeps repeating
    the last one. Every request and every (cert, key) pair used to build a
    client is recorded.
    """

    def __init__(self) -> None:
        self.token_responses: list[httpx.Response] = [
            httpx.Response(
                200,
                json={
                    "access_token": "test-access-token",
                    "token_type": "Bearer",
                    "expires_in": 3600,
                },
            )
        ]
        self.payment_responses: list[httpx.Response] = [
            httpx.Response(
                201,
                json={
                    "id": "payment-id-123",
                    "paymentInitiationUrl": "https://pay.ing.test/initiate/123",
                },
            )
        ]
        self.requests: list[httpx.Request] = []
        self.client_certs: list[tuple[str, str]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/oauth2/token":
            return self._next(self.token_responses)
        if request.url.path == "/payment-requests":
            return self._next(self.payment_responses)
        return httpx.Response(404, json={"error": "not_found"})

    def client_factory(self, cert_path: str, key_path: str) -> httpx.Client:
        self.client_certs.append((cert_path, key_path))
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    @staticmethod
    def _next(queue: list[httpx.Response]) -> httpx.Response:
        return queue.pop(0) if len(queue) > 1 else queue[0]


@pytest.fixture
def fake_ing_api() -> FakeIngApi:
    """Fake ING API answering with a valid token and a valid payment."""
    return FakeIngApi()


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Root directory for audit trace files."""
    return tmp_path / "logs"


@pytest.fixture
def audit_logger(log_dir: Path) -> PaymentAuditLogger:
    """Audit logger writing ING traces under tmp_path."""
    return PaymentAuditLogger(log_dir=log_dir, provider="ing")


@pytest.fixture
def test_settings(log_dir: Path) -> Settings:
    """Settings pointing at the fake ING host."""
    return Settings(
        ing=IngSettings(
            host=TEST_HOST,
            client_id="test-client-id",
            merchant_id="test-merchant-id",
            cert_path=TEST_CERT_PATH,
            key_path=TEST_KEY_PATH,
            timeout_seconds=5.0,
        ),
        audit_log=AuditLogSettings(directory=str(log_dir), enabled=True),
    )


@pytest.fixture
def connector_config() -> IngConnectorConfig:
    """Valid ING connector configuration."""
    return IngConnectorConfig(
        host=TEST_HOST,
        client_id="test-client-id",
        merchant_id="test-merchant-id",
        cert_path=TEST_CERT_PATH,
        key_path=TEST_KEY_PATH,
        amount=Decimal("100.00"),
        currency="EUR",
        return_url="https://example.com/return",
        description="Test payment description",
    )


@pytest.fixture
def payment_request() -> PaymentRequest:
    """Valid ING Open Banking payment request."""
    return PaymentRequest(
        currency="EUR",
        amount=Decimal("100.00"),
        payment_method=PaymentMethod.ING_OPEN_BANKING.value,
        return_url="https://example.com/return",
        description="Test payment description",
    )
