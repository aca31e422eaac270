"""
End-to-end payment flow through the service, launcher and ING connector.

Only the network is faked (httpx.MockTransport); settings, the connector
factory, the audit logger and its trace files are real.
"""

import json
from decimal import Decimal

import httpx
import pytest
from structlog.testing import capture_logs

from ing_gateway import GatewayLauncher, PaymentService
from ing_gateway.models import ErrorKind, GatewayError, PaymentProcessingError, PaymentRequest

pytestmark = pytest.mark.integration


@pytest.fixture
def launcher(test_settings, fake_ing_api):
    return GatewayLauncher(test_settings, client_factory=fake_ing_api.client_factory)


@pytest.fixture
def service(launcher):
    return PaymentService(launcher)


def audit_files(log_dir):
    return sorted((log_dir / "ing").glob("payment_ing_*.log"))


class TestPaymentFlow:
    """Tests for complete payment transactions."""

    def test_successful_payment(self, service, payment_request, fake_ing_api, log_dir):
        """Test a payment from request to completed record with audit traces."""
        with capture_logs() as logs:
            payment = service.process_payment(payment_request)

        assert payment.status == "completed"
        assert payment.transaction_id == "payment-id-123"
        assert payment.payment_url == "https://pay.ing.test/initiate/123"
        assert not [log for log in logs if log["log_level"] in {"error", "critical"}]

        token_request, payment_call = fake_ing_api.requests
        assert token_request.url == httpx.URL("https://api.ing.test/oauth2/token")
        body = json.loads(payment_call.content)
        assert body["fixedAmount"] == {"value": 100, "currency": "EUR"}
        assert body["returnUrl"] == "https://example.com/return"
        assert fake_ing_api.client_certs == [
            ("/path/to/cert.pem", "/path/to/key.pem"),
            ("/path/to/cert.pem", "/path/to/key.pem"),
        ]

        (trace_file,) = audit_files(log_dir)
        trace = trace_file.read_text(encoding="utf-8")
        actions = ["TOKEN_REQUEST", "TOKEN_RESPONSE", "PAYMENT_REQUEST", "PAYMENT_RESPONSE"]
        positions = [trace.index(f"[{action}]") for action in actions]
        assert positions == sorted(positions)
        assert "test-access-token" not in trace
        assert "test-client-id" not in trace

    def test_transient_failure_retried(self, launcher, payment_request, fake_ing_api):
        """Test that one failed payment call is retried with a fresh token."""
        fake_ing_api.payment_responses = [
            httpx.Response(503, json={"message": "try again"}),
            httpx.Response(
                201,
                json={"id": "payment-id-789", "paymentInitiationUrl": "https://pay.ing.test/789"},
            ),
        ]

        response = launcher.process_transaction(payment_request)

        assert response.transaction_id == "payment-id-789"
        assert len(fake_ing_api.requests_to("/oauth2/token")) == 2
        purchase_ids = {
            json.loads(r.content)["purchaseId"]
            for r in fake_ing_api.requests_to("/payment-requests")
        }
        assert len(purchase_ids) == 2

    def test_token_rejected_twice(self, launcher, payment_request, fake_ing_api):
        """Test that a persistent token failure surfaces after the retry."""
        fake_ing_api.token_responses = [httpx.Response(200, json={"error": "invalid_client"})]

        with pytest.raises(GatewayError) as exc_info:
            launcher.process_transaction(payment_request)

        assert exc_info.value.message == (
            "Bank transaction failed: Token request failed: Invalid token response"
        )
        assert exc_info.value.kind == ErrorKind.AUTHENTICATION
        assert len(fake_ing_api.requests_to("/oauth2/token")) == 2
        assert fake_ing_api.requests_to("/payment-requests") == []

    def test_invalid_request_fails_through_service(self, service, fake_ing_api):
        """Test that a validation error reaches the caller with every stage prefix."""
        request = PaymentRequest(
            currency="EUR",
            amount=Decimal("10.00"),
            payment_method="ING_OPEN_BANKING",
            return_url="http://insecure.example.com",
        )

        with pytest.raises(PaymentProcessingError) as exc_info:
            service.process_payment(request)

        assert str(exc_info.value) == (
            "Payment processing failed: Bank transaction failed: "
            "Payment failed: Return URL must use HTTPS protocol"
        )
        assert exc_info.value.__cause__.kind == ErrorKind.VALIDATION
        assert fake_ing_api.requests_to("/payment-requests") == []

    def test_unsupported_method_makes_no_calls(self, service, fake_ing_api):
        """Test that an unknown payment method never reaches the network."""
        request = PaymentRequest(
            currency="EUR",
            amount=10,
            payment_method="IDEAL",
            return_url="https://example.com/return",
        )

        with pytest.raises(PaymentProcessingError, match="Unsupported payment method"):
            service.process_payment(request)

        assert fake_ing_api.requests == []

    def test_audit_disabled(self, test_settings, payment_request, fake_ing_api, log_dir):
        """Test that disabling the audit log suppresses trace files only."""
        settings = test_settings.model_copy(
            update={"audit_log": test_settings.audit_log.model_copy(update={"enabled": False})}
        )
        launcher = GatewayLauncher(settings, client_factory=fake_ing_api.client_factory)

        response = launcher.process_transaction(payment_request)

        assert response.transaction_id == "payment-id-123"
        assert not log_dir.exists()
