"""Unit tests for OAuth2 token acquisition."""

from urllib.parse import parse_qs

import httpx
import pytest
from structlog.testing import capture_logs

from ing_gateway.connectors.ing.token import TokenAcquirer
from ing_gateway.models import AccessToken, ErrorKind, GatewayError

TRX = "TRX_token_test"


def acquire(acquirer: TokenAcquirer) -> AccessToken:
    return acquirer.get_access_token(
        "https://api.ing.test",
        "test-client-id",
        "/path/to/cert.pem",
        "/path/to/key.pem",
        TRX,
    )


@pytest.fixture
def acquirer(audit_logger, fake_ing_api):
    return TokenAcquirer(audit_logger, client_factory=fake_ing_api.client_factory)


class TestGetAccessToken:
    """Tests for successful token requests."""

    def test_returns_token(self, acquirer):
        """Test that a well-formed response yields an AccessToken."""
        token = acquire(acquirer)

        assert token == AccessToken(value="test-access-token", token_type="Bearer", expires_in=3600)

    def test_request_shape(self, acquirer, fake_ing_api):
        """Test the client-credentials form post."""
        acquire(acquirer)

        (request,) = fake_ing_api.requests
        assert request.method == "POST"
        assert str(request.url) == "https://api.ing.test/oauth2/token"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.headers["Accept"] == "application/json"
        assert parse_qs(request.content.decode()) == {
            "grant_type": ["client_credentials"],
            "client_id": ["test-client-id"],
        }

    def test_client_built_with_certificate_pair(self, acquirer, fake_ing_api):
        """Test that the mutual-TLS pair is handed to the client factory."""
        acquire(acquirer)

        assert fake_ing_api.client_certs == [("/path/to/cert.pem", "/path/to/key.pem")]

    def test_optional_fields_may_be_absent(self, acquirer, fake_ing_api):
        """Test a response carrying only the token."""
        fake_ing_api.token_responses = [httpx.Response(200, json={"access_token": "abc"})]

        token = acquire(acquirer)

        assert token == AccessToken(value="abc")

    def test_traces_written_without_raw_token(self, acquirer, audit_logger):
        """Test that request and response traces are written, masked."""
        acquire(acquirer)

        trace = audit_logger.log_file_path().read_text(encoding="utf-8")
        assert "[TOKEN_REQUEST] [TRX: TRX_token_test]" in trace
        assert "[TOKEN_RESPONSE] [TRX: TRX_token_test]" in trace
        assert "test-access-token" not in trace
        assert "test-access-token"[:6] + "******" in trace

    def test_success_event(self, acquirer):
        """Test that success is reported at debug level without the token."""
        with capture_logs() as logs:
            acquire(acquirer)

        assert logs == [
            {
                "event": "token_obtained",
                "log_level": "debug",
                "provider": "ing",
                "transaction_id": TRX,
                "token_expires": 3600,
                "token_type": "Bearer",
            }
        ]


class TestGetAccessTokenFailures:
    """Tests for token request failures."""

    def test_missing_access_token(self, acquirer, fake_ing_api):
        """Test that an error body without a token is an authentication failure."""
        fake_ing_api.token_responses = [httpx.Response(200, json={"error": "invalid_client"})]

        with capture_logs() as logs:
            with pytest.raises(GatewayError) as exc_info:
                acquire(acquirer)

        assert exc_info.value.message == "Token request failed: Invalid token response"
        assert exc_info.value.kind == ErrorKind.AUTHENTICATION
        token_errors = [log for log in logs if log["event"] == "token_error"]
        assert len(token_errors) == 1
        assert token_errors[0]["message"] == "Missing access token in response"
        assert token_errors[0]["context"] == {"error": "invalid_client"}

    def test_empty_access_token(self, acquirer, fake_ing_api):
        """Test that an empty token is treated like a missing one."""
        fake_ing_api.token_responses = [httpx.Response(200, json={"access_token": ""})]

        with pytest.raises(GatewayError, match="^Token request failed: "):
            acquire(acquirer)

    def test_http_error_status(self, acquirer, fake_ing_api):
        """Test that a 401 surfaces as a transport failure."""
        fake_ing_api.token_responses = [httpx.Response(401, json={"error": "invalid_client"})]

        with capture_logs() as logs:
            with pytest.raises(GatewayError, match="^Token request failed: Client error '401") as exc_info:
                acquire(acquirer)

        assert exc_info.value.kind == ErrorKind.TRANSPORT
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)
        assert [log["event"] for log in logs] == ["token_error"]

    def test_connection_error(self, audit_logger):
        """Test that a network failure surfaces as a transport failure."""

        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        acquirer = TokenAcquirer(
            audit_logger,
            client_factory=lambda cert, key: httpx.Client(transport=httpx.MockTransport(handler)),
        )

        with pytest.raises(GatewayError, match="Token request failed: Connection refused") as exc_info:
            acquire(acquirer)

        assert exc_info.value.kind == ErrorKind.TRANSPORT

    def test_invalid_json(self, acquirer, fake_ing_api):
        """Test that a non-JSON body is an authentication failure."""
        fake_ing_api.token_responses = [httpx.Response(200, text="<html>oops</html>")]

        with pytest.raises(GatewayError, match="^Token request failed: ") as exc_info:
            acquire(acquirer)

        assert exc_info.value.kind == ErrorKind.AUTHENTICATION

    def test_unreadable_certificate(self, audit_logger):
        """Test that a client factory failure is reported, not leaked."""

        def factory(cert_path, key_path):
            raise FileNotFoundError(f"No such file: {cert_path}")

        acquirer = TokenAcquirer(audit_logger, client_factory=factory)

        with pytest.raises(GatewayError, match="Token request failed: No such file: /path/to/cert.pem"):
            acquire(acquirer)

    def test_error_trace_written(self, acquirer, fake_ing_api, audit_logger):
        """Test that failures leave a TOKEN_ERROR trace."""
        fake_ing_api.token_responses = [httpx.Response(500, json={})]

        with pytest.raises(GatewayError):
            acquire(acquirer)

        trace = audit_logger.log_file_path().read_text(encoding="utf-8")
        assert "[TOKEN_ERROR] [TRX: TRX_token_test]" in trace
        assert "Traceback" in trace
