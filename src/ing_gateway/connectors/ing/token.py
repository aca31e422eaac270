"""OAuth2 client-credentials token acquisition over mutual TLS."""

import functools
import traceback
from urllib.parse import urlencode

import httpx

from ing_gateway.infrastructure.audit import (
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    PaymentAuditLogger,
)
from ing_gateway.infrastructure.http import ClientFactory, create_mtls_client
from ing_gateway.models import AccessToken, ErrorKind, GatewayError


class TokenAcquirer:
    """
    Obtains an access token from the ING OAuth2 endpoint.

    No client secret is sent: the caller is identified by its TLS client
    certificate together with the ``client_id``. Failures are not retried
    here; the launcher retries whole transactions.
    """

    TOKEN_PATH = "/oauth2/token"

    def __init__(
        self,
        audit_logger: PaymentAuditLogger,
        client_factory: ClientFactory | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        """
        Initialize the token acquirer.

        Args:
            audit_logger: Audit logger for traces and token events
            client_factory: Builds an httpx client for a (cert_path, key_path) pair
            timeout_seconds: Request timeout used by the default client factory
        """
        self.audit_logger = audit_logger
        self.client_factory = client_factory or functools.partial(
            create_mtls_client, timeout_seconds=timeout_seconds
        )

    def get_access_token(
        self,
        host: str,
        client_id: str,
        cert_path: str,
        key_path: str,
        transaction_id: str,
    ) -> AccessToken:
        """
        Request a client-credentials token.

        Args:
            host: ING API base URL
            client_id: OAuth2 client id
            cert_path: Path to the client certificate
            key_path: Path to the client private key
            transaction_id: Internal correlation id for logs

        Returns:
            AccessToken with its optional type and lifetime

        Raises:
            GatewayError: "Token request failed: ..." for any failure.
                          TRANSPORT kind for HTTP errors, AUTHENTICATION otherwise.
        """
        token_url = f"{host}{self.TOKEN_PATH}"

        try:
            request_body = urlencode(
                {"grant_type": "client_credentials", "client_id": client_id}
            )

            self.audit_logger.log_to_file(
                transaction_id,
                "TOKEN_REQUEST",
                token_url,
                request_body,
                FORM_CONTENT_TYPE,
                {"cert_path": cert_path, "key_path": key_path},
            )

            with self.client_factory(cert_path, key_path) as client:
                response = client.post(
                    token_url,
                    headers={
                        "Accept": JSON_CONTENT_TYPE,
                        "Content-Type": FORM_CONTENT_TYPE,
                    },
                    content=request_body,
                )

            self.audit_logger.log_to_file(
                transaction_id,
                "TOKEN_RESPONSE",
                token_url,
                response.text,
                JSON_CONTENT_TYPE,
                {"status_code": response.status_code},
            )

            response.raise_for_status()
            data = response.json()

            if not isinstance(data, dict) or not data.get("access_token"):
                self.audit_logger.log_token_error(
                    transaction_id, "Missing access token in response", data
                )
                raise GatewayError("Invalid token response", kind=ErrorKind.AUTHENTICATION)

            token = AccessToken(
                value=str(data["access_token"]),
                token_type=data.get("token_type"),
                expires_in=data.get("expires_in"),
            )
            self.audit_logger.log_token_success(
                transaction_id, token.expires_in, token.token_type
            )
            return token

        except Exception as e:
            self.audit_logger.log_to_file(
                transaction_id,
                "TOKEN_ERROR",
                token_url,
                "",
                "text/plain",
                {"error": str(e), "trace": traceback.format_exc()},
            )

            if isinstance(e, GatewayError):
                # Already reported when the token was found missing
                kind = e.kind
            else:
                self.audit_logger.log_token_error(transaction_id, str(e))
                kind = (
                    ErrorKind.TRANSPORT
                    if isinstance(e, httpx.HTTPError)
                    else ErrorKind.AUTHENTICATION
                )

            raise GatewayError(f"Token request failed: {e}", kind=kind) from e
