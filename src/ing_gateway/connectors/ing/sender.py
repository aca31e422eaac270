"""Sends payment requests to the ING API."""

import functools
import json
from typing import Any

import httpx

from ing_gateway.infrastructure.audit import JSON_CONTENT_TYPE, PaymentAuditLogger
from ing_gateway.infrastructure.http import ClientFactory, create_mtls_client
from ing_gateway.models import PaymentPayload

MASKED_BEARER = "Bearer ************"


class PaymentSender:
    """Posts a built payload to the payment-requests endpoint."""

    PAYMENTS_PATH = "/payment-requests"

    def __init__(
        self,
        audit_logger: PaymentAuditLogger,
        client_factory: ClientFactory | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.audit_logger = audit_logger
        self.client_factory = client_factory or functools.partial(
            create_mtls_client, timeout_seconds=timeout_seconds
        )

    def send_payment_request(
        self,
        payload: PaymentPayload,
        host: str,
        access_token: str,
        cert_path: str,
        key_path: str,
        transaction_id: str,
    ) -> Any:
        """
        Send a payment request to the ING API.

        The response body is decoded but its shape is not checked; that is
        the response processor's job.

        Args:
            payload: Payment request body
            host: ING API base URL
            access_token: Bearer token from the token endpoint
            cert_path: Path to the client certificate
            key_path: Path to the client private key
            transaction_id: Internal correlation id for logs

        Returns:
            Decoded JSON response body

        Raises:
            httpx.HTTPStatusError: Non-2xx response (client, server or redirect)
            httpx.RequestError: Connection, TLS or timeout failure
            ValueError: Response body is not valid JSON
        """
        payment_url = f"{host}{self.PAYMENTS_PATH}"
        json_body = json.dumps(payload.to_dict())

        # Never hand the real token to the audit trail
        self.audit_logger.log_to_file(
            transaction_id,
            "PAYMENT_REQUEST",
            payment_url,
            json_body,
            JSON_CONTENT_TYPE,
            {
                "headers": {
                    "Content-Type": JSON_CONTENT_TYPE,
                    "Authorization": MASKED_BEARER,
                }
            },
        )

        with self.client_factory(cert_path, key_path) as client:
            response = client.post(
                payment_url,
                headers={
                    "Content-Type": JSON_CONTENT_TYPE,
                    "Authorization": f"Bearer {access_token}",
                },
                content=json_body,
            )

        self.audit_logger.log_to_file(
            transaction_id,
            "PAYMENT_RESPONSE",
            payment_url,
            response.text,
            JSON_CONTENT_TYPE,
            {"status_code": response.status_code},
        )

        response.raise_for_status()
        return response.json()
