"""Processes payment responses from the ING API."""

from typing import Any

from ing_gateway.infrastructure.audit import PaymentAuditLogger
from ing_gateway.models import ErrorKind, GatewayError, PaymentResponse


class PaymentResponseProcessor:
    """Validates the raw payment response and normalizes it."""

    def __init__(self, audit_logger: PaymentAuditLogger) -> None:
        self.audit_logger = audit_logger

    def process_payment_response(self, raw: Any, transaction_id: str) -> PaymentResponse:
        """
        Turn a decoded ING response into a PaymentResponse.

        Args:
            raw: Decoded response body
            transaction_id: Internal correlation id for logs

        Raises:
            GatewayError: RESPONSE_SHAPE kind if ``id`` or
                          ``paymentInitiationUrl`` is missing or empty
        """
        if (
            not isinstance(raw, dict)
            or not raw.get("id")
            or not raw.get("paymentInitiationUrl")
        ):
            self.audit_logger.log_payment_error(
                transaction_id,
                "Invalid payment response structure",
                raw if isinstance(raw, dict) else {"body": raw},
            )
            raise GatewayError(
                "Invalid payment response from ING", kind=ErrorKind.RESPONSE_SHAPE
            )

        self.audit_logger.log_payment_success(
            transaction_id, raw["id"], raw["paymentInitiationUrl"]
        )

        return PaymentResponse.from_provider(raw)
