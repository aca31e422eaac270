"""
Banking gateway launcher.

Entry point used by the service layer: picks the connector for a payment
request and runs the transaction with one automatic retry.
"""

import structlog

from ing_gateway.config import Settings
from ing_gateway.connectors.base import PaymentConnector
from ing_gateway.connectors.factory import ConnectorFactory
from ing_gateway.infrastructure.audit import PaymentAuditLogger
from ing_gateway.infrastructure.http import ClientFactory
from ing_gateway.models import ErrorKind, GatewayError, PaymentRequest, PaymentResponse

logger = structlog.get_logger(__name__)

MAX_ATTEMPTS = 2
BANK_TRANSACTION_FAILED_PREFIX = "Bank transaction failed: "


class GatewayLauncher:
    """
    Processes payment transactions through the configured banking gateways.

    Retry policy: a failed ``make_payment`` is retried once, immediately, on
    the same connector. Attempts are counted per ``process_transaction``
    call. The connector re-authenticates on the retry, so a stale token is
    never reused. Validation errors fail identically on both attempts.
    """

    def __init__(
        self,
        settings: Settings,
        audit_logger: PaymentAuditLogger | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """
        Initialize the launcher.

        Args:
            settings: Application settings, loaded once at startup
            audit_logger: Optional audit logger shared by every connector
            client_factory: Optional httpx client factory for connectors
        """
        self.settings = settings
        self.audit_logger = audit_logger
        self.client_factory = client_factory

    def process_transaction(self, payment_request: PaymentRequest) -> PaymentResponse:
        """
        Process a payment with the connector matching its payment method.

        Args:
            payment_request: Payment details including the payment method

        Returns:
            PaymentResponse from the first successful attempt

        Raises:
            GatewayError: "Bank transaction failed: ..." when the connector
                          cannot be built or both attempts fail
        """
        attempts = 0

        try:
            connector = self.build_connector(payment_request)

            while True:
                attempts += 1
                try:
                    return connector.make_payment()
                except Exception as e:
                    if attempts >= MAX_ATTEMPTS:
                        raise
                    logger.warning(
                        "payment_attempt_failed_retrying",
                        transaction_id=getattr(connector, "transaction_id", None),
                        attempt=attempts,
                        error=str(e),
                    )

        except Exception as e:
            message = e.message if isinstance(e, GatewayError) else str(e)
            kind = e.kind if isinstance(e, GatewayError) else ErrorKind.TRANSPORT
            logger.error(
                "bank_transaction_failed",
                payment_method=getattr(
                    payment_request.payment_method, "value", payment_request.payment_method
                ),
                attempts=attempts,
                error_kind=kind.value,
                error=message,
            )
            raise GatewayError(f"{BANK_TRANSACTION_FAILED_PREFIX}{message}", kind=kind) from e

    def build_connector(self, payment_request: PaymentRequest) -> PaymentConnector:
        """Create the connector for the request's payment method."""
        dependencies = {}
        if self.audit_logger is not None:
            dependencies["audit_logger"] = self.audit_logger
        if self.client_factory is not None:
            dependencies["client_factory"] = self.client_factory

        return ConnectorFactory.create_connector(payment_request, self.settings, **dependencies)
