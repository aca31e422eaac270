"""Payment service layer on top of the gateway launcher."""

from dataclasses import asdict, dataclass
from typing import Any

import structlog

from ing_gateway.launcher import GatewayLauncher
from ing_gateway.models import PaymentProcessingError, PaymentRequest
from ing_gateway.models.payment import Amount

logger = structlog.get_logger(__name__)

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"


@dataclass
class Payment:
    """
    Payment record produced by the service.

    Not persisted; callers that need storage save it themselves.
    """

    currency: str
    amount: Amount
    payment_method: str
    status: str = STATUS_PROCESSING
    description: str | None = None
    transaction_id: str | None = None
    payment_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["amount"] = str(self.amount)
        return data


class PaymentService:
    """Service class that runs payments and tracks their status."""

    def __init__(self, launcher: GatewayLauncher):
        """Initialize the service with a gateway launcher.

        Args:
            launcher: GatewayLauncher used to reach the banks.
        """
        self.launcher = launcher

    def process_payment(self, payment_request: PaymentRequest) -> Payment:
        """Process a payment through the appropriate banking gateway.

        Args:
            payment_request: The payment request with all required details.

        Returns:
            Completed Payment with the provider id and redirect URL.

        Raises:
            PaymentProcessingError: If the gateway reports any failure.
        """
        payment = Payment(
            currency=payment_request.currency,
            amount=payment_request.amount,
            payment_method=getattr(
                payment_request.payment_method, "value", payment_request.payment_method
            ),
        )

        try:
            response = self.launcher.process_transaction(payment_request)
        except Exception as e:
            logger.error(
                "payment_processing_failed",
                error=str(e),
                currency=payment_request.currency,
                amount=str(payment_request.amount),
            )
            raise PaymentProcessingError(f"Payment processing failed: {e}") from e

        payment.payment_url = response.payment_url
        payment.transaction_id = response.transaction_id
        payment.description = payment_request.description
        payment.status = STATUS_COMPLETED

        logger.info(
            "payment_processed",
            payment_id=payment.transaction_id,
            status=payment.status,
        )
        return payment
