"""Base interface for payment connectors."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ing_gateway.models import PaymentRequest, PaymentResponse

if TYPE_CHECKING:
    from ing_gateway.config import Settings


class PaymentConnector(ABC):
    """
    Abstract base class for payment method integrations.

    Every payment method (ING Open Banking today) implements this interface
    so the launcher can dispatch on the payment-method identifier alone.
    A connector instance handles exactly one transaction.
    """

    @abstractmethod
    def make_payment(self) -> PaymentResponse:
        """
        Submit the payment this connector was built for.

        Returns:
            PaymentResponse with the provider payment id and redirect URL.

        Raises:
            GatewayError: For every failure (validation, authentication,
                          transport, unexpected response shape).
        """
        pass

    @classmethod
    @abstractmethod
    def from_request(
        cls,
        payment_request: PaymentRequest,
        settings: "Settings",
        **dependencies: Any,
    ) -> "PaymentConnector":
        """
        Build a connector for one payment request.

        Args:
            payment_request: Caller-supplied payment
            settings: Application settings holding the provider credentials
            **dependencies: Collaborators such as the audit logger or HTTP client factory
        """
        pass
