"""ING Open Banking payment gateway."""

__version__ = "0.1.0"

from ing_gateway.connectors import ConnectorFactory, IngOpenBankingConnector, PaymentConnector
from ing_gateway.launcher import GatewayLauncher
from ing_gateway.models import (
    ErrorKind,
    GatewayError,
    PaymentMethod,
    PaymentProcessingError,
    PaymentRequest,
    PaymentResponse,
)
from ing_gateway.services import Payment, PaymentService

__all__ = [
    "ConnectorFactory",
    "ErrorKind",
    "GatewayError",
    "GatewayLauncher",
    "IngOpenBankingConnector",
    "Payment",
    "PaymentConnector",
    "PaymentMethod",
    "PaymentProcessingError",
    "PaymentRequest",
    "PaymentResponse",
    "PaymentService",
]
