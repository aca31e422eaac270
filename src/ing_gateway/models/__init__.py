"""Domain models for the ING payment gateway."""

from ing_gateway.models.exceptions import ErrorKind, GatewayError, PaymentProcessingError
from ing_gateway.models.payment import (
    AccessToken,
    ConnectorState,
    PaymentMethod,
    PaymentPayload,
    PaymentRequest,
    PaymentResponse,
)

__all__ = [
    "AccessToken",
    "ConnectorState",
    "ErrorKind",
    "GatewayError",
    "PaymentMethod",
    "PaymentPayload",
    "PaymentProcessingError",
    "PaymentRequest",
    "PaymentResponse",
]
