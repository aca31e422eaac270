"""Custom exceptions for the ING payment gateway."""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a gateway failure."""

    VALIDATION = "VALIDATION"
    AUTHENTICATION = "AUTHENTICATION"
    TRANSPORT = "TRANSPORT"
    RESPONSE_SHAPE = "RESPONSE_SHAPE"
    UNSUPPORTED_METHOD = "UNSUPPORTED_METHOD"
    CONFIGURATION = "CONFIGURATION"


class GatewayError(Exception):
    """
    Raised for any failure while talking to a banking gateway.

    The message is human readable and is wrapped with stage context as the
    error travels up (connector, then launcher). The kind survives wrapping
    so callers can branch on it without parsing the message.

    Examples:
    - VALIDATION: "Invalid currency code format"
    - AUTHENTICATION: "Token request failed: Missing access token in response"
    - TRANSPORT: "Payment failed: Server error '503 Service Unavailable' ..."
    - RESPONSE_SHAPE: "Invalid payment response from ING"
    """

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.TRANSPORT) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind

    def wrap(self, prefix: str) -> "GatewayError":
        """Return a new error with ``prefix`` prepended, keeping the kind."""
        return GatewayError(f"{prefix}{self.message}", kind=self.kind)


class PaymentProcessingError(Exception):
    """
    Raised by the service layer when a payment could not be processed.

    Wraps whatever the launcher raised; the original error is chained as
    ``__cause__``.
    """

    pass
