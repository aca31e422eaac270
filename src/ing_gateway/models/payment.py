"""Payment domain models."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from ing_gateway.models.exceptions import ErrorKind, GatewayError

Amount = Decimal | int | float


class PaymentMethod(str, Enum):
    """Identifiers of the payment methods the launcher can route to."""

    ING_OPEN_BANKING = "ING_OPEN_BANKING"


class ConnectorState(str, Enum):
    """Lifecycle of a single connector transaction."""

    CREATED = "CREATED"
    TOKEN_PENDING = "TOKEN_PENDING"
    TOKEN_ACQUIRED = "TOKEN_ACQUIRED"
    PAYMENT_PENDING = "PAYMENT_PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class PaymentRequest:
    """
    Payment requested by the caller.

    ``status`` is a free-form lifecycle label owned by the caller
    (e.g. "processing", "completed"); the gateway never reads it.
    """

    currency: str
    amount: Amount
    payment_method: str
    return_url: str
    description: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class AccessToken:
    """OAuth2 bearer token issued by the provider."""

    value: str
    token_type: str | None = None
    expires_in: int | None = None

    def __repr__(self) -> str:
        return (
            f"AccessToken(value='{self.value[:6]}******', "
            f"token_type={self.token_type!r}, expires_in={self.expires_in!r})"
        )


@dataclass(frozen=True)
class PaymentPayload:
    """
    Outbound ING payment-request body.

    A payload allows exactly one payment and caps the receivable amount at
    the fixed amount.
    """

    amount: Amount
    currency: str
    valid_until: str
    purchase_id: str
    description: str | None
    return_url: str
    maximum_allowed_payments: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape expected by the payment endpoint."""
        money = {"value": _json_number(self.amount), "currency": self.currency}
        return {
            "fixedAmount": dict(money),
            "validUntil": self.valid_until,
            "maximumAllowedPayments": self.maximum_allowed_payments,
            "maximumReceivableAmount": dict(money),
            "purchaseId": self.purchase_id,
            "description": self.description,
            "returnUrl": self.return_url,
        }


@dataclass(frozen=True)
class PaymentResponse:
    """
    Normalized result of a successful payment initiation.

    ``transaction_id`` is the provider's payment id, not the internal
    ``TRX_`` correlation id.
    """

    transaction_id: str
    payment_url: str
    raw_response: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate that the provider identifiers are present."""
        if not self.transaction_id or not self.payment_url:
            raise GatewayError(
                "Invalid payment response from ING", kind=ErrorKind.RESPONSE_SHAPE
            )

    @classmethod
    def from_provider(cls, raw: Any) -> "PaymentResponse":
        """Build a response from the decoded provider body."""
        if not isinstance(raw, dict):
            raise GatewayError(
                "Invalid payment response from ING", kind=ErrorKind.RESPONSE_SHAPE
            )
        return cls(
            transaction_id=raw.get("id") or "",
            payment_url=raw.get("paymentInitiationUrl") or "",
            raw_response=raw,
        )


def _json_number(amount: Amount) -> int | float:
    if isinstance(amount, Decimal):
        return int(amount) if amount == amount.to_integral_value() else float(amount)
    return amount
