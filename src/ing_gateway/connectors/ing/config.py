"""Typed configuration for one ING Open Banking transaction."""

from dataclasses import dataclass

from ing_gateway.models import ErrorKind, GatewayError
from ing_gateway.models.payment import Amount


@dataclass(frozen=True)
class IngConnectorConfig:
    """
    Everything an ING connector needs for a single payment.

    Credentials are checked here; the payment fields (amount, currency,
    return URL) are validated by the request builder when the payment is
    made, so their errors surface from ``make_payment``.
    """

    host: str
    client_id: str
    merchant_id: str
    cert_path: str
    key_path: str
    amount: Amount
    currency: str
    return_url: str
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate that the connection settings are present."""
        for name in ("host", "client_id", "merchant_id", "cert_path", "key_path"):
            if not getattr(self, name):
                raise GatewayError(
                    f"Missing ING configuration value: {name}",
                    kind=ErrorKind.CONFIGURATION,
                )
        # Paths are appended to the host, so keep it without a trailing slash
        object.__setattr__(self, "host", self.host.rstrip("/"))
