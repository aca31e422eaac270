"""Builds payment request payloads according to the ING API."""

import math
import re
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, NoReturn
from urllib.parse import urlsplit

import structlog

from ing_gateway.models import ErrorKind, GatewayError, PaymentPayload

logger = structlog.get_logger(__name__)

CURRENCY_PATTERN = re.compile(r"[A-Z]{3}")
PAYMENT_VALIDITY = timedelta(days=1)


class PaymentRequestBuilder:
    """Validates payment parameters and builds the ING payment payload."""

    def build_payment_request(
        self,
        amount: Any,
        currency: Any,
        description: str | None,
        return_url: Any,
    ) -> PaymentPayload:
        """
        Build a payment request for the ING API.

        Validation runs before anything else and the first failing rule wins:
        amount, then currency, then return URL, then its scheme.

        Args:
            amount: Payment amount, must be a finite number greater than zero
            currency: ISO 4217 code, three uppercase letters
            description: Free text shown to the payer
            return_url: Absolute HTTPS URL the payer is sent back to

        Returns:
            PaymentPayload with a fresh purchase id, valid for one day

        Raises:
            GatewayError: VALIDATION kind with the failing rule's message
        """
        self._validate_payment_parameters(amount, currency, return_url)

        valid_until = datetime.now(timezone.utc).replace(microsecond=0) + PAYMENT_VALIDITY

        return PaymentPayload(
            amount=amount,
            currency=currency,
            valid_until=valid_until.isoformat(timespec="milliseconds"),
            purchase_id=f"purchase_{uuid.uuid4().hex}",
            description=description,
            return_url=return_url,
        )

    def _validate_payment_parameters(self, amount: Any, currency: Any, return_url: Any) -> None:
        if not _is_positive_number(amount):
            self._fail("Payment amount must be a positive number", field="amount")

        if not isinstance(currency, str) or not CURRENCY_PATTERN.fullmatch(currency):
            self._fail("Invalid currency code format", field="currency")

        scheme = _url_scheme(return_url)
        if scheme is None:
            self._fail("Invalid return URL", field="return_url")

        if scheme.lower() != "https":
            self._fail("Return URL must use HTTPS protocol", field="return_url")

    @staticmethod
    def _fail(message: str, field: str) -> NoReturn:
        logger.warning("payment_request_validation_failed", field=field, reason=message)
        raise GatewayError(message, kind=ErrorKind.VALIDATION)


def _is_positive_number(amount: Any) -> bool:
    if isinstance(amount, bool):
        return False
    if isinstance(amount, Decimal):
        return amount.is_finite() and amount > 0
    if isinstance(amount, int):
        return amount > 0
    if isinstance(amount, float):
        return math.isfinite(amount) and amount > 0
    return False


def _url_scheme(url: Any) -> str | None:
    """Return the scheme of an absolute URL, or None if ``url`` is not one."""
    if not isinstance(url, str) or not url or any(c.isspace() for c in url):
        return None
    # Host and path must be plain printable ASCII
    if not url.isascii() or not url.isprintable():
        return None
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc or not parts.hostname:
        return None
    return parts.scheme
