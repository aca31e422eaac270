"""Command-line entry point: initiate a single payment."""

import argparse
import json
import sys
import uuid
from decimal import Decimal, InvalidOperation

from ing_gateway.config import Settings, settings
from ing_gateway.launcher import GatewayLauncher
from ing_gateway.logging_config import configure_logging, get_logger
from ing_gateway.models import PaymentMethod, PaymentProcessingError, PaymentRequest
from ing_gateway.services import PaymentService
from ing_gateway.urls import build_payment_return_url

logger = get_logger(__name__)


def amount_arg(value: str) -> Decimal:
    """Parse a decimal amount for argparse."""
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ing-gateway",
        description="Initiate a bank-transfer payment and print the payer redirect URL.",
    )
    parser.add_argument("--amount", type=amount_arg, required=True, help="Amount, e.g. 12.50")
    parser.add_argument("--currency", default="EUR", help="ISO 4217 code (default: EUR)")
    parser.add_argument("--description", default=None, help="Text shown to the payer")
    parser.add_argument(
        "--return-url",
        default=None,
        help="Where the payer returns; defaults to the webshop return page",
    )
    parser.add_argument(
        "--payment-method",
        default=PaymentMethod.ING_OPEN_BANKING.value,
        help="Payment method identifier (default: %(default)s)",
    )
    parser.add_argument(
        "--order-id",
        default=None,
        help="Webshop order reference used in the default return URL",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, app_settings: Settings | None = None) -> int:
    """Run one payment; return the process exit code."""
    app_settings = app_settings or settings
    args = parse_args(argv)

    configure_logging(
        log_level="DEBUG" if app_settings.debug else "INFO",
        format_as_json=app_settings.environment != "development",
        # stdout carries only the JSON result
        stream=sys.stderr,
    )

    return_url = args.return_url or build_payment_return_url(
        args.order_id or uuid.uuid4().hex, app_settings.webshop_base_url
    )
    payment_request = PaymentRequest(
        currency=args.currency,
        amount=args.amount,
        payment_method=args.payment_method,
        return_url=return_url,
        description=args.description,
    )

    service = PaymentService(GatewayLauncher(app_settings))
    try:
        payment = service.process_payment(payment_request)
    except PaymentProcessingError as e:
        logger.error("payment_command_failed", error=str(e))
        return 1

    print(json.dumps(payment.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
