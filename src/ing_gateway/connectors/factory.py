"""
Connector factory for creating payment connector instances.

This module maps payment-method identifiers to connector classes so the
launcher can pick the right integration for a request. Adding a provider
means registering a new PaymentConnector subclass; the dispatch code does
not change.
"""

from typing import TYPE_CHECKING, Any

import structlog

from ing_gateway.connectors.base import PaymentConnector
from ing_gateway.connectors.ing.connector import IngOpenBankingConnector
from ing_gateway.models import ErrorKind, GatewayError, PaymentMethod, PaymentRequest

if TYPE_CHECKING:
    from ing_gateway.config import Settings

logger = structlog.get_logger(__name__)


class ConnectorFactory:
    """Registry of payment connectors keyed by payment-method identifier."""

    _CONNECTORS: dict[str, type[PaymentConnector]] = {
        PaymentMethod.ING_OPEN_BANKING.value: IngOpenBankingConnector,
    }

    @classmethod
    def create_connector(
        cls,
        payment_request: PaymentRequest,
        settings: "Settings",
        **dependencies: Any,
    ) -> PaymentConnector:
        """
        Create the connector for a payment request.

        Args:
            payment_request: Request whose ``payment_method`` selects the connector
            settings: Application settings passed to the connector
            **dependencies: Forwarded to the connector's ``from_request``
                            (e.g. ``audit_logger``, ``client_factory``)

        Returns:
            PaymentConnector ready for ``make_payment``

        Raises:
            GatewayError: UNSUPPORTED_METHOD kind if no connector is registered
        """
        method = str(getattr(payment_request.payment_method, "value", payment_request.payment_method))
        connector_class = cls._CONNECTORS.get(method.upper())

        if connector_class is None:
            logger.warning(
                "unsupported_payment_method",
                payment_method=method,
                available=cls.list_connectors(),
            )
            raise GatewayError("Unsupported payment method", kind=ErrorKind.UNSUPPORTED_METHOD)

        connector = connector_class.from_request(payment_request, settings, **dependencies)

        logger.info(
            "connector_created",
            payment_method=method.upper(),
            connector_class=connector_class.__name__,
        )
        return connector

    @classmethod
    def register_connector(
        cls,
        payment_method: str,
        connector_class: type[PaymentConnector],
    ) -> None:
        """
        Register a connector for a payment method.

        Example:
            ConnectorFactory.register_connector("ACME_CARDS", AcmeCardConnector)
        """
        if not isinstance(connector_class, type) or not issubclass(
            connector_class, PaymentConnector
        ):
            raise TypeError(
                f"{getattr(connector_class, '__name__', connector_class)} "
                "must inherit from PaymentConnector"
            )

        cls._CONNECTORS[payment_method.upper()] = connector_class
        logger.info(
            "connector_registered",
            payment_method=payment_method.upper(),
            connector_class=connector_class.__name__,
        )

    @classmethod
    def list_connectors(cls) -> list[str]:
        """Return the registered payment-method identifiers, sorted."""
        return sorted(cls._CONNECTORS.keys())
