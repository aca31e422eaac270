"""
Payment connector integrations.

This module contains all payment connector implementations:
- base.PaymentConnector: Abstract interface every payment method implements
- ing.IngOpenBankingConnector: ING Open Banking payment requests
- factory.ConnectorFactory: Payment-method based connector selection
"""

from ing_gateway.connectors.base import PaymentConnector
from ing_gateway.connectors.factory import ConnectorFactory
from ing_gateway.connectors.ing import IngOpenBankingConnector

__all__ = [
    "ConnectorFactory",
    "IngOpenBankingConnector",
    "PaymentConnector",
]
