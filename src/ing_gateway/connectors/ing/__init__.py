"""ING Open Banking integration."""

from ing_gateway.connectors.ing.config import IngConnectorConfig
from ing_gateway.connectors.ing.connector import IngOpenBankingConnector
from ing_gateway.connectors.ing.request_builder import PaymentRequestBuilder
from ing_gateway.connectors.ing.response_processor import PaymentResponseProcessor
from ing_gateway.connectors.ing.sender import PaymentSender
from ing_gateway.connectors.ing.token import TokenAcquirer

__all__ = [
    "IngConnectorConfig",
    "IngOpenBankingConnector",
    "PaymentRequestBuilder",
    "PaymentResponseProcessor",
    "PaymentSender",
    "TokenAcquirer",
]
