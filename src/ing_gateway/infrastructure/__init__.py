"""Cross-cutting infrastructure: audit traces, masking and HTTP clients."""

from ing_gateway.infrastructure.audit import PaymentAuditLogger
from ing_gateway.infrastructure.http import ClientFactory, create_mtls_client
from ing_gateway.infrastructure.masking import MASK_RULES, mask_sensitive_data

__all__ = [
    "ClientFactory",
    "MASK_RULES",
    "PaymentAuditLogger",
    "create_mtls_client",
    "mask_sensitive_data",
]
