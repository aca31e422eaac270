"""Service layer for payment processing."""

from ing_gateway.services.payment_service import Payment, PaymentService

__all__ = ["Payment", "PaymentService"]
