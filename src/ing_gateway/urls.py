"""Webshop URLs handed to payment providers."""

from urllib.parse import urlencode

PAYMENT_RETURN_PATH = "/return"


def build_payment_return_url(purchase_reference: str, base_url: str) -> str:
    """
    Build the URL the payer is sent back to after paying.

    Examples:
        >>> build_payment_return_url("order-42", "https://www.webshop.com")
        'https://www.webshop.com/return?purchaseId=order-42'
    """
    query = urlencode({"purchaseId": purchase_reference})
    return f"{base_url.rstrip('/')}{PAYMENT_RETURN_PATH}?{query}"
