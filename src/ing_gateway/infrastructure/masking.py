"""
Redaction of secrets before they reach a log.

Keys are matched case-sensitively, exactly as the provider spells them.
Values under unknown keys pass through untouched; nested mappings and lists
are walked recursively. The input is never mutated.
"""

from collections.abc import Callable, Mapping
from typing import Any


def _keep_prefix(length: int, suffix: str) -> Callable[[Any], str]:
    def _mask(value: Any) -> str:
        text = "" if value is None else str(value)
        return text[:length] + suffix

    return _mask


MASK_RULES: dict[str, Callable[[Any], str]] = {
    "access_token": _keep_prefix(6, "******"),
    "client_id": _keep_prefix(4, "****"),
    "Authorization": lambda value: "Bearer *****",
    "Merchant-Id": _keep_prefix(4, "****"),
    "api_key": _keep_prefix(4, "****"),
}


def mask_sensitive_data(data: Any) -> Any:
    """
    Return a copy of ``data`` with sensitive values masked.

    Examples:
        >>> mask_sensitive_data({"access_token": "very-sensitive-token-value"})
        {'access_token': 'very-s******'}
        >>> mask_sensitive_data({"headers": {"Authorization": "Bearer xyz"}})
        {'headers': {'Authorization': 'Bearer *****'}}
    """
    if isinstance(data, Mapping):
        masked = {}
        for key, value in data.items():
            if isinstance(value, (Mapping, list, tuple)):
                masked[key] = mask_sensitive_data(value)
            elif key in MASK_RULES:
                masked[key] = MASK_RULES[key](value)
            else:
                masked[key] = value
        return masked
    if isinstance(data, (list, tuple)):
        return [mask_sensitive_data(item) for item in data]
    return data
