"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import EventDict, Processor

from ing_gateway.infrastructure.masking import mask_sensitive_data


def add_transaction_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Move the transaction id to the front of the event so traces line up."""
    transaction_id = event_dict.pop("transaction_id", None)
    if transaction_id:
        return {"transaction_id": transaction_id, **event_dict}
    return event_dict


def mask_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Apply the audit masking rules to every structured event."""
    return mask_sensitive_data(event_dict)


def configure_logging(
    log_level: str = "INFO",
    format_as_json: bool = True,
    include_transaction_id: bool = True,
    stream: TextIO = sys.stdout,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_as_json: If True, output logs as JSON; otherwise use console format
        include_transaction_id: If True, hoist transaction ids to the front of events
        stream: Where rendered log lines are written
    """
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, log_level.upper()),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        mask_secrets,
    ]

    if include_transaction_id:
        processors.append(add_transaction_id)

    if format_as_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
