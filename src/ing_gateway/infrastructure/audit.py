"""Audit logging for payment provider traffic.

Every HTTP exchange with a provider is appended, masked, to a human-readable
daily trace file, and the notable milestones of a transaction are emitted as
structured events. Audit files are append-only and never rotated or pruned
here.

Design principles:
- Append-only (one write per block, no lock file)
- Masked before write (tokens, client ids and API keys never hit disk)
- Never breaks the payment flow (write failures are logged, not raised)
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl

import structlog

from ing_gateway.infrastructure.masking import mask_sensitive_data

logger = structlog.get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class PaymentAuditLogger:
    """
    Audit logger scoped to a single payment provider.

    Trace files live at ``{log_dir}/{provider}/payment_{provider}_{date}.log``.
    """

    def __init__(
        self,
        log_dir: str | Path = "var/log/payments",
        provider: str = "ing",
        enabled: bool = True,
    ) -> None:
        """
        Initialize the audit logger.

        Args:
            log_dir: Root directory for trace files (created on first use)
            provider: Provider name used for the sub-directory and file name
            enabled: If False, trace files are skipped; structured events still flow
        """
        self.log_dir = Path(log_dir)
        self.provider = provider
        self.enabled = enabled

    def log_file_path(self, day: datetime | None = None) -> Path:
        """Return the trace file for ``day`` (default: today)."""
        day = day or datetime.now()
        return (
            self.log_dir
            / self.provider
            / f"payment_{self.provider}_{day.strftime('%Y-%m-%d')}.log"
        )

    def log_to_file(
        self,
        transaction_id: str,
        action: str,
        url: str,
        raw_body: str | bytes,
        content_type: str,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """
        Append a masked trace block for one HTTP exchange.

        Args:
            transaction_id: Internal TRX_ correlation id
            action: Trace label (e.g. TOKEN_REQUEST, PAYMENT_RESPONSE)
            url: Target URL of the exchange
            raw_body: Raw request or response body
            content_type: Content type used to decode ``raw_body``
            extra: Additional context merged next to the decoded body
        """
        if not self.enabled:
            return

        try:
            now = datetime.now()
            path = self.log_file_path(now)
            path.parent.mkdir(parents=True, exist_ok=True)

            block_data = mask_sensitive_data(
                {**(extra or {}), "body": self._parse_body(raw_body, content_type)}
            )
            block = (
                f"[{now.strftime('%Y-%m-%d %H:%M:%S')}] [{action}] [TRX: {transaction_id}]\n"
                f"URL: {url}\n"
                f"{json.dumps(block_data, indent=4, default=str)}\n\n"
            )

            with path.open("a", encoding="utf-8") as log_file:
                log_file.write(block)

        except Exception as e:
            logger.error(
                "audit_log_write_failed",
                transaction_id=transaction_id,
                action=action,
                error=str(e),
            )

    @staticmethod
    def _parse_body(raw_body: str | bytes, content_type: str) -> Any:
        """Decode a body by content type; unknown types yield an empty mapping."""
        if isinstance(raw_body, bytes):
            raw_body = raw_body.decode("utf-8", errors="replace")

        media_type = content_type.split(";", 1)[0].strip().lower()
        try:
            if media_type == JSON_CONTENT_TYPE:
                parsed = json.loads(raw_body) if raw_body else {}
                if parsed is None:
                    return {}
                return parsed if isinstance(parsed, (dict, list)) else [parsed]
            if media_type == FORM_CONTENT_TYPE:
                return dict(parse_qsl(raw_body, keep_blank_values=True))
        except ValueError as e:
            return {"error": f"Failed to parse data: {e}"}
        return {}

    # Structured events

    def log_start_payment(
        self, transaction_id: str, amount: Any, currency: str, merchant_id: str
    ) -> None:
        logger.info(
            "payment_started",
            provider=self.provider,
            transaction_id=transaction_id,
            amount=str(amount),
            currency=currency,
            merchant_id=merchant_id,
        )

    def log_token_success(
        self, transaction_id: str, expires_in: int | None, token_type: str | None
    ) -> None:
        logger.debug(
            "token_obtained",
            provider=self.provider,
            transaction_id=transaction_id,
            token_expires=expires_in,
            token_type=token_type,
        )

    def log_token_error(
        self, transaction_id: str, message: str, context: Any = None
    ) -> None:
        logger.error(
            "token_error",
            provider=self.provider,
            transaction_id=transaction_id,
            message=message,
            context=mask_sensitive_data(context or {}),
        )

    def log_payment_success(
        self, transaction_id: str, payment_id: str, initiation_url: str
    ) -> None:
        logger.info(
            "payment_succeeded",
            provider=self.provider,
            transaction_id=transaction_id,
            payment_id=payment_id,
            initiation_url=initiation_url,
        )

    def log_payment_error(
        self, transaction_id: str, message: str, context: Any = None
    ) -> None:
        logger.error(
            "payment_error",
            provider=self.provider,
            transaction_id=transaction_id,
            message=message,
            context=mask_sensitive_data(context or {}),
        )

    def log_critical_error(self, transaction_id: str, message: str) -> None:
        logger.critical(
            "payment_critical_error",
            provider=self.provider,
            transaction_id=transaction_id,
            message=message,
        )
