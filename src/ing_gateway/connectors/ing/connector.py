"""
ING Open Banking payment connector.

Orchestrates one payment: token acquisition over mutual TLS, payload
construction, submission and response normalization. Each connector owns a
``TRX_`` transaction id that is threaded through every log line and audit
trace of the transaction.

State machine:
    CREATED -> TOKEN_PENDING -> TOKEN_ACQUIRED -> PAYMENT_PENDING -> COMPLETED
    TOKEN_PENDING / TOKEN_ACQUIRED / PAYMENT_PENDING -> FAILED
    FAILED -> TOKEN_PENDING (retry; the previous token is discarded)
"""

import traceback
import uuid
from typing import TYPE_CHECKING

import structlog

from ing_gateway.connectors.base import PaymentConnector
from ing_gateway.connectors.ing.config import IngConnectorConfig
from ing_gateway.connectors.ing.request_builder import PaymentRequestBuilder
from ing_gateway.connectors.ing.response_processor import PaymentResponseProcessor
from ing_gateway.connectors.ing.sender import PaymentSender
from ing_gateway.connectors.ing.token import TokenAcquirer
from ing_gateway.infrastructure.audit import PaymentAuditLogger
from ing_gateway.infrastructure.http import ClientFactory
from ing_gateway.models import (
    AccessToken,
    ConnectorState,
    ErrorKind,
    GatewayError,
    PaymentRequest,
    PaymentResponse,
)

if TYPE_CHECKING:
    from ing_gateway.config import Settings

logger = structlog.get_logger(__name__)

PAYMENT_FAILED_PREFIX = "Payment failed: "


class IngOpenBankingConnector(PaymentConnector):
    """
    Payment connector for the ING Open Banking payment-request API.

    Authentication uses a client certificate plus an OAuth2
    client-credentials token; the payment itself is a single-use payment
    request whose initiation URL the payer is redirected to.
    """

    PROVIDER = "ing"

    def __init__(
        self,
        config: IngConnectorConfig,
        audit_logger: PaymentAuditLogger,
        client_factory: ClientFactory | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        """
        Initialize the connector.

        Args:
            config: Connection settings and payment parameters
            audit_logger: Audit logger shared by all collaborators
            client_factory: Optional httpx client factory (defaults to mutual TLS)
            timeout_seconds: Request timeout for the default client factory
        """
        self.config = config
        self.audit_logger = audit_logger
        self.transaction_id = f"TRX_{uuid.uuid4().hex}"
        self.state = ConnectorState.CREATED
        self.access_token: AccessToken | None = None

        self.request_builder = PaymentRequestBuilder()
        self.token_acquirer = TokenAcquirer(audit_logger, client_factory, timeout_seconds)
        self.payment_sender = PaymentSender(audit_logger, client_factory, timeout_seconds)
        self.response_processor = PaymentResponseProcessor(audit_logger)

    @classmethod
    def from_request(
        cls,
        payment_request: PaymentRequest,
        settings: "Settings",
        audit_logger: PaymentAuditLogger | None = None,
        client_factory: ClientFactory | None = None,
    ) -> "IngOpenBankingConnector":
        """
        Build a connector from a payment request and the ING settings.

        Raises:
            GatewayError: CONFIGURATION kind if a credential setting is empty
        """
        ing = settings.ing
        config = IngConnectorConfig(
            host=ing.host,
            client_id=ing.client_id,
            merchant_id=ing.merchant_id,
            cert_path=ing.cert_path,
            key_path=ing.key_path,
            amount=payment_request.amount,
            currency=payment_request.currency,
            return_url=payment_request.return_url,
            description=payment_request.description,
        )

        if audit_logger is None:
            audit_logger = PaymentAuditLogger(
                log_dir=settings.audit_log.directory,
                provider=cls.PROVIDER,
                enabled=settings.audit_log.enabled,
            )

        return cls(
            config,
            audit_logger,
            client_factory=client_factory,
            timeout_seconds=ing.timeout_seconds,
        )

    def make_payment(self) -> PaymentResponse:
        """
        Initiate the payment through the ING Open Banking API.

        Returns:
            PaymentResponse with the ING payment id and initiation URL

        Raises:
            GatewayError: "Token request failed: ...", "Authentication required"
                          or "Payment failed: ..."
        """
        if self.state == ConnectorState.COMPLETED:
            raise GatewayError(
                f"Transaction {self.transaction_id} already completed",
                kind=ErrorKind.VALIDATION,
            )

        self.audit_logger.log_start_payment(
            self.transaction_id,
            self.config.amount,
            self.config.currency,
            self.config.merchant_id,
        )
        self._get_access_token()
        return self._create_payment()

    def _get_access_token(self) -> None:
        # A retry always re-authenticates
        self.access_token = None
        self._transition(ConnectorState.TOKEN_PENDING)

        try:
            self.access_token = self.token_acquirer.get_access_token(
                self.config.host,
                self.config.client_id,
                self.config.cert_path,
                self.config.key_path,
                self.transaction_id,
            )
        except GatewayError:
            self._transition(ConnectorState.FAILED)
            raise

        self._transition(ConnectorState.TOKEN_ACQUIRED)

    def _validate_access_token(self) -> None:
        if self.access_token is None or not self.access_token.value:
            self._transition(ConnectorState.FAILED)
            self.audit_logger.log_critical_error(
                self.transaction_id, "Missing access token for payment"
            )
            raise GatewayError("Authentication required", kind=ErrorKind.AUTHENTICATION)

    def _create_payment(self) -> PaymentResponse:
        self._validate_access_token()
        self._transition(ConnectorState.PAYMENT_PENDING)

        try:
            payload = self.request_builder.build_payment_request(
                self.config.amount,
                self.config.currency,
                self.config.description,
                self.config.return_url,
            )

            raw_response = self.payment_sender.send_payment_request(
                payload,
                self.config.host,
                self.access_token.value,
                self.config.cert_path,
                self.config.key_path,
                self.transaction_id,
            )

            response = self.response_processor.process_payment_response(
                raw_response, self.transaction_id
            )

        except Exception as e:
            self._transition(ConnectorState.FAILED)
            self.audit_logger.log_to_file(
                self.transaction_id,
                "PAYMENT_ERROR",
                f"{self.config.host}{PaymentSender.PAYMENTS_PATH}",
                "",
                "text/plain",
                {"error": str(e), "trace": traceback.format_exc()},
            )

            if isinstance(e, GatewayError):
                # Builder and processor errors were logged where they were raised
                if e.message.startswith(PAYMENT_FAILED_PREFIX):
                    raise
                raise e.wrap(PAYMENT_FAILED_PREFIX) from e

            self.audit_logger.log_payment_error(self.transaction_id, str(e))
            kind = (
                ErrorKind.RESPONSE_SHAPE
                if isinstance(e, ValueError)
                else ErrorKind.TRANSPORT
            )
            raise GatewayError(f"{PAYMENT_FAILED_PREFIX}{e}", kind=kind) from e

        self._transition(ConnectorState.COMPLETED)
        return response

    def _transition(self, new_state: ConnectorState) -> None:
        logger.debug(
            "connector_state_changed",
            transaction_id=self.transaction_id,
            from_state=self.state.value,
            to_state=new_state.value,
        )
        self.state = new_state
