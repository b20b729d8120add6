# revyn_audit/services/payment_service.py
"""
Payment Service
---------------
Creates and observes Stripe payment intents for report purchases. Card
capture happens at Stripe; this service records a pending purchase per
intent and settles it when the webhook reports the outcome.
"""
import json
import structlog
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from uuid import UUID

import stripe

from revyn_audit.core.exceptions import EntityNotFoundException, PaymentError, UnknownReportTypeError
from revyn_audit.models.enumerations import PurchaseStatus
from revyn_audit.models.purchase import PaymentIntentResponse, PaymentIntentStatus, Purchase, WebhookAck
from revyn_audit.repositories.purchase_repository import PurchaseRepository
from revyn_audit.scoring.report_types import price_in_cents, unavailable_report_ids

logger = structlog.get_logger(__name__)

EVENT_SUCCEEDED = "payment_intent.succeeded"
EVENT_FAILED = "payment_intent.payment_failed"


def to_cents(amount: float) -> int:
    """Round an amount already expressed in cents to a whole cent."""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentService:
    """Stripe payment intents and webhook handling."""

    def __init__(
        self,
        purchase_repo: PurchaseRepository,
        api_key: Optional[str],
        webhook_secret: Optional[str] = None,
        source_tag: str = "revyn-marketing-audit",
        default_currency: str = "usd",
    ) -> None:
        self._repo = purchase_repo
        self._api_key = api_key
        self._webhook_secret = webhook_secret
        self._source_tag = source_tag
        self._default_currency = default_currency

    def _require_api_key(self) -> str:
        if not self._api_key:
            raise PaymentError("Payments are not configured", status_code=503)
        return self._api_key

    def create_payment_intent(
        self,
        amount_cents: float,
        currency: Optional[str],
        report_ids: List[str],
        customer_email: str,
        customer_name: Optional[str] = None,
        submission_id: Optional[UUID] = None,
        user_id: Optional[str] = None,
    ) -> PaymentIntentResponse:
        """
        Create a payment intent and record the pending purchase.

        A currency of None means the configured default.

        Raises:
            PaymentError: missing fields, bad amount, or Stripe rejected the request.
            UnknownReportTypeError: a report id is unknown or not on sale.
        """
        if currency is None:
            currency = self._default_currency
        if not amount_cents or not currency or not report_ids or not customer_email:
            raise PaymentError("Missing required fields: amount, currency, reportIds, customerEmail")
        if isinstance(amount_cents, bool) or amount_cents <= 0:
            raise PaymentError("Amount must be a positive number in cents")

        bad_ids = unavailable_report_ids(report_ids)
        if bad_ids:
            raise UnknownReportTypeError(bad_ids)

        amount = to_cents(amount_cents)
        list_price = price_in_cents(report_ids)
        if amount != list_price:
            logger.warning("payment_amount_mismatch", amount=amount, list_price=list_price)
        api_key = self._require_api_key()

        try:
            intent = stripe.PaymentIntent.create(
                api_key=api_key,
                amount=amount,
                currency=currency.lower(),
                metadata={
                    "reportIds": json.dumps(report_ids),
                    "customerEmail": customer_email,
                    "customerName": customer_name or "",
                    "source": self._source_tag,
                },
                automatic_payment_methods={"enabled": True},
                receipt_email=customer_email,
            )
        except stripe.CardError as e:
            logger.warning("payment_intent_card_error", error=e.user_message or str(e))
            raise PaymentError(e.user_message or str(e), status_code=400)
        except stripe.InvalidRequestError as e:
            logger.warning("payment_intent_invalid_request", error=str(e))
            raise PaymentError("Invalid request parameters", status_code=400)
        except stripe.StripeError as e:
            logger.error("payment_intent_failed", error=str(e))
            raise PaymentError("Internal server error", status_code=500)

        purchase = self._repo.create(
            payment_intent_id=intent["id"],
            customer_email=customer_email,
            customer_name=customer_name,
            report_ids=report_ids,
            amount=amount,
            currency=currency.lower(),
            submission_id=submission_id,
            user_id=user_id,
        )
        logger.info(
            "payment_intent_created",
            payment_intent_id=intent["id"],
            purchase_id=str(purchase["id"]),
            amount=amount,
            report_ids=report_ids,
        )
        return PaymentIntentResponse(
            client_secret=intent["client_secret"],
            payment_intent_id=intent["id"],
            purchase_id=purchase["id"],
        )

    def get_purchase(self, purchase_id: UUID) -> Purchase:
        """
        Raises:
            EntityNotFoundException: no purchase with this id.
        """
        row = self._repo.get_by_id(purchase_id)
        if row is None:
            raise EntityNotFoundException("Purchase", str(purchase_id))
        return Purchase(**row)

    def retrieve_payment_intent(self, payment_intent_id: str) -> PaymentIntentStatus:
        """
        Raises:
            PaymentError: 404 when Stripe does not know the id, 500 otherwise.
        """
        if not payment_intent_id:
            raise PaymentError("Payment intent ID is required")
        api_key = self._require_api_key()
        try:
            intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=api_key)
        except stripe.InvalidRequestError:
            raise PaymentError("Payment intent not found", status_code=404)
        except stripe.StripeError as e:
            logger.error("payment_intent_retrieve_failed", payment_intent_id=payment_intent_id, error=str(e))
            raise PaymentError("Internal server error", status_code=500)

        return PaymentIntentStatus(
            id=intent["id"],
            status=intent["status"],
            amount=intent["amount"],
            currency=intent["currency"],
            metadata=dict(intent.get("metadata") or {}),
            created=intent.get("created"),
        )

    def handle_webhook(self, payload: bytes, signature: Optional[str]) -> WebhookAck:
        """
        Verify a Stripe webhook and settle the matching purchase.

        Raises:
            PaymentError: missing secret or signature verification failed.
        """
        if not self._webhook_secret:
            raise PaymentError("Webhook secret not configured", status_code=503)
        try:
            event = stripe.Webhook.construct_event(payload, signature or "", self._webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning("webhook_verification_failed", error=str(e))
            raise PaymentError(f"Webhook Error: {e}")

        event_type = event["type"]

        if event_type == EVENT_SUCCEEDED:
            self._settle(event["data"]["object"]["id"], PurchaseStatus.COMPLETED)
        elif event_type == EVENT_FAILED:
            self._settle(event["data"]["object"]["id"], PurchaseStatus.FAILED)
        else:
            logger.info("webhook_event_ignored", event_type=event_type)

        return WebhookAck(received=True, event_type=event_type)

    def _settle(self, payment_intent_id: str, status: PurchaseStatus) -> None:
        purchase = self._repo.update_status(payment_intent_id, status)
        if purchase is None:
            logger.warning("webhook_purchase_missing", payment_intent_id=payment_intent_id, status=status.value)
            return
        logger.info(
            "purchase_settled",
            purchase_id=str(purchase["id"]),
            payment_intent_id=payment_intent_id,
            status=status.value,
        )
