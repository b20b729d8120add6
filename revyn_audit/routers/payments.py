"""
Payments Router - Revyn Audit Platform
revyn_audit/routers/payments.py

Stripe payment intents and the Stripe webhook.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Request, status

from revyn_audit.config import settings
from revyn_audit.core.dependencies import get_payment_service
from revyn_audit.core.exceptions import AuditServiceException, EntityNotFoundException
from revyn_audit.models.common import ErrorResponse
from revyn_audit.models.purchase import (
    PaymentIntentCreate,
    PaymentIntentResponse,
    PaymentIntentStatus,
    Purchase,
    WebhookAck,
)
from revyn_audit.routers.errors import raise_not_found, raise_service_error
from revyn_audit.services.payment_service import PaymentService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/payments", tags=["Payments"])


@router.post(
    "/intents",
    response_model=PaymentIntentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Rejected by Stripe or unknown report type",
            "content": {
                "application/json": {
                    "example": {
                        "error_code": "PAYMENT_ERROR",
                        "message": "Invalid request parameters",
                        "details": None,
                        "timestamp": "2026-01-28T12:00:00Z",
                    }
                }
            },
        },
        500: {"model": ErrorResponse, "description": "Payment processor error"},
    },
    summary="Create a payment intent",
)
def create_payment_intent(
    payload: PaymentIntentCreate,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentIntentResponse:
    try:
        return service.create_payment_intent(
            amount_cents=payload.amount,
            currency=payload.currency,
            report_ids=payload.report_ids,
            customer_email=payload.customer_email,
            customer_name=payload.customer_name,
            submission_id=payload.submission_id,
            user_id=payload.user_id,
        )
    except AuditServiceException as e:
        raise_service_error(e)


@router.get(
    "/intents/{payment_intent_id}",
    response_model=PaymentIntentStatus,
    responses={404: {"model": ErrorResponse, "description": "Payment intent not found"}},
    summary="Retrieve a payment intent",
)
def get_payment_intent(
    payment_intent_id: str,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentIntentStatus:
    try:
        return service.retrieve_payment_intent(payment_intent_id)
    except AuditServiceException as e:
        raise_service_error(e)


@router.post(
    "/webhook",
    response_model=WebhookAck,
    responses={400: {"model": ErrorResponse, "description": "Signature verification failed"}},
    summary="Stripe webhook",
    description="Verifies the Stripe signature over the raw body and settles the purchase.",
)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(default=None, alias="Stripe-Signature"),
    service: PaymentService = Depends(get_payment_service),
) -> WebhookAck:
    payload = await request.body()
    try:
        return service.handle_webhook(payload, stripe_signature)
    except AuditServiceException as e:
        raise_service_error(e)


@router.get(
    "/purchases/{purchase_id}",
    response_model=Purchase,
    responses={404: {"model": ErrorResponse, "description": "Purchase not found"}},
    summary="Get purchase by ID",
    description="The stored purchase with its settlement status.",
)
def get_purchase(
    purchase_id: UUID,
    service: PaymentService = Depends(get_payment_service),
) -> Purchase:
    try:
        return service.get_purchase(purchase_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
