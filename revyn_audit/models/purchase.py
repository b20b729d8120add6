from pydantic import BaseModel, EmailStr, Field
from uuid import UUID
from datetime import datetime
from typing import List, Optional

from revyn_audit.models.enumerations import PurchaseStatus


class PaymentIntentCreate(BaseModel):
    """Checkout request. `amount` is in the smallest currency unit (cents)."""

    amount: float = Field(..., gt=0, description="Amount in cents; rounded to a whole cent")
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3, description="Defaults to STRIPE_CURRENCY")
    report_ids: List[str] = Field(..., min_length=1)
    customer_email: EmailStr
    customer_name: Optional[str] = Field(default=None, max_length=255)
    submission_id: Optional[UUID] = Field(default=None, description="Audit submission the report is for")
    user_id: Optional[str] = Field(default=None, max_length=64, description="Buyer in the auth service")


class PaymentIntentResponse(BaseModel):
    client_secret: str
    payment_intent_id: str
    purchase_id: UUID


class PaymentIntentStatus(BaseModel):
    id: str
    status: str
    amount: int
    currency: str
    metadata: dict = Field(default_factory=dict)
    created: Optional[int] = Field(default=None, description="Unix timestamp")


class Purchase(BaseModel):
    id: UUID
    payment_intent_id: str
    user_id: Optional[str] = None
    submission_id: Optional[UUID] = None
    customer_email: EmailStr
    customer_name: Optional[str] = None
    report_ids: List[str]
    amount: int
    currency: str
    status: PurchaseStatus
    created_at: datetime
    updated_at: Optional[datetime] = None


class WebhookAck(BaseModel):
    received: bool = True
    event_type: Optional[str] = None
