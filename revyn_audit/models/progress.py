from pydantic import BaseModel, EmailStr, Field, field_validator
from uuid import UUID
from datetime import datetime
from typing import List, Optional

from revyn_audit.models.audit import RawValue, check_raw_value


class DraftAnswerSave(BaseModel):
    """One in-progress answer. Saving the same question again overwrites it."""

    user_id: str = Field(..., min_length=1, max_length=64, description="Owner in the auth service")
    value: RawValue = Field(..., description="Number (scale) or string (choice / text)")

    @field_validator("value", mode="before")
    @classmethod
    def check_value(cls, v):
        return check_raw_value(v)


class DraftAnswer(BaseModel):
    user_id: str
    purchase_id: UUID
    question_id: int
    value: RawValue
    updated_at: datetime


class CompletionStats(BaseModel):
    total_questions: int = Field(..., ge=0)
    answered_questions: int = Field(..., ge=0)
    completion_percentage: int = Field(..., ge=0, le=100)
    remaining_sections: List[str] = Field(default_factory=list, description="Categories with unanswered questions, catalog order")


class ExistingProgress(BaseModel):
    """Whether a user already bought a report type and started its questionnaire."""

    has_purchase: bool
    purchase_id: Optional[UUID] = None
    has_started: bool = False
    completion_percentage: int = Field(default=0, ge=0, le=100)


class DraftSubmit(BaseModel):
    """Finalize the saved drafts of a purchase into a Submission."""

    user_id: str = Field(..., min_length=1, max_length=64)
    company_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
