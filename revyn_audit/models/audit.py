import math

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from revyn_audit.models.enumerations import AuditCategory, MaturityLevel, QuestionType


class Question(BaseModel):
    """
    One immutable catalog entry.

    For multiple-choice questions the option order is a ranking: the first
    option is the most mature practice.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Catalog-unique question id")
    category: AuditCategory = Field(..., description="Category this question belongs to")
    question: str = Field(..., min_length=1, description="Prompt shown to the respondent")
    type: QuestionType = Field(..., description="Answer kind: scale, multiple-choice or text")
    options: Tuple[str, ...] = Field(default=(), description="Ranked options, best first")
    required: bool = Field(default=True)

    @model_validator(mode="after")
    def validate_options(self):
        """Multiple-choice needs options; other kinds must not carry any."""
        if self.type == QuestionType.MULTIPLE_CHOICE and not self.options:
            raise ValueError("multiple-choice questions need at least one option")
        if self.type != QuestionType.MULTIPLE_CHOICE and self.options:
            raise ValueError(f"{self.type.value} questions cannot have options")
        return self


class _AnswerBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: int = Field(..., description="Id of the answered question")
    category: str = Field(..., description="Category label copied from the question at answer time")


class ScaleAnswer(_AnswerBase):
    """Reply to a 0-10 scale question. Out-of-range values are kept and score zero."""

    kind: Literal["scale"] = "scale"
    value: float


class ChoiceAnswer(_AnswerBase):
    """Reply naming one of a multiple-choice question's options."""

    kind: Literal["choice"] = "choice"
    value: str


class TextAnswer(_AnswerBase):
    """Free-text reply. Never scored."""

    kind: Literal["text"] = "text"
    value: str


Answer = Annotated[Union[ScaleAnswer, ChoiceAnswer, TextAnswer], Field(discriminator="kind")]


RawValue = Union[float, str]


def check_raw_value(value):
    """Reject booleans and NaN/Infinity, which JSON parsing lets through."""
    if isinstance(value, bool):
        raise ValueError("answer values must be numbers or strings")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("answer values must be finite numbers")
    return value


class SubmissionCreate(BaseModel):
    """
    Payload for finalizing a questionnaire.

    `answers` is the form state as posted: question id -> number (scale)
    or string (choice / text). build_answers() turns it into typed answers.
    """

    company_name: str = Field(..., min_length=1, max_length=255, description="Respondent company name")
    email: EmailStr = Field(..., description="Contact email for the report")
    user_id: Optional[str] = Field(default=None, max_length=64, description="Owner in the auth service")
    answers: Dict[int, RawValue] = Field(..., description="Question id -> raw answer value")

    @field_validator("answers", mode="before")
    @classmethod
    def check_answer_values(cls, v):
        if isinstance(v, dict):
            for value in v.values():
                check_raw_value(value)
        return v


class Submission(BaseModel):
    """
    A finalized, immutable submission. `score` is computed once at creation.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: UUID = Field(default_factory=uuid4)
    user_id: Optional[str] = None
    company_name: str
    email: EmailStr
    answers: List[Answer]
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    score: int = Field(..., ge=0, le=100, description="Overall maturity percentage")


class CategoryScore(BaseModel):
    """Derived per-category result. Never persisted."""

    model_config = ConfigDict(frozen=True)

    category: str
    percentage: int = Field(..., ge=0, le=100)
    questions_count: int = Field(..., ge=0, description="Catalog questions in the category")


class ScoreReport(BaseModel):
    """Overall score, maturity band and category breakdown for one answer set."""

    overall_score: int = Field(..., ge=0, le=100)
    maturity_level: MaturityLevel
    categories: List[CategoryScore]
    recommendations: List[str]


class ScorePreviewRequest(BaseModel):
    """Typed answers to score without persisting anything."""

    answers: List[Answer] = Field(default_factory=list)


class CategorySummary(BaseModel):
    category: AuditCategory
    questions_count: int
    scored_questions: int


class PaginatedSubmissionResponse(BaseModel):
    items: List[Submission]
    total: int
