from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import List, Optional

from revyn_audit.models.enumerations import Confidence


class ReportType(BaseModel):
    """A purchasable report product."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    price: int = Field(..., gt=0, description="Price in whole dollars")
    category: str
    estimated_time: str
    available: bool


class ReportSection(BaseModel):
    title: str = Field(..., min_length=1)
    content: str
    score: Optional[int] = Field(default=None, ge=0, le=100)
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class ActionPlan(BaseModel):
    three_month: List[str] = Field(default_factory=list)
    six_month: List[str] = Field(default_factory=list)
    twelve_month: List[str] = Field(default_factory=list)


class OpportunityMap(BaseModel):
    high_impact: List[str] = Field(default_factory=list)
    medium_impact: List[str] = Field(default_factory=list)
    low_impact: List[str] = Field(default_factory=list)


class RoleBasedAction(BaseModel):
    role: str
    actions: List[str] = Field(default_factory=list)


class RevenueImpact(BaseModel):
    potential: str
    timeline: str
    confidence: Confidence


class ReportContent(BaseModel):
    """
    The part of a report the LLM writes. Validated before anything is stored;
    the overall score is never taken from the model.
    """

    title: str = Field(..., min_length=1)
    sections: List[ReportSection] = Field(..., min_length=1)
    action_plan: ActionPlan
    opportunity_map: OpportunityMap
    role_based_actions: List[RoleBasedAction] = Field(default_factory=list)
    revenue_impact: RevenueImpact


class GeneratedReport(ReportContent):
    """A stored AI-written audit report for one submission."""

    id: UUID = Field(default_factory=uuid4)
    submission_id: UUID
    report_type_id: str
    overall_score: int = Field(..., ge=0, le=100)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReportGenerateRequest(BaseModel):
    report_type_id: str = Field(default="marketing-audit")
