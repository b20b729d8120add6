from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Dict, List, Optional

from revyn_audit.models.enumerations import ChatRole, ReportKind


class ChatMessage(BaseModel):
    id: UUID
    session_id: UUID
    role: ChatRole
    content: str
    created_at: datetime


class ChatSession(BaseModel):
    id: UUID
    purchase_id: UUID
    report_kind: ReportKind
    title: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class ChatSessionCreate(BaseModel):
    purchase_id: UUID
    initial_message: str = Field(..., min_length=1, max_length=4000)
    report_kind: ReportKind = ReportKind.MARKETING


class ChatMessageCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)


class ChatSessionsByKind(BaseModel):
    sessions: Dict[ReportKind, List[ChatSession]]


class SuggestedQuestions(BaseModel):
    purchase_id: UUID
    report_kind: ReportKind
    questions: List[str]
