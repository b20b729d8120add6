"""
Chat Router - Revyn Audit Platform
revyn_audit/routers/chat.py

Report chat sessions, history, suggestions and the SSE reply stream.
"""

from typing import Dict, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from revyn_audit.config import settings
from revyn_audit.core.dependencies import get_chat_service
from revyn_audit.core.exceptions import AuditServiceException, EntityNotFoundException
from revyn_audit.models.chat import (
    ChatMessage,
    ChatMessageCreate,
    ChatSession,
    ChatSessionCreate,
    SuggestedQuestions,
)
from revyn_audit.models.common import ErrorResponse
from revyn_audit.models.enumerations import ReportKind
from revyn_audit.routers.errors import raise_not_found, raise_service_error
from revyn_audit.services.chat_service import ChatService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/chat", tags=["Chat"])

_SESSION_ERRORS = {
    404: {"model": ErrorResponse, "description": "Session not found"},
}


@router.post(
    "/sessions",
    response_model=ChatSession,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"model": ErrorResponse, "description": "Purchase not completed"},
        404: {"model": ErrorResponse, "description": "Purchase not found"},
    },
    summary="Create a chat session",
)
async def create_session(
    payload: ChatSessionCreate,
    service: ChatService = Depends(get_chat_service),
) -> ChatSession:
    try:
        return service.create_session(payload.purchase_id, payload.initial_message, payload.report_kind)
    except EntityNotFoundException as e:
        raise_not_found(e)
    except AuditServiceException as e:
        raise_service_error(e)


@router.get(
    "/sessions",
    response_model=Dict[ReportKind, List[ChatSession]],
    summary="List chat sessions of a purchase",
    description="Sessions grouped by report kind, most recently active first.",
)
async def list_sessions(
    purchase_id: UUID = Query(...),
    service: ChatService = Depends(get_chat_service),
) -> Dict[ReportKind, List[ChatSession]]:
    return service.list_sessions(purchase_id)


@router.get(
    "/sessions/{session_id}/messages",
    response_model=List[ChatMessage],
    responses=_SESSION_ERRORS,
    summary="Chat history",
)
async def get_history(
    session_id: UUID,
    service: ChatService = Depends(get_chat_service),
) -> List[ChatMessage]:
    try:
        return service.history(session_id)
    except AuditServiceException as e:
        raise_service_error(e)


@router.post(
    "/sessions/{session_id}/message",
    responses={
        200: {"content": {"text/event-stream": {}}, "description": "Token stream"},
        **_SESSION_ERRORS,
    },
    summary="Send a message",
    description='Streams the reply as `data: {"token": ...}` events ending with `data: [DONE]`.',
)
def send_message(
    session_id: UUID,
    payload: ChatMessageCreate,
    service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    try:
        events = service.stream_reply(session_id, payload.message)
    except AuditServiceException as e:
        raise_service_error(e)
    return StreamingResponse(
        events,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.get(
    "/suggested-questions/{purchase_id}",
    response_model=SuggestedQuestions,
    summary="Suggested questions",
)
async def suggested_questions(
    purchase_id: UUID,
    report_type: ReportKind = Query(default=ReportKind.MARKETING),
    service: ChatService = Depends(get_chat_service),
) -> SuggestedQuestions:
    return SuggestedQuestions(
        purchase_id=purchase_id,
        report_kind=report_type,
        questions=service.suggested_questions(purchase_id, report_type),
    )
