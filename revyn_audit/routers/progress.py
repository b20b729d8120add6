"""
Progress Router - Revyn Audit Platform
revyn_audit/routers/progress.py

Draft answers for a purchased questionnaire, completion stats, the
"already started?" lookup and submission of the drafts.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from revyn_audit.config import settings
from revyn_audit.core.dependencies import get_progress_service
from revyn_audit.core.exceptions import AuditServiceException, EntityNotFoundException
from revyn_audit.models.audit import Submission
from revyn_audit.models.common import ErrorResponse
from revyn_audit.models.progress import (
    CompletionStats,
    DraftAnswer,
    DraftAnswerSave,
    DraftSubmit,
    ExistingProgress,
)
from revyn_audit.routers.errors import raise_not_found, raise_service_error
from revyn_audit.services.progress_service import ProgressService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/progress", tags=["Progress"])

_PURCHASE_ERRORS = {
    403: {
        "model": ErrorResponse,
        "description": "Purchase not completed or owned by another user",
        "content": {
            "application/json": {
                "example": {
                    "error_code": "PROGRESS_ERROR",
                    "message": "The questionnaire opens once the purchase is completed",
                    "details": None,
                    "timestamp": "2026-01-28T12:00:00Z",
                }
            }
        },
    },
    404: {"model": ErrorResponse, "description": "Purchase or question not found"},
}


@router.put(
    "/purchases/{purchase_id}/answers/{question_id}",
    response_model=DraftAnswer,
    responses=_PURCHASE_ERRORS,
    summary="Save a draft answer",
    description="Creates or overwrites the answer to one question.",
)
async def save_answer(
    purchase_id: UUID,
    payload: DraftAnswerSave,
    question_id: int = Path(..., ge=1),
    service: ProgressService = Depends(get_progress_service),
) -> DraftAnswer:
    try:
        return service.save_answer(payload.user_id, purchase_id, question_id, payload.value)
    except EntityNotFoundException as e:
        raise_not_found(e)
    except AuditServiceException as e:
        raise_service_error(e)


@router.get(
    "/purchases/{purchase_id}/answers",
    response_model=List[DraftAnswer],
    responses=_PURCHASE_ERRORS,
    summary="Load draft answers",
)
async def load_answers(
    purchase_id: UUID,
    user_id: str = Query(..., min_length=1, max_length=64),
    service: ProgressService = Depends(get_progress_service),
) -> List[DraftAnswer]:
    try:
        return service.load_answers(user_id, purchase_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
    except AuditServiceException as e:
        raise_service_error(e)


@router.get(
    "/purchases/{purchase_id}/completion",
    response_model=CompletionStats,
    responses=_PURCHASE_ERRORS,
    summary="Completion stats",
    description="Answered vs total questions and the categories still open.",
)
async def completion_stats(
    purchase_id: UUID,
    user_id: str = Query(..., min_length=1, max_length=64),
    service: ProgressService = Depends(get_progress_service),
) -> CompletionStats:
    try:
        return service.completion_stats(user_id, purchase_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
    except AuditServiceException as e:
        raise_service_error(e)


@router.get(
    "/existing",
    response_model=ExistingProgress,
    summary="Existing purchase and progress",
    description="Latest completed purchase of a report type by the user and its completion.",
)
async def existing_progress(
    user_id: str = Query(..., min_length=1, max_length=64),
    report_type_id: str = Query(default="marketing-audit", min_length=1),
    service: ProgressService = Depends(get_progress_service),
) -> ExistingProgress:
    return service.check_existing_progress(user_id, report_type_id)


@router.post(
    "/purchases/{purchase_id}/submit",
    response_model=Submission,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_PURCHASE_ERRORS,
        422: {"model": ErrorResponse, "description": "Validation error or incomplete drafts"},
    },
    summary="Submit draft answers",
    description="Finalizes the saved drafts into a scored Submission.",
)
async def submit_drafts(
    purchase_id: UUID,
    payload: DraftSubmit,
    service: ProgressService = Depends(get_progress_service),
) -> Submission:
    try:
        return service.submit(payload.user_id, purchase_id, payload.company_name, payload.email)
    except EntityNotFoundException as e:
        raise_not_found(e)
    except AuditServiceException as e:
        raise_service_error(e)
