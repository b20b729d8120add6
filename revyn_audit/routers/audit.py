"""
Audit Router - Revyn Audit Platform
revyn_audit/routers/audit.py

Questionnaire catalog, stateless score preview and submission lifecycle.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from revyn_audit.config import settings
from revyn_audit.core.dependencies import get_catalog, get_submission_service
from revyn_audit.core.exceptions import EntityNotFoundException, IncompleteSubmissionError
from revyn_audit.models.audit import (
    CategorySummary,
    PaginatedSubmissionResponse,
    Question,
    ScorePreviewRequest,
    ScoreReport,
    Submission,
    SubmissionCreate,
)
from revyn_audit.models.common import ErrorResponse
from revyn_audit.models.enumerations import AuditCategory, QuestionType
from revyn_audit.routers.errors import raise_not_found, raise_service_error
from revyn_audit.scoring.catalog import Catalog
from revyn_audit.scoring.maturity import build_score_report
from revyn_audit.services.submission_service import SubmissionService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/audit", tags=["Audit"])

_NOT_FOUND = {
    404: {
        "model": ErrorResponse,
        "description": "Submission not found",
        "content": {
            "application/json": {
                "example": {
                    "error_code": "SUBMISSION_NOT_FOUND",
                    "message": "Submission not found",
                    "details": None,
                    "timestamp": "2026-01-28T12:00:00Z",
                }
            }
        },
    },
}


@router.get(
    "/questions",
    response_model=List[Question],
    summary="List audit questions",
    description="Returns the questionnaire in catalog order, optionally filtered to one category.",
)
async def list_questions(
    category: Optional[AuditCategory] = Query(default=None),
    catalog: Catalog = Depends(get_catalog),
) -> List[Question]:
    if category is None:
        return list(catalog.questions)
    return list(catalog.in_category(category.value))


@router.get(
    "/categories",
    response_model=List[CategorySummary],
    summary="List audit categories",
)
async def list_categories(catalog: Catalog = Depends(get_catalog)) -> List[CategorySummary]:
    summaries = []
    for label in catalog.categories:
        questions = catalog.in_category(label)
        summaries.append(
            CategorySummary(
                category=AuditCategory(label),
                questions_count=len(questions),
                scored_questions=sum(1 for q in questions if q.type != QuestionType.TEXT),
            )
        )
    return summaries


@router.post(
    "/score",
    response_model=ScoreReport,
    responses={422: {"model": ErrorResponse, "description": "Validation error"}},
    summary="Preview a score",
    description="Scores any answer set without persisting it. Partial answer sets are allowed.",
)
async def preview_score(
    payload: ScorePreviewRequest,
    catalog: Catalog = Depends(get_catalog),
) -> ScoreReport:
    return build_score_report(catalog, payload.answers)


@router.post(
    "/submissions",
    response_model=Submission,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {
            "model": ErrorResponse,
            "description": "Validation error or incomplete submission",
            "content": {
                "application/json": {
                    "example": {
                        "error_code": "INCOMPLETE_SUBMISSION",
                        "message": "2 required question(s) unanswered",
                        "details": {"missing_question_ids": [27, 68]},
                        "timestamp": "2026-01-28T12:00:00Z",
                    }
                }
            },
        },
    },
    summary="Finalize a submission",
    description="Rejects partial submissions, scores once and stores the result.",
)
async def create_submission(
    payload: SubmissionCreate,
    service: SubmissionService = Depends(get_submission_service),
) -> Submission:
    try:
        return service.finalize(payload)
    except IncompleteSubmissionError as e:
        raise_service_error(e)


@router.get(
    "/submissions",
    response_model=PaginatedSubmissionResponse,
    summary="List a user's submissions",
)
async def list_submissions(
    user_id: str = Query(..., min_length=1, max_length=64),
    service: SubmissionService = Depends(get_submission_service),
) -> PaginatedSubmissionResponse:
    items = service.list_for_user(user_id)
    return PaginatedSubmissionResponse(items=items, total=len(items))


@router.get(
    "/submissions/{submission_id}",
    response_model=Submission,
    responses=_NOT_FOUND,
    summary="Get submission by ID",
)
async def get_submission(
    submission_id: UUID,
    service: SubmissionService = Depends(get_submission_service),
) -> Submission:
    try:
        return service.get(submission_id)
    except EntityNotFoundException as e:
        raise_not_found(e)


@router.get(
    "/submissions/{submission_id}/results",
    response_model=ScoreReport,
    responses=_NOT_FOUND,
    summary="Get score report",
    description="Overall score, maturity band, category breakdown and recommendations.",
)
async def get_results(
    submission_id: UUID,
    service: SubmissionService = Depends(get_submission_service),
) -> ScoreReport:
    try:
        return service.score_report(submission_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
