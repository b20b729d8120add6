"""
Reports Router - Revyn Audit Platform
revyn_audit/routers/reports.py

Report products and AI-written audit reports.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from revyn_audit.config import settings
from revyn_audit.core.dependencies import get_report_service
from revyn_audit.core.exceptions import AuditServiceException, EntityNotFoundException
from revyn_audit.models.common import ErrorResponse
from revyn_audit.models.report import GeneratedReport, ReportGenerateRequest, ReportType
from revyn_audit.routers.errors import raise_not_found, raise_service_error
from revyn_audit.scoring.report_types import REPORT_TYPES
from revyn_audit.services.report_service import ReportService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/reports", tags=["Reports"])


@router.get("/types", response_model=List[ReportType], summary="List report products")
async def list_report_types() -> List[ReportType]:
    return REPORT_TYPES


@router.post(
    "/{submission_id}/generate",
    response_model=GeneratedReport,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown or unavailable report type"},
        404: {"model": ErrorResponse, "description": "Submission not found"},
        502: {"model": ErrorResponse, "description": "AI service failed"},
    },
    summary="Generate an AI report",
    description="Writes the report with the LLM. The overall score is the stored submission score.",
)
def generate_report(
    submission_id: UUID,
    payload: Optional[ReportGenerateRequest] = None,
    service: ReportService = Depends(get_report_service),
) -> GeneratedReport:
    try:
        report_type_id = payload.report_type_id if payload else "marketing-audit"
        return service.generate(submission_id, report_type_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
    except AuditServiceException as e:
        raise_service_error(e)


@router.get(
    "/{report_id}",
    response_model=GeneratedReport,
    responses={404: {"model": ErrorResponse, "description": "Report not found"}},
    summary="Get report by ID",
)
async def get_report(
    report_id: UUID,
    service: ReportService = Depends(get_report_service),
) -> GeneratedReport:
    try:
        return service.get(report_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
