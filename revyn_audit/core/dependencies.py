"""
Dependencies - Revyn Audit Platform
revyn_audit/core/dependencies.py

FastAPI dependency injection for the catalog, repositories and services.
Tests swap these out through app.dependency_overrides.
"""

from functools import lru_cache
from typing import Optional

from openai import OpenAI

from revyn_audit.config import get_settings
from revyn_audit.repositories.chat_repository import ChatRepository
from revyn_audit.repositories.draft_answer_repository import DraftAnswerRepository
from revyn_audit.repositories.purchase_repository import PurchaseRepository
from revyn_audit.repositories.report_repository import ReportRepository
from revyn_audit.repositories.submission_repository import SubmissionRepository
from revyn_audit.scoring.catalog import AUDIT_CATALOG, Catalog
from revyn_audit.services.chat_service import ChatService
from revyn_audit.services.payment_service import PaymentService
from revyn_audit.services.progress_service import ProgressService
from revyn_audit.services.report_service import ReportService
from revyn_audit.services.submission_service import SubmissionService


def get_catalog() -> Catalog:
    return AUDIT_CATALOG


@lru_cache()
def get_submission_repository() -> SubmissionRepository:
    """Get cached SubmissionRepository instance."""
    return SubmissionRepository()


@lru_cache()
def get_purchase_repository() -> PurchaseRepository:
    """Get cached PurchaseRepository instance."""
    return PurchaseRepository()


@lru_cache()
def get_report_repository() -> ReportRepository:
    """Get cached ReportRepository instance."""
    return ReportRepository()


@lru_cache()
def get_chat_repository() -> ChatRepository:
    """Get cached ChatRepository instance."""
    return ChatRepository()


@lru_cache()
def get_draft_answer_repository() -> DraftAnswerRepository:
    """Get cached DraftAnswerRepository instance."""
    return DraftAnswerRepository()


@lru_cache()
def get_openai_client() -> Optional[OpenAI]:
    """OpenAI client, or None when no API key is configured."""
    key = get_settings().OPENAI_API_KEY
    if key is None:
        return None
    return OpenAI(api_key=key.get_secret_value())


@lru_cache()
def get_submission_service() -> SubmissionService:
    return SubmissionService(get_catalog(), get_submission_repository())


@lru_cache()
def get_progress_service() -> ProgressService:
    return ProgressService(
        get_catalog(),
        get_draft_answer_repository(),
        get_purchase_repository(),
        get_submission_service(),
    )


@lru_cache()
def get_payment_service() -> PaymentService:
    s = get_settings()
    return PaymentService(
        get_purchase_repository(),
        api_key=s.STRIPE_SECRET_KEY.get_secret_value() if s.STRIPE_SECRET_KEY else None,
        webhook_secret=s.STRIPE_WEBHOOK_SECRET.get_secret_value() if s.STRIPE_WEBHOOK_SECRET else None,
        source_tag=s.PAYMENT_SOURCE_TAG,
        default_currency=s.STRIPE_CURRENCY,
    )


@lru_cache()
def get_report_service() -> ReportService:
    s = get_settings()
    return ReportService(
        get_catalog(),
        get_submission_service(),
        get_report_repository(),
        client=get_openai_client(),
        model=s.REPORT_LLM_MODEL,
        temperature=s.LLM_TEMPERATURE,
    )


@lru_cache()
def get_chat_service() -> ChatService:
    s = get_settings()
    return ChatService(
        get_chat_repository(),
        get_purchase_repository(),
        get_report_service(),
        client=get_openai_client(),
        model=s.CHAT_LLM_MODEL,
        history_limit=s.CHAT_HISTORY_LIMIT,
        temperature=s.LLM_TEMPERATURE,
    )
