# tests/conftest.py

"""
Pytest Fixtures - shared catalog data, in-memory repositories and the
FastAPI TestClient with dependency overrides.

No test touches Snowflake, Redis, Stripe or OpenAI: repositories are
in-memory fakes, the cache singleton is patched to "Redis down", and the
external clients are MagicMocks.
"""

import copy
import json
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock, patch
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from revyn_audit.core import dependencies
from revyn_audit.main import app
from revyn_audit.models.audit import ChoiceAnswer, ScaleAnswer, Submission, TextAnswer
from revyn_audit.models.enumerations import ChatRole, PurchaseStatus, QuestionType, ReportKind
from revyn_audit.models.report import GeneratedReport
from revyn_audit.scoring.catalog import AUDIT_CATALOG
from revyn_audit.services.chat_service import ChatService
from revyn_audit.services.payment_service import PaymentService
from revyn_audit.services.progress_service import ProgressService
from revyn_audit.services.report_service import ReportService
from revyn_audit.services.submission_service import SubmissionService


# =============================================================================
# IN-MEMORY REPOSITORIES
# =============================================================================

class FakeSubmissionRepository:
    def __init__(self):
        self.rows: Dict[UUID, Dict[str, Any]] = {}

    def create(self, submission: Submission) -> Dict[str, Any]:
        self.rows[submission.id] = submission.model_dump()
        return copy.deepcopy(self.rows[submission.id])

    def get_by_id(self, submission_id: UUID) -> Optional[Dict[str, Any]]:
        row = self.rows.get(submission_id)
        return copy.deepcopy(row) if row else None

    def list_by_user(self, user_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        rows = [r for r in self.rows.values() if r["user_id"] == user_id]
        rows.sort(key=lambda r: r["completed_at"], reverse=True)
        return copy.deepcopy(rows[:limit])


class FakePurchaseRepository:
    def __init__(self):
        self.rows: Dict[UUID, Dict[str, Any]] = {}

    def create(self, payment_intent_id, customer_email, report_ids, amount, currency,
               customer_name=None, submission_id=None, user_id=None) -> Dict[str, Any]:
        purchase_id = uuid4()
        self.rows[purchase_id] = {
            "id": purchase_id,
            "payment_intent_id": payment_intent_id,
            "user_id": user_id,
            "submission_id": submission_id,
            "customer_email": customer_email,
            "customer_name": customer_name,
            "report_ids": list(report_ids),
            "amount": amount,
            "currency": currency,
            "status": PurchaseStatus.PENDING,
            "created_at": datetime.now(timezone.utc),
            "updated_at": None,
        }
        return dict(self.rows[purchase_id])

    def get_by_id(self, purchase_id: UUID) -> Optional[Dict[str, Any]]:
        row = self.rows.get(purchase_id)
        return dict(row) if row else None

    def get_by_payment_intent(self, payment_intent_id: str) -> Optional[Dict[str, Any]]:
        for row in self.rows.values():
            if row["payment_intent_id"] == payment_intent_id:
                return dict(row)
        return None

    def find_completed_for_user(self, user_id: str, report_id: str) -> Optional[Dict[str, Any]]:
        rows = [
            r for r in self.rows.values()
            if r["user_id"] == user_id and r["status"] == PurchaseStatus.COMPLETED and report_id in r["report_ids"]
        ]
        return dict(max(rows, key=lambda r: r["created_at"])) if rows else None

    def update_status(self, payment_intent_id: str, new_status: PurchaseStatus) -> Optional[Dict[str, Any]]:
        for row in self.rows.values():
            if row["payment_intent_id"] == payment_intent_id:
                row["status"] = new_status
                row["updated_at"] = datetime.now(timezone.utc)
                return dict(row)
        return None


class FakeDraftAnswerRepository:
    def __init__(self):
        self.rows: Dict[tuple, Dict[str, Any]] = {}

    def upsert(self, user_id, purchase_id, question_id, value) -> Dict[str, Any]:
        self.rows[(user_id, purchase_id, question_id)] = {
            "user_id": user_id,
            "purchase_id": purchase_id,
            "question_id": question_id,
            "value": value,
            "updated_at": datetime.now(timezone.utc),
        }
        return dict(self.rows[(user_id, purchase_id, question_id)])

    def list_for_purchase(self, user_id, purchase_id) -> List[Dict[str, Any]]:
        rows = [dict(r) for (u, p, _), r in self.rows.items() if u == user_id and p == purchase_id]
        return sorted(rows, key=lambda r: r["question_id"])


class FakeReportRepository:
    def __init__(self):
        self.reports: Dict[UUID, GeneratedReport] = {}

    def create(self, report: GeneratedReport) -> None:
        self.reports[report.id] = report

    def get_by_id(self, report_id: UUID) -> Optional[GeneratedReport]:
        return self.reports.get(report_id)

    def get_latest_for_submission(self, submission_id: UUID) -> Optional[GeneratedReport]:
        matches = [r for r in self.reports.values() if r.submission_id == submission_id]
        return max(matches, key=lambda r: r.generated_at) if matches else None


class FakeChatRepository:
    def __init__(self):
        self.sessions: Dict[UUID, Dict[str, Any]] = {}
        self.messages: List[Dict[str, Any]] = []

    def create_session(self, purchase_id, report_kind, title) -> Dict[str, Any]:
        session_id = uuid4()
        self.sessions[session_id] = {
            "id": session_id,
            "purchase_id": purchase_id,
            "report_kind": report_kind,
            "title": title,
            "created_at": datetime.now(timezone.utc),
            "updated_at": None,
        }
        return dict(self.sessions[session_id])

    def get_session(self, session_id) -> Optional[Dict[str, Any]]:
        row = self.sessions.get(session_id)
        return dict(row) if row else None

    def list_sessions(self, purchase_id) -> List[Dict[str, Any]]:
        return [dict(s) for s in self.sessions.values() if s["purchase_id"] == purchase_id]

    def add_message(self, session_id, role: ChatRole, content: str) -> Dict[str, Any]:
        row = {
            "id": uuid4(),
            "session_id": session_id,
            "role": role,
            "content": content,
            "created_at": datetime.now(timezone.utc),
        }
        self.messages.append(row)
        return dict(row)

    def list_messages(self, session_id, limit=None) -> List[Dict[str, Any]]:
        rows = [dict(m) for m in self.messages if m["session_id"] == session_id]
        return rows[-limit:] if limit else rows


# =============================================================================
# LLM RESPONSE HELPERS
# =============================================================================

def sample_report_content() -> Dict[str, Any]:
    """A well-formed LLM report payload."""
    return {
        "title": "Marketing Strategy & Brand Audit",
        "sections": [
            {
                "title": "Strategy & Planning",
                "content": "Clear goals, weak competitive analysis.",
                "score": 72,
                "insights": ["Goals are documented"],
                "recommendations": ["Build a competitor tracker"],
            },
            {
                "title": "Analytics & Data",
                "content": "Attribution is last-click only.",
                "score": 41,
                "insights": ["No LTV tracking"],
                "recommendations": ["Adopt multi-touch attribution"],
            },
        ],
        "action_plan": {
            "three_month": ["Set up dashboards"],
            "six_month": ["Launch nurture sequences"],
            "twelve_month": ["Predictive lead scoring"],
        },
        "opportunity_map": {
            "high_impact": ["Attribution"],
            "medium_impact": ["Email segmentation"],
            "low_impact": ["Website search"],
        },
        "role_based_actions": [{"role": "CMO", "actions": ["Own the KPI tree"]}],
        "revenue_impact": {"potential": "10-15% pipeline growth", "timeline": "6-12 months", "confidence": "medium"},
    }


def completion_response(content: str) -> MagicMock:
    """Shape of openai chat.completions.create() for a non-streamed call."""
    return MagicMock(choices=[MagicMock(message=MagicMock(content=content))])


def stream_chunks(*tokens: Optional[str]) -> List[MagicMock]:
    """Shape of a streamed completion: one delta per token."""
    return [MagicMock(choices=[MagicMock(delta=MagicMock(content=t))]) for t in tokens]


@pytest.fixture
def report_content():
    return sample_report_content()


@pytest.fixture
def report_json(report_content):
    return json.dumps(report_content)


@pytest.fixture
def make_completion():
    return completion_response


@pytest.fixture
def make_stream():
    return stream_chunks


# =============================================================================
# CATALOG / ANSWER FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def catalog():
    return AUDIT_CATALOG


@pytest.fixture
def best_raw_answers(catalog):
    """Form state answering every question with its most mature option."""
    raw = {}
    for q in catalog:
        if q.type == QuestionType.SCALE:
            raw[q.id] = 10
        elif q.type == QuestionType.MULTIPLE_CHOICE:
            raw[q.id] = q.options[0]
        else:
            raw[q.id] = "HubSpot, LinkedIn"
    return raw


@pytest.fixture
def worst_raw_answers(catalog):
    """Form state answering every question with its least mature option."""
    raw = {}
    for q in catalog:
        if q.type == QuestionType.SCALE:
            raw[q.id] = 0
        elif q.type == QuestionType.MULTIPLE_CHOICE:
            raw[q.id] = q.options[-1]
        else:
            raw[q.id] = "none"
    return raw


@pytest.fixture
def submission_payload(best_raw_answers):
    return {
        "company_name": "Acme Outdoor Co",
        "email": "owner@acme.example.com",
        "user_id": "user-123",
        "answers": {str(k): v for k, v in best_raw_answers.items()},
    }


def scale(question_id: int, category: str, value: float) -> ScaleAnswer:
    return ScaleAnswer(question_id=question_id, category=category, value=value)


def choice(question_id: int, category: str, value: str) -> ChoiceAnswer:
    return ChoiceAnswer(question_id=question_id, category=category, value=value)


def text(question_id: int, category: str, value: str) -> TextAnswer:
    return TextAnswer(question_id=question_id, category=category, value=value)


@pytest.fixture
def answer():
    """Answer builders: answer.scale(...), answer.choice(...), answer.text(...)."""
    return SimpleNamespace(scale=scale, choice=choice, text=text)


# =============================================================================
# CACHE: behave as if Redis were down
# =============================================================================

@pytest.fixture(autouse=True)
def no_redis():
    with patch("revyn_audit.services.cache.get_cache", return_value=None):
        yield


# =============================================================================
# BACKEND + FASTAPI TEST CLIENT FIXTURE
# =============================================================================

def build_backend():
    backend = SimpleNamespace(
        submissions=FakeSubmissionRepository(),
        purchases=FakePurchaseRepository(),
        drafts=FakeDraftAnswerRepository(),
        reports=FakeReportRepository(),
        chats=FakeChatRepository(),
        llm=MagicMock(),
    )
    backend.submission_service = SubmissionService(AUDIT_CATALOG, backend.submissions)
    backend.progress_service = ProgressService(
        AUDIT_CATALOG,
        backend.drafts,
        backend.purchases,
        backend.submission_service,
    )
    backend.payment_service = PaymentService(
        backend.purchases,
        api_key="sk_test_123",
        webhook_secret="whsec_test_123",
    )
    backend.report_service = ReportService(
        AUDIT_CATALOG,
        backend.submission_service,
        backend.reports,
        client=backend.llm,
        model="gpt-test",
    )
    backend.chat_service = ChatService(
        backend.chats,
        backend.purchases,
        backend.report_service,
        client=backend.llm,
        model="gpt-test",
        history_limit=10,
    )
    return backend


@pytest.fixture
def backend():
    """Fresh services over in-memory repositories."""
    return build_backend()


@pytest.fixture(scope="module")
def api_backend():
    return build_backend()


@pytest.fixture(scope="module")
def client(api_backend):
    """Create a TestClient for the FastAPI application."""
    app.dependency_overrides[dependencies.get_submission_service] = lambda: api_backend.submission_service
    app.dependency_overrides[dependencies.get_payment_service] = lambda: api_backend.payment_service
    app.dependency_overrides[dependencies.get_progress_service] = lambda: api_backend.progress_service
    app.dependency_overrides[dependencies.get_report_service] = lambda: api_backend.report_service
    app.dependency_overrides[dependencies.get_chat_service] = lambda: api_backend.chat_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
