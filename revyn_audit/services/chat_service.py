# revyn_audit/services/chat_service.py
"""
Chat Service
------------
Conversations about a purchased report. Each session belongs to one
completed purchase and one report kind; replies stream from the LLM as
Server-Sent Events and the full reply is stored once the stream ends.
"""
import structlog
from typing import Dict, Iterator, List, Optional
from uuid import UUID

import openai
from openai import OpenAI

from revyn_audit.core.exceptions import ChatSessionError, EntityNotFoundException
from revyn_audit.models.chat import ChatMessage, ChatSession
from revyn_audit.models.enumerations import ChatRole, PurchaseStatus, ReportKind
from revyn_audit.models.report import GeneratedReport
from revyn_audit.repositories.chat_repository import ChatRepository
from revyn_audit.repositories.purchase_repository import PurchaseRepository
from revyn_audit.services.report_service import ReportService
from revyn_audit.services.sse import DONE_EVENT, error_event, token_event

logger = structlog.get_logger(__name__)

TITLE_MAX_CHARS = 60
MAX_SUGGESTIONS = 5

FALLBACK_QUESTIONS: Dict[ReportKind, List[str]] = {
    ReportKind.MARKETING: [
        "What are my biggest marketing priorities right now?",
        "How should I allocate my marketing budget for maximum ROI?",
        "What tools do you recommend I implement first?",
        "How can I improve my customer acquisition strategy?",
        "What content strategy would work best for my business?",
    ],
    ReportKind.WEBSITE: [
        "What website issues should I fix first?",
        "How can I improve my website's conversion rate?",
        "What SEO improvements would have the biggest impact?",
        "How can I make my website more trustworthy to visitors?",
        "What design changes would improve user experience?",
    ],
}

MSG_RATE_LIMITED = "Too many requests. Please wait a moment and try again."
MSG_TIMEOUT = "The request timed out. Please try again."
MSG_UNAVAILABLE = "Chat system is temporarily unavailable. Please try again later."
MSG_GENERIC = "Sorry, I encountered an error. Please try again."


def session_title(message: str) -> str:
    text = " ".join(message.split())
    if len(text) <= TITLE_MAX_CHARS:
        return text
    return text[: TITLE_MAX_CHARS - 3].rstrip() + "..."


def friendly_error(exc: Exception) -> str:
    if isinstance(exc, openai.RateLimitError):
        return MSG_RATE_LIMITED
    if isinstance(exc, openai.APITimeoutError):
        return MSG_TIMEOUT
    return MSG_GENERIC


def build_system_prompt(report_kind: ReportKind, report: Optional[GeneratedReport]) -> str:
    subject = "marketing audit" if report_kind == ReportKind.MARKETING else "website analysis"
    lines = [
        f"You are a helpful consultant answering questions about the client's {subject} report.",
        "Stay grounded in the report; say so when the report does not cover something.",
    ]
    if report is not None:
        lines.append(f"Report: {report.title}. Overall score: {report.overall_score}%.")
        for section in report.sections:
            score = f" ({section.score}%)" if section.score is not None else ""
            lines.append(f"## {section.title}{score}")
            lines.append(section.content)
            lines.extend(f"- {r}" for r in section.recommendations)
        lines.append("Top opportunities: " + "; ".join(report.opportunity_map.high_impact))
    return "\n".join(lines)


class ChatService:
    """Chat sessions, history and streamed assistant replies."""

    def __init__(
        self,
        chat_repo: ChatRepository,
        purchase_repo: PurchaseRepository,
        reports: ReportService,
        client: Optional[OpenAI],
        model: str,
        history_limit: int = 20,
        temperature: float = 0.4,
    ) -> None:
        self._chats = chat_repo
        self._purchases = purchase_repo
        self._reports = reports
        self._client = client
        self._model = model
        self._history_limit = history_limit
        self._temperature = temperature

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def _paid_purchase(self, purchase_id: UUID) -> dict:
        purchase = self._purchases.get_by_id(purchase_id)
        if purchase is None:
            raise EntityNotFoundException("Purchase", str(purchase_id))
        if purchase["status"] != PurchaseStatus.COMPLETED:
            raise ChatSessionError("Chat is available once the purchase is completed", status_code=403)
        return purchase

    def create_session(self, purchase_id: UUID, initial_message: str, report_kind: ReportKind) -> ChatSession:
        """
        Open a session titled after the first question. The message itself
        is sent through stream_reply().
        """
        self._paid_purchase(purchase_id)
        session = ChatSession(**self._chats.create_session(purchase_id, report_kind, session_title(initial_message)))
        logger.info("chat_session_created", session_id=str(session.id), purchase_id=str(purchase_id), kind=report_kind.value)
        return session

    def list_sessions(self, purchase_id: UUID) -> Dict[ReportKind, List[ChatSession]]:
        grouped: Dict[ReportKind, List[ChatSession]] = {kind: [] for kind in ReportKind}
        for row in self._chats.list_sessions(purchase_id):
            session = ChatSession(**row)
            grouped[session.report_kind].append(session)
        return grouped

    def _session(self, session_id: UUID) -> ChatSession:
        row = self._chats.get_session(session_id)
        if row is None:
            raise ChatSessionError("Session not found", session_id=str(session_id), status_code=404)
        return ChatSession(**row)

    def history(self, session_id: UUID) -> List[ChatMessage]:
        self._session(session_id)
        return [ChatMessage(**row) for row in self._chats.list_messages(session_id)]

    # ------------------------------------------------------------------
    # Replies
    # ------------------------------------------------------------------

    def _report_for(self, purchase_id: UUID) -> Optional[GeneratedReport]:
        purchase = self._purchases.get_by_id(purchase_id)
        if purchase is None or purchase.get("submission_id") is None:
            return None
        return self._reports.latest_for_submission(purchase["submission_id"])

    def stream_reply(self, session_id: UUID, message: str) -> Iterator[str]:
        """
        Store the user message, then yield SSE events for the reply.

        Session lookup happens before the first event so a missing session
        surfaces as an error response rather than inside the stream.
        """
        session = self._session(session_id)
        history = self._chats.list_messages(session_id, limit=self._history_limit)
        self._chats.add_message(session_id, ChatRole.USER, message)
        report = self._report_for(session.purchase_id)

        messages = [{"role": "system", "content": build_system_prompt(session.report_kind, report)}]
        messages.extend({"role": m["role"].value, "content": m["content"]} for m in history)
        messages.append({"role": "user", "content": message})

        return self._stream(session_id, messages)

    def _stream(self, session_id: UUID, messages: List[dict]) -> Iterator[str]:
        if self._client is None:
            yield error_event(MSG_UNAVAILABLE)
            return

        parts: List[str] = []
        try:
            stream = self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
                stream=True,
            )
            for chunk in stream:
                if not chunk.choices:
                    continue
                token = chunk.choices[0].delta.content
                if token:
                    parts.append(token)
                    yield token_event(token)
        except openai.OpenAIError as e:
            logger.warning("chat_stream_failed", session_id=str(session_id), error=str(e))
            yield error_event(friendly_error(e))
            return

        reply = "".join(parts)
        if reply:
            self._chats.add_message(session_id, ChatRole.ASSISTANT, reply)
        logger.info("chat_reply_streamed", session_id=str(session_id), chars=len(reply))
        yield DONE_EVENT

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def suggested_questions(self, purchase_id: UUID, report_kind: ReportKind) -> List[str]:
        """Questions about the weakest report sections, else a fixed list."""
        if report_kind == ReportKind.MARKETING:
            report = self._report_for(purchase_id)
            if report is not None:
                sections = sorted(
                    report.sections,
                    key=lambda s: s.score if s.score is not None else 101,
                )
                questions = [f"How can I improve my {s.title} results?" for s in sections[:MAX_SUGGESTIONS]]
                if questions:
                    return questions
        return list(FALLBACK_QUESTIONS[report_kind])
