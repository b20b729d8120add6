# revyn_audit/services/report_service.py
"""
Report Service
--------------
Writes the paid audit report with an LLM.

The prompt carries the submission's answers and its category breakdown;
the model must answer with one JSON object matching ReportContent. The
overall score on the stored report always comes from the scorer.
"""
import json
import structlog
from typing import List, Optional
from uuid import UUID

import openai
from openai import OpenAI
from pydantic import ValidationError

from revyn_audit.core.exceptions import EntityNotFoundException, ReportGenerationError, UnknownReportTypeError
from revyn_audit.models.audit import CategoryScore, ScaleAnswer, Submission
from revyn_audit.models.report import GeneratedReport, ReportContent
from revyn_audit.repositories.report_repository import ReportRepository
from revyn_audit.scoring.audit_scorer import score_categories
from revyn_audit.scoring.catalog import Catalog
from revyn_audit.scoring.maturity import maturity_level
from revyn_audit.scoring.report_types import get_report_type
from revyn_audit.services.cache import TTL_GENERATED_REPORT, cache_get, cache_set, generated_report_key
from revyn_audit.services.submission_service import SubmissionService

logger = structlog.get_logger(__name__)

SYSTEM_PROMPT = """You are a senior marketing strategist writing a paid marketing maturity audit.
Answer with a single JSON object and nothing else, using exactly these keys:
{
  "title": string,
  "sections": [{"title": string, "content": string, "score": integer 0-100 or null,
                "insights": [string], "recommendations": [string]}],
  "action_plan": {"three_month": [string], "six_month": [string], "twelve_month": [string]},
  "opportunity_map": {"high_impact": [string], "medium_impact": [string], "low_impact": [string]},
  "role_based_actions": [{"role": string, "actions": [string]}],
  "revenue_impact": {"potential": string, "timeline": string, "confidence": "high" | "medium" | "low"}
}
Write one section per audit category. Be specific to the answers given."""


def build_report_prompt(
    catalog: Catalog,
    submission: Submission,
    categories: List[CategoryScore],
    report_title: str,
) -> str:
    """User prompt: company, scores, then every answer grouped by category."""
    lines = [
        f"Report: {report_title}",
        f"Company: {submission.company_name}",
        f"Overall marketing maturity: {submission.score}% ({maturity_level(submission.score).value})",
        "",
        "Category scores:",
    ]
    lines.extend(f"- {c.category}: {c.percentage}%" for c in categories)
    lines.append("")
    lines.append("Answers:")

    by_category = {}
    for answer in submission.answers:
        question = catalog.get(answer.question_id)
        if question is None:
            continue
        value = answer.value
        if isinstance(answer, ScaleAnswer):
            value = f"{answer.value:g}/10"
        by_category.setdefault(question.category.value, []).append(f"  - {question.question} {value}")

    for category in catalog.categories:
        if category in by_category:
            lines.append(f"{category}:")
            lines.extend(by_category[category])
    return "\n".join(lines)


class ReportService:
    """Generate, store and load AI-written audit reports."""

    def __init__(
        self,
        catalog: Catalog,
        submissions: SubmissionService,
        repository: ReportRepository,
        client: Optional[OpenAI],
        model: str,
        temperature: float = 0.4,
    ) -> None:
        self._catalog = catalog
        self._submissions = submissions
        self._repo = repository
        self._client = client
        self._model = model
        self._temperature = temperature

    def generate(self, submission_id: UUID, report_type_id: str = "marketing-audit") -> GeneratedReport:
        """
        Raises:
            EntityNotFoundException: unknown submission.
            UnknownReportTypeError: report product unknown or not on sale.
            ReportGenerationError: no LLM configured, upstream failure, or bad JSON.
        """
        report_type = get_report_type(report_type_id)
        if report_type is None or not report_type.available:
            raise UnknownReportTypeError([report_type_id])
        if self._client is None:
            raise ReportGenerationError("Report generation is not configured")

        submission = self._submissions.get(submission_id)
        categories = score_categories(self._catalog, submission.answers)
        prompt = build_report_prompt(self._catalog, submission, categories, report_type.title)

        content = self._complete(prompt, submission_id)
        report = GeneratedReport(
            submission_id=submission.id,
            report_type_id=report_type.id,
            overall_score=submission.score,
            **content.model_dump(),
        )
        self._repo.create(report)
        cache_set(generated_report_key(report.id), report, TTL_GENERATED_REPORT)

        logger.info(
            "report_generated",
            report_id=str(report.id),
            submission_id=str(submission.id),
            sections=len(report.sections),
            overall_score=report.overall_score,
        )
        return report

    def _complete(self, prompt: str, submission_id: UUID) -> ReportContent:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self._temperature,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            logger.error("report_llm_failed", submission_id=str(submission_id), error=str(e))
            raise ReportGenerationError(f"AI service error: {e}")

        raw = (response.choices[0].message.content or "").strip()
        try:
            return ReportContent.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error("report_schema_invalid", submission_id=str(submission_id), error=str(e)[:500])
            raise ReportGenerationError("AI service returned an invalid report")

    def get(self, report_id: UUID) -> GeneratedReport:
        """Cache first, then Snowflake."""
        key = generated_report_key(report_id)
        cached = cache_get(key, GeneratedReport)
        if cached is not None:
            return cached

        report = self._repo.get_by_id(report_id)
        if report is None:
            raise EntityNotFoundException("Report", str(report_id))
        cache_set(key, report, TTL_GENERATED_REPORT)
        return report

    def latest_for_submission(self, submission_id: UUID) -> Optional[GeneratedReport]:
        return self._repo.get_latest_for_submission(submission_id)
