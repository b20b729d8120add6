# revyn_audit/services/submission_service.py
"""
Submission Service
------------------
Finalizes questionnaires: types the raw form answers against the catalog,
refuses partial submissions, scores once and persists.

Usage:
    svc = SubmissionService(AUDIT_CATALOG, SubmissionRepository())
    submission = svc.finalize(payload)
    report = svc.score_report(submission.id)
"""
import math
import structlog
from typing import Iterable, List, Mapping, Optional
from uuid import UUID

from revyn_audit.core.exceptions import EntityNotFoundException, IncompleteSubmissionError
from revyn_audit.models.audit import (
    Answer,
    ChoiceAnswer,
    RawValue,
    ScaleAnswer,
    ScoreReport,
    Submission,
    SubmissionCreate,
    TextAnswer,
)
from revyn_audit.models.enumerations import QuestionType
from revyn_audit.repositories.submission_repository import SubmissionRepository
from revyn_audit.scoring.audit_scorer import score_overall
from revyn_audit.scoring.catalog import Catalog
from revyn_audit.scoring.maturity import build_score_report
from revyn_audit.services.cache import TTL_SCORE_REPORT, cache_get, cache_set, score_report_key

logger = structlog.get_logger(__name__)


def _parse_number(value: str) -> Optional[float]:
    """Finite number in a string, else None. "nan" and "inf" stay text."""
    try:
        parsed = float(value.strip())
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def _typed_answer(question_id: int, category: str, qtype: QuestionType, value: RawValue) -> Answer:
    """
    Pick the answer variant for a raw value.

    The question type decides the variant when the value fits it; otherwise
    the value keeps its own shape and the scorer gives it zero.
    """
    if qtype == QuestionType.SCALE and isinstance(value, str):
        parsed = _parse_number(value)
        if parsed is None:
            return TextAnswer(question_id=question_id, category=category, value=value)
        value = parsed

    if isinstance(value, str):
        if qtype == QuestionType.MULTIPLE_CHOICE:
            return ChoiceAnswer(question_id=question_id, category=category, value=value)
        return TextAnswer(question_id=question_id, category=category, value=value)

    if not math.isfinite(value):
        return TextAnswer(question_id=question_id, category=category, value=str(value))
    return ScaleAnswer(question_id=question_id, category=category, value=value)


def build_answers(catalog: Catalog, raw: Mapping[int, RawValue]) -> List[Answer]:
    """
    Turn {question_id: value} form state into typed answers in catalog order.

    The category is copied from the catalog question. Ids not in the
    catalog are dropped.
    """
    answers: List[Answer] = []
    for question in catalog:
        if question.id not in raw:
            continue
        answers.append(
            _typed_answer(question.id, question.category.value, question.type, raw[question.id])
        )
    return answers


def _is_answered(answer: Answer) -> bool:
    if isinstance(answer, ScaleAnswer):
        return True
    return bool(answer.value.strip())


def missing_required(catalog: Catalog, answers: Iterable[Answer]) -> List[int]:
    """Sorted ids of required questions with no (non-blank) answer."""
    answered = {a.question_id for a in answers if _is_answered(a)}
    return sorted(q.id for q in catalog if q.required and q.id not in answered)


class SubmissionService:
    """Finalize, load and score audit submissions."""

    def __init__(self, catalog: Catalog, repository: SubmissionRepository) -> None:
        self._catalog = catalog
        self._repo = repository

    def finalize(self, payload: SubmissionCreate) -> Submission:
        """
        Validate completeness, compute the overall score and persist.

        Raises:
            IncompleteSubmissionError: a required question is unanswered.
        """
        answers = build_answers(self._catalog, payload.answers)
        missing = missing_required(self._catalog, answers)
        if missing:
            logger.info(
                "submission_incomplete",
                company_name=payload.company_name,
                missing_count=len(missing),
            )
            raise IncompleteSubmissionError(missing)

        dropped = len(payload.answers) - len(answers)
        if dropped:
            logger.warning("unknown_question_ids_dropped", count=dropped)

        submission = Submission(
            user_id=payload.user_id,
            company_name=payload.company_name,
            email=payload.email,
            answers=answers,
            score=score_overall(self._catalog, answers),
        )
        stored = Submission(**self._repo.create(submission))

        logger.info(
            "submission_finalized",
            submission_id=str(stored.id),
            user_id=stored.user_id,
            score=stored.score,
            answers=len(stored.answers),
        )
        return stored

    def get(self, submission_id: UUID) -> Submission:
        row = self._repo.get_by_id(submission_id)
        if row is None:
            raise EntityNotFoundException("Submission", str(submission_id))
        return Submission(**row)

    def list_for_user(self, user_id: str) -> List[Submission]:
        return [Submission(**row) for row in self._repo.list_by_user(user_id)]

    def score_report(self, submission_id: UUID) -> ScoreReport:
        """
        Category breakdown for a stored submission.

        The overall score is the one stored at finalization; only the
        breakdown is recomputed.
        """
        key = score_report_key(submission_id)
        cached = cache_get(key, ScoreReport)
        if cached is not None:
            return cached

        submission = self.get(submission_id)
        report = build_score_report(self._catalog, submission.answers, overall_score=submission.score)
        cache_set(key, report, TTL_SCORE_REPORT)
        return report
