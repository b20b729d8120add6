# revyn_audit/services/progress_service.py
"""
Progress Service
----------------
Questionnaire progress for a purchased report. Answers are saved one at a
time as drafts, completion is reported against the catalog, and the draft
form state is finalized through SubmissionService when the user submits.

Drafts are separate from Submissions: saving a draft never touches a
finalized submission.
"""
import structlog
from decimal import Decimal
from typing import Dict, List
from uuid import UUID

from revyn_audit.core.exceptions import EntityNotFoundException, ProgressError
from revyn_audit.models.audit import RawValue, Submission, SubmissionCreate
from revyn_audit.models.enumerations import PurchaseStatus
from revyn_audit.models.progress import CompletionStats, DraftAnswer, ExistingProgress
from revyn_audit.repositories.draft_answer_repository import DraftAnswerRepository
from revyn_audit.repositories.purchase_repository import PurchaseRepository
from revyn_audit.scoring.catalog import Catalog
from revyn_audit.scoring.utils import to_percentage
from revyn_audit.services.submission_service import SubmissionService

logger = structlog.get_logger(__name__)


def _is_answered(value: RawValue) -> bool:
    return not isinstance(value, str) or bool(value.strip())


class ProgressService:
    """Draft answers and completion tracking per user and purchase."""

    def __init__(
        self,
        catalog: Catalog,
        draft_repo: DraftAnswerRepository,
        purchase_repo: PurchaseRepository,
        submissions: SubmissionService,
    ) -> None:
        self._catalog = catalog
        self._drafts = draft_repo
        self._purchases = purchase_repo
        self._submissions = submissions

    def _owned_purchase(self, user_id: str, purchase_id: UUID) -> dict:
        """
        Raises:
            EntityNotFoundException: unknown purchase.
            ProgressError: 403 when the purchase belongs to another user or is not completed.
        """
        purchase = self._purchases.get_by_id(purchase_id)
        if purchase is None:
            raise EntityNotFoundException("Purchase", str(purchase_id))
        if purchase.get("user_id") not in (None, user_id):
            raise ProgressError("Purchase belongs to another user", status_code=403)
        if purchase["status"] != PurchaseStatus.COMPLETED:
            raise ProgressError("The questionnaire opens once the purchase is completed", status_code=403)
        return purchase

    def save_answer(self, user_id: str, purchase_id: UUID, question_id: int, value: RawValue) -> DraftAnswer:
        """
        Upsert the draft answer to one catalog question.

        Raises:
            EntityNotFoundException: unknown question or purchase.
        """
        if question_id not in self._catalog:
            raise EntityNotFoundException("Question", str(question_id))
        self._owned_purchase(user_id, purchase_id)
        draft = DraftAnswer(**self._drafts.upsert(user_id, purchase_id, question_id, value))
        logger.debug("draft_answer_saved", purchase_id=str(purchase_id), question_id=question_id)
        return draft

    def load_answers(self, user_id: str, purchase_id: UUID) -> List[DraftAnswer]:
        self._owned_purchase(user_id, purchase_id)
        return [DraftAnswer(**row) for row in self._drafts.list_for_purchase(user_id, purchase_id)]

    def form_state(self, user_id: str, purchase_id: UUID) -> Dict[int, RawValue]:
        """Answered drafts as {question_id: value}, ready for SubmissionCreate."""
        return {
            d.question_id: d.value
            for d in self.load_answers(user_id, purchase_id)
            if d.question_id in self._catalog and _is_answered(d.value)
        }

    def completion_stats(self, user_id: str, purchase_id: UUID) -> CompletionStats:
        """
        Answered count and percentage against the full catalog.

        Blank text drafts and drafts for ids no longer in the catalog do not
        count. remaining_sections keeps catalog category order.
        """
        answered = set(self.form_state(user_id, purchase_id))
        total = len(self._catalog)
        remaining = [
            label for label in self._catalog.categories
            if any(q.id not in answered for q in self._catalog.in_category(label))
        ]
        return CompletionStats(
            total_questions=total,
            answered_questions=len(answered),
            completion_percentage=to_percentage(Decimal(len(answered)), Decimal(total)),
            remaining_sections=remaining,
        )

    def check_existing_progress(self, user_id: str, report_type_id: str) -> ExistingProgress:
        """Latest completed purchase of report_type_id by the user, and how far its questionnaire got."""
        purchase = self._purchases.find_completed_for_user(user_id, report_type_id)
        if purchase is None:
            return ExistingProgress(has_purchase=False)

        stats = self.completion_stats(user_id, purchase["id"])
        return ExistingProgress(
            has_purchase=True,
            purchase_id=purchase["id"],
            has_started=stats.answered_questions > 0,
            completion_percentage=stats.completion_percentage,
        )

    def submit(self, user_id: str, purchase_id: UUID, company_name: str, email: str) -> Submission:
        """
        Finalize the draft form state into a Submission.

        Raises:
            IncompleteSubmissionError: a required question has no answered draft.
        """
        payload = SubmissionCreate(
            company_name=company_name,
            email=email,
            user_id=user_id,
            answers=self.form_state(user_id, purchase_id),
        )
        submission = self._submissions.finalize(payload)
        logger.info(
            "drafts_submitted",
            purchase_id=str(purchase_id),
            submission_id=str(submission.id),
        )
        return submission
