"""
Submission Repository - Revyn Audit Platform
revyn_audit/repositories/submission_repository.py

Data access for finalized audit submissions. Submissions are write-once:
there is no update path.
"""

import json
from typing import Any, Dict, List, Optional
from uuid import UUID

from revyn_audit.models.audit import Submission
from revyn_audit.repositories.base import BaseRepository, utc, variant

_COLUMNS = "ID, USER_ID, COMPANY_NAME, EMAIL, ANSWERS, SCORE, COMPLETED_AT"


class SubmissionRepository(BaseRepository):
    """Repository for AUDIT_SUBMISSIONS."""

    TABLE_NAME = "AUDIT_SUBMISSIONS"

    def create(self, submission: Submission) -> Dict[str, Any]:
        """
        Insert a finalized submission.

        Args:
            submission: Scored submission to persist

        Returns:
            Stored submission dict
        """
        answers_json = json.dumps([a.model_dump(mode="json") for a in submission.answers], allow_nan=False)
        sql = """
            INSERT INTO AUDIT_SUBMISSIONS (ID, USER_ID, COMPANY_NAME, EMAIL, ANSWERS, SCORE, COMPLETED_AT)
            SELECT %s, %s, %s, %s, PARSE_JSON(%s), %s, %s
        """
        params = (
            str(submission.id),
            submission.user_id,
            submission.company_name,
            submission.email,
            answers_json,
            submission.score,
            submission.completed_at,
        )
        self.execute(sql, params)
        return self.get_by_id(submission.id)

    def get_by_id(self, submission_id: UUID) -> Optional[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM AUDIT_SUBMISSIONS WHERE ID = %s"
        row = self.fetch_one(sql, (str(submission_id),))
        if not row:
            return None
        return self._row_to_dict(row)

    def list_by_user(self, user_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        """Most recent submissions first."""
        sql = f"""
            SELECT {_COLUMNS}
            FROM AUDIT_SUBMISSIONS
            WHERE USER_ID = %s
            ORDER BY COMPLETED_AT DESC
            LIMIT %s
        """
        rows = self.fetch_all(sql, (user_id, limit))
        return [self._row_to_dict(row) for row in rows]

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert Snowflake row to submission dict."""
        return {
            "id": UUID(row["ID"]),
            "user_id": row["USER_ID"],
            "company_name": row["COMPANY_NAME"],
            "email": row["EMAIL"],
            "answers": variant(row["ANSWERS"]) or [],
            "score": int(row["SCORE"]),
            "completed_at": utc(row["COMPLETED_AT"]),
        }
