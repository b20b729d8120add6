"""
Draft Answer Repository - Revyn Audit Platform
revyn_audit/repositories/draft_answer_repository.py

Questionnaire answers saved while the form is being filled in, one row
per (user, purchase, question). Finalized answers are never read from
here; they are copied into AUDIT_SUBMISSIONS by the submission flow.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Union
from uuid import UUID

from revyn_audit.repositories.base import BaseRepository, utc, variant

_COLUMNS = "USER_ID, PURCHASE_ID, QUESTION_ID, VALUE, UPDATED_AT"


class DraftAnswerRepository(BaseRepository):
    """Repository for DRAFT_ANSWERS."""

    TABLE_NAME = "DRAFT_ANSWERS"

    def upsert(
        self,
        user_id: str,
        purchase_id: UUID,
        question_id: int,
        value: Union[float, str],
    ) -> Dict[str, Any]:
        """
        Insert or overwrite the answer to one question.

        Returns:
            Stored draft answer dict
        """
        merge = """
            MERGE INTO DRAFT_ANSWERS t
            USING (SELECT %s AS USER_ID, %s AS PURCHASE_ID, %s AS QUESTION_ID,
                          PARSE_JSON(%s) AS VALUE, %s AS UPDATED_AT) s
            ON t.USER_ID = s.USER_ID AND t.PURCHASE_ID = s.PURCHASE_ID AND t.QUESTION_ID = s.QUESTION_ID
            WHEN MATCHED THEN UPDATE SET VALUE = s.VALUE, UPDATED_AT = s.UPDATED_AT
            WHEN NOT MATCHED THEN INSERT (USER_ID, PURCHASE_ID, QUESTION_ID, VALUE, UPDATED_AT)
                VALUES (s.USER_ID, s.PURCHASE_ID, s.QUESTION_ID, s.VALUE, s.UPDATED_AT)
        """
        select = f"""
            SELECT {_COLUMNS} FROM DRAFT_ANSWERS
            WHERE USER_ID = %s AND PURCHASE_ID = %s AND QUESTION_ID = %s
        """
        key = (user_id, str(purchase_id), question_id)
        with self.transaction() as cursor:
            cursor.execute(merge, key + (json.dumps(value, allow_nan=False), datetime.now(timezone.utc)))
            cursor.execute(select, key)
            row = cursor.fetchone()
        return self._row_to_dict(row)

    def list_for_purchase(self, user_id: str, purchase_id: UUID) -> List[Dict[str, Any]]:
        """Draft answers of one user for one purchase, by question id."""
        sql = f"""
            SELECT {_COLUMNS} FROM DRAFT_ANSWERS
            WHERE USER_ID = %s AND PURCHASE_ID = %s
            ORDER BY QUESTION_ID
        """
        return [self._row_to_dict(row) for row in self.fetch_all(sql, (user_id, str(purchase_id)))]

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "user_id": row["USER_ID"],
            "purchase_id": UUID(row["PURCHASE_ID"]),
            "question_id": int(row["QUESTION_ID"]),
            "value": variant(row["VALUE"]),
            "updated_at": utc(row["UPDATED_AT"]),
        }
